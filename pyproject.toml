[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slsclient"
version = "0.2.0"
description = "Log service client toolkit: log group protobuf encoding, LZ4 compression, request building and response parsing"
requires-python = ">=3.10"
keywords = ["log", "logging", "protobuf", "lz4", "client"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "lz4",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["slsclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
