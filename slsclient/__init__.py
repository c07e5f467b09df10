"""Log service client toolkit: log group encoding, LZ4 compression, configuration, request building and response parsing."""

__version__ = "0.2.0"

__all__ = ["__version__"]