from datetime import timedelta

import pytest

from slsclient.config import (
    VERSION,
    Config,
    ConfigBuilder,
    Endpoint,
    is_empty_or_none,
    user_agent,
)
from slsclient.errors import InvalidAccessKeyError, InvalidEndpointError


def _builder(endpoint="cn-hangzhou.log.aliyuncs.com"):
    return Config.builder().endpoint(endpoint).access_key("access_key_id", "secret")


def test_endpoint_without_scheme_defaults_to_http():
    config = _builder().build()
    assert config.endpoint == Endpoint("cn-hangzhou.log.aliyuncs.com", "http://")


def test_https_endpoint():
    config = _builder("https://cn-hangzhou.log.aliyuncs.com").build()
    assert config.endpoint.scheme == "https://"
    assert config.endpoint.domain == "cn-hangzhou.log.aliyuncs.com"


def test_http_endpoint_with_port():
    config = _builder("http://localhost:8080").build()
    assert config.endpoint.scheme == "http://"
    assert config.endpoint.domain == "localhost:8080"


@pytest.mark.parametrize(
    "endpoint", ["foo bar", "ftp://host", "host/path", "host:port", "host\n", ""]
)
def test_invalid_endpoint(endpoint):
    with pytest.raises(InvalidEndpointError) as info:
        _builder(endpoint).build()
    assert info.value.endpoint == endpoint


def test_missing_endpoint():
    with pytest.raises(InvalidEndpointError, match="Endpoint not provided"):
        ConfigBuilder().access_key("access_key_id", "secret").build()


def test_endpoint_checked_before_credentials():
    with pytest.raises(InvalidEndpointError):
        ConfigBuilder().build()


def test_missing_access_key():
    with pytest.raises(InvalidAccessKeyError, match="Invalid access key"):
        ConfigBuilder().endpoint("cn-hangzhou.log.aliyuncs.com").build()


def test_empty_secret_rejected():
    with pytest.raises(InvalidAccessKeyError):
        _builder().access_key("access_key_id", "").build()


def test_defaults():
    config = _builder().build()
    assert config.request_timeout == timedelta(seconds=60)
    assert config.connection_timeout == timedelta(seconds=10)
    assert config.max_retry == 3
    assert config.base_retry_backoff == timedelta(milliseconds=1000)
    assert config.max_retry_backoff == timedelta(seconds=10)
    assert config.security_token is None


def test_custom_timeouts():
    config = (
        _builder()
        .request_timeout(timedelta(seconds=60))
        .connection_timeout(timedelta(seconds=10))
        .build()
    )
    assert config.request_timeout == timedelta(seconds=60)
    assert config.connection_timeout == timedelta(seconds=10)


def test_numeric_timeout_is_seconds():
    config = _builder().request_timeout(5).build()
    assert config.request_timeout == timedelta(seconds=5)


def test_sts_token_kept():
    config = (
        Config.builder()
        .endpoint("cn-hangzhou.log.aliyuncs.com")
        .sts("access_key_id", "secret", "token")
        .build()
    )
    assert config.security_token == "token"
    assert config.access_key_id == "access_key_id"
    assert config.access_key_secret == "secret"


def test_empty_sts_token_dropped():
    config = (
        Config.builder()
        .endpoint("cn-hangzhou.log.aliyuncs.com")
        .sts("access_key_id", "secret", "")
        .build()
    )
    assert config.security_token is None


def test_user_agent():
    assert user_agent() == f"slsclient/{VERSION}"


@pytest.mark.parametrize(
    "value, expected", [(None, True), ("", True), ("x", False), (" ", False)]
)
def test_is_empty_or_none(value, expected):
    assert is_empty_or_none(value) is expected