"""Client configuration and its builder."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Union

from .errors import InvalidAccessKeyError, InvalidEndpointError

VERSION = "0.2.0"

SCHEME_HTTP = "http://"
SCHEME_HTTPS = "https://"
DEFAULT_HTTP_SCHEME = SCHEME_HTTP

DEFAULT_REQUEST_TIMEOUT = timedelta(seconds=60)
DEFAULT_CONNECTION_TIMEOUT = timedelta(seconds=10)
DEFAULT_MAX_RETRY = 3
DEFAULT_BASE_RETRY_BACKOFF = timedelta(milliseconds=1000)
DEFAULT_MAX_RETRY_BACKOFF = timedelta(seconds=10)

_ENDPOINT_RE = re.compile(r"(https?://)?([a-zA-Z0-9.-]+)(:\d+)?")

Duration = Union[timedelta, int, float]


def user_agent() -> str:
    """The User-Agent sent with every request."""
    return f"slsclient/{VERSION}"


def is_empty_or_none(value: Optional[str]) -> bool:
    """True if value is None or an empty string."""
    return value is None or value == ""


def _as_timedelta(value: Duration) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


@dataclass(frozen=True)
class Endpoint:
    """Service domain (with optional port) and URL scheme."""

    domain: str
    scheme: str


@dataclass(frozen=True)
class Config:
    """Validated configuration of the log service client."""

    endpoint: Endpoint
    access_key_id: str
    access_key_secret: str
    security_token: Optional[str] = None
    connection_timeout: timedelta = DEFAULT_CONNECTION_TIMEOUT
    request_timeout: timedelta = DEFAULT_REQUEST_TIMEOUT
    max_retry: int = DEFAULT_MAX_RETRY
    base_retry_backoff: timedelta = DEFAULT_BASE_RETRY_BACKOFF
    max_retry_backoff: timedelta = DEFAULT_MAX_RETRY_BACKOFF

    @classmethod
    def builder(cls) -> "ConfigBuilder":
        return ConfigBuilder()


class ConfigBuilder:
    """Collects settings and validates them into a Config."""

    def __init__(self) -> None:
        self._endpoint: Optional[str] = None
        self._access_key_id: Optional[str] = None
        self._access_key_secret: Optional[str] = None
        self._security_token: Optional[str] = None
        self._connection_timeout: Optional[timedelta] = None
        self._request_timeout: Optional[timedelta] = None

    def endpoint(self, endpoint: str) -> "ConfigBuilder":
        """Set the endpoint, e.g. "cn-hangzhou.log.aliyuncs.com"."""
        self._endpoint = endpoint
        return self

    def access_key(self, access_key_id: str, access_key_secret: str) -> "ConfigBuilder":
        self._access_key_id = access_key_id
        self._access_key_secret = access_key_secret
        return self

    def sts(
        self, access_key_id: str, access_key_secret: str, security_token: str
    ) -> "ConfigBuilder":
        """Set temporary credentials with a security token."""
        self._access_key_id = access_key_id
        self._access_key_secret = access_key_secret
        self._security_token = security_token
        return self

    def connection_timeout(self, connection_timeout: Duration) -> "ConfigBuilder":
        self._connection_timeout = _as_timedelta(connection_timeout)
        return self

    def request_timeout(self, request_timeout: Duration) -> "ConfigBuilder":
        self._request_timeout = _as_timedelta(request_timeout)
        return self

    def build(self) -> Config:
        """Validate the settings and return the configuration."""
        endpoint = self._validate_endpoint()
        if is_empty_or_none(self._access_key_id) or is_empty_or_none(
            self._access_key_secret
        ):
            raise InvalidAccessKeyError()
        assert self._access_key_id is not None and self._access_key_secret is not None
        return Config(
            endpoint=endpoint,
            access_key_id=self._access_key_id,
            access_key_secret=self._access_key_secret,
            security_token=(
                None if is_empty_or_none(self._security_token) else self._security_token
            ),
            connection_timeout=self._connection_timeout or DEFAULT_CONNECTION_TIMEOUT,
            request_timeout=self._request_timeout or DEFAULT_REQUEST_TIMEOUT,
        )

    def _validate_endpoint(self) -> Endpoint:
        endpoint = self._endpoint
        if endpoint is None:
            raise InvalidEndpointError("Endpoint not provided")
        if not _ENDPOINT_RE.fullmatch(endpoint):
            raise InvalidEndpointError(endpoint)
        for scheme in (SCHEME_HTTPS, SCHEME_HTTP):
            if endpoint.startswith(scheme):
                return Endpoint(domain=endpoint[len(scheme):], scheme=scheme)
        return Endpoint(domain=endpoint, scheme=DEFAULT_HTTP_SCHEME)