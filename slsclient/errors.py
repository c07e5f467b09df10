"""Errors raised by the log service client."""

from __future__ import annotations

import json
from typing import Any, Optional


class SlsError(Exception):
    """Base class of every error raised by the client."""


class ConfigError(SlsError):
    """The client configuration is invalid."""


class InvalidEndpointError(ConfigError):
    """The endpoint is missing or malformed."""

    def __init__(self, endpoint: str) -> None:
        super().__init__(f"Invalid endpoint: {endpoint}")
        self.endpoint = endpoint


class InvalidAccessKeyError(ConfigError):
    """The access key id or secret is missing or empty."""

    def __init__(self) -> None:
        super().__init__("Invalid access key")


class RequestError(SlsError):
    """The request is invalid and was not sent to the server."""


class MissingParameterError(RequestError):
    """A required request parameter was not set."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing required parameter: {name}")
        self.name = name


class CompressionError(RequestError):
    """The request body could not be compressed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to compress data: {reason}")
        self.reason = reason


class DecompressionError(SlsError):
    """A response body could not be decompressed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class UnsupportedCompressTypeError(DecompressionError):
    """The compression type is not known to the client."""

    def __init__(self, compress_type: str) -> None:
        super().__init__(f"Unsupported compress type: {compress_type}")
        self.compress_type = compress_type


class ResponseError(SlsError):
    """The response from the server could not be parsed."""

    def __init__(self, message: str, request_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.request_id = request_id


class JsonDecodeError(ResponseError):
    """A JSON response body could not be decoded."""

    def __init__(self, reason: str, request_id: Optional[str] = None) -> None:
        super().__init__(
            f"Failed to decode JSON response: {reason}, request_id={request_id!r}",
            request_id,
        )
        self.reason = reason


class ProtobufDeserializeError(ResponseError):
    """A protobuf response body could not be decoded."""

    def __init__(self, reason: str, request_id: Optional[str] = None) -> None:
        super().__init__(
            f"Failed to deserialize protobuf: {reason}, request_id={request_id!r}",
            request_id,
        )
        self.reason = reason


class ServerError(SlsError):
    """The server answered with an error code and message."""

    def __init__(
        self,
        error_code: str,
        error_message: str,
        http_status: int,
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Server error: code={error_code}, message={error_message}, "
            f"httpStatus={http_status}, requestId={request_id!r}"
        )
        self.error_code = error_code
        self.error_message = error_message
        self.http_status = http_status
        self.request_id = request_id


def server_error_from_response(
    status: int, request_id: Optional[str], body: bytes
) -> SlsError:
    """Build the error for a failed HTTP response from its JSON body."""
    try:
        payload: Any = json.loads(body)
    except ValueError as exc:
        return JsonDecodeError(str(exc), request_id)
    if not isinstance(payload, dict):
        return JsonDecodeError("expected a JSON object", request_id)
    error_code = payload.get("errorCode")
    error_message = payload.get("errorMessage")
    if not isinstance(error_code, str):
        return JsonDecodeError("missing field `errorCode`", request_id)
    if not isinstance(error_message, str):
        return JsonDecodeError("missing field `errorMessage`", request_id)
    return ServerError(error_code, error_message, int(status), request_id)


def check_required(*args: tuple[str, Any]) -> None:
    """Raise MissingParameterError for the first (name, value) pair whose value is None."""
    for name, value in args:
        if value is None:
            raise MissingParameterError(name)