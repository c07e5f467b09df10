"""Shared header names, header helpers and request/response bases."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Mapping, Optional, TypeVar, Union

from .compress import CompressType
from .errors import JsonDecodeError

LOG_REQUEST_ID = "x-log-requestid"
LOG_BODY_RAW_SIZE = "x-log-bodyrawsize"
LOG_COMPRESS_TYPE = "x-log-compresstype"
LOG_PROTOBUF = "application/x-protobuf"
LOG_JSON = "application/json"
LOG_INVALID_COMPRESS_TYPE = "invalid compress type"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

HeaderValue = Union[str, bytes]
B = TypeVar("B")


def _raw_header(headers: Optional[Mapping[str, HeaderValue]], key: str) -> Any:
    if not headers:
        return None
    value = headers.get(key)
    if value is not None:
        return value
    wanted = key.lower()
    for name, candidate in headers.items():
        if name.lower() == wanted:
            return candidate
    return None


def _visible_ascii(text: str) -> bool:
    return all(ch == "\t" or " " <= ch <= "~" for ch in text)


def header_str(
    headers: Optional[Mapping[str, HeaderValue]],
    key: str,
    default: Optional[str] = None,
) -> Optional[str]:
    """Header value as text, or default if absent or not printable ASCII."""
    value = _raw_header(headers, key)
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("ascii")
        except UnicodeDecodeError:
            return default
    if not isinstance(value, str) or not _visible_ascii(value):
        return default
    return value


def header_int(
    headers: Optional[Mapping[str, HeaderValue]],
    key: str,
    default: Optional[int] = None,
) -> Optional[int]:
    """Header value as a 32-bit signed integer, or default if absent or invalid."""
    text = header_str(headers, key)
    if text is None or not _INT_RE.fullmatch(text):
        return default
    number = int(text)
    if not _I32_MIN <= number <= _I32_MAX:
        return default
    return number


def parse_json_response(body: bytes, headers: Optional[Mapping[str, HeaderValue]]) -> Any:
    """Decode a JSON response body, reporting the request id on failure."""
    try:
        return json.loads(body)
    except ValueError as exc:
        raise JsonDecodeError(str(exc), header_str(headers, LOG_REQUEST_ID)) from exc


class Request:
    """Base of all API requests: method, target and optional body."""

    HTTP_METHOD: ClassVar[str] = "GET"
    CONTENT_TYPE: ClassVar[Optional[str]] = None
    COMPRESS_TYPE: ClassVar[Optional[CompressType]] = None

    project: Optional[str]
    path: str

    def query_params(self) -> Optional[list[tuple[str, str]]]:
        return None

    def body(self) -> Optional[bytes]:
        return None

    def headers(self) -> dict[str, str]:
        return {}


@dataclass
class Response(Generic[B]):
    """A parsed response body together with the HTTP headers and status."""

    body: B
    headers: Mapping[str, HeaderValue]
    status: int

    def request_id(self) -> Optional[str]:
        return header_str(self.headers, LOG_REQUEST_ID)