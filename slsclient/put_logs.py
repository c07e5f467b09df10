"""Writing log groups to a logstore, encoded or pre-compressed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from .common import (
    LOG_BODY_RAW_SIZE,
    LOG_COMPRESS_TYPE,
    LOG_INVALID_COMPRESS_TYPE,
    LOG_PROTOBUF,
    Request,
)
from .compress import CompressType
from .errors import RequestError, check_required
from .logs import LogGroup, ProtobufError


def _valid_header_value(text: str) -> bool:
    return all(ch == "\t" or (ord(ch) >= 32 and ord(ch) != 127) for ch in text)


@dataclass
class PutLogsRequest(Request):
    """Writes one log group; the body is sent lz4 compressed."""

    HTTP_METHOD: ClassVar[str] = "POST"
    CONTENT_TYPE: ClassVar[Optional[str]] = LOG_PROTOBUF
    COMPRESS_TYPE: ClassVar[Optional[CompressType]] = CompressType.LZ4

    project: str
    path: str
    log_group: LogGroup

    def body(self) -> bytes:
        """The log group in protobuf wire format, not yet compressed."""
        try:
            return self.log_group.encode()
        except ProtobufError as exc:
            raise RequestError(f"Failed to serialize protobuf: {exc}") from exc


class PutLogsRequestBuilder:
    """Collects the parameters of a put-logs request."""

    def __init__(self, project: str, logstore: str) -> None:
        self._project = project
        self._path = f"/logstores/{logstore}/shards/lb"
        self._log_group: Optional[LogGroup] = None

    def log_group(self, log_group: LogGroup) -> "PutLogsRequestBuilder":
        """Required: the log group to write."""
        self._log_group = log_group
        return self

    def build(self) -> PutLogsRequest:
        check_required(("log_group", self._log_group))
        assert self._log_group is not None
        return PutLogsRequest(
            project=self._project, path=self._path, log_group=self._log_group
        )


@dataclass
class PutLogsRawRequest(Request):
    """Writes an already encoded and compressed log group."""

    HTTP_METHOD: ClassVar[str] = "POST"
    CONTENT_TYPE: ClassVar[Optional[str]] = LOG_PROTOBUF

    project: str
    path: str
    data: bytes
    raw_size: int
    compress_type: str

    def body(self) -> bytes:
        return self.data

    def headers(self) -> dict[str, str]:
        compress_type = (
            self.compress_type
            if _valid_header_value(self.compress_type)
            else LOG_INVALID_COMPRESS_TYPE
        )
        return {
            LOG_BODY_RAW_SIZE: str(self.raw_size),
            LOG_COMPRESS_TYPE: compress_type,
        }


class PutLogsRawRequestBuilder:
    """Collects the parameters of a raw put-logs request."""

    def __init__(self, project: str, logstore: str) -> None:
        self._project = project
        self._path = f"/logstores/{logstore}/shards/lb"
        self._data: Optional[bytes] = None
        self._raw_size: Optional[int] = None
        self._compress_type: Optional[str] = None

    def data(
        self, data: Union[bytes, bytearray, memoryview]
    ) -> "PutLogsRawRequestBuilder":
        """Required: the compressed, protobuf-encoded log group."""
        self._data = bytes(data)
        return self

    def raw_size(self, raw_size: int) -> "PutLogsRawRequestBuilder":
        """Required: the size of the data before compression."""
        self._raw_size = raw_size
        return self

    def compress_type(self, compress_type: str) -> "PutLogsRawRequestBuilder":
        """Required: the compression used for the data, e.g. "lz4"."""
        self._compress_type = compress_type
        return self

    def build(self) -> PutLogsRawRequest:
        check_required(
            ("data", self._data),
            ("raw_size", self._raw_size),
            ("compress_type", self._compress_type),
        )
        assert (
            self._data is not None
            and self._raw_size is not None
            and self._compress_type is not None
        )
        return PutLogsRawRequest(
            project=self._project,
            path=self._path,
            data=self._data,
            raw_size=self._raw_size,
            compress_type=self._compress_type,
        )