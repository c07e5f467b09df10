"""Pulling logs from a shard of a logstore, starting at a cursor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Mapping, Optional

from .common import (
    LOG_PROTOBUF,
    LOG_REQUEST_ID,
    HeaderValue,
    Request,
    header_int,
    header_str,
)
from .compress import CompressType
from .errors import ProtobufDeserializeError, check_required
from .logs import LogGroup, LogGroupList, ProtobufError


@dataclass
class PullLogsRequest(Request):
    """A ready-to-send request that pulls log groups from a shard."""

    HTTP_METHOD: ClassVar[str] = "GET"

    project: str
    path: str
    cursor: str
    count: int
    end_cursor: Optional[str] = None
    query: Optional[str] = None
    query_id: Optional[str] = None

    def query_params(self) -> list[tuple[str, str]]:
        params = [
            ("type", "logs"),
            ("cursor", self.cursor),
            ("count", str(self.count)),
        ]
        if self.end_cursor is not None:
            params.append(("endCursor", self.end_cursor))
        if self.query is not None:
            params.append(("query", self.query))
        if self.query_id is not None:
            params.append(("queryId", self.query_id))
        return params

    def headers(self) -> dict[str, str]:
        return {
            "Accept": LOG_PROTOBUF,
            "Accept-Encoding": str(CompressType.LZ4),
        }


class PullLogsRequestBuilder:
    """Collects the parameters of a pull-logs request."""

    def __init__(self, project: str, logstore: str, shard_id: int) -> None:
        self._project = project
        self._path = f"/logstores/{logstore}/shards/{shard_id}"
        self._cursor: Optional[str] = None
        self._end_cursor: Optional[str] = None
        self._count: Optional[int] = None
        self._query: Optional[str] = None
        self._query_id: Optional[str] = None

    def cursor(self, cursor: str) -> "PullLogsRequestBuilder":
        """Required: the cursor to start pulling from, inclusive."""
        self._cursor = cursor
        return self

    def end_cursor(self, end_cursor: str) -> "PullLogsRequestBuilder":
        """Optional: the cursor to stop pulling at, exclusive."""
        self._end_cursor = end_cursor
        return self

    def count(self, count: int) -> "PullLogsRequestBuilder":
        """Required: the maximum number of log groups to pull."""
        self._count = count
        return self

    def query(self, query: str) -> "PullLogsRequestBuilder":
        """Optional: an SPL query filtering the logs, e.g. "* | where a = 'b'"."""
        self._query = query
        return self

    def query_id(self, query_id: str) -> "PullLogsRequestBuilder":
        self._query_id = query_id
        return self

    def build(self) -> PullLogsRequest:
        """Validate the parameters and return the request."""
        check_required(("cursor", self._cursor), ("count", self._count))
        assert self._cursor is not None and self._count is not None
        return PullLogsRequest(
            project=self._project,
            path=self._path,
            cursor=self._cursor,
            count=self._count,
            end_cursor=self._end_cursor,
            query=self._query,
            query_id=self._query_id,
        )


@dataclass
class PullLogsResponse:
    """Log groups pulled from a shard and the metadata sent with them."""

    log_group_list: list[LogGroup] = field(default_factory=list)
    next_cursor: str = ""
    log_group_count: int = 0
    read_last_cursor: Optional[str] = None
    raw_size_before_query: Optional[int] = None
    data_count_before_query: Optional[int] = None
    result_lines: Optional[int] = None
    lines_before_query: Optional[int] = None
    failed_lines: Optional[int] = None

    @classmethod
    def from_http_response(
        cls, body: bytes, headers: Optional[Mapping[str, HeaderValue]]
    ) -> "PullLogsResponse":
        """Parse a (decompressed) protobuf body and the response headers."""
        try:
            groups = LogGroupList.decode(body)
        except ProtobufError as exc:
            raise ProtobufDeserializeError(
                str(exc), header_str(headers, LOG_REQUEST_ID)
            ) from exc
        return cls(
            log_group_list=groups.log_groups,
            next_cursor=header_str(headers, "x-log-cursor", "") or "",
            log_group_count=header_int(headers, "x-log-count", 0) or 0,
            read_last_cursor=header_str(headers, "x-log-read-last-cursor"),
            raw_size_before_query=header_int(headers, "x-log-rawdatasize"),
            data_count_before_query=header_int(headers, "x-log-rawdatacount"),
            result_lines=header_int(headers, "x-log-resultlines"),
            lines_before_query=header_int(headers, "x-log-rawdatalines"),
            failed_lines=header_int(headers, "x-log-failedlines"),
        )

    def into_log_group_list(self) -> list[LogGroup]:
        return self.log_group_list