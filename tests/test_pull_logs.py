import pytest

from slsclient.errors import MissingParameterError, ProtobufDeserializeError
from slsclient.logs import Log, LogGroup
from slsclient.pull_logs import (
    PullLogsRequest,
    PullLogsRequestBuilder,
    PullLogsResponse,
)


def _varint(value):
    out = bytearray()
    while value > 0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _list_bytes(*encoded_groups):
    return b"".join(b"\x0a" + _varint(len(g)) + g for g in encoded_groups)


def _sample_group(count=1):
    group = LogGroup()
    group.set_topic("mytopic").set_source("127.0.0.1")
    for _ in range(count):
        log = Log.from_unixtime(1690254376)
        log.add_content_kv("key", "value")
        group.add_log(log).add_log_tag_kv("tagKey", "tagValue")
    return group


def test_build_request_with_query():
    request = (
        PullLogsRequestBuilder("my-project", "my-logstore", 0)
        .cursor("MTc0NDM0MDIzOTQzNTM0NzM2Mg==")
        .count(1000)
        .query("* | where 1 = 1")
        .build()
    )
    assert isinstance(request, PullLogsRequest)
    assert request.project == "my-project"
    assert request.path == "/logstores/my-logstore/shards/0"
    assert request.query_params() == [
        ("type", "logs"),
        ("cursor", "MTc0NDM0MDIzOTQzNTM0NzM2Mg=="),
        ("count", "1000"),
        ("query", "* | where 1 = 1"),
    ]


def test_all_optional_params_in_order():
    request = (
        PullLogsRequestBuilder("p", "s", 3)
        .cursor("c1")
        .end_cursor("c2")
        .count(10)
        .query("*")
        .query_id("qid")
        .build()
    )
    assert request.query_params() == [
        ("type", "logs"),
        ("cursor", "c1"),
        ("count", "10"),
        ("endCursor", "c2"),
        ("query", "*"),
        ("queryId", "qid"),
    ]
    assert request.HTTP_METHOD == "GET"


def test_headers_request_protobuf_and_lz4():
    request = PullLogsRequestBuilder("p", "s", 1).cursor("c").count(1).build()
    assert request.headers() == {
        "Accept": "application/x-protobuf",
        "Accept-Encoding": "lz4",
    }
    assert request.body() is None


def test_missing_cursor():
    with pytest.raises(MissingParameterError) as info:
        PullLogsRequestBuilder("p", "s", 0).count(100).build()
    assert info.value.name == "cursor"
    assert "Missing required parameter: cursor" in str(info.value)


def test_missing_count():
    with pytest.raises(MissingParameterError) as info:
        PullLogsRequestBuilder("p", "s", 0).cursor("c").build()
    assert info.value.name == "count"


def test_missing_both_reports_cursor_first():
    with pytest.raises(MissingParameterError) as info:
        PullLogsRequestBuilder("p", "s", 0).build()
    assert info.value.name == "cursor"


def test_response_decodes_groups_and_headers():
    group = _sample_group(100)
    body = _list_bytes(group.encode())
    headers = {
        "x-log-cursor": "next-cursor",
        "x-log-count": "1",
        "x-log-read-last-cursor": "last-cursor",
        "x-log-rawdatasize": "2048",
        "x-log-rawdatacount": "7",
        "x-log-resultlines": "100",
        "x-log-rawdatalines": "120",
        "x-log-failedlines": "0",
    }
    response = PullLogsResponse.from_http_response(body, headers)
    assert response.log_group_list == [group]
    assert response.next_cursor == "next-cursor"
    assert response.log_group_count == 1
    assert response.read_last_cursor == "last-cursor"
    assert response.raw_size_before_query == 2048
    assert response.data_count_before_query == 7
    assert response.result_lines == 100
    assert response.lines_before_query == 120
    assert response.failed_lines == 0


def test_response_defaults_when_headers_missing():
    response = PullLogsResponse.from_http_response(b"", {})
    assert response.log_group_list == []
    assert response.next_cursor == ""
    assert response.log_group_count == 0
    assert response.read_last_cursor is None
    assert response.failed_lines is None


def test_response_invalid_int_header_is_none():
    response = PullLogsResponse.from_http_response(
        b"", {"x-log-count": "many", "x-log-resultlines": "abc"}
    )
    assert response.log_group_count == 0
    assert response.result_lines is None


def test_response_multiple_groups():
    first = _sample_group(1)
    second = LogGroup().add_log(Log.from_unixtime(1).add_content_kv("a", "b"))
    body = _list_bytes(first.encode(), second.encode())
    response = PullLogsResponse.from_http_response(body, {"x-log-count": "2"})
    assert response.into_log_group_list() == [first, second]


def test_response_bad_protobuf_carries_request_id():
    with pytest.raises(ProtobufDeserializeError) as info:
        PullLogsResponse.from_http_response(
            b"\x0a\x05ab", {"x-log-requestid": "req-1"}
        )
    assert info.value.request_id == "req-1"
    assert "Failed to deserialize protobuf" in str(info.value)