import pytest

from slsclient.compress import CompressType, compress, decompress
from slsclient.errors import MissingParameterError, RequestError
from slsclient.logs import Log, LogGroup, LogGroupList
from slsclient.put_logs import (
    PutLogsRawRequest,
    PutLogsRawRequestBuilder,
    PutLogsRequest,
    PutLogsRequestBuilder,
)


def _hello_group():
    group = LogGroup()
    log = Log()
    log.time = 1690254376
    log.add_content_kv("hello", "world")
    group.logs.append(log)
    return group


def test_put_logs_request():
    group = _hello_group()
    request = PutLogsRequestBuilder("my-project", "my-logstore").log_group(group).build()
    assert isinstance(request, PutLogsRequest)
    assert request.project == "my-project"
    assert request.path == "/logstores/my-logstore/shards/lb"
    assert request.HTTP_METHOD == "POST"
    assert request.CONTENT_TYPE == "application/x-protobuf"
    assert request.COMPRESS_TYPE is CompressType.LZ4


def test_put_logs_body_round_trip():
    group = _hello_group()
    body = PutLogsRequestBuilder("p", "s").log_group(group).build().body()
    assert body == group.encode()
    decoded = LogGroupList.decode(b"\x0a" + bytes([len(body)]) + body)
    assert decoded.log_groups == [group]


def test_put_logs_missing_log_group():
    with pytest.raises(MissingParameterError) as info:
        PutLogsRequestBuilder("p", "s").build()
    assert info.value.name == "log_group"


def test_put_logs_encode_failure_is_request_error():
    group = LogGroup().add_log(Log.from_unixtime(-1))
    request = PutLogsRequestBuilder("p", "s").log_group(group).build()
    with pytest.raises(RequestError) as info:
        request.body()
    assert "Failed to serialize protobuf" in str(info.value)


def test_put_logs_raw_request():
    group = _hello_group()
    encoded = group.encode()
    raw_size = len(encoded)
    compressed = compress(encoded, CompressType.LZ4)
    request = (
        PutLogsRawRequestBuilder("my-project", "my-logstore")
        .data(compressed)
        .raw_size(raw_size)
        .compress_type("lz4")
        .build()
    )
    assert isinstance(request, PutLogsRawRequest)
    assert request.path == "/logstores/my-logstore/shards/lb"
    assert request.CONTENT_TYPE == "application/x-protobuf"
    assert request.COMPRESS_TYPE is None
    assert request.headers() == {
        "x-log-bodyrawsize": str(raw_size),
        "x-log-compresstype": "lz4",
    }
    assert decompress(request.body(), "lz4", raw_size) == encoded


def test_put_logs_raw_invalid_compress_type_header():
    request = (
        PutLogsRawRequestBuilder("p", "s")
        .data(b"abc")
        .raw_size(3)
        .compress_type("lz\n4")
        .build()
    )
    assert request.headers()["x-log-compresstype"] == "invalid compress type"


def test_put_logs_raw_accepts_bytearray():
    request = (
        PutLogsRawRequestBuilder("p", "s")
        .data(bytearray(b"xyz"))
        .raw_size(3)
        .compress_type("lz4")
        .build()
    )
    assert request.body() == b"xyz"


@pytest.mark.parametrize(
    "setup, missing",
    [
        (lambda b: b.raw_size(1).compress_type("lz4"), "data"),
        (lambda b: b.data(b"x").compress_type("lz4"), "raw_size"),
        (lambda b: b.data(b"x").raw_size(1), "compress_type"),
        (lambda b: b, "data"),
    ],
)
def test_put_logs_raw_missing_parameters(setup, missing):
    builder = setup(PutLogsRawRequestBuilder("p", "s"))
    with pytest.raises(MissingParameterError) as info:
        builder.build()
    assert info.value.name == missing