# slsclient

Building blocks for a log service client. The package:

- encodes log groups in the service's protobuf wire format and decodes lists
  of log groups (`slsclient.logs`);
- compresses and decompresses payloads with LZ4 (`slsclient.compress`);
- validates client configuration (`slsclient.config`);
- builds request objects and parses response bodies for writing logs, pulling
  logs and managing projects (`slsclient.put_logs`, `slsclient.pull_logs`,
  `slsclient.project`);
- defines the error hierarchy used throughout (`slsclient.errors`).

## Installation

```
pip install slsclient
```

To run the test suite:

```
pip install "slsclient[test]"
pytest
```

## Building and encoding logs

```python
from slsclient.logs import Log, LogGroup, LogGroupList

log = Log.from_unixtime(1690254376)
log.add_content_kv("key1", "value1").add_content_kv("hello", "world")
log.set_time_ns(123456789)

group = LogGroup()
group.set_topic("mytopic").set_source("127.0.0.1")
group.add_log(log).add_log_tag_kv("tagKey", "tagValue")

payload = group.encode()
```

`Log`, `LogContent`, `LogTag`, `LogGroup` and `LogGroupList` are dataclasses;
the `add_*` and `set_*` methods return the object so calls can be chained.
`LogGroup.encode()` raises `EncodeError` when a time is outside the unsigned
32-bit range or a key or value is not a string.

`LogGroupList.decode(data)` reads a list of log groups, as returned when
pulling logs. Unknown fields are skipped. Malformed input raises `DecodeError`.
Both errors derive from `ProtobufError`.

## Configuration

```python
from datetime import timedelta
from slsclient.config import Config

config = (
    Config.builder()
    .endpoint("cn-hangzhou.log.aliyuncs.com")
    .access_key("access-key-id", "secret")
    .request_timeout(timedelta(seconds=60))
    .connection_timeout(timedelta(seconds=10))
    .build()
)
print(config.endpoint.scheme, config.endpoint.domain)
```

An endpoint may start with `http://` or `https://` and may end with a port.
Without a scheme, `http://` is used. `ConfigBuilder.sts(...)` also sets a
security token. An empty token is stored as `None`. Timeouts may be given as
`timedelta` or as a number of seconds. The defaults are 60 s for requests and
10 s for connections.

A missing or malformed endpoint raises `InvalidEndpointError`. A missing or
empty access key id or secret raises `InvalidAccessKeyError`. Both are
`ConfigError`s.

`user_agent()` returns the User-Agent string, `slsclient/0.2.0`.

## Compression

```python
from slsclient.compress import CompressType, compress, decompress

packed = compress(payload, CompressType.LZ4)
assert decompress(packed, "lz4", len(payload)) == payload
```

`CompressType.parse(name)` raises `UnsupportedCompressTypeError` for a name
other than `"lz4"`.

## Requests

Each builder collects parameters. Its `build()` method returns a request
object, or raises `MissingParameterError` when a required parameter was not
set.

| Builder | Constructor | Required |
|---|---|---|
| `PutLogsRequestBuilder` | `(project, logstore)` | `log_group` |
| `PutLogsRawRequestBuilder` | `(project, logstore)` | `data`, `raw_size`, `compress_type` |
| `PullLogsRequestBuilder` | `(project, logstore, shard_id)` | `cursor`, `count` |
| `CreateProjectRequestBuilder` | `(project_name)` | `description` |
| `GetProjectRequestBuilder` | `(project_name)` | — |
| `ListProjectsRequestBuilder` | `(offset, size)` | — |
| `UpdateProjectRequestBuilder` | `(project_name)` | — |
| `DeleteProjectRequestBuilder` | `(project_name)` | — |

Every request object carries the same members:

- `HTTP_METHOD` and `CONTENT_TYPE`;
- `project` (the target project, or `None`) and `path`;
- the methods `query_params()`, `headers()` and `body()`.

For example:

```python
from slsclient.pull_logs import PullLogsRequestBuilder

request = (
    PullLogsRequestBuilder("my-project", "my-logstore", 0)
    .cursor("cursor-value")
    .count(1000)
    .query("* | where 1 = 1")
    .build()
)
request.path            # "/logstores/my-logstore/shards/0"
request.query_params()  # [("type", "logs"), ("cursor", ...), ("count", "1000"), ("query", ...)]
```

`PutLogsRequest.body()` returns the encoded log group uncompressed. Its
`COMPRESS_TYPE` is `CompressType.LZ4`, and compressing the body is left to the
caller.

## Responses

Response bodies are parsed with `from_http_response(body, headers)` on these
classes:

- `PullLogsResponse`: log groups plus cursor and count headers;
- `GetProjectResponse`;
- `ListProjectsResponse`.

A body that cannot be parsed raises `ProtobufDeserializeError` or
`JsonDecodeError`. Both are `ResponseError`s, and both carry the `request_id`
taken from the `x-log-requestid` header.

`slsclient.common` also provides:

- `header_str` and `header_int`, which read headers case-insensitively;
- `parse_json_response`;
- a generic `Response` dataclass with a `request_id()` method.

`server_error_from_response(status, request_id, body)` returns, without
raising, the error for an error reply:

- a `ServerError` with `error_code`, `error_message`, `http_status` and
  `request_id`;
- or a `JsonDecodeError` if the body is not the expected JSON.

## What this package does not do

It has no HTTP transport. Nothing in it opens connections, signs requests,
retries or sends anything to the service. `Config` records retry settings
(`max_retry`, `base_retry_backoff`, `max_retry_backoff`) but nothing reads
them.

It covers only writing logs, pulling logs and project management. There are
no operations for logstores, shards, cursors, queries or consumer groups, and
there is no command-line tool.