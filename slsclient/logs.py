"""Log data model and its protobuf wire encoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

_U32_MAX = 0xFFFFFFFF
_U64_MASK = (1 << 64) - 1

_WIRE_VARINT = 0
_WIRE_FIXED64 = 1
_WIRE_LEN = 2
_WIRE_FIXED32 = 5

# Full tags (field number << 3 | wire type) of the known fields.
_TAG_KV_KEY = 10
_TAG_KV_VALUE = 18
_TAG_LOG_TIME = 8
_TAG_LOG_CONTENT = 18
_TAG_LOG_TIME_NS = 37
_TAG_GROUP_LOG = 10
_TAG_GROUP_TOPIC = 26
_TAG_GROUP_SOURCE = 34
_TAG_GROUP_TAG = 50
_TAG_LIST_GROUP = 10


class ProtobufError(Exception):
    """Base error for encoding or decoding log data."""


class DecodeError(ProtobufError):
    """Raised when bytes cannot be decoded into log data."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Fail to decode: {reason}")
        self.reason = reason


class EncodeError(ProtobufError):
    """Raised when log data cannot be encoded."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Fail to encode: {reason}")
        self.reason = reason


# ---------------------------------------------------------------- encoding

def _varint(value: int) -> bytes:
    out = bytearray()
    while value > 0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _key(tag: int) -> bytes:
    return _varint(tag)


def _len_field(tag: int, payload: bytes) -> bytes:
    return _key(tag) + _varint(len(payload)) + payload


def _str_field(tag: int, text: object, what: str) -> bytes:
    if not isinstance(text, str):
        raise EncodeError(f"{what} must be a string, got {type(text).__name__}")
    try:
        payload = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodeError(f"{what} is not valid UTF-8: {exc}") from exc
    return _len_field(tag, payload)


def _check_u32(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"{what} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= _U32_MAX:
        raise EncodeError(f"{what} out of range for uint32: {value}")
    return value


# ---------------------------------------------------------------- decoding

def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    for shift in range(0, 70, 7):
        if pos >= len(data):
            raise DecodeError("unexpected end of buffer while reading varint")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result & _U64_MASK, pos
    raise DecodeError("varint is longer than 10 bytes")


def _take(data: bytes, pos: int, size: int) -> tuple[bytes, int]:
    end = pos + size
    if end > len(data):
        raise DecodeError(
            f"unexpected end of buffer: need {size} bytes at offset {pos}, "
            f"have {len(data) - pos}"
        )
    return data[pos:end], end


def _fields(data: bytes) -> Iterator[tuple[int, Union[int, bytes]]]:
    """Yield (tag, value) pairs; unknown fields are left for the caller to ignore."""
    pos = 0
    while pos < len(data):
        tag, pos = _read_varint(data, pos)
        wire = tag & 0x7
        value: Union[int, bytes]
        if wire == _WIRE_VARINT:
            value, pos = _read_varint(data, pos)
        elif wire == _WIRE_FIXED64:
            raw, pos = _take(data, pos, 8)
            value = int.from_bytes(raw, "little")
        elif wire == _WIRE_FIXED32:
            raw, pos = _take(data, pos, 4)
            value = int.from_bytes(raw, "little")
        elif wire == _WIRE_LEN:
            length, pos = _read_varint(data, pos)
            value, pos = _take(data, pos, length)
        else:
            raise DecodeError(f"unsupported wire type {wire} in tag {tag}")
        yield tag, value


def _text(raw: Union[int, bytes]) -> str:
    assert isinstance(raw, bytes)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"invalid UTF-8 string: {exc}") from exc


def _decode_pair(data: bytes) -> tuple[str, str]:
    key = value = ""
    for tag, raw in _fields(data):
        if tag == _TAG_KV_KEY:
            key = _text(raw)
        elif tag == _TAG_KV_VALUE:
            value = _text(raw)
    return key, value


# ---------------------------------------------------------------- model

@dataclass
class LogContent:
    """A key-value pair of a log."""

    key: str = ""
    value: str = ""

    def _encode(self) -> bytes:
        return _str_field(_TAG_KV_KEY, self.key, "content key") + _str_field(
            _TAG_KV_VALUE, self.value, "content value"
        )


@dataclass
class LogTag:
    """A tag shared by all logs of a group."""

    key: str = ""
    value: str = ""

    def _encode(self) -> bytes:
        return _str_field(_TAG_KV_KEY, self.key, "tag key") + _str_field(
            _TAG_KV_VALUE, self.value, "tag value"
        )


@dataclass
class Log:
    """A single log: a unix timestamp plus key-value contents."""

    time: int = 0
    contents: list[LogContent] = field(default_factory=list)
    time_ns: Optional[int] = None

    @classmethod
    def from_unixtime(cls, time: int) -> "Log":
        return cls(time=time)

    def add_content(self, content: LogContent) -> "Log":
        self.contents.append(content)
        return self

    def add_content_kv(self, key: str, value: str) -> "Log":
        self.contents.append(LogContent(key, value))
        return self

    def set_time_ns(self, time_ns: int) -> "Log":
        self.time_ns = time_ns
        return self

    def _encode(self) -> bytes:
        parts = [_key(_TAG_LOG_TIME), _varint(_check_u32(self.time, "log time"))]
        parts.extend(_len_field(_TAG_LOG_CONTENT, c._encode()) for c in self.contents)
        if self.time_ns is not None:
            nanos = _check_u32(self.time_ns, "log time_ns")
            parts.append(_key(_TAG_LOG_TIME_NS) + nanos.to_bytes(4, "little"))
        return b"".join(parts)

    @classmethod
    def _decode(cls, data: bytes) -> "Log":
        log = cls()
        for tag, raw in _fields(data):
            if tag == _TAG_LOG_TIME:
                assert isinstance(raw, int)
                log.time = raw & _U32_MAX
            elif tag == _TAG_LOG_CONTENT:
                assert isinstance(raw, bytes)
                log.contents.append(LogContent(*_decode_pair(raw)))
            elif tag == _TAG_LOG_TIME_NS:
                assert isinstance(raw, int)
                log.time_ns = raw
        return log


@dataclass
class LogGroup:
    """A group of logs sharing a topic, a source and tags."""

    logs: list[Log] = field(default_factory=list)
    topic: Optional[str] = None
    source: Optional[str] = None
    log_tags: list[LogTag] = field(default_factory=list)

    def add_log(self, log: Log) -> "LogGroup":
        self.logs.append(log)
        return self

    def add_log_tag(self, log_tag: LogTag) -> "LogGroup":
        self.log_tags.append(log_tag)
        return self

    def add_log_tag_kv(self, key: str, value: str) -> "LogGroup":
        self.log_tags.append(LogTag(key, value))
        return self

    def set_source(self, source: str) -> "LogGroup":
        self.source = source
        return self

    def set_topic(self, topic: str) -> "LogGroup":
        self.topic = topic
        return self

    def encode(self) -> bytes:
        """Serialize this group in protobuf wire format."""
        parts = [_len_field(_TAG_GROUP_LOG, log._encode()) for log in self.logs]
        if self.topic is not None:
            parts.append(_str_field(_TAG_GROUP_TOPIC, self.topic, "topic"))
        if self.source is not None:
            parts.append(_str_field(_TAG_GROUP_SOURCE, self.source, "source"))
        parts.extend(_len_field(_TAG_GROUP_TAG, tag._encode()) for tag in self.log_tags)
        return b"".join(parts)

    @classmethod
    def _decode(cls, data: bytes) -> "LogGroup":
        group = cls()
        for tag, raw in _fields(data):
            if tag == _TAG_GROUP_LOG:
                assert isinstance(raw, bytes)
                group.logs.append(Log._decode(raw))
            elif tag == _TAG_GROUP_TOPIC:
                group.topic = _text(raw)
            elif tag == _TAG_GROUP_SOURCE:
                group.source = _text(raw)
            elif tag == _TAG_GROUP_TAG:
                assert isinstance(raw, bytes)
                group.log_tags.append(LogTag(*_decode_pair(raw)))
        return group


@dataclass
class LogGroupList:
    """A list of log groups, as returned when pulling logs."""

    log_groups: list[LogGroup] = field(default_factory=list)

    @classmethod
    def decode(cls, data: Union[bytes, bytearray, memoryview]) -> "LogGroupList":
        """Parse a protobuf-encoded list of log groups."""
        result = cls()
        for tag, raw in _fields(bytes(data)):
            if tag == _TAG_LIST_GROUP:
                assert isinstance(raw, bytes)
                result.log_groups.append(LogGroup._decode(raw))
        return result

    def __iter__(self) -> Iterator[LogGroup]:
        return iter(self.log_groups)

    def __len__(self) -> int:
        return len(self.log_groups)