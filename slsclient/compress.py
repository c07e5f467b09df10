"""Compression of request bodies and decompression of responses."""

from __future__ import annotations

from enum import Enum
from typing import Union

import lz4.block

from .errors import CompressionError, DecompressionError, UnsupportedCompressTypeError


class CompressType(Enum):
    """Compression algorithms understood by the service."""

    LZ4 = "lz4"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "CompressType":
        """Look up a compression type by its wire name."""
        for member in cls:
            if member.value == value:
                return member
        raise UnsupportedCompressTypeError(value)


def compress(body: bytes, compress_type: CompressType) -> bytes:
    """Compress body; the output carries no size prefix."""
    if compress_type is CompressType.LZ4:
        try:
            return lz4.block.compress(body, mode="default", store_size=False)
        except (lz4.block.LZ4BlockError, ValueError, OverflowError) as exc:
            raise CompressionError(str(exc)) from exc
    raise CompressionError(f"unsupported compress type: {compress_type}")


def decompress(
    body: bytes, compress_type: Union[str, CompressType], raw_size: int
) -> bytes:
    """Decompress body whose uncompressed length is raw_size."""
    if not isinstance(compress_type, CompressType):
        compress_type = CompressType.parse(compress_type)
    if compress_type is CompressType.LZ4:
        try:
            return lz4.block.decompress(body, uncompressed_size=raw_size)
        except (lz4.block.LZ4BlockError, ValueError, OverflowError) as exc:
            raise DecompressionError(str(exc)) from exc
    raise UnsupportedCompressTypeError(str(compress_type))