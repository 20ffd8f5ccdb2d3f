from __future__ import annotations

import gzip
import zlib

import pytest

from contentful_response.decompression import (
    DecompressionError,
    DecompressorRegistry,
    DeflateDecompressor,
    GzipDecompressor,
    IdentityDecompressor,
    default_registry,
)


def test_default_registry_handles_gzip_only() -> None:
    registry = default_registry()

    assert registry.encodings() == ["gzip"]
    assert isinstance(registry.for_encoding("gzip"), GzipDecompressor)
    assert isinstance(registry.for_encoding("deflate"), IdentityDecompressor)
    assert isinstance(registry.for_encoding(None), IdentityDecompressor)


def test_registry_matches_encoding_exactly() -> None:
    registry = default_registry()

    assert isinstance(registry.for_encoding("GZIP"), IdentityDecompressor)
    assert isinstance(registry.for_encoding("gzip, br"), IdentityDecompressor)


def test_registry_rejects_unknown_encoding() -> None:
    with pytest.raises(ValueError):
        DecompressorRegistry.for_encodings(["br"])


def test_register_requires_decompress_method() -> None:
    registry = DecompressorRegistry()

    with pytest.raises(TypeError):
        registry.register("x-bad", object())  # type: ignore[arg-type]


def test_gzip_round_trip_and_passthrough() -> None:
    decompressor = GzipDecompressor()

    assert decompressor.decompress(gzip.compress(b'{"a": 1}')) == b'{"a": 1}'
    assert decompressor.decompress(b'{"a": 1}') == b'{"a": 1}'


def test_gzip_truncated_stream_raises() -> None:
    truncated = gzip.compress(b'{"a": 1}')[:12]

    with pytest.raises(DecompressionError):
        GzipDecompressor().decompress(truncated)


def test_deflate_accepts_zlib_and_raw_streams() -> None:
    decompressor = DeflateDecompressor()
    raw_deflate = zlib.compressobj(wbits=-zlib.MAX_WBITS)
    raw_body = raw_deflate.compress(b"payload") + raw_deflate.flush()

    assert decompressor.decompress(zlib.compress(b"payload")) == b"payload"
    assert decompressor.decompress(raw_body) == b"payload"

    with pytest.raises(DecompressionError):
        decompressor.decompress(b"plain text")
