"""Content-Encoding strategies applied to response bodies before JSON decoding."""
from __future__ import annotations

import gzip
import logging
import zlib
from typing import Dict, Iterable, Mapping, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class DecompressionError(ValueError):
    """Raised when a body cannot be reversed from its declared Content-Encoding."""


@runtime_checkable
class Decompressor(Protocol):
    def decompress(self, body: bytes) -> bytes:
        ...


class IdentityDecompressor:
    """Passes bodies through unchanged."""

    def decompress(self, body: bytes) -> bytes:
        return body


class GzipDecompressor:
    """Inflates gzip bodies.

    urllib3 usually inflates gzip transparently, so bodies that no longer start
    with the gzip magic bytes are returned as-is.
    """

    def decompress(self, body: bytes) -> bytes:
        if not body.startswith(GZIP_MAGIC):
            logger.debug("Body declared as gzip is already inflated; passing through")
            return body
        try:
            return gzip.decompress(body)
        except (OSError, EOFError, zlib.error) as exc:
            raise DecompressionError(f"Invalid gzip body: {exc}") from exc


class DeflateDecompressor:
    """Inflates zlib-wrapped or raw deflate bodies."""

    def decompress(self, body: bytes) -> bytes:
        try:
            return zlib.decompress(body)
        except zlib.error:
            pass
        try:
            return zlib.decompress(body, -zlib.MAX_WBITS)
        except zlib.error as exc:
            raise DecompressionError(f"Invalid deflate body: {exc}") from exc


KNOWN_DECOMPRESSORS: Mapping[str, type] = {
    "gzip": GzipDecompressor,
    "deflate": DeflateDecompressor,
}


class DecompressorRegistry:
    """Selects a decompressor by exact Content-Encoding value."""

    def __init__(self, strategies: Optional[Mapping[str, Decompressor]] = None) -> None:
        self._identity = IdentityDecompressor()
        self._strategies: Dict[str, Decompressor] = {}
        for encoding, strategy in (strategies or {}).items():
            self.register(encoding, strategy)

    @classmethod
    def for_encodings(cls, encodings: Iterable[str]) -> "DecompressorRegistry":
        strategies: Dict[str, Decompressor] = {}
        for encoding in encodings:
            factory = KNOWN_DECOMPRESSORS.get(encoding)
            if factory is None:
                raise ValueError(f"No decompressor available for Content-Encoding '{encoding}'")
            strategies[encoding] = factory()
        return cls(strategies)

    def register(self, encoding: str, strategy: Decompressor) -> None:
        if not isinstance(strategy, Decompressor):
            raise TypeError(f"Decompressor for '{encoding}' must define decompress(body)")
        self._strategies[encoding] = strategy

    def encodings(self) -> list[str]:
        return sorted(self._strategies)

    def for_encoding(self, content_encoding: Optional[str]) -> Decompressor:
        if content_encoding is None:
            return self._identity
        return self._strategies.get(content_encoding, self._identity)


def default_registry() -> DecompressorRegistry:
    return DecompressorRegistry.for_encodings(["gzip"])
