"""Transport: the compressed envelope around the .xp wire payload."""

from __future__ import annotations

from collections.abc import Callable

from xpcodec.core.errors import CompressionError


class Transport:
    """A self-registering compression transport.

    Usage in a transport module:

        transport = Transport(name='gzip', help='gzip envelope')

        @transport.compressor
        def compress(data, level):
            ...

        @transport.decompressor
        def decompress(data):
            ...

    Both functions must raise CompressionError on failure.
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._compress_fn: Callable[[bytes, int], bytes] | None = None
        self._decompress_fn: Callable[[bytes], bytes] | None = None

    def compressor(self, fn: Callable[[bytes, int], bytes]) -> Callable[[bytes, int], bytes]:
        """Decorator to register the compress function."""
        self._compress_fn = fn
        return fn

    def decompressor(self, fn: Callable[[bytes], bytes]) -> Callable[[bytes], bytes]:
        """Decorator to register the decompress function."""
        self._decompress_fn = fn
        return fn

    def compress(self, data: bytes, level: int = 9) -> bytes:
        if self._compress_fn is None:
            raise CompressionError(f'Transport {self.name} has no compress function')
        return self._compress_fn(data, level)

    def decompress(self, data: bytes) -> bytes:
        if self._decompress_fn is None:
            raise CompressionError(f'Transport {self.name} has no decompress function')
        return self._decompress_fn(data)

    def __repr__(self) -> str:
        return f'Transport({self.name!r})'
