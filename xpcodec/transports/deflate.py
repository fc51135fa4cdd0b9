"""zlib envelope (deflate with a 2-byte header and adler32 trailer)."""

import logging
import zlib

from xpcodec.core.errors import CompressionError
from xpcodec.core.transport import Transport

logger = logging.getLogger(__name__)

transport = Transport(
    name='zlib',
    help='zlib envelope. Smaller header than gzip; not what REXPaint writes.',
)


@transport.compressor
def compress(data: bytes, level: int) -> bytes:
    try:
        out = zlib.compress(data, level)
    except zlib.error as e:
        raise CompressionError(f'zlib compression failed: {e}') from e
    logger.debug('zlib: %d -> %d bytes (level %d)', len(data), len(out), level)
    return out


@transport.decompressor
def decompress(data: bytes) -> bytes:
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        raise CompressionError(f'zlib decompression failed: {e}') from e
