"""gzip envelope, the one REXPaint writes .xp files with.

Decompression auto-detects the header, so zlib-wrapped payloads load too.
Compression pins the gzip mtime to 0: the same image always encodes to
the same bytes.
"""

import gzip
import logging
import zlib

from xpcodec.core.errors import CompressionError
from xpcodec.core.transport import Transport

logger = logging.getLogger(__name__)

transport = Transport(
    name='gzip',
    help='gzip envelope (REXPaint default). Reads gzip or zlib.',
)

# 32 + MAX_WBITS: accept either a gzip or a zlib header
_AUTO_WBITS = zlib.MAX_WBITS | 32


@transport.compressor
def compress(data: bytes, level: int) -> bytes:
    try:
        out = gzip.compress(data, compresslevel=level, mtime=0)
    except (zlib.error, ValueError) as e:
        raise CompressionError(f'gzip compression failed: {e}') from e
    logger.debug('gzip: %d -> %d bytes (level %d)', len(data), len(out), level)
    return out


@transport.decompressor
def decompress(data: bytes) -> bytes:
    try:
        out = zlib.decompress(data, _AUTO_WBITS)
    except zlib.error as e:
        raise CompressionError(f'gzip decompression failed: {e}') from e
    logger.debug('gzip: %d -> %d bytes inflated', len(data), len(out))
    return out
