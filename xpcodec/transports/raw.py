"""No envelope: the payload is already inflated.

Useful for payloads inflated elsewhere and for inspecting the wire layout.
"""

from xpcodec.core.transport import Transport

transport = Transport(
    name='raw',
    help='Identity transport. Bytes pass through unchanged.',
)


@transport.compressor
def compress(data: bytes, level: int) -> bytes:
    return bytes(data)


@transport.decompressor
def decompress(data: bytes) -> bytes:
    return bytes(data)
