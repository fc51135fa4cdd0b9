"""Binary codec for .xp images.

Wire layout after decompression, little-endian throughout:

    u32 version
    u32 layer count
    per layer:
        u32 width
        u32 height
        width * height pixel records, column-major (x outer, y inner):
            u32 glyph
            u8  fg r, g, b
            u8  bg r, g, b

The in-memory raster is row-major (x + width * y); parse() and serialize()
translate between the two orders.

parse()/serialize() work on inflated payloads. decode()/encode() add the
compressed envelope via a transport (see xpcodec.registry), and
load()/save() do the same against files.
"""

from __future__ import annotations

import logging
import os
import struct

import numpy as np

from xpcodec import registry
from xpcodec.core.env import get_settings
from xpcodec.core.errors import FormatError, InternalConsistencyError, ValidationError
from xpcodec.core.image import Image
from xpcodec.core.palette import Color, is_int
from xpcodec.core.transport import Transport
from xpcodec.core.types import TRANSPARENT, Layer, Pixel

logger = logging.getLogger(__name__)

HEADER = struct.Struct('<II')  # (version, layer count) and (width, height)
PIXEL_DTYPE = np.dtype([('glyph', '<u4'), ('fg', 'u1', (3,)), ('bg', 'u1', (3,))])
PIXEL_SIZE = PIXEL_DTYPE.itemsize  # 10
U32_MAX = 0xFFFFFFFF


def encoded_size(image: Image) -> int:
    """Length of serialize(image): 8 + sum(8 + 10 * w * h) over layers."""
    return HEADER.size + sum(HEADER.size + PIXEL_SIZE * layer.width * layer.height for layer in image.layers)


# ─── decoding ─────────────────────────────────────────────────────────


def _layer_from_records(records: np.ndarray, width: int, height: int, colours: dict) -> Layer:
    layer = Layer(width, height)
    # column-major on the wire -> row-major raster
    ordered = records.reshape(width, height).T.ravel()
    glyphs = ordered['glyph'].tolist()
    fgs = ordered['fg'].tolist()
    bgs = ordered['bg'].tolist()

    def colour(rgb: list[int]) -> Color:
        key = tuple(rgb)
        c = colours.get(key)
        if c is None:
            c = colours[key] = Color(*key)
        return c

    layer.raster = [Pixel(g, colour(fg), colour(bg)) for g, fg, bg in zip(glyphs, fgs, bgs)]
    return layer


def parse(raw: bytes) -> Image:
    """Build an Image from an inflated payload.

    Raises FormatError when a header is truncated or a layer's declared
    size runs past the end of the buffer.
    """
    buf = bytes(raw)
    if len(buf) < HEADER.size:
        raise FormatError(f'Payload is {len(buf)} bytes, need at least {HEADER.size} for the header')

    version, layer_count = HEADER.unpack_from(buf, 0)
    pos = HEADER.size
    image = Image(version)
    colours: dict[tuple[int, int, int], Color] = {}

    for index in range(layer_count):
        if pos + HEADER.size > len(buf):
            raise FormatError(f'Layer {index}/{layer_count}: header truncated at offset {pos}')
        width, height = HEADER.unpack_from(buf, pos)
        pos += HEADER.size

        count = width * height
        end = pos + count * PIXEL_SIZE
        if end > len(buf):
            raise FormatError(
                f'Layer {index}: {width}x{height} needs {count * PIXEL_SIZE} bytes at offset {pos}, '
                f'only {len(buf) - pos} left'
            )
        if count:
            records = np.frombuffer(buf, dtype=PIXEL_DTYPE, count=count, offset=pos)
            layer = _layer_from_records(records, width, height, colours)
        else:
            layer = Layer(width, height)
        image.layers.append(layer)
        pos = end

    if pos < len(buf):
        logger.warning('Ignoring %d trailing bytes after %d layers', len(buf) - pos, layer_count)
    logger.debug('Parsed version %d, %d layers, %d bytes', version, layer_count, pos)
    return image


# ─── encoding ─────────────────────────────────────────────────────────


def _check_u32(name: str, value: object) -> int:
    if not is_int(value) or not 0 <= value <= U32_MAX:
        raise ValidationError(f'{name} does not fit in a u32: {value!r}')
    return int(value)


def _layer_records(layer: Layer) -> np.ndarray:
    """Pixel records of a layer in wire (column-major) order. Unset cells become TRANSPARENT."""
    width, height = layer.width, layer.height
    records = np.zeros(width * height, dtype=PIXEL_DTYPE)
    if records.size:
        pixels = [p if p is not None else TRANSPARENT for p in layer.raster]
        records['glyph'] = [p.glyph for p in pixels]
        records['fg'] = [p.fg.as_tuple() for p in pixels]
        records['bg'] = [p.bg.as_tuple() for p in pixels]
    return records.reshape(height, width).T.ravel()


def serialize(image: Image) -> bytes:
    """Inflated payload for `image`.

    Raises InternalConsistencyError if the bytes written differ from
    encoded_size(image).
    """
    if not isinstance(image, Image):
        raise ValidationError(f'serialize() needs an Image, got {type(image).__name__}')

    expected = encoded_size(image)
    buf = bytearray(HEADER.pack(_check_u32('version', image.version), _check_u32('layer count', len(image.layers))))
    for index, layer in enumerate(image.layers):
        if not isinstance(layer, Layer):
            raise ValidationError(f'Layer {index} is a {type(layer).__name__}, not a Layer')
        width = _check_u32(f'layer {index} width', layer.width)
        height = _check_u32(f'layer {index} height', layer.height)
        buf += HEADER.pack(width, height)
        buf += _layer_records(layer).tobytes()

    if len(buf) != expected:
        raise InternalConsistencyError(f'Wrote {len(buf)} bytes, expected {expected}')
    return bytes(buf)


# ─── envelope ─────────────────────────────────────────────────────────


def _resolve_transport(transport: str | Transport | None) -> Transport:
    if transport is None:
        transport = get_settings().transport
    if isinstance(transport, Transport):
        return transport
    if isinstance(transport, str):
        return registry.get(transport)
    raise ValidationError(f'transport must be a name or a Transport, got {type(transport).__name__}')


def decode(data: bytes, transport: str | Transport | None = None) -> Image:
    """Decompress `data` and parse it into an Image.

    CompressionError from the transport propagates unchanged.
    """
    t = _resolve_transport(transport)
    raw = t.decompress(bytes(data))
    logger.debug('Decoding %d bytes (%s, %d inflated)', len(data), t.name, len(raw))
    return parse(raw)


def encode(image: Image, transport: str | Transport | None = None, level: int | None = None) -> bytes:
    """Serialize `image` and compress it."""
    t = _resolve_transport(transport)
    if level is None:
        level = get_settings().compression_level
    payload = serialize(image)
    out = t.compress(payload, level)
    logger.debug('Encoded %d layers: %d bytes -> %d bytes (%s)', len(image.layers), len(payload), len(out), t.name)
    return out


def load(path: str | os.PathLike, transport: str | Transport | None = None) -> Image:
    """Read and decode an .xp file."""
    with open(path, 'rb') as f:
        data = f.read()
    return decode(data, transport=transport)


def save(
    image: Image,
    path: str | os.PathLike,
    transport: str | Transport | None = None,
    level: int | None = None,
) -> int:
    """Encode `image` and write it to `path`. Returns the number of bytes written.

    The file is only opened once encoding has succeeded.
    """
    data = encode(image, transport=transport, level=level)
    with open(path, 'wb') as f:
        f.write(data)
    return len(data)
