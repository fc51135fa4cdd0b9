"""xpcodec — read and write REXPaint .xp images.

    import xpcodec

    image = xpcodec.load('sprite.xp')
    flat = image.merge_layers()
    xpcodec.save(image, 'copy.xp')
"""

from xpcodec.core.codec import decode, encode, encoded_size, load, parse, save, serialize
from xpcodec.core.env import CodecSettings, get_settings
from xpcodec.core.errors import (
    CompressionError,
    FormatError,
    InternalConsistencyError,
    ValidationError,
    XPError,
)
from xpcodec.core.image import Image, LayerSelection, resolve_selection
from xpcodec.core.palette import BLACK, MAGENTA, WHITE, Color
from xpcodec.core.transport import Transport
from xpcodec.core.types import TRANSPARENT, Layer, Pixel

__version__ = '0.1.0'

__all__ = [
    'BLACK',
    'MAGENTA',
    'TRANSPARENT',
    'WHITE',
    'CodecSettings',
    'Color',
    'CompressionError',
    'FormatError',
    'Image',
    'InternalConsistencyError',
    'Layer',
    'LayerSelection',
    'Pixel',
    'Transport',
    'ValidationError',
    'XPError',
    'decode',
    'encode',
    'encoded_size',
    'get_settings',
    'load',
    'parse',
    'resolve_selection',
    'save',
    'serialize',
]
