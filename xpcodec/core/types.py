"""Pixel and Layer: the cells and grids of an .xp image."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from xpcodec.core.errors import ValidationError
from xpcodec.core.palette import BLACK, MAGENTA, Color, is_int

GLYPH_MAX = 0xFFFFFFFF  # glyph field is a u32 on the wire
SPACE = 32


def _check_glyph(glyph: object) -> int:
    if not is_int(glyph):
        raise ValidationError(f'Glyph must be an integer, got {glyph!r}')
    glyph = int(glyph)
    if not 0 <= glyph <= GLYPH_MAX:
        raise ValidationError(f'Glyph out of range 0-{GLYPH_MAX}: {glyph}')
    return glyph


def _check_colour(name: str, colour: object) -> Color:
    if not isinstance(colour, Color):
        raise ValidationError(f'{name} must be a Color, got {type(colour).__name__}')
    return colour


def _coerce_colour(name: str, value: object) -> Color:
    """Accept a Color, a hex string or an (r, g, b) triple."""
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        colour = Color.from_hex(value)
        if colour is None:
            raise ValidationError(f'{name} is not a valid hex colour: {value!r}')
        return colour
    return Color.from_triple(value)


class Pixel:
    """One cell: a glyph code drawn in `fg` over `bg`.

    `transparent` is derived from `bg` on every read; a magenta background
    means the cell lets lower layers show through when merging.
    """

    __slots__ = ('_glyph', '_fg', '_bg')

    def __init__(self, glyph: int, fg: Color, bg: Color):
        self._glyph = _check_glyph(glyph)
        self._fg = _check_colour('fg', fg)
        self._bg = _check_colour('bg', bg)

    @classmethod
    def from_list(cls, values: Sequence) -> Pixel:
        """Build from [glyph, fg, bg] where colours may be hex strings, triples or Colors.

            Pixel.from_list([72, 'a0ffa0', '202020'])
        """
        if len(values) != 3:
            raise ValidationError(f'Expected [glyph, fg, bg], got {values!r}')
        glyph, fg, bg = values
        return cls(glyph, _coerce_colour('fg', fg), _coerce_colour('bg', bg))

    @property
    def glyph(self) -> int:
        return self._glyph

    @glyph.setter
    def glyph(self, value: int) -> None:
        self._glyph = _check_glyph(value)

    @property
    def fg(self) -> Color:
        return self._fg

    @fg.setter
    def fg(self, value: Color) -> None:
        self._fg = _check_colour('fg', value)

    @property
    def bg(self) -> Color:
        return self._bg

    @bg.setter
    def bg(self, value: Color) -> None:
        self._bg = _check_colour('bg', value)

    @property
    def transparent(self) -> bool:
        return self._bg == MAGENTA

    def clone(self) -> Pixel:
        # Colours are immutable, sharing them is safe
        return Pixel(self._glyph, self._fg, self._bg)

    __copy__ = clone

    def __deepcopy__(self, memo: dict) -> Pixel:
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pixel):
            return NotImplemented
        return self._glyph == other._glyph and self._fg == other._fg and self._bg == other._bg

    def __repr__(self) -> str:
        return f'Pixel(glyph={self._glyph}, fg={self._fg}, bg={self._bg})'


TRANSPARENT = Pixel(SPACE, BLACK, MAGENTA)


class Layer:
    """A fixed-size grid of pixel slots, addressed as x + width * y.

    Slots start unset (None). Out-of-range access is not an error:
    get() returns None and set() returns False.
    """

    def __init__(self, width: int, height: int):
        for name, value in (('width', width), ('height', height)):
            if not is_int(value) or value < 0:
                raise ValidationError(f'Layer {name} must be a non-negative integer, got {value!r}')
        self._width = int(width)
        self._height = int(height)
        self.raster: list[Pixel | None] = [None] * (self._width * self._height)

    @classmethod
    def from_layer(cls, layer: object) -> Layer | None:
        """Deep copy of `layer`, or None if it is not a Layer."""
        if not isinstance(layer, Layer):
            return None
        return layer.clone()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def verify_coordinates(self, x: object, y: object) -> bool:
        return is_int(x) and is_int(y) and 0 <= x < self._width and 0 <= y < self._height

    def get(self, x: int, y: int) -> Pixel | None:
        if not self.verify_coordinates(x, y):
            return None
        return self.raster[x + self._width * y]

    def set(self, x: int, y: int, pixel: Pixel) -> bool:
        """Store a copy of `pixel` at (x, y). Returns False and changes nothing on bad input."""
        if not self.verify_coordinates(x, y) or not isinstance(pixel, Pixel):
            return False
        self.raster[x + self._width * y] = pixel.clone()
        return True

    def fill(self, pixel: Pixel = TRANSPARENT) -> None:
        if not isinstance(pixel, Pixel):
            raise ValidationError(f'fill() needs a Pixel, got {type(pixel).__name__}')
        self.raster = [pixel.clone() for _ in range(self._width * self._height)]

    def coordinates(self) -> Iterator[tuple[int, int]]:
        """Yield every (x, y) in raster order."""
        for y in range(self._height):
            for x in range(self._width):
                yield x, y

    def is_complete(self) -> bool:
        return all(p is not None for p in self.raster)

    def clone(self) -> Layer:
        copy = Layer(self._width, self._height)
        copy.raster = [p.clone() if p is not None else None for p in self.raster]
        return copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Layer):
            return NotImplemented
        return self.size == other.size and self.raster == other.raster

    def __repr__(self) -> str:
        filled = sum(1 for p in self.raster if p is not None)
        return f'Layer({self._width}x{self._height}, {filled} set)'
