"""Colour value type and hex helpers.

Colours are 8-bit RGB triples. The format has no alpha channel: a magenta
background (#ff00ff) is the sentinel for "no background".
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Sequence
from dataclasses import dataclass

from xpcodec.core.errors import ValidationError

_HEX_RE = re.compile(r'#?([0-9a-fA-F]{6})')

CHANNELS = ('r', 'g', 'b')


def is_int(value: object) -> bool:
    """True for Python and numpy integers. Bools are not integers here."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _check_channel(name: str, value: object) -> int:
    if not is_int(value):
        raise ValidationError(f'Colour channel {name} must be an integer, got {value!r}')
    value = int(value)
    if not 0 <= value <= 255:
        raise ValidationError(f'Colour channel {name} out of range 0-255: {value}')
    return value


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f'{r:02x}{g:02x}{b:02x}'


def hex_to_rgb(hex_str: str) -> tuple[int, int, int] | None:
    """Parse 'rrggbb' or '#rrggbb' (any case). Returns None if malformed."""
    if not isinstance(hex_str, str):
        return None
    m = _HEX_RE.fullmatch(hex_str.strip())
    if not m:
        return None
    digits = m.group(1)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


@dataclass(frozen=True)
class Color:
    """An immutable RGB colour with channels in 0-255."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in CHANNELS:
            # frozen dataclass: normalise numpy ints to plain int
            object.__setattr__(self, name, _check_channel(name, getattr(self, name)))

    @classmethod
    def from_triple(cls, triple: Sequence[int]) -> Color:
        """Build from an (r, g, b) sequence. Same validation as the constructor."""
        if isinstance(triple, (str, bytes)) or not isinstance(triple, Sequence) or len(triple) != 3:
            raise ValidationError(f'Expected an (r, g, b) triple, got {triple!r}')
        return cls(triple[0], triple[1], triple[2])

    @classmethod
    def from_hex(cls, hex_str: str) -> Color | None:
        """Parse '#rrggbb' / 'rrggbb'. Returns None instead of raising on bad input."""
        rgb = hex_to_rgb(hex_str)
        if rgb is None:
            return None
        return cls(*rgb)

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.r, self.g, self.b)

    def to_hex(self) -> str:
        return self.hex

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def with_channel(self, name: str, value: int) -> Color:
        """Return a copy with one channel replaced."""
        if name not in CHANNELS:
            raise ValidationError(f'Unknown colour channel: {name!r}')
        channels = {c: getattr(self, c) for c in CHANNELS}
        channels[name] = value
        return Color(**channels)

    def __str__(self) -> str:
        return f'#{self.hex}'


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
MAGENTA = Color(255, 0, 255)  # transparent background sentinel
