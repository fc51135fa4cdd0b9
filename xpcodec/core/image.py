"""Image: an ordered stack of layers, and the layer merge (flatten).

Stacking order is the caller's: merge_layers() paints selected layers in
the order given, later entries over earlier ones. The default 'all'
selection is ascending, so layer 0 is the bottom of the stack.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal, Union

from xpcodec.core.errors import ValidationError
from xpcodec.core.palette import is_int
from xpcodec.core.types import Layer, Pixel

LayerSelection = Union[Literal['all'], int, Sequence[int]]


def resolve_selection(selection: LayerSelection, layer_count: int) -> list[int]:
    """Normalise a merge selection to an ordered list of valid layer indexes.

    'all' -> every index ascending; an int -> [int] if in range, else [];
    a sequence -> its in-range integer entries, order kept, others dropped.
    """

    def valid(index: object) -> bool:
        return is_int(index) and 0 <= index < layer_count

    if isinstance(selection, str):
        if selection != 'all':
            raise ValidationError(f"Unknown layer selection: {selection!r} (expected 'all')")
        return list(range(layer_count))
    if is_int(selection):
        return [int(selection)] if valid(selection) else []
    if isinstance(selection, Sequence):
        return [int(i) for i in selection if valid(i)]
    raise ValidationError(f'Layer selection must be "all", an int or a list of ints, got {selection!r}')


class Image:
    """A versioned stack of layers.

    `version` is carried through encode/decode untouched.
    """

    def __init__(self, version: int = 0):
        if not is_int(version) or version < 0:
            raise ValidationError(f'Image version must be a non-negative integer, got {version!r}')
        self.version = int(version)
        self.layers: list[Layer] = []

    @property
    def width(self) -> int | None:
        return self.layers[0].width if self.layers else None

    @property
    def height(self) -> int | None:
        return self.layers[0].height if self.layers else None

    def add_layer(self, width: int | None = None, height: int | None = None) -> Layer:
        """Append a new empty layer. Size defaults to the image's current size."""
        if width is None:
            width = self.width
        if height is None:
            height = self.height
        if width is None or height is None:
            raise ValidationError('add_layer() needs a size when the image has no layers')
        layer = Layer(width, height)
        self.layers.append(layer)
        return layer

    def append_layer(self, layer: Layer) -> None:
        if not isinstance(layer, Layer):
            raise ValidationError(f'append_layer() needs a Layer, got {type(layer).__name__}')
        self.layers.append(layer)

    def _layer(self, index: object) -> Layer | None:
        if is_int(index) and 0 <= index < len(self.layers):
            return self.layers[index]
        return None

    def get(self, layer_index: int, x: int, y: int) -> Pixel | None:
        layer = self._layer(layer_index)
        if layer is None:
            return None
        return layer.get(x, y)

    def set(self, layer_index: int, x: int, y: int, pixel: Pixel) -> bool:
        layer = self._layer(layer_index)
        if layer is None:
            return False
        return layer.set(x, y, pixel)

    def merge_layers(self, selection: LayerSelection = 'all') -> Layer | None:
        """Flatten the selected layers into a new Layer.

        Layers are painted in selection order. A source pixel is written
        when the target cell is still unset or the pixel is opaque, so
        transparent pixels only fill gaps and never cover earlier paint.
        Unset source cells are skipped.

        Returns None when there is nothing to merge. Raises ValidationError
        if a selected layer's size differs from the image's.
        """
        indexes = resolve_selection(selection, len(self.layers))
        if not indexes:
            return None

        width, height = self.width, self.height
        for i in indexes:
            if self.layers[i].size != (width, height):
                raise ValidationError(
                    f'Layer {i} is {self.layers[i].width}x{self.layers[i].height}, '
                    f'cannot merge into a {width}x{height} image'
                )

        result = Layer(width, height)
        target = result.raster
        for i in indexes:
            for slot, pixel in enumerate(self.layers[i].raster):
                if pixel is None:
                    continue
                if target[slot] is None or not pixel.transparent:
                    target[slot] = pixel.clone()
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return self.version == other.version and self.layers == other.layers

    def __repr__(self) -> str:
        return f'Image(version={self.version}, layers={len(self.layers)}, size={self.width}x{self.height})'
