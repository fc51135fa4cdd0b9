"""Pillow previews of layers and images.

Draws each cell's background colour as a `cell` x `cell` block. Glyphs
are not drawn (that needs a code-page font). Transparent and unset cells
get alpha 0, so a merged preview can be composited over anything.
"""

import numpy as np
from PIL import Image

from xpcodec.core.errors import ValidationError
from xpcodec.core.image import Image as XPImage
from xpcodec.core.image import LayerSelection
from xpcodec.core.types import Layer


def layer_to_array(layer: Layer) -> np.ndarray:
    """RGBA uint8 array of shape (height, width, 4) from the layer's backgrounds."""
    arr = np.zeros((layer.height, layer.width, 4), dtype=np.uint8)
    for x, y in layer.coordinates():
        pixel = layer.get(x, y)
        if pixel is None or pixel.transparent:
            continue
        arr[y, x] = (pixel.bg.r, pixel.bg.g, pixel.bg.b, 255)
    return arr


def layer_to_pil(layer: Layer, cell: int = 1) -> Image.Image:
    """Render a layer as an RGBA image, scaled up by `cell` pixels per cell."""
    if cell < 1:
        raise ValidationError(f'cell must be >= 1, got {cell}')
    arr = layer_to_array(layer)
    if cell > 1:
        arr = np.repeat(np.repeat(arr, cell, axis=0), cell, axis=1)
    return Image.fromarray(arr)


def image_to_pil(image: XPImage, selection: LayerSelection = 'all', cell: int = 1) -> Image.Image | None:
    """Merge the selected layers and render the result. None if nothing to merge."""
    merged = image.merge_layers(selection)
    if merged is None:
        return None
    return layer_to_pil(merged, cell=cell)
