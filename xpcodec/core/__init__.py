"""xpcodec.core — Foundation layer.

Contains the colour value type, the pixel/layer/image model, the wire
codec, settings loading and the Pillow preview renderer.
This module has NO dependencies on xpcodec.transports beyond the registry.
Only stdlib, numpy, and PIL are allowed here.
"""
