"""Exception taxonomy for xpcodec.

Boundary misses (bad coordinates, bad layer indexes) are not errors:
Layer/Image report them with None / False so callers can probe extents.
"""


class XPError(Exception):
    """Base class for every error raised by xpcodec."""


class ValidationError(XPError, ValueError):
    """Malformed constructor input: channel out of range, bad glyph, wrong type."""


class FormatError(XPError, ValueError):
    """A decompressed stream whose declared structure does not fit the buffer."""


class CompressionError(XPError):
    """The transport failed to inflate or deflate a buffer."""


class InternalConsistencyError(XPError, RuntimeError):
    """Encoder wrote a different number of bytes than it computed up front."""
