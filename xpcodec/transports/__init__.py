"""Auto-discovery of transport modules.

Every .py file in this package that defines a `transport` object is
auto-registered by xpcodec.registry.discover().

The explicit imports below ensure PyInstaller includes these modules
in the frozen binary. Without them, pkgutil.iter_modules cannot find
the transport files at runtime.
"""

# PyInstaller hidden imports — keep this list in sync with transport modules
import xpcodec.transports.deflate as _deflate  # noqa: F401
import xpcodec.transports.gzip_stream as _gzip_stream  # noqa: F401
import xpcodec.transports.raw as _raw  # noqa: F401
