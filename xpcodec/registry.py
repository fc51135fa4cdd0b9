"""Transport auto-discovery and registration.

Scans xpcodec/transports/ for modules that define a `transport` object
of type Transport. Collects them into a dict keyed by name.

Handles both normal Python (pkgutil.iter_modules) and frozen binaries
(where iter_modules returns nothing — falls back to the known list).
"""

import importlib
import logging
import pkgutil

from xpcodec.core.transport import Transport

logger = logging.getLogger(__name__)

_registry: dict[str, Transport] = {}

# Known transport module names — fallback for frozen binaries
_TRANSPORT_MODULES = [
    'deflate',
    'gzip_stream',
    'raw',
]


def discover() -> dict[str, Transport]:
    """Import all transport modules and return the registry."""
    if _registry:
        return _registry

    import xpcodec.transports as pkg

    found_modules = [
        modname for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__) if not modname.startswith('_')
    ]

    if not found_modules:
        found_modules = _TRANSPORT_MODULES

    for modname in found_modules:
        module = importlib.import_module(f'xpcodec.transports.{modname}')
        found = getattr(module, 'transport', None)
        if isinstance(found, Transport):
            _registry[found.name] = found

    logger.debug('Discovered transports: %s', ', '.join(sorted(_registry)))
    return _registry


def get(name: str) -> Transport:
    """Get a transport by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown transport: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_transports() -> dict[str, Transport]:
    """Return all registered transports."""
    return discover()
