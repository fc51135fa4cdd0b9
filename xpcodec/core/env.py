"""Codec settings from the environment.

Variables:
  XPCODEC_TRANSPORT          transport name (default: gzip)
  XPCODEC_COMPRESSION_LEVEL  0-9 (default: 9)

Load order (first wins):
  1. Existing OS environment variables — never overwrite.
  2. .env file at env_file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Walking stops at .git so we never load a .env from outside the repo.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_TRANSPORT = 'XPCODEC_TRANSPORT'
ENV_LEVEL = 'XPCODEC_COMPRESSION_LEVEL'

DEFAULT_TRANSPORT = 'gzip'
DEFAULT_LEVEL = 9


@dataclass(frozen=True)
class CodecSettings:
    """Defaults used by encode()/decode() when no transport or level is passed."""

    transport: str = DEFAULT_TRANSPORT
    compression_level: int = DEFAULT_LEVEL


_cached: CodecSettings | None = None


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git is a dir in a normal clone, a file in a worktree
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value and KEY="value"."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export ') :].strip()
        if key:
            result[key] = raw_value.strip().strip('"').strip("'")
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            logger.warning('env file not found: %s', env_file)
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        if key not in os.environ:
            os.environ[key] = value

    logger.debug('loaded %s', path)
    return path


def _parse_level(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_LEVEL
    try:
        level = int(raw)
    except ValueError:
        logger.warning('%s=%r is not an integer, using %d', ENV_LEVEL, raw, DEFAULT_LEVEL)
        return DEFAULT_LEVEL
    clamped = min(max(level, 0), 9)
    if clamped != level:
        logger.warning('%s=%d out of range 0-9, using %d', ENV_LEVEL, level, clamped)
    return clamped


def settings_from_environ(environ: dict[str, str] | None = None) -> CodecSettings:
    """Build settings from a mapping (default: os.environ). Does not read .env files."""
    env = os.environ if environ is None else environ
    transport = env.get(ENV_TRANSPORT, '').strip().lower() or DEFAULT_TRANSPORT
    return CodecSettings(transport=transport, compression_level=_parse_level(env.get(ENV_LEVEL)))


def get_settings(reload: bool = False, env_file: str | None = None) -> CodecSettings:
    """Return cached settings, loading .env and the environment on first use."""
    global _cached
    if _cached is None or reload:
        load_env(env_file=env_file)
        _cached = settings_from_environ()
        logger.debug('codec settings: %s', _cached)
    return _cached
