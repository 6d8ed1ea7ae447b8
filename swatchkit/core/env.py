"""Environment and .env configuration for swatchkit.

Load order (first wins):
  1. Existing OS environment variables — never overwrite.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Walking stops at .git so we never load a .env from outside the repo.

Recognised keys:
  SWATCHKIT_COUNT   default palette size (10)
  SWATCHKIT_LABEL   default crop file label ('crop')
"""

import os
from pathlib import Path

DEFAULT_COUNT = 10
DEFAULT_LABEL = 'crop'


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or a file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            # Filesystem root, nothing found
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value and KEY="value"."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export ') :].strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    parsed = _parse_dotenv(path)
    for key, value in parsed.items():
        if key not in os.environ:
            os.environ[key] = value

    return path


def env_int(name: str, default: int) -> int:
    """Read a positive integer setting, raising ValueError on junk."""
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None
    if value < 1:
        raise ValueError(f'{name} must be >= 1, got {value}')
    return value


def default_count() -> int:
    return env_int('SWATCHKIT_COUNT', DEFAULT_COUNT)


def default_label() -> str:
    return os.environ.get('SWATCHKIT_LABEL', '').strip() or DEFAULT_LABEL
