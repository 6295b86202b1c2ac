from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


# Resolve installation dir (slither package directory)
_SLITHER_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE = _SLITHER_DIR / 'prelude' / 'std.slr'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_load_roots() -> List[Path]:
    """Directories searched by `load` when a path does not exist as given."""
    return paths_from_env('SLITHER_PATH', [])


def get_prelude_path() -> Path:
    return paths_from_env('SLITHER_PRELUDE', [_DEFAULT_PRELUDE])[0]


def resolve_source(name: str) -> Path:
    """Map a `load` argument to a file, trying the name first, then SLITHER_PATH.

    Returns the name unchanged when nothing matches so the caller reports the
    original path in its error.
    """
    p = Path(name)
    if p.is_file() or p.is_absolute():
        return p
    for root in get_load_roots():
        candidate = root / p
        if candidate.is_file():
            return candidate
    return p
