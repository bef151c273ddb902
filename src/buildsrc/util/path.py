from __future__ import annotations

import os
from pathlib import Path


def canonicalize(value: str | os.PathLike[str]) -> Path:
    """Absolute, lexically normalized form of ``value``.

    Relative paths resolve against the current working directory at call
    time. ``.`` and ``..`` collapse without touching the filesystem, so
    symlinks are kept and missing paths are fine.
    """
    raw = os.fspath(value)
    if not isinstance(raw, str):
        raise TypeError(f"expected a str path, got {type(raw).__name__}")
    if not raw:
        raise ValueError("Path must not be empty")
    if "\x00" in raw:
        raise ValueError(f"Path contains a NUL character: {raw!r}")
    return Path(os.path.abspath(raw))


def expand_user(token: str) -> Path:
    return Path(token).expanduser()
