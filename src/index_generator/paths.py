from __future__ import annotations

import os
from pathlib import Path


def resolve_path(value: str | Path, relative_to: str | Path | None = None) -> Path:
    """Make a user supplied path absolute.

    Absolute paths are returned unchanged. Relative ones are joined onto
    ``relative_to`` (the current working directory by default) and normalized,
    so ``.`` and ``..`` segments are collapsed the way a path join does.

    Args:
        value (str | Path): the original path
        relative_to (str | Path | None): the directory ``value`` is relative to

    Returns:
        Path: the absolute path
    """
    path = Path(value)
    if path.is_absolute():
        return path
    base = Path.cwd() if relative_to is None else Path(relative_to)
    return Path(os.path.normpath(base / path))


def to_posix(path: str | Path) -> str:
    """Return ``path`` with forward slash separators."""
    return str(path).replace("\\", "/")
