from __future__ import annotations

import posixpath
import re
from typing import TYPE_CHECKING

from index_generator.logging import logger
from index_generator.paths import resolve_path

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

_PLACEHOLDER = re.compile(r"\{.*?\}")


def placeholders_for(file: str, root: Path) -> dict[str, str]:
    """Compute the template values of a qualifying file.

    Args:
        file (str): ``./``-prefixed path of the file, relative to ``root``
        root (Path): the directory the file path is relative to

    Returns:
        dict[str, str]: values keyed by their ``{placeholder}`` token
    """
    rel = posixpath.dirname(file)
    ext = posixpath.splitext(file)[1]
    return {
        "{name}": posixpath.basename(file).removesuffix(ext),
        "{ext}": ext,
        "{dir_name}": posixpath.basename(rel),
        "{rel}": rel,
        "{abs}": str(resolve_path(rel, root)),
    }


def render_export(template: str, file: str, root: Path) -> str:
    """Substitute the placeholders of ``template`` for one file.

    Unknown ``{...}`` tokens are left untouched.

    Returns:
        str: the export statement
    """
    values = placeholders_for(file, root)
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(0), m.group(0)), template)


def format_exports(
    template: str,
    out: Path,
    files: Sequence[str],
    root: Path,
) -> list[str]:
    """Map qualifying files to export statements.

    A file resolving to ``out`` itself is skipped, so an index never
    re-exports itself.

    Args:
        template (str): export template
        out (Path): absolute path of the index being generated
        files (Sequence[str]): ``./``-prefixed paths relative to ``root``, in traversal order
        root (Path): the directory the files are relative to

    Returns:
        list[str]: export statements in input order
    """
    result: list[str] = []
    for file in files:
        if resolve_path(file, root) == out:
            logger.debug("file_skipped", file=file, reason="output")
            continue
        result.append(render_export(template, file, root))
    return result
