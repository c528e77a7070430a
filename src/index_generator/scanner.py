from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from index_generator.config import EXPORT_DECLARATION, IGNORE_MARKER
from index_generator.logging import logger
from index_generator.paths import to_posix

if TYPE_CHECKING:
    import re
    from collections.abc import Iterator, Sequence
    from pathlib import Path


@dataclass
class FolderScan:
    """Qualifying content of one folder, as found by `Scanner.scan_tree`.

    Attributes:
        folder: Absolute path of the folder.
        entries: Names of qualifying files and scans of subfolders, in
            listing order.
    """

    folder: Path
    entries: list[str | FolderScan] = field(default_factory=list)


def has_ignore_marker(content: str) -> bool:
    """Check whether a file opts out with an ``// index-generator-ignore`` line."""
    return IGNORE_MARKER.search(content) is not None


def has_export(content: str) -> bool:
    """Heuristically detect an export: a line starting with ``export ``."""
    return EXPORT_DECLARATION.search(content) is not None


class Scanner:
    """Walk directory trees and pick the files worth re-exporting.

    Filters are matched against the path relative to the scan root, with
    forward slashes. Directories are always recursed into and never read.
    """

    def __init__(
        self,
        includes: Sequence[re.Pattern[str]],
        excludes: Sequence[re.Pattern[str]],
    ) -> None:
        self.includes = list(includes)
        self.excludes = list(excludes)

    def matches(self, relative: str) -> bool:
        """Apply the include/exclude regexes to a root-relative path.

        Returns:
            bool: True if an include matches and no exclude does
        """
        if not any(p.search(relative) for p in self.includes):
            return False
        return not any(p.search(relative) for p in self.excludes)

    def qualifies(self, path: Path, relative: str) -> bool:
        """Check whether a file should be re-exported.

        Args:
            path (Path): absolute path of the file
            relative (str): its path relative to the scan root, forward slashes

        Returns:
            bool: True if the path passes the filters and the content has an
                export line and no ignore marker
        """
        if not self.matches(relative):
            return False
        content = path.read_text(encoding="utf-8", errors="replace")
        if has_ignore_marker(content):
            logger.debug("file_skipped", file=relative, reason="ignore_marker")
            return False
        if not has_export(content):
            logger.debug("file_skipped", file=relative, reason="no_export")
            return False
        return True

    def entries(self, folder: Path, relative: str) -> Iterator[tuple[Path, str]]:
        """List a folder in name order.

        Yields:
            Iterator[tuple[Path, str]]: absolute path and root-relative path of each entry
        """
        for path in sorted(folder.iterdir()):
            yield path, to_posix(posixpath.join(relative, path.name))

    def collect_files(
        self,
        folder: Path,
        relative: str = "",
        files: list[str] | None = None,
    ) -> list[str]:
        """Collect qualifying files of a whole tree, depth first.

        Args:
            folder (Path): folder to collect
            relative (str): path of ``folder`` relative to the scan root
            files (list[str] | None): list to append to

        Returns:
            list[str]: ``./``-prefixed paths relative to the scan root
        """
        if files is None:
            files = []
        for path, current in self.entries(folder, relative):
            if path.is_dir():
                self.collect_files(path, current, files)
            elif self.qualifies(path, current):
                files.append(f"./{current}")
        return files

    def scan_tree(self, folder: Path, relative: str = "") -> FolderScan:
        """Classify a tree folder by folder without writing anything.

        Args:
            folder (Path): folder to scan
            relative (str): path of ``folder`` relative to the scan root

        Returns:
            FolderScan: the qualifying files and subfolder scans of ``folder``
        """
        scan = FolderScan(folder=folder)
        for path, current in self.entries(folder, relative):
            if path.is_dir():
                scan.entries.append(self.scan_tree(path, current))
            elif self.qualifies(path, current):
                scan.entries.append(path.name)
        return scan
