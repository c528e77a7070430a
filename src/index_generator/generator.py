"""Drive the scanner and the writer according to the configured mode."""

from __future__ import annotations

import posixpath
import re
from pathlib import Path
from typing import TYPE_CHECKING

from index_generator.config import CreateMode, Options
from index_generator.exports import format_exports
from index_generator.logging import logger
from index_generator.paths import resolve_path, to_posix
from index_generator.scanner import FolderScan, Scanner
from index_generator.writer import IndexWriter

if TYPE_CHECKING:
    from collections.abc import Sequence


def self_exclusion(output: str) -> re.Pattern[str]:
    """Build the exclude regex matching a previously generated index file.

    Args:
        output (str): configured output file

    Returns:
        re.Pattern[str]: regex matching ``/<basename of output>`` at the end of a path
    """
    return re.compile(f"/{re.escape(Path(output).name)}$")


def join_relative(folder_name: str, file: str) -> str:
    """Re-prefix a path relative to a subfolder so it is relative to its parent.

    >>> join_relative("util", "./b.ts")
    './util/b.ts'
    """
    return "./" + posixpath.normpath(posixpath.join(folder_name, to_posix(file)))


class IndexGenerator:
    """Generate index files re-exporting the qualifying files of the input paths.

    Args:
        options (Options | None): generation options, defaults for every field
            when omitted

    Attributes:
        options: The effective options. In ``per-folder`` mode an exclude
            matching the output file name is appended, so a previously
            generated index is never taken for a source file.
        written: Index files written by the last `generate` call, in order.
    """

    def __init__(self, options: Options | None = None) -> None:
        options = options or Options()
        if options.mode is CreateMode.PER_FOLDER:
            options = options.model_copy(
                update={"excludes": [*options.excludes, self_exclusion(options.output)]},
            )
        self.options = options
        self.scanner = Scanner(options.includes, options.excludes)
        self.writer = IndexWriter(options)
        self.written: list[Path] = []

    def generate(self) -> list[Path]:
        """Generate every index file required by the configured mode.

        Returns:
            list[Path]: the index files written with content
        """
        self.written = []
        mode = self.options.mode
        files: list[str] = []
        out = resolve_path(self.options.output)

        for path in self.options.paths:
            root = resolve_path(path)
            logger.debug("scan_started", root=str(root), mode=str(mode))

            match mode:
                case CreateMode.ROOT:
                    out = resolve_path(self.options.output, root)
                    self.write(out, self.format(out, self.scanner.collect_files(root), root))
                case CreateMode.PATH:
                    files.extend(self.format(out, self.scanner.collect_files(root), root))
                case CreateMode.PER_FOLDER:
                    self.write_per_folder(self.scanner.scan_tree(root))
                case CreateMode.PER_FOLDER_WITH_SUB:
                    self.write_per_folder_with_sub(self.scanner.scan_tree(root))

        if mode is CreateMode.PATH:
            self.write(out, files)

        return self.written

    def format(self, out: Path, files: Sequence[str], root: Path) -> list[str]:
        return format_exports(self.options.format, out, files, root)

    def write(self, out: Path, exports: Sequence[str]) -> bool:
        written = self.writer.write(out, exports)
        if written:
            self.written.append(out)
        return written

    def write_per_folder(self, scan: FolderScan) -> list[str]:
        """Write the index of a folder and of all its subfolders, children first.

        Each index re-exports every qualifying file of its subtree.

        Args:
            scan (FolderScan): the scanned folder

        Returns:
            list[str]: the files exported by this folder's index, relative to it
        """
        local: list[str] = []
        for entry in scan.entries:
            if isinstance(entry, FolderScan):
                name = entry.folder.name
                local.extend(join_relative(name, f) for f in self.write_per_folder(entry))
            else:
                local.append(f"./{entry}")

        out = resolve_path(self.options.output, scan.folder)
        suffix = f"/{self.options.output}"

        local = [f for f in local if not f.endswith(suffix)]
        self.write(out, self.format(out, [f for f in local if not f.endswith(suffix)], scan.folder))

        return local

    def write_per_folder_with_sub(self, scan: FolderScan) -> bool:
        """Write the index of a folder and of all its subfolders, children first.

        A subfolder is re-exported through its own index, and only when that
        index was written.

        Args:
            scan (FolderScan): the scanned folder

        Returns:
            bool: True if this folder's index was written
        """
        local: list[str] = []
        for entry in scan.entries:
            if isinstance(entry, FolderScan):
                if self.write_per_folder_with_sub(entry):
                    local.append(join_relative(entry.folder.name, self.options.output))
            else:
                local.append(f"./{entry}")

        out = resolve_path(self.options.output, scan.folder)
        return self.write(out, self.format(out, local, scan.folder))
