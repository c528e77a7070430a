from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from index_generator.header import render_header
from index_generator.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from index_generator.config import Options


class Persist(Protocol):
    """Output sink used in place of direct filesystem writes.

    Empty ``content`` means that nothing should exist at ``path``.
    """

    def __call__(self, path: Path, content: str) -> None: ...


@dataclass
class MemorySink:
    """Sink keeping generated indexes in memory.

    Attributes:
        files: Rendered content keyed by output path, in write order.
        removed: Paths that were reported empty, in order.
    """

    files: dict[Path, str] = field(default_factory=dict)
    removed: list[Path] = field(default_factory=list)

    def __call__(self, path: Path, content: str) -> None:
        if content:
            self.files[path] = content
            return
        self.files.pop(path, None)
        self.removed.append(path)


class IndexWriter:
    """Assemble and persist index files.

    The header is rendered once when the writer is built and reused for every
    file written through it.
    """

    def __init__(self, options: Options) -> None:
        self.newline = options.newline
        self.newline_at_the_end_of_file = options.newline_at_the_end_of_file
        self.create_file_only_if_needed = options.create_file_only_if_needed
        self.sink: Persist | None = options.write_file
        self.header = render_header(options.header, options.header_mode, options.newline)

    def render(self, exports: Sequence[str]) -> str | None:
        """Build the text of an index file.

        Args:
            exports (Sequence[str]): export statements, in order

        Returns:
            str | None: the file content, or None when there is nothing to
                export and empty files are suppressed
        """
        text = self.header
        if exports:
            if text:
                text += self.newline * 2
            text += self.newline.join(exports)
        elif self.create_file_only_if_needed:
            return None

        if self.newline_at_the_end_of_file:
            text += self.newline
        return text

    def write(self, out: Path, exports: Sequence[str]) -> bool:
        """Write an index file, or remove a stale one when it would be empty.

        Args:
            out (Path): absolute path of the index
            exports (Sequence[str]): export statements, in order

        Returns:
            bool: True if a file was written
        """
        text = self.render(exports)
        if text is None:
            if self.sink is not None:
                self.sink(out, "")
            elif out.exists():
                out.unlink()
                logger.debug("index_removed", path=str(out))
            return False

        if self.sink is not None:
            self.sink(out, text)
        else:
            Path(out).write_text(text, encoding="utf-8", newline="")
        logger.debug("index_written", path=str(out), exports=len(exports))
        return True
