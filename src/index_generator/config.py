from __future__ import annotations

import os
import re
from collections.abc import Callable  # noqa: TC003
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CreateMode(StrEnum):
    """How many index files are produced and where they are placed.

    - ``ROOT``: one index per input path, placed inside that path.
    - ``PATH``: one shared index holding the exports of every input path.
    - ``PER_FOLDER``: one index per directory, re-exporting the whole subtree.
    - ``PER_FOLDER_WITH_SUB``: one index per directory, re-exporting the
      index files of its subdirectories instead of their members.
    """

    ROOT = "root"
    PATH = "path"
    PER_FOLDER = "per-folder"
    PER_FOLDER_WITH_SUB = "per-folder-with-sub"


class HeaderMode(StrEnum):
    """Rendering style of the header written on top of every index file."""

    DISABLED = "disabled"
    RAW = "raw"
    MULTILINE_COMMENT = "multiline-comment"
    SINGLELINE_COMMENT = "singleline-comment"


IGNORE_MARKER = re.compile(r"^\s*//\s*index-generator-ignore", re.MULTILINE)
"""A line made of a comment holding this token excludes the whole file."""

EXPORT_DECLARATION = re.compile(r"^\s*export ", re.MULTILINE)
"""Crude textual detection of an export statement, not a parser."""

DEFAULT_HEADER = "This file was generated by a tool.\nDo not modify it."
DEFAULT_FORMAT = "export * from '{rel}/{name}';"
DEFAULT_OUTPUT = "index.ts"
DEFAULT_INCLUDES = (r"\.ts$",)


class Options(BaseModel):
    """Fully populated configuration consumed by the generator.

    Field names also accept their camelCase spelling (``headerMode``,
    ``createFileOnlyIfNeeded``...) so existing JSON configuration files load
    unchanged. Regex fields accept plain strings and compile them.

    Attributes:
        paths: Input directories, scanned in order.
        output: Output file name or path; its meaning depends on ``mode``.
        mode: Traversal mode.
        includes: A file must match at least one of these (``re.search``).
        excludes: A file matching any of these is dropped.
        format: Export template with ``{name}``, ``{ext}``, ``{dir_name}``,
            ``{rel}`` and ``{abs}`` placeholders.
        header: Raw header text.
        header_mode: How ``header`` is rendered.
        newline: Line separator used in generated files.
        newline_at_the_end_of_file: Terminate generated files with ``newline``.
        create_file_only_if_needed: Do not write empty index files, remove
            stale ones instead.
        write_file: Optional sink used instead of the filesystem.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    paths: list[Path] = Field(default_factory=lambda: [Path()], description="Input directories.")
    output: str = Field(default=DEFAULT_OUTPUT, description="Output file.")
    mode: CreateMode = Field(default=CreateMode.PATH, description="Traversal mode.")
    includes: list[re.Pattern[str]] = Field(
        default_factory=lambda: [re.compile(p) for p in DEFAULT_INCLUDES],
        description="Include regexes.",
    )
    excludes: list[re.Pattern[str]] = Field(default_factory=list, description="Exclude regexes.")
    format: str = Field(default=DEFAULT_FORMAT, description="Export template.")
    header: str = Field(default=DEFAULT_HEADER, description="Raw header text.")
    header_mode: HeaderMode = Field(default=HeaderMode.MULTILINE_COMMENT, description="Header style.")
    newline: str = Field(default=os.linesep, description="Line separator.")
    newline_at_the_end_of_file: bool = Field(default=True, description="Trailing newline.")
    create_file_only_if_needed: bool = Field(default=True, description="Skip empty index files.")
    write_file: Callable[[Path, str], None] | None = Field(
        default=None,
        exclude=True,
        description="Output sink replacing filesystem writes.",
    )
