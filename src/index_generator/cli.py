"""Command line entry point of ``index-generator``.

Generate barrel/index files re-exporting the source files of one or more
directories. Common examples:

    - One index for the whole ``src`` tree:
        index-generator -p src -o src/index.ts

    - One index per folder, each re-exporting its subfolders' indexes:
        index-generator -p src -o index.ts -m per-folder-with-sub

    - Options from a JSON or YAML file, overridden on the command line:
        index-generator -c index-generator.json --eol lf

    - Fail when the committed indexes are stale (CI):
        index-generator -c index-generator.json --check
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from pydantic import ValidationError

from index_generator import __version__
from index_generator.config import CreateMode, HeaderMode
from index_generator.exceptions import ConfigFileNotFoundError, InvalidConfigError
from index_generator.generator import IndexGenerator
from index_generator.logging import logger, setup_logging
from index_generator.settings import Settings, build_options, load_config_file, parse_eol
from index_generator.writer import MemorySink

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from index_generator.config import Options


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser.

    Returns:
        argparse.ArgumentParser: Configured parser.
    """
    p = argparse.ArgumentParser(
        prog="index-generator",
        description="Generate index files re-exporting the source files of a directory tree.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-c", "--config", type=str, default=None, help="JSON or YAML configuration file.")
    p.add_argument(
        "-p",
        "--path",
        action="append",
        default=None,
        help="Input directory (repeatable).",
    )
    p.add_argument("-o", "--out", type=str, default=None, help="Output file.")
    p.add_argument(
        "args",
        nargs="*",
        metavar="PATH",
        help="Input directories followed by the output file, when --path/--out are not given.",
    )
    p.add_argument(
        "-m",
        "--mode",
        type=str,
        choices=[m.value for m in CreateMode],
        default=None,
        help="Traversal mode.",
    )
    p.add_argument(
        "-i",
        "--include",
        action="append",
        default=None,
        help="Include regex (repeatable).",
    )
    p.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=None,
        help="Exclude regex (repeatable).",
    )
    p.add_argument(
        "-l",
        "--eol",
        type=parse_eol,
        default=None,
        help="Line separator: os, unix/lf/n, win/crlf/rn, r or a literal value.",
    )
    p.add_argument(
        "--eol-at-eof",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="End generated files with a newline.",
    )
    p.add_argument("-H", "--header", type=str, default=None, help="Header text.")
    p.add_argument(
        "--header-mode",
        type=str,
        choices=[m.value for m in HeaderMode],
        default=None,
        help="Header style.",
    )
    p.add_argument(
        "-n",
        "--if-needed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Do not write empty index files, remove stale ones.",
    )
    p.add_argument("-f", "--format", type=str, default=None, help="Export template.")

    run = p.add_mutually_exclusive_group()
    run.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the index files instead of writing them.",
    )
    run.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if an index file is missing or out of date.",
    )
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log skipped files and written indexes.")
    return p


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Parse CLI arguments into settings.

    Args:
        argv (Sequence[str] | None): Optional CLI args.

    Returns:
        Settings: Parsed settings.
    """
    args = build_parser().parse_args(argv)
    return Settings.model_validate(vars(args))


def read_current(path: Path) -> str | None:
    """Read an existing index without newline translation."""
    if not path.is_file():
        return None
    return path.read_bytes().decode("utf-8")


def find_drift(sink: MemorySink) -> list[Path]:
    """Compare the rendered indexes with the files on disk.

    Args:
        sink (MemorySink): sink filled by a generation run

    Returns:
        list[Path]: index files that are missing, different or should be removed
    """
    drift = [path for path, content in sink.files.items() if read_current(path) != content]
    drift.extend(path for path in sink.removed if path not in sink.files and path.is_file())
    return drift


def print_dry_run(sink: MemorySink) -> None:
    for path, content in sink.files.items():
        sys.stdout.write(f"--- {path}\n{content}")
        if not content.endswith(("\n", "\r")):
            sys.stdout.write("\n")
    for path in sink.removed:
        if path not in sink.files and path.is_file():
            sys.stdout.write(f"--- {path} (removed)\n")


def run(options: Options, settings: Settings) -> int:
    """Generate the index files and report.

    Args:
        options (Options): generation options
        settings (Settings): command line settings selecting dry run or check

    Returns:
        int: Process exit code.
    """
    if not (settings.dry_run or settings.check):
        written = IndexGenerator(options).generate()
        logger.info("generation_finished", mode=str(options.mode), written=len(written))
        for path in written:
            print(f"Wrote {path}")
        return 0

    sink = MemorySink()
    IndexGenerator(options.model_copy(update={"write_file": sink})).generate()

    if settings.dry_run:
        print_dry_run(sink)
        return 0

    drift = find_drift(sink)
    for path in drift:
        sys.stderr.write(f"Out of date: {path}\n")
    logger.info("check_finished", mode=str(options.mode), stale=len(drift))
    return 1 if drift else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Generate index files from command line arguments.

    Args:
        argv (Sequence[str] | None): Optional CLI arguments.

    Returns:
        int: Process exit code.
    """
    settings = parse_args(argv)
    if settings.log_file or settings.verbose:
        setup_logging(settings.log_file or None, verbose=settings.verbose, force=True)

    config = {}
    if settings.config:
        try:
            config = load_config_file(settings.config)
        except ConfigFileNotFoundError as e:
            logger.warning("config_not_found", path=str(e.path))
            sys.stderr.write(f"WARNING: Configuration file '{e.path}' is not found.\n")
        except InvalidConfigError as e:
            sys.stderr.write(f"ERROR: {e}\n")
            return 2

    try:
        options = build_options(settings, config)
    except ValidationError as e:
        sys.stderr.write(f"ERROR: invalid options: {e}\n")
        return 2

    return run(options, settings)


if __name__ == "__main__":
    raise SystemExit(main())
