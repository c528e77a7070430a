from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_snake

from index_generator.config import CreateMode, HeaderMode, Options
from index_generator.exceptions import ConfigFileNotFoundError, InvalidConfigError

EOL_ALIASES: dict[str, str] = {
    "os": os.linesep,
    "unix": "\n",
    "lf": "\n",
    "n": "\n",
    "win": "\r\n",
    "crlf": "\r\n",
    "rn": "\r\n",
    "r": "\r",
}

YAML_SUFFIXES = {".yaml", ".yml"}


class Settings(BaseModel):
    """Command line values. ``None`` means the flag was not given."""

    model_config = ConfigDict(frozen=True)

    config: Path | None = Field(default=None, description="Configuration file.")
    path: list[str] | None = Field(default=None, description="Input directories.")
    out: str | None = Field(default=None, description="Output file.")
    args: list[str] = Field(default_factory=list, description="Positional paths, then output.")
    mode: CreateMode | None = Field(default=None, description="Traversal mode.")
    include: list[str] | None = Field(default=None, description="Include regexes.")
    exclude: list[str] | None = Field(default=None, description="Exclude regexes.")
    eol: str | None = Field(default=None, description="Line separator.")
    eol_at_eof: bool | None = Field(default=None, description="Trailing newline.")
    header: str | None = Field(default=None, description="Header text.")
    header_mode: HeaderMode | None = Field(default=None, description="Header style.")
    if_needed: bool | None = Field(default=None, description="Skip empty index files.")
    format: str | None = Field(default=None, description="Export template.")

    dry_run: bool = Field(default=False, description="Print indexes instead of writing them.")
    check: bool = Field(default=False, description="Fail if indexes are out of date.")
    log_file: str = Field(default="", description="Log file path.")
    verbose: bool = Field(default=False, description="Log debug events.")


def parse_eol(value: str | None) -> str:
    """Translate an end-of-line alias into the separator itself.

    ``os`` (or no value) is the platform separator, ``unix``/``lf``/``n`` is
    ``\\n``, ``win``/``crlf``/``rn`` is ``\\r\\n`` and ``r`` is ``\\r``. Any
    other value is used literally.

    Returns:
        str: the line separator
    """
    if value is None:
        return os.linesep
    return EOL_ALIASES.get(value, value)


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load a JSON or YAML configuration file.

    Keys may use the camelCase names of the JSON format (``headerMode``) or the
    snake_case names of `Options`; they are returned in snake_case.

    Args:
        path (str | Path): the file, relative to the current directory or absolute

    Raises:
        ConfigFileNotFoundError: if the file does not exist
        InvalidConfigError: if the file cannot be parsed or is not a mapping

    Returns:
        dict[str, Any]: option values keyed by `Options` field name
    """
    config_path = Path(path).resolve()
    if not config_path.is_file():
        raise ConfigFileNotFoundError(path=config_path)

    text = config_path.read_text(encoding="utf-8")
    try:
        if config_path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidConfigError(path=config_path, reason=str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigError(path=config_path, reason="expected a mapping of options")
    return {to_snake(str(k)): v for k, v in data.items()}


def positional_paths(args: list[str]) -> tuple[list[str] | None, str | None]:
    """Split positional arguments into input paths and output.

    All arguments but the last are paths and the last one is the output; a
    single argument is a path.

    Returns:
        tuple[list[str] | None, str | None]: the paths and the output, None when absent
    """
    if not args:
        return None, None
    if len(args) == 1:
        return list(args), None
    return list(args[:-1]), args[-1]


def build_options(settings: Settings, config: dict[str, Any] | None = None) -> Options:
    """Merge command line values over configuration file values.

    Precedence is command line flag, then configuration file, then
    positional arguments (for paths and output), then `Options` defaults.

    Args:
        settings (Settings): parsed command line
        config (dict[str, Any] | None): values from `load_config_file`

    Returns:
        Options: the fully populated options
    """
    values: dict[str, Any] = dict(config or {})

    overrides: dict[str, Any] = {
        "paths": settings.path,
        "output": settings.out,
        "mode": settings.mode,
        "includes": settings.include,
        "excludes": settings.exclude,
        "newline": settings.eol,
        "newline_at_the_end_of_file": settings.eol_at_eof,
        "header": settings.header,
        "header_mode": settings.header_mode,
        "create_file_only_if_needed": settings.if_needed,
        "format": settings.format,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    paths, output = positional_paths(settings.args)
    if "paths" not in values and paths is not None:
        values["paths"] = paths
    if "output" not in values and output is not None:
        values["output"] = output

    return Options.model_validate(values)
