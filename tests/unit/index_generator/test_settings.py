import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from index_generator.config import CreateMode, HeaderMode
from index_generator.exceptions import ConfigFileNotFoundError, InvalidConfigError
from index_generator.settings import (
    Settings,
    build_options,
    load_config_file,
    parse_eol,
    positional_paths,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("alias", "expected"),
    [
        ("unix", "\n"),
        ("lf", "\n"),
        ("n", "\n"),
        ("win", "\r\n"),
        ("crlf", "\r\n"),
        ("rn", "\r\n"),
        ("r", "\r"),
        ("<br>", "<br>"),
    ],
)
def test_parse_eol_aliases(alias: str, expected: str) -> None:
    assert parse_eol(alias) == expected


@pytest.mark.unit
def test_load_config_file_accepts_camel_case_json(tmp_path: Path) -> None:
    config = tmp_path / "index-generator.json"
    config.write_text(
        json.dumps({"paths": ["src"], "headerMode": "raw", "createFileOnlyIfNeeded": False}),
        encoding="utf-8",
    )

    assert load_config_file(config) == {
        "paths": ["src"],
        "header_mode": "raw",
        "create_file_only_if_needed": False,
    }


@pytest.mark.unit
def test_load_config_file_reads_yaml(tmp_path: Path) -> None:
    config = tmp_path / "index-generator.yaml"
    config.write_text("mode: per-folder\nexcludes:\n  - '\\.spec\\.ts$'\n", encoding="utf-8")

    assert load_config_file(config) == {"mode": "per-folder", "excludes": [r"\.spec\.ts$"]}


@pytest.mark.unit
def test_load_config_file_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigFileNotFoundError) as exc_info:
        load_config_file(tmp_path / "missing.json")

    assert exc_info.value.path.name == "missing.json"


@pytest.mark.unit
@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_load_config_file_invalid_content(tmp_path: Path, content: str) -> None:
    config = tmp_path / "config.json"
    config.write_text(content, encoding="utf-8")

    with pytest.raises(InvalidConfigError):
        load_config_file(config)


@pytest.mark.unit
def test_positional_paths_last_argument_is_output() -> None:
    assert positional_paths(["a", "b", "out.ts"]) == (["a", "b"], "out.ts")
    assert positional_paths(["only"]) == (["only"], None)
    assert positional_paths([]) == (None, None)


@pytest.mark.unit
def test_build_options_command_line_overrides_config() -> None:
    settings = Settings(mode=CreateMode.PER_FOLDER, eol="\n", if_needed=False)
    config = {"mode": "root", "includes": [r"\.tsx$"], "header_mode": "singleline-comment"}

    options = build_options(settings, config)

    assert options.mode is CreateMode.PER_FOLDER
    assert options.header_mode is HeaderMode.SINGLELINE_COMMENT
    assert [p.pattern for p in options.includes] == [r"\.tsx$"]
    assert options.newline == "\n"
    assert options.create_file_only_if_needed is False


@pytest.mark.unit
def test_build_options_positional_arguments() -> None:
    options = build_options(Settings(args=["lib", "src", "index.ts"]))

    assert options.paths == [Path("lib"), Path("src")]
    assert options.output == "index.ts"


@pytest.mark.unit
def test_build_options_config_paths_win_over_positional() -> None:
    options = build_options(Settings(args=["lib"]), {"paths": ["src"]})

    assert options.paths == [Path("src")]


@pytest.mark.unit
def test_build_options_defaults() -> None:
    options = build_options(Settings())

    assert options.paths == [Path()]
    assert options.output == "index.ts"
    assert options.mode is CreateMode.PATH
    assert options.format == "export * from '{rel}/{name}';"


@pytest.mark.unit
def test_build_options_rejects_unknown_mode() -> None:
    with pytest.raises(ValidationError):
        build_options(Settings(), {"mode": "everywhere"})
