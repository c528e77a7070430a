from pathlib import Path

import pytest

from index_generator.paths import resolve_path, to_posix


@pytest.mark.unit
def test_resolve_path_keeps_absolute_paths(tmp_path: Path) -> None:
    assert resolve_path(tmp_path, "/elsewhere") == tmp_path


@pytest.mark.unit
def test_resolve_path_joins_and_normalizes(tmp_path: Path) -> None:
    assert resolve_path("a/../b/./index.ts", tmp_path) == tmp_path / "b" / "index.ts"


@pytest.mark.unit
def test_resolve_path_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert resolve_path("index.ts") == Path.cwd() / "index.ts"


@pytest.mark.unit
def test_to_posix_replaces_backslashes() -> None:
    assert to_posix("util\\deep\\a.ts") == "util/deep/a.ts"
