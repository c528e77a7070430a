from pathlib import Path

import pytest

from index_generator import cli


def make_project(root: Path) -> Path:
    src = root / "src"
    (src / "util").mkdir(parents=True)
    (src / "a.ts").write_text("export const x = 1;\n", encoding="utf-8")
    (src / "util" / "b.ts").write_text("export function f() {}\n", encoding="utf-8")
    return src


@pytest.mark.integration
def test_main_writes_path_mode_index(tmp_path: Path) -> None:
    src = make_project(tmp_path)

    exit_code = cli.main(
        ["-p", str(src), "-o", str(src / "index.ts"), "--eol", "lf", "--header-mode", "disabled"],
    )

    assert exit_code == 0
    assert (src / "index.ts").read_bytes() == b"export * from './a';\nexport * from './util/b';\n"


@pytest.mark.integration
def test_main_dry_run_prints_without_writing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = make_project(tmp_path)

    exit_code = cli.main(
        ["-p", str(src), "-o", "index.ts", "-m", "per-folder", "-l", "lf", "--dry-run"],
    )

    assert exit_code == 0
    out = capsys.readouterr().out
    assert f"--- {src / 'util' / 'index.ts'}" in out
    assert "export * from './util/b';" in out
    assert not (src / "index.ts").exists()


@pytest.mark.integration
def test_main_check_detects_stale_indexes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = make_project(tmp_path)
    args = ["-p", str(src), "-o", "index.ts", "-m", "per-folder-with-sub", "-l", "lf"]

    assert cli.main(args) == 0
    before = (src / "index.ts").read_bytes()
    assert cli.main([*args, "--check"]) == 0

    (src / "c.ts").write_text("export const c = 3;\n", encoding="utf-8")

    assert cli.main([*args, "--check"]) == 1
    assert f"Out of date: {src / 'index.ts'}" in capsys.readouterr().err
    assert (src / "index.ts").read_bytes() == before


@pytest.mark.integration
def test_main_check_reports_index_to_remove(tmp_path: Path) -> None:
    src = make_project(tmp_path)
    args = ["-p", str(src), "-o", str(src / "index.ts"), "-l", "lf"]
    assert cli.main(args) == 0

    (src / "a.ts").write_text("const x = 1;\n", encoding="utf-8")
    (src / "util" / "b.ts").write_text("// index-generator-ignore\nexport function f() {}\n", encoding="utf-8")

    assert cli.main([*args, "--check"]) == 1
    assert cli.main(args) == 0
    assert not (src / "index.ts").exists()
    assert cli.main([*args, "--check"]) == 0
