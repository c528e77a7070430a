import pytest

from index_generator.config import HeaderMode
from index_generator.header import render_header


@pytest.mark.unit
def test_render_header_disabled_is_empty() -> None:
    assert not render_header("anything", HeaderMode.DISABLED, "\n")


@pytest.mark.unit
def test_render_header_raw_is_unchanged() -> None:
    assert render_header("a\r\nb", HeaderMode.RAW, "\n") == "a\r\nb"


@pytest.mark.unit
def test_render_header_multiline_comment_wraps_every_line() -> None:
    rendered = render_header("first\r\nsecond\nthird", HeaderMode.MULTILINE_COMMENT, "\n")

    assert rendered == "/*\n * first\n * second\n * third\n */"


@pytest.mark.unit
def test_render_header_singleline_comment_uses_configured_newline() -> None:
    rendered = render_header("first\nsecond", HeaderMode.SINGLELINE_COMMENT, "\r\n")

    assert rendered == "// first\r\n// second"
