from __future__ import annotations

import re

from index_generator.config import HeaderMode

_LINE_BREAK = re.compile(r"\r?\n")


def render_header(header: str, mode: HeaderMode, newline: str) -> str:
    """Render the raw header text into the prefix written on top of every index.

    Args:
        header (str): raw header text, lines separated by ``\\n`` or ``\\r\\n``
        mode (HeaderMode): rendering style
        newline (str): line separator of the generated file

    Returns:
        str: the rendered header, empty when the header is disabled
    """
    match mode:
        case HeaderMode.DISABLED:
            return ""
        case HeaderMode.RAW:
            return header
        case HeaderMode.MULTILINE_COMMENT:
            body = newline.join(f" * {line}" for line in _LINE_BREAK.split(header))
            return f"/*{newline}{body}{newline} */"
        case HeaderMode.SINGLELINE_COMMENT:
            return newline.join(f"// {line}" for line in _LINE_BREAK.split(header))
