"""Conversion of ANSI-colored command output to HTML."""

import io

from rich.console import Console
from rich.text import Text


def ansi_to_html(raw: str) -> str:
    """Convert ANSI SGR sequences to inline-styled HTML.

    Text content is HTML-escaped, so the result is safe to embed.

    Args:
        raw: Command output possibly containing ANSI escape codes

    Returns:
        HTML fragment (no surrounding document)
    """
    if not raw:
        return ""

    console = Console(file=io.StringIO(), record=True, width=1000, color_system="truecolor")
    console.print(Text.from_ansi(raw), soft_wrap=True, end="")
    return console.export_html(inline_styles=True, code_format="{code}")
