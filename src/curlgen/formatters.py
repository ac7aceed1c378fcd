"""formatters.py - cosmetic wrapping for a rendered snippet.

a render mode picks a formatter. the formatter sees the finished raw
text and only decorates it: 0 leaves it alone, 1 escapes it into a
<pre> block, 2 hands it to rich for php syntax highlighting.
new modes plug in with register_formatter().
"""

import html
import io
from typing import Any, Callable

from rich.console import Console
from rich.syntax import Syntax
from rich.terminal_theme import DEFAULT_TERMINAL_THEME

from curlgen.config import Config
from curlgen.errors import UnknownRenderMode

Formatter = Callable[[str, Config], str]

PRE_OPEN = "<pre>"
PRE_CLOSE = "</pre>"

_HIGHLIGHT_FORMAT = (
    '<pre style="font-family:monospace;color:{foreground};'
    'background-color:{background}"><code>{code}</code></pre>'
)


def plain(text: str, config: Config) -> str:
    return text


def escaped(text: str, config: Config) -> str:
    """html-escape (& < > and both quotes) and wrap in <pre>."""
    return PRE_OPEN + html.escape(text, quote=True) + PRE_CLOSE


def highlighted(text: str, config: Config) -> str:
    """php syntax highlighting as inline-styled html, via rich.

    the tokens are styled and escaped one segment at a time, so stripping
    the tags and unescaping gives back the raw text exactly: no line
    padding, no wrapping, tabs kept.
    """
    theme = config.get("highlight_theme", "monokai")
    syntax = Syntax(text, "php", theme=theme, word_wrap=False, tab_size=0)
    styled = syntax.highlight(text)
    # the lexer always ends on a newline
    if styled.plain.endswith("\n") and not text.endswith("\n"):
        styled.right_crop(1)

    console = Console(file=io.StringIO(), force_terminal=True, color_system="truecolor")
    chunks = []
    for segment in styled.render(console):
        escaped_text = html.escape(segment.text, quote=True)
        css = segment.style.get_html_style(DEFAULT_TERMINAL_THEME) if segment.style else ""
        chunks.append(f'<span style="{css}">{escaped_text}</span>' if css else escaped_text)

    return _HIGHLIGHT_FORMAT.format(
        foreground=DEFAULT_TERMINAL_THEME.foreground_color.hex,
        background=DEFAULT_TERMINAL_THEME.background_color.hex,
        code="".join(chunks),
    )


# ============================================================
# REGISTRY
# ============================================================

FORMATTERS: dict[int, Formatter] = {
    0: plain,
    1: escaped,
    2: highlighted,
}


def register_formatter(mode: int, fn: Formatter) -> None:
    """add or replace the formatter for a render mode."""
    FORMATTERS[mode] = fn


def get_formatter(mode: Any) -> Formatter:
    """look up a formatter. raises UnknownRenderMode if none is registered."""
    if not isinstance(mode, int) or isinstance(mode, bool) or mode not in FORMATTERS:
        raise UnknownRenderMode(mode, sorted(FORMATTERS))
    return FORMATTERS[mode]
