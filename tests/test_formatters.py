"""Tests for formatters.py - render-mode registry and output wrapping."""

import html
import re

import pytest
from unittest.mock import patch

from curlgen.config import Config
from curlgen.errors import UnknownRenderMode
from curlgen.formatters import (
    FORMATTERS, PRE_CLOSE, PRE_OPEN,
    escaped, get_formatter, highlighted, plain, register_formatter,
)

SAMPLE = '<?php\n\n$ch = curl_init();\ndie(\'cURL Error:\' . "x & y");'


class TestBuiltins:

    def test_plain_unchanged(self):
        assert plain(SAMPLE, Config()) == SAMPLE

    def test_escaped_wraps(self):
        out = escaped(SAMPLE, Config())
        assert out.startswith(PRE_OPEN) and out.endswith(PRE_CLOSE)
        inner = out[len(PRE_OPEN):-len(PRE_CLOSE)]
        assert "&lt;?php" in inner
        assert "&amp;" in inner
        assert "&quot;" in inner
        assert html.unescape(inner) == SAMPLE

    def test_highlighted_is_markup(self):
        out = highlighted(SAMPLE, Config())
        assert out.startswith("<pre")
        assert out.rstrip().endswith("</pre>")
        assert "<span" in out
        assert "curl_init" in out

    def test_highlighted_only_adds_markup(self):
        text = SAMPLE + '\n$payloads = "a\tb";'
        out = highlighted(text, Config())
        inner = re.sub(r"<[^>]+>", "", out)
        assert html.unescape(inner) == text

    def test_highlight_theme_from_config(self):
        a = highlighted(SAMPLE, Config(values={"highlight_theme": "monokai"}))
        b = highlighted(SAMPLE, Config(values={"highlight_theme": "default"}))
        assert a != b


class TestRegistry:

    def test_builtin_modes(self):
        assert get_formatter(0) is plain
        assert get_formatter(1) is escaped
        assert get_formatter(2) is highlighted

    @pytest.mark.parametrize("mode", [3, -1, "1", None, False])
    def test_unknown(self, mode):
        with pytest.raises(UnknownRenderMode) as exc:
            get_formatter(mode)
        assert exc.value.known == (0, 1, 2)

    def test_register(self):
        with patch.dict(FORMATTERS):
            register_formatter(7, lambda text, cfg: f"<<{text}>>")
            assert get_formatter(7)("x", Config()) == "<<x>>"
        assert 7 not in FORMATTERS

    def test_replace_builtin(self):
        with patch.dict(FORMATTERS):
            register_formatter(2, plain)
            assert get_formatter(2) is plain
        assert get_formatter(2) is highlighted
