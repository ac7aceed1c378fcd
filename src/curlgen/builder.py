"""builder.py - describe an HTTP request, get back the PHP cURL code for it.

SnippetBuilder collects a url and method at construction, then an optional
payload, headers, and timeouts in any order. each setter validates on the
spot and leaves state alone if it refuses. render() is a pure read: same
state, same text, as many times as you like.

not thread-safe. setters mutate the instance, so a builder shared between
threads needs the caller's own lock. it reads no files either: without a
config it runs on DEFAULTS. pass load_config() to pick up config files
and CURLGEN_* variables.
"""

import re
import urllib.parse
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from curlgen import formatters, log, payloads
from curlgen.config import Config
from curlgen.errors import (
    IncompatiblePayloadType,
    InvalidHeaders,
    InvalidMethod,
    InvalidUrl,
    SnippetError,
)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_UNSAFE_URL_CHARS = set(' "<>\\^`{|}')


def _escape_quotes(text: str) -> str:
    return text.replace('"', '\\"')


def _check_url(url: Any) -> str:
    """raise InvalidUrl unless url is absolute with a scheme and a host."""
    if not isinstance(url, str) or not url:
        raise InvalidUrl(url, "empty or not a string")
    bad = [c for c in url if c in _UNSAFE_URL_CHARS or ord(c) < 32 or c.isspace()]
    if bad:
        raise InvalidUrl(url, f"illegal character {bad[0]!r}")

    try:
        parts = urllib.parse.urlsplit(url)
    except ValueError:
        raise InvalidUrl(url, "malformed host")
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        raise InvalidUrl(url, "missing scheme")
    if not parts.hostname:
        raise InvalidUrl(url, "missing host")
    try:
        parts.port
    except ValueError:
        raise InvalidUrl(url, "bad port")
    return url


def _check_timeout(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


class SnippetBuilder:
    """turns a declarative request description into a PHP cURL snippet."""

    def __init__(self, url: str, method: str = "GET",
                 config: Optional[Config] = None):
        self._config = config if config is not None else Config()

        normalized = method.upper() if isinstance(method, str) else method
        if not isinstance(normalized, str) or normalized not in payloads.ALLOWED_PAYLOADS:
            log.debug("builder", f"rejected method {method!r}")
            raise InvalidMethod(method)
        try:
            _check_url(url)
        except InvalidUrl as e:
            log.debug("builder", f"rejected url: {e.reason}", url=url)
            raise

        self._url = url
        self._method = normalized
        self._payload_type: Optional[str] = None
        self._payload: Any = ""
        self._headers: dict[str, str] = {}
        self._timeout = 0
        self._connect_timeout = 0

        if normalized == "CUSTOM":
            log.warn("builder", "CUSTOM renders a literal CUSTOM verb and only "
                     "accepts OPTIONAL payloads")
        log.debug("builder", f"{normalized} {url}")

    # ============================================================
    # STATE
    # ============================================================

    @property
    def url(self) -> str:
        return self._url

    @property
    def method(self) -> str:
        return self._method

    @property
    def payload_type(self) -> Optional[str]:
        return self._payload_type

    @property
    def payload(self) -> Any:
        """the encoded payload, as it will appear in the snippet."""
        return self._payload

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def timeout(self) -> tuple[int, int]:
        """(total, connect) in seconds. 0 means omitted."""
        return (self._timeout, self._connect_timeout)

    def _has_payload(self) -> bool:
        return bool(self._payload)

    def __repr__(self) -> str:
        return f"SnippetBuilder({self._url!r}, {self._method!r})"

    # ============================================================
    # SETTERS
    # ============================================================

    def set_payload(self, payload_type: str, content: Any = None) -> "SnippetBuilder":
        """attach a body. the type must be allowed for this method.

        URL-ENCODE takes a mapping and becomes a query string. JSON takes
        anything json.dumps can handle and gets its quotes escaped. NONE
        clears the body. everything else is used as given.
        """
        ptype = payload_type.upper() if isinstance(payload_type, str) else str(payload_type)
        if not payloads.is_allowed(self._method, ptype):
            log.debug("builder", f"rejected {ptype} payload for {self._method}")
            raise IncompatiblePayloadType(ptype, self._method)

        try:
            encoded = payloads.encode(ptype, content)
        except (TypeError, ValueError) as e:
            raise IncompatiblePayloadType(ptype, self._method, str(e)) from e

        self._payload_type = ptype
        self._payload = encoded
        log.debug("builder", f"payload set: {ptype}")
        return self

    def set_headers(self, headers: Mapping) -> "SnippetBuilder":
        """replace all headers. keys must be non-empty strings."""
        if not isinstance(headers, Mapping):
            raise InvalidHeaders(f"got {type(headers).__name__}")
        if not headers:
            raise InvalidHeaders("mapping is empty")
        for key in headers:
            if not isinstance(key, str) or not key:
                raise InvalidHeaders(f"bad header name {key!r}")

        self._headers = {k: str(v) for k, v in headers.items()}
        log.debug("builder", f"{len(self._headers)} headers set")
        return self

    def set_timeout(self, total: Optional[int] = None,
                    connect: Optional[int] = None) -> "SnippetBuilder":
        """total and connect timeouts in seconds. 0 leaves the option out.

        unset values come from config (timeout=30, connect_timeout=10).
        """
        if total is None:
            total = self._config.get("timeout")
        if connect is None:
            connect = self._config.get("connect_timeout")
        total = _check_timeout("total", total)
        connect = _check_timeout("connect", connect)

        self._timeout = total
        self._connect_timeout = connect
        return self

    # ============================================================
    # RENDER
    # ============================================================

    def _target_url(self) -> str:
        if self._method == "GET":
            return f"{self._url}?{self._payload or ''}"
        return self._url

    def _raw(self) -> str:
        """assemble the plain snippet text from current state."""
        option = payloads.METHOD_OPTIONS[self._method]
        parts = ["<?php\n\n"]

        if self._has_payload() and self._method != "GET":
            parts.append(f'$payloads = "{self._payload}";\n\n')

        if self._headers:
            entries = "".join(
                f'"{_escape_quotes(k)}: {_escape_quotes(v)}",\n    '
                for k, v in self._headers.items()
            )
            parts.append(f"$headers = [\n    {entries}];\n\n")

        parts.append("$ch = curl_init();\n")
        parts.append(f'curl_setopt($ch, CURLOPT_URL, "{self._target_url()}");\n')
        parts.append(f"curl_setopt($ch, {option.option}, {option.value});\n")
        if option.body and self._has_payload():
            parts.append("curl_setopt($ch, CURLOPT_POSTFIELDS, $payloads);\n")
        if self._headers:
            parts.append("curl_setopt($ch, CURLOPT_HTTPHEADER, $headers);\n")

        parts.append("curl_setopt($ch, CURLOPT_RETURNTRANSFER, true);\n")
        if self._timeout > 0:
            parts.append(f"curl_setopt($ch, CURLOPT_TIMEOUT, {self._timeout});\n")
        if self._connect_timeout > 0:
            parts.append(
                f"curl_setopt($ch, CURLOPT_CONNECTTIMEOUT, {self._connect_timeout});\n")
        parts.append("$response = curl_exec($ch);\n\n")
        parts.append("if(curl_errno($ch)) {\n")
        parts.append("    die('cURL Error:' . curl_error($ch));\n")
        parts.append("}\n\n")
        parts.append("curl_close($ch);\n\n")
        parts.append("var_dump($response);")
        return "".join(parts)

    def render(self, mode: Optional[int] = None) -> str:
        """render the snippet. mode 0 plain, 1 escaped <pre>, 2 highlighted.

        defaults to the render_mode config key. raises UnknownRenderMode
        before doing any work if the mode has no formatter.
        """
        if mode is None:
            mode = self._config.get("render_mode", 0)
        fmt = formatters.get_formatter(mode)
        with log.span("render", subsystem="builder",
                      method=self._method, mode=mode) as s:
            text = fmt(self._raw(), self._config)
            s.set_attribute("curlgen.length", len(text))
        return text

    # ============================================================
    # SERIALIZATION
    # ============================================================

    def to_dict(self) -> dict:
        """current state as plain data. payload is the encoded form.

        feeding this back to from_request only reproduces the same snippet
        when there is no payload: an encoded JSON or URL-ENCODE body would
        be encoded a second time.
        """
        return {
            "url": self._url,
            "method": self._method,
            "payload": {"type": self._payload_type, "content": self._payload},
            "headers": dict(self._headers),
            "timeout": {"total": self._timeout, "connect": self._connect_timeout},
        }

    @classmethod
    def from_request(cls, data: Mapping,
                     config: Optional[Config] = None) -> "SnippetBuilder":
        """build from {url, method, payload, headers, timeout}.

        every section but url is optional. each one goes through its
        setter, so the same validation applies.
        """
        builder = cls(data.get("url", ""), data.get("method", "GET"), config=config)

        payload = data.get("payload")
        if payload is not None and not isinstance(payload, Mapping):
            raise SnippetError("payload section must be a mapping of type and content")
        if payload and payload.get("type"):
            builder.set_payload(payload["type"], payload.get("content"))

        headers = data.get("headers")
        if headers is not None and headers != {}:
            builder.set_headers(headers)

        timeout = data.get("timeout")
        if timeout is not None and not isinstance(timeout, Mapping):
            raise SnippetError("timeout section must be a mapping of total and connect")
        if timeout is not None:
            builder.set_timeout(timeout.get("total"), timeout.get("connect"))

        return builder

    def write(self, path: str, mode: Optional[int] = None) -> str:
        """render and write to disk. returns the rendered text."""
        text = self.render(mode)
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text)
        log.info("builder", f"wrote snippet to {out}")
        return text
