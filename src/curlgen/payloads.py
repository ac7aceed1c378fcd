"""payloads.py - which bodies each method takes, and how they're encoded.

two static tables drive everything: the payload types a method accepts,
and the option line a method renders with. encoders turn raw content
into the text that lands inside the snippet's string literal.
"""

import json
import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable


# ============================================================
# COMPATIBILITY
# ============================================================

_BODY_TYPES = ("NONE", "URL-ENCODE", "JSON", "XML", "TEXT", "BINARY",
               "CUSTOM", "GRAPHQL", "YAML", "HTML")

ALLOWED_PAYLOADS: dict[str, frozenset[str]] = {
    "GET": frozenset({"NONE", "URL-ENCODE"}),
    "POST": frozenset(_BODY_TYPES + ("MULTIPART",)),
    "PUT": frozenset(_BODY_TYPES),
    "DELETE": frozenset(_BODY_TYPES),
    "HEAD": frozenset({"NONE"}),
    "OPTIONS": frozenset({"NONE", "XML", "JSON"}),
    "PATCH": frozenset({"NONE", "URL-ENCODE", "JSON", "YAML"}),
    # suspect: a placeholder verb paired with a placeholder type.
    # kept literal so existing callers see the same behavior.
    "CUSTOM": frozenset({"OPTIONAL"}),
    # rendered, but takes no payload of any kind
    "TRACE": frozenset(),
}

METHODS = tuple(ALLOWED_PAYLOADS)

PAYLOAD_TYPES = tuple(sorted(set().union(*ALLOWED_PAYLOADS.values())))


def allowed_types(method: str) -> frozenset[str]:
    """payload types the method accepts. empty set for unknown methods."""
    return ALLOWED_PAYLOADS.get(method.upper(), frozenset())


def is_allowed(method: str, payload_type: str) -> bool:
    return payload_type.upper() in allowed_types(method)


# ============================================================
# METHOD DISPATCH
# ============================================================

@dataclass(frozen=True)
class MethodOption:
    """the curl option a method renders with, and whether it sends a body."""
    option: str
    value: str
    body: bool


def _custom(verb: str, body: bool = True) -> MethodOption:
    return MethodOption("CURLOPT_CUSTOMREQUEST", f'"{verb}"', body)


METHOD_OPTIONS: dict[str, MethodOption] = {
    "GET": MethodOption("CURLOPT_HTTPGET", "true", False),
    "POST": MethodOption("CURLOPT_POST", "true", True),
    "PUT": _custom("PUT"),
    "DELETE": _custom("DELETE"),
    "PATCH": _custom("PATCH"),
    "OPTIONS": _custom("OPTIONS"),
    "CUSTOM": _custom("CUSTOM"),
    "HEAD": MethodOption("CURLOPT_NOBODY", "true", False),
    "TRACE": _custom("TRACE", body=False),
}


# ============================================================
# ENCODERS
# ============================================================

def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _flatten(key: str, value: Any) -> list[tuple[str, str]]:
    """nested mappings become key[sub], sequences become key[0], key[1]..."""
    if value is None:
        return []
    if isinstance(value, Mapping):
        children = value.items()
    elif isinstance(value, (list, tuple)):
        children = enumerate(value)
    else:
        return [(key, _form_value(value))]
    pairs = []
    for sub, child in children:
        pairs.extend(_flatten(f"{key}[{sub}]", child))
    return pairs


def encode_urlencoded(content: Any) -> str:
    """mapping -> key=value&key2=value2, form-encoded (spaces become +).

    nested values use bracket keys the way PHP forms do: {"a": {"b": 1}}
    is a[b]=1 and {"t": ["x", "y"]} is t[0]=x&t[1]=y, brackets
    percent-encoded. None values are skipped. a list of (key, value)
    pairs is taken as-is, so keys may repeat.
    raises TypeError if content isn't a mapping or sequence of pairs.
    """
    if isinstance(content, Mapping):
        items = list(content.items())
    elif isinstance(content, (list, tuple)) and all(
            isinstance(p, (list, tuple)) and len(p) == 2 for p in content):
        items = [tuple(p) for p in content]
    else:
        raise TypeError(f"expected a mapping, got {type(content).__name__}")

    pairs = []
    for key, value in items:
        pairs.extend(_flatten(str(key), value))
    return urllib.parse.urlencode(pairs)


def encode_json(content: Any) -> str:
    """compact json with every double quote backslash-escaped.

    the result sits inside a double-quoted string literal, so {"a":1}
    comes out as {\\"a\\":1}.
    """
    text = json.dumps(content, separators=(",", ":"))
    return text.replace('"', '\\"')


def encode_none(content: Any) -> str:
    return ""


def passthrough(content: Any) -> str:
    """caller hands in pre-formatted text. str is left alone, bytes are
    decoded as utf-8, None is empty. anything else raises TypeError."""
    if content is None:
        return ""
    if isinstance(content, (bytes, bytearray)):
        return bytes(content).decode("utf-8")
    if not isinstance(content, str):
        raise TypeError(f"expected pre-formatted text, got {type(content).__name__}")
    return content


ENCODERS: dict[str, Callable[[Any], Any]] = {
    "URL-ENCODE": encode_urlencoded,
    "JSON": encode_json,
    "NONE": encode_none,
}


def encode(payload_type: str, content: Any) -> Any:
    """encode content for the given (already upper-cased) payload type.

    raises TypeError or ValueError when the content can't be encoded.
    """
    encoder = ENCODERS.get(payload_type, passthrough)
    return encoder(content)
