"""curlgen: describe an HTTP request, get back the PHP cURL code that makes it."""

from curlgen.builder import SnippetBuilder
from curlgen.config import Config, load_config
from curlgen.errors import (
    SnippetError,
    InvalidMethod,
    InvalidUrl,
    IncompatiblePayloadType,
    InvalidHeaders,
    UnknownRenderMode,
)
from curlgen.formatters import register_formatter
from curlgen.payloads import ALLOWED_PAYLOADS, METHODS, PAYLOAD_TYPES

__all__ = [
    "SnippetBuilder",
    "Config", "load_config",
    "SnippetError", "InvalidMethod", "InvalidUrl",
    "IncompatiblePayloadType", "InvalidHeaders", "UnknownRenderMode",
    "register_formatter",
    "ALLOWED_PAYLOADS", "METHODS", "PAYLOAD_TYPES",
]
