"""log.py - logger and tracer.

one call per message. the message goes to the console, onto the
current span as an event, and to the sink if one is registered.
spans wrap the work so every render is one trace.
"""

import sys
from contextlib import contextmanager
from datetime import datetime

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    SimpleSpanProcessor,
    ConsoleSpanExporter,
)

# ============================================================
# TRACER SETUP
# ============================================================

_provider = TracerProvider()
_tracer = _provider.get_tracer("curlgen", "0.1.0")
_console_export = False


def enable_console_export():
    """turn on span export to stderr."""
    global _console_export
    if not _console_export:
        _provider.add_span_processor(
            SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr))
        )
        _console_export = True


def add_exporter(exporter):
    """add a custom span exporter (OTLP, in-memory, etc)."""
    _provider.add_span_processor(SimpleSpanProcessor(exporter))


# ============================================================
# CONSOLE LOGGER
# ============================================================

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}

_level = LEVELS["info"]
_sink = None


def set_level(level: str):
    """drop console output below this level. unknown names raise KeyError."""
    global _level
    _level = LEVELS[level.lower()]


def get_level() -> str:
    for name, value in LEVELS.items():
        if value == _level:
            return name
    return "info"


def set_sink(fn):
    """register where logs go besides console. fn(subsystem, level, message, attrs).
    pass None to unregister."""
    global _sink
    _sink = fn


def log(subsystem: str, level: str, message: str, **attrs):
    """log to console (if above threshold), record as span event, forward to sink."""
    if LEVELS.get(level, 0) >= _level:
        ts = datetime.now().strftime("%H:%M:%S")
        prefix = f"[{ts} curlgen:{subsystem}]"
        dest = sys.stderr if level in ("warn", "error") else sys.stdout
        print(f"{prefix} {message}", file=dest)

    # span events record everything, threshold or not
    span_ = trace.get_current_span()
    if span_ and span_.is_recording():
        span_.add_event(
            f"curlgen.{subsystem}.{level}",
            attributes={"message": message, "subsystem": subsystem,
                        **{k: str(v) for k, v in attrs.items()}},
        )

    if _sink is not None:
        _sink(subsystem, level, message, attrs if attrs else None)


def debug(subsystem: str, message: str, **attrs):
    log(subsystem, "debug", message, **attrs)


def info(subsystem: str, message: str, **attrs):
    log(subsystem, "info", message, **attrs)


def warn(subsystem: str, message: str, **attrs):
    log(subsystem, "warn", message, **attrs)


def error(subsystem: str, message: str, **attrs):
    log(subsystem, "error", message, **attrs)


# ============================================================
# SPANS
# ============================================================

@contextmanager
def span(name: str, subsystem: str = "curlgen", **attrs):
    """Create a traced span. Everything inside is connected.

    Usage:
        with span("render", subsystem="builder", method="POST"):
            text = assemble()
            # any logs inside here are span events

    Attribute values are stringified and prefixed with ``curlgen.``.
    """
    with _tracer.start_as_current_span(
        f"curlgen.{subsystem}.{name}",
        attributes={f"curlgen.{k}": str(v) for k, v in attrs.items()},
    ) as s:
        s.set_attribute("curlgen.subsystem", subsystem)
        yield s


def configure(config):
    """apply the log_level config key. unknown names fall back to info."""
    name = str(config.get("log_level", "info")).lower()
    set_level(name if name in LEVELS else "info")
