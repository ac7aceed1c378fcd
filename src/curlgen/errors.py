"""errors.py - what can go wrong while describing a request.

every failure is raised by the call that caused it. nothing is
deferred to render time, and a failed setter changes nothing.
"""


class SnippetError(ValueError):
    """base for all builder validation failures."""


class InvalidMethod(SnippetError):
    """method is not one of the known HTTP verbs."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"invalid method provided: {method!r}")


class InvalidUrl(SnippetError):
    """url is not an absolute url with a scheme and a host."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"invalid url provided: {url!r}{detail}")


class IncompatiblePayloadType(SnippetError):
    """payload type is not allowed for the configured method."""

    def __init__(self, payload_type: str, method: str, reason: str = ""):
        self.payload_type = payload_type
        self.method = method
        msg = f"it is not possible to use {payload_type} payload in {method} method"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class InvalidHeaders(SnippetError):
    """headers are not a keyed mapping of name -> value."""

    def __init__(self, reason: str = ""):
        msg = "headers must be a non-empty mapping of header name to value"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class UnknownRenderMode(SnippetError):
    """render was asked for a mode no formatter handles."""

    def __init__(self, mode, known=()):
        self.mode = mode
        self.known = tuple(known)
        avail = ", ".join(str(m) for m in self.known)
        suffix = f". available: {avail}" if avail else ""
        super().__init__(f"unknown render mode: {mode!r}{suffix}")
