from __future__ import annotations

"""Exception taxonomy for restplate.

Template and request construction problems are ``ValueError`` subclasses so
callers that only know about the builtin still catch them.
"""


class RestplateError(Exception):
    """Root of every error raised by restplate."""


class TemplateError(RestplateError, ValueError):
    """A template could not be built or expanded."""


class PatternMismatchError(TemplateError):
    """An expanded value does not fully match the expression's regex."""

    def __init__(self, value: str, pattern: str) -> None:
        super().__init__(f'Value {value} does not match the expression pattern: {pattern}')
        self.value = value
        self.pattern = pattern


class RequestTemplateError(RestplateError, ValueError):
    """A RequestTemplate was used in a state that does not allow the call."""


class TransportError(RestplateError):
    """The HTTP transport failed before a response was produced."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f'request to {url} failed: {cause}')
        self.url = url
        self.cause = cause
