"""Data models for route sources.

Immutable frozen dataclasses attached to compiled patterns as their
source identity.  Built once at app startup during discovery.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from warren._internal.types import Handler, Preload
from warren.errors import InvalidRouteName

# Method-named exports recognised on a route module, and the HTTP method
# each answers.  ``del`` is a Python keyword, so ``delete`` is accepted
# as a synonym; a module can still export ``del`` via ``globals()``.
METHOD_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "get": "GET",
        "post": "POST",
        "put": "PUT",
        "patch": "PATCH",
        "head": "HEAD",
        "del": "DELETE",
        "delete": "DELETE",
    }
)


@dataclass(frozen=True, slots=True)
class PageSource:
    """What a page pattern renders.

    Attributes:
        template: Template name for the renderer (the page file path
            relative to the routes directory, e.g. ``blog/[slug].html``).
        preload: Optional data step run before rendering.
        module: Filesystem path of the script that supplied ``preload``.
    """

    template: str
    preload: Preload | None = None
    module: str | None = None


@dataclass(frozen=True, slots=True)
class ServerHandlerSet:
    """HTTP method -> handler for one server route module.

    Attributes:
        handlers: Upper-case HTTP method -> handler callable.
        module: Filesystem path of the defining module.
    """

    handlers: Mapping[str, Handler] = field(default_factory=dict)
    module: str = ""

    @classmethod
    def from_module(cls, module: object, *, path: str = "") -> "ServerHandlerSet":
        """Collect method-named callables exported by *module*.

        Raises:
            InvalidRouteName: If two exports alias the same method
                (``del`` and ``delete``).
        """
        handlers: dict[str, Handler] = {}
        origin: dict[str, str] = {}
        for token, method in METHOD_TOKENS.items():
            func = getattr(module, token, None)
            if func is None or not callable(func):
                continue
            if method in handlers:
                msg = f"Route module {path} exports both {origin[method]!r} and {token!r} for {method}"
                raise InvalidRouteName(msg)
            handlers[method] = func
            origin[method] = token
        return cls(handlers=MappingProxyType(handlers), module=path)

    @property
    def methods(self) -> frozenset[str]:
        return frozenset(self.handlers)

    def get(self, method: str) -> Handler | None:
        """Handler for an HTTP method (or a method token such as ``del``)."""
        upper = METHOD_TOKENS.get(method.lower(), method.upper())
        return self.handlers.get(upper)


@dataclass(frozen=True, slots=True)
class PreloadContext:
    """The ``page`` argument handed to preload functions."""

    path: str
    params: Mapping[str, str]
    query: Mapping[str, str]


class _Next:
    """The continuation a server handler returns to decline a request."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NEXT"


NEXT = _Next()


def next_route() -> _Next:
    """Passed to handlers as ``next``; ``return next()`` tries the next match."""
    return NEXT


def is_next(value: Any) -> bool:
    return value is NEXT
