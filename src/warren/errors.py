"""Warren exception hierarchy.

Shared across the scanner, route table, dispatcher and ASGI handler so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class WarrenError(Exception):
    """Base for all warren-specific errors."""


class ConfigurationError(WarrenError):
    """Raised when the route tree or app configuration is invalid.

    Every build-time failure derives from this class.  They surface
    from ``App._freeze()`` so serving never starts with an
    inconsistent route table.
    """


class RouteDiscoveryError(ConfigurationError):
    """The routes directory is missing or a route module failed to import."""


class InvalidRouteName(ConfigurationError):  # noqa: N818
    """A path component does not follow the route naming grammar."""


class InvalidConstraint(ConfigurationError):  # noqa: N818
    """A ``[name(constraint)]`` constraint is empty, uses a reserved
    character, or is not a valid regular expression."""


class DuplicateErrorPage(ConfigurationError):  # noqa: N818
    """A second ``_error`` page was found."""


class RouteCollision(ConfigurationError):  # noqa: N818
    """Two routes of the same mount kind would match the same paths.

    Raised for identical matcher sequences (``about`` vs
    ``about/index``, ``[a]`` vs ``[b]``) and for differently
    constrained parameters at the same position.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WarrenError):
    """An error that maps directly to an HTTP status code.

    Raised by preload functions to reject a page render with a status,
    and by the dispatcher when nothing matches.  The dispatcher turns
    it into an error-page render.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
