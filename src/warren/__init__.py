"""Warren — file-path-driven routing and dispatch for ASGI apps.

A directory of route files is the URL space: ``.html`` files are pages
(kida templates, optionally fed by a ``preload`` in a sibling ``.py``),
other ``.py`` files are server routes answering HTTP methods.

Basic usage::

    from warren import App, AppConfig

    app = App(AppConfig(routes_dir="routes"))

Then serve ``app`` with any ASGI server.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "NEXT",
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "NotFound",
    "Redirect",
    "Request",
    "Response",
    "RouteTable",
    "WarrenError",
    "discover_routes",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from warren.app import App

        return App

    if name == "AppConfig":
        from warren.config import AppConfig

        return AppConfig

    if name == "Request":
        from warren.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from warren.http import response as _resp

        return getattr(_resp, name)

    if name in ("NEXT", "discover_routes"):
        from warren import pages as _pages

        return getattr(_pages, name)

    if name == "RouteTable":
        from warren.routing.table import RouteTable

        return RouteTable

    if name in ("WarrenError", "ConfigurationError", "HTTPError", "NotFound"):
        from warren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
