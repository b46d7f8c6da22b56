"""Pages and server routes discovered from a ``routes/`` directory.

The directory structure defines the URL space::

    routes/
      index.html            # GET /
      _error.html           # rendered for 4xx/5xx
      _db.py                # helper module, no route
      blog/
        index.html          # GET /blog
        [slug].html         # GET /blog/:slug
        [slug].py           # preload() for [slug].html
        [slug].json.py      # server route: get() answers /blog/:slug.json
"""

from warren.pages.discovery import discover_routes
from warren.pages.fetch import RequestFetch
from warren.pages.preload import page_props, run_preload
from warren.pages.renderer import KidaRenderer, Renderer
from warren.pages.types import (
    METHOD_TOKENS,
    NEXT,
    PageSource,
    PreloadContext,
    ServerHandlerSet,
    is_next,
    next_route,
)

__all__ = [
    "METHOD_TOKENS",
    "NEXT",
    "KidaRenderer",
    "PageSource",
    "PreloadContext",
    "Renderer",
    "RequestFetch",
    "ServerHandlerSet",
    "discover_routes",
    "is_next",
    "next_route",
    "page_props",
    "run_preload",
]
