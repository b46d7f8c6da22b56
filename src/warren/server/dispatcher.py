"""Per-request dispatch over a finalized route table.

Every request runs the same state machine::

    Start -> Matched(server route) -> handled         -> response
                                   -> next()/no method -> next match
          -> Matched(page)         -> preload, render  -> 200 HTML
          -> Unmatched                                 -> Error(404)
    Error -> _error.html with {error, status}, or the plain-text fallback

API-style requests (any method other than GET/HEAD, or a last path
component ending in one of the API suffixes such as ``.json``) only
consult server routes.  Navigational requests try server routes first
and fall through to pages.
"""

import logging
from typing import Any

from warren._internal.asgi import ASGIApp
from warren._internal.invoke import invoke, leading_positional, resolve_kwargs
from warren.errors import HTTPError, NotFound
from warren.http.request import Request
from warren.http.response import Redirect, Response
from warren.pages.fetch import RequestFetch
from warren.pages.preload import page_props, run_preload
from warren.pages.renderer import Renderer
from warren.pages.types import PageSource, ServerHandlerSet, is_next, next_route
from warren.routing.matcher import iter_matches, match, split_path
from warren.routing.route import MountKind, RouteMatch
from warren.routing.table import RouteTable
from warren.server.errors import render_error
from warren.server.negotiation import negotiate

logger = logging.getLogger("warren.server")

_NAVIGATIONAL_METHODS = frozenset({"GET", "HEAD"})


class Dispatcher:
    """Resolves a ``Request`` against one route table snapshot.

    A dispatcher never changes after construction; ``App.reload()``
    builds a new one and swaps the reference.
    """

    __slots__ = ("api_suffixes", "app", "debug", "fetch_timeout", "renderer", "table")

    def __init__(
        self,
        table: RouteTable,
        renderer: Renderer,
        *,
        api_suffixes: tuple[str, ...] = (".json",),
        app: ASGIApp | None = None,
        fetch_timeout: float = 10.0,
        debug: bool = False,
    ) -> None:
        table.finalize()
        self.table = table
        self.renderer = renderer
        self.api_suffixes = tuple(api_suffixes)
        self.app = app
        self.fetch_timeout = fetch_timeout
        self.debug = debug

    def is_api_request(self, request: Request) -> bool:
        """True when only server routes may answer *request*."""
        if request.method not in _NAVIGATIONAL_METHODS:
            return True
        parts = split_path(request.path)
        return bool(parts) and bool(self.api_suffixes) and parts[-1].endswith(self.api_suffixes)

    async def dispatch(self, request: Request) -> Response:
        """Produce the response for *request*.

        Never raises for request-time failures: ``HTTPError`` becomes
        its status, anything else is logged and becomes a 500.
        Cancellation propagates.
        """
        fetch = RequestFetch(request, app=self.app, timeout=self.fetch_timeout)
        try:
            return await self._dispatch(request, fetch)
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
            return await self._error(exc.status, exc.detail, request, headers=exc.headers)
        except Exception as exc:
            logger.exception("500 %s %s", request.method, request.path)
            detail = f"{type(exc).__name__}: {exc}" if self.debug else ""
            return await self._error(500, detail, request)
        finally:
            await fetch.aclose()

    async def _dispatch(self, request: Request, fetch: RequestFetch) -> Response:
        response = await self._dispatch_server(request)
        if response is not None:
            return response

        if not self.is_api_request(request):
            page_match = match(self.table, MountKind.PAGE, request.path)
            if page_match is not None:
                return await self._render_page(page_match, request, fetch)

        raise NotFound()

    async def _dispatch_server(self, request: Request) -> Response | None:
        """Try server routes in match order; ``None`` when none handled it."""
        for server_match in iter_matches(self.table, MountKind.SERVER, request.path):
            handler_set: ServerHandlerSet = server_match.pattern.source
            handler = handler_set.get(request.method)
            if handler is None and request.method == "HEAD":
                handler = handler_set.get("GET")
            if handler is None:
                continue

            bound = request.with_path_params(server_match.params)
            available: dict[str, Any] = {
                "request": bound,
                "response": Response(),
                "next": next_route,
                "params": dict(server_match.params),
                "query": bound.query,
            }
            kwargs = resolve_kwargs(
                handler, available, server_match.params, server_match.pattern.param_names
            )
            args = leading_positional(
                handler,
                (available["request"], available["response"], available["next"]),
                {*available, *server_match.pattern.param_names},
            )
            result = await invoke(handler, *args, **kwargs)
            if is_next(result):
                logger.debug(
                    "%s %s declined by %s", request.method, request.path, server_match.pattern.file
                )
                continue
            return negotiate(result)
        return None

    async def _render_page(
        self,
        page_match: RouteMatch,
        request: Request,
        fetch: RequestFetch,
    ) -> Response:
        source: PageSource = page_match.pattern.source
        bound = request.with_path_params(page_match.params)

        loaded = await run_preload(source, page_match, bound, fetch)
        if isinstance(loaded, (Redirect, Response)):
            return negotiate(loaded)

        props = page_props(page_match, bound, loaded)
        html = await invoke(self.renderer.render, source.template, props)
        return Response(body=html)

    async def _error(
        self,
        status: int,
        detail: str,
        request: Request,
        *,
        headers: tuple[tuple[str, str], ...] = (),
    ) -> Response:
        return await render_error(
            status,
            detail,
            request,
            table=self.table,
            renderer=self.renderer,
            headers=headers,
        )
