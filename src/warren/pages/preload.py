"""Page preload — the data step that runs before a page renders.

A page script exports ``preload``.  It declares whichever of these
arguments it needs, by name::

    page      PreloadContext(path, params, query)
    params    the route bindings
    query     first value per query-string key
    fetch     request-scoped HTTP fetch (see ``warren.pages.fetch``)
    request   the current Request
    <name>    a single route parameter, coerced to its annotation

The names above win over a route parameter of the same name: for
``[page].html`` an argument called ``page`` is the ``PreloadContext``,
and the bound segment is ``params["page"]`` (or ``page.params["page"]``).

It returns a props mapping (or ``None``), or a ``Redirect`` to skip the
render.  Raising ``HTTPError`` rejects the render with that status; any
other exception rejects it with 500.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from warren._internal.invoke import invoke, resolve_kwargs
from warren.http.response import Redirect, Response
from warren.pages.types import PageSource, PreloadContext

if TYPE_CHECKING:
    from warren.http.request import Request
    from warren.pages.fetch import RequestFetch
    from warren.routing.route import RouteMatch


async def run_preload(
    source: PageSource,
    match: RouteMatch,
    request: Request,
    fetch: RequestFetch,
) -> Mapping[str, Any] | Redirect | Response:
    """Run *source*'s preload for a matched request.

    Returns an empty mapping when the page has no preload.

    Raises:
        TypeError: If preload returns something other than a mapping,
            ``None``, ``Redirect`` or ``Response``.
    """
    if source.preload is None:
        return {}

    params = dict(match.params)
    query = request.query.to_dict()
    available = {
        "page": PreloadContext(path=request.path, params=params, query=query),
        "params": params,
        "query": query,
        "fetch": fetch,
        "request": request,
    }
    kwargs = resolve_kwargs(source.preload, available, params, match.pattern.param_names)
    result = await invoke(source.preload, **kwargs)

    if result is None:
        return {}
    if isinstance(result, (Redirect, Response, Mapping)):
        return result
    msg = (
        f"preload for {source.template!r} returned {type(result).__name__}; "
        "expected a mapping of props"
    )
    raise TypeError(msg)


def page_props(match: RouteMatch, request: Request, loaded: Mapping[str, Any]) -> dict[str, Any]:
    """Render context for a page: ``params`` and ``query``, overridden by preload props."""
    return {
        "params": dict(match.params),
        "query": request.query.to_dict(),
        "path": request.path,
        **loaded,
    }
