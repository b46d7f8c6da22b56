"""Error responses for warren requests.

Every failure that reaches the dispatcher boundary ends here: the
``_error.html`` page is rendered with ``{error, status}`` when the
route tree has one, and a minimal plain-text response is produced when
it does not, or when rendering it fails too.
"""

import logging
from http import HTTPStatus

from warren._internal.invoke import invoke
from warren.http.request import Request
from warren.http.response import TEXT, Response
from warren.pages.renderer import Renderer
from warren.routing.table import RouteTable

logger = logging.getLogger("warren.server")


def status_phrase(status: int) -> str:
    """``404`` -> ``"Not Found"``; unknown codes get ``"Error <code>"``."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Error {status}"


def fallback_error_response(status: int, detail: str) -> Response:
    """The built-in minimal error response: ``"<status>: <detail>"``."""
    return Response(body=f"{status}: {detail}", status=status, content_type=TEXT)


async def render_error(
    status: int,
    detail: str,
    request: Request,
    *,
    table: RouteTable,
    renderer: Renderer,
    headers: tuple[tuple[str, str], ...] = (),
) -> Response:
    """Render the error page for *status*, or fall back to plain text."""
    detail = detail or status_phrase(status)
    error_page = table.error_page

    response: Response | None = None
    if error_page is not None:
        props = {"error": detail, "status": status}
        try:
            html = await invoke(renderer.render, error_page.source.template, props)
        except Exception:
            logger.exception(
                "error page %s failed to render for %d %s %s",
                error_page.file,
                status,
                request.method,
                request.path,
            )
        else:
            response = Response(body=html, status=status)

    if response is None:
        response = fallback_error_response(status, detail)
    for name, value in headers:
        response = response.with_header(name, value)
    return response
