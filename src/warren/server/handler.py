"""ASGI handler — translates ASGI scope/messages to warren types.

The only component that touches raw ASGI directly.  Converts the scope
to a typed Request, dispatches it, and sends the Response back through
ASGI send().

The request body is read before dispatch; after that, ``receive()`` is
only watched for ``http.disconnect``.  A disconnect cancels the
in-flight preload/handler chain for that request and nothing is sent.
"""

import logging

import anyio

from warren._internal.asgi import Receive, Scope, Send
from warren.http.request import Request
from warren.http.response import Response
from warren.server.dispatcher import Dispatcher
from warren.server.sender import send_response

logger = logging.getLogger("warren.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
) -> None:
    """Process a single HTTP request."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    await request.body()

    response: Response | None = None
    disconnected = False

    async with anyio.create_task_group() as tg:

        async def watch_disconnect() -> None:
            nonlocal disconnected
            while True:
                message = await receive()
                if message["type"] == "http.disconnect":
                    disconnected = True
                    tg.cancel_scope.cancel()
                    return

        async def run_dispatch() -> None:
            nonlocal response
            response = await dispatcher.dispatch(request)
            tg.cancel_scope.cancel()

        tg.start_soon(watch_disconnect)
        tg.start_soon(run_dispatch)

    if disconnected or response is None:
        logger.debug("client disconnected: %s %s", request.method, request.path)
        return

    await send_response(response, send, include_body=request.method != "HEAD")
