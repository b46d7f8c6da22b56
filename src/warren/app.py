"""Warren application class.

Mutable during setup (lifecycle hooks).  Frozen at runtime when the
ASGI lifespan starts or ``__call__()`` is first invoked: the routes
directory is scanned once and compiled into a route table.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

from kida import Environment

from warren._internal.asgi import Receive, Scope, Send
from warren.config import AppConfig
from warren.pages.discovery import discover_routes
from warren.pages.renderer import KidaRenderer, Renderer
from warren.routing.table import RouteTable
from warren.server.dispatcher import Dispatcher
from warren.server.handler import handle_request

logger = logging.getLogger("warren.server")


class App:
    """The warren application.

    Usage::

        app = App(AppConfig(routes_dir="routes"))
        # serve with any ASGI server, e.g. ``uvicorn myapp:app``

    Thread safety:
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread builds the route table, even when several ASGI workers
        call ``__call__()`` concurrently on first request.  ``reload()``
        builds off to the side and swaps one reference, so in-flight
        requests finish against the table they started with.
    """

    __slots__ = (
        "_custom_kida_env",
        "_custom_renderer",
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        kida_env: Environment | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._custom_kida_env: Environment | None = kida_env
        self._custom_renderer: Renderer | None = renderer

        # Compiled state, set during _freeze()
        self._dispatcher: Dispatcher | None = None

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        after the route table is built.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def routes(self) -> RouteTable:
        """The finalized route table (builds it on first access)."""
        self._ensure_frozen()
        assert self._dispatcher is not None
        return self._dispatcher.table

    @property
    def dispatcher(self) -> Dispatcher:
        self._ensure_frozen()
        assert self._dispatcher is not None
        return self._dispatcher

    def reload(self) -> RouteTable:
        """Rebuild the route table from disk and swap it in.

        Route modules are re-imported.  If the rebuild fails the current
        table stays in service and the error propagates.
        """
        with self._freeze_lock:
            dispatcher = self._build()
            self._dispatcher = dispatcher
            self._frozen = True
        logger.info("route table reloaded from %s", self.config.routes_dir)
        return dispatcher.table

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes
        to the request handler.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        # One snapshot per request: a concurrent reload() doesn't affect it
        dispatcher = self._dispatcher
        assert dispatcher is not None

        await handle_request(scope, receive, send, dispatcher=dispatcher)

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Builds the route table at startup (before the first HTTP
        request); a build error fails startup.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    for hook in self._startup_hooks:
                        result = hook()
                        if inspect.isawaitable(result):
                            await result
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.exception("startup failed")
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    result = hook()
                    if inspect.isawaitable(result):
                        await result
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the route table and dispatcher.

        MUST only be called while holding _freeze_lock.  Build errors
        (``ConfigurationError`` and subclasses) propagate and leave the
        app unfrozen.
        """
        self._dispatcher = self._build()
        self._frozen = True

    def _build(self) -> Dispatcher:
        table = discover_routes(self.config.routes_dir)
        return Dispatcher(
            table,
            self._make_renderer(),
            api_suffixes=self.config.api_suffixes,
            app=self,
            fetch_timeout=self.config.fetch_timeout,
            debug=self.config.debug,
        )

    def _make_renderer(self) -> Renderer:
        if self._custom_renderer is not None:
            return self._custom_renderer
        if self._custom_kida_env is not None:
            return KidaRenderer(self._custom_kida_env)
        return KidaRenderer.from_config(self.config)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register lifecycle hooks before the first request."
            )
            raise RuntimeError(msg)
