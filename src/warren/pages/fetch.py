"""Request-scoped HTTP fetch for preload functions.

Each page request gets its own ``RequestFetch``.  Relative URLs resolve
against the current request URL, and same-origin calls carry the
incoming ``Cookie`` header.  When the app is known, same-origin calls
are served in-process through ``httpx.ASGITransport`` instead of going
back out over the network.

The underlying ``httpx.AsyncClient`` is created on first use and
closed by the dispatcher when the request finishes.
"""

from typing import Any
from urllib.parse import urljoin, urlsplit

import httpx

from warren._internal.asgi import ASGIApp
from warren.http.request import Request


class RequestFetch:
    """The ``fetch`` argument handed to preload functions.

    Usage inside a preload::

        async def preload(params, fetch):
            res = await fetch(f"{params['slug']}.json")
            if res.status_code != 200:
                raise HTTPError(res.status_code, "post not found")
            return {"post": res.json()}
    """

    __slots__ = ("_app", "_base", "_client", "_cookie", "_origin", "_timeout")

    def __init__(
        self,
        request: Request,
        *,
        app: ASGIApp | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._origin = request.origin
        self._base = request.origin + request.path
        self._cookie = request.headers.get("cookie")
        self._app = app
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __call__(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and return the ``httpx.Response``.

        Extra keyword arguments (``json=``, ``content=``, ``params=``)
        are passed through to ``httpx.AsyncClient.request``.
        """
        target = urljoin(self._base, url)
        merged = dict(headers or {})
        if (
            self._cookie
            and self.is_same_origin(target)
            and not any(name.lower() == "cookie" for name in merged)
        ):
            merged["cookie"] = self._cookie
        client = self._get_client()
        return await client.request(method, target, headers=merged, **kwargs)

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def opened(self) -> bool:
        """True once a client has been created for this request."""
        return self._client is not None

    def is_same_origin(self, url: str) -> bool:
        parts = urlsplit(url)
        return f"{parts.scheme}://{parts.netloc}" == self._origin

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            mounts = None
            if self._app is not None:
                mounts = {self._origin: httpx.ASGITransport(app=self._app)}
            self._client = httpx.AsyncClient(timeout=self._timeout, mounts=mounts)
        return self._client

    async def aclose(self) -> None:
        """Close the client, if one was opened."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
