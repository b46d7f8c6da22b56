"""Tests for warren.pages.preload — running preload and building page props."""

from typing import Any

import pytest

from warren.http.request import Request
from warren.http.response import Redirect
from warren.pages.preload import page_props, run_preload
from warren.pages.types import PageSource, PreloadContext
from warren.routing.pattern import compile_file
from warren.routing.route import RouteMatch


def _request(path: str, query: bytes = b"") -> Request:
    scope = {"type": "http", "method": "GET", "path": path, "headers": [], "query_string": query}
    return Request.from_asgi(scope, None)  # type: ignore[arg-type]


def _match(file: str, preload: Any, params: dict[str, str]) -> tuple[PageSource, RouteMatch]:
    source = PageSource(template=file, preload=preload)
    return source, RouteMatch(pattern=compile_file(file, source), params=params)


FETCH = object()


class TestRunPreload:
    async def test_no_preload(self) -> None:
        source, match = _match("about.html", None, {})
        assert await run_preload(source, match, _request("/about"), FETCH) == {}  # type: ignore[arg-type]

    async def test_arguments_by_name(self) -> None:
        seen: dict[str, Any] = {}

        async def preload(page, params, query, fetch, request, slug):
            seen.update(page=page, params=params, query=query, fetch=fetch, slug=slug)
            return {"ok": True}

        source, match = _match("blog/[slug].html", preload, {"slug": "hello"})
        request = _request("/blog/hello", b"draft=1")
        result = await run_preload(source, match, request, FETCH)  # type: ignore[arg-type]

        assert result == {"ok": True}
        assert seen["page"] == PreloadContext(
            path="/blog/hello", params={"slug": "hello"}, query={"draft": "1"}
        )
        assert seen["params"] == {"slug": "hello"}
        assert seen["query"] == {"draft": "1"}
        assert seen["fetch"] is FETCH
        assert seen["slug"] == "hello"

    async def test_sync_preload_returning_none(self) -> None:
        def preload():
            return None

        source, match = _match("about.html", preload, {})
        assert await run_preload(source, match, _request("/about"), FETCH) == {}  # type: ignore[arg-type]

    async def test_redirect_passes_through(self) -> None:
        def preload():
            return Redirect("/login")

        source, match = _match("account.html", preload, {})
        result = await run_preload(source, match, _request("/account"), FETCH)  # type: ignore[arg-type]
        assert result == Redirect("/login")

    async def test_bad_return_type(self) -> None:
        def preload():
            return ["not", "props"]

        source, match = _match("about.html", preload, {})
        with pytest.raises(TypeError, match="expected a mapping"):
            await run_preload(source, match, _request("/about"), FETCH)  # type: ignore[arg-type]

    async def test_ambiguous_param_is_none(self) -> None:
        def preload(n):
            return {"n": n}

        source, match = _match("list/[n].html", preload, {})
        result = await run_preload(source, match, _request("/list"), FETCH)  # type: ignore[arg-type]
        assert result == {"n": None}


class TestPageProps:
    def test_defaults_and_override(self) -> None:
        _, match = _match("blog/[slug].html", None, {"slug": "hello"})
        request = _request("/blog/hello", b"tab=comments")
        props = page_props(match, request, {"title": "Hello", "path": "custom"})
        assert props == {
            "params": {"slug": "hello"},
            "query": {"tab": "comments"},
            "path": "custom",
            "title": "Hello",
        }


class TestNameShadowing:
    async def test_page_argument_is_context_for_page_param(self) -> None:
        def preload(page, params):
            return {"context": page, "segment": params["page"]}

        source, match = _match("[page].html", preload, {"page": "about"})
        result = await run_preload(source, match, _request("/about"), FETCH)  # type: ignore[arg-type]

        assert isinstance(result["context"], PreloadContext)
        assert result["context"].params == {"page": "about"}
        assert result["segment"] == "about"
