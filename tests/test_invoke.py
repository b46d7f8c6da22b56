"""Tests for warren._internal.invoke — sync/async calls and argument resolution."""

from typing import Any

from warren._internal.invoke import invoke, leading_positional, resolve_kwargs


class TestInvoke:
    async def test_sync(self) -> None:
        def handler(x: int) -> int:
            return x + 1

        assert await invoke(handler, 1) == 2

    async def test_async(self) -> None:
        async def handler(x: int) -> int:
            return x * 2

        assert await invoke(handler, x=3) == 6


class TestResolveKwargs:
    def test_available_by_name(self) -> None:
        def handler(request, query):
            pass

        kwargs = resolve_kwargs(handler, {"request": "R", "query": "Q", "fetch": "F"}, {})
        assert kwargs == {"request": "R", "query": "Q"}

    def test_path_param_by_name(self) -> None:
        def handler(slug):
            pass

        assert resolve_kwargs(handler, {}, {"slug": "hello"}) == {"slug": "hello"}

    def test_annotation_coercion(self) -> None:
        def handler(id: int, slug: str):
            pass

        kwargs = resolve_kwargs(handler, {}, {"id": "42", "slug": "x"})
        assert kwargs == {"id": 42, "slug": "x"}

    def test_failed_coercion_keeps_string(self) -> None:
        def handler(id: int):
            pass

        assert resolve_kwargs(handler, {}, {"id": "abc"}) == {"id": "abc"}

    def test_available_wins_over_path_param(self) -> None:
        def handler(params):
            pass

        kwargs = resolve_kwargs(handler, {"params": {"a": "1"}}, {"params": "clash"})
        assert kwargs == {"params": {"a": "1"}}

    def test_declared_but_unbound_param(self) -> None:
        def with_default(page="1"):
            pass

        def without_default(page):
            pass

        assert resolve_kwargs(with_default, {}, {}, ("page",)) == {"page": "1"}
        assert resolve_kwargs(without_default, {}, {}, ("page",)) == {"page": None}

    def test_unknown_left_to_default(self) -> None:
        def handler(extra=5):
            pass

        assert resolve_kwargs(handler, {}, {}) == {}

    def test_var_keyword_receives_path_params(self) -> None:
        def handler(request, **params: Any):
            pass

        kwargs = resolve_kwargs(handler, {"request": "R"}, {"a": "1", "b": "2"})
        assert kwargs == {"request": "R", "a": "1", "b": "2"}


class TestLeadingPositional:
    CONTRACT = ("REQ", "RES", "NEXT")
    KNOWN = {"request", "response", "next", "params", "query"}

    def test_unknown_names_filled_in_order(self) -> None:
        def handler(req, res, nxt):
            pass

        assert leading_positional(handler, self.CONTRACT, self.KNOWN) == ("REQ", "RES", "NEXT")

    def test_stops_at_known_name(self) -> None:
        def handler(req, res, next):
            pass

        assert leading_positional(handler, self.CONTRACT, self.KNOWN) == ("REQ", "RES")

    def test_named_contract_needs_no_positionals(self) -> None:
        def handler(request, response):
            pass

        assert leading_positional(handler, self.CONTRACT, self.KNOWN) == ()

    def test_path_params_are_known(self) -> None:
        def handler(id, req):
            pass

        assert leading_positional(handler, self.CONTRACT, {*self.KNOWN, "id"}) == ()

    def test_defaults_and_keyword_only_not_filled(self) -> None:
        def with_default(limit=10):
            pass

        def keyword_only(*, req):
            pass

        assert leading_positional(with_default, self.CONTRACT, self.KNOWN) == ()
        assert leading_positional(keyword_only, self.CONTRACT, self.KNOWN) == ()
