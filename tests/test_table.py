"""Tests for warren.routing.table — registration, collisions, ordering."""

import pytest

from warren.errors import DuplicateErrorPage, RouteCollision
from warren.routing.pattern import compile_file
from warren.routing.route import MountKind
from warren.routing.table import RouteTable


def _table(*paths: str, finalize: bool = True) -> RouteTable:
    table = RouteTable()
    for path in paths:
        table.register(compile_file(path))
    if finalize:
        table.finalize()
    return table


class TestRegister:
    def test_pages_and_server_routes_separate(self) -> None:
        table = _table("about.html", "about.py")
        assert [p.template for p in table.pages] == ["/about"]
        assert [p.template for p in table.server_routes] == ["/about"]

    def test_registration_order_stamped(self) -> None:
        table = _table("a.html", "b.html")
        assert [p.order for p in table.pages] == [0, 1]

    def test_register_after_finalize_raises(self) -> None:
        table = _table("a.html")
        with pytest.raises(RuntimeError, match="finalized"):
            table.register(compile_file("b.html"))

    def test_error_page_slot(self) -> None:
        table = _table("_error.html")
        assert table.error_page is not None
        assert table.error_page.kind is MountKind.ERROR
        assert table.pages == ()

    def test_error_page_absent_is_legal(self) -> None:
        assert _table("a.html").error_page is None

    def test_duplicate_error_page(self) -> None:
        with pytest.raises(DuplicateErrorPage):
            _table("_error.html", "docs/_error.html")


class TestCollisions:
    def test_index_collapses_onto_static(self) -> None:
        with pytest.raises(RouteCollision) as exc_info:
            _table("about.html", "about/index.html")
        assert "about.html" in str(exc_info.value)
        assert "about/index.html" in str(exc_info.value)

    def test_param_names_do_not_distinguish(self) -> None:
        with pytest.raises(RouteCollision):
            _table("[a].html", "[b].html")

    def test_differently_constrained_same_position(self) -> None:
        with pytest.raises(RouteCollision):
            _table("items/[id([0-9]+)].html", "items/[slug([a-z]+)].html")

    def test_constrained_and_plain_coexist(self) -> None:
        table = _table("items/[id([0-9]+)].html", "items/[slug].html")
        assert len(table.pages) == 2

    def test_affixed_and_plain_coexist(self) -> None:
        table = _table("blog/[slug].json.py", "blog/[slug].py")
        assert len(table.server_routes) == 2

    def test_same_path_different_kinds_allowed(self) -> None:
        table = _table("blog/[slug].html", "blog/[slug].py")
        assert len(table) == 2


class TestFinalize:
    def test_sorted_by_specificity(self) -> None:
        table = _table("[page].html", "about.html", "blog/[slug].html", "[a]/[b].html")
        templates = [p.template for p in table.pages]
        assert templates.index("/about") < templates.index("/[page]")
        assert templates.index("/blog/[slug]") < templates.index("/[a]/[b]")

    def test_idempotent(self) -> None:
        table = _table("b.html", "a.html")
        before = table.pages
        table.finalize()
        assert table.pages == before

    def test_candidates_require_finalize(self) -> None:
        table = _table("a.html", finalize=False)
        with pytest.raises(RuntimeError, match="finalize"):
            table.candidates(MountKind.PAGE, 1)

    def test_candidates_bucketed_by_length(self) -> None:
        table = _table("a.html", "b/c.html", "[x].html")
        assert [p.template for p in table.candidates(MountKind.PAGE, 1)] == ["/a", "/[x]"]
        assert [p.template for p in table.candidates(MountKind.PAGE, 2)] == ["/b/c"]
        assert table.candidates(MountKind.PAGE, 5) == ()


class TestIntrospection:
    def test_iter_yields_everything(self) -> None:
        table = _table("a.html", "api.py", "_error.html")
        kinds = [p.kind for p in table]
        assert kinds == [MountKind.SERVER, MountKind.PAGE, MountKind.ERROR]
        assert len(table) == 3

    def test_patterns_by_kind(self) -> None:
        table = _table("a.html", "_error.html")
        assert len(table.patterns(MountKind.PAGE)) == 1
        assert len(table.patterns(MountKind.ERROR)) == 1
        assert table.patterns(MountKind.SERVER) == ()

    def test_repr(self) -> None:
        assert "pages=1" in repr(_table("a.html"))
