"""Tests for warren.routing.segments — route file name tokenizer."""

import pytest

from warren.errors import InvalidConstraint, InvalidRouteName
from warren.routing.route import MountKind, SegmentKind
from warren.routing.segments import is_routable, route_kind, tokenize


def _kinds(path: str) -> list[SegmentKind]:
    return [seg.kind for seg in tokenize(path)]


class TestRouteKind:
    def test_html_is_page(self) -> None:
        assert route_kind("blog/[slug].html") is MountKind.PAGE

    def test_py_is_server(self) -> None:
        assert route_kind("api/users.py") is MountKind.SERVER

    def test_other_extensions_ignored(self) -> None:
        assert route_kind("README.md") is None
        assert route_kind("style.css") is None


class TestStaticAndIndex:
    def test_static_components(self) -> None:
        segments = tokenize("blog/archive.html")
        assert [s.kind for s in segments] == [SegmentKind.STATIC, SegmentKind.STATIC]
        assert [s.text for s in segments] == ["blog", "archive"]

    def test_only_final_extension_stripped(self) -> None:
        (segment,) = tokenize("data.json.py")
        assert segment.kind is SegmentKind.STATIC
        assert segment.text == "data.json"

    def test_index_marker(self) -> None:
        assert _kinds("about/index.html") == [SegmentKind.STATIC, SegmentKind.INDEX]

    def test_index_only_for_files(self) -> None:
        assert _kinds("index/page.html") == [SegmentKind.STATIC, SegmentKind.STATIC]


class TestParameters:
    def test_dynamic(self) -> None:
        (segment,) = tokenize("[slug].html")
        assert segment.kind is SegmentKind.DYNAMIC
        assert segment.param_name == "slug"
        assert segment.constraint is None
        assert segment.is_param

    def test_constrained(self) -> None:
        segment = tokenize("items/[id([0-9]+)].html")[1]
        assert segment.kind is SegmentKind.DYNAMIC_CONSTRAINED
        assert segment.param_name == "id"
        assert segment.constraint == "[0-9]+"

    def test_suffix_affix(self) -> None:
        segment = tokenize("blog/[slug].json.py")[1]
        assert segment.kind is SegmentKind.DYNAMIC
        assert segment.param_name == "slug"
        assert segment.suffix == ".json"
        assert segment.prefix == ""

    def test_prefix_affix(self) -> None:
        (segment,) = tokenize("v[major([0-9]+)].py")
        assert segment.prefix == "v"
        assert segment.param_name == "major"
        assert segment.constraint == "[0-9]+"

    def test_duplicate_param_names_rejected(self) -> None:
        with pytest.raises(InvalidRouteName, match="appears twice"):
            tokenize("[id]/[id].html")

    def test_two_params_in_one_component_rejected(self) -> None:
        with pytest.raises(InvalidRouteName):
            tokenize("[a]-[b].html")

    def test_unbalanced_bracket_rejected(self) -> None:
        with pytest.raises(InvalidRouteName):
            tokenize("[slug.html")

    def test_non_identifier_name_rejected(self) -> None:
        with pytest.raises(InvalidRouteName, match="identifier"):
            tokenize("[1st].html")


class TestConstraints:
    def test_empty_constraint(self) -> None:
        with pytest.raises(InvalidConstraint, match="Empty"):
            tokenize("[id()].html")

    @pytest.mark.parametrize("constraint", ["a:b", "(a|b)", "x)y", "\\d+", "a?"])
    def test_reserved_characters(self, constraint: str) -> None:
        with pytest.raises(InvalidConstraint):
            tokenize(f"[id({constraint})].html")

    @pytest.mark.parametrize("name", ["what?[id].html", "[id]%.html", "a\\[id([0-9]+)].html"])
    def test_forbidden_characters_outside_brackets(self, name: str) -> None:
        with pytest.raises(InvalidRouteName):
            tokenize(name)

    def test_uncompilable_constraint(self) -> None:
        with pytest.raises(InvalidConstraint, match="regular expression"):
            tokenize("[id([0-9)].html")

    def test_constraint_errors_are_configuration_errors(self) -> None:
        from warren.errors import ConfigurationError

        with pytest.raises(ConfigurationError):
            tokenize("[id()].html")


class TestIgnoredAndError:
    def test_underscore_component_ignores_subtree(self) -> None:
        kinds = _kinds("_partials/nav/[x].html")
        assert kinds == [SegmentKind.IGNORED, SegmentKind.IGNORED, SegmentKind.IGNORED]

    def test_underscore_file_ignored(self) -> None:
        assert _kinds("blog/_helpers.py") == [SegmentKind.STATIC, SegmentKind.IGNORED]

    def test_ignored_subtree_skips_validation(self) -> None:
        # Helpers may use any name: nothing under them becomes a route
        assert not is_routable(tokenize("_lib/my helper.py"))

    def test_error_marker(self) -> None:
        assert _kinds("_error.html") == [SegmentKind.ERROR]

    def test_error_dir_is_ignored(self) -> None:
        assert _kinds("_error/page.html") == [SegmentKind.IGNORED, SegmentKind.IGNORED]

    def test_is_routable(self) -> None:
        assert is_routable(tokenize("blog/[slug].html"))
        assert is_routable(tokenize("_error.html"))
        assert not is_routable(tokenize("_db.py"))


class TestInvalidNames:
    @pytest.mark.parametrize(
        "path",
        ["my page.html", "what?.html", "a#b.html", "100%.html", "dir/tab\there.py"],
    )
    def test_forbidden_characters(self, path: str) -> None:
        with pytest.raises(InvalidRouteName):
            tokenize(path)

    def test_empty_path(self) -> None:
        with pytest.raises(InvalidRouteName):
            tokenize("")

    def test_dot_components(self) -> None:
        with pytest.raises(InvalidRouteName):
            tokenize("../escape.html")

    def test_unknown_extension(self) -> None:
        with pytest.raises(InvalidRouteName, match="must end in"):
            tokenize("notes.txt")
