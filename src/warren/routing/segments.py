"""Route file name tokenizer.

Splits a route file path (relative to the routes directory) into
classified segments::

    "blog/[slug].html"         -> [Static("blog"), Dynamic("slug")]
    "items/[id([0-9]+)].py"    -> [Static("items"), Constrained("id", "[0-9]+")]
    "about/index.html"         -> [Static("about"), Index]
    "_error.html"              -> [Error]
    "_partials/nav.html"       -> [Ignored, Ignored]
"""

import re
from pathlib import PurePath

from warren.errors import InvalidConstraint, InvalidRouteName
from warren.routing.route import MountKind, Segment, SegmentKind

PAGE_EXTENSION = ".html"
SCRIPT_EXTENSION = ".py"

_EXTENSION_KINDS: dict[str, MountKind] = {
    PAGE_EXTENSION: MountKind.PAGE,
    SCRIPT_EXTENSION: MountKind.SERVER,
}

INDEX_STEM = "index"
ERROR_STEM = "_error"

# One bracketed parameter, optionally with a constraint and literal affixes
_PARAM_RE = re.compile(
    r"^(?P<prefix>[^\[\]]*)"
    r"\[(?P<name>[^\[\]()]*)(?:\((?P<constraint>.*)\))?\]"
    r"(?P<suffix>[^\[\]]*)$"
)

_FORBIDDEN_CHARS = frozenset("?#%\\")
_FORBIDDEN_CONSTRAINT_CHARS = frozenset("/\\?:()")


def route_kind(relative_path: str | PurePath) -> MountKind | None:
    """Return the mount kind implied by a file's extension, or ``None``."""
    return _EXTENSION_KINDS.get(PurePath(relative_path).suffix)


def tokenize(relative_path: str | PurePath) -> tuple[Segment, ...]:
    """Split a route file path into classified segments.

    Once an ``_``-prefixed component is seen, it and every component
    below it are ``IGNORED``: the whole subtree produces no routes.

    Raises:
        InvalidRouteName: For components outside the naming grammar.
        InvalidConstraint: For malformed ``[name(constraint)]`` segments.
    """
    parts = PurePath(relative_path).parts
    if not parts:
        msg = "Empty route path"
        raise InvalidRouteName(msg)
    if route_kind(relative_path) is None:
        msg = f"Route file {str(relative_path)!r} must end in .html or .py"
        raise InvalidRouteName(msg)

    segments: list[Segment] = []
    seen_params: set[str] = set()
    ignoring = False
    last = len(parts) - 1

    for i, part in enumerate(parts):
        is_file = i == last
        stem = PurePath(part).stem if is_file else part

        if ignoring:
            segments.append(Segment(raw=part, kind=SegmentKind.IGNORED))
            continue

        segment = _classify(part, stem, is_file=is_file, path=relative_path)
        if segment.kind is SegmentKind.IGNORED:
            ignoring = True
        elif segment.param_name is not None:
            if segment.param_name in seen_params:
                msg = f"Parameter {segment.param_name!r} appears twice in {str(relative_path)!r}"
                raise InvalidRouteName(msg)
            seen_params.add(segment.param_name)
        segments.append(segment)

    return tuple(segments)


def is_routable(segments: tuple[Segment, ...]) -> bool:
    """True unless the path lies inside an ignored subtree."""
    return all(seg.kind is not SegmentKind.IGNORED for seg in segments)


def _classify(raw: str, stem: str, *, is_file: bool, path: str | PurePath) -> Segment:
    if is_file and stem == ERROR_STEM:
        return Segment(raw=raw, kind=SegmentKind.ERROR)
    if stem.startswith("_"):
        return Segment(raw=raw, kind=SegmentKind.IGNORED)
    if is_file and stem == INDEX_STEM:
        return Segment(raw=raw, kind=SegmentKind.INDEX)

    if not stem or stem in (".", ".."):
        msg = f"Invalid component {raw!r} in route path {str(path)!r}"
        raise InvalidRouteName(msg)
    if "[" not in stem and "]" not in stem:
        _check_literal(stem, raw)
        return Segment(raw=raw, kind=SegmentKind.STATIC, text=stem)

    match = _PARAM_RE.match(stem)
    if match is None:
        _check_literal(stem, raw)
        msg = (
            f"Route component {raw!r} is not a valid parameter segment. "
            "Use one [name] or [name(constraint)] per component."
        )
        raise InvalidRouteName(msg)

    # The constraint has its own reserved set, checked below
    _check_literal(match.group("prefix") + match.group("suffix"), raw)

    name = match.group("name")
    if not name.isidentifier():
        msg = f"Parameter name {name!r} in {raw!r} is not a valid identifier"
        raise InvalidRouteName(msg)

    constraint = match.group("constraint")
    if constraint is not None:
        _validate_constraint(constraint, raw)

    return Segment(
        raw=raw,
        kind=SegmentKind.DYNAMIC if constraint is None else SegmentKind.DYNAMIC_CONSTRAINED,
        param_name=name,
        constraint=constraint,
        prefix=match.group("prefix"),
        suffix=match.group("suffix"),
    )


def _check_literal(text: str, raw: str) -> None:
    if any(ch.isspace() or ch in _FORBIDDEN_CHARS for ch in text):
        msg = f"Route component {raw!r} contains whitespace or one of ? # % \\"
        raise InvalidRouteName(msg)


def _validate_constraint(constraint: str, raw: str) -> None:
    if not constraint:
        msg = f"Empty constraint in {raw!r}"
        raise InvalidConstraint(msg)
    bad = sorted(_FORBIDDEN_CONSTRAINT_CHARS.intersection(constraint))
    if bad:
        msg = f"Constraint {constraint!r} in {raw!r} may not contain {' '.join(bad)}"
        raise InvalidConstraint(msg)
    try:
        re.compile(constraint)
    except re.error as exc:
        msg = f"Constraint {constraint!r} in {raw!r} is not a valid regular expression: {exc}"
        raise InvalidConstraint(msg) from exc
