"""Pattern compiler — classified segments to a ranked RoutePattern.

Specificity is positional: the first path component dominates, then
the second, and so on.  Each position contributes one base-4 digit::

    static                 3
    constrained / affixed  2
    plain parameter        1
    (no component)         0

followed by one low bit set for ``index`` files.  ``about`` therefore
outranks ``[page]``, ``blog/[slug]`` outranks ``[a]/[b]``, and
``items/[id([0-9]+)]`` outranks ``items/[id]``.
"""

import re
from pathlib import PurePath
from typing import Any

from warren.errors import InvalidRouteName
from warren.routing.route import (
    Matcher,
    MountKind,
    ParamMatcher,
    RoutePattern,
    Segment,
    SegmentKind,
    StaticMatcher,
)
from warren.routing.segments import route_kind, tokenize

MAX_DEPTH = 32

STATIC_WEIGHT = 3
CONSTRAINED_WEIGHT = 2
DYNAMIC_WEIGHT = 1

_RADIX = 4


def matcher_weight(matcher: Matcher) -> int:
    if isinstance(matcher, StaticMatcher):
        return STATIC_WEIGHT
    if matcher.is_constrained or matcher.is_affixed:
        return CONSTRAINED_WEIGHT
    return DYNAMIC_WEIGHT


def specificity(matchers: tuple[Matcher, ...], *, index: bool = False) -> int:
    """Score a matcher sequence.  Higher scores are tried first."""
    if len(matchers) > MAX_DEPTH:
        msg = f"Routes may be at most {MAX_DEPTH} components deep"
        raise InvalidRouteName(msg)
    score = 0
    for matcher in matchers:
        score = score * _RADIX + matcher_weight(matcher)
    score *= _RADIX ** (MAX_DEPTH - len(matchers))
    return score * 2 + int(index)


def compile_pattern(
    segments: tuple[Segment, ...],
    kind: MountKind,
    source: Any,
    *,
    file: str = "",
) -> RoutePattern:
    """Compile tokenized segments into a RoutePattern.

    An ``_error`` segment turns the pattern into the error page
    regardless of *kind*.

    Raises:
        InvalidRouteName: If *segments* contains an ignored component
            or is deeper than ``MAX_DEPTH``.
    """
    matchers: list[Matcher] = []
    index = False

    for seg in segments:
        match seg.kind:
            case SegmentKind.IGNORED:
                msg = f"Cannot compile {file or seg.raw!r}: {seg.raw!r} is an ignored component"
                raise InvalidRouteName(msg)
            case SegmentKind.INDEX:
                index = True
            case SegmentKind.ERROR:
                kind = MountKind.ERROR
            case SegmentKind.STATIC:
                matchers.append(StaticMatcher(seg.text))
            case SegmentKind.DYNAMIC | SegmentKind.DYNAMIC_CONSTRAINED:
                matchers.append(
                    ParamMatcher(
                        name=seg.param_name or "",
                        constraint=seg.constraint,
                        prefix=seg.prefix,
                        suffix=seg.suffix,
                        regex=re.compile(seg.constraint) if seg.constraint else None,
                    )
                )

    compiled = tuple(matchers)
    return RoutePattern(
        matchers=compiled,
        kind=kind,
        specificity=specificity(compiled, index=index),
        source=source,
        file=file,
        index=index,
    )


def compile_file(relative_path: str | PurePath, source: Any = None) -> RoutePattern:
    """Tokenize and compile a route file path in one step.

    The mount kind comes from the extension (``.html`` page, ``.py``
    server route)::

        compile_file("blog/[slug].html").template == "/blog/[slug]"
    """
    kind = route_kind(relative_path)
    segments = tokenize(relative_path)
    assert kind is not None  # tokenize() rejects unknown extensions
    return compile_pattern(segments, kind, source, file=PurePath(relative_path).as_posix())
