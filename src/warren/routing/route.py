"""Segment, matcher, RoutePattern and RouteMatch frozen dataclasses."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SegmentKind(Enum):
    """Classification of one path component of a route file."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    DYNAMIC_CONSTRAINED = "dynamic_constrained"
    INDEX = "index"
    ERROR = "error"
    IGNORED = "ignored"


class MountKind(Enum):
    """What a compiled pattern does when it matches."""

    PAGE = "page"
    SERVER = "server"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Segment:
    """A classified component of a route file path.

    Static:       ``about``        (text="about")
    Dynamic:      ``[slug]``       (param_name="slug")
    Constrained:  ``[id([0-9]+)]`` (param_name="id", constraint="[0-9]+")
    Affixed:      ``[slug].json``  (param_name="slug", suffix=".json")
    """

    raw: str
    kind: SegmentKind
    text: str = ""
    param_name: str | None = None
    constraint: str | None = None
    prefix: str = ""
    suffix: str = ""

    @property
    def is_param(self) -> bool:
        return self.kind in (SegmentKind.DYNAMIC, SegmentKind.DYNAMIC_CONSTRAINED)


@dataclass(frozen=True, slots=True)
class StaticMatcher:
    """Matches one request path component by exact equality."""

    literal: str

    @property
    def template(self) -> str:
        return self.literal

    @property
    def key(self) -> tuple[str, ...]:
        return ("static", self.literal)


@dataclass(frozen=True, slots=True)
class ParamMatcher:
    """Binds one request path component to a named parameter.

    Literal ``prefix``/``suffix`` must match verbatim and leave a
    non-empty value between them.  When a ``constraint`` is present the
    value must match it in full.
    """

    name: str
    constraint: str | None = None
    prefix: str = ""
    suffix: str = ""
    regex: re.Pattern[str] | None = field(default=None, compare=False, repr=False)

    @property
    def is_constrained(self) -> bool:
        return self.constraint is not None

    @property
    def is_affixed(self) -> bool:
        return bool(self.prefix or self.suffix)

    @property
    def template(self) -> str:
        inner = self.name if self.constraint is None else f"{self.name}({self.constraint})"
        return f"{self.prefix}[{inner}]{self.suffix}"

    @property
    def key(self) -> tuple[str | bool, ...]:
        # Parameter names and the constraint text do not take part:
        # two parameters in the same position are indistinguishable at
        # equal specificity.
        return ("param", self.prefix, self.suffix, self.is_constrained)

    def extract(self, part: str) -> str | None:
        """Return the bound value for *part*, or ``None`` if it does not match."""
        if len(part) <= len(self.prefix) + len(self.suffix):
            return None
        if not (part.startswith(self.prefix) and part.endswith(self.suffix)):
            return None
        value = part[len(self.prefix) : len(part) - len(self.suffix)]
        if self.regex is not None and self.regex.fullmatch(value) is None:
            return None
        return value


type Matcher = StaticMatcher | ParamMatcher


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """A compiled route.  Created at build time, immutable afterwards.

    Attributes:
        matchers: One matcher per request path component.
        kind: Page, server route, or error page.
        specificity: Ranking score; higher is tried first.
        source: ``PageSource`` for pages and the error page,
            ``ServerHandlerSet`` for server routes.
        file: Route file path relative to the routes directory.
        index: True when the route came from an ``index`` file.
        order: Registration order, stamped by the route table.
    """

    matchers: tuple[Matcher, ...]
    kind: MountKind
    specificity: int
    source: Any = field(compare=False)
    file: str = ""
    index: bool = False
    order: int = 0

    @property
    def template(self) -> str:
        """Literal path template, e.g. ``/blog/[slug]``."""
        return "/" + "/".join(m.template for m in self.matchers)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(m.name for m in self.matchers if isinstance(m, ParamMatcher))

    @property
    def key(self) -> tuple[tuple[str | bool, ...], ...]:
        """Collision key: two patterns of one kind may not share it."""
        return tuple(m.key for m in self.matchers)

    def build_path(self, params: dict[str, str]) -> str:
        """Substitute *params* into the template.

        A missing value is only allowed for the trailing parameter (the
        ambiguous-subroute case), in which case the segment is omitted.

        Raises ``KeyError`` for any other missing parameter.
        """
        parts: list[str] = []
        last = len(self.matchers) - 1
        for i, matcher in enumerate(self.matchers):
            if isinstance(matcher, StaticMatcher):
                parts.append(matcher.literal)
            elif matcher.name in params:
                parts.append(f"{matcher.prefix}{params[matcher.name]}{matcher.suffix}")
            elif i == last and not matcher.is_affixed:
                break
            else:
                raise KeyError(matcher.name)
        return "/" + "/".join(parts)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match.

    ``exact`` is False for an ambiguous-subroute match, where the
    trailing parameter is absent from ``params``.
    """

    pattern: RoutePattern
    params: dict[str, str]
    exact: bool = True
