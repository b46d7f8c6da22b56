"""Request path matching against a finalized RouteTable.

Candidates are tried in specificity order.  A candidate matches
exactly when it has one matcher per path component and every matcher
accepts its component.  Page routes additionally allow the
ambiguous-subroute match: with no exact page for ``/settings``, a
``settings/[submenu]`` page matches it with ``submenu`` left unbound.
"""

from collections.abc import Iterator

from warren.routing.route import MountKind, ParamMatcher, RouteMatch, RoutePattern, StaticMatcher
from warren.routing.table import RouteTable


def split_path(path: str) -> list[str]:
    """Split a request path into components, dropping empty ones.

    ``"/blog/hello/"`` -> ``["blog", "hello"]``; ``"/"`` -> ``[]``.
    """
    return [part for part in path.split("/") if part]


def match(table: RouteTable, kind: MountKind, path: str) -> RouteMatch | None:
    """Return the first match for *path* among *kind* routes, or ``None``.

    Exact matches win over ambiguous-subroute matches; within each
    group the first candidate in table order wins.
    """
    return next(iter_matches(table, kind, path), None)


def iter_matches(table: RouteTable, kind: MountKind, path: str) -> Iterator[RouteMatch]:
    """Yield every match for *path* in the order ``match()`` would try them.

    Used for fall-through when a server handler declines a request.
    """
    parts = split_path(path)

    for pattern in table.candidates(kind, len(parts)):
        params = _bind(pattern, parts)
        if params is not None:
            yield RouteMatch(pattern=pattern, params=params)

    if kind is not MountKind.PAGE:
        return

    for pattern in table.candidates(kind, len(parts) + 1):
        trailing = pattern.matchers[-1]
        if not isinstance(trailing, ParamMatcher) or trailing.is_affixed:
            continue
        params = _bind(pattern, parts)
        if params is not None:
            yield RouteMatch(pattern=pattern, params=params, exact=False)


def _bind(pattern: RoutePattern, parts: list[str]) -> dict[str, str] | None:
    """Match *parts* against the leading matchers of *pattern*.

    Only ``len(parts)`` matchers are consulted, so a one-longer pattern
    leaves its trailing parameter unbound.
    """
    params: dict[str, str] = {}
    for matcher, part in zip(pattern.matchers, parts, strict=False):
        if isinstance(matcher, StaticMatcher):
            if matcher.literal != part:
                return None
            continue
        value = matcher.extract(part)
        if value is None:
            return None
        params[matcher.name] = value
    return params
