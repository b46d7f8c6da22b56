"""Route table — pages, server routes and the error page slot.

Patterns are registered during the build phase and sorted when the
table is finalized.  A finalized table is read-only and shared by all
concurrent requests.
"""

import logging
from collections.abc import Iterator
from dataclasses import replace

from warren.errors import DuplicateErrorPage, RouteCollision
from warren.routing.route import MountKind, RoutePattern

logger = logging.getLogger("warren.routing")


class RouteTable:
    """Ordered collection of compiled patterns.

    Usage::

        table = RouteTable()
        table.register(compile_file("about.html", source))
        table.register(compile_file("[page].html", source))
        table.finalize()
        match(table, MountKind.PAGE, "/about")
    """

    __slots__ = ("_by_length", "_error_page", "_finalized", "_keys", "_order", "_tables")

    def __init__(self) -> None:
        self._tables: dict[MountKind, list[RoutePattern]] = {
            MountKind.PAGE: [],
            MountKind.SERVER: [],
        }
        self._error_page: RoutePattern | None = None
        self._keys: dict[tuple[MountKind, tuple[object, ...]], RoutePattern] = {}
        # Sorted candidates per (kind, matcher count), built by finalize()
        self._by_length: dict[tuple[MountKind, int], tuple[RoutePattern, ...]] = {}
        self._order = 0
        self._finalized = False

    def register(self, pattern: RoutePattern) -> RoutePattern:
        """Add *pattern* to the table for its mount kind.

        Returns the stored pattern, stamped with its registration order.

        Raises:
            DuplicateErrorPage: If an error page is already registered.
            RouteCollision: If a pattern with the same matcher sequence
                is already registered under the same mount kind.
            RuntimeError: If the table has been finalized.
        """
        if self._finalized:
            msg = "Cannot register routes after the table is finalized."
            raise RuntimeError(msg)

        stamped = replace(pattern, order=self._order)

        if pattern.kind is MountKind.ERROR:
            if self._error_page is not None:
                msg = (
                    f"Only one error page is allowed: {self._error_page.file!r} "
                    f"and {pattern.file!r}"
                )
                raise DuplicateErrorPage(msg)
            self._error_page = stamped
        else:
            key = (pattern.kind, pattern.key)
            existing = self._keys.get(key)
            if existing is not None:
                msg = (
                    f"{pattern.kind.value} routes {existing.file!r} ({existing.template}) "
                    f"and {pattern.file!r} ({pattern.template}) match the same paths"
                )
                raise RouteCollision(msg)
            self._keys[key] = stamped
            self._tables[pattern.kind].append(stamped)

        self._order += 1
        logger.debug("registered %s %s from %s", pattern.kind.value, pattern.template, pattern.file)
        return stamped

    def finalize(self) -> None:
        """Sort every table by (specificity desc, registration order asc) and freeze."""
        if self._finalized:
            return
        for kind, patterns in self._tables.items():
            patterns.sort(key=lambda p: (-p.specificity, p.order))
            for pattern in patterns:
                bucket = (kind, len(pattern.matchers))
                self._by_length[bucket] = (*self._by_length.get(bucket, ()), pattern)
        self._finalized = True

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def pages(self) -> tuple[RoutePattern, ...]:
        return tuple(self._tables[MountKind.PAGE])

    @property
    def server_routes(self) -> tuple[RoutePattern, ...]:
        return tuple(self._tables[MountKind.SERVER])

    @property
    def error_page(self) -> RoutePattern | None:
        return self._error_page

    def patterns(self, kind: MountKind) -> tuple[RoutePattern, ...]:
        """Patterns of *kind* in table order."""
        if kind is MountKind.ERROR:
            return () if self._error_page is None else (self._error_page,)
        return tuple(self._tables[kind])

    def candidates(self, kind: MountKind, length: int) -> tuple[RoutePattern, ...]:
        """Patterns of *kind* with exactly *length* matchers, in table order.

        Raises ``RuntimeError`` if the table has not been finalized.
        """
        if not self._finalized:
            msg = "Call finalize() before matching against the route table."
            raise RuntimeError(msg)
        return self._by_length.get((kind, length), ())

    def __iter__(self) -> Iterator[RoutePattern]:
        yield from self._tables[MountKind.SERVER]
        yield from self._tables[MountKind.PAGE]
        if self._error_page is not None:
            yield self._error_page

    def __len__(self) -> int:
        return sum(len(t) for t in self._tables.values()) + (self._error_page is not None)

    def __repr__(self) -> str:
        return (
            f"<RouteTable pages={len(self._tables[MountKind.PAGE])} "
            f"server={len(self._tables[MountKind.SERVER])} "
            f"error_page={self._error_page is not None}>"
        )
