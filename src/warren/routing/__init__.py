"""Routing — file names to ranked patterns, request paths to matches.

Route files are tokenized and compiled into patterns during the build
phase, collected into a ``RouteTable``, and sorted once.  The finalized
table is immutable and matched per request.
"""

from warren.routing.matcher import iter_matches, match, split_path
from warren.routing.pattern import compile_file, compile_pattern, specificity
from warren.routing.route import (
    MountKind,
    ParamMatcher,
    RouteMatch,
    RoutePattern,
    Segment,
    SegmentKind,
    StaticMatcher,
)
from warren.routing.segments import is_routable, route_kind, tokenize
from warren.routing.table import RouteTable

__all__ = [
    "MountKind",
    "ParamMatcher",
    "RouteMatch",
    "RoutePattern",
    "RouteTable",
    "Segment",
    "SegmentKind",
    "StaticMatcher",
    "compile_file",
    "compile_pattern",
    "is_routable",
    "iter_matches",
    "match",
    "route_kind",
    "specificity",
    "split_path",
    "tokenize",
]
