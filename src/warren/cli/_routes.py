"""``warren routes`` — list compiled routes.

Builds the route table for a routes directory and prints every pattern
in the order the matcher tries them.
"""

import argparse
import sys

from warren.errors import ConfigurationError
from warren.pages.discovery import discover_routes
from warren.pages.types import ServerHandlerSet


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of KIND, PATTERN, SPECIFICITY and SOURCE.

    Server routes list their methods next to the kind.
    """
    try:
        table = discover_routes(args.routes_dir)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not len(table):
        print("No routes found.")
        return

    # Build rows: (kind, template, specificity, file)
    rows: list[tuple[str, str, str, str]] = []
    for pattern in table:
        kind = pattern.kind.value
        if isinstance(pattern.source, ServerHandlerSet):
            methods = ",".join(sorted(pattern.source.methods)) or "-"
            kind = f"{kind} {methods}"
        rows.append((kind, pattern.template, str(pattern.specificity), pattern.file))

    # Column widths
    max_kind = max(max(len(r[0]) for r in rows), 4)  # "KIND" header
    max_path = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header
    max_spec = max(max(len(r[2]) for r in rows), 11)  # "SPECIFICITY" header

    fmt = f"{{:<{max_kind}}}  {{:<{max_path}}}  {{:>{max_spec}}}  {{}}"
    print(fmt.format("KIND", "PATTERN", "SPECIFICITY", "SOURCE"))
    sep_len = max_kind + max_path + max_spec + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 100))
    for row in rows:
        print(fmt.format(*row))
