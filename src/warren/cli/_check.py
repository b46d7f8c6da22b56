"""``warren check`` — build-time validation command.

Scans a routes directory and builds the route table exactly as the app
does at startup.  Exits with code 1 and the error message if the tree
has a naming, constraint, collision or import problem.
"""

import argparse
import sys

from warren.errors import ConfigurationError
from warren.pages.discovery import discover_routes


def run_check(args: argparse.Namespace) -> None:
    """Validate ``args.routes_dir`` and print a one-line summary."""
    try:
        table = discover_routes(args.routes_dir)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    error_page = "error page" if table.error_page is not None else "no error page"
    print(
        f"OK: {len(table.pages)} pages, {len(table.server_routes)} server routes, {error_page}"
    )
