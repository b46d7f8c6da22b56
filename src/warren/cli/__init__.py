"""Warren CLI — inspect and validate a routes directory.

Entry point registered as ``warren`` in ``pyproject.toml``::

    [project.scripts]
    warren = "warren.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``warren`` command."""
    parser = argparse.ArgumentParser(
        prog="warren",
        description="Warren — file-path-driven routing for ASGI apps.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- warren routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List compiled routes in match order")
    routes_parser.add_argument("routes_dir", help="Path to the routes directory")

    # -- warren check -----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a routes directory")
    check_parser.add_argument("routes_dir", help="Path to the routes directory")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from warren.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from warren.cli._check import run_check

        run_check(args)
