"""Perch CLI — build routing configs and inspect resolved routes.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys

from perch.emitters import EMITTERS


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — deployment routing configuration from a build manifest.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # Shared options for commands that resolve a manifest
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("manifest", help="Path to the build's JSON route manifest")
    common.add_argument(
        "--platform",
        choices=sorted(EMITTERS),
        default="vercel",
        help="Target deployment platform",
    )
    common.add_argument(
        "--fallback",
        default="/404.html",
        help="Target for the generic 404 catch-all",
    )
    common.add_argument(
        "--tie-break",
        choices=["manifest", "lexical"],
        default="manifest",
        help="Order of equal-specificity dynamic routes",
    )

    # -- perch build ------------------------------------------------------
    build_parser = subparsers.add_parser(
        "build", parents=[common], help="Write the platform routing config"
    )
    build_parser.add_argument(
        "-o",
        "--out-dir",
        default=None,
        help="Directory to write the routing document into (default: per platform)",
    )
    build_parser.add_argument(
        "--no-fallback-page",
        action="store_true",
        help="Do not render the generic fallback page",
    )

    # -- perch routes -----------------------------------------------------
    subparsers.add_parser("routes", parents=[common], help="Print the resolved routing table")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "build":
        from perch.cli._build import run_build

        run_build(args)
    elif args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
