"""``perch routes`` — print the resolved routing table.

Rows appear in match order: the first row whose pattern matches a
request path is the one the platform serves.
"""

import argparse
import sys

from perch.build import plan_routes
from perch.cli._options import config_from_args
from perch.errors import PerchError
from perch.manifest import load_manifest


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATTERN, KIND, TARGET, and STATUS."""
    try:
        result = plan_routes(load_manifest(args.manifest), config_from_args(args))
    except PerchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows: list[tuple[str, str, str, str]] = [
        (
            route.pattern,
            route.kind.value,
            route.target,
            "" if route.status is None else str(route.status),
        )
        for route in result.routes
    ]

    # Column widths
    max_pattern = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    max_kind = max(max(len(r[1]) for r in rows), 4)  # "KIND" header
    max_target = max(max(len(r[2]) for r in rows), 6)  # "TARGET" header

    fmt = f"{{:<{max_pattern}}}  {{:<{max_kind}}}  {{:<{max_target}}}  {{}}"
    print(fmt.format("PATTERN", "KIND", "TARGET", "STATUS").rstrip())
    print("-" * min(max_pattern + max_kind + max_target + 12, 80))
    for row in rows:
        print(fmt.format(*row).rstrip())
