"""``perch build`` — resolve a manifest and write the routing document."""

import argparse
import sys

from perch.build import plan_routes
from perch.cli._options import config_from_args
from perch.errors import PerchError
from perch.manifest import load_manifest
from perch.output import write_output


def run_build(args: argparse.Namespace) -> None:
    """Build and write the routing config for ``args.manifest``.

    Nothing is written if the manifest fails to resolve.
    """
    try:
        config = config_from_args(args)
        result = plan_routes(load_manifest(args.manifest), config)
    except PerchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    out_dir = args.out_dir or result.emitter.output_dir
    for path in write_output(result, out_dir, config):
        print(f"  wrote {path}")
