"""Translate parsed CLI arguments into a RoutingConfig."""

import argparse

from perch.config import RoutingConfig, TieBreak


def config_from_args(args: argparse.Namespace) -> RoutingConfig:
    return RoutingConfig(
        platform=args.platform,
        fallback_target=args.fallback,
        tie_break=TieBreak(args.tie_break),
        render_fallback_page=not getattr(args, "no_fallback_page", False),
    )
