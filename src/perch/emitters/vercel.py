"""Vercel Build Output API routing (``.vercel/output/config.json``).

Each resolved route becomes ``{"src", "dest", "status"?}``. Exact paths
are emitted verbatim as written in the manifest; dynamic patterns become
regular expressions.
"""

import json
from collections.abc import Sequence

from perch.config import RoutingConfig
from perch.emitters.protocol import Document
from perch.routing.descriptor import RouteDescriptor
from perch.routing.pattern import PatternShape, to_regex


class VercelEmitter:
    """Serializes resolved routes into a Build Output API config document."""

    __slots__ = ("_version",)

    name = "vercel"
    filename = "config.json"
    # config.json sits at the root; files are served from static/
    output_dir = ".vercel/output"
    static_dir = "static"

    def __init__(self, config: RoutingConfig | None = None) -> None:
        self._version = (config or RoutingConfig()).version

    def emit(self, routes: Sequence[RouteDescriptor]) -> Document:
        return {
            "version": self._version,
            "routes": [self._rule(route) for route in routes],
        }

    @staticmethod
    def _rule(route: RouteDescriptor) -> dict[str, str | int]:
        if route.shape is PatternShape.EXACT:
            src = route.pattern
        else:
            src = to_regex(route.segments)
        rule: dict[str, str | int] = {"src": src, "dest": route.target}
        if route.status is not None:
            rule["status"] = route.status
        return rule

    def dumps(self, document: Document) -> str:
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
