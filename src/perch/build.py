"""Routing pipeline — manifest in, platform routing document out.

Collection, resolution, and emission run as one synchronous pass over an
immutable manifest. Any failure raises before a document exists, so
callers never see partial output.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from perch.config import RoutingConfig
from perch.emitters import Document, RouteEmitter, get_emitter
from perch.manifest import Manifest
from perch.routing.collector import collect_routes
from perch.routing.descriptor import RouteDescriptor
from perch.routing.resolver import resolve_routes


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Resolved routes and the document emitted from them."""

    routes: tuple[RouteDescriptor, ...]
    document: Document
    emitter: RouteEmitter

    @property
    def synthesized_fallback(self) -> bool:
        """True when the final catch-all was generated rather than taken from the build."""
        return bool(self.routes) and self.routes[-1].source < 0

    def render(self) -> str:
        """Serialize the document in the platform's file format."""
        return self.emitter.dumps(self.document)


def plan_routes(manifest: Manifest, config: RoutingConfig | None = None) -> BuildResult:
    """Collect, resolve, and emit routes for *manifest*.

    Raises:
        ManifestError: Malformed entry or dangling target.
        AmbiguousRouteError: Conflicting routes.
        ConfigurationError: Unknown platform.
    """
    config = config or RoutingConfig()
    emitter = get_emitter(config)
    routes = resolve_routes(collect_routes(manifest), config)
    return BuildResult(routes=tuple(routes), document=emitter.emit(routes), emitter=emitter)


def build_routing_config(manifest: Manifest, config: RoutingConfig | None = None) -> Document:
    """Return the platform routing document for *manifest*."""
    return plan_routes(manifest, config).document


def emit_routes(routes: Sequence[RouteDescriptor], config: RoutingConfig | None = None) -> Document:
    """Emit an already-resolved route sequence for the configured platform."""
    return get_emitter(config).emit(routes)
