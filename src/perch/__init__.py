"""Perch — deployment routing configuration from a build manifest.

Takes the routes a static/server build produced (pages, prerendered
error pages, serverless functions, assets) and emits the ordered routing
table an edge platform scans top to bottom, first match wins.

Basic usage::

    from perch import Manifest, ManifestEntry, build_routing_config

    manifest = Manifest(
        entries=(
            ManifestEntry("/about", "page", "/about.html"),
            ManifestEntry("/", "function", "render"),
        ),
        files=frozenset({"/about.html"}),
        functions=frozenset({"render"}),
    )
    config = build_routing_config(manifest)
    config["routes"][-1]  # {"src": "/.*", "dest": "/404.html", "status": 404}
"""

__version__ = "0.1.0"
__all__ = [
    "AmbiguousRouteError",
    "ConfigurationError",
    "Manifest",
    "ManifestEntry",
    "ManifestError",
    "PerchError",
    "RouteDescriptor",
    "RouteKind",
    "RoutingConfig",
    "TieBreak",
    "build_routing_config",
    "collect_routes",
    "load_manifest",
    "plan_routes",
    "resolve_routes",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name in ("RoutingConfig", "TieBreak"):
        from perch import config as _config

        return getattr(_config, name)

    if name in ("Manifest", "ManifestEntry", "load_manifest"):
        from perch import manifest as _manifest

        return getattr(_manifest, name)

    if name in ("RouteDescriptor", "RouteKind"):
        from perch.routing import descriptor as _descriptor

        return getattr(_descriptor, name)

    if name == "collect_routes":
        from perch.routing.collector import collect_routes

        return collect_routes

    if name == "resolve_routes":
        from perch.routing.resolver import resolve_routes

        return resolve_routes

    if name in ("build_routing_config", "plan_routes"):
        from perch import build as _build

        return getattr(_build, name)

    if name in ("PerchError", "ConfigurationError", "ManifestError", "AmbiguousRouteError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
