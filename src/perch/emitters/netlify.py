"""Netlify ``_redirects`` routing.

Rules use splat syntax (``/blog/:slug``, ``/docs/*``). Every rule is a
rewrite (status 200) except error fallbacks, which keep their status.
Functions are reached through ``RoutingConfig.function_prefix``.

Splat placeholders carry no type, so ``/a/{id:int}`` and ``/a/{slug}``
both become ``/a/:param``; routes that collapse onto the same rule but
serve different targets cannot be told apart and are rejected.
"""

from collections.abc import Sequence

from perch.config import RoutingConfig
from perch.emitters.protocol import Document
from perch.errors import AmbiguousRouteError
from perch.routing.descriptor import RouteDescriptor, RouteKind
from perch.routing.pattern import to_splat


class NetlifyEmitter:
    """Serializes resolved routes into a ``_redirects`` file."""

    __slots__ = ("_function_prefix",)

    name = "netlify"
    filename = "_redirects"
    # _redirects and static files both live in the publish directory
    output_dir = "dist"
    static_dir = ""

    def __init__(self, config: RoutingConfig | None = None) -> None:
        self._function_prefix = (config or RoutingConfig()).function_prefix.rstrip("/")

    def emit(self, routes: Sequence[RouteDescriptor]) -> Document:
        rules: list[dict[str, str | int]] = []
        seen: dict[tuple[object, object], RouteDescriptor] = {}
        for route in routes:
            rule = self._rule(route)
            # Typed and untyped params share one splat; same from and status must agree
            first = seen.setdefault((rule["from"], rule["status"]), route)
            if first is not route and self._rule(first)["to"] != rule["to"]:
                raise AmbiguousRouteError(first, route)
            rules.append(rule)
        return {"redirects": rules}

    def _rule(self, route: RouteDescriptor) -> dict[str, str | int]:
        if route.kind is RouteKind.DYNAMIC_FUNCTION:
            to = f"{self._function_prefix}/{route.target}"
        else:
            to = route.target
        return {
            "from": to_splat(route.segments),
            "to": to,
            "status": route.status if route.status is not None else 200,
        }

    def dumps(self, document: Document) -> str:
        rules = document["redirects"]
        if not rules:
            return ""
        width = max(len(rule["from"]) for rule in rules)
        lines = [f"{rule['from']:<{width}}  {rule['to']}  {rule['status']}" for rule in rules]
        return "\n".join(lines) + "\n"
