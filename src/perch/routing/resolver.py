"""Priority resolution — orders route descriptors for first-match dispatch.

The platform scans rules top to bottom and serves the first match, so the
resolved order must put narrower patterns before broader ones:

1. Regular routes (static and dynamic) by specificity, highest first.
   Equal specificity puts dynamic routes before static ones.
2. Error fallbacks, by specificity among themselves.
3. Exactly one catch-all, always last. A site-wide custom 404 page is
   promoted into that slot; without one a generic 404 is synthesized.
   A catch-all function or file (SSR / SPA fallback) takes the slot
   instead and owns 404 handling.

Sorting is stable, so routes the ranking cannot tell apart keep their
manifest order.
"""

import logging
from collections.abc import Callable, Iterable, Sequence

from perch.config import RoutingConfig, TieBreak
from perch.errors import AmbiguousRouteError
from perch.routing.descriptor import RouteDescriptor, RouteKind
from perch.routing.pattern import CATCH_ALL_PATTERN

logger = logging.getLogger("perch.resolve")

# Patterns that name the site-wide not-found page
_SITE_NOT_FOUND_KEYS = frozenset({"/404", "/404.html", "/404/index.html"})


def resolve_routes(
    descriptors: Sequence[RouteDescriptor],
    config: RoutingConfig | None = None,
) -> list[RouteDescriptor]:
    """Return a new list ordered so the first match is always the right one.

    The input is not modified. Resolving an already-resolved list returns
    the same order.

    Raises:
        AmbiguousRouteError: If two routes share a pattern but serve
            different targets, or two catch-alls compete for the final slot.
    """
    config = config or RoutingConfig()

    routes = [d for d in descriptors if d.kind is not RouteKind.ERROR_FALLBACK]
    fallbacks = [d for d in descriptors if d.kind is RouteKind.ERROR_FALLBACK]

    _check_collisions(routes, key=lambda d: d.key)
    _check_collisions(fallbacks, key=lambda d: (d.key, d.status))

    terminal = [d for d in routes if d.is_catch_all]
    ordered = sorted((d for d in routes if not d.is_catch_all), key=_route_sort_key(config))

    site_not_found = [d for d in fallbacks if _is_site_not_found(d)]
    scoped = sorted(
        (d for d in fallbacks if not _is_site_not_found(d)),
        key=lambda d: -d.specificity,
    )

    final = _final_route(terminal, site_not_found, config)

    for fallback in scoped:
        if fallback.is_catch_all:
            raise AmbiguousRouteError(fallback, final)

    return [*ordered, *scoped, final]


def _route_sort_key(config: RoutingConfig) -> Callable[[RouteDescriptor], tuple[int, int, str]]:
    lexical = config.tie_break is TieBreak.LEXICAL

    def key(d: RouteDescriptor) -> tuple[int, int, str]:
        dynamic = d.kind is RouteKind.DYNAMIC_FUNCTION
        tie = d.pattern if lexical and dynamic else ""
        return (-d.specificity, 0 if dynamic else 1, tie)

    return key


def _check_collisions(
    descriptors: Iterable[RouteDescriptor],
    *,
    key: Callable[[RouteDescriptor], object],
) -> None:
    """Raise if two descriptors match the same paths but disagree on what serves them."""
    seen: dict[object, RouteDescriptor] = {}
    for descriptor in descriptors:
        k = key(descriptor)
        first = seen.setdefault(k, descriptor)
        if first is descriptor:
            continue
        dynamic_mismatch = (first.kind is RouteKind.DYNAMIC_FUNCTION) != (
            descriptor.kind is RouteKind.DYNAMIC_FUNCTION
        )
        if first.target != descriptor.target or dynamic_mismatch:
            raise AmbiguousRouteError(first, descriptor)


def _is_site_not_found(d: RouteDescriptor) -> bool:
    return d.status == 404 and (d.is_catch_all or d.key in _SITE_NOT_FOUND_KEYS)


def _final_route(
    terminal: list[RouteDescriptor],
    site_not_found: list[RouteDescriptor],
    config: RoutingConfig,
) -> RouteDescriptor:
    """Pick (or synthesize) the catch-all that ends the rule list."""
    if terminal:
        if site_not_found:
            logger.info(
                "catch-all %s -> %s handles unmatched paths; not routing to %s",
                terminal[0].pattern,
                terminal[0].target,
                site_not_found[0].target,
            )
        return terminal[0]

    if site_not_found:
        # A user-authored 404 page outranks a generic catch-all fallback
        explicit = [d for d in site_not_found if not d.is_catch_all]
        custom = (explicit or site_not_found)[0]
        for other in explicit[1:]:
            if other.target != custom.target:
                raise AmbiguousRouteError(custom, other)
        if custom.pattern == CATCH_ALL_PATTERN:
            return custom
        logger.info("promoting custom 404 page %s to the catch-all", custom.target)
        return RouteDescriptor(
            pattern=CATCH_ALL_PATTERN,
            kind=RouteKind.ERROR_FALLBACK,
            target=custom.target,
            status=custom.status,
            source=custom.source,
        )

    logger.info("no custom 404 page; synthesizing catch-all -> %s", config.fallback_target)
    return synthesized_fallback(config)


def synthesized_fallback(config: RoutingConfig) -> RouteDescriptor:
    """The generic catch-all used when the build has no 404 page of its own."""
    return RouteDescriptor(
        pattern=CATCH_ALL_PATTERN,
        kind=RouteKind.ERROR_FALLBACK,
        target=config.fallback_target,
        status=config.fallback_status,
        source=-1,
    )
