"""Perch exception hierarchy.

Shared across the collector, resolver, emitters, and CLI so every module
raises and catches the same types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.routing.descriptor import RouteDescriptor


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a ``RoutingConfig`` is invalid or names an unknown platform."""


class ManifestError(PerchError):
    """A manifest entry is malformed or references a missing build artifact.

    Fatal: the deploy step must abort without writing a routing document.
    """

    def __init__(self, message: str, *, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"Manifest entry #{index}: {message}"
        super().__init__(message)


class AmbiguousRouteError(PerchError):
    """Two routes share the same pattern but serve different targets.

    Both descriptors are kept on the exception so callers can report
    the conflict to the user.
    """

    def __init__(self, first: RouteDescriptor, second: RouteDescriptor) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Ambiguous route: {first.pattern!r} -> {first.target!r} "
            f"conflicts with {second.pattern!r} -> {second.target!r}"
        )
