"""Routing configuration.

RoutingConfig is a frozen dataclass — immutable after creation, validated
once in ``__post_init__``, no string-key dict lookups.
"""

from dataclasses import dataclass
from enum import Enum

from perch.errors import ConfigurationError


class TieBreak(Enum):
    """Ordering policy for equal-specificity dynamic routes with different patterns."""

    MANIFEST = "manifest"
    LEXICAL = "lexical"


@dataclass(frozen=True, slots=True)
class RoutingConfig:
    """Routing configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RoutingConfig(platform="netlify", fallback_target="/not-found.html")
    """

    # Target platform emitter (see perch.emitters)
    platform: str = "vercel"
    version: int = 3

    # Generic catch-all synthesized when the build has no custom 404 page
    fallback_target: str = "/404.html"
    fallback_status: int = 404

    # Equal-specificity dynamic routes: keep manifest order or sort by pattern
    tie_break: TieBreak = TieBreak.MANIFEST

    # Netlify rewrites functions to this path prefix
    function_prefix: str = "/.netlify/functions"

    # Output writer: render the built-in fallback page when it was synthesized
    render_fallback_page: bool = True
    fallback_title: str = "Page not found"

    def __post_init__(self) -> None:
        if not self.fallback_target.startswith("/"):
            msg = f"fallback_target must start with '/', got {self.fallback_target!r}"
            raise ConfigurationError(msg)
        if not 400 <= self.fallback_status <= 599:
            msg = f"fallback_status must be an HTTP error status, got {self.fallback_status}"
            raise ConfigurationError(msg)
        if self.version < 1:
            msg = f"version must be positive, got {self.version}"
            raise ConfigurationError(msg)
        if not isinstance(self.tie_break, TieBreak):
            msg = f"tie_break must be a TieBreak, got {self.tie_break!r}"
            raise ConfigurationError(msg)
