"""RouteDescriptor and RouteKind — the normalized form of one manifest entry."""

from dataclasses import dataclass, field
from enum import Enum

from perch.routing.pattern import (
    PathSegment,
    PatternShape,
    canonical,
    classify,
    parse_pattern,
    specificity,
)


class RouteKind(Enum):
    """What kind of artifact serves a route."""

    STATIC_FILE = "static-file"
    PRERENDERED_PAGE = "prerendered-page"
    DYNAMIC_FUNCTION = "dynamic-function"
    ERROR_FALLBACK = "error-fallback"


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """A frozen, normalized route entry.

    Created once per build by the collector; the resolver only reorders
    descriptors and never changes them. ``segments``, ``shape`` and
    ``specificity`` are derived from ``pattern`` at construction time.
    """

    pattern: str
    kind: RouteKind
    target: str
    status: int | None = None
    source: int = 0

    segments: tuple[PathSegment, ...] = field(init=False, repr=False, compare=False)
    shape: PatternShape = field(init=False, repr=False, compare=False)
    specificity: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        segments = parse_pattern(self.pattern)
        object.__setattr__(self, "segments", segments)
        object.__setattr__(self, "shape", classify(segments))
        object.__setattr__(self, "specificity", specificity(segments))

    @property
    def key(self) -> str:
        """Normalized pattern; equal keys match exactly the same paths."""
        return canonical(self.segments)

    @property
    def is_catch_all(self) -> bool:
        return self.shape is PatternShape.CATCH_ALL
