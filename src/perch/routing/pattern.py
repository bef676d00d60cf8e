"""Route pattern parsing, shape classification, and specificity ranking.

A pattern is a ``/``-separated path whose segments are one of:

- static:   ``/users``
- param:    ``/{id}``, ``/{id:int}``, ``/[id]``, ``/*``   (one segment)
- rest:     ``/{path:path}``, ``/[...path]``, ``/**``, ``/.*``   (remaining path)

The whole-site catch-all may also be spelled ``/.*``, ``/*`` or ``/**``.
"""

import re
from dataclasses import dataclass
from enum import Enum

from perch.errors import ManifestError

CATCH_ALL_PATTERN = "/.*"

# Spellings that match every request path
_CATCH_ALL_SPELLINGS = frozenset({"/.*", "/*", "/**"})

# Regex fragment for each supported parameter type
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
}

# Exact patterns always rank above every prefix pattern
EXACT_BASE = 1 << 30

_BRACE_RE = re.compile(r"^\{(\w*)(?::(\w+))?\}$")
_BRACKET_RE = re.compile(r"^\[(\.\.\.)?(\w*)\]$")
_REGEX_SPECIAL_RE = re.compile(r"([.^$*+?()\[\]{}|\\])")


class SegmentKind(Enum):
    STATIC = "static"
    PARAM = "param"
    REST = "rest"


class PatternShape(Enum):
    """Coarse pattern classes, narrowest first."""

    EXACT = "exact"
    PREFIX = "prefix"
    CATCH_ALL = "catch-all"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static: ``/users``      (kind=STATIC)
    Param:  ``/{id:int}``   (kind=PARAM, param_name="id", param_type="int")
    Rest:   ``/[...slug]``  (kind=REST, param_name="slug")
    """

    value: str
    kind: SegmentKind = SegmentKind.STATIC
    param_name: str | None = None
    param_type: str = "str"


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern string into segments.

    Examples::

        "/"                  -> ()
        "/users/{id:int}"    -> (PathSegment("users"), PathSegment("{id:int}", PARAM, ...))
        "/docs/[...slug]"    -> (PathSegment("docs"), PathSegment("[...slug]", REST, ...))
        "/**"                -> (PathSegment("**", REST),)

    Raises ``ManifestError`` for malformed patterns.
    """
    if not isinstance(pattern, str) or not pattern.startswith("/"):
        raise ManifestError(f"Route pattern must start with '/', got {pattern!r}")

    if pattern in _CATCH_ALL_SPELLINGS:
        return (PathSegment(value=pattern.lstrip("/"), kind=SegmentKind.REST),)

    parts = [p for p in pattern.strip("/").split("/") if p]
    segments: list[PathSegment] = []
    for i, part in enumerate(parts):
        segment = _parse_segment(part, pattern)
        if segment.kind is SegmentKind.REST and i != len(parts) - 1:
            raise ManifestError(
                f"Rest segment {part!r} must be the last segment in {pattern!r}"
            )
        segments.append(segment)
    return tuple(segments)


def _parse_segment(part: str, pattern: str) -> PathSegment:
    if part.startswith("<") and part.endswith(">"):
        raise ManifestError(
            f"Route pattern {pattern!r} uses Flask-style <param> syntax. "
            "Use {param} or [param] instead."
        )
    if part == "*":
        return PathSegment(value=part, kind=SegmentKind.PARAM)
    if part in ("**", ".*"):
        return PathSegment(value=part, kind=SegmentKind.REST)

    brace = _BRACE_RE.match(part)
    if brace:
        name, param_type = brace.group(1), brace.group(2) or "str"
        if not name:
            raise ManifestError(f"Empty parameter name in {pattern!r}")
        if param_type == "path":
            return PathSegment(value=part, kind=SegmentKind.REST, param_name=name)
        if param_type not in CONVERTERS:
            raise ManifestError(f"Unknown parameter type {param_type!r} in {pattern!r}")
        return PathSegment(
            value=part, kind=SegmentKind.PARAM, param_name=name, param_type=param_type
        )

    bracket = _BRACKET_RE.match(part)
    if bracket:
        spread, name = bracket.group(1), bracket.group(2)
        if not name:
            raise ManifestError(f"Empty parameter name in {pattern!r}")
        kind = SegmentKind.REST if spread else SegmentKind.PARAM
        return PathSegment(value=part, kind=kind, param_name=name)

    if any(ch in part for ch in "{}[]"):
        raise ManifestError(f"Malformed segment {part!r} in {pattern!r}")
    return PathSegment(value=part)


def classify(segments: tuple[PathSegment, ...]) -> PatternShape:
    """Return the shape of a parsed pattern."""
    if all(s.kind is SegmentKind.STATIC for s in segments):
        return PatternShape.EXACT
    if len(segments) == 1 and segments[0].kind is SegmentKind.REST:
        return PatternShape.CATCH_ALL
    return PatternShape.PREFIX


def literal_prefix(segments: tuple[PathSegment, ...]) -> str:
    """Return the static path prefix before the first dynamic segment.

    ``/blog/{slug}`` -> ``/blog/``; ``/{lang}/docs`` -> ``/``.
    """
    static: list[str] = []
    for segment in segments:
        if segment.kind is not SegmentKind.STATIC:
            break
        static.append(segment.value)
    if not static:
        return "/"
    prefix = "/" + "/".join(static)
    if len(static) < len(segments):
        prefix += "/"
    return prefix


def specificity(segments: tuple[PathSegment, ...]) -> int:
    """Rank a pattern's narrowness: exact > prefix (longest first) > catch-all."""
    shape = classify(segments)
    if shape is PatternShape.CATCH_ALL:
        return 0
    if shape is PatternShape.EXACT:
        return EXACT_BASE + len(canonical(segments))
    closed = segments[-1].kind is not SegmentKind.REST
    # int/float params accept a subset of what a str param accepts
    constrained = sum(
        1 for s in segments if s.kind is SegmentKind.PARAM and s.param_type != "str"
    )
    return (
        1
        + 1024 * len(literal_prefix(segments))
        + 16 * len(segments)
        + 8 * int(closed)
        + constrained
    )


def canonical(segments: tuple[PathSegment, ...]) -> str:
    """Normalized pattern key: equivalent spellings produce the same string.

    ``/users/{id}``, ``/users/[id]`` and ``/users/*`` all map to ``/users/{str}``.
    """
    if classify(segments) is PatternShape.CATCH_ALL:
        return CATCH_ALL_PATTERN
    parts: list[str] = []
    for segment in segments:
        if segment.kind is SegmentKind.STATIC:
            parts.append(segment.value)
        elif segment.kind is SegmentKind.PARAM:
            parts.append("{" + segment.param_type + "}")
        else:
            parts.append("{...}")
    return "/" + "/".join(parts)


def to_regex(segments: tuple[PathSegment, ...]) -> str:
    """Convert segments to a regular-expression source for platform matching.

    Exact paths are emitted verbatim; dynamic patterns become regex globs.
    """
    shape = classify(segments)
    if shape is PatternShape.CATCH_ALL:
        return CATCH_ALL_PATTERN
    if shape is PatternShape.EXACT:
        return canonical(segments)
    parts: list[str] = []
    for segment in segments:
        if segment.kind is SegmentKind.STATIC:
            parts.append(_REGEX_SPECIAL_RE.sub(r"\\\1", segment.value))
        elif segment.kind is SegmentKind.PARAM:
            parts.append(CONVERTERS[segment.param_type])
        else:
            parts.append(".*")
    return "/" + "/".join(parts)


def to_splat(segments: tuple[PathSegment, ...]) -> str:
    """Convert segments to splat syntax (``:name`` placeholders, trailing ``*``)."""
    if classify(segments) is PatternShape.CATCH_ALL:
        return "/*"
    parts: list[str] = []
    for i, segment in enumerate(segments):
        if segment.kind is SegmentKind.STATIC:
            parts.append(segment.value)
        elif segment.kind is SegmentKind.PARAM:
            parts.append(":" + (segment.param_name or f"param{i}"))
        else:
            parts.append("*")
    return "/" + "/".join(parts)
