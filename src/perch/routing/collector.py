"""Route collection — normalizes a build manifest into route descriptors.

Each manifest entry becomes one :class:`RouteDescriptor`, in manifest
order. Recognized error pages (``404.html``, ``500/index.html``, ...)
become error fallbacks carrying their status code.
"""

import logging
import re

from perch.errors import ManifestError
from perch.manifest import Manifest, ManifestEntry
from perch.routing.descriptor import RouteDescriptor, RouteKind

logger = logging.getLogger("perch.collect")

# Build-side kind spellings accepted in manifests
KIND_ALIASES: dict[str, RouteKind] = {
    "static": RouteKind.STATIC_FILE,
    "asset": RouteKind.STATIC_FILE,
    "static-file": RouteKind.STATIC_FILE,
    "page": RouteKind.PRERENDERED_PAGE,
    "prerendered": RouteKind.PRERENDERED_PAGE,
    "prerendered-page": RouteKind.PRERENDERED_PAGE,
    "function": RouteKind.DYNAMIC_FUNCTION,
    "ssr": RouteKind.DYNAMIC_FUNCTION,
    "dynamic": RouteKind.DYNAMIC_FUNCTION,
    "dynamic-function": RouteKind.DYNAMIC_FUNCTION,
    "error": RouteKind.ERROR_FALLBACK,
    "error-fallback": RouteKind.ERROR_FALLBACK,
}

# /404, 404.html, /500/index.html, ...
_ERROR_PAGE_RE = re.compile(r"^/?(?P<status>[45]\d\d)(?:\.html|/index\.html|/)?$")


def collect_routes(manifest: Manifest) -> list[RouteDescriptor]:
    """Normalize every manifest entry into a descriptor.

    Args:
        manifest: The build's route manifest.

    Returns:
        Descriptors in manifest order.

    Raises:
        ManifestError: If an entry is malformed or its target is not part
            of the build output.
    """
    descriptors: list[RouteDescriptor] = []
    for index, entry in enumerate(manifest.entries):
        descriptor = _collect_entry(entry, index, manifest)
        logger.debug(
            "collected %s %s -> %s", descriptor.kind.value, descriptor.pattern, descriptor.target
        )
        descriptors.append(descriptor)
    return descriptors


def _collect_entry(entry: ManifestEntry, index: int, manifest: Manifest) -> RouteDescriptor:
    kind = KIND_ALIASES.get(entry.kind.strip().lower())
    if kind is None:
        raise ManifestError(f"unknown route kind {entry.kind!r}", index=index)
    if not entry.target:
        raise ManifestError(f"route {entry.pattern!r} has an empty target", index=index)

    status = entry.status
    if status is not None and not 400 <= status <= 599:
        raise ManifestError(f"status must be 400-599, got {status}", index=index)

    if kind is RouteKind.DYNAMIC_FUNCTION:
        if status is not None:
            raise ManifestError(
                f"function route {entry.pattern!r} cannot carry a status", index=index
            )
        if entry.target not in manifest.functions:
            raise ManifestError(
                f"function {entry.target!r} for {entry.pattern!r} is not in the build output",
                index=index,
            )
    else:
        if entry.target not in manifest.files:
            raise ManifestError(
                f"file {entry.target!r} for {entry.pattern!r} is not in the build output",
                index=index,
            )
        if kind is RouteKind.ERROR_FALLBACK:
            status = status or _error_status(entry) or 404
        else:
            detected = _error_status(entry)
            if status is not None or detected is not None:
                kind = RouteKind.ERROR_FALLBACK
                status = status or detected

    try:
        return RouteDescriptor(
            pattern=entry.pattern,
            kind=kind,
            target=entry.target,
            status=status,
            source=index,
        )
    except ManifestError as exc:
        raise ManifestError(str(exc), index=index) from exc


def _error_status(entry: ManifestEntry) -> int | None:
    """Return the status code if the pattern or output file names an error page."""
    for candidate in (entry.pattern, entry.target):
        match = _ERROR_PAGE_RE.match(candidate)
        if match:
            return int(match.group("status"))
    return None
