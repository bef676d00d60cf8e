"""Build manifest — the build pipeline's enumeration of produced routes.

The manifest is fully materialized before routing runs. It can be
constructed in code or loaded from the JSON file a build step writes::

    {
      "routes": [
        {"pattern": "/about", "kind": "page", "target": "/about.html"},
        {"pattern": "/blog/[slug]", "kind": "function", "target": "render"}
      ],
      "files": ["/about.html"],
      "functions": ["render"]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from perch.errors import ManifestError


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One produced route as reported by the build.

    ``kind`` is the build's own spelling (``page``, ``function``, ...);
    the collector maps it to a :class:`~perch.routing.descriptor.RouteKind`.
    """

    pattern: str
    kind: str
    target: str
    status: int | None = None


@dataclass(frozen=True, slots=True)
class Manifest:
    """Immutable snapshot of a build's routes and output artifacts.

    Attributes:
        entries: Routes in build order.
        files: Output file paths present in the build (``/about.html``).
        functions: Function identifiers present in the build.
    """

    entries: tuple[ManifestEntry, ...] = ()
    files: frozenset[str] = frozenset()
    functions: frozenset[str] = frozenset()

    @classmethod
    def from_dict(cls, data: Any) -> Manifest:
        """Build a manifest from decoded JSON.

        Raises ``ManifestError`` when the structure is not the documented shape.
        """
        if not isinstance(data, dict):
            raise ManifestError(f"Manifest must be a JSON object, got {type(data).__name__}")

        routes = data.get("routes", [])
        if not isinstance(routes, list):
            raise ManifestError("Manifest 'routes' must be a list")

        entries: list[ManifestEntry] = []
        for index, raw in enumerate(routes):
            if not isinstance(raw, dict):
                raise ManifestError("route must be an object", index=index)
            missing = [key for key in ("pattern", "kind", "target") if key not in raw]
            if missing:
                raise ManifestError(f"missing {', '.join(missing)}", index=index)
            status = raw.get("status")
            if status is not None and (isinstance(status, bool) or not isinstance(status, int)):
                raise ManifestError(f"status must be an integer, got {status!r}", index=index)
            entries.append(
                ManifestEntry(
                    pattern=str(raw["pattern"]),
                    kind=str(raw["kind"]),
                    target=str(raw["target"]),
                    status=status,
                )
            )

        return cls(
            entries=tuple(entries),
            files=frozenset(_string_list(data, "files")),
            functions=frozenset(_string_list(data, "functions")),
        )


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ManifestError(f"Manifest {key!r} must be a list of strings")
    return value


def load_manifest(path: str | Path) -> Manifest:
    """Read and parse a JSON manifest file.

    Raises ``ManifestError`` if the file is missing, unreadable, or not valid JSON.
    """
    manifest_path = Path(path)
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ManifestError(f"Manifest not found: {manifest_path}") from exc
    except UnicodeDecodeError as exc:
        raise ManifestError(f"Manifest {manifest_path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {manifest_path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON in {manifest_path}: {exc}") from exc
    return Manifest.from_dict(data)
