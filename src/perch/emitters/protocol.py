"""Emitter protocol and Document type alias.

An emitter is any object matching::

    class MyPlatformEmitter:
        name = "my-platform"
        filename = "routes.json"
        output_dir = "build"
        static_dir = "public"

        def emit(self, routes: Sequence[RouteDescriptor]) -> Document: ...
        def dumps(self, document: Document) -> str: ...

No base class required. The pipeline checks the shape, not the lineage.
Both methods must be pure: no filesystem or network access, and
identical input always produces identical output.
"""

from collections.abc import Sequence
from typing import Any, Protocol

from perch.routing.descriptor import RouteDescriptor

# A platform routing document, ready for serialization
type Document = dict[str, Any]


class RouteEmitter(Protocol):
    """Protocol for platform routing-document emitters."""

    name: str
    filename: str
    # Default output directory, and where static files live inside it
    output_dir: str
    static_dir: str

    def emit(self, routes: Sequence[RouteDescriptor]) -> Document: ...

    def dumps(self, document: Document) -> str: ...
