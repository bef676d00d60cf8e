"""Tests for perch.routing.descriptor — RouteDescriptor frozen dataclass."""

import pytest

from perch.errors import ManifestError
from perch.routing.descriptor import RouteDescriptor, RouteKind
from perch.routing.pattern import EXACT_BASE, PatternShape


class TestRouteDescriptor:
    def test_derived_fields(self) -> None:
        d = RouteDescriptor("/about", RouteKind.STATIC_FILE, "/about.html")
        assert d.shape is PatternShape.EXACT
        assert d.specificity == EXACT_BASE + len("/about")
        assert d.key == "/about"
        assert d.is_catch_all is False

    def test_catch_all(self) -> None:
        d = RouteDescriptor("/**", RouteKind.DYNAMIC_FUNCTION, "render")
        assert d.is_catch_all is True
        assert d.specificity == 0
        assert d.key == "/.*"

    def test_frozen(self) -> None:
        d = RouteDescriptor("/about", RouteKind.STATIC_FILE, "/about.html")
        with pytest.raises(AttributeError):
            d.pattern = "/other"  # type: ignore[misc]

    def test_equality_ignores_derived_fields(self) -> None:
        a = RouteDescriptor("/a", RouteKind.STATIC_FILE, "/a.html", source=1)
        b = RouteDescriptor("/a", RouteKind.STATIC_FILE, "/a.html", source=1)
        assert a == b
        assert hash(a) == hash(b)

    def test_invalid_pattern(self) -> None:
        with pytest.raises(ManifestError):
            RouteDescriptor("a", RouteKind.STATIC_FILE, "/a.html")
