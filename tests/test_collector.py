"""Tests for perch.routing.collector — manifest normalization."""

import pytest

from perch.errors import ManifestError
from perch.manifest import Manifest, ManifestEntry
from perch.routing.collector import collect_routes
from perch.routing.descriptor import RouteKind
from perch.routing.pattern import PatternShape


def _manifest(*entries: ManifestEntry, files=(), functions=()) -> Manifest:
    return Manifest(entries=entries, files=frozenset(files), functions=frozenset(functions))


class TestKinds:
    def test_maps_build_kinds(self) -> None:
        manifest = _manifest(
            ManifestEntry("/about", "page", "/about.html"),
            ManifestEntry("/favicon.ico", "asset", "/favicon.ico"),
            ManifestEntry("/api/[id]", "function", "api"),
            files=["/about.html", "/favicon.ico"],
            functions=["api"],
        )
        kinds = [d.kind for d in collect_routes(manifest)]
        assert kinds == [
            RouteKind.PRERENDERED_PAGE,
            RouteKind.STATIC_FILE,
            RouteKind.DYNAMIC_FUNCTION,
        ]

    def test_kind_spelling_is_case_insensitive(self) -> None:
        manifest = _manifest(ManifestEntry("/", "SSR", "render"), functions=["render"])
        assert collect_routes(manifest)[0].kind is RouteKind.DYNAMIC_FUNCTION

    def test_preserves_manifest_order(self) -> None:
        manifest = _manifest(
            ManifestEntry("/b", "page", "/b.html"),
            ManifestEntry("/a", "page", "/a.html"),
            files=["/a.html", "/b.html"],
        )
        descriptors = collect_routes(manifest)
        assert [d.pattern for d in descriptors] == ["/b", "/a"]
        assert [d.source for d in descriptors] == [0, 1]

    def test_derives_shape_and_specificity(self) -> None:
        manifest = _manifest(ManifestEntry("/blog/[slug]", "function", "render"), functions=["render"])
        descriptor = collect_routes(manifest)[0]
        assert descriptor.shape is PatternShape.PREFIX
        assert descriptor.specificity > 0


class TestErrorPages:
    def test_404_page_becomes_fallback(self) -> None:
        manifest = _manifest(ManifestEntry("/404", "page", "/404.html"), files=["/404.html"])
        descriptor = collect_routes(manifest)[0]
        assert descriptor.kind is RouteKind.ERROR_FALLBACK
        assert descriptor.status == 404

    def test_500_page_detected_from_output_file(self) -> None:
        manifest = _manifest(
            ManifestEntry("/server-error", "prerendered", "/500/index.html"),
            files=["/500/index.html"],
        )
        descriptor = collect_routes(manifest)[0]
        assert descriptor.kind is RouteKind.ERROR_FALLBACK
        assert descriptor.status == 500

    def test_declared_error_without_status_defaults_to_404(self) -> None:
        manifest = _manifest(ManifestEntry("/oops", "error", "/oops.html"), files=["/oops.html"])
        assert collect_routes(manifest)[0].status == 404

    def test_declared_status_kept(self) -> None:
        manifest = _manifest(
            ManifestEntry("/404", "error-fallback", "/404.html", 404), files=["/404.html"]
        )
        descriptor = collect_routes(manifest)[0]
        assert (descriptor.kind, descriptor.status) == (RouteKind.ERROR_FALLBACK, 404)

    def test_regular_page_has_no_status(self) -> None:
        manifest = _manifest(ManifestEntry("/about", "page", "/about.html"), files=["/about.html"])
        assert collect_routes(manifest)[0].status is None


class TestManifestErrors:
    def test_dangling_file(self) -> None:
        manifest = _manifest(ManifestEntry("/about", "page", "/about.html"))
        with pytest.raises(ManifestError, match="not in the build output") as exc_info:
            collect_routes(manifest)
        assert exc_info.value.index == 0

    def test_dangling_function(self) -> None:
        manifest = _manifest(
            ManifestEntry("/about", "page", "/about.html"),
            ManifestEntry("/api", "function", "api"),
            files=["/about.html"],
        )
        with pytest.raises(ManifestError, match="'api'") as exc_info:
            collect_routes(manifest)
        assert exc_info.value.index == 1
        assert "Manifest entry #1" in str(exc_info.value)

    def test_unknown_kind(self) -> None:
        manifest = _manifest(ManifestEntry("/", "edge", "render"), functions=["render"])
        with pytest.raises(ManifestError, match="unknown route kind"):
            collect_routes(manifest)

    def test_empty_target(self) -> None:
        manifest = _manifest(ManifestEntry("/", "page", ""))
        with pytest.raises(ManifestError, match="empty target"):
            collect_routes(manifest)

    def test_status_out_of_range(self) -> None:
        manifest = _manifest(ManifestEntry("/old", "error", "/old.html", 302), files=["/old.html"])
        with pytest.raises(ManifestError, match="400-599"):
            collect_routes(manifest)

    def test_function_cannot_carry_status(self) -> None:
        manifest = _manifest(ManifestEntry("/", "function", "render", 404), functions=["render"])
        with pytest.raises(ManifestError, match="cannot carry a status"):
            collect_routes(manifest)

    def test_invalid_pattern_reports_entry(self) -> None:
        manifest = _manifest(ManifestEntry("about", "page", "/about.html"), files=["/about.html"])
        with pytest.raises(ManifestError) as exc_info:
            collect_routes(manifest)
        assert exc_info.value.index == 0
        assert "must start with '/'" in str(exc_info.value)
