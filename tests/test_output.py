"""Tests for perch.output — writing documents and the fallback page."""

import json

import pytest

from perch.build import plan_routes
from perch.config import RoutingConfig
from perch.manifest import Manifest, ManifestEntry
from perch.output import render_fallback_page, write_output


@pytest.fixture
def site() -> Manifest:
    return Manifest(
        entries=(ManifestEntry("/about", "page", "/about.html"),),
        files=frozenset({"/about.html"}),
    )


class TestRenderFallbackPage:
    def test_contains_status_and_title(self) -> None:
        html = render_fallback_page(RoutingConfig())
        assert "<h1>404</h1>" in html
        assert "Page not found" in html

    def test_title_is_escaped(self) -> None:
        html = render_fallback_page(RoutingConfig(fallback_title="<gone>"))
        assert "<gone>" not in html
        assert "&lt;gone&gt;" in html


class TestWriteOutput:
    def test_writes_config_and_fallback_page(self, site: Manifest, tmp_path) -> None:
        written = write_output(plan_routes(site), tmp_path)

        assert written == [tmp_path / "config.json", tmp_path / "static" / "404.html"]
        config = json.loads((tmp_path / "config.json").read_text())
        assert config["routes"][-1] == {"src": "/.*", "dest": "/404.html", "status": 404}
        assert "404" in (tmp_path / "static" / "404.html").read_text()
        assert not (tmp_path / "404.html").exists()

    def test_creates_output_directory(self, site: Manifest, tmp_path) -> None:
        out = tmp_path / ".vercel" / "output"
        write_output(plan_routes(site), out)
        assert (out / "config.json").is_file()

    def test_keeps_existing_fallback_page(self, site: Manifest, tmp_path) -> None:
        (tmp_path / "static").mkdir()
        (tmp_path / "static" / "404.html").write_text("mine")
        written = write_output(plan_routes(site), tmp_path)
        assert written == [tmp_path / "config.json"]
        assert (tmp_path / "static" / "404.html").read_text() == "mine"

    def test_nested_fallback_target(self, site: Manifest, tmp_path) -> None:
        config = RoutingConfig(fallback_target="/errors/404.html")
        write_output(plan_routes(site, config), tmp_path, config)
        assert (tmp_path / "static" / "errors" / "404.html").is_file()

    def test_no_page_for_custom_404(self, tmp_path) -> None:
        manifest = Manifest(
            entries=(ManifestEntry("/404", "page", "/404.html"),),
            files=frozenset({"/404.html"}),
        )
        written = write_output(plan_routes(manifest), tmp_path)
        assert written == [tmp_path / "config.json"]

    def test_page_rendering_disabled(self, site: Manifest, tmp_path) -> None:
        config = RoutingConfig(render_fallback_page=False)
        write_output(plan_routes(site, config), tmp_path, config)
        assert not (tmp_path / "static" / "404.html").exists()

    def test_netlify_filename(self, site: Manifest, tmp_path) -> None:
        config = RoutingConfig(platform="netlify")
        write_output(plan_routes(site, config), tmp_path, config)
        assert (tmp_path / "_redirects").read_text().splitlines()[-1].split() == [
            "/*",
            "/404.html",
            "404",
        ]

    def test_netlify_page_in_publish_root(self, site: Manifest, tmp_path) -> None:
        config = RoutingConfig(platform="netlify")
        written = write_output(plan_routes(site, config), tmp_path, config)
        assert written == [tmp_path / "_redirects", tmp_path / "404.html"]

    def test_render_failure_writes_nothing(self, site: Manifest, tmp_path, monkeypatch) -> None:
        def broken(config: RoutingConfig) -> str:
            raise RuntimeError("template exploded")

        monkeypatch.setattr("perch.output.render_fallback_page", broken)
        out = tmp_path / "out"

        with pytest.raises(RuntimeError, match="template exploded"):
            write_output(plan_routes(site), out)

        assert not out.exists()
