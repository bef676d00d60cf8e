"""Output writer — persists a built routing document to disk.

The document is fully built before anything is written. When the
resolver synthesized the generic catch-all, the fallback page it points
at is rendered from the bundled kida template into the platform's
static directory unless the build already produced that file.
"""

import logging
from pathlib import Path

from kida import Environment, PackageLoader

from perch.build import BuildResult
from perch.config import RoutingConfig

logger = logging.getLogger("perch.output")


def create_environment() -> Environment:
    """Create the kida Environment for perch's bundled templates."""
    return Environment(loader=PackageLoader("perch", "templates"), autoescape=True)


def render_fallback_page(config: RoutingConfig, env: Environment | None = None) -> str:
    """Render the generic fallback page for ``config.fallback_status``."""
    env = env or create_environment()
    template = env.get_template("fallback.html")
    return template.render({"status": config.fallback_status, "title": config.fallback_title})


def write_output(
    result: BuildResult,
    out_dir: str | Path,
    config: RoutingConfig | None = None,
) -> list[Path]:
    """Write the routing document (and fallback page, if needed) under *out_dir*.

    The fallback page goes in the emitter's static directory, where the
    platform serves the catch-all target from. It is rendered before
    anything is written, so a template failure leaves no partial output.

    Returns the paths written, document first.
    """
    config = config or RoutingConfig()
    root = Path(out_dir)
    document_path = root / result.emitter.filename
    document = result.render()

    page: tuple[Path, str] | None = None
    if config.render_fallback_page and result.synthesized_fallback:
        page_path = root / result.emitter.static_dir / config.fallback_target.lstrip("/")
        if page_path.exists():
            logger.debug("fallback page %s already exists", page_path)
        else:
            page = (page_path, render_fallback_page(config))

    root.mkdir(parents=True, exist_ok=True)
    document_path.write_text(document, encoding="utf-8")
    logger.info("wrote %s (%d routes)", document_path, len(result.routes))
    written = [document_path]

    if page is not None:
        page_path, html = page
        page_path.parent.mkdir(parents=True, exist_ok=True)
        page_path.write_text(html, encoding="utf-8")
        logger.info("rendered generic fallback page %s", page_path)
        written.append(page_path)

    return written
