"""Entry point: logging setup and one-call rendering."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from scenesvg.config import settings
from scenesvg.engine.config import ExportConfig
from scenesvg.engine.exporter import SvgExporter
from scenesvg.models.scene import Project
from scenesvg.svg.serializer import serialize_svg

load_dotenv()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from settings unless ``level`` overrides it."""
    name = (level or settings.scenesvg_log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def render_svg(project: Project, config: ExportConfig | None = None) -> str:
    """Export ``project`` and return SVG markup text."""
    config = config or ExportConfig.from_settings(settings)
    root = SvgExporter(config).export_project(project)
    return serialize_svg(root, xml_declaration=config.xml_declaration)
