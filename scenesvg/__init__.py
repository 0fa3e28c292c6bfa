"""scenesvg: export vector scene graphs as semantic SVG."""

from scenesvg.engine import ExportConfig, ShapeClassifier, ShapeKind, SvgExporter
from scenesvg.main import configure_logging, render_svg
from scenesvg.models.scene import (
    Group,
    Layer,
    Matrix,
    Path,
    PlacedSymbol,
    PointText,
    Project,
    Raster,
    Segment,
)
from scenesvg.models.style import Color, Style
from scenesvg.utils.geometry import GeometryKernel, Point

__all__ = [
    "Color",
    "ExportConfig",
    "GeometryKernel",
    "Group",
    "Layer",
    "Matrix",
    "Path",
    "PlacedSymbol",
    "Point",
    "PointText",
    "Project",
    "Raster",
    "Segment",
    "ShapeClassifier",
    "ShapeKind",
    "Style",
    "SvgExporter",
    "configure_logging",
    "render_svg",
]
