"""scenesvg export engine."""

from scenesvg.engine.classifier import Classification, ShapeClassifier, ShapeKind
from scenesvg.engine.config import ExportConfig
from scenesvg.engine.errors import DegeneratePathError, ExportError
from scenesvg.engine.exporter import SvgExporter
from scenesvg.engine.path_serializer import PathSerializer
from scenesvg.engine.style_resolver import StyleContext, StyleResolver

__all__ = [
    "Classification",
    "DegeneratePathError",
    "ExportConfig",
    "ExportError",
    "PathSerializer",
    "ShapeClassifier",
    "ShapeKind",
    "StyleContext",
    "StyleResolver",
    "SvgExporter",
]
