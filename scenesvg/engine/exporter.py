"""Tree exporter: walks a scene graph and builds the SVG node tree."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from scenesvg.engine.classifier import Classification, ShapeClassifier, ShapeKind
from scenesvg.engine.config import ExportConfig
from scenesvg.engine.path_serializer import PathSerializer
from scenesvg.engine.style_resolver import (
    ResolvedStyle,
    StyleContext,
    StyleResolution,
    StyleResolver,
)
from scenesvg.models.scene import Group, Path, PointText, Project, SceneItem
from scenesvg.models.svg_document import SVG_NAMESPACE, SvgNode
from scenesvg.utils.geometry import GeometryKernel
from scenesvg.utils.math_helpers import NumberFormatter

logger = logging.getLogger(__name__)

# Containers must not paint an implicit black fill behind their children.
_CONTAINER_BASELINE = {"fill_color": None}


class SvgExporter:
    """Converts scene items into SvgNode trees. Never mutates its input."""

    def __init__(self, config: ExportConfig | None = None) -> None:
        self.config = config or ExportConfig()
        self.kernel = GeometryKernel(self.config.epsilon)
        self.formatter = NumberFormatter(self.config.precision)
        self.classifier = ShapeClassifier(self.kernel)
        self.path_serializer = PathSerializer(self.kernel, self.formatter)
        self.style_resolver = StyleResolver(self.formatter)

    def export_project(self, project: Project) -> SvgNode:
        """Export all layers of ``project`` under one ``svg`` root."""
        start = time.perf_counter()
        root = SvgNode(tag="svg", attributes={"xmlns": SVG_NAMESPACE, "version": "1.1"})
        if project.view_size is not None:
            width, height = (self.formatter.number(v) for v in project.view_size)
            root.set(width=width, height=height, viewBox=f"0 0 {width} {height}")

        self._export_into(root, project.layers, StyleContext())

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Exported project: %d layers, %d elements in %.1fms",
            len(project.layers),
            sum(1 for _ in root.iter()) - 1,
            elapsed,
        )
        return root

    def export_item(self, item: SceneItem, context: StyleContext | None = None) -> SvgNode | None:
        """Export one item (and its subtree); None for unsupported kinds."""
        holder = SvgNode(tag="g")
        self._export_into(holder, [item], context or StyleContext())
        return holder.children[0] if holder.children else None

    def _export_into(
        self, parent: SvgNode, items: Iterable[SceneItem], context: StyleContext
    ) -> None:
        # Explicit stack instead of recursion: nesting depth is unbounded.
        stack = [(item, parent, context) for item in reversed(list(items))]
        while stack:
            item, target, ctx = stack.pop()
            built = self._build(item, ctx)
            if built is None:
                logger.debug("Skipping unsupported item %s", type(item).__name__)
                continue
            node, resolution = built
            target.append(node)
            if isinstance(item, Group):
                child_ctx = resolution.child_context()
                stack.extend((child, node, child_ctx) for child in reversed(item.children))

    def _build(
        self, item: SceneItem, context: StyleContext
    ) -> tuple[SvgNode, StyleResolution] | None:
        match item:
            case Group():
                return self._export_group(item, context)
            case Path():
                return self._export_path(item, context)
            case PointText():
                return self._export_text(item, context)
            case _:
                return None

    def _export_group(self, group: Group, context: StyleContext) -> tuple[SvgNode, StyleResolution]:
        resolution = self.style_resolver.resolve(
            group.style, context, name=group.name, baseline=_CONTAINER_BASELINE
        )
        return SvgNode(tag="g", attributes=dict(resolution.attributes)), resolution

    def _export_path(self, path: Path, context: StyleContext) -> tuple[SvgNode, StyleResolution]:
        classification = self.classifier.classify(path)
        resolution = self.style_resolver.resolve(path.style, context, name=path.name)

        attrs = self._shape_attributes(path, classification, resolution.resolved)
        if classification.rotation and classification.center is not None:
            attrs["transform"] = self.formatter.rotate(
                classification.rotation, classification.center
            )
        attrs.update(resolution.attributes)
        return SvgNode(tag=classification.kind.tag, attributes=attrs), resolution

    def _shape_attributes(
        self, path: Path, classification: Classification, style: ResolvedStyle
    ) -> dict[str, str]:
        kind = classification.kind
        if kind is ShapeKind.PATH:
            d = self.path_serializer.serialize(
                path, stroked=style.has_stroke, filled=style.has_fill
            )
            return {"d": d}
        if kind in (ShapeKind.POLYGON, ShapeKind.POLYLINE):
            return {"points": self.formatter.points(classification.params["points"])}
        return {key: self.formatter.number(value) for key, value in classification.params.items()}

    def _export_text(
        self, text: PointText, context: StyleContext
    ) -> tuple[SvgNode, StyleResolution]:
        resolution = self.style_resolver.resolve(text.style, context, name=text.name)
        fmt = self.formatter
        attrs = {"x": fmt.number(text.point.x), "y": fmt.number(text.point.y)}
        if resolution.resolved.font_family is not None:
            attrs["font-family"] = resolution.resolved.font_family
        if resolution.resolved.font_size is not None:
            attrs["font-size"] = fmt.number(resolution.resolved.font_size)
        angle = self.kernel.normalize_angle(text.matrix.rotation)
        attrs["transform"] = fmt.rotate(angle, text.point)
        attrs.update(resolution.attributes)
        return SvgNode(tag="text", attributes=attrs, text=text.content), resolution
