"""Shared fixtures and scene builders.

Builders follow the canonical Bezier recipes: straight shapes have zero
handles, every quarter arc uses handles of κ times the anchor-to-corner
distance. The y axis points down, as in SVG.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from scenesvg.engine.classifier import ShapeClassifier
from scenesvg.engine.exporter import SvgExporter
from scenesvg.models.scene import Path, Segment
from scenesvg.models.style import Color, Style
from scenesvg.utils.geometry import KAPPA, GeometryKernel, Point

RED = Color(red=1.0)
BLUE = Color(blue=1.0)
BLACK = Color()


def straight_path(coords: Sequence[tuple[float, float]], closed: bool = True, **kwargs) -> Path:
    return Path(segments=[Segment(Point(x, y)) for x, y in coords], closed=closed, **kwargs)


def bezier_path(
    anchors: Sequence[Point],
    corners: Sequence[Point | None],
    closed: bool = True,
    **kwargs,
) -> Path:
    """Closed/open path whose transition i → i+1 is a κ arc around corners[i] (None = straight)."""
    n = len(anchors)
    handles_in = [Point() for _ in range(n)]
    handles_out = [Point() for _ in range(n)]
    for i, corner in enumerate(corners):
        if corner is None:
            continue
        j = (i + 1) % n
        handles_out[i] = (corner - anchors[i]) * KAPPA
        handles_in[j] = (corner - anchors[j]) * KAPPA
    segments = [Segment(a, handles_in[i], handles_out[i]) for i, a in enumerate(anchors)]
    return Path(segments=segments, closed=closed, **kwargs)


def rect_path(x: float, y: float, w: float, h: float, **kwargs) -> Path:
    return straight_path([(x, y), (x, y + h), (x + w, y + h), (x + w, y)], **kwargs)


def ellipse_path(cx: float, cy: float, rx: float, ry: float, **kwargs) -> Path:
    anchors = [Point(cx - rx, cy), Point(cx, cy - ry), Point(cx + rx, cy), Point(cx, cy + ry)]
    corners = [
        Point(cx - rx, cy - ry),
        Point(cx + rx, cy - ry),
        Point(cx + rx, cy + ry),
        Point(cx - rx, cy + ry),
    ]
    return bezier_path(anchors, corners, **kwargs)


def circle_path(cx: float, cy: float, r: float, **kwargs) -> Path:
    return ellipse_path(cx, cy, r, r, **kwargs)


def round_rect_path(
    x: float, y: float, w: float, h: float, rx: float, ry: float, **kwargs
) -> Path:
    anchors = [
        Point(x + rx, y + h),
        Point(x, y + h - ry),
        Point(x, y + ry),
        Point(x + rx, y),
        Point(x + w - rx, y),
        Point(x + w, y + ry),
        Point(x + w, y + h - ry),
        Point(x + w - rx, y + h),
    ]
    corners = [
        Point(x, y + h),
        None,
        Point(x, y),
        None,
        Point(x + w, y),
        None,
        Point(x + w, y + h),
        None,
    ]
    return bezier_path(anchors, corners, **kwargs)


def map_path(path: Path, anchor: Callable[[Point], Point], handle: Callable[[Point], Point]) -> Path:
    segments = [
        Segment(anchor(s.point), handle(s.handle_in), handle(s.handle_out)) for s in path.segments
    ]
    return Path(segments=segments, closed=path.closed, style=path.style, name=path.name)


def rotate_path(path: Path, degrees: float, pivot: Point = Point()) -> Path:
    return map_path(path, lambda p: p.rotate(degrees, pivot), lambda h: h.rotate(degrees))


def translate_path(path: Path, offset: Point) -> Path:
    return map_path(path, lambda p: p + offset, lambda h: h)


def angle_diff(a: float, b: float, period: float = 360.0) -> float:
    """Signed difference a - b folded into (-period/2, period/2]."""
    half = period / 2
    return ((a - b + half) % period) - half


@pytest.fixture
def kernel() -> GeometryKernel:
    return GeometryKernel()


@pytest.fixture
def classifier(kernel: GeometryKernel) -> ShapeClassifier:
    return ShapeClassifier(kernel)


@pytest.fixture
def exporter() -> SvgExporter:
    return SvgExporter()


@pytest.fixture
def stroked() -> Style:
    return Style(stroke_color=RED, fill_color=None)
