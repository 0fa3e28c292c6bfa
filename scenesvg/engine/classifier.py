"""Shape classification: detect SVG primitives hiding in Bezier paths.

Precedence (first match wins):
  1. Straight family (no handles): rect → polygon / polyline → line.
  2. Arc family (closed, every arc transition uses the κ ratio):
     rounded rect (8 segments) → circle / ellipse (4 segments).
  3. Anything else is a generic path.

Tilted rects and ellipses report a rotation; their positional parameters are
expressed in the shape's own untilted frame, i.e. after rotating the anchors
back by that angle about the centroid.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any

from scenesvg.engine.errors import DegeneratePathError
from scenesvg.models.scene import Path
from scenesvg.utils.geometry import KAPPA, GeometryKernel, Point, bbox, centroid

logger = logging.getLogger(__name__)


class ShapeKind(str, enum.Enum):
    LINE = "line"
    POLYLINE = "polyline"
    POLYGON = "polygon"
    RECT = "rect"
    ROUNDRECT = "roundrect"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    PATH = "path"

    @property
    def tag(self) -> str:
        """SVG element name used to render this kind."""
        return "rect" if self is ShapeKind.ROUNDRECT else self.value


@dataclass(frozen=True)
class Classification:
    """Classifier verdict plus the parameters needed to render it."""

    kind: ShapeKind
    params: dict[str, Any] = field(default_factory=dict)
    # Counter-clockwise tilt in degrees, applied about ``center``
    rotation: float = 0.0
    center: Point | None = None


class ShapeClassifier:
    """Maps a path onto the most specific SVG primitive it is equivalent to."""

    def __init__(self, kernel: GeometryKernel | None = None) -> None:
        self.kernel = kernel or GeometryKernel()

    def classify(self, path: Path) -> Classification:
        if not path.segments:
            raise DegeneratePathError(path.name)

        if len(path.segments) < 2:
            result = Classification(ShapeKind.PATH)
        elif self._is_straight(path):
            result = self._classify_straight(path)
        elif path.closed:
            result = self._classify_round(path) or Classification(ShapeKind.PATH)
        else:
            result = Classification(ShapeKind.PATH)

        logger.debug(
            "Classified %s (%d segments) as %s, rotation %.4f",
            path.name or "<unnamed>",
            len(path.segments),
            result.kind.value,
            result.rotation,
        )
        return result

    # ------------------------------------------------------------------
    # Straight family
    # ------------------------------------------------------------------

    def _is_straight(self, path: Path) -> bool:
        k = self.kernel
        return all(k.is_zero(s.handle_in) and k.is_zero(s.handle_out) for s in path.segments)

    def _classify_straight(self, path: Path) -> Classification:
        points = path.points
        n = len(points)
        if n == 4 and path.closed and self._is_rectangle(points):
            return self._rect(points)
        if n >= 3:
            kind = ShapeKind.POLYGON if path.closed else ShapeKind.POLYLINE
            return Classification(kind, {"points": points})
        first, last = points[0], points[-1]
        return Classification(
            ShapeKind.LINE,
            {"x1": first.x, "y1": first.y, "x2": last.x, "y2": last.y},
        )

    def _is_rectangle(self, points: list[Point]) -> bool:
        k = self.kernel
        sides = [points[(i + 1) % 4] - points[i] for i in range(4)]
        if any(k.is_zero(side.length) for side in sides):
            return False
        return (
            k.is_colinear(sides[0], sides[2])
            and k.is_colinear(sides[1], sides[3])
            and k.is_orthogonal(sides[0], sides[1])
        )

    def _rect(self, points: list[Point]) -> Classification:
        center = centroid(points)
        # Top edge runs from the second anchor to the third.
        rotation = self.kernel.normalize_angle((points[2] - points[1]).angle)
        xmin, ymin, xmax, ymax = bbox(self._untilt(points, rotation, center))
        return Classification(
            ShapeKind.RECT,
            {"x": xmin, "y": ymin, "width": xmax - xmin, "height": ymax - ymin},
            rotation=rotation,
            center=center,
        )

    # ------------------------------------------------------------------
    # Arc family
    # ------------------------------------------------------------------

    def is_arc(self, path: Path, index: int) -> bool:
        """True if the transition index → index+1 is a κ quarter arc.

        The outgoing handle and the next incoming handle must be orthogonal,
        point towards the intersection of their lines (the arc's corner) and
        have a length of κ times the anchor-to-corner distance.
        """
        k = self.kernel
        segment = path.segments[index]
        following = path.segment_after(index)
        if following is None:
            return False
        h1, h2 = segment.handle_out, following.handle_in
        if k.is_zero(h1.length) or k.is_zero(h2.length):
            return False
        if not k.is_orthogonal(h1, h2):
            return False
        hit = k.line_intersection(segment.point, h1, following.point, h2)
        if hit is None:
            return False
        _, t, s = hit
        if t <= 0.0 or s <= 0.0:
            return False
        # |handle| / |corner - anchor| == 1 / t along each handle line.
        return k.is_zero(1.0 / t - KAPPA) and k.is_zero(1.0 / s - KAPPA)

    def _is_straight_side(self, path: Path, index: int) -> bool:
        k = self.kernel
        following = path.segment_after(index)
        if following is None:
            return False
        return (
            k.is_zero(path.segments[index].handle_out)
            and k.is_zero(following.handle_in)
            and not k.is_zero(following.point.distance(path.segments[index].point))
        )

    def _sides_colinear(self, path: Path, i: int, j: int) -> bool:
        if not (self._is_straight_side(path, i) and self._is_straight_side(path, j)):
            return False
        points = path.points
        n = len(points)
        return self.kernel.is_colinear(
            points[(i + 1) % n] - points[i], points[(j + 1) % n] - points[j]
        )

    def _classify_round(self, path: Path) -> Classification | None:
        n = len(path.segments)
        if (
            n == 8
            and all(self.is_arc(path, i) for i in (0, 2, 4, 6))
            and self._sides_colinear(path, 1, 5)
            and self._sides_colinear(path, 3, 7)
        ):
            return self._round_rect(path.points)
        if n == 4 and all(self.is_arc(path, i) for i in range(4)):
            return self._oval(path.points)
        return None

    def _round_rect(self, points: list[Point]) -> Classification | None:
        k = self.kernel
        top = points[4] - points[3]
        left = points[2] - points[1]
        if not k.is_orthogonal(top, left):
            return None
        center = centroid(points)
        rotation = k.normalize_angle(top.angle)
        flat = self._untilt(points, rotation, center)
        xmin, ymin, xmax, ymax = bbox(flat)
        # Each corner arc spans exactly (rx, ry) in the untilted frame.
        corners = [flat[i + 1] - flat[i] for i in (0, 2, 4, 6)]
        rx, ry = abs(corners[0].x), abs(corners[0].y)
        if not all(k.is_close(abs(c.x), rx) and k.is_close(abs(c.y), ry) for c in corners):
            return None
        return Classification(
            ShapeKind.ROUNDRECT,
            {
                "x": xmin,
                "y": ymin,
                "width": xmax - xmin,
                "height": ymax - ymin,
                "rx": rx,
                "ry": ry,
            },
            rotation=rotation,
            center=center,
        )

    def _oval(self, points: list[Point]) -> Classification | None:
        k = self.kernel
        center = centroid(points)
        axis_a = points[2] - points[0]
        axis_b = points[3] - points[1]
        # Both diagonals must be axes of one ellipse: bisected at the center, orthogonal.
        if not (
            k.is_close(points[0].midpoint(points[2]), center)
            and k.is_close(points[1].midpoint(points[3]), center)
            and k.is_orthogonal(axis_a, axis_b)
        ):
            return None
        if k.is_close(axis_a.length, axis_b.length):
            return Classification(
                ShapeKind.CIRCLE,
                {"cx": center.x, "cy": center.y, "r": axis_a.length / 2},
                center=center,
            )
        # An ellipse looks the same after a half turn.
        rotation = k.normalize_angle(axis_a.angle, period=180.0)
        return Classification(
            ShapeKind.ELLIPSE,
            {
                "cx": center.x,
                "cy": center.y,
                "rx": axis_a.length / 2,
                "ry": axis_b.length / 2,
            },
            rotation=rotation,
            center=center,
        )

    @staticmethod
    def _untilt(points: list[Point], rotation: float, center: Point) -> list[Point]:
        return [p.rotate(-rotation, center) for p in points]
