"""Leaf-node geometry kernel. No engine imports.

``Point`` is a plain immutable value; every tolerance decision goes through a
``GeometryKernel`` instance so that one epsilon governs a whole export.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

# Handle-length / radius ratio that makes one cubic Bezier approximate a 90° arc.
KAPPA = 4 * (math.sqrt(2) - 1) / 3


@dataclass(frozen=True, slots=True)
class Point:
    """2D point or vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)

    def __truediv__(self, divisor: float) -> Point:
        return Point(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Angle from the +x axis in degrees, in (-180, 180]."""
        return math.degrees(math.atan2(self.y, self.x))

    def distance(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def dot(self, other: Point) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Point) -> float:
        return self.x * other.y - self.y * other.x

    def normalize(self, length: float = 1.0) -> Point:
        current = self.length
        if current == 0.0:
            return Point(0.0, 0.0)
        return self * (length / current)

    def rotate(self, degrees: float, pivot: Point | None = None) -> Point:
        """Rotate by ``degrees`` (positive = +x towards +y) about ``pivot`` or the origin."""
        if degrees == 0.0:
            return self
        rad = math.radians(degrees)
        cos_a, sin_a = math.cos(rad), math.sin(rad)
        px, py = (pivot.x, pivot.y) if pivot is not None else (0.0, 0.0)
        dx, dy = self.x - px, self.y - py
        return Point(px + dx * cos_a - dy * sin_a, py + dx * sin_a + dy * cos_a)

    def midpoint(self, other: Point) -> Point:
        return (self + other) / 2


def as_array(points: Sequence[Point]) -> NDArray[np.float64]:
    """Nx2 array of the given points."""
    if not points:
        return np.empty((0, 2))
    return np.array([(p.x, p.y) for p in points], dtype=np.float64)


def centroid(points: Sequence[Point]) -> Point:
    """Mean of a point set."""
    if not points:
        return Point(0.0, 0.0)
    cx, cy = as_array(points).mean(axis=0)
    return Point(float(cx), float(cy))


def bbox(points: Sequence[Point]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if not points:
        return (0.0, 0.0, 0.0, 0.0)
    pts = as_array(points)
    return (
        float(np.min(pts[:, 0])),
        float(np.min(pts[:, 1])),
        float(np.max(pts[:, 0])),
        float(np.max(pts[:, 1])),
    )


class GeometryKernel:
    """Tolerance-aware geometric predicates.

    Colinearity and orthogonality compare the sine / cosine of the angle
    between two vectors against epsilon, so verdicts do not depend on the
    scale of the drawing.
    """

    def __init__(self, epsilon: float = 1e-7) -> None:
        if epsilon <= 0.0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        self.epsilon = epsilon

    def is_zero(self, value: float | Point) -> bool:
        if isinstance(value, Point):
            return abs(value.x) <= self.epsilon and abs(value.y) <= self.epsilon
        return abs(value) <= self.epsilon

    def is_close(self, a: float | Point, b: float | Point) -> bool:
        return self.is_zero(a - b)  # type: ignore[operator]

    def distance(self, p: Point, q: Point) -> float:
        return p.distance(q)

    def is_colinear(self, v1: Point, v2: Point) -> bool:
        return abs(v1.cross(v2)) <= self.epsilon * v1.length * v2.length

    def is_orthogonal(self, v1: Point, v2: Point) -> bool:
        return abs(v1.dot(v2)) <= self.epsilon * v1.length * v2.length

    def normalize_angle(self, degrees: float, period: float = 360.0) -> float:
        """Map into (-period/2, period/2] and snap near-zero to exactly 0."""
        half = period / 2
        angle = math.fmod(degrees, period)
        if angle > half:
            angle -= period
        elif angle <= -half:
            angle += period
        if self.is_zero(angle):
            return 0.0
        # Values just below -half are the same orientation as +half.
        if self.is_zero(angle + half):
            return half
        return angle

    def line_intersection(
        self, p1: Point, d1: Point, p2: Point, d2: Point
    ) -> tuple[Point, float, float] | None:
        """Intersect infinite lines p1 + t*d1 and p2 + s*d2.

        Returns (point, t, s), or None when the lines are parallel.
        """
        if self.is_colinear(d1, d2):
            return None
        a = np.array([[d1.x, -d2.x], [d1.y, -d2.y]], dtype=np.float64)
        b = np.array([p2.x - p1.x, p2.y - p1.y], dtype=np.float64)
        try:
            t, s = np.linalg.solve(a, b)
        except np.linalg.LinAlgError:
            return None
        return p1 + d1 * float(t), float(t), float(s)
