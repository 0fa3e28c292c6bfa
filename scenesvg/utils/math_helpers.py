"""Number formatting helpers: rounding, point lists. No engine imports."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from scenesvg.utils.geometry import Point


def format_number(value: float, precision: int = 5) -> str:
    """Round to ``precision`` fractional digits and trim trailing zeros.

    1.50000 → "1.5", 2.0 → "2", -0.000001 → "0".
    """
    rounded = float(np.round(float(value), precision))
    if rounded == 0.0:
        return "0"
    text = f"{rounded:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class NumberFormatter:
    """Formats numbers and points with one shared precision."""

    def __init__(self, precision: int = 5) -> None:
        if precision < 0:
            raise ValueError(f"precision must be >= 0, got {precision}")
        self.precision = precision

    def number(self, value: float) -> str:
        return format_number(value, self.precision)

    def point(self, point: Point) -> str:
        """"x,y" pair as used by path data and point lists."""
        return f"{self.number(point.x)},{self.number(point.y)}"

    def points(self, points: Iterable[Point]) -> str:
        return " ".join(self.point(p) for p in points)

    def rotate(self, angle: float, pivot: Point) -> str:
        """SVG rotate() transform about ``pivot``."""
        return f"rotate({self.number(angle)},{self.point(pivot)})"
