"""Scene graph model: the read-only input of an export.

The host application builds the whole graph before exporting. Containers own
their children; segments carry no back reference to their path, neighbours
are reached by index arithmetic on the owning path.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from scenesvg.models.style import Style
from scenesvg.utils.geometry import Point


@dataclass(frozen=True)
class Segment:
    """Anchor point plus incoming/outgoing handles relative to the anchor."""

    point: Point
    handle_in: Point = field(default_factory=Point)
    handle_out: Point = field(default_factory=Point)


@dataclass(frozen=True)
class Matrix:
    """Affine transform (a, b, c, d, tx, ty)."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def rotation_matrix(cls, degrees: float) -> Matrix:
        rad = math.radians(degrees)
        cos_a, sin_a = math.cos(rad), math.sin(rad)
        return cls(a=cos_a, b=sin_a, c=-sin_a, d=cos_a)

    @property
    def rotation(self) -> float:
        """Rotation in degrees."""
        return math.degrees(math.atan2(self.b, self.a))


@dataclass(frozen=True)
class Path:
    segments: tuple[Segment, ...] = ()
    closed: bool = False
    style: Style = field(default_factory=Style)
    name: str | None = None

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple.
        object.__setattr__(self, "segments", tuple(self.segments))

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def points(self) -> list[Point]:
        return [s.point for s in self.segments]

    def next_index(self, index: int) -> int | None:
        n = len(self.segments)
        if index + 1 < n:
            return index + 1
        return 0 if self.closed and n > 0 else None

    def previous_index(self, index: int) -> int | None:
        n = len(self.segments)
        if index > 0:
            return index - 1
        return n - 1 if self.closed and n > 0 else None

    def segment_after(self, index: int) -> Segment | None:
        nxt = self.next_index(index)
        return None if nxt is None else self.segments[nxt]

    def segment_before(self, index: int) -> Segment | None:
        prev = self.previous_index(index)
        return None if prev is None else self.segments[prev]


@dataclass(frozen=True)
class PointText:
    point: Point
    content: str = ""
    matrix: Matrix = field(default_factory=Matrix)
    style: Style = field(default_factory=Style)
    name: str | None = None


@dataclass(frozen=True)
class Group:
    children: tuple[SceneItem, ...] = ()
    style: Style = field(default_factory=Style)
    name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Layer(Group):
    """Top-level container of a project."""


@dataclass(frozen=True)
class Raster:
    """Bitmap item. Not exported."""

    source: str = ""
    position: Point = field(default_factory=Point)
    style: Style = field(default_factory=Style)
    name: str | None = None


@dataclass(frozen=True)
class PlacedSymbol:
    """Instance of a shared symbol definition. Not exported."""

    symbol: str = ""
    position: Point = field(default_factory=Point)
    style: Style = field(default_factory=Style)
    name: str | None = None


SceneItem = Group | Layer | Path | PointText | Raster | PlacedSymbol


@dataclass(frozen=True)
class Project:
    layers: tuple[Layer, ...] = ()
    # (width, height) of the view; emitted as width/height/viewBox when set
    view_size: tuple[float, float] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", tuple(self.layers))
