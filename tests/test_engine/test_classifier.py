"""Tests for the shape classifier."""

from __future__ import annotations

import pytest

from scenesvg.engine.classifier import ShapeClassifier, ShapeKind
from scenesvg.engine.errors import DegeneratePathError
from scenesvg.models.scene import Path, Segment
from scenesvg.utils.geometry import GeometryKernel, Point
from tests.conftest import (
    angle_diff,
    bezier_path,
    circle_path,
    ellipse_path,
    map_path,
    rect_path,
    rotate_path,
    round_rect_path,
    straight_path,
    translate_path,
)

TOL = 1e-6


# ---------------------------------------------------------------------------
# Straight family
# ---------------------------------------------------------------------------

class TestStraightShapes:
    def test_axis_aligned_square_is_rect(self, classifier):
        path = straight_path([(0, 0), (0, 10), (10, 10), (10, 0)])
        result = classifier.classify(path)
        assert result.kind is ShapeKind.RECT
        assert result.params["x"] == pytest.approx(0, abs=TOL)
        assert result.params["y"] == pytest.approx(0, abs=TOL)
        assert result.params["width"] == pytest.approx(10)
        assert result.params["height"] == pytest.approx(10)
        assert result.rotation == 0

    def test_rect_dimensions(self, classifier):
        result = classifier.classify(rect_path(5, 7, 30, 12))
        assert result.kind is ShapeKind.RECT
        assert result.params == pytest.approx({"x": 5, "y": 7, "width": 30, "height": 12})
        assert result.center == Point(20, 13)

    def test_parallelogram_is_polygon(self, classifier):
        path = straight_path([(0, 0), (10, 0), (15, 10), (5, 10)])
        assert classifier.classify(path).kind is ShapeKind.POLYGON

    def test_open_quad_is_polyline(self, classifier):
        path = straight_path([(0, 0), (0, 10), (10, 10), (10, 0)], closed=False)
        assert classifier.classify(path).kind is ShapeKind.POLYLINE

    def test_triangle(self, classifier):
        closed = classifier.classify(straight_path([(0, 0), (10, 0), (5, 8)]))
        assert closed.kind is ShapeKind.POLYGON
        assert closed.params["points"] == [Point(0, 0), Point(10, 0), Point(5, 8)]
        opened = classifier.classify(straight_path([(0, 0), (10, 0), (5, 8)], closed=False))
        assert opened.kind is ShapeKind.POLYLINE

    def test_two_segments_is_line(self, classifier):
        result = classifier.classify(straight_path([(1, 2), (3, 4)], closed=False))
        assert result.kind is ShapeKind.LINE
        assert result.params == {"x1": 1, "y1": 2, "x2": 3, "y2": 4}

    def test_pentagon_stays_polygon(self, classifier):
        coords = [(0, 0), (4, -3), (8, 0), (6, 5), (2, 5)]
        assert classifier.classify(straight_path(coords)).kind is ShapeKind.POLYGON


# ---------------------------------------------------------------------------
# Arc family
# ---------------------------------------------------------------------------

class TestRoundShapes:
    def test_circle_at_origin(self, classifier):
        result = classifier.classify(circle_path(0, 0, 5))
        assert result.kind is ShapeKind.CIRCLE
        assert result.params["cx"] == pytest.approx(0, abs=TOL)
        assert result.params["cy"] == pytest.approx(0, abs=TOL)
        assert result.params["r"] == pytest.approx(5)
        assert result.rotation == 0

    def test_ellipse(self, classifier):
        result = classifier.classify(ellipse_path(2, 1, 8, 3))
        assert result.kind is ShapeKind.ELLIPSE
        assert result.params == pytest.approx({"cx": 2, "cy": 1, "rx": 8, "ry": 3})
        assert result.rotation == 0

    def test_round_rect(self, classifier):
        result = classifier.classify(round_rect_path(0, 0, 40, 20, 5, 3))
        assert result.kind is ShapeKind.ROUNDRECT
        assert result.kind.tag == "rect"
        assert result.params == pytest.approx(
            {"x": 0, "y": 0, "width": 40, "height": 20, "rx": 5, "ry": 3}, abs=TOL
        )
        assert result.rotation == 0

    def test_open_circle_is_path(self, classifier):
        path = circle_path(0, 0, 5, closed=False)
        assert classifier.classify(path).kind is ShapeKind.PATH

    def test_wrong_handle_ratio_is_path(self, classifier):
        loose = map_path(circle_path(0, 0, 5), lambda p: p, lambda h: h * 0.8)
        assert classifier.classify(loose).kind is ShapeKind.PATH

    def test_off_center_quarters_are_path(self, classifier):
        # Four valid quarter arcs with different radii: egg, not ellipse.
        anchors = [Point(-4, 0), Point(0, -3), Point(6, 0), Point(0, 3)]
        corners = [Point(-4, -3), Point(6, -3), Point(6, 3), Point(-4, 3)]
        egg = bezier_path(anchors, corners)
        assert classifier.classify(egg).kind is ShapeKind.PATH

    def test_bad_corner_handle_is_path(self, classifier):
        path = round_rect_path(0, 0, 40, 20, 5, 5)
        segments = list(path.segments)
        segments[0] = Segment(segments[0].point, segments[0].handle_in, segments[0].handle_out * 2)
        assert classifier.classify(Path(segments=segments, closed=True)).kind is ShapeKind.PATH

    def test_uneven_corner_radii_are_path(self, classifier):
        # Valid quarter arcs and straight sides, but the bottom-left corner is larger.
        anchors = [
            Point(8, 20), Point(0, 12), Point(0, 5), Point(5, 0),
            Point(35, 0), Point(40, 5), Point(40, 15), Point(35, 20),
        ]
        corners = [Point(0, 20), None, Point(0, 0), None, Point(40, 0), None, Point(40, 20), None]
        path = bezier_path(anchors, corners)
        assert all(classifier.is_arc(path, i) for i in (0, 2, 4, 6))
        assert classifier.classify(path).kind is ShapeKind.PATH

    def test_zero_handle_is_not_arc(self, classifier):
        path = circle_path(0, 0, 5)
        segments = list(path.segments)
        segments[1] = Segment(segments[1].point, Point(), segments[1].handle_out)
        broken = Path(segments=segments, closed=True)
        assert not classifier.is_arc(broken, 0)
        assert classifier.classify(broken).kind is ShapeKind.PATH

    def test_arc_transitions(self, classifier):
        path = circle_path(3, 3, 2)
        assert all(classifier.is_arc(path, i) for i in range(4))


# ---------------------------------------------------------------------------
# Degenerate input
# ---------------------------------------------------------------------------

class TestDegenerate:
    def test_empty_path_raises(self, classifier):
        with pytest.raises(DegeneratePathError, match="no segments"):
            classifier.classify(Path(name="ghost"))

    def test_generic_results_are_independent(self, classifier):
        path = Path(segments=[Segment(Point(1, 1))])
        first = classifier.classify(path)
        first.params["d"] = "M1,1"
        assert classifier.classify(path).params == {}

    def test_single_segment_is_path(self, classifier):
        path = Path(segments=[Segment(Point(1, 1))], closed=True)
        assert classifier.classify(path).kind is ShapeKind.PATH

    def test_collapsed_rect_is_not_rect(self, classifier):
        path = straight_path([(0, 0), (0, 0), (10, 10), (10, 0)])
        assert classifier.classify(path).kind is ShapeKind.POLYGON


# ---------------------------------------------------------------------------
# Invariance
# ---------------------------------------------------------------------------

BUILDERS = [
    ("rect", lambda: rect_path(0, 0, 20, 10), ("width", "height"), ("x", "y")),
    ("circle", lambda: circle_path(0, 0, 5), ("r",), ("cx", "cy")),
    ("ellipse", lambda: ellipse_path(0, 0, 8, 3), ("rx", "ry"), ("cx", "cy")),
    (
        "roundrect",
        lambda: round_rect_path(0, 0, 40, 20, 5, 3),
        ("width", "height", "rx", "ry"),
        ("x", "y"),
    ),
]


@pytest.mark.parametrize("label,build,sizes,positions", BUILDERS, ids=[b[0] for b in BUILDERS])
def test_translation_only_moves_position(classifier, label, build, sizes, positions):
    offset = Point(123.5, -42.25)
    base = classifier.classify(build())
    moved = classifier.classify(translate_path(build(), offset))
    assert moved.kind is base.kind
    assert moved.rotation == base.rotation
    for key in sizes:
        assert moved.params[key] == pytest.approx(base.params[key])
    x_key, y_key = positions
    assert moved.params[x_key] == pytest.approx(base.params[x_key] + offset.x)
    assert moved.params[y_key] == pytest.approx(base.params[y_key] + offset.y)


@pytest.mark.parametrize("theta", [30.0, -45.0, 90.0, 135.0, 180.0, 271.5])
def test_rotated_rect_reports_rotation(classifier, theta):
    pivot = Point(7, -3)
    path = rotate_path(rect_path(0, 0, 20, 10), theta, pivot)
    result = classifier.classify(path)
    assert result.kind is ShapeKind.RECT
    assert angle_diff(result.rotation, theta) == pytest.approx(0, abs=TOL)
    assert result.params["width"] == pytest.approx(20)
    assert result.params["height"] == pytest.approx(10)
    # Position is expressed in the untilted frame around the rotated center.
    expected_center = Point(10, 5).rotate(theta, pivot)
    assert result.center.x == pytest.approx(expected_center.x)
    assert result.center.y == pytest.approx(expected_center.y)
    assert result.params["x"] == pytest.approx(expected_center.x - 10)
    assert result.params["y"] == pytest.approx(expected_center.y - 5)


@pytest.mark.parametrize("theta", [360.0, 720.0, 1e-10])
def test_full_turns_snap_to_zero(classifier, theta):
    result = classifier.classify(rotate_path(rect_path(0, 0, 20, 10), theta))
    assert result.kind is ShapeKind.RECT
    assert result.rotation == 0.0


@pytest.mark.parametrize("theta", [30.0, 200.0, -75.0])
def test_rotated_ellipse(classifier, theta):
    result = classifier.classify(rotate_path(ellipse_path(4, 4, 8, 3), theta, Point(4, 4)))
    assert result.kind is ShapeKind.ELLIPSE
    assert angle_diff(result.rotation, theta, period=180.0) == pytest.approx(0, abs=TOL)
    assert result.params == pytest.approx({"cx": 4, "cy": 4, "rx": 8, "ry": 3})


def test_rotated_circle_has_no_rotation(classifier):
    result = classifier.classify(rotate_path(circle_path(1, 2, 6), 37, Point(1, 2)))
    assert result.kind is ShapeKind.CIRCLE
    assert result.rotation == 0
    assert result.params["r"] == pytest.approx(6)


def test_rotated_round_rect(classifier):
    theta = 45.0
    result = classifier.classify(rotate_path(round_rect_path(0, 0, 40, 20, 5, 3), theta))
    assert result.kind is ShapeKind.ROUNDRECT
    assert result.rotation == pytest.approx(theta)
    for key, value in {"width": 40, "height": 20, "rx": 5, "ry": 3}.items():
        assert result.params[key] == pytest.approx(value)


# ---------------------------------------------------------------------------
# Shared tolerance
# ---------------------------------------------------------------------------

def test_tolerance_drives_arc_verdict():
    nearly = map_path(circle_path(0, 0, 5), lambda p: p, lambda h: h * (1 + 1e-4))
    assert ShapeClassifier(GeometryKernel(1e-7)).classify(nearly).kind is ShapeKind.PATH
    assert ShapeClassifier(GeometryKernel(1e-3)).classify(nearly).kind is ShapeKind.CIRCLE


def test_tolerance_drives_rect_verdict():
    skewed = straight_path([(0, 0), (0, 10), (10, 10.001), (10, 0.001)])
    assert ShapeClassifier(GeometryKernel(1e-7)).classify(skewed).kind is ShapeKind.POLYGON
    assert ShapeClassifier(GeometryKernel(1e-3)).classify(skewed).kind is ShapeKind.RECT
