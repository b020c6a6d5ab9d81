"""Tests for stairs and splash-pool footprint generation.

Tests cover:
- Inward directions at pool corners
- Splash-pool rectangles and their E/F intersection points
- Rectangular stairs and the direction flag
- Diagonal stairs with the smallest tread in the corner
- Scalene stairs with expanding treads
"""

from __future__ import annotations

import math

import pytest

from poolfoil.domain.services import (
    FootprintGenerator,
    analyze_triangle,
    corner_directions,
    expanding_tread_spans,
)
from poolfoil.domain.services.footprints import slice_triangle, step_line_positions
from poolfoil.domain.services.geometry import point_to_line_distance, polygon_area
from poolfoil.domain.value_objects import (
    FeatureKind,
    Point,
    SplashAnchor,
    SplashPoolSpec,
    StairsDirection,
    StairsShape,
    StairsSpec,
)


@pytest.fixture
def outline() -> tuple[Point, ...]:
    return (Point(-4, -2), Point(4, -2), Point(4, 2), Point(-4, 2))


@pytest.fixture
def generator() -> FootprintGenerator:
    return FootprintGenerator()


@pytest.fixture
def scalene_vertices() -> tuple[Point, ...]:
    """Base (0,0)-(4,0), apex (1,2), height 2."""
    return (Point(0, 0), Point(4, 0), Point(1, 2))


def assert_point(actual: Point, x: float, y: float) -> None:
    assert actual.x == pytest.approx(x)
    assert actual.y == pytest.approx(y)


# =============================================================================
# Corner directions
# =============================================================================


class TestCornerDirections:
    """Tests for inward directions at outline vertices."""

    def test_corner_a(self, outline: tuple[Point, ...]) -> None:
        directions = corner_directions(outline, 0)
        assert directions.first == pytest.approx((1.0, 0.0))
        assert directions.second == pytest.approx((0.0, 1.0))
        assert directions.first_reach == pytest.approx(8.0)
        assert directions.second_reach == pytest.approx(4.0)

    def test_corner_b_first_follows_long_wall(self, outline: tuple[Point, ...]) -> None:
        directions = corner_directions(outline, 1)
        assert directions.first == pytest.approx((-1.0, 0.0))
        assert directions.second == pytest.approx((0.0, 1.0))

    def test_index_wraps(self, outline: tuple[Point, ...]) -> None:
        assert corner_directions(outline, 4) == corner_directions(outline, 0)


# =============================================================================
# Splash pool
# =============================================================================


class TestSplashPoolFootprint:
    """Tests for the splash-pool rectangle."""

    def test_along_length(
        self,
        generator: FootprintGenerator,
        outline: tuple[Point, ...],
        corner_splash_pool: SplashPoolSpec,
    ) -> None:
        footprint = generator.splash_pool_footprint(outline, corner_splash_pool)
        assert footprint is not None
        assert footprint.feature is FeatureKind.SPLASH_POOL
        expected = [(-4, -2), (-2, -2), (-2, -0.5), (-4, -0.5)]
        for vertex, (x, y) in zip(footprint.vertices, expected):
            assert_point(vertex, x, y)

    def test_along_width_swaps_axes(
        self, generator: FootprintGenerator, outline: tuple[Point, ...]
    ) -> None:
        splash = SplashPoolSpec(
            width=2.0, length=1.5, depth=0.5, direction=StairsDirection.ALONG_WIDTH
        )
        footprint = generator.splash_pool_footprint(outline, splash)
        assert footprint is not None
        assert_point(footprint.vertices[1], -4, 0)
        assert_point(footprint.vertices[2], -2.5, 0)
        assert polygon_area(footprint.vertices) == pytest.approx(3.0)

    def test_no_outline_yet(
        self, generator: FootprintGenerator, corner_splash_pool: SplashPoolSpec
    ) -> None:
        assert generator.splash_pool_footprint((), corner_splash_pool) is None

    def test_anchor_e_on_the_wall(
        self,
        generator: FootprintGenerator,
        outline: tuple[Point, ...],
        corner_splash_pool: SplashPoolSpec,
    ) -> None:
        point, directions = generator.splash_anchor(
            outline, corner_splash_pool, SplashAnchor.E
        )
        assert_point(point, -2, -2)
        assert directions.first == pytest.approx((1.0, 0.0))
        assert directions.first_reach == pytest.approx(6.0)

    def test_anchor_f_on_the_adjacent_wall(
        self,
        generator: FootprintGenerator,
        outline: tuple[Point, ...],
        corner_splash_pool: SplashPoolSpec,
    ) -> None:
        point, directions = generator.splash_anchor(
            outline, corner_splash_pool, SplashAnchor.F
        )
        assert_point(point, -4, -0.5)
        assert directions.first == pytest.approx((0.0, 1.0))
        assert directions.first_reach == pytest.approx(2.5)


# =============================================================================
# Rectangular stairs
# =============================================================================


class TestRectangularStairs:
    """Tests for rectangular stairs."""

    def test_along_width_from_corner_b(
        self,
        generator: FootprintGenerator,
        outline: tuple[Point, ...],
        corner_b_stairs: StairsSpec,
    ) -> None:
        layout = generator.stairs_layout(outline, corner_b_stairs)
        assert layout is not None
        assert layout.shape is StairsShape.RECTANGULAR
        expected = [(4, -2), (4, -0.5), (2.8, -0.5), (2.8, -2)]
        for vertex, (x, y) in zip(layout.footprint.vertices, expected):
            assert_point(vertex, x, y)

    def test_equal_treads(
        self,
        generator: FootprintGenerator,
        outline: tuple[Point, ...],
        corner_b_stairs: StairsSpec,
    ) -> None:
        layout = generator.stairs_layout(outline, corner_b_stairs)
        assert layout is not None
        assert [t.index for t in layout.treads] == [1, 2, 3, 4]
        assert all(t.depth == pytest.approx(0.3) for t in layout.treads)
        assert all(t.outer_edge == pytest.approx(1.5) for t in layout.treads)
        assert layout.tread_area == pytest.approx(1.8)
        assert len(layout.step_lines) == 3
        assert layout.total_path_length == pytest.approx(1.2)

    def test_full_width_uses_wall_reach(
        self, generator: FootprintGenerator, outline: tuple[Point, ...]
    ) -> None:
        stairs = StairsSpec(width=None, direction=StairsDirection.ALONG_WIDTH)
        layout = generator.stairs_layout(outline, stairs)
        assert layout is not None
        assert layout.treads[0].outer_edge == pytest.approx(4.0)

    def test_along_length(
        self, generator: FootprintGenerator, outline: tuple[Point, ...]
    ) -> None:
        stairs = StairsSpec(width=2.0, direction=StairsDirection.ALONG_LENGTH)
        layout = generator.stairs_layout(outline, stairs)
        assert layout is not None
        assert_point(layout.footprint.vertices[1], -2, -2)
        assert_point(layout.footprint.vertices[2], -2, -0.8)

    def test_anchored_at_splash_point(
        self,
        generator: FootprintGenerator,
        outline: tuple[Point, ...],
        corner_splash_pool: SplashPoolSpec,
    ) -> None:
        stairs = StairsSpec(
            splash_anchor=SplashAnchor.E,
            width=1.0,
            direction=StairsDirection.ALONG_LENGTH,
        )
        layout = generator.stairs_layout(outline, stairs, corner_splash_pool)
        assert layout is not None
        assert_point(layout.footprint.vertices[0], -2, -2)
        assert_point(layout.footprint.vertices[1], -1, -2)

    def test_splash_anchor_without_splash_pool_uses_corner(
        self,
        generator: FootprintGenerator,
        outline: tuple[Point, ...],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        stairs = StairsSpec(splash_anchor=SplashAnchor.F)
        layout = generator.stairs_layout(outline, stairs)
        assert layout is not None
        assert_point(layout.footprint.vertices[0], -4, -2)
        assert "no splash pool" in caplog.text

    def test_no_outline_yet(self, generator: FootprintGenerator) -> None:
        assert generator.stairs_layout((), StairsSpec()) is None


# =============================================================================
# Diagonal stairs
# =============================================================================


class TestDiagonalStairs:
    """Tests for 45 degree corner stairs."""

    @pytest.fixture
    def layout(self, generator: FootprintGenerator, outline: tuple[Point, ...]):
        stairs = StairsSpec(shape=StairsShape.DIAGONAL_45, step_count=4, step_depth=0.3)
        return generator.stairs_layout(outline, stairs)

    def test_legs_along_both_walls(self, layout) -> None:
        anchor, along_first, along_second = layout.footprint.vertices
        assert_point(anchor, -4, -2)
        assert anchor.distance_to(along_first) == pytest.approx(1.2)
        assert anchor.distance_to(along_second) == pytest.approx(1.2)
        assert layout.total_path_length == pytest.approx(1.2 * math.sqrt(2))

    def test_first_step_line_at_quarter_distance(self, layout) -> None:
        anchor, along_first, along_second = layout.footprint.vertices
        to_hypotenuse = point_to_line_distance(anchor, along_first, along_second)
        line = layout.step_lines[0]
        assert point_to_line_distance(anchor, line.start, line.end) == pytest.approx(
            to_hypotenuse / 4
        )

    def test_smallest_tread_in_corner(self, layout) -> None:
        areas = [t.area for t in layout.treads]
        assert len(layout.treads[0].polygon) == 3
        assert areas == sorted(areas)
        assert areas[0] == pytest.approx(0.045)
        assert sum(areas) == pytest.approx(0.72)

    def test_equal_tread_depths(self, layout) -> None:
        expected = 1.2 / math.sqrt(2) / 4
        assert all(t.depth == pytest.approx(expected) for t in layout.treads)


# =============================================================================
# Scalene stairs
# =============================================================================


class TestTriangleAnalysis:
    """Tests for base, apex and height identification."""

    def test_longest_edge_is_base(self, scalene_vertices: tuple[Point, ...]) -> None:
        analysis = analyze_triangle(scalene_vertices)
        assert analysis is not None
        assert analysis.apex == Point(1, 2)
        assert analysis.base_length == pytest.approx(4.0)
        assert analysis.height == pytest.approx(2.0)
        assert analysis.left_leg == pytest.approx(math.sqrt(5))
        assert analysis.right_leg == pytest.approx(math.sqrt(13))

    def test_scalene_and_isosceles(self, scalene_vertices: tuple[Point, ...]) -> None:
        assert analyze_triangle(scalene_vertices).is_scalene is True
        isosceles = analyze_triangle((Point(0, 0), Point(2, 0), Point(1, 1.7)))
        assert isosceles.is_scalene is False

    def test_descent_points_away_from_apex(
        self, scalene_vertices: tuple[Point, ...]
    ) -> None:
        assert analyze_triangle(scalene_vertices).descent_angle == pytest.approx(270.0)

    def test_needs_three_vertices(self) -> None:
        assert analyze_triangle((Point(0, 0), Point(1, 0))) is None


class TestExpandingTreads:
    """Tests for expanding tread depths."""

    def test_depths_grow_and_sum_to_height(
        self, scalene_vertices: tuple[Point, ...]
    ) -> None:
        analysis = analyze_triangle(scalene_vertices)
        spans = expanding_tread_spans(analysis, 4, 0.2, 0.3)
        depths = [s.depth for s in spans]
        assert depths == sorted(depths)
        assert depths[0] == pytest.approx(0.4)
        assert depths[-1] == pytest.approx(0.6)
        assert sum(depths) == pytest.approx(2.0)
        assert spans[-1].width_end == pytest.approx(4.0)

    def test_single_step_fills_triangle(
        self, scalene_vertices: tuple[Point, ...]
    ) -> None:
        analysis = analyze_triangle(scalene_vertices)
        spans = expanding_tread_spans(analysis, 1, 0.2, 0.3)
        assert len(spans) == 1
        assert spans[0].depth == pytest.approx(2.0)

    def test_step_line_positions(self, scalene_vertices: tuple[Point, ...]) -> None:
        analysis = analyze_triangle(scalene_vertices)
        positions = step_line_positions(analysis, 4, 0.2, 0.3)
        assert len(positions) == 3
        assert positions[0] == pytest.approx(0.2)

    def test_first_slice_is_triangle(self, scalene_vertices: tuple[Point, ...]) -> None:
        analysis = analyze_triangle(scalene_vertices)
        assert len(slice_triangle(analysis, 0.0, 0.4)) == 3
        assert len(slice_triangle(analysis, 0.4, 0.9)) == 4

    def test_layout_treads_cover_triangle(
        self, generator: FootprintGenerator, scalene_vertices: tuple[Point, ...]
    ) -> None:
        stairs = StairsSpec(
            shape=StairsShape.SCALENE_TRIANGLE,
            vertices=scalene_vertices,
            step_count=4,
        )
        layout = generator.stairs_layout((), stairs)
        assert layout is not None
        assert layout.shape is StairsShape.SCALENE_TRIANGLE
        assert layout.tread_area == pytest.approx(4.0)
        assert layout.total_path_length == pytest.approx(2.0)
        assert len(layout.step_lines) == 3
