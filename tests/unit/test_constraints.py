"""Tests for stairs and splash-pool placement constraints."""

from __future__ import annotations

import pytest

from poolfoil.domain.services import (
    PlacementCheck,
    validate_element_placement,
    validate_no_overlap,
    validate_polygon_in_pool,
    validate_vertex_position,
)
from poolfoil.domain.value_objects import FeatureKind, FootprintPolygon, Point


@pytest.fixture
def outline() -> tuple[Point, ...]:
    return (Point(-4, -2), Point(4, -2), Point(4, 2), Point(-4, 2))


@pytest.fixture
def splash() -> FootprintPolygon:
    """Splash pool filling corner A, every vertex on or inside the boundary."""
    return FootprintPolygon(
        feature=FeatureKind.SPLASH_POOL,
        vertices=(Point(-4, -2), Point(-2, -2), Point(-2, -0.5), Point(-4, -0.5)),
    )


def stairs_at(*vertices: tuple[float, float]) -> FootprintPolygon:
    return FootprintPolygon(
        feature=FeatureKind.STAIRS,
        vertices=tuple(Point(x, y) for x, y in vertices),
    )


class TestValidatePolygonInPool:
    """Tests for the in-pool check."""

    def test_footprint_on_boundary_passes(
        self, outline: tuple[Point, ...], splash: FootprintPolygon
    ) -> None:
        """Boundary vertices count as inside within the edge tolerance."""
        check = validate_polygon_in_pool(splash.vertices, outline)
        assert check.valid is True
        assert check.error is None

    def test_vertex_just_outside_within_tolerance_passes(
        self, outline: tuple[Point, ...]
    ) -> None:
        footprint = (Point(3, 1), Point(4.04, 1), Point(4.04, 2), Point(3, 2))
        assert validate_polygon_in_pool(footprint, outline).valid is True

    def test_vertex_outside_fails_with_number(self, outline: tuple[Point, ...]) -> None:
        footprint = (Point(3, 1), Point(5, 1), Point(5, 2), Point(3, 2))
        check = validate_polygon_in_pool(footprint, outline, label="Stairs")
        assert check.valid is False
        assert check.error is not None
        assert "Stairs vertex 2" in check.error
        assert "outside the pool outline" in check.error

    def test_missing_outline_fails(self) -> None:
        check = validate_polygon_in_pool((Point(0, 0), Point(1, 0), Point(0, 1)), ())
        assert check.valid is False
        assert "pool outline" in check.error

    def test_undrawn_footprint_passes(self, outline: tuple[Point, ...]) -> None:
        assert validate_polygon_in_pool((Point(0, 0),), outline).valid is True


class TestValidateNoOverlap:
    """Tests for the overlap check."""

    def test_single_touching_point_passes(self) -> None:
        first = (Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1))
        second = (Point(1, 1), Point(2, 1), Point(2, 2), Point(1, 2))
        assert validate_no_overlap(first, second).valid is True

    def test_shared_interior_fails(self) -> None:
        first = (Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2))
        second = (Point(1, 1), Point(3, 1), Point(3, 3), Point(1, 3))
        check = validate_no_overlap(first, second)
        assert check.valid is False
        assert check.error == "Stairs and splash pool footprints overlap"

    def test_degenerate_footprint_passes(self) -> None:
        square = (Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2))
        assert validate_no_overlap((Point(1, 1),), square).valid is True


class TestValidateElementPlacement:
    """Tests for the combined placement check."""

    def test_stairs_beside_splash_pool_pass(
        self, outline: tuple[Point, ...], splash: FootprintPolygon
    ) -> None:
        stairs = stairs_at((4, -2), (4, -0.5), (2.8, -0.5), (2.8, -2))
        assert validate_element_placement(stairs, outline, splash).valid is True

    def test_stairs_inside_splash_pool_fail(
        self, outline: tuple[Point, ...], splash: FootprintPolygon
    ) -> None:
        stairs = stairs_at((-3, -2), (-1, -2), (-1, -1), (-3, -1))
        check = validate_element_placement(stairs, outline, splash)
        assert check.valid is False
        assert "overlap" in check.error

    def test_outside_reported_before_overlap(
        self, outline: tuple[Point, ...], splash: FootprintPolygon
    ) -> None:
        stairs = stairs_at((-5, -2), (-1, -2), (-1, -1), (-5, -1))
        check = validate_element_placement(stairs, outline, splash)
        assert check.valid is False
        assert "outside" in check.error

    def test_without_other_feature(self, outline: tuple[Point, ...]) -> None:
        stairs = stairs_at((0, 0), (1, 0), (1, 1))
        assert validate_element_placement(stairs, outline) == PlacementCheck.ok()


class TestValidateVertexPosition:
    """Tests for checking a dragged vertex before committing it."""

    def test_move_inside_pool_accepted(
        self, outline: tuple[Point, ...], splash: FootprintPolygon
    ) -> None:
        check = validate_vertex_position(splash, 2, Point(-1.5, -0.5), outline)
        assert check.valid is True

    def test_move_outside_pool_rejected_and_original_kept(
        self, outline: tuple[Point, ...], splash: FootprintPolygon
    ) -> None:
        original = splash.vertices
        check = validate_vertex_position(splash, 2, Point(-2, 3), outline)
        assert check.valid is False
        assert splash.vertices == original

    def test_move_into_other_feature_rejected(
        self, outline: tuple[Point, ...], splash: FootprintPolygon
    ) -> None:
        stairs = stairs_at((0, -2), (1, -2), (1, -1), (0, -1))
        check = validate_vertex_position(stairs, 3, Point(-3, -1), outline, splash)
        assert check.valid is False

    def test_unknown_vertex_rejected(
        self, outline: tuple[Point, ...], splash: FootprintPolygon
    ) -> None:
        assert validate_vertex_position(splash, 7, Point(0, 0), outline).valid is False
