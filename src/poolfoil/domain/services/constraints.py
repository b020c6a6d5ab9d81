"""Placement constraints for stairs and splash-pool footprints.

Footprints must lie inside the pool outline (boundary contact allowed) and
must not share interior area with the other sub-feature. Checks return a
PlacementCheck instead of raising, so an editor can refuse to commit an
invalid edit and keep the last accepted geometry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..value_objects import FootprintPolygon, Point
from .geometry import EDGE_TOLERANCE, point_inside_or_on_polygon, polygons_overlap

logger = logging.getLogger(__name__)

__all__ = [
    "PlacementCheck",
    "validate_element_placement",
    "validate_no_overlap",
    "validate_polygon_in_pool",
    "validate_vertex_position",
]


@dataclass(frozen=True)
class PlacementCheck:
    """Outcome of a placement check.

    Attributes:
        valid: True if the placement may be committed.
        error: Reason for rejection when not valid.
    """

    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> PlacementCheck:
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> PlacementCheck:
        return cls(valid=False, error=error)


def validate_polygon_in_pool(
    footprint: Sequence[Point],
    pool_outline: Sequence[Point],
    tolerance: float = EDGE_TOLERANCE,
    label: str = "Element",
) -> PlacementCheck:
    """Check that every footprint vertex is inside or on the pool outline.

    Args:
        footprint: Footprint vertices.
        pool_outline: Pool outline vertices.
        tolerance: Distance within which a vertex counts as on the boundary.
        label: Name used in the error message.

    Returns:
        PlacementCheck. A pool outline with fewer than three vertices is
        rejected (nothing to place into yet); a footprint with fewer than
        three vertices is accepted (nothing drawn yet).
    """
    if len(pool_outline) < 3:
        return PlacementCheck.fail("Draw the pool outline before placing elements")
    if len(footprint) < 3:
        return PlacementCheck.ok()

    for number, vertex in enumerate(footprint, start=1):
        if not point_inside_or_on_polygon(vertex, pool_outline, tolerance):
            return PlacementCheck.fail(
                f"{label} vertex {number} ({vertex.x:.2f}, {vertex.y:.2f}) "
                "lies outside the pool outline"
            )
    return PlacementCheck.ok()


def validate_no_overlap(
    first: Sequence[Point],
    second: Sequence[Point],
    first_label: str = "Stairs",
    second_label: str = "splash pool",
) -> PlacementCheck:
    """Check that two footprints share no interior area.

    Touching at a point or along an edge is allowed.
    """
    if len(first) < 3 or len(second) < 3:
        return PlacementCheck.ok()
    if polygons_overlap(first, second):
        return PlacementCheck.fail(
            f"{first_label} and {second_label} footprints overlap"
        )
    return PlacementCheck.ok()


def validate_element_placement(
    footprint: FootprintPolygon,
    pool_outline: Sequence[Point],
    other: FootprintPolygon | None = None,
) -> PlacementCheck:
    """Run the in-pool check, then the overlap check against the other feature.

    Only the first failure is reported.
    """
    inside = validate_polygon_in_pool(
        footprint.vertices, pool_outline, label=footprint.feature.label
    )
    if not inside.valid:
        logger.debug("Placement rejected: %s", inside.error)
        return inside

    if other is None:
        return PlacementCheck.ok()

    check = validate_no_overlap(
        footprint.vertices,
        other.vertices,
        first_label=footprint.feature.label,
        second_label=other.feature.label.lower(),
    )
    if not check.valid:
        logger.debug("Placement rejected: %s", check.error)
    return check


def validate_vertex_position(
    footprint: FootprintPolygon,
    vertex_index: int,
    new_position: Point,
    pool_outline: Sequence[Point],
    other: FootprintPolygon | None = None,
) -> PlacementCheck:
    """Check a dragged footprint vertex before committing the edit.

    The edit is evaluated on a copy of the footprint, so a rejected edit
    leaves the accepted geometry untouched.
    """
    if not 0 <= vertex_index < len(footprint.vertices):
        return PlacementCheck.fail(f"No vertex {vertex_index + 1} on this footprint")

    vertices = list(footprint.vertices)
    vertices[vertex_index] = new_position
    edited = FootprintPolygon(feature=footprint.feature, vertices=tuple(vertices))
    return validate_element_placement(edited, pool_outline, other)
