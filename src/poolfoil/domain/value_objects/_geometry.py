"""Plan-view geometry value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """Plan-view coordinate in meters, in the pool-local frame.

    Closed-form pool outlines are centred on the origin, so negative
    coordinates are valid.
    """

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def offset(self, dx: float, dy: float) -> Point:
        """Return a new point translated by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)


# Ordered vertices, implicitly closed. Fewer than three vertices is a
# degenerate polygon, which geometry functions accept.
Polygon = tuple[Point, ...]


@dataclass(frozen=True)
class StepLine:
    """A line drawn across a stair footprint where one tread meets the next."""

    start: Point
    end: Point

    @property
    def length(self) -> float:
        """Length of the step line."""
        return self.start.distance_to(self.end)
