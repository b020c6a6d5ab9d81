"""Plan-view polygon primitives.

Point containment, overlap, clipping, projection and area functions shared
by the surface decomposer, the footprint generator and the constraint
checker.

All functions are total: degenerate input (fewer than three vertices,
zero-length edges, parallel lines) produces a zero, false, empty or None
result rather than an exception.
"""

from __future__ import annotations

import math
from typing import Iterator, Sequence

from ..value_objects import Point

__all__ = [
    "EDGE_TOLERANCE",
    "INTERIOR_NUDGE",
    "bounding_box",
    "angle_degrees",
    "centroid",
    "clip_polygon",
    "closest_point_on_segment",
    "constrain_point_to_polygon",
    "is_polygon_inside_polygon",
    "interpolate",
    "line_intersection",
    "overlap_area",
    "point_in_polygon",
    "point_inside_or_on_polygon",
    "point_on_edge",
    "point_to_line_distance",
    "point_to_segment_distance",
    "polygon_area",
    "polygon_perimeter",
    "polygons_overlap",
    "segments_cross",
    "signed_area",
    "unit_vector",
]

EDGE_TOLERANCE = 0.05
INTERIOR_NUDGE = 0.05

# Below this denominator two lines are treated as parallel.
_PARALLEL_EPSILON = 1e-4
# Distance under which a vertex counts as lying on the other polygon's boundary.
_BOUNDARY_EPSILON = 1e-9
_AREA_EPSILON = 1e-12


def _edges(polygon: Sequence[Point]) -> Iterator[tuple[Point, Point]]:
    """Yield (start, end) for each edge of a closed polygon."""
    count = len(polygon)
    for i in range(count):
        yield polygon[i], polygon[(i + 1) % count]


def _cross(origin: Point, a: Point, b: Point) -> float:
    """Z component of (a - origin) x (b - origin)."""
    return (a.x - origin.x) * (b.y - origin.y) - (a.y - origin.y) * (b.x - origin.x)


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Ray-casting parity test.

    Points exactly on the boundary may go either way; combine with
    point_on_edge when the boundary must count as inside.
    """
    if len(polygon) < 3:
        return False

    inside = False
    for start, end in _edges(polygon):
        if (start.y > point.y) != (end.y > point.y):
            x_cross = (end.x - start.x) * (point.y - start.y) / (end.y - start.y) + start.x
            if point.x < x_cross:
                inside = not inside
    return inside


def closest_point_on_segment(point: Point, start: Point, end: Point) -> Point:
    """Project a point onto a segment, clamped to its endpoints."""
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return start
    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return Point(start.x + t * dx, start.y + t * dy)


def point_to_segment_distance(point: Point, start: Point, end: Point) -> float:
    """Shortest distance from a point to a segment."""
    return point.distance_to(closest_point_on_segment(point, start, end))


def point_on_edge(
    point: Point,
    polygon: Sequence[Point],
    tolerance: float = EDGE_TOLERANCE,
) -> bool:
    """True if the point lies within tolerance of any polygon edge."""
    if len(polygon) < 3:
        return False
    return any(
        point_to_segment_distance(point, start, end) <= tolerance
        for start, end in _edges(polygon)
    )


def point_inside_or_on_polygon(
    point: Point,
    polygon: Sequence[Point],
    tolerance: float = EDGE_TOLERANCE,
) -> bool:
    """True if the point is inside the polygon or on its boundary."""
    return point_in_polygon(point, polygon) or point_on_edge(point, polygon, tolerance)


def _strictly_inside(point: Point, polygon: Sequence[Point]) -> bool:
    return point_in_polygon(point, polygon) and not point_on_edge(
        point, polygon, _BOUNDARY_EPSILON
    )


def segments_cross(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    """True if two segments cross at a single interior point.

    Touching at an endpoint or running collinear does not count.
    """
    d1 = _cross(q1, q2, p1)
    d2 = _cross(q1, q2, p2)
    d3 = _cross(p1, p2, q1)
    d4 = _cross(p1, p2, q2)
    return ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4))


def polygons_overlap(first: Sequence[Point], second: Sequence[Point]) -> bool:
    """True if two polygons share interior area.

    A shared vertex or a shared edge is not an overlap.
    """
    if len(first) < 3 or len(second) < 3:
        return False

    if any(_strictly_inside(v, second) for v in first):
        return True
    if any(_strictly_inside(v, first) for v in second):
        return True

    for a_start, a_end in _edges(first):
        for b_start, b_end in _edges(second):
            if segments_cross(a_start, a_end, b_start, b_end):
                return True

    # Coincident outlines have no interior vertex and no crossing edge.
    for own, other in ((first, second), (second, first)):
        center = centroid(own)
        if _strictly_inside(center, own) and _strictly_inside(center, other):
            return True
    return False


def line_intersection(p1: Point, p2: Point, p3: Point, p4: Point) -> Point | None:
    """Intersection of the infinite lines p1-p2 and p3-p4, or None if parallel."""
    denom = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
    if abs(denom) < _PARALLEL_EPSILON:
        return None
    a = p1.x * p2.y - p1.y * p2.x
    b = p3.x * p4.y - p3.y * p4.x
    x = (a * (p3.x - p4.x) - (p1.x - p2.x) * b) / denom
    y = (a * (p3.y - p4.y) - (p1.y - p2.y) * b) / denom
    return Point(x, y)


def signed_area(polygon: Sequence[Point]) -> float:
    """Shoelace area, positive for counter-clockwise vertex order."""
    if len(polygon) < 3:
        return 0.0
    total = 0.0
    for start, end in _edges(polygon):
        total += start.x * end.y - end.x * start.y
    return total / 2


def polygon_area(polygon: Sequence[Point]) -> float:
    """Absolute polygon area; 0 for fewer than three vertices."""
    return abs(signed_area(polygon))


def polygon_perimeter(polygon: Sequence[Point]) -> float:
    """Sum of edge lengths; 0 for fewer than three vertices."""
    if len(polygon) < 3:
        return 0.0
    return sum(start.distance_to(end) for start, end in _edges(polygon))


def centroid(polygon: Sequence[Point]) -> Point:
    """Arithmetic mean of the vertices (not the area centroid)."""
    if not polygon:
        return Point(0.0, 0.0)
    count = len(polygon)
    return Point(
        sum(p.x for p in polygon) / count,
        sum(p.y for p in polygon) / count,
    )


def bounding_box(polygon: Sequence[Point]) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y); all zero for an empty polygon."""
    if not polygon:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [p.x for p in polygon]
    ys = [p.y for p in polygon]
    return (min(xs), min(ys), max(xs), max(ys))


def _inside(point: Point, edge_start: Point, edge_end: Point, orientation: float) -> bool:
    return orientation * _cross(edge_start, edge_end, point) >= 0


def clip_polygon(
    subject: Sequence[Point],
    clip: Sequence[Point],
) -> tuple[Point, ...]:
    """Clip subject against each directed edge of clip (Sutherland-Hodgman).

    The clip polygon should be convex; it may be wound either way.

    Returns:
        Vertices of the clipped polygon, or an empty tuple when the
        polygons do not overlap.
    """
    if len(subject) < 3 or len(clip) < 3:
        return ()

    orientation = 1.0 if signed_area(clip) >= 0 else -1.0
    output = list(subject)

    for edge_start, edge_end in _edges(clip):
        if not output:
            break

        candidates = output
        output = []
        previous = candidates[-1]
        for current in candidates:
            if _inside(current, edge_start, edge_end, orientation):
                if not _inside(previous, edge_start, edge_end, orientation):
                    output.append(
                        line_intersection(previous, current, edge_start, edge_end)
                        or current
                    )
                output.append(current)
            elif _inside(previous, edge_start, edge_end, orientation):
                output.append(
                    line_intersection(previous, current, edge_start, edge_end)
                    or previous
                )
            previous = current

    if len(output) < 3 or polygon_area(output) <= _AREA_EPSILON:
        return ()
    return tuple(output)


def overlap_area(first: Sequence[Point], second: Sequence[Point]) -> float:
    """Area shared by two polygons (second treated as convex)."""
    return polygon_area(clip_polygon(first, second))


def is_polygon_inside_polygon(
    inner: Sequence[Point],
    outer: Sequence[Point],
    tolerance: float = EDGE_TOLERANCE,
) -> bool:
    """True if every vertex of inner is inside or on the boundary of outer."""
    if len(inner) < 3 or len(outer) < 3:
        return False
    return all(point_inside_or_on_polygon(v, outer, tolerance) for v in inner)


def constrain_point_to_polygon(point: Point, polygon: Sequence[Point]) -> Point:
    """Snap a point into the polygon.

    Points already inside or on the boundary are returned unchanged.
    Otherwise the nearest boundary point is nudged INTERIOR_NUDGE toward
    the centroid (never past it).
    """
    if len(polygon) < 3 or point_inside_or_on_polygon(point, polygon):
        return point

    nearest = min(
        (closest_point_on_segment(point, start, end) for start, end in _edges(polygon)),
        key=point.distance_to,
    )
    center = centroid(polygon)
    distance = nearest.distance_to(center)
    if distance == 0:
        return nearest
    step = min(INTERIOR_NUDGE, distance)
    return Point(
        nearest.x + (center.x - nearest.x) / distance * step,
        nearest.y + (center.y - nearest.y) / distance * step,
    )


def unit_vector(start: Point, end: Point) -> tuple[float, float]:
    """Unit direction from start to end; (0, 0) for coincident points."""
    length = start.distance_to(end)
    if length == 0:
        return (0.0, 0.0)
    return ((end.x - start.x) / length, (end.y - start.y) / length)


def interpolate(start: Point, end: Point, fraction: float) -> Point:
    """Point at fraction of the way from start to end."""
    return Point(
        start.x + fraction * (end.x - start.x),
        start.y + fraction * (end.y - start.y),
    )


def point_to_line_distance(point: Point, start: Point, end: Point) -> float:
    """Perpendicular distance from a point to the infinite line start-end."""
    length = start.distance_to(end)
    if length == 0:
        return point.distance_to(start)
    return abs(_cross(start, end, point)) / length


def angle_degrees(dx: float, dy: float) -> float:
    """Direction angle in degrees, normalised to [0, 360)."""
    return math.degrees(math.atan2(dy, dx)) % 360
