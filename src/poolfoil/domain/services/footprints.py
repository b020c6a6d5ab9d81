"""Footprint generation for stairs and splash pools.

Every footprint starts from an anchor (a pool corner, or a point where a
splash pool meets the pool wall) and two inward unit vectors:

- Rectangular stairs: a rectangle whose width and depth axes swap with the
  direction flag, cut into equal treads.
- Diagonal (45 degree) stairs: a right triangle with legs along both walls
  and the hypotenuse facing the pool; step lines run parallel to the
  hypotenuse at i/N of the way out, so the smallest tread sits in the
  corner.
- Scalene-triangle stairs: the longest edge is the base and the opposite
  vertex the apex; treads are expanding trapezoids whose depth grows from
  the apex to the base and sums to the apex-to-base height.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..value_objects import (
    DEFAULT_STAIRS_WIDTH,
    FeatureKind,
    FootprintPolygon,
    Point,
    SplashAnchor,
    SplashPoolSpec,
    StairsDirection,
    StairsLayout,
    StairsShape,
    StairsSpec,
    StepLine,
    Tread,
)
from .geometry import (
    angle_degrees,
    interpolate,
    point_to_line_distance,
    polygon_area,
    unit_vector,
)

logger = logging.getLogger(__name__)

__all__ = [
    "SCALENE_THRESHOLD",
    "FootprintGenerator",
    "InwardDirections",
    "TreadSpan",
    "TriangleAnalysis",
    "analyze_triangle",
    "corner_directions",
    "expanding_tread_spans",
    "slice_triangle",
    "step_line_positions",
]

# Legs differing by more than this make a triangle scalene.
SCALENE_THRESHOLD = 0.10

Direction = tuple[float, float]


@dataclass(frozen=True)
class InwardDirections:
    """Two unit vectors pointing from an anchor into the pool.

    At a pool corner, ``first`` follows the wall closer to the x axis and
    ``second`` the other wall. At a splash-pool intersection point,
    ``first`` continues along the pool wall and ``second`` runs along the
    splash-pool edge into the pool.

    Attributes:
        first: First unit vector (dx, dy).
        second: Second unit vector (dx, dy).
        first_reach: Wall length available along ``first``.
        second_reach: Wall length available along ``second``.
    """

    first: Direction
    second: Direction
    first_reach: float = 0.0
    second_reach: float = 0.0


def _move(point: Point, direction: Direction, distance: float) -> Point:
    return Point(point.x + direction[0] * distance, point.y + direction[1] * distance)


def corner_directions(outline: Sequence[Point], index: int) -> InwardDirections:
    """Inward directions along the two walls meeting at an outline vertex."""
    count = len(outline)
    corner = outline[index % count]
    previous = outline[(index - 1) % count]
    following = outline[(index + 1) % count]

    to_next = unit_vector(corner, following)
    to_previous = unit_vector(corner, previous)
    next_reach = corner.distance_to(following)
    previous_reach = corner.distance_to(previous)

    if abs(to_previous[0]) > abs(to_next[0]):
        return InwardDirections(to_previous, to_next, previous_reach, next_reach)
    return InwardDirections(to_next, to_previous, next_reach, previous_reach)


def _width_and_depth_axes(
    directions: InwardDirections,
    direction: StairsDirection,
) -> tuple[Direction, float, Direction]:
    """Return (width axis, width reach, depth axis) for a direction flag."""
    if direction is StairsDirection.ALONG_LENGTH:
        return directions.first, directions.first_reach, directions.second
    return directions.second, directions.second_reach, directions.first


@dataclass(frozen=True)
class TriangleAnalysis:
    """Base, apex and height of a stair triangle.

    Attributes:
        vertices: The three input vertices.
        base_start: First vertex of the longest edge.
        base_end: Second vertex of the longest edge.
        apex: Vertex opposite the longest edge.
        base_length: Length of the longest edge.
        left_leg: Apex to base_start length.
        right_leg: Apex to base_end length.
        height: Perpendicular apex-to-base distance.
    """

    vertices: tuple[Point, Point, Point]
    base_start: Point
    base_end: Point
    apex: Point
    base_length: float
    left_leg: float
    right_leg: float
    height: float

    @property
    def is_scalene(self) -> bool:
        """True if the legs differ by more than SCALENE_THRESHOLD."""
        return abs(self.left_leg - self.right_leg) > SCALENE_THRESHOLD

    @property
    def descent_angle(self) -> float:
        """Direction of descent (apex toward base) in degrees, 0-360."""
        ex = self.base_end.x - self.base_start.x
        ey = self.base_end.y - self.base_start.y
        mid = interpolate(self.base_start, self.base_end, 0.5)
        to_apex = (self.apex.x - mid.x, self.apex.y - mid.y)
        normal = (ey, -ex)
        if normal[0] * to_apex[0] + normal[1] * to_apex[1] > 0:
            normal = (-ey, ex)
        # normal now points away from the apex
        return angle_degrees(normal[0], normal[1])


@dataclass(frozen=True)
class TreadSpan:
    """Position of one expanding tread measured from the apex.

    Attributes:
        position: Distance from the apex to the tread's near edge.
        depth: Tread depth.
        width_start: Triangle width at the near edge.
        width_end: Triangle width at the far edge.
    """

    position: float
    depth: float
    width_start: float
    width_end: float


def analyze_triangle(vertices: Sequence[Point]) -> TriangleAnalysis | None:
    """Identify base, apex and height; None unless exactly three vertices."""
    if len(vertices) != 3:
        return None

    edges = [(i, (i + 1) % 3) for i in range(3)]
    start_index, end_index = max(
        edges, key=lambda e: vertices[e[0]].distance_to(vertices[e[1]])
    )
    apex_index = 3 - start_index - end_index
    base_start = vertices[start_index]
    base_end = vertices[end_index]
    apex = vertices[apex_index]

    return TriangleAnalysis(
        vertices=(vertices[0], vertices[1], vertices[2]),
        base_start=base_start,
        base_end=base_end,
        apex=apex,
        base_length=base_start.distance_to(base_end),
        left_leg=apex.distance_to(base_start),
        right_leg=apex.distance_to(base_end),
        height=point_to_line_distance(apex, base_start, base_end),
    )


def expanding_tread_spans(
    analysis: TriangleAnalysis,
    step_count: int,
    min_depth: float,
    max_depth: float,
) -> tuple[TreadSpan, ...]:
    """Tread depths growing linearly from apex to base, scaled to the height."""
    if analysis.height <= 0 or step_count < 1:
        return ()

    preliminary = [
        min_depth
        + (i / (step_count - 1) if step_count > 1 else 0.0) * (max_depth - min_depth)
        for i in range(step_count)
    ]
    scale = analysis.height / sum(preliminary)

    spans: list[TreadSpan] = []
    position = 0.0
    for depth in preliminary:
        scaled = depth * scale
        spans.append(
            TreadSpan(
                position=position,
                depth=scaled,
                width_start=analysis.base_length * position / analysis.height,
                width_end=analysis.base_length * (position + scaled) / analysis.height,
            )
        )
        position += scaled
    return tuple(spans)


def slice_triangle(
    analysis: TriangleAnalysis,
    start: float,
    end: float,
) -> tuple[Point, ...]:
    """Cut the band between two distances from the apex.

    The band touching the apex is a triangle, every other band a trapezoid.
    """
    if analysis.height <= 0:
        return ()
    progress_start = start / analysis.height
    progress_end = min(end / analysis.height, 1.0)

    left_end = interpolate(analysis.apex, analysis.base_start, progress_end)
    right_end = interpolate(analysis.apex, analysis.base_end, progress_end)
    if progress_start < 0.001:
        return (analysis.apex, left_end, right_end)

    left_start = interpolate(analysis.apex, analysis.base_start, progress_start)
    right_start = interpolate(analysis.apex, analysis.base_end, progress_start)
    return (left_start, left_end, right_end, right_start)


def step_line_positions(
    analysis: TriangleAnalysis,
    step_count: int,
    min_depth: float,
    max_depth: float,
) -> tuple[float, ...]:
    """Height fractions (0 at the apex, 1 at the base) of the inner step lines."""
    spans = expanding_tread_spans(analysis, step_count, min_depth, max_depth)
    positions: list[float] = []
    accumulated = 0.0
    for span in spans[:-1]:
        accumulated += span.depth
        positions.append(accumulated / analysis.height)
    return tuple(positions)


class FootprintGenerator:
    """Builds stairs and splash-pool footprints from a pool outline."""

    def splash_pool_footprint(
        self,
        outline: Sequence[Point],
        splash: SplashPoolSpec,
    ) -> FootprintPolygon | None:
        """Rectangle in a pool corner: width along a wall, length into the pool.

        Returns None while the outline has fewer than three vertices.
        """
        if len(outline) < 3:
            return None
        anchor = outline[splash.corner_index % len(outline)]
        directions = corner_directions(outline, splash.corner_index)
        width_axis, _, length_axis = _width_and_depth_axes(directions, splash.direction)

        across = _move(anchor, width_axis, splash.width)
        vertices = (
            anchor,
            across,
            _move(across, length_axis, splash.length),
            _move(anchor, length_axis, splash.length),
        )
        return FootprintPolygon(feature=FeatureKind.SPLASH_POOL, vertices=vertices)

    def splash_anchor(
        self,
        outline: Sequence[Point],
        splash: SplashPoolSpec,
        anchor: SplashAnchor,
    ) -> tuple[Point, InwardDirections]:
        """Position and inward directions of a splash-pool intersection point."""
        corner = outline[splash.corner_index % len(outline)]
        directions = corner_directions(outline, splash.corner_index)
        if splash.direction is StairsDirection.ALONG_LENGTH:
            width_axis, width_reach = directions.first, directions.first_reach
            length_axis, length_reach = directions.second, directions.second_reach
        else:
            width_axis, width_reach = directions.second, directions.second_reach
            length_axis, length_reach = directions.first, directions.first_reach

        if anchor is SplashAnchor.E:
            point = _move(corner, width_axis, splash.width)
            return point, InwardDirections(
                first=width_axis,
                second=length_axis,
                first_reach=max(width_reach - splash.width, 0.0),
                second_reach=length_reach,
            )
        point = _move(corner, length_axis, splash.length)
        return point, InwardDirections(
            first=length_axis,
            second=width_axis,
            first_reach=max(length_reach - splash.length, 0.0),
            second_reach=width_reach,
        )

    def stairs_layout(
        self,
        outline: Sequence[Point],
        stairs: StairsSpec,
        splash: SplashPoolSpec | None = None,
    ) -> StairsLayout | None:
        """Generate the stairs footprint for the configured topology.

        Returns None while the outline has fewer than three vertices.
        """
        if stairs.shape is StairsShape.SCALENE_TRIANGLE:
            return self.scalene_stairs(
                stairs.vertices,
                stairs.step_count,
                stairs.min_tread_depth,
                stairs.max_tread_depth,
            )
        if len(outline) < 3:
            return None

        if stairs.splash_anchor is not None and splash is not None:
            anchor, directions = self.splash_anchor(outline, splash, stairs.splash_anchor)
        else:
            if stairs.splash_anchor is not None:
                logger.warning(
                    "Stairs anchored at splash point %s but no splash pool; "
                    "using corner %d",
                    stairs.splash_anchor.value,
                    stairs.corner_index,
                )
            anchor = outline[stairs.corner_index % len(outline)]
            directions = corner_directions(outline, stairs.corner_index)

        if stairs.shape is StairsShape.DIAGONAL_45:
            return self.diagonal_stairs(
                anchor, directions, stairs.step_count, stairs.step_depth
            )
        return self.rectangular_stairs(
            anchor,
            directions,
            stairs.width,
            stairs.step_count,
            stairs.step_depth,
            stairs.direction,
        )

    def rectangular_stairs(
        self,
        anchor: Point,
        directions: InwardDirections,
        width: float | None,
        step_count: int,
        step_depth: float,
        direction: StairsDirection = StairsDirection.ALONG_WIDTH,
    ) -> StairsLayout:
        """Rectangle of step_count equal treads.

        Args:
            anchor: Corner the stairs start from.
            directions: Inward directions at the anchor.
            width: Stair width, or None for the full wall length.
            step_count: Number of treads.
            step_depth: Depth of each tread.
            direction: ALONG_LENGTH runs the width along ``first``,
                ALONG_WIDTH along ``second``.
        """
        width_axis, reach, depth_axis = _width_and_depth_axes(directions, direction)
        if width is None:
            width = reach if reach > 0 else DEFAULT_STAIRS_WIDTH
        run = step_count * step_depth

        across = _move(anchor, width_axis, width)
        vertices = (
            anchor,
            across,
            _move(across, depth_axis, run),
            _move(anchor, depth_axis, run),
        )

        treads: list[Tread] = []
        for i in range(1, step_count + 1):
            near = (i - 1) * step_depth
            far = i * step_depth
            polygon = (
                _move(anchor, depth_axis, near),
                _move(across, depth_axis, near),
                _move(across, depth_axis, far),
                _move(anchor, depth_axis, far),
            )
            treads.append(
                Tread(
                    index=i,
                    polygon=polygon,
                    depth=step_depth,
                    outer_edge=width,
                    area=width * step_depth,
                )
            )

        step_lines = tuple(
            StepLine(
                _move(anchor, depth_axis, i * step_depth),
                _move(across, depth_axis, i * step_depth),
            )
            for i in range(1, step_count)
        )

        return StairsLayout(
            shape=StairsShape.RECTANGULAR,
            footprint=FootprintPolygon(feature=FeatureKind.STAIRS, vertices=vertices),
            treads=tuple(treads),
            step_lines=step_lines,
            total_path_length=run,
        )

    def diagonal_stairs(
        self,
        anchor: Point,
        directions: InwardDirections,
        step_count: int,
        step_depth: float,
    ) -> StairsLayout:
        """Right triangle in a corner with step lines parallel to the hypotenuse.

        The legs measure step_count * step_depth along each wall. Tread 1 is
        the small triangle in the corner; later treads are trapezoids.
        """
        size = step_count * step_depth
        along_first = _move(anchor, directions.first, size)
        along_second = _move(anchor, directions.second, size)
        vertices = (anchor, along_first, along_second)

        def line_at(fraction: float) -> tuple[Point, Point]:
            return (
                interpolate(anchor, along_first, fraction),
                interpolate(anchor, along_second, fraction),
            )

        tread_depth = point_to_line_distance(anchor, along_first, along_second) / step_count

        treads: list[Tread] = []
        for i in range(1, step_count + 1):
            outer_start, outer_end = line_at(i / step_count)
            if i == 1:
                polygon: tuple[Point, ...] = (anchor, outer_start, outer_end)
            else:
                inner_start, inner_end = line_at((i - 1) / step_count)
                polygon = (inner_start, outer_start, outer_end, inner_end)
            treads.append(
                Tread(
                    index=i,
                    polygon=polygon,
                    depth=tread_depth,
                    outer_edge=outer_start.distance_to(outer_end),
                    area=polygon_area(polygon),
                )
            )

        step_lines = tuple(
            StepLine(*line_at(i / step_count)) for i in range(1, step_count)
        )

        return StairsLayout(
            shape=StairsShape.DIAGONAL_45,
            footprint=FootprintPolygon(feature=FeatureKind.STAIRS, vertices=vertices),
            treads=tuple(treads),
            step_lines=step_lines,
            total_path_length=along_first.distance_to(along_second),
        )

    def scalene_stairs(
        self,
        vertices: Sequence[Point],
        step_count: int,
        min_depth: float,
        max_depth: float,
    ) -> StairsLayout | None:
        """Expanding-trapezoid treads in a drawn triangle."""
        analysis = analyze_triangle(vertices)
        if analysis is None:
            return None
        if not analysis.is_scalene:
            logger.debug(
                "Stair triangle legs %.2f and %.2f are nearly equal",
                analysis.left_leg,
                analysis.right_leg,
            )

        spans = expanding_tread_spans(analysis, step_count, min_depth, max_depth)
        treads: list[Tread] = []
        for i, span in enumerate(spans, start=1):
            polygon = slice_triangle(analysis, span.position, span.position + span.depth)
            treads.append(
                Tread(
                    index=i,
                    polygon=polygon,
                    depth=span.depth,
                    outer_edge=span.width_end,
                    area=polygon_area(polygon),
                )
            )

        step_lines = tuple(
            StepLine(
                interpolate(analysis.apex, analysis.base_start, fraction),
                interpolate(analysis.apex, analysis.base_end, fraction),
            )
            for fraction in step_line_positions(analysis, step_count, min_depth, max_depth)
        )

        return StairsLayout(
            shape=StairsShape.SCALENE_TRIANGLE,
            footprint=FootprintPolygon(
                feature=FeatureKind.STAIRS, vertices=analysis.vertices
            ),
            treads=tuple(treads),
            step_lines=step_lines,
            total_path_length=analysis.height,
        )

