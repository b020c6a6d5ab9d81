"""Decompose a pool into coverable surface segments.

The decomposer maps a pool, optional stairs and an optional splash pool to
an ordered list of SurfaceSegment: the bottom first, then the walls, the
splash pool and finally one tread and one riser per stair step. A segment
whose width to cover or length comes out non-positive is dropped.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from ..value_objects import (
    DEFAULT_FOLD_ALLOWANCE,
    DIVIDING_WALL_THICKNESS,
    Point,
    PoolGeometry,
    PoolShape,
    SegmentKind,
    SplashPoolSpec,
    StairsLayout,
    StairsSpec,
    SurfaceSegment,
)
from .footprints import FootprintGenerator
from .geometry import bounding_box, polygon_area, polygon_perimeter

logger = logging.getLogger(__name__)

__all__ = [
    "OVAL_OUTLINE_VERTICES",
    "STEP_PROFILE_ALLOWANCE",
    "PoolMetrics",
    "SurfaceDecomposer",
    "outline_labels",
    "placement_outline",
    "pool_metrics",
    "pool_outline",
    "vertex_label",
]

# Extra bottom area and perimeter for the step profile of a stepped rectangle.
STEP_PROFILE_ALLOWANCE = 0.5

OVAL_OUTLINE_VERTICES = 72


@dataclass(frozen=True)
class PoolMetrics:
    """Closed-form measurements of a pool basin.

    Attributes:
        bottom_area: Floor area in square meters.
        perimeter: Wall run in meters.
        wall_area: Perimeter times pool depth.
        water_depth: Depth of water after the overflow drop.
        volume: Bottom area times water depth, in cubic meters.
        bottom_length: Longer side of the floor's bounding box.
        bottom_width: Shorter side of the floor's bounding box.
    """

    bottom_area: float
    perimeter: float
    wall_area: float
    water_depth: float
    volume: float
    bottom_length: float
    bottom_width: float

    @property
    def base_area(self) -> float:
        """Bottom plus wall area."""
        return self.bottom_area + self.wall_area


def vertex_label(index: int) -> str:
    """Outline vertex label: A, B, C, ... then V27, V28, ..."""
    if index < 26:
        return chr(ord("A") + index)
    return f"V{index + 1}"


def pool_outline(pool: PoolGeometry) -> tuple[Point, ...]:
    """Plan-view outline centred on the origin, counter-clockwise from A.

    Ovals use their bounding rectangle so corners can anchor features.
    That rectangle covers area outside the curved wall, so placement
    checks use placement_outline() instead. The L-shape arm extends from
    the D corner of the main rectangle.
    """
    if pool.shape is PoolShape.CUSTOM:
        return tuple(pool.vertices)

    half_l = pool.length / 2
    half_w = pool.width / 2
    a = Point(-half_l, -half_w)
    b = Point(half_l, -half_w)
    c = Point(half_l, half_w)
    d = Point(-half_l, half_w)

    if pool.shape is PoolShape.L_SHAPE:
        arm_x = -half_l + pool.arm_width
        arm_y = half_w + pool.arm_length
        return (a, b, c, Point(arm_x, half_w), Point(arm_x, arm_y), Point(-half_l, arm_y))
    return (a, b, c, d)


def placement_outline(pool: PoolGeometry) -> tuple[Point, ...]:
    """Outline that features must fit inside.

    Same as pool_outline() except for ovals, which are approximated by an
    inscribed polygon of OVAL_OUTLINE_VERTICES points starting at the +x
    axis. The chord sag is a few millimetres for pool-sized ovals.
    """
    if pool.shape is not PoolShape.OVAL:
        return pool_outline(pool)
    a = pool.length / 2
    b = pool.width / 2
    step = 2 * math.pi / OVAL_OUTLINE_VERTICES
    return tuple(
        Point(a * math.cos(i * step), b * math.sin(i * step))
        for i in range(OVAL_OUTLINE_VERTICES)
    )


def _ramanujan_perimeter(a: float, b: float) -> float:
    return math.pi * (3 * (a + b) - math.sqrt((3 * a + b) * (a + 3 * b)))


def pool_metrics(pool: PoolGeometry) -> PoolMetrics:
    """Bottom area, perimeter and derived quantities for any pool shape."""
    shape = pool.shape
    if shape is PoolShape.RECTANGLE:
        area = pool.length * pool.width
        perimeter = 2 * (pool.length + pool.width)
    elif shape is PoolShape.OVAL:
        a = pool.length / 2
        b = pool.width / 2
        area = math.pi * a * b
        perimeter = _ramanujan_perimeter(a, b)
    elif shape is PoolShape.L_SHAPE:
        shared_edge = pool.arm_width
        area = pool.length * pool.width + pool.arm_length * pool.arm_width
        perimeter = (
            2 * (pool.length + pool.width)
            + 2 * (pool.arm_length + pool.arm_width)
            - 2 * shared_edge
        )
    elif shape is PoolShape.STEPPED_RECTANGLE:
        area = pool.length * pool.width + STEP_PROFILE_ALLOWANCE
        perimeter = 2 * (pool.length + pool.width) + STEP_PROFILE_ALLOWANCE
    elif shape is PoolShape.CUSTOM:
        area = polygon_area(pool.vertices)
        perimeter = polygon_perimeter(pool.vertices)
    else:
        raise ValueError(f"Unsupported pool shape: {shape}")

    min_x, min_y, max_x, max_y = bounding_box(pool_outline(pool))
    if shape is PoolShape.CUSTOM and len(pool.vertices) < 3:
        min_x = min_y = max_x = max_y = 0.0
    span_x = max_x - min_x
    span_y = max_y - min_y
    water_depth = pool.water_depth

    return PoolMetrics(
        bottom_area=area,
        perimeter=perimeter,
        wall_area=perimeter * pool.depth,
        water_depth=water_depth,
        volume=area * water_depth,
        bottom_length=max(span_x, span_y),
        bottom_width=min(span_x, span_y),
    )


class SurfaceDecomposer:
    """Turns pool and sub-feature configuration into surface segments.

    Folded kinds (pool walls, splash walls and the pool face of a dividing
    wall) get the fold allowance added to their height when built.

    Args:
        fold_allowance: Height added to folded walls for the floor wrap.
        footprints: Generator used for stairs when no layout is passed in.
    """

    def __init__(
        self,
        fold_allowance: float = DEFAULT_FOLD_ALLOWANCE,
        footprints: FootprintGenerator | None = None,
    ) -> None:
        self.fold_allowance = fold_allowance
        self.footprints = footprints or FootprintGenerator()

    def decompose(
        self,
        pool: PoolGeometry,
        stairs: StairsSpec | None = None,
        splash_pool: SplashPoolSpec | None = None,
        stairs_layout: StairsLayout | None = None,
    ) -> list[SurfaceSegment]:
        """Ordered surface segments for the pool and its sub-features.

        Args:
            pool: Pool geometry.
            stairs: Optional stairs configuration.
            splash_pool: Optional splash pool configuration.
            stairs_layout: Pre-generated stairs layout; generated from
                ``stairs`` when omitted.

        Returns:
            Segments with positive width to cover and length.
        """
        metrics = pool_metrics(pool)
        candidates: list[SurfaceSegment | None] = [self._bottom(metrics)]
        candidates.extend(self._walls(pool, metrics))

        if splash_pool is not None:
            candidates.extend(self._splash_pool(pool, splash_pool))

        if stairs is not None:
            if stairs_layout is None:
                stairs_layout = self.footprints.stairs_layout(
                    pool_outline(pool), stairs, splash_pool
                )
            if stairs_layout is not None:
                candidates.extend(self._stairs(stairs_layout, stairs.step_height))

        segments = [s for s in candidates if s is not None]
        logger.debug("Decomposed %s pool into %d segments", pool.shape.value, len(segments))
        return segments

    def segment(
        self,
        segment_id: str,
        kind: SegmentKind,
        height: float,
        length: float,
        area: float,
    ) -> SurfaceSegment | None:
        """Build a segment, or None if it has nothing to cover.

        Args:
            segment_id: Segment identifier.
            kind: Surface kind; folded kinds get the fold allowance.
            height: Finished extent across the strips, before any fold.
            length: Length along the strips.
            area: Finished surface area.
        """
        if height <= 0 or length <= 0:
            logger.debug("Dropping empty segment %s", segment_id)
            return None
        fold = self.fold_allowance if kind.takes_fold else 0.0
        return SurfaceSegment(
            id=segment_id,
            kind=kind,
            width_to_cover=height + fold,
            length_along_strip=length,
            area=max(area, 0.0),
            fold_allowance=fold,
        )

    def _bottom(self, metrics: PoolMetrics) -> SurfaceSegment | None:
        # Strips run along the longer side and stack across the shorter one.
        return self.segment(
            "bottom",
            SegmentKind.BOTTOM,
            metrics.bottom_width,
            metrics.bottom_length,
            metrics.bottom_area,
        )

    def _wall(self, segment_id: str, length: float, depth: float) -> SurfaceSegment | None:
        return self.segment(segment_id, SegmentKind.WALL, depth, length, length * depth)

    def _walls(
        self,
        pool: PoolGeometry,
        metrics: PoolMetrics,
    ) -> list[SurfaceSegment | None]:
        if pool.shape in (PoolShape.OVAL, PoolShape.L_SHAPE):
            return [self._wall("wall-perimeter", metrics.perimeter, pool.depth)]

        outline = pool_outline(pool)
        if len(outline) < 3:
            return []
        walls = [
            self._wall(
                f"wall-{vertex_label(i)}-{vertex_label((i + 1) % len(outline))}",
                outline[i].distance_to(outline[(i + 1) % len(outline)]),
                pool.depth,
            )
            for i in range(len(outline))
        ]
        if pool.shape is PoolShape.STEPPED_RECTANGLE:
            walls.append(self._wall("wall-step", STEP_PROFILE_ALLOWANCE, pool.depth))
        return walls

    def _splash_pool(
        self,
        pool: PoolGeometry,
        splash: SplashPoolSpec,
    ) -> list[SurfaceSegment | None]:
        wall_run = 2 * splash.length + splash.width
        segments = [
            self.segment(
                "splash-bottom",
                SegmentKind.SPLASH_BOTTOM,
                min(splash.width, splash.length),
                max(splash.width, splash.length),
                splash.width * splash.length,
            ),
            self.segment(
                "splash-wall",
                SegmentKind.SPLASH_WALL,
                splash.depth,
                wall_run,
                wall_run * splash.depth,
            ),
        ]
        if not splash.has_dividing_wall:
            return segments

        drop = pool.depth - splash.depth
        segments.extend(
            [
                self.segment(
                    "dividing-wall-pool",
                    SegmentKind.DIVIDING_WALL_POOL,
                    drop,
                    splash.width,
                    drop * splash.width,
                ),
                self.segment(
                    "dividing-wall-splash",
                    SegmentKind.DIVIDING_WALL_SPLASH,
                    splash.dividing_wall_offset,
                    splash.width,
                    splash.dividing_wall_offset * splash.width,
                ),
                self.segment(
                    "dividing-wall-top",
                    SegmentKind.DIVIDING_WALL_TOP,
                    DIVIDING_WALL_THICKNESS,
                    splash.width,
                    DIVIDING_WALL_THICKNESS * splash.width,
                ),
            ]
        )
        return segments

    def _stairs(
        self,
        layout: StairsLayout,
        step_height: float,
    ) -> list[SurfaceSegment | None]:
        segments: list[SurfaceSegment | None] = []
        for tread in layout.treads:
            segments.append(
                self.segment(
                    f"stair-tread-{tread.index}",
                    SegmentKind.STAIR_TREAD,
                    tread.depth,
                    tread.outer_edge,
                    tread.area,
                )
            )
            segments.append(
                self.segment(
                    f"stair-riser-{tread.index}",
                    SegmentKind.STAIR_RISER,
                    step_height,
                    tread.outer_edge,
                    step_height * tread.outer_edge,
                )
            )
        return segments


def outline_labels(outline: Sequence[Point]) -> list[str]:
    """Labels for each outline vertex."""
    return [vertex_label(i) for i in range(len(outline))]
