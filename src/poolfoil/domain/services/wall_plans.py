"""Continuous wall strip planning.

Per-wall planning cuts a separate strip set for every wall. Wall foil can
also run around corners, so one strip covers several consecutive walls and
the only vertical joins are where two runs meet. WallStripOptimizer
enumerates groupings of consecutive walls and roll widths, pairs every run
with the roll remainders the bottom strips leave behind and keeps the
grouping that ranks best for the chosen priority.

Groupings searched for n walls: all walls in one run, every split into
two or three contiguous runs, and every wall on its own.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Sequence

from ..value_objects import (
    DEEP_WALL_THRESHOLD,
    MAX_ROLL_LENGTH,
    MIN_VERTICAL_JOIN_OVERLAP,
    WIDE_WALL_DEPTH_THRESHOLD,
    FoilMaterial,
    OptimizationPriority,
    PlanningSettings,
    RollWidth,
    SegmentKind,
    Strip,
    SurfaceSegment,
)
from .strips import plan_strips

logger = logging.getLogger(__name__)

__all__ = [
    "RollRemainder",
    "WallPlan",
    "WallRun",
    "WallStripOptimizer",
    "bottom_remainders",
    "distribute_join_overlaps",
    "run_label",
    "select_wall_plan",
    "wall_groupings",
    "wall_widths_for_depth",
]

_FIT_TOLERANCE = 1e-3
_NEGLIGIBLE_LEFTOVER = 0.01

Grouping = tuple[tuple[int, ...], ...]


@dataclass(frozen=True)
class RollRemainder:
    """Length left on a roll after a strip was cut from it."""

    roll_width: RollWidth
    length: float


@dataclass(frozen=True)
class WallRun:
    """One strip run covering consecutive walls.

    Attributes:
        wall_ids: Ids of the wall segments covered, in perimeter order.
        base_length: Sum of the wall lengths.
        join_overlap: Vertical join overlap added to this run.
        roll_width: Roll the run is cut from.
        layers: Strips stacked up the wall height.
    """

    wall_ids: tuple[str, ...]
    base_length: float
    join_overlap: float
    roll_width: RollWidth
    layers: int = 1

    @property
    def length(self) -> float:
        """Cut length of each strip in the run."""
        return round(self.base_length + self.join_overlap, 3)

    @property
    def label(self) -> str:
        """Corner path of the run, e.g. "A-B-C"."""
        return run_label(self.wall_ids)

    @property
    def segment_id(self) -> str:
        return f"wall-{self.label}"

    @property
    def foil_area(self) -> float:
        return self.length * self.roll_width.value * self.layers


@dataclass(frozen=True)
class WallPlan:
    """A grouping of the walls into runs, with its roll assessment.

    Attributes:
        runs: Runs in perimeter order.
        join_overlap: Overlap planned at each vertical join.
        waste_area: Leftovers too short to reuse, in square meters.
        reusable_area: Leftovers long enough to reuse, in square meters.
        new_roll_area: Area of rolls opened for runs that did not fit a
            bottom remainder.
    """

    runs: tuple[WallRun, ...]
    join_overlap: float
    waste_area: float
    reusable_area: float
    new_roll_area: float

    @property
    def strip_count(self) -> int:
        return sum(run.layers for run in self.runs)

    @property
    def foil_area(self) -> float:
        return sum(run.foil_area for run in self.runs)

    @property
    def total_length(self) -> float:
        return sum(run.length * run.layers for run in self.runs)


def run_label(wall_ids: Sequence[str]) -> str:
    """Merge wall labels that share a corner: A-B, B-C becomes A-B-C."""
    path: list[str] = []
    for wall_id in wall_ids:
        parts = wall_id.removeprefix("wall-").split("-")
        if path and path[-1] == parts[0]:
            path.extend(parts[1:])
        elif path:
            path.append("+")
            path.extend(parts)
        else:
            path.extend(parts)
    return "-".join(path).replace("-+-", "+")


def wall_widths_for_depth(depth: float, material: FoilMaterial) -> tuple[RollWidth, ...]:
    """Roll widths allowed on the walls of a pool of the given depth.

    Shallow walls take either width. Up to DEEP_WALL_THRESHOLD a wide roll
    covers the wall in one layer, so narrow is not offered. Deeper walls are
    stacked from narrow strips.
    """
    if material.narrow_only:
        return (RollWidth.NARROW,)
    if depth <= WIDE_WALL_DEPTH_THRESHOLD:
        return (RollWidth.NARROW, RollWidth.WIDE)
    if depth <= DEEP_WALL_THRESHOLD:
        return (RollWidth.WIDE,)
    return (RollWidth.NARROW,)


def wall_groupings(wall_count: int) -> list[Grouping]:
    """Contiguous groupings of wall indices, without duplicates.

    Order: one run, two runs, three runs, then one run per wall.
    """
    if wall_count <= 0:
        return []
    indices = tuple(range(wall_count))
    candidates: list[Grouping] = [(indices,)]
    candidates.extend((indices[:cut], indices[cut:]) for cut in range(1, wall_count))
    candidates.extend(
        (indices[:first], indices[first:second], indices[second:])
        for first in range(1, wall_count - 1)
        for second in range(first + 1, wall_count)
    )
    candidates.append(tuple((index,) for index in indices))

    unique: list[Grouping] = []
    for grouping in candidates:
        if grouping not in unique:
            unique.append(grouping)
    return unique


def distribute_join_overlaps(
    runs: Sequence[tuple[float, RollWidth]],
    join_overlap: float,
) -> list[float]:
    """Assign each vertical join's overlap to one of the runs it joins.

    Joins close the perimeter: run i meets run i + 1 and the last run meets
    the first. The overlap goes to the narrower roll, or to the longer run
    when both widths match (the earlier run on a tie). A single run closes
    on itself and carries one join.

    Args:
        runs: (base length, roll width) per run, in perimeter order.
        join_overlap: Overlap per join.
    """
    count = len(runs)
    if count == 0:
        return []
    if count == 1:
        return [join_overlap]

    overlaps = [0.0] * count
    for first in range(count):
        second = (first + 1) % count
        first_length, first_width = runs[first]
        second_length, second_width = runs[second]
        if first_width is not second_width:
            target = first if first_width.value < second_width.value else second
        else:
            target = first if first_length >= second_length else second
        overlaps[target] += join_overlap
    return overlaps


def bottom_remainders(
    strips: Sequence[Strip],
    max_roll_length: float = MAX_ROLL_LENGTH,
) -> list[RollRemainder]:
    """Roll length each main bottom strip leaves, one roll per strip."""
    return [
        RollRemainder(strip.roll_width, max_roll_length - strip.strip_length)
        for strip in strips
        if strip.segment_kind is SegmentKind.BOTTOM
        and strip.strip_length < max_roll_length
    ]


def _ranking_key(plan: WallPlan, priority: OptimizationPriority) -> tuple:
    waste = round(plan.waste_area, 6)
    foil = round(plan.foil_area, 6)
    new_rolls = round(plan.new_roll_area, 6)
    if priority is OptimizationPriority.MIN_ROLLS:
        return (new_rolls, foil, waste, plan.strip_count)
    return (waste, plan.strip_count, foil, new_rolls)


def select_wall_plan(
    plans: Sequence[WallPlan],
    priority: OptimizationPriority = OptimizationPriority.MIN_WASTE,
) -> WallPlan | None:
    """Best plan for the priority; the earliest candidate wins ties."""
    if not plans:
        return None
    return min(plans, key=lambda plan: _ranking_key(plan, priority))


class WallStripOptimizer:
    """Plans continuous wall runs around the pool perimeter.

    Args:
        settings: Wall overlap, join overlap and ranking priority.
        material: Restricts wall widths for narrow-only foils.
        max_roll_length: Length of a fresh roll.
        min_reusable_offcut: Shortest leftover counted as reusable.
    """

    def __init__(
        self,
        settings: PlanningSettings | None = None,
        material: FoilMaterial | None = None,
        max_roll_length: float = MAX_ROLL_LENGTH,
        min_reusable_offcut: float = 2.0,
    ) -> None:
        self.settings = settings or PlanningSettings()
        self.material = material or FoilMaterial.solid()
        self.max_roll_length = max_roll_length
        self.min_reusable_offcut = min_reusable_offcut

    def widths(
        self,
        walls: Sequence[SurfaceSegment],
        forced: RollWidth | None = None,
    ) -> tuple[RollWidth, ...]:
        """Widths to try; a forced width wins when the depth rule allows it."""
        allowed = wall_widths_for_depth(walls[0].nominal_height, self.material)
        if forced is not None:
            if forced in allowed:
                return (forced,)
            logger.debug(
                "Forced %s rolls not allowed on %.2f m walls, using %s",
                forced.label,
                walls[0].nominal_height,
                ", ".join(width.label for width in allowed),
            )
        return allowed

    def candidates(
        self,
        walls: Sequence[SurfaceSegment],
        bottom_strips: Sequence[Strip] = (),
        forced: RollWidth | None = None,
    ) -> list[WallPlan]:
        """Every feasible grouping and width combination, assessed."""
        if not walls:
            return []
        height = walls[0].width_to_cover
        layers = {
            width: len(plan_strips(height, width, self.settings.overlap_wall))
            for width in self.widths(walls, forced)
        }
        remainders = bottom_remainders(bottom_strips, self.max_roll_length)

        plans: list[WallPlan] = []
        for grouping in wall_groupings(len(walls)):
            groups = [[walls[index] for index in group] for group in grouping]
            for widths in itertools.product(tuple(layers), repeat=len(groups)):
                fitted = self._runs(groups, widths, layers)
                if fitted is not None:
                    runs, join_overlap = fitted
                    plans.append(self._assess(runs, join_overlap, remainders))
        logger.debug("Assessed %d continuous wall plans for %d walls", len(plans), len(walls))
        return plans

    def plan(
        self,
        walls: Sequence[SurfaceSegment],
        bottom_strips: Sequence[Strip] = (),
        forced: RollWidth | None = None,
    ) -> WallPlan | None:
        """Best wall plan, or None if no grouping fits the roll length."""
        best = select_wall_plan(
            self.candidates(walls, bottom_strips, forced), self.settings.priority
        )
        if best is None:
            logger.info("No continuous wall plan fits %.1f m rolls", self.max_roll_length)
        else:
            logger.debug(
                "Wall plan: %s",
                ", ".join(f"{run.label} {run.length:.2f} m" for run in best.runs),
            )
        return best

    def strips(self, plan: WallPlan, walls: Sequence[SurfaceSegment]) -> list[Strip]:
        """Strips for every run, layered up the wall height."""
        height = walls[0].width_to_cover
        strips: list[Strip] = []
        for run in plan.runs:
            spans = plan_strips(height, run.roll_width, self.settings.overlap_wall)
            strips.extend(
                Strip(
                    id=f"{run.segment_id}-{number}",
                    segment_id=run.segment_id,
                    segment_kind=SegmentKind.WALL,
                    roll_width=run.roll_width,
                    used_width=span.used_width,
                    strip_length=run.length,
                    overlap_with_previous=span.overlap,
                    position_along_width=span.position,
                )
                for number, span in enumerate(spans, start=1)
            )
        return strips

    def _runs(
        self,
        groups: list[list[SurfaceSegment]],
        widths: tuple[RollWidth, ...],
        layers: dict[RollWidth, int],
    ) -> tuple[tuple[WallRun, ...], float] | None:
        # Fall back to the smallest join overlap before giving up on a grouping.
        overlaps = [self.settings.vertical_join_overlap]
        if MIN_VERTICAL_JOIN_OVERLAP < overlaps[0]:
            overlaps.append(MIN_VERTICAL_JOIN_OVERLAP)

        lengths = [sum(wall.length_along_strip for wall in group) for group in groups]
        for join_overlap in overlaps:
            shares = distribute_join_overlaps(list(zip(lengths, widths)), join_overlap)
            runs = tuple(
                WallRun(
                    wall_ids=tuple(wall.id for wall in group),
                    base_length=length,
                    join_overlap=share,
                    roll_width=width,
                    layers=layers[width],
                )
                for group, length, share, width in zip(groups, lengths, shares, widths)
            )
            if all(run.length <= self.max_roll_length + _FIT_TOLERANCE for run in runs):
                return runs, join_overlap
        return None

    def _assess(
        self,
        runs: tuple[WallRun, ...],
        join_overlap: float,
        remainders: Sequence[RollRemainder],
    ) -> WallPlan:
        free = list(remainders)
        waste = 0.0
        reusable = 0.0
        new_roll_area = 0.0

        for run in runs:
            for _ in range(run.layers):
                fits = [
                    remainder
                    for remainder in free
                    if remainder.roll_width is run.roll_width
                    and run.length <= remainder.length + _FIT_TOLERANCE
                ]
                if fits:
                    tightest = min(fits, key=lambda remainder: remainder.length)
                    free.remove(tightest)
                    leftover = tightest.length - run.length
                else:
                    leftover = self.max_roll_length - run.length
                    new_roll_area += run.roll_width.value * self.max_roll_length

                if leftover >= self.min_reusable_offcut:
                    reusable += leftover * run.roll_width.value
                elif leftover > _NEGLIGIBLE_LEFTOVER:
                    waste += leftover * run.roll_width.value

        return WallPlan(
            runs=runs,
            join_overlap=join_overlap,
            waste_area=waste,
            reusable_area=reusable,
            new_roll_area=new_roll_area,
        )

