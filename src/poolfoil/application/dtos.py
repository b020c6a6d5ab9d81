"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass

from poolfoil.domain.services import PoolMetrics, WallPlan
from poolfoil.domain.value_objects import (
    FootprintPolygon,
    IssueSeverity,
    PlanComparison,
    PlanStrategy,
    Point,
    RollWidth,
    StairsLayout,
    Strip,
    SurfaceSegment,
    ValidationIssue,
)
from poolfoil.infrastructure.roll_packing import ReusableOffcut, RollAllocation


@dataclass(frozen=True)
class PlanResult:
    """Complete foil plan for one pool configuration.

    A plan is recomputed from scratch whenever an input changes; it is
    never updated in place.

    Attributes:
        strategy: Roll width strategy the plan was built with.
        segments: Surfaces to cover, bottom first.
        strips: Every strip to cut, after splitting oversize strips.
        rolls: Roll allocations, narrow rolls first.
        offcuts: Reusable roll remainders.
        unpacked_strips: Strips too long for a roll (splitting disabled).
        total_area_needed: Surface area plus seam margin and surcharge.
        used_area: Foil area laid from the rolls.
        waste_area: Purchased roll area not laid.
        waste_percentage: Waste as a percentage of purchased roll area.
        issues: Manufacturing-rule violations.
        comparison: Narrow-only, wide-only and mixed figures.
        score: Plan score; lower is better.
        butt_joint_length: Weld length for butt-jointed bottom strips.
        anti_slip_area: Area of stair treads and splash-pool floor.
        metrics: Closed-form pool measurements.
        pool_outline: Plan-view pool outline.
        stairs_layout: Generated stairs geometry, if any.
        splash_footprint: Generated splash-pool footprint, if any.
        placement_errors: Reasons a footprint failed its placement checks.
        wall_plan: Continuous wall runs, when walls were planned that way.
        structural_strips: Anti-slip strips planned on structural foil.
        structural_rolls: Structural rolls, packed apart from the main rolls.
    """

    strategy: PlanStrategy
    segments: tuple[SurfaceSegment, ...]
    strips: tuple[Strip, ...]
    rolls: tuple[RollAllocation, ...]
    offcuts: tuple[ReusableOffcut, ...]
    unpacked_strips: tuple[Strip, ...]
    total_area_needed: float
    used_area: float
    waste_area: float
    waste_percentage: float
    issues: tuple[ValidationIssue, ...]
    comparison: PlanComparison
    score: float
    butt_joint_length: float
    anti_slip_area: float
    metrics: PoolMetrics
    pool_outline: tuple[Point, ...] = ()
    stairs_layout: StairsLayout | None = None
    splash_footprint: FootprintPolygon | None = None
    placement_errors: tuple[str, ...] = ()
    wall_plan: WallPlan | None = None
    structural_strips: tuple[Strip, ...] = ()
    structural_rolls: tuple[RollAllocation, ...] = ()

    @property
    def errors(self) -> list[ValidationIssue]:
        """Error-severity issues."""
        return [i for i in self.issues if i.severity is IssueSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Warning-severity issues."""
        return [i for i in self.issues if i.severity is IssueSeverity.WARNING]

    @property
    def has_errors(self) -> bool:
        """True if the plan cannot be built as specified."""
        return bool(self.errors) or bool(self.placement_errors)

    @property
    def total_rolls(self) -> int:
        return len(self.rolls)

    @property
    def rolls_narrow(self) -> int:
        return sum(1 for r in self.rolls if r.roll_width is RollWidth.NARROW)

    @property
    def rolls_wide(self) -> int:
        return sum(1 for r in self.rolls if r.roll_width is RollWidth.WIDE)

    @property
    def total_roll_length(self) -> float:
        """Purchased roll length across all rolls."""
        return sum(r.max_length for r in self.rolls)
