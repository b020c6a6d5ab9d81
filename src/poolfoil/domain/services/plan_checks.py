"""Manufacturing-rule validation, plan scoring and strategy comparison.

Rule violations are returned as ValidationIssue records; the planner always
produces a complete plan and leaves accepting it to the caller.

Scoring (lower is better):

    waste% * 10 + issues * 50 + strips * 2 + rolls * 5
    - 20 if the plan uses a single roll width
    - 3 per roll wasting less than 10% of its length

The result is clamped at zero.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Iterable, Sequence

from ..value_objects import (
    MAX_ROLL_LENGTH,
    MIN_OVERLAP_BOTTOM,
    MIN_OVERLAP_WALL,
    FoilMaterial,
    IssueCode,
    IssueSeverity,
    PlanComparison,
    RollWidth,
    StrategySummary,
    Strip,
    SurfaceSegment,
    ValidationIssue,
)

logger = logging.getLogger(__name__)

__all__ = [
    "SINGLE_WIDTH_BONUS",
    "WELL_UTILISED_BONUS",
    "WELL_UTILISED_FRACTION",
    "PlanValidator",
    "anti_slip_area",
    "area_strategy_summary",
    "butt_joint_length",
    "compare_strategies",
    "count_well_utilised",
    "required_area",
    "score_plan",
]

WASTE_WEIGHT = 10.0
ISSUE_WEIGHT = 50.0
STRIP_WEIGHT = 2.0
ROLL_WEIGHT = 5.0
SINGLE_WIDTH_BONUS = 20.0
WELL_UTILISED_BONUS = 3.0
WELL_UTILISED_FRACTION = 0.10

_EPSILON = 1e-9


class PlanValidator:
    """Checks strips against the manufacturer's rules.

    Args:
        material: Butt-joint materials need no overlap on bottom-class strips.
        max_roll_length: Longest strip a roll can supply.
    """

    def __init__(
        self,
        material: FoilMaterial | None = None,
        max_roll_length: float = MAX_ROLL_LENGTH,
    ) -> None:
        self.material = material or FoilMaterial.solid()
        self.max_roll_length = max_roll_length

    def required_overlap(self, strip: Strip) -> float:
        """Manufacturer minimum overlap for a strip after the first."""
        if strip.segment_kind.is_bottom_class:
            return 0.0 if self.material.uses_butt_joint else MIN_OVERLAP_BOTTOM
        return MIN_OVERLAP_WALL

    def validate(self, strips: Iterable[Strip]) -> list[ValidationIssue]:
        """Collect rule violations for every strip."""
        issues: list[ValidationIssue] = []
        for strip in strips:
            if strip.strip_length > self.max_roll_length + _EPSILON:
                issues.append(
                    ValidationIssue(
                        severity=IssueSeverity.ERROR,
                        code=IssueCode.STRIP_TOO_LONG,
                        message=(
                            f"Strip {strip.id} is {strip.strip_length:.2f} m long; "
                            f"rolls are {self.max_roll_length:.0f} m"
                        ),
                        strip_id=strip.id,
                    )
                )

            required = self.required_overlap(strip)
            if (
                strip.position_along_width > 0
                and strip.overlap_with_previous < required - _EPSILON
            ):
                issues.append(
                    ValidationIssue(
                        severity=IssueSeverity.ERROR,
                        code=IssueCode.OVERLAP_TOO_SMALL,
                        message=(
                            f"Strip {strip.id} overlaps {strip.overlap_with_previous:.2f} m; "
                            f"minimum is {required:.2f} m"
                        ),
                        strip_id=strip.id,
                    )
                )

            if strip.vertical_seam and strip.segment_kind.is_wall_class:
                issues.append(
                    ValidationIssue(
                        severity=IssueSeverity.WARNING,
                        code=IssueCode.VERTICAL_SEAM_ON_WALL,
                        message=f"Strip {strip.id} ends in a vertical seam on a wall",
                        strip_id=strip.id,
                    )
                )

        if issues:
            logger.debug("Validation found %d issues", len(issues))
        return issues


def score_plan(
    *,
    waste_percentage: float,
    issue_count: int,
    strip_count: int,
    roll_count: int,
    width_count: int,
    well_utilised_rolls: int,
) -> float:
    """Rank a candidate plan; lower is better."""
    score = (
        waste_percentage * WASTE_WEIGHT
        + issue_count * ISSUE_WEIGHT
        + strip_count * STRIP_WEIGHT
        + roll_count * ROLL_WEIGHT
    )
    if width_count == 1:
        score -= SINGLE_WIDTH_BONUS
    score -= well_utilised_rolls * WELL_UTILISED_BONUS
    return max(0.0, score)


def butt_joint_length(strips: Iterable[Strip]) -> float:
    """Weld length between adjacent bottom-class strips.

    For each pair of neighbouring strips on a segment, the shorter of the
    two lengths is welded.
    """
    by_segment: dict[str, list[Strip]] = defaultdict(list)
    for strip in strips:
        if strip.segment_kind.is_bottom_class:
            by_segment[strip.segment_id].append(strip)

    total = 0.0
    for segment_strips in by_segment.values():
        ordered = sorted(segment_strips, key=lambda s: s.position_along_width)
        for left, right in zip(ordered, ordered[1:]):
            total += min(left.strip_length, right.strip_length)
    return total


def anti_slip_area(segments: Iterable[SurfaceSegment]) -> float:
    """Area of walked-on surfaces (stair treads, splash-pool floor)."""
    return sum(s.area for s in segments if s.kind.is_anti_slip)


def required_area(
    base_area: float,
    seam_margin_percent: float,
    irregular: bool = False,
    irregular_surcharge_percent: float = 0.0,
) -> float:
    """Foil area to buy: base area plus seam margin, plus surcharge if irregular."""
    area = base_area * (1 + seam_margin_percent / 100)
    if irregular:
        area *= 1 + irregular_surcharge_percent / 100
    return area


def area_strategy_summary(
    total_area: float,
    roll_width: RollWidth,
    max_roll_length: float = MAX_ROLL_LENGTH,
) -> StrategySummary:
    """Whole rolls of one width needed for an area, and the resulting waste."""
    roll_area = roll_width.value * max_roll_length
    rolls = math.ceil(total_area / roll_area - _EPSILON) if total_area > 0 else 0
    purchased = rolls * roll_area
    waste = purchased - total_area if rolls else 0.0
    return StrategySummary(
        rolls_narrow=rolls if roll_width is RollWidth.NARROW else 0,
        rolls_wide=rolls if roll_width is RollWidth.WIDE else 0,
        waste_area=waste,
        waste_percent=waste / purchased * 100 if purchased else 0.0,
    )


def compare_strategies(
    total_area: float,
    mixed: StrategySummary,
    max_roll_length: float = MAX_ROLL_LENGTH,
) -> PlanComparison:
    """Narrow-only and wide-only area figures beside the mixed plan."""
    return PlanComparison(
        narrow_only=area_strategy_summary(total_area, RollWidth.NARROW, max_roll_length),
        wide_only=area_strategy_summary(total_area, RollWidth.WIDE, max_roll_length),
        mixed=mixed,
    )


def count_well_utilised(waste_lengths: Sequence[float], max_roll_length: float) -> int:
    """Rolls wasting less than WELL_UTILISED_FRACTION of their length."""
    limit = max_roll_length * WELL_UTILISED_FRACTION
    return sum(1 for waste in waste_lengths if waste < limit)
