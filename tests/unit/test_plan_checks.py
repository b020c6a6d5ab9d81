"""Tests for manufacturing-rule validation, scoring and strategy comparison."""

from __future__ import annotations

import pytest

from poolfoil.domain.services import (
    PlanValidator,
    anti_slip_area,
    area_strategy_summary,
    butt_joint_length,
    compare_strategies,
    count_well_utilised,
    required_area,
    score_plan,
)
from poolfoil.domain.value_objects import (
    FoilMaterial,
    IssueCode,
    IssueSeverity,
    PlanStrategy,
    RollWidth,
    SegmentKind,
    StrategySummary,
    Strip,
    SurfaceSegment,
)


def strip(
    strip_id: str = "bottom-2",
    kind: SegmentKind = SegmentKind.BOTTOM,
    length: float = 8.0,
    overlap: float = 0.05,
    position: float = 1.6,
    vertical_seam: bool = False,
) -> Strip:
    return Strip(
        id=strip_id,
        segment_id=strip_id.rsplit("-", 1)[0],
        segment_kind=kind,
        roll_width=RollWidth.NARROW,
        used_width=1.65,
        strip_length=length,
        overlap_with_previous=overlap,
        position_along_width=position,
        vertical_seam=vertical_seam,
    )


# =============================================================================
# Validation
# =============================================================================


class TestPlanValidator:
    """Tests for manufacturer rule checks."""

    def test_clean_strip_has_no_issues(self) -> None:
        assert PlanValidator().validate([strip()]) == []

    def test_strip_too_long(self) -> None:
        issues = PlanValidator().validate([strip(length=26.0)])
        assert [i.code for i in issues] == [IssueCode.STRIP_TOO_LONG]
        assert issues[0].severity is IssueSeverity.ERROR
        assert issues[0].strip_id == "bottom-2"
        assert issues[0].is_error is True

    def test_custom_roll_length(self) -> None:
        issues = PlanValidator(max_roll_length=30.0).validate([strip(length=26.0)])
        assert issues == []

    def test_bottom_overlap_too_small(self) -> None:
        issues = PlanValidator().validate([strip(overlap=0.03)])
        assert [i.code for i in issues] == [IssueCode.OVERLAP_TOO_SMALL]
        assert "minimum is 0.05 m" in issues[0].message

    def test_wall_needs_larger_overlap(self) -> None:
        issues = PlanValidator().validate(
            [strip("wall-A-B-2", SegmentKind.WALL, overlap=0.05)]
        )
        assert [i.code for i in issues] == [IssueCode.OVERLAP_TOO_SMALL]

    def test_first_strip_needs_no_overlap(self) -> None:
        issues = PlanValidator().validate([strip(overlap=0.0, position=0.0)])
        assert issues == []

    def test_butt_material_needs_no_bottom_overlap(self) -> None:
        validator = PlanValidator(FoilMaterial.structural())
        assert validator.validate([strip(overlap=0.0)]) == []
        walls = validator.validate([strip("wall-A-B-2", SegmentKind.WALL, overlap=0.0)])
        assert [i.code for i in walls] == [IssueCode.OVERLAP_TOO_SMALL]

    def test_vertical_seam_on_wall_is_warning(self) -> None:
        issues = PlanValidator().validate(
            [strip("wall-A-B-1/1", SegmentKind.WALL, overlap=0.1, vertical_seam=True)]
        )
        assert [i.code for i in issues] == [IssueCode.VERTICAL_SEAM_ON_WALL]
        assert issues[0].severity is IssueSeverity.WARNING

    def test_vertical_seam_on_bottom_is_fine(self) -> None:
        assert PlanValidator().validate([strip(vertical_seam=True)]) == []


# =============================================================================
# Scoring
# =============================================================================


class TestScorePlan:
    """Tests for the plan score."""

    def test_weights(self) -> None:
        score = score_plan(
            waste_percentage=10.0,
            issue_count=1,
            strip_count=5,
            roll_count=2,
            width_count=2,
            well_utilised_rolls=0,
        )
        assert score == pytest.approx(100 + 50 + 10 + 10)

    def test_bonuses(self) -> None:
        score = score_plan(
            waste_percentage=10.0,
            issue_count=1,
            strip_count=5,
            roll_count=2,
            width_count=1,
            well_utilised_rolls=1,
        )
        assert score == pytest.approx(170 - 20 - 3)

    def test_clamped_at_zero(self) -> None:
        score = score_plan(
            waste_percentage=0.0,
            issue_count=0,
            strip_count=1,
            roll_count=1,
            width_count=1,
            well_utilised_rolls=1,
        )
        assert score == 0.0

    def test_count_well_utilised(self) -> None:
        assert count_well_utilised([1.0, 2.4, 2.5, 9.0], 25.0) == 2


# =============================================================================
# Areas and comparison
# =============================================================================


class TestAreas:
    """Tests for required area and strategy summaries."""

    def test_required_area_with_seam_margin(self) -> None:
        assert required_area(68.0, 10.0) == pytest.approx(74.8)

    def test_irregular_surcharge(self) -> None:
        assert required_area(68.0, 10.0, True, 20.0) == pytest.approx(89.76)
        assert required_area(68.0, 10.0, False, 20.0) == pytest.approx(74.8)

    def test_narrow_only_summary(self) -> None:
        summary = area_strategy_summary(74.8, RollWidth.NARROW)
        assert summary.rolls_narrow == 2
        assert summary.rolls_wide == 0
        assert summary.waste_area == pytest.approx(7.7)
        assert summary.waste_percent == pytest.approx(7.7 / 82.5 * 100)

    def test_wide_only_summary(self) -> None:
        summary = area_strategy_summary(74.8, RollWidth.WIDE)
        assert summary.rolls_wide == 2
        assert summary.waste_area == pytest.approx(27.7)

    def test_zero_area(self) -> None:
        summary = area_strategy_summary(0.0, RollWidth.NARROW)
        assert summary.total_rolls == 0
        assert summary.waste_area == 0.0

    def test_compare_strategies_prefers_narrow(self) -> None:
        mixed = StrategySummary(rolls_narrow=1, rolls_wide=1, waste_area=20.0, waste_percent=21.6)
        comparison = compare_strategies(74.8, mixed)
        assert comparison.mixed is mixed
        assert comparison.lowest_waste_strategy is PlanStrategy.NARROW_ONLY

    def test_mixed_wins_when_it_wastes_least(self) -> None:
        mixed = StrategySummary(rolls_narrow=1, rolls_wide=1, waste_area=1.0, waste_percent=1.0)
        comparison = compare_strategies(74.8, mixed)
        assert comparison.lowest_waste_strategy is PlanStrategy.MIXED


class TestJointsAndAntiSlip:
    """Tests for weld length and anti-slip area."""

    def test_butt_joint_length(self) -> None:
        strips = [
            strip("bottom-1", position=0.0),
            strip("bottom-2", position=1.65),
            strip("bottom-3", length=6.0, position=3.3),
            strip("wall-A-B-1", SegmentKind.WALL, position=0.0),
        ]
        assert butt_joint_length(strips) == pytest.approx(8.0 + 6.0)

    def test_single_strip_has_no_joint(self) -> None:
        assert butt_joint_length([strip("bottom-1", position=0.0)]) == 0.0

    def test_anti_slip_area(self) -> None:
        segments = [
            SurfaceSegment("bottom", SegmentKind.BOTTOM, 4.0, 8.0, 32.0),
            SurfaceSegment("stair-tread-1", SegmentKind.STAIR_TREAD, 0.3, 1.5, 0.45),
            SurfaceSegment("splash-bottom", SegmentKind.SPLASH_BOTTOM, 1.5, 2.0, 3.0),
        ]
        assert anti_slip_area(segments) == pytest.approx(3.45)
