"""Tests for strip planning."""

from __future__ import annotations

import pytest

from poolfoil.domain.services import StripPlanner, plan_strips
from poolfoil.domain.value_objects import (
    FoilMaterial,
    PlanningSettings,
    RollWidth,
    SegmentKind,
    SurfaceSegment,
)


@pytest.fixture
def bottom_segment() -> SurfaceSegment:
    return SurfaceSegment(
        id="bottom",
        kind=SegmentKind.BOTTOM,
        width_to_cover=4.0,
        length_along_strip=8.0,
        area=32.0,
    )


class TestPlanStrips:
    """Tests for laying strips across a width."""

    def test_four_meters_on_narrow_rolls(self) -> None:
        spans = plan_strips(4.0, RollWidth.NARROW, 0.05)
        assert [s.used_width for s in spans] == pytest.approx([1.65, 1.65, 0.8])
        assert [s.position for s in spans] == pytest.approx([0.0, 1.6, 3.2])
        assert [s.overlap for s in spans] == [0.0, 0.05, 0.05]

    def test_spans_cover_the_width(self) -> None:
        spans = plan_strips(4.0, RollWidth.WIDE, 0.05)
        last = spans[-1]
        assert last.position + last.used_width == pytest.approx(4.0)

    def test_first_strip_never_overlaps(self) -> None:
        spans = plan_strips(1.2, RollWidth.NARROW, 0.10)
        assert len(spans) == 1
        assert spans[0].used_width == pytest.approx(1.2)
        assert spans[0].overlap == 0.0

    def test_exact_roll_width(self) -> None:
        assert len(plan_strips(1.65, RollWidth.NARROW, 0.05)) == 1

    def test_nothing_to_cover(self) -> None:
        assert plan_strips(0.0, RollWidth.NARROW, 0.05) == []

    def test_overlap_not_smaller_than_roll(self) -> None:
        with pytest.raises(ValueError, match="smaller than roll width"):
            plan_strips(4.0, RollWidth.NARROW, 1.65)

    def test_butt_joint_has_no_overlap(self) -> None:
        spans = plan_strips(4.0, RollWidth.NARROW, 0.0)
        assert [s.used_width for s in spans] == pytest.approx([1.65, 1.65, 0.7])

    @pytest.mark.parametrize("width", [0.4, 1.65, 3.3, 4.0, 7.25])
    @pytest.mark.parametrize("roll_width", list(RollWidth))
    def test_repeat_calls_give_identical_spans(
        self, width: float, roll_width: RollWidth
    ) -> None:
        first = plan_strips(width, roll_width, 0.05)
        for _ in range(3):
            assert plan_strips(width, roll_width, 0.05) == first


class TestStripPlanner:
    """Tests for turning segments into strips."""

    def test_strip_ids_and_lengths(self, bottom_segment: SurfaceSegment) -> None:
        strips = StripPlanner().plan_segment(bottom_segment, RollWidth.NARROW)
        assert [s.id for s in strips] == ["bottom-1", "bottom-2", "bottom-3"]
        assert all(s.strip_length == 8.0 for s in strips)
        assert all(s.segment_kind is SegmentKind.BOTTOM for s in strips)
        assert all(s.roll_width is RollWidth.NARROW for s in strips)

    def test_overlaps_follow_settings(self) -> None:
        planner = StripPlanner(PlanningSettings(overlap_bottom=0.08, overlap_wall=0.12))
        assert planner.overlap_for(SegmentKind.BOTTOM) == 0.08
        assert planner.overlap_for(SegmentKind.STAIR_TREAD) == 0.08
        assert planner.overlap_for(SegmentKind.WALL) == 0.12
        assert planner.overlap_for(SegmentKind.STAIR_RISER) == 0.12

    def test_butt_material_skips_bottom_overlap(self) -> None:
        planner = StripPlanner(material=FoilMaterial.structural())
        assert planner.overlap_for(SegmentKind.BOTTOM) == 0.0
        assert planner.overlap_for(SegmentKind.WALL) == 0.10

    def test_covered_width_adds_up(self, bottom_segment: SurfaceSegment) -> None:
        strips = StripPlanner().plan_segment(bottom_segment, RollWidth.WIDE)
        assert sum(s.covered_width for s in strips) == pytest.approx(4.0)

    def test_repeat_planning_gives_identical_strips(
        self, bottom_segment: SurfaceSegment
    ) -> None:
        planner = StripPlanner()
        first = planner.plan_segment(bottom_segment, RollWidth.NARROW)
        assert planner.plan_segment(bottom_segment, RollWidth.NARROW) == first
        assert StripPlanner().plan_segment(bottom_segment, RollWidth.NARROW) == first
