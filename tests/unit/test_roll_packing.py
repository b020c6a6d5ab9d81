"""Tests for roll packing data models and the first-fit decreasing packer.

Tests cover:
- Data model validation and properties
- First-fit decreasing packing within one roll width
- Grouping strips by roll width
- Splitting strips longer than a roll
- Reusable offcut identification and waste calculation
"""

from __future__ import annotations

import pytest

from poolfoil.domain.value_objects import RollWidth, SegmentKind, Strip
from poolfoil.infrastructure.roll_packing import (
    FirstFitDecreasingPacker,
    PackingResult,
    ReusableOffcut,
    RollAllocation,
    RollPackingConfig,
    RollPackingService,
)


def make_strip(
    strip_id: str,
    length: float,
    roll_width: RollWidth = RollWidth.NARROW,
    kind: SegmentKind = SegmentKind.BOTTOM,
    used_width: float | None = None,
) -> Strip:
    return Strip(
        id=strip_id,
        segment_id=strip_id.rsplit("-", 1)[0],
        segment_kind=kind,
        roll_width=roll_width,
        used_width=used_width if used_width is not None else roll_width.value,
        strip_length=length,
    )


# =============================================================================
# Data models
# =============================================================================


class TestRollPackingConfig:
    """Tests for RollPackingConfig validation."""

    def test_defaults(self) -> None:
        config = RollPackingConfig()
        assert config.max_roll_length == 25.0
        assert config.allow_strip_splitting is True
        assert config.split_overlap == 0.10
        assert config.min_reusable_offcut == 2.0

    def test_rejects_non_positive_roll_length(self) -> None:
        with pytest.raises(ValueError, match="Roll length must be positive"):
            RollPackingConfig(max_roll_length=0)

    def test_rejects_negative_split_overlap(self) -> None:
        with pytest.raises(ValueError, match="Split overlap"):
            RollPackingConfig(split_overlap=-0.1)


class TestRollAllocation:
    """Tests for RollAllocation properties and validation."""

    def test_lengths_and_areas(self) -> None:
        roll = RollAllocation(
            roll_index=0,
            roll_width=RollWidth.NARROW,
            strips=(
                make_strip("bottom-1", 8.0),
                make_strip("bottom-2", 8.0, used_width=1.0),
            ),
        )
        assert roll.used_length == pytest.approx(16.0)
        assert roll.waste_length == pytest.approx(9.0)
        assert roll.roll_area == pytest.approx(41.25)
        assert roll.used_area == pytest.approx(13.2 + 8.0)
        assert roll.waste_area == pytest.approx(41.25 - 21.2)

    def test_rejects_overfull_roll(self) -> None:
        with pytest.raises(ValueError, match="uses"):
            RollAllocation(
                roll_index=0,
                roll_width=RollWidth.NARROW,
                strips=(make_strip("a-1", 20.0), make_strip("a-2", 10.0)),
            )

    def test_rejects_mixed_widths(self) -> None:
        with pytest.raises(ValueError, match="mix roll widths"):
            RollAllocation(
                roll_index=0,
                roll_width=RollWidth.NARROW,
                strips=(make_strip("a-1", 5.0, RollWidth.WIDE),),
            )

    def test_offcut_area(self) -> None:
        offcut = ReusableOffcut(roll_index=1, roll_width=RollWidth.WIDE, length=4.0)
        assert offcut.area == pytest.approx(8.2)

    def test_empty_packing_result(self) -> None:
        result = PackingResult()
        assert result.total_rolls == 0
        assert result.waste_percentage == 0.0
        assert result.widths_used == ()


# =============================================================================
# First-fit decreasing
# =============================================================================


class TestFirstFitDecreasingPacker:
    """Tests for the per-width packer."""

    def test_longest_strip_first(self) -> None:
        packer = FirstFitDecreasingPacker(25.0)
        rolls = packer.pack(
            [make_strip("a-1", 4.0), make_strip("a-2", 8.0), make_strip("a-3", 12.0)],
            RollWidth.NARROW,
        )
        assert len(rolls) == 1
        assert [s.id for s in rolls[0].strips] == ["a-3", "a-2", "a-1"]

    def test_opens_new_roll_when_full(self) -> None:
        packer = FirstFitDecreasingPacker(25.0)
        strips = [make_strip(f"a-{i}", 8.0) for i in range(1, 5)]
        rolls = packer.pack(strips, RollWidth.NARROW)
        assert [len(r.strips) for r in rolls] == [3, 1]
        assert rolls[0].waste_length == pytest.approx(1.0)

    def test_first_fit_fills_earlier_roll(self) -> None:
        packer = FirstFitDecreasingPacker(25.0)
        strips = [
            make_strip("a-1", 20.0),
            make_strip("a-2", 15.0),
            make_strip("a-3", 5.0),
            make_strip("a-4", 8.0),
        ]
        rolls = packer.pack(strips, RollWidth.NARROW)
        assert len(rolls) == 2
        assert [s.id for s in rolls[0].strips] == ["a-1", "a-3"]
        assert [s.id for s in rolls[1].strips] == ["a-2", "a-4"]

    def test_first_index(self) -> None:
        packer = FirstFitDecreasingPacker(25.0)
        rolls = packer.pack([make_strip("a-1", 4.0)], RollWidth.NARROW, 3)
        assert rolls[0].roll_index == 3

    def test_rejects_oversized_strip(self) -> None:
        packer = FirstFitDecreasingPacker(25.0)
        with pytest.raises(ValueError, match="longer than a roll"):
            packer.pack([make_strip("a-1", 26.0)], RollWidth.NARROW)


# =============================================================================
# Packing service
# =============================================================================


class TestRollPackingService:
    """Tests for RollPackingService coordination."""

    def test_empty_input(self) -> None:
        assert RollPackingService().pack([]) == PackingResult()

    def test_groups_by_width_narrow_first(self) -> None:
        strips = [
            make_strip("w-1", 8.0, RollWidth.WIDE),
            make_strip("n-1", 8.0, RollWidth.NARROW),
        ]
        result = RollPackingService().pack(strips)
        assert [r.roll_width for r in result.rolls] == [RollWidth.NARROW, RollWidth.WIDE]
        assert [r.roll_index for r in result.rolls] == [0, 1]
        assert result.rolls_by_width == {RollWidth.NARROW: 1, RollWidth.WIDE: 1}
        assert result.widths_used == (RollWidth.NARROW, RollWidth.WIDE)

    def test_waste_percentage(self) -> None:
        result = RollPackingService().pack([make_strip("a-1", 25.0)])
        assert result.waste_area == pytest.approx(0.0)
        assert result.waste_percentage == pytest.approx(0.0)

        result = RollPackingService().pack([make_strip("a-1", 20.0, used_width=1.0)])
        assert result.used_area == pytest.approx(20.0)
        assert result.waste_percentage == pytest.approx((41.25 - 20.0) / 41.25 * 100)

    def test_splits_oversized_strip(self) -> None:
        result = RollPackingService().pack([make_strip("bottom-1", 30.0)])
        ids = [s.id for s in result.strips]
        assert ids == ["bottom-1/1", "bottom-1/2"]
        first, second = result.strips
        assert first.strip_length == pytest.approx(25.0)
        assert second.strip_length == pytest.approx(5.1)
        assert first.vertical_seam is True
        assert second.vertical_seam is False
        assert result.unpacked == ()
        assert result.total_rolls == 2

    def test_long_strip_split_into_three(self) -> None:
        result = RollPackingService().pack([make_strip("wall-A-B-1", 60.0)])
        lengths = [s.strip_length for s in result.strips]
        assert lengths == pytest.approx([25.0, 25.0, 10.2])
        assert sum(lengths) - 2 * 0.10 == pytest.approx(60.0)

    def test_splitting_disabled_leaves_strip_unpacked(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        service = RollPackingService(RollPackingConfig(allow_strip_splitting=False))
        result = service.pack([make_strip("bottom-1", 30.0), make_strip("bottom-2", 5.0)])
        assert [s.id for s in result.unpacked] == ["bottom-1"]
        assert result.total_rolls == 1
        assert "was not packed" in caplog.text

    def test_reusable_offcuts(self) -> None:
        service = RollPackingService(RollPackingConfig(min_reusable_offcut=5.0))
        result = service.pack(
            [make_strip("a-1", 10.0), make_strip("b-1", 22.0, RollWidth.WIDE)]
        )
        assert result.offcuts == (
            ReusableOffcut(roll_index=0, roll_width=RollWidth.NARROW, length=15.0),
        )
