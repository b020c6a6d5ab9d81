"""Cutting-stock packing of foil strips into fixed-length rolls.

Strips are grouped by roll width (a roll never mixes widths) and each group
is packed with first-fit decreasing: longest strip first, into the first
roll with enough length left, else a new roll. This is a polynomial-time
approximation of bin packing; it favours predictable latency over a
provably minimal roll count.

Strips longer than a roll are split along their length into pieces joined
by a short overlap, unless splitting is disabled, in which case they are
left unpacked and reported.

All dataclasses are frozen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Sequence

from poolfoil.domain.value_objects import MAX_ROLL_LENGTH, RollWidth, Strip

logger = logging.getLogger(__name__)

__all__ = [
    "FirstFitDecreasingPacker",
    "PackingResult",
    "ReusableOffcut",
    "RollAllocation",
    "RollPackingConfig",
    "RollPackingService",
]

_EPSILON = 1e-9


@dataclass(frozen=True)
class RollPackingConfig:
    """Configuration for roll packing.

    Attributes:
        max_roll_length: Length of a full roll in meters.
        allow_strip_splitting: Whether to split strips longer than a roll.
        split_overlap: Overlap at the cross seam joining split pieces.
        min_reusable_offcut: Shortest roll remainder reported as reusable.
    """

    max_roll_length: float = MAX_ROLL_LENGTH
    allow_strip_splitting: bool = True
    split_overlap: float = 0.10
    min_reusable_offcut: float = 2.0

    def __post_init__(self) -> None:
        if self.max_roll_length <= 0:
            raise ValueError("Roll length must be positive")
        if not 0 <= self.split_overlap < self.max_roll_length:
            raise ValueError("Split overlap must be non-negative and shorter than a roll")
        if self.min_reusable_offcut < 0:
            raise ValueError("Minimum reusable offcut must be non-negative")


@dataclass(frozen=True)
class RollAllocation:
    """Strips cut from one roll.

    Attributes:
        roll_index: Zero-based index of this roll in the packing result.
        roll_width: Width of the roll.
        strips: Strips in cutting order.
        max_length: Full roll length.
    """

    roll_index: int
    roll_width: RollWidth
    strips: tuple[Strip, ...]
    max_length: float = MAX_ROLL_LENGTH

    def __post_init__(self) -> None:
        if self.roll_index < 0:
            raise ValueError("Roll index must be non-negative")
        if self.used_length > self.max_length + _EPSILON:
            raise ValueError(
                f"Roll {self.roll_index} uses {self.used_length:.2f} m "
                f"of {self.max_length:.2f} m"
            )
        if any(s.roll_width is not self.roll_width for s in self.strips):
            raise ValueError("A roll cannot mix roll widths")

    @property
    def used_length(self) -> float:
        """Length cut from the roll."""
        return sum(s.strip_length for s in self.strips)

    @property
    def waste_length(self) -> float:
        """Length left on the roll."""
        return max(self.max_length - self.used_length, 0.0)

    @property
    def roll_area(self) -> float:
        """Area of the full roll."""
        return self.roll_width.value * self.max_length

    @property
    def used_area(self) -> float:
        """Foil area laid on the pool from this roll."""
        return sum(s.area for s in self.strips)

    @property
    def waste_area(self) -> float:
        """Roll area not laid on the pool, including trimmed width."""
        return self.roll_area - self.used_area


@dataclass(frozen=True)
class ReusableOffcut:
    """Roll remainder long enough to reuse on another job."""

    roll_index: int
    roll_width: RollWidth
    length: float

    @property
    def area(self) -> float:
        return self.roll_width.value * self.length


@dataclass(frozen=True)
class PackingResult:
    """Complete result of roll packing.

    Attributes:
        rolls: Roll allocations, narrow rolls first.
        offcuts: Reusable roll remainders.
        unpacked: Strips too long for any roll (splitting disabled).
        strips: Every strip after splitting, packed or not.
        rolls_by_width: Roll count per width.
    """

    rolls: tuple[RollAllocation, ...] = ()
    offcuts: tuple[ReusableOffcut, ...] = ()
    unpacked: tuple[Strip, ...] = ()
    strips: tuple[Strip, ...] = ()
    rolls_by_width: dict[RollWidth, int] = field(default_factory=dict)

    @property
    def total_rolls(self) -> int:
        return len(self.rolls)

    @property
    def total_roll_area(self) -> float:
        """Area of all rolls bought."""
        return sum(r.roll_area for r in self.rolls)

    @property
    def used_area(self) -> float:
        """Foil area laid from all rolls."""
        return sum(r.used_area for r in self.rolls)

    @property
    def waste_area(self) -> float:
        return self.total_roll_area - self.used_area

    @property
    def waste_percentage(self) -> float:
        """Waste as a percentage of the purchased roll area (0-100)."""
        total = self.total_roll_area
        if total == 0:
            return 0.0
        return self.waste_area / total * 100

    @property
    def widths_used(self) -> tuple[RollWidth, ...]:
        """Roll widths with at least one roll."""
        return tuple(w for w, count in self.rolls_by_width.items() if count > 0)


class FirstFitDecreasingPacker:
    """Packs strips of one width into rolls, longest strip first.

    Attributes:
        max_roll_length: Length of a full roll.
    """

    def __init__(self, max_roll_length: float = MAX_ROLL_LENGTH) -> None:
        self.max_roll_length = max_roll_length

    def pack(
        self,
        strips: Sequence[Strip],
        roll_width: RollWidth,
        first_index: int = 0,
    ) -> list[RollAllocation]:
        """Assign every strip to a roll.

        Args:
            strips: Strips of a single roll width, each fitting on one roll.
            roll_width: Width shared by all strips.
            first_index: Index given to the first roll opened.

        Returns:
            Roll allocations in the order they were opened.

        Raises:
            ValueError: If a strip is longer than a roll.
        """
        ordered = sorted(strips, key=lambda s: s.strip_length, reverse=True)
        bins: list[list[Strip]] = []
        remaining: list[float] = []

        for strip in ordered:
            if strip.strip_length > self.max_roll_length + _EPSILON:
                raise ValueError(
                    f"Strip {strip.id} ({strip.strip_length:.2f} m) is longer than a roll"
                )
            for i, left in enumerate(remaining):
                if strip.strip_length <= left + _EPSILON:
                    bins[i].append(strip)
                    remaining[i] = left - strip.strip_length
                    break
            else:
                bins.append([strip])
                remaining.append(self.max_roll_length - strip.strip_length)

        return [
            RollAllocation(
                roll_index=first_index + i,
                roll_width=roll_width,
                strips=tuple(contents),
                max_length=self.max_roll_length,
            )
            for i, contents in enumerate(bins)
        ]


class RollPackingService:
    """Coordinates strip splitting and per-width packing.

    Attributes:
        config: Roll packing configuration.
        packer: FirstFitDecreasingPacker doing the per-width packing.
    """

    def __init__(self, config: RollPackingConfig | None = None) -> None:
        self.config = config or RollPackingConfig()
        self.packer = FirstFitDecreasingPacker(self.config.max_roll_length)

    def pack(self, strips: Sequence[Strip]) -> PackingResult:
        """Pack strips into rolls, grouping by roll width.

        Args:
            strips: Strips from every segment.

        Returns:
            PackingResult with rolls, reusable offcuts and any strips that
            could not be packed.
        """
        if not strips:
            return PackingResult()

        prepared = self._split_oversized_strips(list(strips))
        packable: list[Strip] = []
        unpacked: list[Strip] = []
        for strip in prepared:
            if strip.strip_length > self.config.max_roll_length + _EPSILON:
                logger.warning(
                    "Strip %s (%.2f m) exceeds the %.0f m roll length and was not packed",
                    strip.id,
                    strip.strip_length,
                    self.config.max_roll_length,
                )
                unpacked.append(strip)
            else:
                packable.append(strip)

        groups = self._group_by_width(packable)
        rolls: list[RollAllocation] = []
        rolls_by_width: dict[RollWidth, int] = {}

        for roll_width, group in groups.items():
            allocations = self.packer.pack(group, roll_width, first_index=len(rolls))
            logger.debug(
                "%s: %d strips -> %d rolls",
                roll_width.label,
                len(group),
                len(allocations),
            )
            rolls.extend(allocations)
            rolls_by_width[roll_width] = len(allocations)

        result = PackingResult(
            rolls=tuple(rolls),
            offcuts=tuple(self._extract_offcuts(rolls)),
            unpacked=tuple(unpacked),
            strips=tuple(prepared),
            rolls_by_width=rolls_by_width,
        )
        logger.info(
            "Packed %d strips into %d rolls (%.1f%% waste)",
            len(packable),
            result.total_rolls,
            result.waste_percentage,
        )
        return result

    def _split_oversized_strip(self, strip: Strip) -> list[Strip]:
        """Split a strip longer than a roll into pieces joined by an overlap.

        The first piece takes a full roll; each later piece covers the
        remainder plus the join overlap. Every piece but the last ends in a
        vertical seam.
        """
        max_length = self.config.max_roll_length
        overlap = self.config.split_overlap

        lengths: list[float] = []
        covered = 0.0
        while covered < strip.strip_length - _EPSILON:
            if not lengths:
                size = min(max_length, strip.strip_length)
                covered = size
            else:
                size = min(max_length, strip.strip_length - covered + overlap)
                covered += size - overlap
            lengths.append(size)

        pieces = [
            replace(
                strip,
                id=f"{strip.id}/{number}",
                strip_length=size,
                vertical_seam=number < len(lengths),
            )
            for number, size in enumerate(lengths, start=1)
        ]
        logger.info(
            "Split strip %s (%.2f m) into %d pieces",
            strip.id,
            strip.strip_length,
            len(pieces),
        )
        return pieces

    def _split_oversized_strips(self, strips: list[Strip]) -> list[Strip]:
        """Replace oversized strips with their split pieces when allowed."""
        if not self.config.allow_strip_splitting:
            return strips

        result: list[Strip] = []
        for strip in strips:
            if strip.strip_length > self.config.max_roll_length + _EPSILON:
                result.extend(self._split_oversized_strip(strip))
            else:
                result.append(strip)
        return result

    def _group_by_width(self, strips: Sequence[Strip]) -> dict[RollWidth, list[Strip]]:
        """Group strips by roll width, narrow first."""
        groups: dict[RollWidth, list[Strip]] = {}
        for roll_width in RollWidth:
            group = [s for s in strips if s.roll_width is roll_width]
            if group:
                groups[roll_width] = group
        return groups

    def _extract_offcuts(self, rolls: Sequence[RollAllocation]) -> list[ReusableOffcut]:
        """Roll remainders at least min_reusable_offcut long."""
        return [
            ReusableOffcut(
                roll_index=roll.roll_index,
                roll_width=roll.roll_width,
                length=roll.waste_length,
            )
            for roll in rolls
            if roll.waste_length >= self.config.min_reusable_offcut
        ]
