"""Foil stock, strips, plan settings and plan issues."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._surfaces import SegmentKind

# Manufacturer rules
MAX_ROLL_LENGTH = 25.0
MIN_OVERLAP_BOTTOM = 0.05
MIN_OVERLAP_WALL = 0.10
DEFAULT_FOLD_ALLOWANCE = 0.15
MIN_FOLD_ALLOWANCE = 0.10
MAX_FOLD_ALLOWANCE = 0.20
NARROW_HEIGHT_BREAKPOINT = 1.40
DEEP_WALL_THRESHOLD = 1.95
WIDE_WALL_DEPTH_THRESHOLD = 1.55

# Vertical joins where continuous wall runs meet
MIN_VERTICAL_JOIN_OVERLAP = 0.07
MAX_VERTICAL_JOIN_OVERLAP = 0.15
DEFAULT_VERTICAL_JOIN_OVERLAP = 0.10

# Planning margins
DEFAULT_SEAM_MARGIN_PERCENT = 10.0
DEFAULT_IRREGULAR_SURCHARGE_PERCENT = 20.0


class RollWidth(float, Enum):
    """Nominal foil roll widths in meters."""

    NARROW = 1.65
    WIDE = 2.05

    @property
    def label(self) -> str:
        """Display label, e.g. '1.65 m'."""
        return f"{self.value:.2f} m"


class JointType(str, Enum):
    """How adjacent strips are joined."""

    OVERLAP = "overlap"
    BUTT = "butt"


class FoilType(str, Enum):
    """Foil product families."""

    SOLID = "solid"
    PRINTED = "printed"
    STRUCTURAL = "structural"


@dataclass(frozen=True)
class FoilMaterial:
    """The selected sheet material.

    Printed and structural foils are only produced on narrow rolls.
    Structural foil is butt-welded by default.
    """

    foil_type: FoilType = FoilType.SOLID
    joint_type: JointType = JointType.OVERLAP

    @property
    def narrow_only(self) -> bool:
        """True if the material only comes on narrow rolls."""
        return self.foil_type in (FoilType.PRINTED, FoilType.STRUCTURAL)

    @property
    def uses_butt_joint(self) -> bool:
        """True if horizontal seams are butt-welded instead of overlapped."""
        return self.joint_type is JointType.BUTT

    @property
    def available_widths(self) -> tuple[RollWidth, ...]:
        """Roll widths this material is available in."""
        if self.narrow_only:
            return (RollWidth.NARROW,)
        return (RollWidth.NARROW, RollWidth.WIDE)

    @classmethod
    def solid(cls) -> FoilMaterial:
        """Single-colour foil, both widths, overlapped seams."""
        return cls(foil_type=FoilType.SOLID, joint_type=JointType.OVERLAP)

    @classmethod
    def printed(cls) -> FoilMaterial:
        """Printed foil, narrow rolls only."""
        return cls(foil_type=FoilType.PRINTED, joint_type=JointType.OVERLAP)

    @classmethod
    def structural(cls) -> FoilMaterial:
        """Structural anti-slip foil, narrow rolls, butt-welded."""
        return cls(foil_type=FoilType.STRUCTURAL, joint_type=JointType.BUTT)


class PlanStrategy(str, Enum):
    """Roll width strategy for a plan.

    Attributes:
        AUTO: Plan every candidate and keep the one with the lowest score.
        MIXED: Choose a width per segment.
        NARROW_ONLY: Use narrow rolls everywhere.
        WIDE_ONLY: Use wide rolls everywhere.
    """

    AUTO = "auto"
    MIXED = "mixed"
    NARROW_ONLY = "narrow"
    WIDE_ONLY = "wide"


class WallLayout(str, Enum):
    """How pool walls are cut into strips.

    Attributes:
        PER_WALL: Each wall gets its own strips.
        CONTINUOUS: Strips may run around corners across several walls.
    """

    PER_WALL = "per-wall"
    CONTINUOUS = "continuous"


class OptimizationPriority(str, Enum):
    """What the continuous wall optimizer minimises first."""

    MIN_WASTE = "min-waste"
    MIN_ROLLS = "min-rolls"


@dataclass(frozen=True)
class PlanningSettings:
    """Tunable planning parameters.

    Attributes:
        fold_allowance: Extra wall height wrapped onto the floor.
        overlap_bottom: Overlap planned between bottom-class strips.
        overlap_wall: Overlap planned between wall-class strips.
        seam_margin_percent: Margin added to the base area for seams.
        irregular_surcharge_percent: Surcharge for irregular pools.
        strategy: Roll width strategy.
        wall_layout: Per-wall strips or continuous runs around corners.
        priority: Ranking used when choosing continuous wall runs.
        vertical_join_overlap: Overlap where two wall runs meet.
        separate_structural: Plan treads, risers and splash bottoms on
            structural anti-slip rolls packed apart from the main foil.
    """

    fold_allowance: float = DEFAULT_FOLD_ALLOWANCE
    overlap_bottom: float = MIN_OVERLAP_BOTTOM
    overlap_wall: float = MIN_OVERLAP_WALL
    seam_margin_percent: float = DEFAULT_SEAM_MARGIN_PERCENT
    irregular_surcharge_percent: float = DEFAULT_IRREGULAR_SURCHARGE_PERCENT
    strategy: PlanStrategy = PlanStrategy.AUTO
    wall_layout: WallLayout = WallLayout.PER_WALL
    priority: OptimizationPriority = OptimizationPriority.MIN_WASTE
    vertical_join_overlap: float = DEFAULT_VERTICAL_JOIN_OVERLAP
    separate_structural: bool = False

    def __post_init__(self) -> None:
        if not MIN_FOLD_ALLOWANCE <= self.fold_allowance <= MAX_FOLD_ALLOWANCE:
            raise ValueError(
                f"Fold allowance must be between {MIN_FOLD_ALLOWANCE} "
                f"and {MAX_FOLD_ALLOWANCE}"
            )
        if self.overlap_bottom < 0 or self.overlap_wall < 0:
            raise ValueError("Overlaps must be non-negative")
        if max(self.overlap_bottom, self.overlap_wall) >= RollWidth.NARROW.value:
            raise ValueError("Overlaps must be smaller than the narrow roll width")
        if self.seam_margin_percent < 0:
            raise ValueError("Seam margin must be non-negative")
        if self.irregular_surcharge_percent < 0:
            raise ValueError("Irregular surcharge must be non-negative")
        if not (
            MIN_VERTICAL_JOIN_OVERLAP
            <= self.vertical_join_overlap
            <= MAX_VERTICAL_JOIN_OVERLAP
        ):
            raise ValueError(
                f"Vertical join overlap must be between {MIN_VERTICAL_JOIN_OVERLAP} "
                f"and {MAX_VERTICAL_JOIN_OVERLAP}"
            )

    @property
    def continuous_walls(self) -> bool:
        """True if wall strips may run around corners."""
        return self.wall_layout is WallLayout.CONTINUOUS


@dataclass(frozen=True)
class Strip:
    """One cut length of foil covering part of a segment's width.

    Attributes:
        id: Identifier, derived from the segment id and strip number.
        segment_id: Id of the segment this strip covers.
        segment_kind: Kind of that segment.
        roll_width: Roll the strip is cut from.
        used_width: Width of the roll actually laid on the surface.
        strip_length: Cut length.
        overlap_with_previous: Width shared with the previous strip.
        position_along_width: Offset of the strip's leading edge from the
            segment edge.
        vertical_seam: True if the strip ends at a cross seam because it was
            split to fit a roll.
    """

    id: str
    segment_id: str
    segment_kind: SegmentKind
    roll_width: RollWidth
    used_width: float
    strip_length: float
    overlap_with_previous: float = 0.0
    position_along_width: float = 0.0
    vertical_seam: bool = False

    def __post_init__(self) -> None:
        if self.used_width <= 0:
            raise ValueError("Used width must be positive")
        if self.used_width > self.roll_width.value + 1e-9:
            raise ValueError("Used width cannot exceed the roll width")
        if self.strip_length <= 0:
            raise ValueError("Strip length must be positive")
        if self.overlap_with_previous < 0:
            raise ValueError("Overlap must be non-negative")

    @property
    def covered_width(self) -> float:
        """Width this strip adds to the segment coverage."""
        return self.used_width - self.overlap_with_previous

    @property
    def area(self) -> float:
        """Foil area laid on the surface."""
        return self.used_width * self.strip_length


class IssueSeverity(str, Enum):
    """Severity of a plan issue."""

    ERROR = "error"
    WARNING = "warning"


class IssueCode(str, Enum):
    """Manufacturing rule codes."""

    STRIP_TOO_LONG = "STRIP_TOO_LONG"
    OVERLAP_TOO_SMALL = "OVERLAP_TOO_SMALL"
    VERTICAL_SEAM_ON_WALL = "VERTICAL_SEAM_ON_WALL"


@dataclass(frozen=True)
class ValidationIssue:
    """A manufacturing rule violation found in a plan.

    Errors mean the plan cannot be built as specified, warnings mean it can
    but is suboptimal.
    """

    severity: IssueSeverity
    code: IssueCode
    message: str
    strip_id: str | None = None

    @property
    def is_error(self) -> bool:
        """True for error severity."""
        return self.severity is IssueSeverity.ERROR


@dataclass(frozen=True)
class StrategySummary:
    """Roll counts and waste for one roll width strategy."""

    rolls_narrow: int
    rolls_wide: int
    waste_area: float
    waste_percent: float

    @property
    def total_rolls(self) -> int:
        """Total rolls across both widths."""
        return self.rolls_narrow + self.rolls_wide


@dataclass(frozen=True)
class PlanComparison:
    """Narrow-only, wide-only and mixed strategies side by side."""

    narrow_only: StrategySummary
    wide_only: StrategySummary
    mixed: StrategySummary

    @property
    def lowest_waste_strategy(self) -> PlanStrategy:
        """Strategy with the least waste area; ties favour narrow, then wide."""
        candidates = (
            (self.narrow_only.waste_area, PlanStrategy.NARROW_ONLY),
            (self.wide_only.waste_area, PlanStrategy.WIDE_ONLY),
            (self.mixed.waste_area, PlanStrategy.MIXED),
        )
        return min(candidates, key=lambda c: c[0])[1]
