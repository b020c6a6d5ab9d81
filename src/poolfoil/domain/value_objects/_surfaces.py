"""Pool geometry inputs and the coverable surface segments derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._geometry import Point

# Skimmer pools hold water 10 cm below the coping.
SKIMMER_WATER_DROP = 0.10


class PoolShape(str, Enum):
    """Supported pool outline variants."""

    RECTANGLE = "rectangle"
    OVAL = "oval"
    L_SHAPE = "l-shape"
    STEPPED_RECTANGLE = "stepped-rectangle"
    CUSTOM = "custom-polygon"


class OverflowType(str, Enum):
    """How water leaves the pool basin.

    Attributes:
        SKIMMER: Water line sits below the coping.
        GUTTER: Water runs over the edge into a gutter, filling to the brim.
    """

    SKIMMER = "skimmer"
    GUTTER = "gutter"


class SegmentKind(str, Enum):
    """Kind of coverable surface.

    Bottom-class kinds are horizontal and seamed with the smaller bottom
    overlap; every other kind is wall-class.
    """

    BOTTOM = "bottom"
    WALL = "wall"
    STAIR_TREAD = "stair-tread"
    STAIR_RISER = "stair-riser"
    SPLASH_BOTTOM = "splash-bottom"
    SPLASH_WALL = "splash-wall"
    DIVIDING_WALL_POOL = "dividing-wall-pool"
    DIVIDING_WALL_SPLASH = "dividing-wall-splash"
    DIVIDING_WALL_TOP = "dividing-wall-top"

    @property
    def is_bottom_class(self) -> bool:
        """True for horizontal surfaces."""
        return self in _BOTTOM_CLASS

    @property
    def is_wall_class(self) -> bool:
        """True for vertical surfaces."""
        return self not in _BOTTOM_CLASS

    @property
    def takes_fold(self) -> bool:
        """True if the surface wraps onto a floor and needs a fold allowance."""
        return self in _FOLDED

    @property
    def is_anti_slip(self) -> bool:
        """True if the surface is walked on and needs anti-slip foil."""
        return self in (SegmentKind.STAIR_TREAD, SegmentKind.SPLASH_BOTTOM)


_BOTTOM_CLASS = frozenset(
    {
        SegmentKind.BOTTOM,
        SegmentKind.STAIR_TREAD,
        SegmentKind.SPLASH_BOTTOM,
        SegmentKind.DIVIDING_WALL_TOP,
    }
)

_FOLDED = frozenset(
    {
        SegmentKind.WALL,
        SegmentKind.SPLASH_WALL,
        SegmentKind.DIVIDING_WALL_POOL,
    }
)


@dataclass(frozen=True)
class SurfaceSegment:
    """A surface covered by parallel strips.

    Attributes:
        id: Stable identifier, e.g. "bottom" or "wall-A-B".
        kind: Surface kind.
        width_to_cover: Extent the strips must cover side by side, including
            any fold allowance.
        length_along_strip: Length of each strip laid on this surface.
        area: Finished surface area (without fold allowance or seams).
        fold_allowance: Part of width_to_cover reserved for the floor wrap.
    """

    id: str
    kind: SegmentKind
    width_to_cover: float
    length_along_strip: float
    area: float
    fold_allowance: float = 0.0

    def __post_init__(self) -> None:
        if self.width_to_cover <= 0:
            raise ValueError("Width to cover must be positive")
        if self.length_along_strip <= 0:
            raise ValueError("Length along strip must be positive")
        if self.area < 0:
            raise ValueError("Area must be non-negative")
        if not 0 <= self.fold_allowance < self.width_to_cover:
            raise ValueError("Fold allowance must be smaller than width to cover")

    @property
    def nominal_height(self) -> float:
        """Width to cover without the fold allowance."""
        return self.width_to_cover - self.fold_allowance


@dataclass(frozen=True)
class PoolGeometry:
    """Pool outline and depth profile.

    Closed-form shapes use length/width (plus the arm for an L-shape).
    Custom polygons use vertices only; fewer than three vertices is an
    outline that has not been drawn yet and yields zero areas.

    Attributes:
        shape: Outline variant.
        length: Outer length in meters (x axis).
        width: Outer width in meters (y axis).
        depth: Wall depth in meters.
        overflow: Overflow type, which sets the water depth.
        vertices: Outline vertices for custom polygons.
        arm_length: How far the L-shape arm extends beyond the main rectangle.
        arm_width: Width of the L-shape arm along the main rectangle edge.
        irregular: Whether the irregular-shape surcharge applies.
    """

    shape: PoolShape
    depth: float
    length: float = 0.0
    width: float = 0.0
    overflow: OverflowType = OverflowType.SKIMMER
    vertices: tuple[Point, ...] = ()
    arm_length: float = 0.0
    arm_width: float = 0.0
    irregular: bool = False

    def __post_init__(self) -> None:
        if self.depth <= 0:
            raise ValueError("Pool depth must be positive")
        if self.shape is not PoolShape.CUSTOM:
            if self.length <= 0 or self.width <= 0:
                raise ValueError("Pool length and width must be positive")
        if self.shape is PoolShape.L_SHAPE:
            if self.arm_length <= 0 or self.arm_width <= 0:
                raise ValueError("L-shaped pool needs a positive arm length and width")
            if self.arm_width > self.length:
                raise ValueError("L-shape arm cannot be wider than the pool length")

    @property
    def water_depth(self) -> float:
        """Depth of water in the basin."""
        if self.overflow is OverflowType.SKIMMER:
            return max(self.depth - SKIMMER_WATER_DROP, 0.0)
        return self.depth
