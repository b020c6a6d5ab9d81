"""Stairs and splash-pool sub-features and their footprints."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._geometry import Point, StepLine

# Stairs defaults
DEFAULT_STEP_COUNT = 4
DEFAULT_STEP_DEPTH = 0.30
DEFAULT_STEP_HEIGHT = 0.20
DEFAULT_STAIRS_WIDTH = 1.5
DEFAULT_MIN_TREAD_DEPTH = 0.20
DEFAULT_MAX_TREAD_DEPTH = 0.30

DIVIDING_WALL_THICKNESS = 0.15


class FeatureKind(str, Enum):
    """Optional pool sub-features that occupy part of the outline."""

    STAIRS = "stairs"
    SPLASH_POOL = "splash-pool"

    @property
    def label(self) -> str:
        """Human-readable name."""
        return "Stairs" if self is FeatureKind.STAIRS else "Splash pool"


class StairsShape(str, Enum):
    """Stair footprint topologies."""

    RECTANGULAR = "rectangular"
    DIAGONAL_45 = "diagonal-45"
    SCALENE_TRIANGLE = "scalene-triangle"


class StairsDirection(str, Enum):
    """Which pool axis the stair width (or splash-pool width) runs along."""

    ALONG_LENGTH = "along-length"
    ALONG_WIDTH = "along-width"


class SplashAnchor(str, Enum):
    """Points where a splash pool's edges meet the pool walls.

    Attributes:
        E: End of the splash-pool width, on the wall it runs along.
        F: End of the splash-pool length, on the adjacent wall.
    """

    E = "E"
    F = "F"


@dataclass(frozen=True)
class StairsSpec:
    """Stairs configuration, normalised to one canonical record.

    Attributes:
        shape: Footprint topology.
        corner_index: Pool outline vertex the stairs start from.
        splash_anchor: Start from a splash-pool intersection point instead
            of a pool corner.
        direction: Axis the stair width runs along (rectangular stairs).
        width: Stair width, or None for the full length of the wall.
        step_count: Number of treads.
        step_depth: Tread depth (rectangular and diagonal stairs).
        step_height: Riser height.
        vertices: Triangle vertices for scalene stairs.
        min_tread_depth: Tread depth at the apex of scalene stairs.
        max_tread_depth: Tread depth at the base of scalene stairs.
    """

    shape: StairsShape = StairsShape.RECTANGULAR
    corner_index: int = 0
    splash_anchor: SplashAnchor | None = None
    direction: StairsDirection = StairsDirection.ALONG_WIDTH
    width: float | None = DEFAULT_STAIRS_WIDTH
    step_count: int = DEFAULT_STEP_COUNT
    step_depth: float = DEFAULT_STEP_DEPTH
    step_height: float = DEFAULT_STEP_HEIGHT
    vertices: tuple[Point, ...] = ()
    min_tread_depth: float = DEFAULT_MIN_TREAD_DEPTH
    max_tread_depth: float = DEFAULT_MAX_TREAD_DEPTH

    def __post_init__(self) -> None:
        if self.step_count < 1:
            raise ValueError("Stairs need at least one step")
        if self.step_depth <= 0 or self.step_height <= 0:
            raise ValueError("Step depth and height must be positive")
        if self.width is not None and self.width <= 0:
            raise ValueError("Stairs width must be positive")
        if self.corner_index < 0:
            raise ValueError("Corner index must be non-negative")
        if self.shape is StairsShape.SCALENE_TRIANGLE and len(self.vertices) != 3:
            raise ValueError("Scalene stairs need exactly three vertices")
        if not 0 < self.min_tread_depth <= self.max_tread_depth:
            raise ValueError("Tread depths must be positive with min <= max")


@dataclass(frozen=True)
class SplashPoolSpec:
    """Splash pool placed in a pool corner.

    Attributes:
        corner_index: Pool outline vertex the splash pool sits in.
        direction: Axis the splash-pool width runs along.
        width: Extent along the wall.
        length: Extent into the pool.
        depth: Splash-pool water depth.
        has_dividing_wall: Whether a wall separates it from the main pool.
        dividing_wall_offset: Height of the dividing wall above the
            splash-pool floor.
    """

    width: float
    length: float
    depth: float
    corner_index: int = 0
    direction: StairsDirection = StairsDirection.ALONG_LENGTH
    has_dividing_wall: bool = True
    dividing_wall_offset: float = 0.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.length <= 0 or self.depth <= 0:
            raise ValueError("Splash pool dimensions must be positive")
        if self.dividing_wall_offset < 0:
            raise ValueError("Dividing wall offset must be non-negative")
        if self.corner_index < 0:
            raise ValueError("Corner index must be non-negative")


@dataclass(frozen=True)
class FootprintPolygon:
    """Plan-view outline of a sub-feature inside the pool."""

    feature: FeatureKind
    vertices: tuple[Point, ...]


@dataclass(frozen=True)
class Tread:
    """A single stair tread.

    Attributes:
        index: 1-based tread number, counted from the anchor.
        polygon: Plan-view outline of the tread.
        depth: Tread depth across the step lines.
        outer_edge: Length of the tread's far edge, where its riser stands.
        area: Plan-view area.
    """

    index: int
    polygon: tuple[Point, ...]
    depth: float
    outer_edge: float
    area: float


@dataclass(frozen=True)
class StairsLayout:
    """Generated stairs geometry: footprint, treads and step lines."""

    shape: StairsShape
    footprint: FootprintPolygon
    treads: tuple[Tread, ...]
    step_lines: tuple[StepLine, ...]
    total_path_length: float

    @property
    def tread_area(self) -> float:
        """Sum of tread areas."""
        return sum(t.area for t in self.treads)
