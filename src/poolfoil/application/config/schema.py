"""Pydantic models for foil plan configuration files.

A configuration file describes one pool, its optional stairs and splash
pool, the foil material and the planning parameters. Domain enums are used
directly so JSON values match the domain vocabulary.

Example:
    {
        "schema_version": "1.0",
        "pool": {"shape": "rectangle", "length": 8, "width": 4, "depth": 1.5},
        "material": {"foil_type": "solid"},
        "planning": {"strategy": "auto"}
    }
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from poolfoil.domain.value_objects import (
    DEFAULT_FOLD_ALLOWANCE,
    DEFAULT_IRREGULAR_SURCHARGE_PERCENT,
    DEFAULT_MAX_TREAD_DEPTH,
    DEFAULT_MIN_TREAD_DEPTH,
    DEFAULT_SEAM_MARGIN_PERCENT,
    DEFAULT_STAIRS_WIDTH,
    DEFAULT_STEP_COUNT,
    DEFAULT_STEP_DEPTH,
    DEFAULT_STEP_HEIGHT,
    DEFAULT_VERTICAL_JOIN_OVERLAP,
    MAX_FOLD_ALLOWANCE,
    MAX_ROLL_LENGTH,
    MAX_VERTICAL_JOIN_OVERLAP,
    MIN_FOLD_ALLOWANCE,
    MIN_OVERLAP_BOTTOM,
    MIN_OVERLAP_WALL,
    MIN_VERTICAL_JOIN_OVERLAP,
    FoilType,
    JointType,
    OptimizationPriority,
    OverflowType,
    PlanStrategy,
    PoolShape,
    SplashAnchor,
    StairsDirection,
    StairsShape,
    WallLayout,
)

# Supported schema versions for configuration files
# Version 1.0: Pool, stairs, splash pool, material and planning parameters
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

LegacyPlacement = Literal["wall", "corner", "diagonal"]
LegacyWall = Literal["back", "front", "left", "right"]
LegacyCorner = Literal["back-left", "back-right", "front-right", "front-left"]


class PointConfig(BaseModel):
    """Plan-view point in meters."""

    model_config = ConfigDict(extra="forbid")

    x: float
    y: float


class PoolConfig(BaseModel):
    """Pool outline and depth.

    Attributes:
        shape: Outline variant.
        length: Outer length in meters (not used by custom polygons).
        width: Outer width in meters (not used by custom polygons).
        depth: Wall depth in meters.
        overflow: Overflow type (skimmer or gutter).
        vertices: Outline vertices for custom polygons.
        arm_length: L-shape arm extent beyond the main rectangle.
        arm_width: L-shape arm width along the main rectangle.
        irregular: Apply the irregular-shape surcharge.
    """

    model_config = ConfigDict(extra="forbid")

    shape: PoolShape = PoolShape.RECTANGLE
    length: float | None = Field(default=None, gt=0, le=100)
    width: float | None = Field(default=None, gt=0, le=100)
    depth: float = Field(..., gt=0, le=5)
    overflow: OverflowType = OverflowType.SKIMMER
    vertices: list[PointConfig] = Field(default_factory=list)
    arm_length: float | None = Field(default=None, gt=0, le=100)
    arm_width: float | None = Field(default=None, gt=0, le=100)
    irregular: bool = False

    @model_validator(mode="after")
    def validate_shape_dimensions(self) -> "PoolConfig":
        """Check that the fields each shape needs are present."""
        if self.shape is PoolShape.CUSTOM:
            if len(self.vertices) < 3:
                raise ValueError("custom-polygon pools need at least 3 vertices")
            return self

        if self.length is None or self.width is None:
            raise ValueError(f"{self.shape.value} pools need length and width")
        if self.shape is PoolShape.L_SHAPE:
            if self.arm_length is None or self.arm_width is None:
                raise ValueError("l-shape pools need arm_length and arm_width")
            if self.arm_width > self.length:
                raise ValueError("arm_width cannot exceed the pool length")
        return self


class StairsConfig(BaseModel):
    """Stairs inside the pool.

    Either give ``shape`` with ``corner_index`` (or ``splash_anchor``), or
    the older ``placement`` vocabulary with ``wall`` or ``corner``. The
    older form is translated once when the configuration is adapted.

    Attributes:
        shape: Footprint topology.
        corner_index: Pool vertex the stairs start from (0 = A).
        splash_anchor: Start from a splash-pool intersection point (E or F).
        direction: Axis the stair width runs along.
        placement: Older placement vocabulary.
        wall: Wall for ``placement: wall``.
        corner: Corner for ``placement: corner`` or ``diagonal``.
        width: Stair width in meters, or "full" for the whole wall.
        step_count: Number of steps.
        step_depth: Tread depth in meters.
        step_height: Riser height in meters.
        vertices: Triangle vertices for scalene stairs.
        min_step_depth: Scalene tread depth at the apex.
        max_step_depth: Scalene tread depth at the base.
    """

    model_config = ConfigDict(extra="forbid")

    shape: StairsShape | None = None
    corner_index: int | None = Field(default=None, ge=0)
    splash_anchor: SplashAnchor | None = None
    direction: StairsDirection | None = None
    placement: LegacyPlacement | None = None
    wall: LegacyWall | None = None
    corner: LegacyCorner | None = None
    width: float | Literal["full"] = Field(default=DEFAULT_STAIRS_WIDTH)
    step_count: int = Field(default=DEFAULT_STEP_COUNT, ge=1, le=30)
    step_depth: float = Field(default=DEFAULT_STEP_DEPTH, gt=0, le=2)
    step_height: float = Field(default=DEFAULT_STEP_HEIGHT, gt=0, le=1)
    vertices: list[PointConfig] = Field(default_factory=list)
    min_step_depth: float = Field(default=DEFAULT_MIN_TREAD_DEPTH, gt=0)
    max_step_depth: float = Field(default=DEFAULT_MAX_TREAD_DEPTH, gt=0)

    @field_validator("width")
    @classmethod
    def validate_width(cls, v: float | str) -> float | str:
        """Numeric widths must be positive."""
        if isinstance(v, (int, float)) and v <= 0:
            raise ValueError("width must be positive or 'full'")
        return v

    @model_validator(mode="after")
    def validate_topology(self) -> "StairsConfig":
        """Check the fields each topology needs."""
        if self.shape is StairsShape.SCALENE_TRIANGLE and len(self.vertices) != 3:
            raise ValueError("scalene-triangle stairs need exactly 3 vertices")
        if self.min_step_depth > self.max_step_depth:
            raise ValueError("min_step_depth cannot exceed max_step_depth")
        if self.placement == "wall" and self.wall is None:
            raise ValueError("placement 'wall' needs a wall")
        return self


class SplashPoolConfig(BaseModel):
    """Splash pool in a pool corner.

    Attributes:
        corner_index: Pool vertex the splash pool sits in (0 = A).
        corner: Older corner vocabulary, used when corner_index is absent.
        direction: Axis the splash-pool width runs along.
        width: Extent along the wall in meters.
        length: Extent into the pool in meters.
        depth: Water depth in meters.
        has_dividing_wall: Whether a wall separates it from the pool.
        dividing_wall_offset_cm: Dividing wall height above the splash floor
            in centimeters.
    """

    model_config = ConfigDict(extra="forbid")

    corner_index: int | None = Field(default=None, ge=0)
    corner: LegacyCorner | None = None
    direction: StairsDirection = StairsDirection.ALONG_LENGTH
    width: float = Field(..., gt=0, le=50)
    length: float = Field(..., gt=0, le=50)
    depth: float = Field(..., gt=0, le=2)
    has_dividing_wall: bool = True
    dividing_wall_offset_cm: float = Field(default=0.0, ge=0, le=200)


class MaterialConfig(BaseModel):
    """Foil material.

    Attributes:
        foil_type: Product family; printed and structural foils only come
            on narrow rolls.
        joint_type: Seam type; defaults to butt for structural foil and
            overlap otherwise.
    """

    model_config = ConfigDict(extra="forbid")

    foil_type: FoilType = FoilType.SOLID
    joint_type: JointType | None = None


class PlanningConfig(BaseModel):
    """Planning parameters.

    Attributes:
        fold_allowance: Wall-to-floor wrap in meters (0.10-0.20).
        overlap_bottom: Planned overlap between bottom strips.
        overlap_wall: Planned overlap between wall strips.
        seam_margin_percent: Margin on the base area for seams.
        irregular_surcharge_percent: Surcharge for irregular pools.
        strategy: Roll width strategy.
        max_roll_length: Full roll length in meters.
        allow_strip_splitting: Split strips longer than a roll.
        split_overlap: Overlap at the cross seam of split strips.
        min_reusable_offcut: Shortest roll remainder reported as reusable.
        wall_layout: "per-wall" or "continuous" wall strips.
        priority: "min-waste" or "min-rolls" for continuous walls.
        vertical_join_overlap: Overlap where continuous wall runs meet.
        separate_structural: Plan treads and splash floors on structural
            anti-slip rolls.
    """

    model_config = ConfigDict(extra="forbid")

    fold_allowance: float = Field(
        default=DEFAULT_FOLD_ALLOWANCE, ge=MIN_FOLD_ALLOWANCE, le=MAX_FOLD_ALLOWANCE
    )
    overlap_bottom: float = Field(default=MIN_OVERLAP_BOTTOM, ge=0, lt=1)
    overlap_wall: float = Field(default=MIN_OVERLAP_WALL, ge=0, lt=1)
    seam_margin_percent: float = Field(default=DEFAULT_SEAM_MARGIN_PERCENT, ge=0, le=100)
    irregular_surcharge_percent: float = Field(
        default=DEFAULT_IRREGULAR_SURCHARGE_PERCENT, ge=0, le=100
    )
    strategy: PlanStrategy = PlanStrategy.AUTO
    max_roll_length: float = Field(default=MAX_ROLL_LENGTH, gt=0, le=100)
    allow_strip_splitting: bool = True
    split_overlap: float = Field(default=0.10, ge=0, le=1)
    min_reusable_offcut: float = Field(default=2.0, ge=0)
    wall_layout: WallLayout = WallLayout.PER_WALL
    priority: OptimizationPriority = OptimizationPriority.MIN_WASTE
    vertical_join_overlap: float = Field(
        default=DEFAULT_VERTICAL_JOIN_OVERLAP,
        ge=MIN_VERTICAL_JOIN_OVERLAP,
        le=MAX_VERTICAL_JOIN_OVERLAP,
    )
    separate_structural: bool = False


class FoilPlanConfiguration(BaseModel):
    """Root configuration model for foil plans.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        pool: Pool outline and depth
        stairs: Optional stairs
        splash_pool: Optional splash pool
        material: Foil material
        planning: Planning parameters
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    pool: PoolConfig
    stairs: StairsConfig | None = Field(default=None, description="Stairs (optional)")
    splash_pool: SplashPoolConfig | None = Field(
        default=None, description="Splash pool (optional)"
    )
    material: MaterialConfig = Field(default_factory=MaterialConfig)
    planning: PlanningConfig = Field(default_factory=PlanningConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minor versions of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
