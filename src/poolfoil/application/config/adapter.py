"""Adapters from FoilPlanConfiguration to domain objects.

The older stairs vocabulary (placement, wall, corner) is translated here,
once, into the canonical StairsSpec; nothing downstream sees it.
"""

from poolfoil.application.config.schema import (
    FoilPlanConfiguration,
    MaterialConfig,
    PlanningConfig,
    PointConfig,
    PoolConfig,
    SplashPoolConfig,
    StairsConfig,
)
from poolfoil.domain.value_objects import (
    FoilMaterial,
    FoilType,
    JointType,
    PlanningSettings,
    Point,
    PoolGeometry,
    SplashPoolSpec,
    StairsDirection,
    StairsShape,
    StairsSpec,
)
from poolfoil.infrastructure.roll_packing import RollPackingConfig

# Corner names of a rectangular pool, A to D.
CORNER_INDICES: dict[str, int] = {
    "back-left": 0,
    "back-right": 1,
    "front-right": 2,
    "front-left": 3,
}

# Wall name -> (corner index, direction) that runs the stairs along that wall.
WALL_ANCHORS: dict[str, tuple[int, StairsDirection]] = {
    "back": (0, StairsDirection.ALONG_LENGTH),
    "front": (3, StairsDirection.ALONG_LENGTH),
    "left": (0, StairsDirection.ALONG_WIDTH),
    "right": (1, StairsDirection.ALONG_WIDTH),
}


def _points(points: list[PointConfig]) -> tuple[Point, ...]:
    return tuple(Point(p.x, p.y) for p in points)


def config_to_pool(pool: PoolConfig) -> PoolGeometry:
    """Convert pool configuration to PoolGeometry."""
    return PoolGeometry(
        shape=pool.shape,
        depth=pool.depth,
        length=pool.length or 0.0,
        width=pool.width or 0.0,
        overflow=pool.overflow,
        vertices=_points(pool.vertices),
        arm_length=pool.arm_length or 0.0,
        arm_width=pool.arm_width or 0.0,
        irregular=pool.irregular,
    )


def config_to_stairs(stairs: StairsConfig | None) -> StairsSpec | None:
    """Convert stairs configuration to a canonical StairsSpec.

    Resolution order for the anchor: explicit corner_index, then the older
    wall or corner names, then corner A.
    """
    if stairs is None:
        return None

    shape = stairs.shape
    if shape is None:
        shape = (
            StairsShape.DIAGONAL_45
            if stairs.placement == "diagonal"
            else StairsShape.RECTANGULAR
        )

    corner_index = 0
    direction = StairsDirection.ALONG_WIDTH
    if stairs.corner_index is not None:
        corner_index = stairs.corner_index
    elif stairs.placement == "wall" and stairs.wall is not None:
        corner_index, direction = WALL_ANCHORS[stairs.wall]
    elif stairs.corner is not None:
        corner_index = CORNER_INDICES[stairs.corner]
    if stairs.direction is not None:
        direction = stairs.direction

    return StairsSpec(
        shape=shape,
        corner_index=corner_index,
        splash_anchor=stairs.splash_anchor,
        direction=direction,
        width=None if stairs.width == "full" else float(stairs.width),
        step_count=stairs.step_count,
        step_depth=stairs.step_depth,
        step_height=stairs.step_height,
        vertices=_points(stairs.vertices),
        min_tread_depth=stairs.min_step_depth,
        max_tread_depth=stairs.max_step_depth,
    )


def config_to_splash_pool(splash: SplashPoolConfig | None) -> SplashPoolSpec | None:
    """Convert splash pool configuration; the wall offset goes from cm to m."""
    if splash is None:
        return None

    if splash.corner_index is not None:
        corner_index = splash.corner_index
    elif splash.corner is not None:
        corner_index = CORNER_INDICES[splash.corner]
    else:
        corner_index = 0

    return SplashPoolSpec(
        width=splash.width,
        length=splash.length,
        depth=splash.depth,
        corner_index=corner_index,
        direction=splash.direction,
        has_dividing_wall=splash.has_dividing_wall,
        dividing_wall_offset=splash.dividing_wall_offset_cm / 100,
    )


def config_to_material(material: MaterialConfig) -> FoilMaterial:
    """Convert material configuration; structural foil defaults to butt joints."""
    joint_type = material.joint_type
    if joint_type is None:
        joint_type = (
            JointType.BUTT
            if material.foil_type is FoilType.STRUCTURAL
            else JointType.OVERLAP
        )
    return FoilMaterial(foil_type=material.foil_type, joint_type=joint_type)


def config_to_settings(planning: PlanningConfig) -> PlanningSettings:
    """Convert planning configuration to PlanningSettings."""
    return PlanningSettings(
        fold_allowance=planning.fold_allowance,
        overlap_bottom=planning.overlap_bottom,
        overlap_wall=planning.overlap_wall,
        seam_margin_percent=planning.seam_margin_percent,
        irregular_surcharge_percent=planning.irregular_surcharge_percent,
        strategy=planning.strategy,
        wall_layout=planning.wall_layout,
        priority=planning.priority,
        vertical_join_overlap=planning.vertical_join_overlap,
        separate_structural=planning.separate_structural,
    )


def config_to_packing(planning: PlanningConfig) -> RollPackingConfig:
    """Convert planning configuration to RollPackingConfig."""
    return RollPackingConfig(
        max_roll_length=planning.max_roll_length,
        allow_strip_splitting=planning.allow_strip_splitting,
        split_overlap=planning.split_overlap,
        min_reusable_offcut=planning.min_reusable_offcut,
    )


def config_to_plan_inputs(
    config: FoilPlanConfiguration,
) -> tuple[PoolGeometry, StairsSpec | None, SplashPoolSpec | None]:
    """Pool, stairs and splash pool for PlanFoilLayoutCommand.execute()."""
    return (
        config_to_pool(config.pool),
        config_to_stairs(config.stairs),
        config_to_splash_pool(config.splash_pool),
    )
