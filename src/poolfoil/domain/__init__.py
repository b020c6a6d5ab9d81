"""Domain layer - core planning logic."""

from .services import (
    FootprintGenerator,
    PlanValidator,
    RollWidthSelector,
    StripPlanner,
    SurfaceDecomposer,
)
from .value_objects import (
    FoilMaterial,
    PlanningSettings,
    PlanStrategy,
    Point,
    PoolGeometry,
    PoolShape,
    RollWidth,
    SplashPoolSpec,
    StairsSpec,
    Strip,
    SurfaceSegment,
)

__all__ = [
    "FoilMaterial",
    "FootprintGenerator",
    "PlanStrategy",
    "PlanValidator",
    "PlanningSettings",
    "Point",
    "PoolGeometry",
    "PoolShape",
    "RollWidth",
    "RollWidthSelector",
    "SplashPoolSpec",
    "StairsSpec",
    "Strip",
    "StripPlanner",
    "SurfaceDecomposer",
    "SurfaceSegment",
]
