"""Value objects for the foil planning domain.

This module provides immutable data types used throughout the planner.
All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Plan-view geometry
from ._geometry import Point, Polygon, StepLine

# Pool inputs and surface segments
from ._surfaces import (
    SKIMMER_WATER_DROP,
    OverflowType,
    PoolGeometry,
    PoolShape,
    SegmentKind,
    SurfaceSegment,
)

# Foil stock, strips and plan issues
from ._foil import (
    DEEP_WALL_THRESHOLD,
    DEFAULT_FOLD_ALLOWANCE,
    DEFAULT_IRREGULAR_SURCHARGE_PERCENT,
    DEFAULT_SEAM_MARGIN_PERCENT,
    DEFAULT_VERTICAL_JOIN_OVERLAP,
    MAX_FOLD_ALLOWANCE,
    MAX_ROLL_LENGTH,
    MAX_VERTICAL_JOIN_OVERLAP,
    MIN_FOLD_ALLOWANCE,
    MIN_OVERLAP_BOTTOM,
    MIN_OVERLAP_WALL,
    MIN_VERTICAL_JOIN_OVERLAP,
    NARROW_HEIGHT_BREAKPOINT,
    WIDE_WALL_DEPTH_THRESHOLD,
    FoilMaterial,
    FoilType,
    IssueCode,
    IssueSeverity,
    JointType,
    OptimizationPriority,
    PlanComparison,
    PlanningSettings,
    PlanStrategy,
    RollWidth,
    StrategySummary,
    Strip,
    ValidationIssue,
    WallLayout,
)

# Stairs and splash pools
from ._features import (
    DEFAULT_MAX_TREAD_DEPTH,
    DEFAULT_MIN_TREAD_DEPTH,
    DEFAULT_STAIRS_WIDTH,
    DEFAULT_STEP_COUNT,
    DEFAULT_STEP_DEPTH,
    DEFAULT_STEP_HEIGHT,
    DIVIDING_WALL_THICKNESS,
    FeatureKind,
    FootprintPolygon,
    SplashAnchor,
    SplashPoolSpec,
    StairsDirection,
    StairsLayout,
    StairsShape,
    StairsSpec,
    Tread,
)

__all__ = [
    # Geometry
    "Point",
    "Polygon",
    "StepLine",
    # Surfaces
    "SKIMMER_WATER_DROP",
    "OverflowType",
    "PoolGeometry",
    "PoolShape",
    "SegmentKind",
    "SurfaceSegment",
    # Foil
    "DEEP_WALL_THRESHOLD",
    "DEFAULT_FOLD_ALLOWANCE",
    "DEFAULT_IRREGULAR_SURCHARGE_PERCENT",
    "DEFAULT_SEAM_MARGIN_PERCENT",
    "DEFAULT_VERTICAL_JOIN_OVERLAP",
    "MAX_FOLD_ALLOWANCE",
    "MAX_ROLL_LENGTH",
    "MAX_VERTICAL_JOIN_OVERLAP",
    "MIN_FOLD_ALLOWANCE",
    "MIN_OVERLAP_BOTTOM",
    "MIN_OVERLAP_WALL",
    "MIN_VERTICAL_JOIN_OVERLAP",
    "NARROW_HEIGHT_BREAKPOINT",
    "WIDE_WALL_DEPTH_THRESHOLD",
    "FoilMaterial",
    "FoilType",
    "IssueCode",
    "IssueSeverity",
    "JointType",
    "OptimizationPriority",
    "PlanComparison",
    "PlanningSettings",
    "PlanStrategy",
    "RollWidth",
    "StrategySummary",
    "Strip",
    "ValidationIssue",
    "WallLayout",
    # Features
    "DEFAULT_MAX_TREAD_DEPTH",
    "DEFAULT_MIN_TREAD_DEPTH",
    "DEFAULT_STAIRS_WIDTH",
    "DEFAULT_STEP_COUNT",
    "DEFAULT_STEP_DEPTH",
    "DEFAULT_STEP_HEIGHT",
    "DIVIDING_WALL_THICKNESS",
    "FeatureKind",
    "FootprintPolygon",
    "SplashAnchor",
    "SplashPoolSpec",
    "StairsDirection",
    "StairsLayout",
    "StairsShape",
    "StairsSpec",
    "Tread",
]
