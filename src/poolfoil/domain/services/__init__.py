"""Domain services for foil layout planning.

This package provides the planning pipeline, leaf first:
- Plan-view polygon geometry
- Surface decomposition of the pool into segments
- Stairs and splash-pool footprint generation
- Placement constraints for footprints
- Roll width selection and strip planning
- Continuous wall runs around the perimeter
- Manufacturing-rule validation and plan scoring
"""

from .constraints import (
    PlacementCheck,
    validate_element_placement,
    validate_no_overlap,
    validate_polygon_in_pool,
    validate_vertex_position,
)
from .footprints import (
    FootprintGenerator,
    InwardDirections,
    TreadSpan,
    TriangleAnalysis,
    analyze_triangle,
    corner_directions,
    expanding_tread_spans,
)
from .geometry import (
    centroid,
    clip_polygon,
    constrain_point_to_polygon,
    point_in_polygon,
    point_inside_or_on_polygon,
    point_on_edge,
    polygon_area,
    polygon_perimeter,
    polygons_overlap,
)
from .plan_checks import (
    PlanValidator,
    anti_slip_area,
    area_strategy_summary,
    butt_joint_length,
    compare_strategies,
    count_well_utilised,
    required_area,
    score_plan,
)
from .rolls import RollWidthSelector, choose_roll_width, strips_needed
from .strips import StripPlanner, StripSpan, plan_strips
from .surfaces import (
    OVAL_OUTLINE_VERTICES,
    PoolMetrics,
    SurfaceDecomposer,
    outline_labels,
    placement_outline,
    pool_metrics,
    pool_outline,
    vertex_label,
)
from .wall_plans import (
    RollRemainder,
    WallPlan,
    WallRun,
    WallStripOptimizer,
    bottom_remainders,
    distribute_join_overlaps,
    run_label,
    select_wall_plan,
    wall_groupings,
    wall_widths_for_depth,
)

__all__ = [
    # Constraints
    "PlacementCheck",
    "validate_element_placement",
    "validate_no_overlap",
    "validate_polygon_in_pool",
    "validate_vertex_position",
    # Footprints
    "FootprintGenerator",
    "InwardDirections",
    "TreadSpan",
    "TriangleAnalysis",
    "analyze_triangle",
    "corner_directions",
    "expanding_tread_spans",
    # Geometry
    "centroid",
    "clip_polygon",
    "constrain_point_to_polygon",
    "point_in_polygon",
    "point_inside_or_on_polygon",
    "point_on_edge",
    "polygon_area",
    "polygon_perimeter",
    "polygons_overlap",
    # Plan checks
    "PlanValidator",
    "anti_slip_area",
    "area_strategy_summary",
    "butt_joint_length",
    "compare_strategies",
    "count_well_utilised",
    "required_area",
    "score_plan",
    # Rolls and strips
    "RollWidthSelector",
    "StripPlanner",
    "StripSpan",
    "choose_roll_width",
    "plan_strips",
    "strips_needed",
    # Surfaces
    "OVAL_OUTLINE_VERTICES",
    "PoolMetrics",
    "SurfaceDecomposer",
    "outline_labels",
    "placement_outline",
    "pool_metrics",
    "pool_outline",
    "vertex_label",
    # Continuous walls
    "RollRemainder",
    "WallPlan",
    "WallRun",
    "WallStripOptimizer",
    "bottom_remainders",
    "distribute_join_overlaps",
    "run_label",
    "select_wall_plan",
    "wall_groupings",
    "wall_widths_for_depth",
]
