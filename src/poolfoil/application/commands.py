"""Application commands (use cases) for foil planning."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from poolfoil.domain.services import (
    FootprintGenerator,
    PlanValidator,
    RollWidthSelector,
    StripPlanner,
    SurfaceDecomposer,
    WallPlan,
    WallStripOptimizer,
    anti_slip_area,
    butt_joint_length,
    compare_strategies,
    count_well_utilised,
    placement_outline,
    pool_metrics,
    pool_outline,
    required_area,
    score_plan,
    validate_element_placement,
)
from poolfoil.domain.value_objects import (
    FoilMaterial,
    FoilType,
    FootprintPolygon,
    PlanningSettings,
    PlanStrategy,
    Point,
    PoolGeometry,
    RollWidth,
    SegmentKind,
    SplashPoolSpec,
    StairsLayout,
    StairsSpec,
    StrategySummary,
    Strip,
    SurfaceSegment,
    ValidationIssue,
)
from poolfoil.infrastructure.roll_packing import (
    PackingResult,
    RollPackingConfig,
    RollPackingService,
)

from .dtos import PlanResult

logger = logging.getLogger(__name__)

_FORCED_WIDTHS = {
    PlanStrategy.NARROW_ONLY: RollWidth.NARROW,
    PlanStrategy.WIDE_ONLY: RollWidth.WIDE,
}

# Tie-break order when candidate scores are equal.
_CANDIDATE_ORDER = (PlanStrategy.MIXED, PlanStrategy.NARROW_ONLY, PlanStrategy.WIDE_ONLY)


@dataclass(frozen=True)
class _Candidate:
    strategy: PlanStrategy
    packing: PackingResult
    issues: tuple[ValidationIssue, ...]
    score: float
    wall_plan: WallPlan | None = None

    @property
    def summary(self) -> StrategySummary:
        return StrategySummary(
            rolls_narrow=self.packing.rolls_by_width.get(RollWidth.NARROW, 0),
            rolls_wide=self.packing.rolls_by_width.get(RollWidth.WIDE, 0),
            waste_area=self.packing.waste_area,
            waste_percent=self.packing.waste_percentage,
        )


class PlanFoilLayoutCommand:
    """Command to plan foil strips and rolls for a pool.

    Builds a candidate plan per roll width strategy, scores each and keeps
    the lowest score, unless a strategy is forced.
    """

    def __init__(
        self,
        settings: PlanningSettings | None = None,
        material: FoilMaterial | None = None,
        packing_config: RollPackingConfig | None = None,
        decomposer: SurfaceDecomposer | None = None,
        footprints: FootprintGenerator | None = None,
    ) -> None:
        self.settings = settings or PlanningSettings()
        self.material = material or FoilMaterial.solid()
        self.packing_config = packing_config or RollPackingConfig()
        self.footprints = footprints or FootprintGenerator()
        self.decomposer = decomposer or SurfaceDecomposer(
            self.settings.fold_allowance, self.footprints
        )
        self.selector = RollWidthSelector(self.material, self.settings)
        self.strip_planner = StripPlanner(self.settings, self.material)
        self.packing_service = RollPackingService(self.packing_config)
        self.validator = PlanValidator(self.material, self.packing_config.max_roll_length)
        self.wall_optimizer = WallStripOptimizer(
            self.settings,
            self.material,
            self.packing_config.max_roll_length,
            self.packing_config.min_reusable_offcut,
        )
        self.structural_material = FoilMaterial.structural()
        self.structural_validator = PlanValidator(
            self.structural_material, self.packing_config.max_roll_length
        )

    @property
    def separates_structural(self) -> bool:
        """True if anti-slip surfaces go on their own structural rolls."""
        return (
            self.settings.separate_structural
            and self.material.foil_type is not FoilType.STRUCTURAL
        )

    def execute(
        self,
        pool: PoolGeometry,
        stairs: StairsSpec | None = None,
        splash_pool: SplashPoolSpec | None = None,
        strategy: PlanStrategy | None = None,
    ) -> PlanResult:
        """Execute the planning command.

        Args:
            pool: Pool geometry.
            stairs: Optional stairs.
            splash_pool: Optional splash pool.
            strategy: Roll width strategy; defaults to the settings strategy.

        Returns:
            PlanResult for the chosen strategy. Rule violations are reported
            as issues, never raised.
        """
        strategy = strategy or self.settings.strategy
        outline = pool_outline(pool)

        splash_footprint = None
        if splash_pool is not None:
            splash_footprint = self.footprints.splash_pool_footprint(outline, splash_pool)
        stairs_layout = None
        if stairs is not None:
            stairs_layout = self.footprints.stairs_layout(outline, stairs, splash_pool)

        placement_errors = self._check_placement(
            placement_outline(pool), stairs_layout, splash_footprint
        )

        segments = self.decomposer.decompose(pool, stairs, splash_pool, stairs_layout)
        total_area = required_area(
            sum(s.area for s in segments),
            self.settings.seam_margin_percent,
            pool.irregular,
            self.settings.irregular_surcharge_percent,
        )

        main_segments = segments
        structural_segments: list[SurfaceSegment] = []
        if self.separates_structural:
            main_segments = [s for s in segments if not s.kind.is_anti_slip]
            structural_segments = [s for s in segments if s.kind.is_anti_slip]
        structural = self._plan_structural(structural_segments)

        candidates = self._build_candidates(main_segments, strategy)
        mixed = candidates.get(PlanStrategy.MIXED) or self._build_candidate(
            main_segments, PlanStrategy.MIXED
        )
        chosen = min(
            candidates.values(),
            key=lambda c: (c.score, _CANDIDATE_ORDER.index(c.strategy)),
        )
        logger.info(
            "Chose %s plan: %d rolls, %.1f%% waste, score %.1f",
            chosen.strategy.value,
            chosen.packing.total_rolls,
            chosen.packing.waste_percentage,
            chosen.score,
        )

        strips = chosen.packing.strips
        joint_length = butt_joint_length(strips) if self.material.uses_butt_joint else 0.0
        issues = chosen.issues
        if structural is not None:
            joint_length += butt_joint_length(structural.strips)
            issues += tuple(self.structural_validator.validate(structural.strips))
        return PlanResult(
            strategy=chosen.strategy,
            segments=tuple(segments),
            strips=strips,
            rolls=chosen.packing.rolls,
            offcuts=chosen.packing.offcuts,
            unpacked_strips=chosen.packing.unpacked,
            total_area_needed=total_area,
            used_area=chosen.packing.used_area,
            waste_area=chosen.packing.waste_area,
            waste_percentage=chosen.packing.waste_percentage,
            issues=issues,
            comparison=compare_strategies(
                total_area, mixed.summary, self.packing_config.max_roll_length
            ),
            score=chosen.score,
            butt_joint_length=joint_length,
            anti_slip_area=anti_slip_area(segments),
            metrics=pool_metrics(pool),
            pool_outline=outline,
            stairs_layout=stairs_layout,
            splash_footprint=splash_footprint,
            placement_errors=tuple(placement_errors),
            wall_plan=chosen.wall_plan,
            structural_strips=structural.strips if structural is not None else (),
            structural_rolls=structural.rolls if structural is not None else (),
        )

    def _plan_structural(self, segments: list[SurfaceSegment]) -> PackingResult | None:
        """Strips for anti-slip surfaces on narrow structural rolls, packed apart."""
        if not segments:
            return None
        planner = StripPlanner(self.settings, self.structural_material)
        strips: list[Strip] = []
        for segment in segments:
            strips.extend(planner.plan_segment(segment, RollWidth.NARROW))
        packing = self.packing_service.pack(strips)
        logger.info(
            "Structural foil: %d strips on %d rolls",
            len(packing.strips),
            packing.total_rolls,
        )
        return packing

    def _check_placement(
        self,
        outline: tuple[Point, ...],
        stairs_layout: StairsLayout | None,
        splash_footprint: FootprintPolygon | None,
    ) -> list[str]:
        """Placement errors for the generated footprints."""
        errors: list[str] = []
        if splash_footprint is not None:
            check = validate_element_placement(splash_footprint, outline)
            if not check.valid:
                errors.append(check.error)
        if stairs_layout is not None:
            check = validate_element_placement(
                stairs_layout.footprint, outline, splash_footprint
            )
            if not check.valid:
                errors.append(check.error)
        for error in errors:
            logger.warning("Placement check failed: %s", error)
        return errors

    def _candidate_strategies(self, strategy: PlanStrategy) -> list[PlanStrategy]:
        if strategy is not PlanStrategy.AUTO:
            return [strategy]
        available = self.material.available_widths
        if len(available) == 1:
            return [
                s for s, width in _FORCED_WIDTHS.items() if width is available[0]
            ]
        return list(_CANDIDATE_ORDER)

    def _build_candidates(
        self,
        segments: list[SurfaceSegment],
        strategy: PlanStrategy,
    ) -> dict[PlanStrategy, _Candidate]:
        return {
            s: self._build_candidate(segments, s)
            for s in self._candidate_strategies(strategy)
        }

    def _build_candidate(
        self,
        segments: list[SurfaceSegment],
        strategy: PlanStrategy,
    ) -> _Candidate:
        """Plan, pack, validate and score one strategy."""
        forced = _FORCED_WIDTHS.get(strategy)
        strips: list[Strip] = []
        walls: list[SurfaceSegment] = []
        for segment in segments:
            if self.settings.continuous_walls and segment.kind is SegmentKind.WALL:
                walls.append(segment)
                continue
            strips.extend(self._plan_segment(segment, forced))

        wall_plan = None
        if walls:
            wall_plan = self.wall_optimizer.plan(walls, strips, forced)
            if wall_plan is None:
                logger.info("Falling back to per-wall strips for %s", strategy.value)
                for wall in walls:
                    strips.extend(self._plan_segment(wall, forced))
            else:
                strips.extend(self.wall_optimizer.strips(wall_plan, walls))

        packing = self.packing_service.pack(strips)
        issues = tuple(self.validator.validate(packing.strips))
        score = score_plan(
            waste_percentage=packing.waste_percentage,
            issue_count=len(issues),
            strip_count=len(packing.strips),
            roll_count=packing.total_rolls,
            width_count=len(packing.widths_used),
            well_utilised_rolls=count_well_utilised(
                [r.waste_length for r in packing.rolls],
                self.packing_config.max_roll_length,
            ),
        )
        logger.debug(
            "Candidate %s: %d strips, %d rolls, score %.1f",
            strategy.value,
            len(packing.strips),
            packing.total_rolls,
            score,
        )
        return _Candidate(
            strategy=strategy,
            packing=packing,
            issues=issues,
            score=score,
            wall_plan=wall_plan,
        )

    def _plan_segment(
        self,
        segment: SurfaceSegment,
        forced: RollWidth | None,
    ) -> list[Strip]:
        overlap = self.strip_planner.overlap_for(segment.kind)
        roll_width = self.selector.select(segment, overlap, forced)
        return self.strip_planner.plan_segment(segment, roll_width)
