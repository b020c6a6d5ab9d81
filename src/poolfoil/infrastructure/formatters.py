"""Text and JSON output for foil plans."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from poolfoil.domain.value_objects import PlanComparison, StrategySummary, Strip

if TYPE_CHECKING:
    from poolfoil.domain.services import WallPlan
    from poolfoil.application.dtos import PlanResult
    from poolfoil.infrastructure.roll_packing import RollAllocation


class PlanReportFormatter:
    """Formats a PlanResult as a plain-text report.

    Sections: pool summary, segments, strips, rolls, issues and the
    strategy comparison. Continuous wall runs and structural rolls get
    their own sections when the plan has them. Strip listing can be
    turned off for short reports.
    """

    def __init__(self, include_strips: bool = True) -> None:
        self._include_strips = include_strips

    def format(self, plan: PlanResult) -> str:
        """Format the full report."""
        sections = [
            self.format_summary(plan),
            self.format_segments(plan),
        ]
        if self._include_strips:
            sections.append(self.format_strips(list(plan.strips)))
        if plan.wall_plan is not None:
            sections.append(self.format_wall_runs(plan.wall_plan))
        sections.append(self.format_rolls(list(plan.rolls)))
        if plan.structural_rolls:
            sections.append(self.format_structural(plan))
        sections.append(self.format_issues(plan))
        sections.append(self.format_comparison(plan.comparison))
        return "\n\n".join(sections)

    def format_summary(self, plan: PlanResult) -> str:
        metrics = plan.metrics
        lines = [
            "FOIL PLAN",
            "=" * 70,
            f"Strategy:          {plan.strategy.value}",
            f"Bottom area:       {metrics.bottom_area:.2f} m2",
            f"Wall area:         {metrics.wall_area:.2f} m2",
            f"Water depth:       {metrics.water_depth:.2f} m",
            f"Area needed:       {plan.total_area_needed:.2f} m2",
            f"Foil laid:         {plan.used_area:.2f} m2",
            f"Rolls:             {plan.total_rolls} "
            f"({plan.rolls_narrow} narrow, {plan.rolls_wide} wide)",
            f"Waste:             {plan.waste_area:.2f} m2 ({plan.waste_percentage:.1f}%)",
            f"Score:             {plan.score:.1f}",
        ]
        if plan.anti_slip_area > 0:
            lines.append(f"Anti-slip area:    {plan.anti_slip_area:.2f} m2")
        if plan.structural_rolls:
            lines.append(f"Structural rolls:  {len(plan.structural_rolls)} narrow")
        if plan.butt_joint_length > 0:
            lines.append(f"Butt weld length:  {plan.butt_joint_length:.2f} m")
        if plan.offcuts:
            lines.append(
                "Reusable offcuts:  "
                + ", ".join(f"{o.length:.2f} m x {o.roll_width.label}" for o in plan.offcuts)
            )
        return "\n".join(lines)

    def format_segments(self, plan: PlanResult) -> str:
        lines = [
            "SURFACES",
            "=" * 70,
            f"{'Segment':<24} {'Kind':<22} {'Cover (m)':<10} {'Length (m)':<11} {'Area'}",
            "-" * 70,
        ]
        for segment in plan.segments:
            lines.append(
                f"{segment.id:<24} {segment.kind.value:<22} {segment.width_to_cover:<10.2f} "
                f"{segment.length_along_strip:<11.2f} {segment.area:.2f}"
            )
        lines.append("-" * 70)
        lines.append(f"{'TOTAL':<24} {'':<22} {'':<10} {'':<11} {sum(s.area for s in plan.segments):.2f}")
        return "\n".join(lines)

    def format_strips(self, strips: list[Strip]) -> str:
        if not strips:
            return "No strips in plan."

        lines = [
            "STRIPS",
            "=" * 70,
            f"{'Strip':<26} {'Roll':<8} {'Width':<8} {'Length':<8} {'Overlap':<8} {'Seam'}",
            "-" * 70,
        ]
        for strip in strips:
            lines.append(
                f"{strip.id:<26} {strip.roll_width.value:<8.2f} {strip.used_width:<8.2f} "
                f"{strip.strip_length:<8.2f} {strip.overlap_with_previous:<8.2f} "
                f"{'vertical' if strip.vertical_seam else ''}"
            )
        return "\n".join(lines)

    def format_rolls(self, rolls: list[RollAllocation]) -> str:
        if not rolls:
            return "No rolls needed."

        lines = [
            "ROLLS",
            "=" * 70,
            f"{'Roll':<6} {'Width':<8} {'Strips':<8} {'Used (m)':<10} {'Left (m)':<10}",
            "-" * 70,
        ]
        for roll in rolls:
            lines.append(
                f"{roll.roll_index + 1:<6} {roll.roll_width.value:<8.2f} {len(roll.strips):<8} "
                f"{roll.used_length:<10.2f} {roll.waste_length:<10.2f}"
            )
            lines.append(f"       {', '.join(s.id for s in roll.strips)}")
        return "\n".join(lines)

    def format_wall_runs(self, wall_plan: WallPlan) -> str:
        lines = [
            "WALL RUNS",
            "=" * 70,
            f"{'Run':<24} {'Roll':<8} {'Length':<8} {'Join':<8} {'Layers'}",
            "-" * 70,
        ]
        for run in wall_plan.runs:
            lines.append(
                f"{run.label:<24} {run.roll_width.value:<8.2f} {run.length:<8.2f} "
                f"{run.join_overlap:<8.2f} {run.layers}"
            )
        lines.append("-" * 70)
        lines.append(
            f"Waste {wall_plan.waste_area:.2f} m2, reusable {wall_plan.reusable_area:.2f} m2, "
            f"new rolls {wall_plan.new_roll_area:.2f} m2"
        )
        return "\n".join(lines)

    def format_structural(self, plan: PlanResult) -> str:
        lines = ["STRUCTURAL FOIL", "=" * 70]
        rolls = self.format_rolls(list(plan.structural_rolls))
        lines.extend(rolls.splitlines()[2:])
        return "\n".join(lines)

    def format_issues(self, plan: PlanResult) -> str:
        if not plan.issues and not plan.placement_errors and not plan.unpacked_strips:
            return "No issues found."

        lines = ["ISSUES", "=" * 70]
        for error in plan.placement_errors:
            lines.append(f"ERROR   {error}")
        for issue in plan.issues:
            lines.append(f"{issue.severity.value.upper():<7} [{issue.code.value}] {issue.message}")
        for strip in plan.unpacked_strips:
            lines.append(f"ERROR   Strip {strip.id} was not packed into any roll")
        return "\n".join(lines)

    def format_comparison(self, comparison: PlanComparison) -> str:
        lines = [
            "STRATEGY COMPARISON",
            "=" * 70,
            f"{'Strategy':<14} {'Narrow':<8} {'Wide':<8} {'Waste (m2)':<12} {'Waste %'}",
            "-" * 70,
        ]
        rows = (
            ("narrow only", comparison.narrow_only),
            ("wide only", comparison.wide_only),
            ("mixed", comparison.mixed),
        )
        for name, summary in rows:
            lines.append(
                f"{name:<14} {summary.rolls_narrow:<8} {summary.rolls_wide:<8} "
                f"{summary.waste_area:<12.2f} {summary.waste_percent:.1f}"
            )
        lines.append("-" * 70)
        lines.append(f"Lowest waste: {comparison.lowest_waste_strategy.value}")
        return "\n".join(lines)


class PlanJsonExporter:
    """Exports a PlanResult as JSON."""

    def export(self, plan: PlanResult) -> str:
        """Export the plan as a JSON string."""
        return json.dumps(self.to_dict(plan), indent=2)

    def to_dict(self, plan: PlanResult) -> dict[str, Any]:
        data: dict[str, Any] = {
            "strategy": plan.strategy.value,
            "metrics": {
                "bottom_area": plan.metrics.bottom_area,
                "perimeter": plan.metrics.perimeter,
                "wall_area": plan.metrics.wall_area,
                "water_depth": plan.metrics.water_depth,
                "volume": plan.metrics.volume,
            },
            "pool_outline": [[p.x, p.y] for p in plan.pool_outline],
            "segments": [
                {
                    "id": s.id,
                    "kind": s.kind.value,
                    "width_to_cover": s.width_to_cover,
                    "length_along_strip": s.length_along_strip,
                    "area": s.area,
                }
                for s in plan.segments
            ],
            "strips": [self._format_strip(s) for s in plan.strips],
            "rolls": [self._format_roll(r) for r in plan.rolls],
            "offcuts": [
                {"roll_index": o.roll_index, "roll_width": o.roll_width.value, "length": o.length}
                for o in plan.offcuts
            ],
            "unpacked_strips": [s.id for s in plan.unpacked_strips],
            "total_area_needed": plan.total_area_needed,
            "used_area": plan.used_area,
            "waste_area": plan.waste_area,
            "waste_percentage": plan.waste_percentage,
            "score": plan.score,
            "butt_joint_length": plan.butt_joint_length,
            "anti_slip_area": plan.anti_slip_area,
            "issues": [
                {
                    "severity": i.severity.value,
                    "code": i.code.value,
                    "message": i.message,
                    "strip_id": i.strip_id,
                }
                for i in plan.issues
            ],
            "placement_errors": list(plan.placement_errors),
            "structural": {
                "strips": [self._format_strip(s) for s in plan.structural_strips],
                "rolls": [self._format_roll(r) for r in plan.structural_rolls],
            },
            "comparison": {
                "narrow_only": self._format_summary(plan.comparison.narrow_only),
                "wide_only": self._format_summary(plan.comparison.wide_only),
                "mixed": self._format_summary(plan.comparison.mixed),
                "lowest_waste_strategy": plan.comparison.lowest_waste_strategy.value,
            },
        }

        if plan.stairs_layout is not None:
            layout = plan.stairs_layout
            data["stairs"] = {
                "shape": layout.shape.value,
                "footprint": [[p.x, p.y] for p in layout.footprint.vertices],
                "treads": [
                    {
                        "index": t.index,
                        "depth": t.depth,
                        "outer_edge": t.outer_edge,
                        "area": t.area,
                    }
                    for t in layout.treads
                ],
                "total_path_length": layout.total_path_length,
            }
        if plan.wall_plan is not None:
            data["wall_runs"] = [
                {
                    "segment_id": run.segment_id,
                    "walls": list(run.wall_ids),
                    "roll_width": run.roll_width.value,
                    "length": run.length,
                    "join_overlap": run.join_overlap,
                    "layers": run.layers,
                }
                for run in plan.wall_plan.runs
            ]
        if plan.splash_footprint is not None:
            data["splash_pool"] = {
                "footprint": [[p.x, p.y] for p in plan.splash_footprint.vertices],
            }
        return data

    def _format_strip(self, strip: Strip) -> dict[str, Any]:
        return {
            "id": strip.id,
            "segment_id": strip.segment_id,
            "roll_width": strip.roll_width.value,
            "used_width": strip.used_width,
            "strip_length": strip.strip_length,
            "overlap_with_previous": strip.overlap_with_previous,
            "position_along_width": strip.position_along_width,
            "vertical_seam": strip.vertical_seam,
        }

    def _format_roll(self, roll: RollAllocation) -> dict[str, Any]:
        return {
            "index": roll.roll_index,
            "roll_width": roll.roll_width.value,
            "strips": [s.id for s in roll.strips],
            "used_length": roll.used_length,
            "waste_length": roll.waste_length,
        }

    def _format_summary(self, summary: StrategySummary) -> dict[str, Any]:
        return {
            "rolls_narrow": summary.rolls_narrow,
            "rolls_wide": summary.rolls_wide,
            "waste_area": summary.waste_area,
            "waste_percent": summary.waste_percent,
        }
