"""Roll width selection.

Walls pick a width from a height breakpoint: a wall whose nominal height
plus fold allowance stays at or under NARROW_HEIGHT_BREAKPOINT goes on the
narrow roll. Bottom-class surfaces compare the waste of covering them with
each width and take the narrow roll unless the wide roll wastes less and
needs no more strips.
"""

from __future__ import annotations

import logging
import math

from ..value_objects import (
    NARROW_HEIGHT_BREAKPOINT,
    FoilMaterial,
    PlanningSettings,
    RollWidth,
    SurfaceSegment,
)

logger = logging.getLogger(__name__)

__all__ = [
    "RollWidthSelector",
    "choose_roll_width",
    "cover_waste",
    "strips_needed",
]

_EPSILON = 1e-9


def choose_roll_width(height_to_cover: float, fold_allowance: float) -> RollWidth:
    """Width for a wall from its nominal height.

    Heights beyond one roll are handled by stacking strips, never by a
    third roll size.
    """
    effective = height_to_cover + fold_allowance
    if effective <= NARROW_HEIGHT_BREAKPOINT:
        return RollWidth.NARROW
    return RollWidth.WIDE


def strips_needed(width_to_cover: float, roll_width: RollWidth, overlap: float) -> int:
    """Number of strips of one width needed to cover a width."""
    width = roll_width.value
    if width_to_cover <= width:
        return 1
    if overlap >= width:
        raise ValueError(f"Overlap {overlap} must be smaller than roll width {width}")
    return 1 + math.ceil((width_to_cover - width) / (width - overlap) - _EPSILON)


def cover_waste(width_to_cover: float, roll_width: RollWidth, overlap: float) -> float:
    """Roll width bought but not covering the surface, per unit length."""
    count = strips_needed(width_to_cover, roll_width, overlap)
    return count * roll_width.value - width_to_cover - (count - 1) * overlap


class RollWidthSelector:
    """Picks a roll width per segment for a material.

    Args:
        material: Foil material; narrow-only materials always get NARROW.
        settings: Planning settings carrying the fold allowance.
    """

    def __init__(
        self,
        material: FoilMaterial | None = None,
        settings: PlanningSettings | None = None,
    ) -> None:
        self.material = material or FoilMaterial.solid()
        self.settings = settings or PlanningSettings()

    def select(
        self,
        segment: SurfaceSegment,
        overlap: float,
        forced: RollWidth | None = None,
    ) -> RollWidth:
        """Roll width for one segment.

        Args:
            segment: Surface to cover.
            overlap: Overlap planned between this segment's strips.
            forced: Width imposed by a single-width strategy. Ignored with a
                warning when the material is not made in that width.

        Raises:
            ValueError: If the material offers no roll widths.
        """
        available = self.material.available_widths
        if not available:
            raise ValueError("No roll widths available for the selected material")

        if forced is not None:
            if forced in available:
                return forced
            logger.warning(
                "%s foil is not made in %s; choosing from %s",
                self.material.foil_type.value,
                forced.label,
                ", ".join(w.label for w in available),
            )

        if len(available) == 1:
            return available[0]

        if segment.kind.is_bottom_class:
            return self._select_for_bottom(segment, overlap)
        return choose_roll_width(segment.nominal_height, segment.fold_allowance)

    def _select_for_bottom(self, segment: SurfaceSegment, overlap: float) -> RollWidth:
        cover = segment.width_to_cover
        narrow_count = strips_needed(cover, RollWidth.NARROW, overlap)
        wide_count = strips_needed(cover, RollWidth.WIDE, overlap)
        narrow_waste = cover_waste(cover, RollWidth.NARROW, overlap)
        wide_waste = cover_waste(cover, RollWidth.WIDE, overlap)

        logger.debug(
            "Segment %s: narrow %d strips (waste %.3f), wide %d strips (waste %.3f)",
            segment.id,
            narrow_count,
            narrow_waste,
            wide_count,
            wide_waste,
        )
        if narrow_waste <= wide_waste or narrow_count < wide_count:
            return RollWidth.NARROW
        return RollWidth.WIDE
