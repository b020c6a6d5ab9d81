"""Strip planning: subdivide a segment's width into overlapping strips."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..value_objects import (
    FoilMaterial,
    PlanningSettings,
    RollWidth,
    SegmentKind,
    Strip,
    SurfaceSegment,
)

logger = logging.getLogger(__name__)

__all__ = ["StripPlanner", "StripSpan", "plan_strips"]

_EPSILON = 1e-9


@dataclass(frozen=True)
class StripSpan:
    """Width placement of one strip across a segment.

    Attributes:
        used_width: Roll width laid on the surface.
        overlap: Width shared with the previous strip.
        position: Offset of the strip's leading edge from the segment edge.
    """

    used_width: float
    overlap: float
    position: float


def plan_strips(
    width_to_cover: float,
    roll_width: RollWidth,
    min_overlap: float,
) -> list[StripSpan]:
    """Lay strips side by side until the width is covered.

    The first strip covers min(roll width, width to cover) with no overlap.
    Each following strip overlaps the previous one by min_overlap and covers
    min(roll width, remaining + min_overlap).

    Raises:
        ValueError: If the overlap is not smaller than the roll width.
    """
    width = roll_width.value
    if width_to_cover <= 0:
        return []
    if min_overlap >= width:
        raise ValueError(f"Overlap {min_overlap} must be smaller than roll width {width}")

    first = min(width, width_to_cover)
    spans = [StripSpan(used_width=first, overlap=0.0, position=0.0)]
    covered = first
    position = 0.0

    while covered < width_to_cover - _EPSILON:
        previous = spans[-1]
        position = position + previous.used_width - min_overlap
        used = min(width, width_to_cover - covered + min_overlap)
        spans.append(StripSpan(used_width=used, overlap=min_overlap, position=position))
        covered += used - min_overlap

    return spans


class StripPlanner:
    """Turns segments into strips for a given roll width.

    Args:
        settings: Planned overlaps for bottom-class and wall-class surfaces.
        material: Butt-joint materials plan bottom-class strips without
            overlap.
    """

    def __init__(
        self,
        settings: PlanningSettings | None = None,
        material: FoilMaterial | None = None,
    ) -> None:
        self.settings = settings or PlanningSettings()
        self.material = material or FoilMaterial.solid()

    def overlap_for(self, kind: SegmentKind) -> float:
        """Overlap planned between strips of a segment kind."""
        if kind.is_bottom_class:
            if self.material.uses_butt_joint:
                return 0.0
            return self.settings.overlap_bottom
        return self.settings.overlap_wall

    def plan_segment(self, segment: SurfaceSegment, roll_width: RollWidth) -> list[Strip]:
        """Strips covering one segment, numbered from 1."""
        spans = plan_strips(
            segment.width_to_cover, roll_width, self.overlap_for(segment.kind)
        )
        strips = [
            Strip(
                id=f"{segment.id}-{number}",
                segment_id=segment.id,
                segment_kind=segment.kind,
                roll_width=roll_width,
                used_width=span.used_width,
                strip_length=segment.length_along_strip,
                overlap_with_previous=span.overlap,
                position_along_width=span.position,
            )
            for number, span in enumerate(spans, start=1)
        ]
        logger.debug(
            "Segment %s: %d strips on %s rolls", segment.id, len(strips), roll_width.label
        )
        return strips
