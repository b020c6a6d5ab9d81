"""Infrastructure layer - roll packing and output formatters."""

from .formatters import PlanJsonExporter, PlanReportFormatter
from .roll_packing import (
    FirstFitDecreasingPacker,
    PackingResult,
    ReusableOffcut,
    RollAllocation,
    RollPackingConfig,
    RollPackingService,
)

__all__ = [
    "FirstFitDecreasingPacker",
    "PackingResult",
    "PlanJsonExporter",
    "PlanReportFormatter",
    "ReusableOffcut",
    "RollAllocation",
    "RollPackingConfig",
    "RollPackingService",
]
