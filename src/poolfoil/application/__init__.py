"""Application layer - use cases and orchestration."""

from .commands import PlanFoilLayoutCommand
from .dtos import PlanResult

__all__ = [
    "PlanFoilLayoutCommand",
    "PlanResult",
]
