"""Domain services - Business logic that doesn't fit in entities."""

from src.domain.services.container_selection import ContainerSelectionPolicy
from src.domain.services.interval_coverage import IntervalCoverageCalculator
from src.domain.services.windowing import WindowingPolicy

__all__ = [
    "IntervalCoverageCalculator",
    "ContainerSelectionPolicy",
    "WindowingPolicy",
]
