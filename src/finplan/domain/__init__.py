"""Domain layer for finplan application."""

from finplan.domain.records import RecordService
from finplan.domain.planning import PlanningService

__all__ = [
    "RecordService",
    "PlanningService",
]
