"""
Training Repository - R&D Competency Platform
competency/repositories/training_repository.py

Stores aggregate training-hour logs and team headcount logs.
"""

from threading import RLock
from typing import List, Sequence

from competency.models.training import TeamHeadcountLog, TrainingHoursLog


class TrainingRepository:
    """Replace-all store; a bulk save swaps the whole list atomically."""

    def __init__(self):
        self._hours: List[TrainingHoursLog] = []
        self._headcounts: List[TeamHeadcountLog] = []
        self._lock = RLock()

    def replace_hours(self, logs: Sequence[TrainingHoursLog]) -> int:
        with self._lock:
            self._hours = [log.model_copy() for log in logs]
            return len(self._hours)

    def replace_headcounts(self, logs: Sequence[TeamHeadcountLog]) -> int:
        with self._lock:
            self._headcounts = [log.model_copy() for log in logs]
            return len(self._headcounts)

    def get_hours(self) -> List[TrainingHoursLog]:
        with self._lock:
            return list(self._hours)

    def get_headcounts(self) -> List[TeamHeadcountLog]:
        with self._lock:
            return list(self._headcounts)

    def clear(self) -> None:
        with self._lock:
            self._hours = []
            self._headcounts = []
