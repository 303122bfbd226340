"""
Evaluation Workflow - R&D Competency Platform
competency/services/evaluation_workflow.py

Status state machine and append-only history log for R&D evaluations.

    draft ──► submitted ──► approved (terminal)
      │  ▲        │
      │  └────────┤ (returned to draft)
      ▼           ▼
    rejected ◄────┘
      │
      └──► draft
"""

import logging
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple
from uuid import UUID

from competency.core.exceptions import (
    EvaluationLockedException,
    InvalidStatusTransitionException,
)
from competency.models.enumerations import EvaluationStatus, HistoryAction
from competency.models.evaluation import EvaluationHistoryEntry, RdEvaluationResponse

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: Mapping[EvaluationStatus, FrozenSet[EvaluationStatus]] = {
    EvaluationStatus.DRAFT: frozenset({EvaluationStatus.SUBMITTED, EvaluationStatus.REJECTED}),
    EvaluationStatus.SUBMITTED: frozenset(
        {EvaluationStatus.APPROVED, EvaluationStatus.REJECTED, EvaluationStatus.DRAFT}
    ),
    EvaluationStatus.REJECTED: frozenset({EvaluationStatus.DRAFT}),
    EvaluationStatus.APPROVED: frozenset(),
}

# History action recorded when entering each status
TRANSITION_ACTIONS: Dict[EvaluationStatus, HistoryAction] = {
    EvaluationStatus.SUBMITTED: HistoryAction.SUBMITTED,
    EvaluationStatus.APPROVED: HistoryAction.APPROVED,
    EvaluationStatus.REJECTED: HistoryAction.REJECTED,
    EvaluationStatus.DRAFT: HistoryAction.REOPENED,
}

LOCKED_STATUSES = frozenset({EvaluationStatus.APPROVED})


def can_transition(current: EvaluationStatus, target: EvaluationStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: EvaluationStatus, target: EvaluationStatus) -> HistoryAction:
    """
    Validate a status change and return the history action it records.

    Raises:
        InvalidStatusTransitionException: pair not in ALLOWED_TRANSITIONS
            (same-status included).
    """
    if not can_transition(current, target):
        raise InvalidStatusTransitionException(current.value, target.value)
    return TRANSITION_ACTIONS[target]


def ensure_editable(evaluation: RdEvaluationResponse) -> None:
    """Raise EvaluationLockedException when scores may no longer change."""
    if evaluation.status in LOCKED_STATUSES:
        raise EvaluationLockedException(str(evaluation.id), evaluation.status.value)


def evaluation_snapshot(evaluation: RdEvaluationResponse) -> Dict[str, Any]:
    """JSON-safe view of the mutable fields, stored as before/after values."""
    return {
        "status": evaluation.status.value,
        "scores": evaluation.scores.model_dump(),
        "total_score": evaluation.total_score,
        "grade": evaluation.grade.value,
        "comments": evaluation.comments,
    }


class EvaluationHistoryLog:
    """
    Append-only audit trail for one evaluation.

    There is no update or delete; entries are frozen models and
    entries() hands out an immutable tuple.
    """

    def __init__(self, evaluation_id: UUID, entries: Optional[List[EvaluationHistoryEntry]] = None):
        self.evaluation_id = evaluation_id
        self._entries: List[EvaluationHistoryEntry] = list(entries or [])

    def append(
        self,
        action: HistoryAction,
        performed_by: Optional[str] = None,
        previous_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None,
        comments: Optional[str] = None,
    ) -> EvaluationHistoryEntry:
        entry = EvaluationHistoryEntry(
            evaluation_id=self.evaluation_id,
            action=action,
            performed_by=performed_by,
            previous_values=previous_values,
            new_values=new_values,
            comments=comments,
        )
        self._entries.append(entry)
        logger.info(f"History {action.value} recorded for evaluation {self.evaluation_id}")
        return entry

    def entries(self) -> Tuple[EvaluationHistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def current_status(self) -> Optional[EvaluationStatus]:
        """Status derived by folding recorded events; None when nothing recorded."""
        status = None
        for entry in self._entries:
            if entry.new_values and "status" in entry.new_values:
                status = EvaluationStatus(entry.new_values["status"])
        return status
