# tests/test_evaluation_workflow.py

"""
Evaluation Workflow Tests - status transitions, locking and append-only history
"""

import pytest
from uuid import uuid4
from pydantic import ValidationError

from competency.core.exceptions import EvaluationLockedException, InvalidStatusTransitionException
from competency.models.enumerations import EvaluationStatus, Grade, HistoryAction
from competency.models.evaluation import CategoryScores, RdEvaluationResponse
from competency.services.evaluation_workflow import (
    ALLOWED_TRANSITIONS,
    EvaluationHistoryLog,
    can_transition,
    ensure_editable,
    ensure_transition,
    evaluation_snapshot,
)


D, S, A, R = (
    EvaluationStatus.DRAFT,
    EvaluationStatus.SUBMITTED,
    EvaluationStatus.APPROVED,
    EvaluationStatus.REJECTED,
)


def _evaluation(status=EvaluationStatus.DRAFT):
    return RdEvaluationResponse(
        employee_id=uuid4(),
        evaluation_year=2024,
        scores=CategoryScores(),
        status=status,
        total_score=0,
        grade=Grade.D,
    )


class TestTransitions:

    @pytest.mark.parametrize("current,target", [(D, S), (D, R), (S, A), (S, R), (S, D), (R, D)])
    def test_allowed(self, current, target):
        assert can_transition(current, target)
        ensure_transition(current, target)

    @pytest.mark.parametrize("current,target", [
        (D, A), (D, D), (S, S), (A, D), (A, S), (A, R), (A, A), (R, S), (R, A), (R, R),
    ])
    def test_rejected(self, current, target):
        assert not can_transition(current, target)
        with pytest.raises(InvalidStatusTransitionException) as exc_info:
            ensure_transition(current, target)
        assert exc_info.value.current_status == current.value
        assert exc_info.value.target_status == target.value

    def test_approved_is_terminal(self):
        assert ALLOWED_TRANSITIONS[A] == frozenset()

    @pytest.mark.parametrize("target,action", [
        (S, HistoryAction.SUBMITTED),
        (A, HistoryAction.APPROVED),
        (R, HistoryAction.REJECTED),
        (D, HistoryAction.REOPENED),
    ])
    def test_transition_action(self, target, action):
        current = S if target != S else D
        assert ensure_transition(current, target) == action


class TestLocking:

    def test_approved_is_locked(self):
        with pytest.raises(EvaluationLockedException):
            ensure_editable(_evaluation(EvaluationStatus.APPROVED))

    @pytest.mark.parametrize("status", [D, S, R])
    def test_other_statuses_editable(self, status):
        ensure_editable(_evaluation(status))


class TestHistoryLog:

    def test_append_returns_frozen_entry(self):
        evaluation = _evaluation()
        log = EvaluationHistoryLog(evaluation.id)
        entry = log.append(HistoryAction.CREATED, performed_by="hr", new_values=evaluation_snapshot(evaluation))

        assert entry.evaluation_id == evaluation.id
        assert entry.action == HistoryAction.CREATED
        with pytest.raises(ValidationError):
            entry.performed_by = "someone else"

    def test_entries_is_immutable_tuple(self):
        log = EvaluationHistoryLog(uuid4())
        log.append(HistoryAction.CREATED)
        entries = log.entries()
        assert isinstance(entries, tuple)
        assert len(log) == 1
        assert not hasattr(log, "remove")
        assert not hasattr(log, "update")

    def test_entries_preserve_order(self):
        log = EvaluationHistoryLog(uuid4())
        for action in (HistoryAction.CREATED, HistoryAction.UPDATED, HistoryAction.SUBMITTED):
            log.append(action)
        assert [e.action for e in log.entries()] == [
            HistoryAction.CREATED, HistoryAction.UPDATED, HistoryAction.SUBMITTED,
        ]

    def test_current_status_folds_events(self):
        log = EvaluationHistoryLog(uuid4())
        assert log.current_status() is None
        log.append(HistoryAction.CREATED, new_values={"status": "draft"})
        log.append(HistoryAction.UPDATED, new_values={"scores": {}})
        log.append(HistoryAction.SUBMITTED, previous_values={"status": "draft"}, new_values={"status": "submitted"})
        assert log.current_status() == EvaluationStatus.SUBMITTED

    def test_snapshot_is_json_safe(self):
        snapshot = evaluation_snapshot(_evaluation())
        assert snapshot["status"] == "draft"
        assert snapshot["grade"] == "D"
        assert set(snapshot["scores"]) == set(CategoryScores.model_fields)
