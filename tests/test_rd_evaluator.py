# tests/test_rd_evaluator.py

"""
R&D Evaluator Tests - weighted total and grade boundaries
"""

import pytest
from decimal import Decimal

from competency.models.enumerations import Grade, RdCategory
from competency.scoring.rd_evaluator import RdEvaluator, grade_for_score


ALL_CATEGORIES = [c.value for c in RdCategory]


@pytest.fixture
def evaluator():
    return RdEvaluator()


class TestGradeForScore:

    @pytest.mark.parametrize("total,grade", [
        (100, Grade.S),
        (90, Grade.S),
        (89.9, Grade.A),
        (80, Grade.A),
        (79.99, Grade.B),
        (70, Grade.B),
        (60, Grade.C),
        (59.9, Grade.D),
        (0, Grade.D),
    ])
    def test_boundaries(self, total, grade):
        assert grade_for_score(total) == grade

    def test_accepts_decimal(self):
        assert grade_for_score(Decimal("90.00")) == Grade.S


class TestRdEvaluator:

    def test_all_100_is_s(self, evaluator):
        result = evaluator.evaluate({c: 100 for c in ALL_CATEGORIES})
        assert result.total_score == Decimal("100")
        assert result.grade == Grade.S

    def test_all_zero_is_d(self, evaluator):
        result = evaluator.evaluate({c: 0 for c in ALL_CATEGORIES})
        assert result.total_score == Decimal("0")
        assert result.grade == Grade.D

    def test_weighted_total(self, evaluator):
        scores = {
            "technical_competency": 80,
            "project_experience": 100,
            "rd_achievement": 60,
            "global_competency": 40,
            "knowledge_sharing": 60,
            "innovation_proposal": 80,
        }
        # 20 + 20 + 15 + 4 + 6 + 8
        result = evaluator.evaluate(scores)
        assert result.total_score == Decimal("73.00")
        assert result.grade == Grade.B
        assert result.contributions["technical_competency"] == Decimal("20")

    def test_missing_categories_count_as_zero(self, evaluator):
        result = evaluator.evaluate({"rd_achievement": 100})
        assert result.total_score == Decimal("25")
        assert result.category_scores["technical_competency"] == Decimal("0")

    def test_unknown_keys_ignored(self, evaluator):
        result = evaluator.evaluate({"bogus": 100})
        assert result.total_score == Decimal("0")

    def test_scores_clamped(self, evaluator):
        result = evaluator.evaluate({c: 150 for c in ALL_CATEGORIES})
        assert result.total_score == Decimal("100")
        assert result.category_scores["rd_achievement"] == Decimal("100")

    def test_total_truncated_to_cents(self, evaluator):
        result = evaluator.evaluate({"technical_competency": 33.339})
        # 8.33475
        assert result.total_score == Decimal("8.33")

    def test_total_just_below_threshold_keeps_lower_grade(self, evaluator):
        scores = {c: 100 for c in ALL_CATEGORIES}
        scores["technical_competency"] = 99.98
        scores["innovation_proposal"] = 0
        # 24.995 + 20 + 25 + 10 + 10 + 0 = 89.995
        result = evaluator.evaluate(scores)
        assert result.total_score == Decimal("89.99")
        assert result.grade == Grade.A
        assert grade_for_score(result.total_score) == result.grade

    def test_custom_weights(self):
        weights = {c: 0 for c in ALL_CATEGORIES}
        weights["innovation_proposal"] = 1
        result = RdEvaluator(weights).evaluate({"innovation_proposal": 90, "rd_achievement": 10})
        assert result.total_score == Decimal("90")
        assert result.grade == Grade.S

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="sum to 1.0"):
            RdEvaluator({c: 0.1 for c in ALL_CATEGORIES})

    def test_missing_weight_rejected(self):
        with pytest.raises(ValueError, match="Missing weight"):
            RdEvaluator({"technical_competency": 1.0})
