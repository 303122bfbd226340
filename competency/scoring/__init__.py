"""
scoring/ - R&D Competency Scoring Engine

Modules:
    utils.py                  - Decimal utilities and date spans
    skill_calculator.py       - Six skill category scores + overall aggregate
    rubric_scorer.py          - Per-category score conversion bands
    rd_evaluator.py           - Weighted R&D total and S/A/B/C/D grade
    rd_auto_evaluator.py      - Raw R&D category scores from activity records
    evaluation_stats.py       - Ranking, grade distribution, department stats
    training_analysis.py      - Training hours per R&D head over a year range
"""
