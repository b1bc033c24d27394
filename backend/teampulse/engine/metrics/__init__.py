"""
Pipeline de synthèse des métriques d'équipe (Vibe Check).

    calculations → agrégation jour/fenêtre + scores
    synthesizer  → TeamMetrics
    insights     → VibeInsight + question coach
"""
from teampulse.engine.metrics.calculations import (
    DailyVibe,
    Submission,
    SubmissionValidationError,
    VibeMetric,
    aggregate_daily,
    build_vibe_metric,
    calculate_confidence,
    calculate_data_maturity,
    calculate_day_state,
    calculate_momentum,
    calculate_trend,
    calculate_week_state,
    has_minimum_data,
)
from teampulse.engine.metrics.insights import VibeInsight, generate_insights, pick_coach_question
from teampulse.engine.metrics.synthesizer import TeamMetrics, synthesize

__all__ = [
    "DailyVibe", "Submission", "SubmissionValidationError", "VibeMetric",
    "aggregate_daily", "build_vibe_metric",
    "calculate_confidence", "calculate_data_maturity", "calculate_day_state",
    "calculate_momentum", "calculate_trend", "calculate_week_state",
    "has_minimum_data",
    "TeamMetrics", "synthesize",
    "VibeInsight", "generate_insights", "pick_coach_question",
]
