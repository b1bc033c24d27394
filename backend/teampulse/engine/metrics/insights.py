# engine/metrics/insights.py
"""
Génération des insights qualitatifs depuis un TeamMetrics (ZÉRO accès DB).

Prévention des fausses alertes :
    - Tendances  : has_minimum_data ET confiance semaine ≠ LOW
    - Patterns   : has_minimum_data ET ≥ PATTERN_MIN_RESPONSES réponses sur la semaine
    - Participation et jalons : toujours évalués

Au plus MAX_INSIGHTS insights, dans l'ordre participation → tendance
→ pattern → jalon.
"""
from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from teampulse.content.coach import COACH_QUESTIONS
from teampulse.content.insights import INSIGHT_TEMPLATES
from teampulse.engine.metrics.synthesizer import TeamMetrics
from teampulse.shared.enums import (
    ConfidenceLevel,
    InsightPolarity,
    InsightSeverity,
    InsightType,
    Language,
    Trend,
    VibeZone,
)

MAX_INSIGHTS          = 3
TREND_MIN_DAYS        = 3
WEEK_DELTA_THRESHOLD  = 0.5
PATTERN_MIN_RESPONSES = 5
PARTICIPATION_GOOD_RATE = 50
STREAK_MILESTONES     = (30, 14, 7)
FIRST_WEEK_DAYS       = 7


@dataclass(frozen=True)
class VibeInsight:
    id: str
    type: InsightType
    severity: InsightSeverity
    polarity: InsightPolarity
    message: str
    detail: Optional[str] = None
    suggestions: List[str] = field(default_factory=list)


def generate_insights(
    metrics: TeamMetrics,
    language: Union[Language, str] = Language.EN,
    limit: int = MAX_INSIGHTS,
) -> List[VibeInsight]:
    lang = Language(language)
    insights: List[VibeInsight] = []

    week = metrics.week_vibe
    participation = metrics.participation
    enough_for_trends = metrics.has_minimum_data and week.confidence != ConfidenceLevel.LOW
    enough_for_patterns = metrics.has_minimum_data and week.response_count >= PATTERN_MIN_RESPONSES

    # ── Participation ─────────────────────────────────────────
    if metrics.live_vibe.confidence == ConfidenceLevel.LOW and participation.team_size > 0:
        insights.append(build_insight("low_participation", lang, {
            "today": participation.today,
            "teamSize": participation.team_size,
        }))

    if (
        participation.trend == Trend.IMPROVING
        and participation.rate >= PARTICIPATION_GOOD_RATE
        and metrics.has_minimum_data
    ):
        insights.append(build_insight("participation_improving", lang))

    # ── Tendances ─────────────────────────────────────────────
    if enough_for_trends:
        if metrics.trend == Trend.DECLINING and metrics.days_trending >= TREND_MIN_DAYS:
            insights.append(build_insight("declining_trend", lang, {"days": metrics.days_trending}))

        if metrics.trend == Trend.IMPROVING and metrics.days_trending >= TREND_MIN_DAYS:
            insights.append(build_insight("rising_trend", lang, {"days": metrics.days_trending}))

        previous = metrics.previous_week_vibe
        if week.value is not None and previous.value is not None:
            week_delta = week.value - previous.value
            if week_delta <= -WEEK_DELTA_THRESHOLD:
                insights.append(build_insight("week_drop", lang, {"delta": f"{abs(week_delta):.1f}"}))
            elif week_delta >= WEEK_DELTA_THRESHOLD:
                insights.append(build_insight("week_improvement", lang, {"delta": f"{week_delta:.1f}"}))

    # ── Patterns ──────────────────────────────────────────────
    if enough_for_patterns:
        if week.zone == VibeZone.UNDER_PRESSURE:
            insights.append(build_insight("under_pressure", lang))
        elif week.zone == VibeZone.HIGH_CONFIDENCE and metrics.trend != Trend.DECLINING:
            insights.append(build_insight("high_confidence", lang))
        elif week.zone == VibeZone.MIXED_SIGNALS:
            insights.append(build_insight("mixed_signals", lang))
        elif week.zone == VibeZone.STEADY_STATE and metrics.trend == Trend.STABLE:
            insights.append(build_insight("consistently_stable", lang))

    # ── Jalons ────────────────────────────────────────────────
    milestone = _streak_milestone(metrics)
    if milestone:
        insights.append(build_insight("streak_milestone", lang, {"days": milestone}))

    if metrics.has_minimum_data and metrics.maturity.days_of_data == FIRST_WEEK_DAYS:
        insights.append(build_insight("first_week_complete", lang))

    return insights[:limit]


def build_insight(
    key: str,
    language: Language,
    values: Optional[Dict[str, Union[str, int]]] = None,
) -> VibeInsight:
    """Instancie un template de content/insights.py dans la langue demandée."""
    template = INSIGHT_TEMPLATES[key]
    values = values or {}
    lang = language.value
    detail = template.get("detail")
    suggestions = template.get("suggestions")

    return VibeInsight(
        id=template["id"],
        type=InsightType(template["type"]),
        severity=InsightSeverity(template["severity"]),
        polarity=InsightPolarity(template["polarity"]),
        message=template["message"][lang].format(**values),
        detail=detail[lang].format(**values) if detail else None,
        suggestions=list(suggestions[lang]) if suggestions else [],
    )


def pick_coach_question(
    metrics: Optional[TeamMetrics],
    language: Union[Language, str] = Language.NL,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Question de réflexion adaptée à la tendance de l'équipe.
    rng injectable pour rendre le tirage déterministe (tests).
    """
    lang = Language(language)
    if metrics is None or not metrics.has_minimum_data:
        key = "no_data"
    elif metrics.trend in (Trend.IMPROVING, Trend.DECLINING):
        key = metrics.trend.value
    else:
        key = "stable"

    question = (rng or random).choice(COACH_QUESTIONS[key])
    return question[lang.value]


def _streak_milestone(metrics: TeamMetrics) -> Optional[int]:
    """7 / 14 / 30 jours de série, signalé uniquement le jour du palier (ou le suivant)."""
    streak = metrics.days_trending
    if streak < STREAK_MILESTONES[-1] or metrics.trend == Trend.DECLINING:
        return None
    milestone = next(m for m in STREAK_MILESTONES if streak >= m)
    if streak in (milestone, milestone + 1):
        return milestone
    return None
