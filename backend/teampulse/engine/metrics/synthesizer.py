# engine/metrics/synthesizer.py
"""
Synthèse des métriques d'équipe, ZÉRO accès DB.

Reçoit l'historique brut des soumissions d'UNE équipe, retourne un
TeamMetrics prêt à être sérialisé par le dashboard.

Architecture :
    metrics/service.get_team_metrics()
        → repository.get_recent_submissions()      → List[VibeSubmission]
        → synthesizer.synthesize()                 → TeamMetrics
        → insights.generate_insights(metrics)      → List[VibeInsight]

Fenêtres (relatives à as_of) :
    live_vibe          : aujourd'hui vs hier
    day_vibe           : hier
    week_vibe          : 7 derniers jours vs 7 précédents
    previous_week_vibe : les 7 jours précédents

as_of par défaut = dernier jour présent dans les données : le résultat
est une fonction pure du snapshot reçu (deux appels → même TeamMetrics).
Le service passe la date du jour dans le fuseau de l'équipe.

Maturité : calculée sur tout l'historique de l'équipe (lifetime_days), pas
sur la fenêtre de soumissions chargée pour les scores. Sans lifetime_days,
les soumissions reçues sont considérées comme l'historique complet.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta, tzinfo
from typing import Any, Iterable, List, Optional, Sequence, Union

from teampulse.engine.metrics.calculations import (
    DailyVibe,
    VibeMetric,
    aggregate_daily,
    calculate_confidence,
    calculate_consistency_rate,
    calculate_data_maturity,
    calculate_day_state,
    calculate_days_trending,
    calculate_momentum,
    calculate_participation_state,
    calculate_trend,
    calculate_week_state,
    direction_of,
    has_minimum_data,
    round_half_up,
    summarize_window,
)
from teampulse.shared.enums import (
    DataMaturity,
    DayState,
    ParticipationState,
    Trend,
    WeekState,
)

WEEK_DAYS = 7


# ── Dataclasses de résultat ───────────────────────────────────────────────────

@dataclass(frozen=True)
class ParticipationSummary:
    today: int                   # Réponses du jour
    team_size: int
    rate: int                    # % de l'équipe, plafonné à 100
    trend: Trend                 # Aujourd'hui vs hier, sans bande morte
    state: ParticipationState


@dataclass(frozen=True)
class MaturitySummary:
    level: DataMaturity
    days_of_data: int
    consistency_rate: int        # %


@dataclass(frozen=True)
class TeamMetrics:
    """
    Sortie de la synthèse. Éphémère : recalculée à chaque requête.

    Invariant : has_minimum_data == False
        → confidence == 0, momentum == 0, trend == INSUFFICIENT_DATA
    """
    team_id: Union[int, str]
    as_of: Optional[date]
    momentum: float
    confidence: float
    trend: Trend
    data_maturity: DataMaturity
    has_minimum_data: bool
    days_trending: int
    live_vibe: VibeMetric
    day_vibe: VibeMetric
    week_vibe: VibeMetric
    previous_week_vibe: VibeMetric
    participation: ParticipationSummary
    day_state: DayState
    week_state: WeekState
    maturity: MaturitySummary


def synthesize(
    submissions: Iterable[Any],
    team_id: Union[int, str],
    expected_team_size: int,
    as_of: Optional[date] = None,
    timezone: Union[str, tzinfo, None] = "UTC",
    lifetime_days: Sequence[DailyVibe] = (),
) -> TeamMetrics:
    """
    Args:
        submissions        : soumissions de l'équipe team_id (ordre indifférent)
        team_id            : équipe demandée, toute soumission d'une autre
                             équipe lève SubmissionValidationError
        expected_team_size : taille attendue (> 0)
        as_of              : jour de référence ("aujourd'hui")
        timezone           : fuseau de l'équipe pour le découpage en jours
        lifetime_days      : DailyVibe de tout l'historique de l'équipe (maturité
                             uniquement) ; complétés par les jours de submissions
    """
    history = aggregate_daily(submissions, expected_team_size, team_id, timezone)
    if as_of is None and history:
        as_of = history[-1].date
    if as_of is not None:
        history = [d for d in history if d.date <= as_of]

    today = _between(history, as_of, 0, 0)
    yesterday = _between(history, as_of, 1, 1)
    last_week = _between(history, as_of, 0, WEEK_DAYS - 1)
    previous_week = _between(history, as_of, WEEK_DAYS, 2 * WEEK_DAYS - 1)

    trend = calculate_trend(history)
    maturity = _maturity(_lifetime(history, lifetime_days, as_of))

    return TeamMetrics(
        team_id=team_id,
        as_of=as_of,
        momentum=calculate_momentum(history),
        confidence=calculate_confidence(history),
        trend=trend,
        data_maturity=maturity.level,
        has_minimum_data=has_minimum_data(history),
        days_trending=calculate_days_trending(history, trend),
        live_vibe=summarize_window(today, expected_team_size, yesterday, name="live"),
        day_vibe=summarize_window(yesterday, expected_team_size, name="day"),
        week_vibe=summarize_window(last_week, expected_team_size, previous_week, name="week"),
        previous_week_vibe=summarize_window(previous_week, expected_team_size, name="previous_week"),
        participation=_participation(today, yesterday, expected_team_size),
        day_state=calculate_day_state(today[0] if today else None),
        week_state=calculate_week_state(last_week),
        maturity=maturity,
    )


def _between(
    history: List[DailyVibe], as_of: Optional[date], newest: int, oldest: int
) -> List[DailyVibe]:
    """Jours dans [as_of - oldest, as_of - newest]."""
    if as_of is None:
        return []
    start = as_of - timedelta(days=oldest)
    end = as_of - timedelta(days=newest)
    return [d for d in history if start <= d.date <= end]


def _lifetime(
    history: List[DailyVibe], lifetime_days: Sequence[DailyVibe], as_of: Optional[date]
) -> List[DailyVibe]:
    """Historique complet ; les jours recalculés depuis les soumissions priment."""
    by_day = {d.date: d for d in lifetime_days}
    by_day.update((d.date, d) for d in history)
    return [
        by_day[day] for day in sorted(by_day)
        if by_day[day].response_count > 0 and (as_of is None or day <= as_of)
    ]


def _maturity(days: List[DailyVibe]) -> MaturitySummary:
    return MaturitySummary(
        level=calculate_data_maturity(days),
        days_of_data=len(days),
        consistency_rate=calculate_consistency_rate(days),
    )


def _participation(
    today: List[DailyVibe], yesterday: List[DailyVibe], team_size: int
) -> ParticipationSummary:
    today_entries = sum(d.response_count for d in today)
    yesterday_entries = sum(d.response_count for d in yesterday)
    rate = min(100, round_half_up(today_entries / team_size * 100))

    return ParticipationSummary(
        today=today_entries,
        team_size=team_size,
        rate=rate,
        trend=direction_of(today_entries - yesterday_entries),
        state=calculate_participation_state(rate),
    )
