# engine/metrics/calculations.py
"""
Calculs de base du Vibe Check (ZÉRO accès DB).

Reçoit des soumissions brutes (score 1-5 par membre et par jour),
les agrège en DailyVibe puis en fenêtres scorées (VibeMetric), et dérive
les signaux d'équipe : momentum, tendance, confiance, maturité des données.

Tout objet exposant team_id / submitted_at / vibe_score est accepté :
la dataclass Submission ci-dessous ou directement les lignes ORM
VibeSubmission renvoyées par le repository.

Règles générales :
    - Données rares ou absentes → états neutres / insufficient, jamais d'exception.
    - Entrée malformée (autre équipe, score hors bornes) → SubmissionValidationError.
    - Score exactement sur un seuil → catégorie inférieure (la plus prudente).
    - Tant que has_minimum_data() est faux : momentum = 0, confiance = 0,
      tendance = INSUFFICIENT_DATA.

Fenêtres de momentum : comptées en jours AVEC données (pas en jours
calendaires), pour qu'une équipe qui ne saisit pas le week-end ne soit pas
pénalisée par des fenêtres vides.
"""
from __future__ import annotations
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timezone as dt_timezone, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import numpy as np

from teampulse.shared.enums import (
    ConfidenceLevel,
    DataMaturity,
    DayState,
    ParticipationState,
    Trend,
    VibeZone,
    WeekState,
)


# ── Bornes du score ───────────────────────────────────────────────────────────

SCORE_MIN  = 1
SCORE_MAX  = 5
SCORE_SPAN = SCORE_MAX - SCORE_MIN

# ── Seuils jour / semaine ─────────────────────────────────────────────────────

HEALTHY_THRESHOLD    = 3.5    # > 3.5 → healthy
AT_RISK_THRESHOLD    = 2.5    # > 2.5 → neutral, sinon at_risk
MIN_COMPLETION_RATIO = 0.30   # Sous ce ratio, le jour n'est pas scoré
MIN_WEEK_SCORED_DAYS = 3

# ── Porte "données minimales" ─────────────────────────────────────────────────

MIN_DAYS      = 2
MIN_RESPONSES = 3

# ── Momentum / tendance ───────────────────────────────────────────────────────

MOMENTUM_WINDOW_DAYS = 7
MOMENTUM_DEAD_BAND   = 0.05   # Normalisé : 0.05 × 4 = 0.2 point de score
DAY_STABLE_BAND      = 0.1    # En points de score, pour days_trending

# ── Confiance ─────────────────────────────────────────────────────────────────

CONFIDENCE_FULL_RESPONSES = 30
CONFIDENCE_FULL_SPAN_DAYS = 14
CONFIDENCE_RESPONSE_WEIGHT = 0.5
CONFIDENCE_SPAN_WEIGHT     = 0.5

# ── Maturité ──────────────────────────────────────────────────────────────────

ESTABLISHED_MIN_DAYS        = 14
ESTABLISHED_MIN_CONSISTENCY = 60   # % de jours au-dessus de MIN_COMPLETION_RATIO

# ── Zones (fenêtre scorée) ────────────────────────────────────────────────────

ZONE_UNDER_PRESSURE = 2.5    # value ≤ 2.5
ZONE_HIGH           = 4.0    # value > 4.0
ZONE_MIXED_SPREAD   = 1.0    # écart-type ≥ 1.0

# ── Participation du jour (en %) ──────────────────────────────────────────────

PARTICIPATION_COMPLETE = 60
PARTICIPATION_EMERGING = 30

# Complétion d'une fenêtre pour une confiance "high"
METRIC_HIGH_COMPLETION = 0.6


class SubmissionValidationError(ValueError):
    """Entrée malformée : erreur de l'appelant, jamais retentée."""


# ── Dataclasses ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Submission:
    """Réponse quotidienne d'un membre. Immuable."""
    team_id: Union[int, str]
    submitted_at: datetime
    vibe_score: int


@dataclass(frozen=True)
class DailyVibe:
    """Agrégat d'une équipe sur un jour calendaire (fuseau de l'équipe)."""
    date: date
    response_count: int
    average_score: float
    completion_ratio: float     # response_count / expected_team_size, plafonné à 1
    score_std: float = 0.0      # écart-type population des scores du jour


@dataclass(frozen=True)
class VibeMetric:
    """
    Une fenêtre scorée (live, jour, semaine...).

    value          → moyenne pondérée par le nombre de réponses, None sans données
    previous_value → même calcul sur la période précédente (delta)
    spread         → écart-type poolé de toutes les réponses de la fenêtre
    """
    name: str
    value: Optional[float]
    previous_value: Optional[float]
    delta: Optional[float]
    response_count: int
    days_observed: int
    completion_ratio: float
    spread: float
    confidence: ConfidenceLevel
    zone: Optional[VibeZone]


# ── Agrégation ────────────────────────────────────────────────────────────────

def aggregate_daily(
    submissions: Iterable[Any],
    expected_team_size: int,
    team_id: Optional[Union[int, str]] = None,
    timezone: Union[str, tzinfo, None] = "UTC",
) -> List[DailyVibe]:
    """
    Regroupe les soumissions par jour calendaire (fuseau de l'équipe).

    Args:
        submissions        : objets avec team_id, submitted_at, vibe_score
        expected_team_size : taille attendue (> 0), base du completion_ratio
        team_id            : équipe demandée ; à défaut, celle de la 1re soumission
        timezone           : nom IANA ou tzinfo ; datetimes naïfs = UTC

    Returns:
        Liste de DailyVibe triée par date croissante ([] si aucune soumission).
    """
    _check_team_size(expected_team_size)
    tz = resolve_timezone(timezone)
    rows = list(submissions)
    if not rows:
        return []

    expected_team = team_id if team_id is not None else rows[0].team_id
    _validate(rows, expected_team)

    scores_by_day: Dict[date, List[float]] = defaultdict(list)
    for row in rows:
        scores_by_day[_local_date(row.submitted_at, tz)].append(float(row.vibe_score))

    return [
        _daily_vibe(day, scores_by_day[day], expected_team_size)
        for day in sorted(scores_by_day)
    ]


def daily_vibes_from_totals(totals: Iterable[Any], expected_team_size: int) -> List[DailyVibe]:
    """
    DailyVibe depuis des totaux déjà agrégés par jour (ex: GROUP BY en SQL).

    Chaque ligne expose day, response_count, average_score. L'écart-type
    intra-jour n'est pas connu : score_std = 0. Jours sans réponse ignorés.
    """
    _check_team_size(expected_team_size)
    days = [
        DailyVibe(
            date=row.day,
            response_count=int(row.response_count),
            average_score=round(float(row.average_score), 4),
            completion_ratio=round(min(1.0, int(row.response_count) / expected_team_size), 4),
        )
        for row in totals
        if row.response_count
    ]
    return sorted(days, key=lambda d: d.date)


def build_vibe_metric(
    submissions: Iterable[Any],
    expected_team_size: int,
    previous_submissions: Iterable[Any] = (),
    team_id: Optional[Union[int, str]] = None,
    timezone: Union[str, tzinfo, None] = "UTC",
    name: str = "vibe",
) -> VibeMetric:
    """
    Construit une VibeMetric depuis des soumissions brutes.
    Liste vide → métrique à zéro réponse, complétion 0, value None.
    """
    current = list(submissions)
    previous = list(previous_submissions)
    if team_id is None and (current or previous):
        team_id = (current or previous)[0].team_id

    days = aggregate_daily(current, expected_team_size, team_id, timezone)
    previous_days = aggregate_daily(previous, expected_team_size, team_id, timezone)
    return summarize_window(days, expected_team_size, previous_days, name=name)


def summarize_window(
    days: Sequence[DailyVibe],
    expected_team_size: int,
    previous_days: Sequence[DailyVibe] = (),
    name: str = "vibe",
) -> VibeMetric:
    """Score d'une fenêtre de DailyVibe déjà agrégés."""
    _check_team_size(expected_team_size)
    observed = [d for d in days if d.response_count > 0]
    response_count = sum(d.response_count for d in observed)

    value = _weighted_average(observed)
    previous_value = _weighted_average(previous_days)
    spread = _pooled_std(observed, value) if value is not None else 0.0

    completion = 0.0
    if observed:
        completion = min(1.0, response_count / (expected_team_size * len(observed)))

    delta = None
    if value is not None and previous_value is not None:
        delta = round(value - previous_value, 2)

    return VibeMetric(
        name=name,
        value=round(value, 2) if value is not None else None,
        previous_value=round(previous_value, 2) if previous_value is not None else None,
        delta=delta,
        response_count=response_count,
        days_observed=len(observed),
        completion_ratio=round(completion, 4),
        spread=round(spread, 2),
        confidence=_confidence_level(response_count, completion),
        zone=calculate_zone(value, spread),
    )


# ── États jour / semaine ──────────────────────────────────────────────────────

def calculate_day_state(day: Optional[DailyVibe]) -> DayState:
    """
    healthy / neutral / at_risk selon la moyenne du jour.
    Complétion sous MIN_COMPLETION_RATIO (ou jour absent) → INSUFFICIENT.
    """
    if day is None or day.response_count == 0:
        return DayState.INSUFFICIENT
    if day.completion_ratio < MIN_COMPLETION_RATIO:
        return DayState.INSUFFICIENT
    return DayState(_score_band(day.average_score))


def calculate_week_state(days: Sequence[DailyVibe]) -> WeekState:
    """
    Classe une semaine sur ses jours exploitables uniquement.
    Moins de MIN_WEEK_SCORED_DAYS jours au-dessus du minimum de complétion
    → INSUFFICIENT.
    """
    scored = [
        d for d in days
        if d.response_count > 0 and d.completion_ratio >= MIN_COMPLETION_RATIO
    ]
    if len(scored) < MIN_WEEK_SCORED_DAYS:
        return WeekState.INSUFFICIENT
    return WeekState(_score_band(_weighted_average(scored)))


def calculate_zone(value: Optional[float], spread: float = 0.0) -> Optional[VibeZone]:
    """Zone qualitative d'une fenêtre. Ordre : pression > signaux mixtes > haut."""
    if value is None:
        return None
    if value <= ZONE_UNDER_PRESSURE:
        return VibeZone.UNDER_PRESSURE
    if spread >= ZONE_MIXED_SPREAD:
        return VibeZone.MIXED_SIGNALS
    if value > ZONE_HIGH:
        return VibeZone.HIGH_CONFIDENCE
    return VibeZone.STEADY_STATE


# ── Porte, momentum, tendance ─────────────────────────────────────────────────

def has_minimum_data(history: Sequence[DailyVibe]) -> bool:
    """Vrai seulement si MIN_DAYS jours ET MIN_RESPONSES réponses sont atteints."""
    days = _data_days(history)
    return len(days) >= MIN_DAYS and _total_responses(days) >= MIN_RESPONSES


def calculate_momentum(history: Sequence[DailyVibe]) -> float:
    """
    Moyenne de la fenêtre récente − moyenne de la fenêtre précédente,
    normalisée par l'amplitude du score et bornée à [-1, 1].

    Fenêtre = min(MOMENTUM_WINDOW_DAYS, n_jours // 2) jours avec données.
    0.0 sans deux fenêtres comparables ou sans données minimales.
    """
    if not has_minimum_data(history):
        return 0.0

    days = _data_days(history)
    window = min(MOMENTUM_WINDOW_DAYS, len(days) // 2)
    if window < 1:
        return 0.0

    recent = days[-window:]
    prior = days[-2 * window:-window]
    diff = _weighted_average(recent) - _weighted_average(prior)

    normalized = max(-1.0, min(1.0, diff / SCORE_SPAN))
    return round(normalized, 4)


def classify_momentum(momentum: float) -> Trend:
    """Bande morte symétrique : |momentum| ≤ MOMENTUM_DEAD_BAND → STABLE."""
    if momentum > MOMENTUM_DEAD_BAND:
        return Trend.IMPROVING
    if momentum < -MOMENTUM_DEAD_BAND:
        return Trend.DECLINING
    return Trend.STABLE


def calculate_trend(history: Sequence[DailyVibe]) -> Trend:
    if not has_minimum_data(history):
        return Trend.INSUFFICIENT_DATA
    return classify_momentum(calculate_momentum(history))


def calculate_days_trending(history: Sequence[DailyVibe], trend: Trend) -> int:
    """
    Longueur de la série récente de variations jour-à-jour allant dans
    le sens de la tendance (STABLE : variations dans ±DAY_STABLE_BAND).
    """
    if trend == Trend.INSUFFICIENT_DATA:
        return 0

    days = _data_days(history)
    count = 0
    for newer, older in zip(reversed(days), reversed(days[:-1])):
        move = newer.average_score - older.average_score
        if trend == Trend.IMPROVING and move > DAY_STABLE_BAND:
            count += 1
        elif trend == Trend.DECLINING and move < -DAY_STABLE_BAND:
            count += 1
        elif trend == Trend.STABLE and abs(move) <= DAY_STABLE_BAND:
            count += 1
        else:
            break
    return count


def direction_of(delta: float) -> Trend:
    """Sens brut d'une différence, sans bande morte (participation)."""
    if delta > 0:
        return Trend.IMPROVING
    if delta < 0:
        return Trend.DECLINING
    return Trend.STABLE


# ── Confiance & maturité ──────────────────────────────────────────────────────

def calculate_confidence(history: Sequence[DailyVibe]) -> float:
    """
    Confiance ∈ [0, 1], croissante avec le volume de réponses et la
    couverture temporelle (premier → dernier jour). Plafonnée à 1.0.
    Un seul jour ne franchit jamais la porte → 0.
    """
    if not has_minimum_data(history):
        return 0.0

    days = _data_days(history)
    responses = _total_responses(days)
    span = (days[-1].date - days[0].date).days + 1

    score = (
        CONFIDENCE_RESPONSE_WEIGHT * min(1.0, responses / CONFIDENCE_FULL_RESPONSES) +
        CONFIDENCE_SPAN_WEIGHT     * min(1.0, span / CONFIDENCE_FULL_SPAN_DAYS)
    )
    return round(min(1.0, score), 4)


def calculate_consistency_rate(history: Sequence[DailyVibe]) -> int:
    """% des jours avec données dont la complétion atteint MIN_COMPLETION_RATIO."""
    days = _data_days(history)
    if not days:
        return 0
    good = sum(1 for d in days if d.completion_ratio >= MIN_COMPLETION_RATIO)
    return round_half_up(good / len(days) * 100)


def calculate_data_maturity(history: Sequence[DailyVibe]) -> DataMaturity:
    if not has_minimum_data(history):
        return DataMaturity.INSUFFICIENT

    days = _data_days(history)
    if (
        len(days) >= ESTABLISHED_MIN_DAYS
        and calculate_consistency_rate(days) >= ESTABLISHED_MIN_CONSISTENCY
    ):
        return DataMaturity.ESTABLISHED
    return DataMaturity.EMERGING


def calculate_participation_state(rate: int) -> ParticipationState:
    if rate >= PARTICIPATION_COMPLETE:
        return ParticipationState.DAY_COMPLETE
    if rate >= PARTICIPATION_EMERGING:
        return ParticipationState.SIGNAL_EMERGING
    return ParticipationState.AWAITING_SIGNAL


# ── Helpers ───────────────────────────────────────────────────────────────────

def round_half_up(value: float) -> int:
    """Arrondi commercial (12.5 → 13), pour les pourcentages affichés."""
    return int(math.floor(value + 0.5))


def _daily_vibe(day: date, scores: List[float], expected_team_size: int) -> DailyVibe:
    return DailyVibe(
        date=day,
        response_count=len(scores),
        average_score=round(float(np.mean(scores)), 4),
        completion_ratio=round(min(1.0, len(scores) / expected_team_size), 4),
        score_std=round(float(np.std(scores)), 4) if len(scores) > 1 else 0.0,
    )


def _data_days(history: Sequence[DailyVibe]) -> List[DailyVibe]:
    return sorted((d for d in history if d.response_count > 0), key=lambda d: d.date)


def _total_responses(days: Sequence[DailyVibe]) -> int:
    return sum(d.response_count for d in days)


def _weighted_average(days: Sequence[DailyVibe]) -> Optional[float]:
    observed = [d for d in days if d.response_count > 0]
    if not observed:
        return None
    return float(np.average(
        [d.average_score for d in observed],
        weights=[d.response_count for d in observed],
    ))


def _pooled_std(days: Sequence[DailyVibe], mean: float) -> float:
    """Variance totale = variance intra-jour + dispersion des moyennes."""
    variances = [d.score_std ** 2 + (d.average_score - mean) ** 2 for d in days]
    weights = [d.response_count for d in days]
    return float(np.sqrt(np.average(variances, weights=weights)))


def _score_band(average: float) -> str:
    if average > HEALTHY_THRESHOLD:
        return "healthy"
    if average > AT_RISK_THRESHOLD:
        return "neutral"
    return "at_risk"


def _confidence_level(response_count: int, completion: float) -> ConfidenceLevel:
    if response_count < MIN_RESPONSES or completion < MIN_COMPLETION_RATIO:
        return ConfidenceLevel.LOW
    if completion < METRIC_HIGH_COMPLETION:
        return ConfidenceLevel.MODERATE
    return ConfidenceLevel.HIGH


def _check_team_size(expected_team_size: int) -> None:
    if isinstance(expected_team_size, bool) or not isinstance(expected_team_size, int):
        raise SubmissionValidationError(
            f"expected_team_size doit être un entier, reçu {expected_team_size!r}"
        )
    if expected_team_size <= 0:
        raise SubmissionValidationError(
            f"expected_team_size doit être positif, reçu {expected_team_size}"
        )


def _validate(rows: Sequence[Any], team_id: Union[int, str]) -> None:
    for row in rows:
        if row.team_id != team_id:
            raise SubmissionValidationError(
                f"Soumission de l'équipe {row.team_id!r} dans l'historique "
                f"de l'équipe {team_id!r}"
            )
        score = row.vibe_score
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise SubmissionValidationError(f"vibe_score doit être numérique, reçu {score!r}")
        if not (SCORE_MIN <= score <= SCORE_MAX):
            raise SubmissionValidationError(
                f"vibe_score hors bornes [{SCORE_MIN}, {SCORE_MAX}] : {score!r}"
            )


def resolve_timezone(value: Union[str, tzinfo, None]) -> tzinfo:
    """Nom IANA ou tzinfo → tzinfo. Fuseau inconnu → SubmissionValidationError."""
    if value is None:
        return dt_timezone.utc
    if isinstance(value, tzinfo):
        return value
    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise SubmissionValidationError(f"Fuseau horaire inconnu : {value!r}") from e


def _local_date(moment: datetime, tz: tzinfo) -> date:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt_timezone.utc)
    return moment.astimezone(tz).date()
