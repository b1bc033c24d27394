# modules/metrics/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Union
from datetime import date, datetime

from teampulse.shared.enums import (
    ConfidenceLevel,
    DataMaturity,
    DayState,
    InsightPolarity,
    InsightSeverity,
    InsightType,
    ParticipationState,
    Trend,
    VibeZone,
    WeekState,
)


# ── Check-in ───────────────────────────────────────────────

class VibeCheckinIn(BaseModel):
    participant_id: str = Field(..., min_length=1, max_length=128)
    vibe_score: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=500)


class VibeCheckinOut(BaseModel):
    id: int
    team_id: int
    vibe_score: int
    comment: Optional[str] = None
    submitted_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ── Métriques ──────────────────────────────────────────────

class DailyVibeOut(BaseModel):
    date: date
    response_count: int
    average_score: float
    completion_ratio: float
    score_std: float = 0.0
    model_config = ConfigDict(from_attributes=True)


class VibeMetricOut(BaseModel):
    name: str
    value: Optional[float] = None
    previous_value: Optional[float] = None
    delta: Optional[float] = None
    response_count: int
    days_observed: int
    completion_ratio: float
    spread: float
    confidence: ConfidenceLevel
    zone: Optional[VibeZone] = None
    model_config = ConfigDict(from_attributes=True)


class ParticipationOut(BaseModel):
    today: int
    team_size: int
    rate: int
    trend: Trend
    state: ParticipationState
    model_config = ConfigDict(from_attributes=True)


class MaturityOut(BaseModel):
    level: DataMaturity
    days_of_data: int
    consistency_rate: int
    model_config = ConfigDict(from_attributes=True)


class TeamMetricsOut(BaseModel):
    team_id: Union[int, str]
    as_of: Optional[date] = None
    momentum: float
    confidence: float
    trend: Trend
    data_maturity: DataMaturity
    has_minimum_data: bool
    days_trending: int
    live_vibe: VibeMetricOut
    day_vibe: VibeMetricOut
    week_vibe: VibeMetricOut
    previous_week_vibe: VibeMetricOut
    participation: ParticipationOut
    day_state: DayState
    week_state: WeekState
    maturity: MaturityOut
    model_config = ConfigDict(from_attributes=True)


# ── Insights ───────────────────────────────────────────────

class VibeInsightOut(BaseModel):
    id: str
    type: InsightType
    severity: InsightSeverity
    polarity: InsightPolarity
    message: str
    detail: Optional[str] = None
    suggestions: List[str] = []
    model_config = ConfigDict(from_attributes=True)


class CoachQuestionOut(BaseModel):
    question: str
