# modules/metrics/service.py
"""
Orchestration du Vibe Check : check-in quotidien + métriques d'équipe.

Le service lit la DB via VibeRepository puis délègue TOUT le calcul à
engine/metrics (fonctions pures). Aucun calcul de score ici.

Taille d'équipe :
    team.expected_team_size si renseignée, sinon nombre de participants
    distincts (minimum 1 pour garder un completion_ratio défini).

"Aujourd'hui" = date courante dans le fuseau de l'équipe
(team.timezone, sinon settings.DEFAULT_TIMEZONE).

Fenêtres de score : METRICS_HISTORY_DAYS derniers jours. Maturité : totaux
journaliers de tout l'historique (repository.get_daily_totals).
"""
import logging
import random
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from teampulse.core.config import Settings, get_settings
from teampulse.engine.metrics.calculations import (
    DailyVibe,
    aggregate_daily,
    daily_vibes_from_totals,
    resolve_timezone,
)
from teampulse.engine.metrics.insights import VibeInsight, generate_insights, pick_coach_question
from teampulse.engine.metrics.synthesizer import TeamMetrics, synthesize
from teampulse.modules.metrics.repository import VibeRepository
from teampulse.shared.enums import Language
from teampulse.shared.models import Team, VibeSubmission

logger = logging.getLogger(__name__)


@dataclass
class _TeamSnapshot:
    team: Team
    submissions: Sequence[VibeSubmission]
    team_size: int
    timezone: str
    today: date


class MetricsService:

    def __init__(
        self,
        repo: Optional[VibeRepository] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.repo = repo or VibeRepository()
        self.settings = settings or get_settings()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # ── Métriques ─────────────────────────────────────────────

    async def get_team_metrics(
        self, db: AsyncSession, team_id: int
    ) -> Optional[TeamMetrics]:
        snapshot = await self._load(db, team_id)
        if snapshot is None:
            return None
        totals = await self.repo.get_daily_totals(db, snapshot.team.id, snapshot.timezone)
        lifetime = daily_vibes_from_totals(totals, snapshot.team_size)
        return self._synthesize(snapshot, lifetime)

    async def get_team_insights(
        self, db: AsyncSession, team_id: int, language: Language = Language.EN
    ) -> Optional[List[VibeInsight]]:
        metrics = await self.get_team_metrics(db, team_id)
        if metrics is None:
            return None
        return generate_insights(metrics, language)

    async def get_vibe_history(
        self, db: AsyncSession, team_id: int
    ) -> Optional[List[DailyVibe]]:
        """DailyVibe des METRICS_HISTORY_DAYS derniers jours, pour les graphes."""
        snapshot = await self._load(db, team_id)
        if snapshot is None:
            return None

        first_day = snapshot.today - timedelta(days=self.settings.METRICS_HISTORY_DAYS - 1)
        history = aggregate_daily(
            snapshot.submissions, snapshot.team_size,
            team_id=snapshot.team.id, timezone=snapshot.timezone,
        )
        return [d for d in history if first_day <= d.date <= snapshot.today]

    async def get_coach_question(
        self,
        db: AsyncSession,
        team_id: int,
        language: Language = Language.NL,
        rng: Optional[random.Random] = None,
    ) -> Optional[str]:
        metrics = await self.get_team_metrics(db, team_id)
        if metrics is None:
            return None
        return pick_coach_question(metrics, language, rng)

    # ── Check-in ──────────────────────────────────────────────

    async def submit_vibe(
        self, db: AsyncSession, team_id: int, payload
    ) -> VibeSubmission:
        team = await self.repo.get_team(db, team_id)
        if not team:
            raise KeyError("TEAM_NOT_FOUND")

        tz = resolve_timezone(self._timezone_of(team))
        local_today = self._clock().astimezone(tz).date()
        start = datetime.combine(local_today, time.min, tzinfo=tz)
        end = start + timedelta(days=1)

        already_done = await self.repo.has_submission_between(
            db, team.id, payload.participant_id,
            start.astimezone(timezone.utc), end.astimezone(timezone.utc),
        )
        if already_done:
            raise ValueError("ALREADY_SUBMITTED_TODAY")

        submission = await self.repo.create_submission(
            db,
            team_id=team.id,
            participant_id=payload.participant_id,
            vibe_score=payload.vibe_score,
            comment=payload.comment,
        )
        logger.info("Vibe check-in enregistré team=%s score=%s", team.id, payload.vibe_score)
        return submission

    # ── Internals ─────────────────────────────────────────────

    async def _load(self, db: AsyncSession, team_id: int) -> Optional[_TeamSnapshot]:
        team = await self.repo.get_team(db, team_id)
        if not team:
            return None

        submissions = await self.repo.get_recent_submissions(
            db, team.id, days=self.settings.METRICS_HISTORY_DAYS
        )
        team_size = team.expected_team_size
        if not team_size:
            team_size = max(1, await self.repo.count_participants(db, team.id))

        tz_name = self._timezone_of(team)
        today = self._clock().astimezone(resolve_timezone(tz_name)).date()
        return _TeamSnapshot(team, submissions, team_size, tz_name, today)

    def _synthesize(
        self, snapshot: _TeamSnapshot, lifetime: Sequence[DailyVibe] = ()
    ) -> TeamMetrics:
        metrics = synthesize(
            snapshot.submissions,
            team_id=snapshot.team.id,
            expected_team_size=snapshot.team_size,
            as_of=snapshot.today,
            timezone=snapshot.timezone,
            lifetime_days=lifetime,
        )
        logger.debug(
            "Métriques team=%s trend=%s momentum=%s confidence=%s maturity=%s",
            snapshot.team.id, metrics.trend.value, metrics.momentum,
            metrics.confidence, metrics.data_maturity.value,
        )
        return metrics

    def _timezone_of(self, team: Team) -> str:
        return team.timezone or self.settings.DEFAULT_TIMEZONE
