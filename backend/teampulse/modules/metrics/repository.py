# modules/metrics/repository.py
"""
Accès DB pour les équipes et les soumissions Vibe Check.
Le découpage en jours des fenêtres de score est fait par l'engine ;
seuls les totaux de maturité (tout l'historique) sont agrégés en SQL.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Date, cast, select, func
from typing import Any, List, Optional
from datetime import datetime, timezone, timedelta

from teampulse.shared.models import Team, VibeSubmission


class VibeRepository:

    # ── Teams ─────────────────────────────────────────────────

    async def get_team(self, db: AsyncSession, team_id: int) -> Optional[Team]:
        r = await db.execute(select(Team).where(Team.id == team_id))
        return r.scalar_one_or_none()

    async def count_participants(self, db: AsyncSession, team_id: int) -> int:
        r = await db.execute(
            select(func.count(func.distinct(VibeSubmission.participant_id))).where(
                VibeSubmission.team_id == team_id,
            )
        )
        return r.scalar_one() or 0

    # ── Submissions ───────────────────────────────────────────

    async def get_recent_submissions(
        self, db: AsyncSession, team_id: int, days: int = 14
    ) -> List[VibeSubmission]:
        # +1 jour de marge : le filtrage par jour local est fait par l'engine
        since = datetime.now(timezone.utc) - timedelta(days=days + 1)
        r = await db.execute(
            select(VibeSubmission)
            .where(
                VibeSubmission.team_id == team_id,
                VibeSubmission.submitted_at >= since,
            )
            .order_by(VibeSubmission.submitted_at)
        )
        return r.scalars().all()

    async def get_daily_totals(
        self, db: AsyncSession, team_id: int, tz_name: str
    ) -> List[Any]:
        """
        Totaux par jour local sur TOUT l'historique de l'équipe.
        Lignes : day, response_count, average_score.
        """
        day = cast(func.timezone(tz_name, VibeSubmission.submitted_at), Date).label("day")
        r = await db.execute(
            select(
                day,
                func.count(VibeSubmission.id).label("response_count"),
                func.avg(VibeSubmission.vibe_score).label("average_score"),
            )
            .where(VibeSubmission.team_id == team_id)
            .group_by("day")
            .order_by("day")
        )
        return r.all()

    async def has_submission_between(
        self,
        db: AsyncSession,
        team_id: int,
        participant_id: str,
        start: datetime,
        end: datetime,
    ) -> bool:
        r = await db.execute(
            select(VibeSubmission.id).where(
                VibeSubmission.team_id == team_id,
                VibeSubmission.participant_id == participant_id,
                VibeSubmission.submitted_at >= start,
                VibeSubmission.submitted_at < end,
            ).limit(1)
        )
        return r.scalar_one_or_none() is not None

    async def create_submission(
        self,
        db: AsyncSession,
        team_id: int,
        participant_id: str,
        vibe_score: int,
        comment: Optional[str] = None,
    ) -> VibeSubmission:
        db_obj = VibeSubmission(
            team_id=team_id,
            participant_id=participant_id,
            vibe_score=vibe_score,
            comment=comment,
            submitted_at=datetime.now(timezone.utc),
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj
