# tests/conftest.py
"""
Fixtures et factories partagées sur l'ensemble de la suite de tests.

Trois couches :
    1. Engine : fonctions pures, aucun mock nécessaire (factories de soumissions)
    2. Service : repository mocké (AsyncMock), horloge figée
    3. Router : httpx.AsyncClient + dependency_overrides FastAPI
"""
import pytest
from types import SimpleNamespace
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Iterable, List
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from teampulse.main import app
from teampulse.core.database import get_db
from teampulse.engine.metrics.calculations import DailyVibe, Submission
from teampulse.modules.metrics.service import MetricsService
from teampulse.shared.deps import get_metrics_service


TEAM_ID = 1
DAY_1 = date(2025, 3, 3)     # lundi


# ── Soumissions (input principal de l'engine) ─────────────────────────────────

def day_submissions(
    day: date, scores: Iterable[int], team_id=TEAM_ID, hour: int = 9
) -> List[Submission]:
    """Une soumission par score, espacées d'une minute, en UTC."""
    return [
        Submission(
            team_id=team_id,
            submitted_at=datetime.combine(day, time(hour, i), tzinfo=timezone.utc),
            vibe_score=score,
        )
        for i, score in enumerate(scores)
    ]


def history_submissions(daily_scores: List[List[int]], start: date = DAY_1, team_id=TEAM_ID) -> List[Submission]:
    """daily_scores[i] → soumissions du jour start + i."""
    subs: List[Submission] = []
    for offset, scores in enumerate(daily_scores):
        subs.extend(day_submissions(start + timedelta(days=offset), scores, team_id))
    return subs


def make_daily_vibe(
    day: date = DAY_1,
    count: int = 5,
    average: float = 4.0,
    completion: float = 1.0,
    std: float = 0.0,
) -> DailyVibe:
    return DailyVibe(
        date=day,
        response_count=count,
        average_score=average,
        completion_ratio=completion,
        score_std=std,
    )


def consecutive_days(averages: List[float], count: int = 5, completion: float = 1.0) -> List[DailyVibe]:
    return [
        make_daily_vibe(DAY_1 + timedelta(days=i), count=count, average=avg, completion=completion)
        for i, avg in enumerate(averages)
    ]


# ── Factories de modèles ORM (SimpleNamespace, léger, sans ORM) ──────────────

def make_team(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": TEAM_ID,
        "owner_id": "user_owner",
        "name": "Platform Team",
        "slug": "platform-team",
        "expected_team_size": 5,
        "timezone": "UTC",
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_submission(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "team_id": TEAM_ID,
        "participant_id": "device-1",
        "vibe_score": 4,
        "comment": None,
        "submitted_at": datetime.combine(DAY_1, time(9, 0), tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_daily_total(day: date, count: int = 5, average: Decimal = Decimal("4.0")) -> SimpleNamespace:
    """Ligne de VibeRepository.get_daily_totals() (avg SQL → Decimal)."""
    return SimpleNamespace(day=day, response_count=count, average_score=average)


def make_repo(**kwargs) -> MagicMock:
    """Repository mocké : toutes les méthodes sont des AsyncMock."""
    repo = MagicMock()
    repo.get_team = AsyncMock(return_value=kwargs.get("team", make_team()))
    repo.get_recent_submissions = AsyncMock(return_value=kwargs.get("submissions", []))
    repo.count_participants = AsyncMock(return_value=kwargs.get("participants", 0))
    repo.get_daily_totals = AsyncMock(return_value=kwargs.get("totals", []))
    repo.has_submission_between = AsyncMock(return_value=kwargs.get("already", False))
    repo.create_submission = AsyncMock(return_value=kwargs.get("created", make_submission()))
    return repo


def fixed_clock(moment: datetime):
    return lambda: moment


# ── Fixtures HTTP (httpx.AsyncClient + dependency_overrides) ─────────────────

@pytest.fixture
def metrics_service() -> MagicMock:
    return MagicMock(spec=MetricsService)


@pytest.fixture
async def client(metrics_service):
    """Client HTTP avec DB et MetricsService remplacés par des mocks."""
    mock_db = AsyncMock(spec=AsyncSession)
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_metrics_service] = lambda: metrics_service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
