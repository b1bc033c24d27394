# teampulse/shared/deps.py
"""
Dépendances FastAPI réutilisables dans tous les routers.
Injectées via Depends(), jamais appelées directement.

Les services sont construits paresseusement (Lazy) et partagés entre
requêtes ; les tests les remplacent via app.dependency_overrides.
"""
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teampulse.core.database import get_db
from teampulse.core.lazy import Lazy
from teampulse.modules.metrics.service import MetricsService

_metrics_service = Lazy(MetricsService)


def get_metrics_service() -> MetricsService:
    return _metrics_service.get()


# ── Type aliases pour les routers ─────────────────────────
DbDep      = Annotated[AsyncSession, Depends(get_db)]
MetricsDep = Annotated[MetricsService, Depends(get_metrics_service)]
