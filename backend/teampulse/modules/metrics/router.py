# modules/metrics/router.py
"""
Endpoints Vibe Check : check-in quotidien, métriques, insights, historique.

Règle : zéro db.execute ici. Tout passe par MetricsService.
Authentification hors périmètre : fournie en amont (reverse proxy / gateway).
"""
from fastapi import APIRouter, HTTPException, status
from typing import List

from teampulse.shared.deps import DbDep, MetricsDep
from teampulse.shared.enums import Language
from teampulse.modules.metrics.schemas import (
    CoachQuestionOut,
    DailyVibeOut,
    TeamMetricsOut,
    VibeCheckinIn,
    VibeCheckinOut,
    VibeInsightOut,
)

router = APIRouter(prefix="/teams", tags=["Metrics"])

TEAM_NOT_FOUND = "Équipe introuvable."


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TEAM_NOT_FOUND)


# ─────────────────────────────────────────────
# DASHBOARD
# ─────────────────────────────────────────────

@router.get(
    "/{team_id}/metrics",
    response_model=TeamMetricsOut,
    summary="Métriques synthétisées d'une équipe",
)
async def get_team_metrics(team_id: int, db: DbDep, service: MetricsDep):
    """
    Retourne :
    - momentum, confiance, tendance, maturité des données
    - fenêtres live / jour / semaine / semaine précédente
    - participation du jour, états jour et semaine
    """
    metrics = await service.get_team_metrics(db, team_id)
    if metrics is None:
        raise _not_found()
    return metrics


@router.get(
    "/{team_id}/insights",
    response_model=List[VibeInsightOut],
    summary="Insights qualitatifs (3 max)",
)
async def get_team_insights(
    team_id: int, db: DbDep, service: MetricsDep, lang: Language = Language.EN
):
    insights = await service.get_team_insights(db, team_id, lang)
    if insights is None:
        raise _not_found()
    return insights


@router.get(
    "/{team_id}/history",
    response_model=List[DailyVibeOut],
    summary="Historique journalier pour les graphes",
)
async def get_vibe_history(team_id: int, db: DbDep, service: MetricsDep):
    history = await service.get_vibe_history(db, team_id)
    if history is None:
        raise _not_found()
    return history


@router.get(
    "/{team_id}/coach-question",
    response_model=CoachQuestionOut,
    summary="Question de réflexion adaptée à la tendance",
)
async def get_coach_question(
    team_id: int, db: DbDep, service: MetricsDep, lang: Language = Language.NL
):
    question = await service.get_coach_question(db, team_id, lang)
    if question is None:
        raise _not_found()
    return {"question": question}


# ─────────────────────────────────────────────
# CHECK-IN (membre d'équipe)
# ─────────────────────────────────────────────

@router.post(
    "/{team_id}/vibes",
    response_model=VibeCheckinOut,
    status_code=status.HTTP_201_CREATED,
    summary="Soumettre mon vibe du jour",
)
async def submit_vibe(
    team_id: int, payload: VibeCheckinIn, db: DbDep, service: MetricsDep
):
    """
    Contrainte : une seule soumission par participant et par jour
    (jour calendaire dans le fuseau de l'équipe).
    """
    try:
        return await service.submit_vibe(db, team_id, payload)
    except KeyError:
        raise _not_found()
    except ValueError as e:
        code = str(e)
        if code == "ALREADY_SUBMITTED_TODAY":
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Votre vibe a déjà été transmis aujourd'hui."
            )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=code)
