# tests/modules/metrics/test_service.py
"""
Tests unitaires pour modules.metrics.service.MetricsService

Couverture :
    get_team_metrics() :
        - Équipe introuvable → None
        - Succès → TeamMetrics calculé au jour courant de l'équipe
        - Taille d'équipe absente → participants distincts (minimum 1)
        - Fuseau absent → settings.DEFAULT_TIMEZONE
        - Soumission d'une autre équipe → SubmissionValidationError propagée
        - Maturité sur tout l'historique (get_daily_totals), pas sur la fenêtre

    get_team_insights() / get_coach_question() / get_vibe_history() :
        - Équipe introuvable → None
        - Historique limité à METRICS_HISTORY_DAYS jours

    submit_vibe() :
        - Équipe introuvable → KeyError
        - Déjà soumis aujourd'hui → ValueError "ALREADY_SUBMITTED_TODAY"
        - Bornes du jour calculées dans le fuseau de l'équipe
        - Succès → create_submission appelé, log INFO
"""
import logging
import random
import pytest
from datetime import date, datetime, time, timedelta, timezone
from unittest.mock import AsyncMock

from teampulse.core.config import Settings
from teampulse.engine.metrics.calculations import SubmissionValidationError
from teampulse.modules.metrics.schemas import VibeCheckinIn
from teampulse.modules.metrics import service as service_module
from teampulse.modules.metrics.service import MetricsService
from teampulse.shared.enums import DataMaturity, Language, Trend
from tests.conftest import (
    DAY_1,
    TEAM_ID,
    fixed_clock,
    make_daily_total,
    make_repo,
    make_submission,
    make_team,
)

pytestmark = pytest.mark.service

DAY_2 = DAY_1 + timedelta(days=1)
EVENING_DAY_2 = datetime.combine(DAY_2, time(18, 0), tzinfo=timezone.utc)


def _submissions(day: date, scores, team_id=TEAM_ID):
    return [
        make_submission(
            id=i, team_id=team_id, participant_id=f"device-{i}", vibe_score=score,
            submitted_at=datetime.combine(day, time(9, i), tzinfo=timezone.utc),
        )
        for i, score in enumerate(scores)
    ]


def _declining_history():
    return _submissions(DAY_1, [3, 4, 4, 5, 4]) + _submissions(DAY_2, [2, 3, 3, 4, 3])


def _long_history(weekdays, weeks=12):
    """Jours de check-in sur `weeks` semaines ; soumissions des 14 derniers jours, totaux complets."""
    days = [DAY_1 + timedelta(days=7 * week + d) for week in range(weeks) for d in weekdays]
    last = days[-1]
    recent = []
    for day in days:
        if day > last - timedelta(days=14):
            recent += _submissions(day, [4] * 5)
    totals = [make_daily_total(day) for day in days]
    return days, recent, totals, datetime.combine(last, time(18, 0), tzinfo=timezone.utc)


def _service(repo, moment=EVENING_DAY_2, **settings):
    settings.setdefault("DEFAULT_TIMEZONE", "UTC")
    return MetricsService(repo=repo, settings=Settings(**settings), clock=fixed_clock(moment))


# ── get_team_metrics() ────────────────────────────────────────────────────────

class TestGetTeamMetrics:
    async def test_equipe_introuvable_retourne_none(self):
        repo = make_repo(team=None)
        assert await _service(repo).get_team_metrics(AsyncMock(), 99) is None
        repo.get_recent_submissions.assert_not_awaited()

    async def test_succes(self):
        repo = make_repo(submissions=_declining_history())
        metrics = await _service(repo).get_team_metrics(AsyncMock(), TEAM_ID)

        assert metrics.as_of == DAY_2
        assert metrics.momentum == pytest.approx(-0.25)
        assert metrics.trend == Trend.DECLINING
        assert metrics.participation.team_size == 5

    async def test_synthese_au_jour_local_de_l_equipe(self, mocker):
        spy = mocker.spy(service_module, "synthesize")
        repo = make_repo(team=make_team(timezone="Europe/Amsterdam"))

        await _service(repo).get_team_metrics(AsyncMock(), TEAM_ID)

        kwargs = spy.call_args.kwargs
        assert kwargs["as_of"] == DAY_2
        assert kwargs["timezone"] == "Europe/Amsterdam"
        assert kwargs["expected_team_size"] == 5

    async def test_historique_demande_sur_la_fenetre_configuree(self):
        repo = make_repo()
        db = AsyncMock()
        await _service(repo, METRICS_HISTORY_DAYS=21).get_team_metrics(db, TEAM_ID)
        repo.get_recent_submissions.assert_awaited_once_with(db, TEAM_ID, days=21)

    async def test_as_of_est_le_jour_courant(self):
        """Rien aujourd'hui : live vide, la veille sert de comparaison."""
        repo = make_repo(submissions=_declining_history())
        moment = datetime.combine(DAY_2 + timedelta(days=1), time(8, 0), tzinfo=timezone.utc)
        metrics = await _service(repo, moment).get_team_metrics(AsyncMock(), TEAM_ID)

        assert metrics.as_of == DAY_2 + timedelta(days=1)
        assert metrics.live_vibe.value is None
        assert metrics.live_vibe.previous_value == 3.0
        assert metrics.participation.today == 0

    async def test_taille_equipe_depuis_les_participants(self):
        repo = make_repo(team=make_team(expected_team_size=None), participants=4,
                         submissions=_declining_history())
        metrics = await _service(repo).get_team_metrics(AsyncMock(), TEAM_ID)

        assert metrics.participation.team_size == 4
        assert metrics.participation.rate == 100

    async def test_taille_equipe_minimum_1(self):
        repo = make_repo(team=make_team(expected_team_size=None), participants=0)
        metrics = await _service(repo).get_team_metrics(AsyncMock(), TEAM_ID)
        assert metrics.participation.team_size == 1

    async def test_fuseau_par_defaut(self):
        """23:30 UTC le 3 mars = 4 mars à Amsterdam."""
        repo = make_repo(team=make_team(timezone=None))
        moment = datetime(2025, 3, 3, 23, 30, tzinfo=timezone.utc)
        service = _service(repo, moment, DEFAULT_TIMEZONE="Europe/Amsterdam")

        metrics = await service.get_team_metrics(AsyncMock(), TEAM_ID)
        assert metrics.as_of == date(2025, 3, 4)

    async def test_soumission_autre_equipe_propagee(self):
        repo = make_repo(submissions=_submissions(DAY_1, [4], team_id=2))
        with pytest.raises(SubmissionValidationError):
            await _service(repo).get_team_metrics(AsyncMock(), TEAM_ID)


class TestMaturiteHistoriqueComplet:
    async def test_equipe_jours_ouvres_established(self):
        """Lundi-vendredi depuis 12 semaines : 10 jours dans la fenêtre, 60 au total."""
        days, recent, totals, moment = _long_history(range(5))
        repo = make_repo(submissions=recent, totals=totals)
        db = AsyncMock()

        metrics = await _service(repo, moment).get_team_metrics(db, TEAM_ID)

        assert metrics.data_maturity == DataMaturity.ESTABLISHED
        assert metrics.maturity.days_of_data == 60
        assert metrics.maturity.consistency_rate == 100
        assert metrics.as_of == days[-1]
        repo.get_daily_totals.assert_awaited_once_with(db, TEAM_ID, "UTC")

    async def test_totaux_dans_le_fuseau_equipe(self):
        repo = make_repo(team=make_team(timezone="Europe/Amsterdam"))
        db = AsyncMock()
        await _service(repo).get_team_metrics(db, TEAM_ID)
        repo.get_daily_totals.assert_awaited_once_with(db, TEAM_ID, "Europe/Amsterdam")

    async def test_pas_de_premiere_semaine_pour_une_equipe_ancienne(self):
        """Lundi/mercredi/vendredi depuis 12 semaines : 36 jours au total."""
        _, recent, totals, moment = _long_history((0, 2, 4))
        repo = make_repo(submissions=recent, totals=totals)
        service = _service(repo, moment)

        metrics = await service.get_team_metrics(AsyncMock(), TEAM_ID)
        insights = await service.get_team_insights(AsyncMock(), TEAM_ID)

        assert metrics.maturity.days_of_data == 36
        assert "first-week-complete" not in [i.id for i in insights]

    async def test_premiere_semaine_equipe_nouvelle(self):
        days = [DAY_1 + timedelta(days=i) for i in range(7)]
        recent = []
        for day in days:
            recent += _submissions(day, [4] * 5)
        repo = make_repo(submissions=recent, totals=[make_daily_total(day) for day in days])
        moment = datetime.combine(days[-1], time(18, 0), tzinfo=timezone.utc)

        insights = await _service(repo, moment).get_team_insights(AsyncMock(), TEAM_ID)

        assert "first-week-complete" in [i.id for i in insights]


# ── get_team_insights() / get_coach_question() ────────────────────────────────

class TestInsightsEtCoach:
    async def test_insights_equipe_introuvable(self):
        assert await _service(make_repo(team=None)).get_team_insights(AsyncMock(), 99) is None

    async def test_insights_dans_la_langue_demandee(self):
        repo = make_repo(submissions=_submissions(DAY_2, [4]), team=make_team(expected_team_size=8))
        insights = await _service(repo).get_team_insights(AsyncMock(), TEAM_ID, Language.NL)

        assert [i.id for i in insights] == ["low-participation"]
        assert insights[0].message == "Beperkte data vandaag"

    async def test_question_equipe_introuvable(self):
        assert await _service(make_repo(team=None)).get_coach_question(AsyncMock(), 99) is None

    async def test_question_deterministe_avec_rng(self):
        repo = make_repo(submissions=_declining_history())
        service = _service(repo)
        first = await service.get_coach_question(AsyncMock(), TEAM_ID, Language.EN, random.Random(3))
        second = await service.get_coach_question(AsyncMock(), TEAM_ID, Language.EN, random.Random(3))
        assert first == second
        assert first.endswith("?")


# ── get_vibe_history() ────────────────────────────────────────────────────────

class TestGetVibeHistory:
    async def test_equipe_introuvable(self):
        assert await _service(make_repo(team=None)).get_vibe_history(AsyncMock(), 99) is None

    async def test_limitee_aux_derniers_jours(self):
        subs = []
        for offset in range(10):
            subs += _submissions(DAY_1 + timedelta(days=offset), [4, 3])
        last_day = DAY_1 + timedelta(days=9)
        moment = datetime.combine(last_day, time(20, 0), tzinfo=timezone.utc)

        history = await _service(make_repo(submissions=subs), moment, METRICS_HISTORY_DAYS=7) \
            .get_vibe_history(AsyncMock(), TEAM_ID)

        assert len(history) == 7
        assert history[0].date == last_day - timedelta(days=6)
        assert history[-1].date == last_day
        assert history[-1].average_score == 3.5
        assert history[-1].completion_ratio == 0.4

    async def test_historique_vide(self):
        assert await _service(make_repo()).get_vibe_history(AsyncMock(), TEAM_ID) == []


# ── submit_vibe() ─────────────────────────────────────────────────────────────

class TestSubmitVibe:
    payload = VibeCheckinIn(participant_id="device-1", vibe_score=4, comment="Bonne journée")

    async def test_equipe_introuvable_leve_key_error(self):
        repo = make_repo(team=None)
        with pytest.raises(KeyError):
            await _service(repo).submit_vibe(AsyncMock(), 99, self.payload)
        repo.create_submission.assert_not_awaited()

    async def test_deja_soumis_aujourdhui(self):
        repo = make_repo(already=True)
        with pytest.raises(ValueError, match="ALREADY_SUBMITTED_TODAY"):
            await _service(repo).submit_vibe(AsyncMock(), TEAM_ID, self.payload)
        repo.create_submission.assert_not_awaited()

    async def test_succes(self):
        created = make_submission(vibe_score=4, comment="Bonne journée")
        repo = make_repo(created=created)
        db = AsyncMock()

        result = await _service(repo).submit_vibe(db, TEAM_ID, self.payload)

        assert result is created
        repo.create_submission.assert_awaited_once_with(
            db,
            team_id=TEAM_ID,
            participant_id="device-1",
            vibe_score=4,
            comment="Bonne journée",
        )

    async def test_bornes_du_jour_dans_le_fuseau_equipe(self):
        """00:30 à Amsterdam (4 mars) → jour local [3 mars 23:00 UTC, 4 mars 23:00 UTC[."""
        repo = make_repo(team=make_team(timezone="Europe/Amsterdam"))
        moment = datetime(2025, 3, 3, 23, 30, tzinfo=timezone.utc)
        db = AsyncMock()

        await _service(repo, moment).submit_vibe(db, TEAM_ID, self.payload)

        _, team_id, participant_id, start, end = repo.has_submission_between.await_args.args
        assert (team_id, participant_id) == (TEAM_ID, "device-1")
        assert start == datetime(2025, 3, 3, 23, 0, tzinfo=timezone.utc)
        assert end == datetime(2025, 3, 4, 23, 0, tzinfo=timezone.utc)

    async def test_log_info_apres_enregistrement(self, caplog):
        caplog.set_level(logging.INFO, logger="teampulse.modules.metrics.service")
        await _service(make_repo()).submit_vibe(AsyncMock(), TEAM_ID, self.payload)
        assert "Vibe check-in enregistré" in caplog.text

    async def test_fuseau_equipe_invalide(self):
        repo = make_repo(team=make_team(timezone="Mars/Olympus"))
        with pytest.raises(SubmissionValidationError):
            await _service(repo).submit_vibe(AsyncMock(), TEAM_ID, self.payload)
        repo.has_submission_between.assert_not_awaited()
