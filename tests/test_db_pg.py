import pytest

from predictor import db_pg as db
from predictor.errors import ScoringFailed, StoreUnavailable, TeamNotFound
from predictor.models import Prediction, ScoreChange, Team


def test_init_db_is_repeatable(store):
    store.set_round_open(True)
    store.init_db()
    assert store.get_round_open() is True


def test_insert_teams_keeps_existing_scores(teams):
    teams.update_team_score("Falcons", 30)
    teams.insert_teams([{"team_name": "Falcons"}, {"team_name": " Rockets "}, {"team_name": ""}])

    assert teams.get_team("Falcons").score == 30
    assert teams.get_team("Rockets") == Team("Rockets", score=0, version=0)
    assert teams.count_teams() == 4


def test_list_teams_orders_by_score(teams):
    teams.update_team_score("Titans", 9)
    teams.update_team_score("Strikers", 4)

    names = [t.team_name for t in teams.list_teams()]
    assert names == ["Titans", "Strikers", "Falcons"]
    assert len(teams.list_teams(limit=2)) == 2


def test_update_team_score_floors_and_bumps_version(teams):
    teams.update_team_score("Falcons", -7)
    team = teams.get_team("Falcons")
    assert team.score == 0
    assert team.version == 1


def test_update_unknown_team(store):
    with pytest.raises(TeamNotFound):
        store.update_team_score("Nobody", 5)


def test_upsert_and_reset_predictions(teams):
    teams.set_round_open(True)
    teams.upsert_prediction("Falcons", 10, 1)
    teams.upsert_prediction("Falcons", 12, 2)
    teams.upsert_prediction("Titans", 3, 0)

    assert teams.get_prediction("Falcons") == Prediction("Falcons", 12, 2)
    assert teams.count_active_predictions() == 2

    assert teams.reset_all_predictions() == 2
    assert teams.get_prediction("Titans") == Prediction("Titans", 0, 0)
    assert teams.list_active_predictions() == []


def test_list_active_predictions_joins_team_score(teams):
    teams.set_round_open(True)
    teams.update_team_score("Titans", 15)
    teams.upsert_prediction("Titans", 7, 1)
    teams.upsert_prediction("Falcons", 0, 3)

    assert teams.list_active_predictions() == [
        {"team_name": "Titans", "runs": 7, "wickets": 1, "score": 15, "version": 1}
    ]


def test_apply_scores_checks_versions(teams):
    ok = ScoreChange("Falcons", old_score=0, delta=4, new_score=4, version=0)
    stale = ScoreChange("Titans", old_score=0, delta=4, new_score=4, version=3)

    with pytest.raises(ScoringFailed):
        teams.apply_scores([ok, stale])
    assert teams.get_team("Falcons").score == 0

    teams.apply_scores([ok])
    assert teams.get_team("Falcons") == Team("Falcons", score=4, version=1)


def test_close_round_and_reset(teams):
    teams.set_round_open(True)
    teams.upsert_prediction("Falcons", 10, 1)

    assert teams.close_round_and_reset() == (True, 1)
    assert teams.close_round_and_reset() == (False, 1)
    assert teams.get_round_open() is False
    assert teams.get_prediction("Falcons") == Prediction("Falcons", 0, 0)


def test_upsert_prediction_is_refused_while_closed(teams):
    assert teams.upsert_prediction("Falcons", 10, 1) is False
    assert teams.get_prediction("Falcons") is None

    teams.set_round_open(True)
    teams.upsert_prediction("Falcons", 10, 1)
    teams.set_round_open(False)

    assert teams.upsert_prediction("Falcons", 20, 3) is False
    assert teams.get_prediction("Falcons") == Prediction("Falcons", 10, 1)


def test_set_round_open_reports_changes(store):
    assert store.set_round_open(False) is False
    assert store.set_round_open(True) is True
    assert store.set_round_open(True) is False
    assert store.get_round_open() is True


def test_database_errors_become_store_unavailable(store):
    with store.get_engine().begin() as conn:
        conn.exec_driver_sql("DROP TABLE predictions")

    with pytest.raises(StoreUnavailable):
        store.get_prediction("Falcons")


def test_get_engine_without_url(monkeypatch):
    monkeypatch.setattr(db, "_engine", None)
    monkeypatch.delenv("DB_URL", raising=False)
    monkeypatch.setattr(db, "_db_url_from_environment", lambda: None)

    with pytest.raises(RuntimeError):
        db.get_engine()


def test_engine_options_for_postgres_carry_timeouts():
    options = db._engine_options("postgresql://u:p@localhost/game")
    assert options["pool_pre_ping"] is True
    assert "connect_timeout" in options["connect_args"]
    assert db._engine_options("sqlite:///game.db") == {"connect_args": {"timeout": db.STORE_TIMEOUT_SECONDS}}
