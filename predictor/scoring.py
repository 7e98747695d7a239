# predictor/scoring.py
from typing import Dict, Iterable, List, Optional

import pandas as pd
from loguru import logger

from config import LEADERBOARD_LIMIT, POINTS
from predictor import db_pg as db
from predictor import ledger
from predictor.errors import ScoringFailed, StoreUnavailable, TeamNotFound
from predictor.events import EventKind, publish
from predictor.models import LeaderboardEntry, Outcome, Prediction, ScoreChange, Team

LEADERBOARD_COLUMNS = ["position", "team_name", "score"]


def make_outcome(actual_runs, actual_wickets) -> Outcome:
    """Validate admin input with the same range rules as team predictions."""
    runs, wickets = ledger.validate_runs_wickets(actual_runs, actual_wickets)
    return Outcome(actual_runs=runs, actual_wickets=wickets)


def is_active(prediction: Prediction) -> bool:
    # A team that never submitted reads back as 0 runs, same as a real 0-run guess.
    return prediction.runs != 0


def score_delta(prediction: Prediction, outcome: Outcome) -> int:
    """Points for one prediction: minus the run error, then the wicket bonus or penalty."""
    run_error = abs(outcome.actual_runs - prediction.runs)
    delta = -run_error * POINTS["run_error_per_run"]
    if prediction.wickets == outcome.actual_wickets:
        delta += POINTS["wicket_hit"]
    else:
        delta += POINTS["wicket_miss"]
    return delta


def apply_delta(score: int, delta: int) -> int:
    """Scores never drop below zero."""
    return max(0, score + delta)


def compute_round(teams: Iterable[Team], predictions: Iterable[Prediction], outcome: Outcome) -> List[ScoreChange]:
    """Score changes for every active prediction whose team exists. Other teams are untouched."""
    by_name: Dict[str, Team] = {t.team_name: t for t in teams}
    changes = []
    for p in predictions:
        team = by_name.get(p.team_name)
        if team is None or not is_active(p):
            continue
        delta = score_delta(p, outcome)
        changes.append(ScoreChange(
            team_name=team.team_name,
            old_score=team.score,
            delta=delta,
            new_score=apply_delta(team.score, delta),
            version=team.version,
        ))
    return changes


def score_round(outcome: Outcome) -> List[ScoreChange]:
    """
    Apply ``outcome`` to every active prediction and save the new scores.

    All scores are written in one transaction; if anything fails nothing is
    saved and ScoringFailed is raised. The round is left as it was; see
    settle_round for the admin action that also closes it.
    """
    outcome = make_outcome(outcome.actual_runs, outcome.actual_wickets)
    try:
        rows = db.list_active_predictions()
        teams = [Team.from_row(r) for r in rows]
        predictions = [Prediction.from_row(r) for r in rows]
        changes = compute_round(teams, predictions, outcome)
        db.apply_scores(changes)
    except StoreUnavailable as exc:
        raise ScoringFailed("Failed to submit results and update scores") from exc

    for c in changes:
        logger.debug(f"{c.team_name}: {c.old_score} {c.delta:+d} -> {c.new_score}")
    logger.info(
        f"Scored over {outcome.actual_runs}/{outcome.actual_wickets} for {len(changes)} team(s)"
    )
    publish(EventKind.SCORES_UPDATED, outcome=outcome, changes=changes)
    return changes


def settle_round(outcome: Outcome) -> List[ScoreChange]:
    """
    Admin action: close predictions, score the over, then clear them.

    The round is closed before predictions are read, so every guess that was
    accepted is scored. If scoring fails the predictions stay in place and the
    admin can settle again.
    """
    outcome = make_outcome(outcome.actual_runs, outcome.actual_wickets)
    ledger.close_round()
    changes = score_round(outcome)
    ledger.close_and_clear()
    return changes


def rank_teams(teams: Iterable[Team]) -> pd.DataFrame:
    """
    Leaderboard frame ordered by score, highest first.

    Ties share a position and the next distinct score takes its row number,
    e.g. scores [50, 50, 40] -> positions [1, 1, 3]. Tied teams keep the order
    they were given in.
    """
    lb = pd.DataFrame([{"team_name": t.team_name, "score": t.score} for t in teams],
                      columns=["team_name", "score"])
    if lb.empty:
        return pd.DataFrame(columns=LEADERBOARD_COLUMNS)

    lb = lb.sort_values("score", ascending=False, kind="stable").reset_index(drop=True)
    lb["position"] = lb["score"].rank(method="min", ascending=False).astype(int)
    return lb[LEADERBOARD_COLUMNS]


def leaderboard_entries(lb: pd.DataFrame) -> List[LeaderboardEntry]:
    return [
        LeaderboardEntry(position=int(r.position), team_name=r.team_name, score=int(r.score))
        for r in lb.itertuples(index=False)
    ]


def leaderboard(limit: Optional[int] = LEADERBOARD_LIMIT) -> pd.DataFrame:
    """Top ``limit`` teams (all teams when None)."""
    return rank_teams(db.list_teams(limit=limit))


def team_standing(team_name: str) -> LeaderboardEntry:
    """A team's score and position, looked up over the full uncapped ranking."""
    team_name = (team_name or "").strip()
    lb = rank_teams(db.list_teams())
    row = lb[lb["team_name"] == team_name]
    if row.empty:
        raise TeamNotFound(team_name)
    return leaderboard_entries(row)[0]


def round_stats() -> Dict[str, object]:
    """Numbers shown on the admin dashboard."""
    return {
        "teams": db.count_teams(),
        "predictions": db.count_active_predictions(),
        "is_open": db.get_round_open(),
    }
