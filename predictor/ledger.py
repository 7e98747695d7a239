# predictor/ledger.py
"""
Prediction ledger: one pending (runs, wickets) guess per team, writable only
while the round is open.

Round lifecycle: CLOSED --open_round()--> OPEN --close_and_clear()--> CLOSED.
close_round() only flips the status; settle_round uses it to freeze the ledger while scoring.
"""

from typing import Optional, Tuple

from loguru import logger

from config import MAX_RUNS, MAX_WICKETS
from predictor import db_pg as db
from predictor.errors import InvalidRange, RoundClosed, TeamNotFound
from predictor.events import EventKind, publish
from predictor.models import Prediction


def _whole_number(field: str, value, high: int) -> int:
    # Floats are rejected outright, even integral ones like 5.0
    if isinstance(value, bool):
        raise InvalidRange(field, value, 0, high)
    if isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())
    elif isinstance(value, int):
        number = value
    else:
        raise InvalidRange(field, value, 0, high)
    if not 0 <= number <= high:
        raise InvalidRange(field, value, 0, high)
    return number


def validate_runs_wickets(runs, wickets) -> Tuple[int, int]:
    """Return (runs, wickets) as ints or raise InvalidRange."""
    return _whole_number("runs", runs, MAX_RUNS), _whole_number("wickets", wickets, MAX_WICKETS)


def is_round_open() -> bool:
    return db.get_round_open()


def open_round() -> None:
    if db.set_round_open(True):
        logger.info("Predictions are now open")
        publish(EventKind.ROUND_OPENED)


def close_round() -> None:
    """Stop accepting predictions without clearing them (used while an over is scored)."""
    if db.set_round_open(False):
        logger.info("Predictions are now closed")
        publish(EventKind.ROUND_CLOSED, cleared=0)


def close_and_clear() -> int:
    """Close the round and zero every team's prediction. Safe to call repeatedly."""
    was_open, cleared = db.close_round_and_reset()
    logger.info(f"Predictions cleared ({cleared} prediction rows reset)")
    if was_open:
        publish(EventKind.ROUND_CLOSED, cleared=cleared)
    return cleared


def submit_prediction(team_name: str, runs, wickets) -> Prediction:
    """
    Record (or overwrite) a team's guess for the open round.

    Raises InvalidRange, RoundClosed or TeamNotFound; nothing is written in those cases.
    The round check happens in the same statement as the write.
    """
    team_name = (team_name or "").strip()
    runs, wickets = validate_runs_wickets(runs, wickets)

    if db.get_team(team_name) is None:
        logger.warning(f"Rejected prediction from unknown team {team_name!r}")
        raise TeamNotFound(team_name)

    if not db.upsert_prediction(team_name, runs, wickets):
        logger.warning(f"Rejected prediction from {team_name!r}: round is closed")
        raise RoundClosed(team_name)
    logger.info(f"Prediction saved for {team_name!r}: {runs} runs, {wickets} wickets")

    prediction = Prediction(team_name=team_name, runs=runs, wickets=wickets)
    publish(EventKind.PREDICTION_SUBMITTED, team_name=team_name)
    return prediction


def get_prediction(team_name: str) -> Optional[Prediction]:
    return db.get_prediction(team_name)
