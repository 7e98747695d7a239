# predictor/models.py
"""Plain records passed between the store, the ledger and the scoring engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Team:
    team_name: str
    score: int = 0
    version: int = 0

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Team":
        return cls(
            team_name=row["team_name"],
            score=int(row.get("score") or 0),
            version=int(row.get("version") or 0),
        )


@dataclass(frozen=True)
class Prediction:
    team_name: str
    runs: int = 0
    wickets: int = 0

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Prediction":
        return cls(
            team_name=row["team_name"],
            runs=int(row.get("runs") or 0),
            wickets=int(row.get("wickets") or 0),
        )


@dataclass(frozen=True)
class Outcome:
    actual_runs: int
    actual_wickets: int


@dataclass(frozen=True)
class ScoreChange:
    team_name: str
    old_score: int
    delta: int
    new_score: int
    version: int = 0


@dataclass(frozen=True)
class LeaderboardEntry:
    position: int
    team_name: str
    score: int
