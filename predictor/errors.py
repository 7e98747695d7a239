# predictor/errors.py
"""Error kinds raised by the prediction ledger, the scoring engine and the store."""


class PredictionGameError(Exception):
    """Base class for every error surfaced to teams or the admin."""


class RoundClosed(PredictionGameError):
    def __init__(self, team_name: str = ""):
        self.team_name = team_name
        super().__init__("Predictions are closed for this over.")


class InvalidRange(PredictionGameError, ValueError):
    def __init__(self, field: str, value, low: int, high: int):
        self.field = field
        self.value = value
        self.low = low
        self.high = high
        super().__init__(f"{field} must be a whole number between {low} and {high} (got {value!r}).")


class TeamNotFound(PredictionGameError, LookupError):
    def __init__(self, team_name: str):
        self.team_name = team_name
        super().__init__(f"Team not found: {team_name!r}. Please contact the administrator.")


class ScoringFailed(PredictionGameError):
    """Scoring a round failed; no score in the batch was written."""


class StoreUnavailable(PredictionGameError):
    """The backing database could not be reached or rejected the statement."""
