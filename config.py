# config.py
import os

# --- IMPORTANT: EDIT THESE FOR YOUR EVENT ---
ADMIN_CODE = None  # Prefer to set via environment/Secrets. Fallback can be set here (string).

# Scoring system (feel free to tune)
POINTS = {
    "run_error_per_run": 1,  # Deducted per run away from the actual total
    "wicket_hit": 10,        # Exact wicket count
    "wicket_miss": -5,       # Any other wicket count
}

# One over: 6 legal balls x 6 runs max
MAX_RUNS = 36
MAX_WICKETS = 4

# Admin leaderboard shows only the top N teams
LEADERBOARD_LIMIT = 50

# Store calls give up instead of hanging
STORE_TIMEOUT_SECONDS = int(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Optional: Name your competition
APP_TITLE = "Over Prediction Challenge"


def admin_code():
    """Return the configured admin code, environment first."""
    return os.getenv("ADMIN_CODE") or ADMIN_CODE
