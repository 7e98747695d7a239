# pages/4_🛠️_Admin.py
import io
import csv
from collections import deque
from dataclasses import asdict

import streamlit as st
from loguru import logger

from config import LEADERBOARD_LIMIT, MAX_RUNS, MAX_WICKETS, admin_code
from predictor import db_pg as db
from predictor import ledger
from predictor.errors import InvalidRange, PredictionGameError, StoreUnavailable
from predictor.events import bus
from predictor.log import setup_logging
from predictor.scoring import leaderboard, make_outcome, round_stats, settle_round

st.set_page_config(page_title="Admin", page_icon="🛠️", layout="wide")

def require_admin():
    if st.session_state.get("is_admin"):
        return True
    with st.form("admin_login"):
        code = st.text_input("Enter Admin Code", type="password")
        submitted = st.form_submit_button("Unlock Admin")
        if submitted:
            # Prefer Streamlit Secrets or env var over config fallback
            expected = admin_code()
            if not expected:
                st.error("Admin code not configured. Set ENV var ADMIN_CODE or config.ADMIN_CODE.")
                return False
            if code == expected:
                st.session_state["is_admin"] = True
                logger.info("Admin unlocked")
                st.success("Admin unlocked.")
                return True
            else:
                logger.warning("Failed admin unlock attempt")
                st.error("Incorrect admin code.")
                return False
    return False

@st.cache_resource
def activity_feed():
    """Most recent game events, shared by every admin session in this process."""
    feed = deque(maxlen=20)
    bus.subscribe(feed.appendleft)
    return feed

def parse_csv(file, expected_cols):
    try:
        content = file.getvalue().decode("utf-8-sig")
    except UnicodeDecodeError:
        content = file.getvalue().decode("latin-1")
    reader = csv.DictReader(io.StringIO(content))
    missing = [c for c in expected_cols if c not in (reader.fieldnames or [])]
    if missing:
        st.error(f"CSV missing columns: {missing}. Found columns: {reader.fieldnames}")
        return None
    return [row for row in reader]

def stats_ui():
    # A failed refresh keeps the last numbers on screen
    try:
        st.session_state["stats"] = round_stats()
    except StoreUnavailable:
        logger.warning("Stats refresh failed; showing previous values")
    stats = st.session_state.get("stats", {"teams": 0, "predictions": 0, "is_open": False})

    c1, c2, c3 = st.columns(3)
    c1.metric("Teams", stats["teams"])
    c2.metric("Predictions this over", stats["predictions"])
    c3.metric("Status", "Open" if stats["is_open"] else "Closed")

def round_ui():
    st.subheader("Over Control")
    is_open = ledger.is_round_open()
    label = "⏸️ Close Predictions" if is_open else "▶️ Open Predictions"
    if st.button(label, type="primary"):
        try:
            if is_open:
                ledger.close_and_clear()
                st.toast("Predictions are now closed")
            else:
                ledger.open_round()
                st.toast("Predictions are now open")
        except StoreUnavailable:
            st.error("Failed to update prediction status")
        st.rerun()

def outcome_ui():
    st.subheader("Enter Actual Result")
    st.caption("Closes predictions, scores every submitted guess, then clears them for the next over.")
    with st.form("outcome"):
        c1, c2 = st.columns(2)
        with c1:
            runs = st.number_input(f"Actual runs (0-{MAX_RUNS})", min_value=0, max_value=MAX_RUNS, step=1)
        with c2:
            wickets = st.number_input(f"Actual wickets (0-{MAX_WICKETS})", min_value=0, max_value=MAX_WICKETS, step=1)
        submitted = st.form_submit_button("💾 Save Result", type="primary")

    if submitted:
        try:
            changes = settle_round(make_outcome(int(runs), int(wickets)))
        except InvalidRange as exc:
            st.error(str(exc))
            return
        except PredictionGameError as exc:
            st.error(f"Failed to submit results and update scores: {exc}")
            return
        st.success(f"Results saved and scores updated for {len(changes)} team(s).")
        if changes:
            import pandas as pd
            st.dataframe(pd.DataFrame([asdict(c) for c in changes]).drop(columns=["version"]),
                         use_container_width=True, hide_index=True)

def teams_ui():
    st.subheader("Upload Teams")
    st.caption("CSV columns required: team_name. Existing teams keep their score.")
    f = st.file_uploader("teams.csv", type=["csv"], key="teams_upload")
    if f and st.button("Import Teams", type="primary"):
        rows = parse_csv(f, ["team_name"])
        if rows is not None:
            payload = [{"team_name": r["team_name"].strip()} for r in rows if (r["team_name"] or "").strip()]
            db.insert_teams(payload)
            logger.info(f"Imported {len(payload)} teams")
            st.success(f"Imported {len(payload)} teams.")

    with st.form("add_team"):
        name = st.text_input("Or add a single team").strip()
        if st.form_submit_button("Add Team") and name:
            db.insert_teams([{"team_name": name}])
            st.success(f"Added {name}.")

def leaderboard_ui():
    st.subheader(f"Leaderboard (top {LEADERBOARD_LIMIT})")
    lb = leaderboard()
    if lb.empty:
        st.info("No teams yet.")
        return
    st.dataframe(lb, use_container_width=True, hide_index=True)

def activity_ui():
    st.subheader("Recent Activity")
    feed = list(activity_feed())
    if not feed:
        st.write("_Nothing yet._")
        return
    for event in feed:
        team = event.payload.get("team_name")
        st.write(f"`{event.at:%H:%M:%S}` {event.kind.value.replace('_', ' ')}" + (f" · {team}" if team else ""))

def main():
    setup_logging()
    st.title("🛠️ Admin")

    if not require_admin():
        st.stop()

    activity_feed()
    stats_ui()
    st.divider()

    tabs = st.tabs(["Over", "Leaderboard", "Teams", "Activity"])
    with tabs[0]:
        round_ui()
        st.divider()
        outcome_ui()
    with tabs[1]:
        leaderboard_ui()
    with tabs[2]:
        teams_ui()
    with tabs[3]:
        activity_ui()

    if st.button("Logout"):
        st.session_state.pop("is_admin", None)
        st.rerun()

if __name__ == "__main__":
    main()
