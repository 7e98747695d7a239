# app.py
import streamlit as st
from loguru import logger

from predictor import db_pg as db
from predictor.errors import StoreUnavailable
from predictor.log import setup_logging
from config import APP_TITLE

st.set_page_config(page_title=APP_TITLE, page_icon="🏏", layout="wide")

def team_entry():
    st.markdown(f"### Welcome to **{APP_TITLE}**")
    with st.form("team_entry"):
        team_name = st.text_input("Team Name").strip()
        submitted = st.form_submit_button("Enter")
        if submitted:
            if not team_name:
                st.error("Please enter your team name.")
                return
            try:
                team = db.get_team(team_name)
            except StoreUnavailable:
                st.error("Unable to verify team. Please try again.")
                return
            if team is None:
                st.error("Team not found. Please contact the administrator.")
                return
            st.session_state["team_name"] = team.team_name
            logger.info(f"Team {team.team_name!r} entered the game")
            st.success("Welcome!")
            st.rerun()

def main():
    setup_logging()
    db.init_db()

    st.title(APP_TITLE)
    st.caption("Predict the runs and wickets of each over · Climb the leaderboard")

    # Simple session-based team entry
    if "team_name" not in st.session_state:
        team_entry()
    else:
        st.success(f"Playing as **{st.session_state['team_name']}**")
        st.markdown("Use the left sidebar to open your dashboard or make a prediction.")
        if st.button("Switch team"):
            del st.session_state["team_name"]
            st.rerun()

    st.divider()
    st.subheader("How scoring works")
    st.write(
        "- Each run your guess is away from the actual total costs 1 point.\n"
        "- Guessing the exact number of wickets earns 10 points; a wrong wicket guess costs 5.\n"
        "- Scores never drop below zero. Teams with equal scores share a position.\n"
        "- Predictions can only be made while the admin has the over open."
    )

if __name__ == "__main__":
    main()
