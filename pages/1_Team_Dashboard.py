# pages/1_🏆_Team_Dashboard.py
import streamlit as st

from predictor import ledger
from predictor.errors import StoreUnavailable, TeamNotFound
from predictor.log import setup_logging
from predictor.scoring import team_standing

st.set_page_config(page_title="Team Dashboard", page_icon="🏆", layout="wide")

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}

def main():
    setup_logging()
    st.title("🏆 Team Dashboard")

    if "team_name" not in st.session_state:
        st.warning("Please enter your team name on the Home page first.")
        st.stop()

    team_name = st.session_state["team_name"]
    try:
        standing = team_standing(team_name)
        is_open = ledger.is_round_open()
    except TeamNotFound:
        st.error("Team not found. Please contact the administrator.")
        del st.session_state["team_name"]
        st.stop()
    except StoreUnavailable:
        st.error("Unable to load your team information. Please try again.")
        st.stop()

    st.subheader(team_name)
    c1, c2 = st.columns(2)
    c1.metric("Score", standing.score)
    c2.metric("Position", f"{MEDALS.get(standing.position, '')} {standing.position}".strip())

    st.divider()
    if is_open:
        st.success("Predictions are open for this over.")
        st.page_link("pages/2_Make_Prediction.py", label="Make your prediction", icon="🏏")
    else:
        st.info("Predictions are closed. Wait for the admin to open the next over.")
    st.caption("Check back here to see your updated score and position.")

    if st.button("🔄 Refresh"):
        st.rerun()

if __name__ == "__main__":
    main()
