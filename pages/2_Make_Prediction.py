# pages/2_🏏_Make_Prediction.py
import streamlit as st

from config import MAX_RUNS, MAX_WICKETS
from predictor import ledger
from predictor.errors import InvalidRange, RoundClosed, StoreUnavailable, TeamNotFound
from predictor.log import setup_logging

st.set_page_config(page_title="Make Prediction", page_icon="🏏", layout="wide")

def prediction_form(team_name: str):
    st.write("Enter your runs and wickets for this over and click **Submit**. "
             "You can resubmit while the over is open; your last submission counts.")

    current = ledger.get_prediction(team_name)
    if current and current.runs:
        st.info(f"Current prediction: **{current.runs}** runs, **{current.wickets}** wickets")

    with st.form("prediction"):
        c1, c2 = st.columns(2)
        with c1:
            runs = st.number_input(f"Runs (0-{MAX_RUNS})", min_value=0, max_value=MAX_RUNS, step=1, value=0)
        with c2:
            wickets = st.number_input(f"Wickets (0-{MAX_WICKETS})", min_value=0, max_value=MAX_WICKETS, step=1, value=0)
        submitted = st.form_submit_button("🏏 Submit Prediction", type="primary", use_container_width=True)

    if submitted:
        try:
            ledger.submit_prediction(team_name, int(runs), int(wickets))
        except RoundClosed:
            st.error("Predictions were just closed for this over.")
            st.stop()
        except (InvalidRange, TeamNotFound) as exc:
            st.error(str(exc))
            return
        except StoreUnavailable:
            st.error("Failed to submit prediction. Please try again.")
            return
        st.success("Prediction submitted successfully!")

def main():
    setup_logging()
    st.title("🏏 Make Prediction")

    if "team_name" not in st.session_state:
        st.warning("Please enter your team name on the Home page first.")
        st.stop()

    if not ledger.is_round_open():
        st.error("Predictions are closed. Check your dashboard for the latest scores.")
        st.page_link("pages/1_Team_Dashboard.py", label="Back to dashboard", icon="🏆")
        st.stop()

    prediction_form(st.session_state["team_name"])

if __name__ == "__main__":
    main()
