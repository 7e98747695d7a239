# pages/3_📊_Leaderboard.py
import streamlit as st

from predictor.log import setup_logging
from predictor.scoring import leaderboard

st.set_page_config(page_title="Leaderboard", page_icon="📊", layout="wide")

def main():
    setup_logging()
    st.title("📊 Leaderboard")

    lb = leaderboard()
    if lb.empty:
        st.info("No teams yet. Once the admin adds teams, scores will appear here.")
        return

    st.dataframe(
        lb,
        use_container_width=True,
        hide_index=True,
    )

    csv = lb.to_csv(index=False).encode("utf-8")
    st.download_button("Download Leaderboard (CSV)", csv, "leaderboard.csv", "text/csv")

if __name__ == "__main__":
    main()
