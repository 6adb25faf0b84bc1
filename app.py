# app.py - Main Streamlit entrypoint, sets up UI and quick usage instructions.
# # Main entry for Streamlit. Loads env, shows intro + where the analysis service is expected.
import logging

import streamlit as st
from dotenv import load_dotenv

from agent.config import load_settings

load_dotenv()  # # loads .env so ANALYSIS_API_URL / LOG_LEVEL are available
settings, settings_error = load_settings()
logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

st.set_page_config(
    page_title="Reaction Safety Checker",
    page_icon="🧪",
    layout="wide",
)
if settings_error:
    st.error(f"Invalid configuration, using defaults: {settings_error}")

# # --- Header
st.title("Reaction Safety Checker")
st.caption("Local rule table + remote analysis service • Unknown means unknown, never safe")

# # --- Quick usage
st.markdown(
    f"""
**How to use**
- Open **Reaction Checker** (sidebar), type two chemicals and press **Run Analysis**.
- Names, formulas and common aliases all work (`bleach`, `NaOCl`, `Sodium Hypochlorite`).
- The last {settings.history_limit} checks stay in **Log History** for this session.

**Analysis service**

Pairs missing from the local table are sent to `{settings.analysis_api_url}`.
If it is down, the result is shown as **Analysis Failed**.
"""
)

st.caption("For educational purposes only. Not for laboratory or industrial use.")
