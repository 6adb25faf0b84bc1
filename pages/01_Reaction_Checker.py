# File: pages/01_Reaction_Checker.py

import logging

import streamlit as st
from dotenv import load_dotenv

from agent.config import load_settings
from agent.reaction_agent import check_reaction
from components.result_card import render_history, render_result_card
from db.aliases import list_known_chemicals
from db.history import add_to_history

load_dotenv()
settings, settings_error = load_settings()
logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

st.set_page_config(page_title="Reaction Checker", page_icon="🧪")
if settings_error:
    st.error(f"Invalid configuration, using defaults: {settings_error}")

# --- State Management ---
if 'reaction_history' not in st.session_state:
    st.session_state.reaction_history = []
if 'current_result' not in st.session_state:
    st.session_state.current_result = None

st.title("Reaction Safety Checker")
st.markdown("""
    Enter two chemicals by name, formula or common alias. Known pairs are answered from the local
    rule table; anything else is sent to the analysis service.
""")

known = list_known_chemicals()

col1, col2 = st.columns(2)
with col1:
    chem1 = st.text_input("Component One", key="chem1_input", placeholder="e.g. Bleach")
with col2:
    chem2 = st.text_input("Component Two", key="chem2_input", placeholder="e.g. NH3")

with st.expander("Chemicals in the local knowledge base"):
    st.write(", ".join(known))

if st.button("Run Analysis", type="primary", use_container_width=True):
    if not chem1.strip() or not chem2.strip():
        st.error("Provide two chemicals.")
    else:
        with st.spinner("Evaluating..."):
            result = check_reaction(chem1, chem2)
        st.session_state.current_result = result
        st.session_state.reaction_history = add_to_history(
            st.session_state.reaction_history, result, limit=settings.history_limit
        )

if st.session_state.current_result is not None:
    render_result_card(st.session_state.current_result)

# the newest entry is the one on screen after a check; list the rest
previous = st.session_state.reaction_history[1:]
if previous:
    picked = render_history(previous)
    if picked is not None:
        st.session_state.current_result = previous[picked]
        st.rerun()

st.caption("For educational purposes only. Not for laboratory or industrial use.")
