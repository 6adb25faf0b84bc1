# File: components/result_card.py

from typing import List

import streamlit as st

from db.schema import ReactionResult, SafetyLevel

# --- Safety level colours (Unknown stays neutral: a displayable state, not an error) ---
LEVEL_COLORS = {
    SafetyLevel.SAFE: "#22c55e",
    SafetyLevel.MILD: "#0ea5e9",
    SafetyLevel.EXOTHERMIC: "#f59e0b",
    SafetyLevel.DANGEROUS: "#ef4444",
    SafetyLevel.EXTREME: "#7c3aed",
    SafetyLevel.UNKNOWN: "#64748b",
}

LEVEL_ICONS = {
    SafetyLevel.SAFE: "✅",
    SafetyLevel.MILD: "🫧",
    SafetyLevel.EXOTHERMIC: "🔥",
    SafetyLevel.DANGEROUS: "☠️",
    SafetyLevel.EXTREME: "💥",
    SafetyLevel.UNKNOWN: "❔",
}


def level_badge(level: SafetyLevel) -> str:
    color = LEVEL_COLORS.get(level, LEVEL_COLORS[SafetyLevel.UNKNOWN])
    return (
        f"<span style='background:{color};color:white;padding:2px 10px;"
        f"border-radius:999px;font-weight:700;font-size:0.8em'>{level.value.upper()}</span>"
    )


def render_result_card(result: ReactionResult):
    with st.container(border=True):
        st.markdown(f"**{result.chemicals[0]}** + **{result.chemicals[1]}**")
        st.markdown(f"### {LEVEL_ICONS.get(result.type, '')} {result.title}")
        st.markdown(level_badge(result.type), unsafe_allow_html=True)
        st.write(result.explanation)

        if result.recommendations:
            st.markdown("**Recommendations**")
            st.markdown("\n".join(f"- {r}" for r in result.recommendations))

        st.caption(f"Checked {result.timestamp:%Y-%m-%d %H:%M:%S} UTC")


def render_history(history: List[ReactionResult]) -> int | None:
    """Previous results as a grid. Returns the index clicked, if any."""
    st.markdown("---")
    st.subheader("Log History")
    cols = st.columns(3)
    clicked = None
    for i, item in enumerate(history):
        with cols[i % 3]:
            label = f"{LEVEL_ICONS.get(item.type, '')} {item.chemicals[0]} + {item.chemicals[1]} · {item.type.value}"
            if st.button(label, key=f"history_{i}_{item.timestamp.timestamp()}", use_container_width=True):
                clicked = i
    return clicked
