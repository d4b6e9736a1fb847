from __future__ import annotations

import streamlit as st


def confirm_action(label: str, message: str, key: str, icon: str = "🗑️") -> bool:
    """Button that opens a popover and only returns True once confirmed."""
    with st.popover(label, icon=icon, use_container_width=True):
        st.write(message)
        return st.button("Confirm", key=f"confirm_{key}", type="primary")
