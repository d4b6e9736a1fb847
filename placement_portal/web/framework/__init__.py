"""Frontend framework layer for the Streamlit UI.

This package centralizes:
- page initialization and the route guard prologue
- sidebar navigation per role
- per-session portal context and view-state helpers
"""
