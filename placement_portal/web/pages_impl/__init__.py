"""Actual page implementations (render functions) for Streamlit pages.

`pages/*.py` should stay as thin wrappers that:
- call guard_page(...) with the route path
- call the corresponding render(portal) function here
"""
