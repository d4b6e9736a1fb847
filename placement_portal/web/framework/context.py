from __future__ import annotations

import streamlit as st

from placement_portal.app.runtime import PortalContext
from placement_portal.infra.config import get_settings

_PORTAL_KEY = "_portal"


def get_portal() -> PortalContext:
    """Per-browser-session context; a fresh session restores identity from local storage."""
    portal = st.session_state.get(_PORTAL_KEY)
    if portal is None or portal.session.disposed:
        portal = PortalContext.create(get_settings())
        st.session_state[_PORTAL_KEY] = portal
    return portal


def dispose_portal() -> None:
    portal = st.session_state.pop(_PORTAL_KEY, None)
    if portal is not None:
        portal.dispose()
