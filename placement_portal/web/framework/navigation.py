from __future__ import annotations

from typing import Optional

import streamlit as st

from placement_portal.app.routing import LANDING_PATH, LOGIN_PATH, REGISTER_PATH, ROUTES, nav_routes
from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import AuthService
from placement_portal.web.framework.context import dispose_portal
from placement_portal.web.framework.state import enter_view

_ICONS = {
    "dashboard": "📊",
    "profile": "👤",
    "jobs": "💼",
    "applications": "📄",
    "post-job": "➕",
    "candidates": "👥",
    "users": "🛡️",
    "stats": "📈",
}


def _icon(path: str) -> str:
    return _ICONS.get(path.rsplit("/", 1)[-1], "•")


def render_sidebar(portal: PortalContext, active_path: Optional[str] = None) -> None:
    identity = portal.session.identity
    with st.sidebar:
        st.markdown("### 🎓 Placement Portal")
        if identity is None:
            for path in (LANDING_PATH, LOGIN_PATH, REGISTER_PATH):
                route = ROUTES[path]
                st.page_link(route.script, label=route.title)
            return

        c1, c2 = st.columns([1, 3])
        with c1:
            if identity.avatar_url:
                st.image(identity.avatar_url, width=40)
        with c2:
            st.markdown(f"**{identity.display_name}**")
            st.caption(f"{identity.email} · {identity.role.label}")

        for route in nav_routes(identity.role):
            st.page_link(route.script, label=route.title, icon=_icon(route.path),
                         disabled=route.path == active_path)

        st.divider()
        if st.button("Logout", use_container_width=True, key="sidebar_logout"):
            AuthService.logout(portal.session, portal.gateway())
            dispose_portal()
            enter_view(LANDING_PATH)
            st.switch_page(ROUTES[LANDING_PATH].script)
