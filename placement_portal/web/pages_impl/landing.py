from __future__ import annotations

import streamlit as st

from placement_portal.app.routing import LOGIN_PATH, REGISTER_PATH, ROUTES
from placement_portal.app.runtime import PortalContext


def render(portal: PortalContext) -> None:
    st.title("🎓 Campus Placement Portal")
    st.markdown("""
### Connecting students, companies and the placement cell

- **Students**: build a profile, upload a resume, browse open roles and track every application.
- **Companies**: post openings, review candidates, shortlist and hire.
- **Admins**: approve companies, manage accounts and export placement reports.
""")

    identity = portal.session.identity
    st.markdown("---")
    if identity is not None:
        st.success(f"Signed in as **{identity.display_name}** ({identity.role.label})")
        st.page_link(ROUTES[identity.role.dashboard_path].script, label="Go to your dashboard", icon="➡️")
        return

    c1, c2 = st.columns(2)
    with c1:
        st.page_link(ROUTES[LOGIN_PATH].script, label="Sign in", icon="🔑")
    with c2:
        st.page_link(ROUTES[REGISTER_PATH].script, label="Create an account", icon="📝")
