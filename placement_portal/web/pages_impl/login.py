from __future__ import annotations

import streamlit as st

from placement_portal.app.routing import REGISTER_PATH, ROUTES
from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import AuthService
from placement_portal.domain.models import Role
from placement_portal.web.components.notifications import render_notifications
from placement_portal.web.framework.page import go
from placement_portal.web.framework.state import ensure_defaults


def _prefill_demo() -> None:
    role = st.session_state.get("login_role", Role.STUDENT.value)
    st.session_state["login_email"] = f"demo@{role}.com"
    st.session_state["login_password"] = "password"


def render(portal: PortalContext) -> None:
    if portal.session.is_authenticated:
        go(portal.session.role.dashboard_path)

    st.title("Welcome Back")
    st.caption("Sign in to access your portal")

    ensure_defaults({
        "login_role": Role.STUDENT.value,
        "login_email": "demo@student.com",
        "login_password": "password",
    })
    st.radio(
        "Role",
        [r.value for r in Role],
        format_func=lambda v: Role(v).label,
        horizontal=True,
        key="login_role",
        on_change=_prefill_demo,
    )

    with st.form("login_form"):
        email = st.text_input("Email address", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        role_label = Role(st.session_state["login_role"]).label
        submitted = st.form_submit_button(f"Sign in as {role_label}", type="primary", use_container_width=True)

    if submitted:
        with st.spinner("Signing in..."):
            result = portal.call(lambda api: AuthService(api, portal.notifier, portal.session).login(email, password))
        if result.success:
            go(result.data["next_path"])
        render_notifications(portal.notifier)

    st.page_link(ROUTES[REGISTER_PATH].script, label="Don't have an account? Register")
