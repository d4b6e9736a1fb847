from __future__ import annotations

import streamlit as st

from placement_portal.app.routing import LOGIN_PATH, ROUTES
from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import AuthService, MIN_PASSWORD_LENGTH
from placement_portal.domain.models import Role
from placement_portal.web.components.notifications import render_notifications
from placement_portal.web.framework.page import go

# admin accounts are provisioned on the backend only
_REGISTRABLE = (Role.STUDENT, Role.COMPANY)


def render(portal: PortalContext) -> None:
    if portal.session.is_authenticated:
        go(portal.session.role.dashboard_path)

    st.title("Create Account")
    st.caption("Join our placement portal")

    role_value = st.radio(
        "I am a",
        [r.value for r in _REGISTRABLE],
        format_func=lambda v: Role(v).label,
        horizontal=True,
        key="register_role",
    )
    role = Role(role_value)

    with st.form("register_form"):
        name = st.text_input("Full Name" if role is Role.STUDENT else "Company Name")
        email = st.text_input("Email address")
        password = st.text_input(f"Password (min {MIN_PASSWORD_LENGTH} characters)", type="password")
        submitted = st.form_submit_button("Register", type="primary", use_container_width=True)

    if submitted:
        with st.spinner("Creating Account..."):
            result = portal.call(
                lambda api: AuthService(api, portal.notifier, portal.session).register(role, name, email, password)
            )
        if result.success:
            go(result.data["outcome"].next_path)
        render_notifications(portal.notifier)

    st.page_link(ROUTES[LOGIN_PATH].script, label="Already have an account? Sign in")
