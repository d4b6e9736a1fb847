from __future__ import annotations

import streamlit as st

from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import UserAdminService
from placement_portal.domain.rules import ROLE_TABS, account_actions, filter_users
from placement_portal.web.components.badges import account_badge, role_badge
from placement_portal.web.components.confirm import confirm_action
from placement_portal.web.framework.state import view_state
from placement_portal.web.utils import format_date, plural


def render(portal: PortalContext) -> None:
    st.title("👥 User Management")
    st.caption("Approve companies, block or remove accounts")

    state = view_state("admin_users", lambda: portal.call(lambda api: UserAdminService(api, portal.notifier).load()))
    if state.error:
        st.error(state.error)

    c1, c2 = st.columns([2, 3])
    role_tab = c1.radio("Role", ROLE_TABS, horizontal=True, format_func=lambda t: t.title(), label_visibility="collapsed")
    search = c2.text_input("Search", placeholder="Search by name or email...", label_visibility="collapsed")

    users = filter_users(state.users, role_tab, search)
    st.caption(plural(len(users), "user"))
    if not users:
        st.info("No users found")
        return

    for user in users:
        with st.container(border=True):
            info, actions = st.columns([3, 2])
            with info:
                st.markdown(f"**{user.display_name}** {role_badge(user.role)} {account_badge(user.status)}")
                st.caption(f"{user.email} · Joined {format_date(user.created_at)}")
            with actions:
                row = st.columns(max(len(account_actions(user)), 1))
                for col, action in zip(row, account_actions(user)):
                    with col:
                        if action.target is None:
                            confirmed = confirm_action(
                                action.label, "Are you sure you want to delete this user?", key=f"user_{user.id}"
                            )
                            if confirmed:
                                portal.call(lambda api: UserAdminService(api, portal.notifier).delete(state, user.id))
                                st.rerun()
                        elif st.button(action.label, key=f"{action.key}_{user.id}", use_container_width=True):
                            portal.call(
                                lambda api: UserAdminService(api, portal.notifier).set_status(
                                    state, user.id, action.target
                                )
                            )
                            st.rerun()
