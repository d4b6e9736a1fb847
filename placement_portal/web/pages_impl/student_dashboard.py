from __future__ import annotations

import streamlit as st

from placement_portal.app.routing import ROUTES
from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import DashboardService
from placement_portal.web.components.badges import application_badge
from placement_portal.web.framework.state import view_state
from placement_portal.web.utils import format_date


def render(portal: PortalContext) -> None:
    identity = portal.session.identity
    st.title(f"👋 Welcome back, {identity.display_name}")
    st.caption("Here's what's happening with your job applications.")

    stats = view_state("student_stats", lambda: portal.call(lambda api: DashboardService(api, portal.notifier).student()))

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Applications", stats.total_applied)
    c2.metric("Shortlisted", stats.shortlisted_count)
    c3.metric("Hired", stats.hired_count)
    c4.metric("Rejected", stats.rejected_count)

    st.markdown("---")
    left, right = st.columns([2, 1])
    with left:
        st.subheader("Recent Applications")
        if not stats.recent_applications:
            st.info("No applications yet. Start applying to jobs!")
        for app in stats.recent_applications:
            with st.container(border=True):
                a, b = st.columns([4, 1])
                a.markdown(f"**{app.job_title}**  \n{app.company_name} · {format_date(app.applied_at)}")
                b.markdown(application_badge(app.status))

    with right:
        st.subheader("Next Steps")
        st.page_link(ROUTES["/student/profile"].script, label="Complete your profile", icon="👤")
        st.page_link(ROUTES["/student/jobs"].script, label="Browse open jobs", icon="💼")
        st.page_link(ROUTES["/student/applications"].script, label="Track applications", icon="📋")
