from __future__ import annotations

import streamlit as st

from placement_portal.app.routing import ROUTES
from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import DashboardService
from placement_portal.web.components.badges import application_badge
from placement_portal.web.framework.state import view_state
from placement_portal.web.utils import time_ago


def render(portal: PortalContext) -> None:
    st.title(f"🏢 {portal.session.identity.display_name}")
    st.caption("Overview of your openings and candidates")

    stats = view_state("company_stats", lambda: portal.call(lambda api: DashboardService(api, portal.notifier).company()))

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Active Jobs", stats.open_jobs, help=f"{stats.total_jobs} posted in total")
    c2.metric("Total Applicants", stats.total_apps)
    c3.metric("Shortlisted", stats.shortlisted_count)
    c4.metric("Hired", stats.hired_count)

    st.markdown("---")
    left, right = st.columns([2, 1])
    with left:
        st.subheader("Recent Applicants")
        if not stats.recent_applications:
            st.info("No applications received yet.")
        for app in stats.recent_applications:
            with st.container(border=True):
                a, b = st.columns([4, 1])
                a.markdown(f"**{app.student_name}**  \nApplied for {app.job_title} · {time_ago(app.applied_at)}")
                b.markdown(application_badge(app.status))

    with right:
        st.subheader("Quick Actions")
        st.page_link(ROUTES["/company/post-job"].script, label="Post a new job", icon="➕")
        st.page_link(ROUTES["/company/jobs"].script, label="Manage jobs", icon="📂")
        st.page_link(ROUTES["/company/candidates"].script, label="Review candidates", icon="🧑‍💼")
