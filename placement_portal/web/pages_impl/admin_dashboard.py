from __future__ import annotations

import streamlit as st

from placement_portal.app.routing import ROUTES
from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import ReportService
from placement_portal.web.framework.state import peek_view, set_view, view_state

_EXPORT_KEY = "admin_export"


def render(portal: PortalContext) -> None:
    st.title("🛡️ Admin Dashboard")
    st.caption("Platform overview and placement reporting")

    state = view_state("admin_stats", lambda: portal.call(lambda api: ReportService(api, portal.notifier).load_stats()))
    if state.error:
        st.error(state.error)
    stats = state.stats
    if stats is None:
        return

    st.markdown("### 📊 Key Metrics")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Students", stats.total_students)
    c2.metric("Total Companies", stats.total_companies)
    c3.metric("Active Jobs", stats.total_jobs)
    c4.metric("Applications", stats.total_applications)

    st.markdown("---")
    left, right = st.columns(2)
    with left:
        with st.container(border=True):
            st.subheader("🎯 Placement Rate")
            st.metric("Placed Students", stats.placed_students, help=f"out of {stats.total_students} students")
            st.progress(min(stats.placement_rate, 100) / 100, text=f"{stats.placement_rate}%")
    with right:
        with st.container(border=True):
            st.subheader("📈 Averages")
            st.metric("Applications per Student", stats.applications_per_student)
            st.metric("Jobs per Company", stats.jobs_per_company)

    st.markdown("---")
    st.subheader("📄 Placement Report")
    if st.button("Generate Report", type="primary"):
        with st.spinner("Generating..."):
            result = portal.call(lambda api: ReportService(api, portal.notifier).export_csv())
        set_view(_EXPORT_KEY, result.data if result.success else None)
        st.rerun()

    export = peek_view(_EXPORT_KEY)
    if export:
        st.download_button(
            f"Download {export['filename']} ({export['rows']} rows)",
            data=export["content"],
            file_name=export["filename"],
            mime="text/csv",
        )

    c1, c2 = st.columns(2)
    c1.page_link(ROUTES["/admin/users"].script, label="Manage users", icon="👥")
    c2.page_link(ROUTES["/admin/stats"].script, label="Detailed statistics", icon="📊")
