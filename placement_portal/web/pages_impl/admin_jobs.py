from __future__ import annotations

import streamlit as st

from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import JobManagementService
from placement_portal.web.components.badges import job_badge
from placement_portal.web.components.confirm import confirm_action
from placement_portal.web.framework.state import view_state
from placement_portal.web.utils import format_date, plural


def render(portal: PortalContext) -> None:
    st.title("🗂️ All Jobs")
    st.caption("Every opening posted on the platform")

    state = view_state("admin_jobs", lambda: portal.call(lambda api: JobManagementService(api, portal.notifier).load_all()))
    if state.error:
        st.error(state.error)
    if not state.jobs:
        st.info("No jobs found")
        return

    st.caption(plural(len(state.jobs), "job"))
    for job in state.jobs:
        with st.container(border=True):
            info, delete = st.columns([5, 1])
            with info:
                st.markdown(f"**{job.title}** {job_badge(job.status)}")
                st.caption(
                    f"🏢 {job.company_name or 'Unknown company'} · 📍 {job.location or 'Remote'}"
                    f" · Posted {format_date(job.created_at)}"
                )
                st.write(job.description)
            with delete:
                if confirm_action("Delete", "Are you sure you want to delete this job?", key=f"job_{job.id}"):
                    portal.call(lambda api: JobManagementService(api, portal.notifier).delete(state, job.id))
                    st.rerun()
