from __future__ import annotations

import streamlit as st

from placement_portal.app.routing import ROUTES
from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import JobManagementService
from placement_portal.domain.models import JobStatus
from placement_portal.web.components.badges import job_badge
from placement_portal.web.components.confirm import confirm_action
from placement_portal.web.framework.state import view_state
from placement_portal.web.utils import format_date


def render(portal: PortalContext) -> None:
    st.title("📂 Manage Jobs")
    st.page_link(ROUTES["/company/post-job"].script, label="Post New Job", icon="➕")

    state = view_state("company_jobs", lambda: portal.call(lambda api: JobManagementService(api, portal.notifier).load_mine()))
    if state.error:
        st.error(state.error)
    if not state.jobs:
        st.info("You haven't posted any jobs yet.")
        return

    for job in state.jobs:
        with st.container(border=True):
            info, toggle, delete = st.columns([4, 1, 1])
            with info:
                st.markdown(f"**{job.title}** {job_badge(job.status)}")
                st.caption(f"📍 {job.location or 'Remote'} · Posted {format_date(job.created_at)}")
                with st.expander("Details"):
                    st.write(job.description)
                    st.markdown(f"**Requirements:** {job.requirements}")
                    if job.salary:
                        st.markdown(f"**Salary:** {job.salary}")
            with toggle:
                label = "Close" if job.status is JobStatus.OPEN else "Reopen"
                if st.button(label, key=f"toggle_{job.id}", use_container_width=True):
                    portal.call(lambda api: JobManagementService(api, portal.notifier).toggle_status(state, job.id))
                    st.rerun()
            with delete:
                if confirm_action("Delete", "Are you sure you want to delete this job?", key=f"job_{job.id}"):
                    portal.call(lambda api: JobManagementService(api, portal.notifier).delete(state, job.id))
                    st.rerun()
