from __future__ import annotations

import streamlit as st

from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import JobBoardService
from placement_portal.domain.models import JobPosting
from placement_portal.web.components.badges import job_badge
from placement_portal.web.framework.state import view_state
from placement_portal.web.utils import plural, time_ago


def _job_card(portal: PortalContext, state, job: JobPosting) -> None:
    with st.container(border=True):
        info, action = st.columns([4, 1])
        with info:
            st.markdown(f"#### {job.title}")
            st.markdown(f"🏢 **{job.company_name or 'Company'}** {job_badge(job.status)}")
            meta = [f"📍 {job.location or 'Remote'}"]
            if job.salary:
                meta.append(f"💰 {job.salary}")
            meta.append(f"🕒 {time_ago(job.created_at)}")
            st.caption(" · ".join(meta))
            st.write(job.description)
            if job.skills:
                st.markdown(" ".join(f"`{s}`" for s in job.skills[:3]))
        with action:
            clicked = st.button(
                state.button_label(job.id),
                key=f"apply_{job.id}",
                disabled=state.is_apply_disabled(job.id),
                type="primary",
                use_container_width=True,
            )
    if clicked:
        with st.spinner("Applying..."):
            portal.call(lambda api: JobBoardService(api, portal.notifier).apply(state, job.id))
        st.rerun()


def render(portal: PortalContext) -> None:
    st.title("💼 Browse Jobs")
    st.caption("Discover opportunities that match your skills and interests")

    state = view_state("student_jobs", lambda: portal.call(lambda api: JobBoardService(api, portal.notifier).load()))
    if state.error:
        st.error(state.error)

    search = st.text_input(
        "Search", placeholder="Search for jobs, companies, or keywords...", label_visibility="collapsed"
    )
    jobs = state.visible_jobs(search)
    st.caption(f"{plural(len(jobs), 'job')} available")

    if not jobs:
        st.info("Try adjusting your search" if search else "No jobs have been posted yet")
        return
    for job in jobs:
        _job_card(portal, state, job)
