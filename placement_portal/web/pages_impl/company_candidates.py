from __future__ import annotations

import streamlit as st

from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import CandidateReviewService, JobManagementService
from placement_portal.domain.rules import company_actions
from placement_portal.web.components.badges import application_badge
from placement_portal.web.framework.state import reload_view, view_state
from placement_portal.web.utils import format_date

_ALL = ""


def _on_job_change() -> None:
    reload_view("company_candidates")


def render(portal: PortalContext) -> None:
    st.title("🧑‍💼 Candidates")
    st.caption("Review applicants and move them through your hiring pipeline")

    jobs = view_state("company_candidate_jobs", lambda: portal.call(lambda api: JobManagementService(api, portal.notifier).load_mine()))
    titles = {j.id: j.title for j in jobs.jobs}
    job_id = st.selectbox(
        "Job",
        [_ALL, *titles],
        format_func=lambda v: titles.get(v, "All jobs"),
        key="candidate_job_filter",
        on_change=_on_job_change,
    )

    state = view_state(
        "company_candidates",
        lambda: portal.call(lambda api: CandidateReviewService(api, portal.notifier).load(job_id or None)),
    )
    if state.error:
        st.error(state.error)
    if not state.applications:
        st.info("No candidates yet.")
        return

    gateway = portal.gateway()
    for app in state.applications:
        with st.container(border=True):
            info, status, actions = st.columns([3, 1, 2])
            with info:
                st.markdown(f"**{app.student_name}**  \n{app.student_email}")
                st.caption(f"Applied for {app.job_title} on {format_date(app.applied_at)}")
                if app.resume_url:
                    st.link_button("View Resume", gateway.media_url(app.resume_url))
            status.markdown(application_badge(app.status))
            with actions:
                for action in company_actions(app.status):
                    if st.button(
                        action.label,
                        key=f"{action.target.value}_{app.id}",
                        disabled=state.updating_id == app.id,
                        use_container_width=True,
                    ):
                        portal.call(
                            lambda api: CandidateReviewService(api, portal.notifier).update_status(
                                state, app.id, action.target
                            )
                        )
                        st.rerun()
