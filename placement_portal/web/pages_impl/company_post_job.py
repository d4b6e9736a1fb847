from __future__ import annotations

import streamlit as st

from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import JobManagementService
from placement_portal.web.components.notifications import render_notifications
from placement_portal.web.framework.page import go


def render(portal: PortalContext) -> None:
    st.title("➕ Post a New Job")
    st.caption("Fill in the details below to publish an opening to students")

    with st.form("post_job_form"):
        title = st.text_input("Job Title *", placeholder="e.g. Software Engineer")
        c1, c2 = st.columns(2)
        location = c1.text_input("Location", placeholder="e.g. Bangalore / Remote")
        salary = c2.text_input("Salary", placeholder="e.g. 12 LPA")
        description = st.text_area("Description *", height=160)
        requirements = st.text_area("Requirements / Skills *", placeholder="Comma separated, e.g. Python, SQL")
        submitted = st.form_submit_button("Post Job", type="primary")

    if submitted:
        with st.spinner("Posting..."):
            result = portal.call(
                lambda api: JobManagementService(api, portal.notifier).post(
                    title, description, requirements, location=location, salary=salary
                )
            )
        if result.success:
            go("/company/jobs")
        render_notifications(portal.notifier)
