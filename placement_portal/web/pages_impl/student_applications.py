from __future__ import annotations

import pandas as pd
import streamlit as st

from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import ApplicationTrackerService
from placement_portal.domain.models import ApplicationStatus
from placement_portal.web.framework.state import view_state
from placement_portal.web.utils import format_date


def render(portal: PortalContext) -> None:
    st.title("📋 My Applications")
    st.caption("Track the status of every job you applied for")

    state = view_state(
        "student_applications",
        lambda: portal.call(lambda api: ApplicationTrackerService(api, portal.notifier).load()),
    )
    if state.error:
        st.error(state.error)
        return
    if not state.applications:
        st.info("You haven't applied to any jobs yet.")
        return

    counts = {s: 0 for s in ApplicationStatus}
    for a in state.applications:
        counts[a.status] += 1
    cols = st.columns(len(counts))
    for col, (status, n) in zip(cols, counts.items()):
        col.metric(status.value.title(), n)

    df = pd.DataFrame([
        {
            "Job Title": a.job_title,
            "Company": a.company_name,
            "Applied On": format_date(a.applied_at),
            "Status": a.status.value,
        }
        for a in state.applications
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)
