from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from placement_portal.adapters.export.csv_report import REPORT_HEADERS, build_placement_csv, format_report_date, report_filename
from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import ReportService
from placement_portal.domain.models import ApplicationStatus
from placement_portal.domain.rules import STATUS_COLORS, filter_report
from placement_portal.web.framework.state import view_state


def render(portal: PortalContext) -> None:
    st.title("📊 Placement Statistics")
    st.caption("Application outcomes across all students and companies")

    state = view_state("admin_report", lambda: portal.call(lambda api: ReportService(api, portal.notifier).load_report()))
    if state.error:
        st.error(state.error)
    if not state.rows:
        st.info("No placement records yet")
        return

    c1, c2, c3 = st.columns(3)
    c1.metric("Records", len(state.rows))
    c2.metric("Placed", len(state.placed()))
    c3.metric("Companies", len({r.company_name for r in state.rows}))

    df_status = pd.DataFrame([r.status for r in state.rows], columns=["Status"]).value_counts().reset_index()
    df_status.columns = ["Status", "Count"]
    order = [s.value for s in ApplicationStatus]
    chart = alt.Chart(df_status).mark_bar().encode(
        x=alt.X("Status:N", sort=order),
        y="Count:Q",
        color=alt.Color(
            "Status:N",
            scale=alt.Scale(domain=order, range=[STATUS_COLORS[s] for s in ApplicationStatus]),
            legend=None,
        ),
        tooltip=["Status:N", "Count:Q"],
    ).properties(height=240)
    st.altair_chart(chart, use_container_width=True)

    search = st.text_input("Search", placeholder="Search by student, company or job...", label_visibility="collapsed")
    rows = filter_report(state.rows, search)
    df = pd.DataFrame(
        [
            [r.student_name, r.student_email, r.company_name, r.job_title, r.status, format_report_date(r.applied_at)]
            for r in rows
        ],
        columns=list(REPORT_HEADERS),
    )
    st.dataframe(df, use_container_width=True, hide_index=True)

    st.download_button(
        "Download CSV",
        data=build_placement_csv(rows),
        file_name=report_filename(),
        mime="text/csv",
        disabled=not rows,
    )
