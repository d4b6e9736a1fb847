from __future__ import annotations

from dataclasses import replace

import streamlit as st

from placement_portal.app.runtime import PortalContext
from placement_portal.app.services import ProfileService
from placement_portal.domain.models import StudentProfile
from placement_portal.domain.rules import MAX_RESUME_BYTES
from placement_portal.web.framework.state import set_view, view_state

_STATE_KEY = "student_profile"


def _summary_card(portal: PortalContext, profile: StudentProfile) -> None:
    with st.container(border=True):
        st.markdown(f"## {profile.initials or '?'}")
        st.markdown(f"**{profile.full_name or 'Your Name'}**")
        st.caption(profile.email)
        if profile.phone:
            st.write(f"📞 {profile.phone}")
        if profile.location:
            st.write(f"📍 {profile.location}")

    with st.container(border=True):
        st.markdown("**Resume**")
        if profile.resume_url:
            st.link_button("View current resume", portal.gateway().media_url(profile.resume_url))
        else:
            st.caption("No resume uploaded")

        uploaded = st.file_uploader(
            f"Upload PDF (max {MAX_RESUME_BYTES // (1024 * 1024)}MB)", type=["pdf"], key="resume_upload"
        )
        if uploaded is not None and st.button("Upload Resume", type="primary"):
            content = uploaded.getvalue()
            with st.spinner("Uploading..."):
                _, state = portal.call(
                    lambda api: ProfileService(api, portal.notifier).upload_resume(uploaded.name, content, uploaded.type)
                )
            if state is not None:
                set_view(_STATE_KEY, state)
            st.rerun()


def render(portal: PortalContext) -> None:
    st.title("👤 My Profile")
    st.caption("Keep your details up to date so companies can find you")

    state = view_state(_STATE_KEY, lambda: portal.call(lambda api: ProfileService(api, portal.notifier).load()))
    if state.error and state.profile is None:
        st.error(state.error)
    profile = state.profile or StudentProfile(email=portal.session.identity.email)

    left, right = st.columns([1, 2])
    with left:
        _summary_card(portal, profile)

    with right:
        with st.form("profile_form"):
            c1, c2 = st.columns(2)
            first_name = c1.text_input("First Name", value=profile.first_name)
            last_name = c2.text_input("Last Name", value=profile.last_name)
            c3, c4 = st.columns(2)
            phone = c3.text_input("Phone", value=profile.phone)
            location = c4.text_input("Location", value=profile.location)
            c5, c6 = st.columns(2)
            university = c5.text_input("University", value=profile.university)
            graduation_year = c6.text_input("Graduation Year", value=profile.graduation_year)
            about = st.text_area("About", value=profile.about)
            skills_text = st.text_input("Skills (comma separated)", value=", ".join(profile.skills))
            submitted = st.form_submit_button("Save Profile", type="primary")

        if submitted:
            edited = replace(
                profile,
                first_name=first_name,
                last_name=last_name,
                phone=phone,
                location=location,
                university=university,
                graduation_year=graduation_year,
                about=about,
            )
            with st.spinner("Saving..."):
                _, new_state = portal.call(lambda api: ProfileService(api, portal.notifier).save(edited, skills_text))
            set_view(_STATE_KEY, new_state)
            st.rerun()
