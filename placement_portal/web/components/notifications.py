from __future__ import annotations

import streamlit as st

from placement_portal.app.notifications import Level, NotificationChannel


def render_notifications(channel: NotificationChannel) -> None:
    """Drain pending events: successes as toasts, errors/info as inline banners."""
    for n in channel.drain():
        if n.level is Level.SUCCESS:
            st.toast(n.message, icon="✅")
        elif n.level is Level.ERROR:
            st.error(n.message, icon="⚠️")
        else:
            st.info(n.message)
