from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from placement_portal.app.routing import ROUTES, evaluate, normalize_path
from placement_portal.app.runtime import PortalContext
from placement_portal.web.components.notifications import render_notifications
from placement_portal.web.framework.context import get_portal
from placement_portal.web.framework.navigation import render_sidebar
from placement_portal.web.framework.state import enter_view
from placement_portal.infra.logging import get_logger

logger = get_logger(__name__)

PAGE_TITLE_PREFIX = "Placement Portal - "


@dataclass(frozen=True)
class PageSpec:
    title: str
    icon: str
    layout: str = "wide"
    sidebar_state: str = "expanded"


def init_page(spec: PageSpec) -> None:
    """Initialize a Streamlit page in a consistent way.

    NOTE: This must be called before any other Streamlit command on a page.
    """
    st.set_page_config(
        page_title=spec.title,
        page_icon=spec.icon,
        layout=spec.layout,
        initial_sidebar_state=spec.sidebar_state,
    )


def guard_page(path: str, icon: str = "🎓") -> PortalContext:
    """Page prologue: page config, route guard, sidebar, pending notifications.

    Redirects (and stops the script) when the current role may not view ``path``.
    """
    route = ROUTES[normalize_path(path)]
    init_page(PageSpec(title=f"{PAGE_TITLE_PREFIX}{route.title}", icon=icon))

    portal = get_portal()
    decision = evaluate(route.path, portal.session.role)
    if not decision.allowed:
        logger.info(f"[guard] {route.path} -> {decision.route.path}")
        st.switch_page(decision.route.script)

    enter_view(route.path)
    render_sidebar(portal, active_path=route.path)
    render_notifications(portal.notifier)
    return portal


def go(path: str) -> None:
    st.switch_page(ROUTES[normalize_path(path)].script)


__all__ = ["PageSpec", "init_page", "guard_page", "go", "PAGE_TITLE_PREFIX"]
