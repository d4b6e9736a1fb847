"""
Application 层：会话、路由守卫、通知通道与用例服务。
"""

from .notifications import Level, Notification, NotificationChannel
from .routing import GuardDecision, GuardState, Route, ROUTES, evaluate, nav_routes, normalize_path
from .session import SessionContext, avatar_url_for
from .runtime import PortalContext

__all__ = [
    "Level",
    "Notification",
    "NotificationChannel",
    "GuardDecision",
    "GuardState",
    "Route",
    "ROUTES",
    "evaluate",
    "nav_routes",
    "normalize_path",
    "SessionContext",
    "avatar_url_for",
    "PortalContext",
]
