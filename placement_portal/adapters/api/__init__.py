from .gateway import ApiGateway, TOKEN_KEY
from .endpoints import (
    AdminAPI,
    AnalyticsAPI,
    ApplicationAPI,
    AuthAPI,
    JobAPI,
    PortalAPI,
    StudentAPI,
)

__all__ = [
    "ApiGateway",
    "TOKEN_KEY",
    "AdminAPI",
    "AnalyticsAPI",
    "ApplicationAPI",
    "AuthAPI",
    "JobAPI",
    "PortalAPI",
    "StudentAPI",
]
