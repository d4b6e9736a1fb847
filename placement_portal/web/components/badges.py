from __future__ import annotations

from placement_portal.domain.models import AccountStatus, ApplicationStatus, JobStatus, Role
from placement_portal.domain.rules import STATUS_COLORS

_ACCOUNT_COLORS = {
    AccountStatus.ACTIVE: "green",
    AccountStatus.PENDING: "orange",
    AccountStatus.REJECTED: "red",
    AccountStatus.BLOCKED: "gray",
}

_ROLE_COLORS = {
    Role.ADMIN: "violet",
    Role.COMPANY: "blue",
    Role.STUDENT: "green",
}


def _badge(text: str, color: str) -> str:
    return f":{color}-background[{text}]"


def application_badge(status: ApplicationStatus) -> str:
    return _badge(status.value, STATUS_COLORS[status])


def account_badge(status: AccountStatus) -> str:
    return _badge(status.value, _ACCOUNT_COLORS[status])


def role_badge(role: Role) -> str:
    return _badge(role.value, _ROLE_COLORS[role])


def job_badge(status: JobStatus) -> str:
    return _badge(status.value, "green" if status is JobStatus.OPEN else "gray")
