"""
业务规则（Domain Rules）：
纯函数式规则，不做 IO，只描述"哪些状态可达 / 哪些操作可见 / 哪些数据可见"。

服务端才是状态迁移合法性的最终裁决者；这里的规则只决定客户端渲染哪些操作、
以及哪些请求在发送前就被短路。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..infra.exceptions import GuardRejection
from .models import (
    AccountStatus,
    ApplicationStatus,
    JobPosting,
    JobStatus,
    PlacementReportRow,
    Role,
    UserAccount,
)


# =============================================================================
# 申请状态机（Application Lifecycle）
# =============================================================================

INITIAL_STATUS = ApplicationStatus.APPLIED

TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.APPLIED: frozenset({ApplicationStatus.SHORTLISTED, ApplicationStatus.REJECTED}),
    # SHORTLISTED -> REJECTED 合法，但当前界面不提供入口
    ApplicationStatus.SHORTLISTED: frozenset({ApplicationStatus.HIRED, ApplicationStatus.REJECTED}),
    ApplicationStatus.HIRED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
}


def can_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    return target in TRANSITIONS[current]


def is_terminal(status: ApplicationStatus) -> bool:
    return not TRANSITIONS[status]


@dataclass(frozen=True)
class StatusAction:
    label: str
    target: ApplicationStatus


# 公司端界面实际暴露的迁移按钮（TRANSITIONS 的子集）
_COMPANY_ACTIONS: Dict[ApplicationStatus, Tuple[StatusAction, ...]] = {
    ApplicationStatus.APPLIED: (
        StatusAction("Shortlist", ApplicationStatus.SHORTLISTED),
        StatusAction("Reject", ApplicationStatus.REJECTED),
    ),
    ApplicationStatus.SHORTLISTED: (
        StatusAction("Mark as Hired", ApplicationStatus.HIRED),
    ),
    ApplicationStatus.HIRED: (),
    ApplicationStatus.REJECTED: (),
}


def company_actions(status: ApplicationStatus) -> Tuple[StatusAction, ...]:
    """Buttons rendered for a company reviewing an application in ``status``."""
    return _COMPANY_ACTIONS[status]


STATUS_COLORS: Dict[ApplicationStatus, str] = {
    ApplicationStatus.APPLIED: "blue",
    ApplicationStatus.SHORTLISTED: "violet",
    ApplicationStatus.REJECTED: "red",
    ApplicationStatus.HIRED: "green",
}


# =============================================================================
# 职位可见性与搜索
# =============================================================================


def _matches(term: str, *fields: Optional[str]) -> bool:
    needle = (term or "").strip().lower()
    if not needle:
        return True
    return any(needle in (f or "").lower() for f in fields)


def is_open_for_applications(job: JobPosting) -> bool:
    return job.status is JobStatus.OPEN


def student_visible_jobs(jobs: Iterable[JobPosting], search: str = "") -> List[JobPosting]:
    """OPEN postings whose title, company name or description contains ``search``."""
    return [
        job for job in jobs
        if is_open_for_applications(job) and _matches(search, job.title, job.company_name, job.description)
    ]


def filter_report(rows: Iterable[PlacementReportRow], search: str = "") -> List[PlacementReportRow]:
    return [r for r in rows if _matches(search, r.student_name, r.company_name, r.job_title)]


ROLE_TABS: Tuple[str, ...] = ("ALL", "STUDENT", "COMPANY", "ADMIN")


def filter_users(users: Iterable[UserAccount], role_tab: str = "ALL", search: str = "") -> List[UserAccount]:
    tab = (role_tab or "ALL").upper()
    return [
        u for u in users
        if (tab == "ALL" or u.role.api_value == tab) and _matches(search, u.display_name, u.email)
    ]


# =============================================================================
# 申请守卫
# =============================================================================


def ensure_can_apply(job: JobPosting, applied_job_ids: Iterable[str]) -> None:
    """Reject locally before any request is sent."""
    if job.id in set(applied_job_ids):
        raise GuardRejection("You have already applied for this job", action="apply", job_id=job.id)
    if not is_open_for_applications(job):
        raise GuardRejection("This job is no longer accepting applications", action="apply", job_id=job.id)


def apply_button_label(job_id: str, applied_job_ids: Iterable[str], applying_job_id: Optional[str] = None) -> str:
    if applying_job_id == job_id:
        return "Applying..."
    if job_id in set(applied_job_ids):
        return "Applied"
    return "Apply Now"


# =============================================================================
# 账号管理操作（管理员）
# =============================================================================


@dataclass(frozen=True)
class AccountAction:
    key: str
    label: str
    target: Optional[AccountStatus]  # None 表示删除


DELETE_ACTION = AccountAction("delete", "Delete User", None)


def account_actions(user: UserAccount) -> Tuple[AccountAction, ...]:
    actions: List[AccountAction] = []
    if user.status is AccountStatus.PENDING:
        actions.append(AccountAction("approve", "Approve", AccountStatus.ACTIVE))
        actions.append(AccountAction("reject", "Reject", AccountStatus.REJECTED))
    elif user.status is AccountStatus.ACTIVE and user.role is not Role.ADMIN:
        actions.append(AccountAction("block", "Block", AccountStatus.BLOCKED))
    elif user.status is AccountStatus.BLOCKED:
        actions.append(AccountAction("unblock", "Unblock", AccountStatus.ACTIVE))
    if user.role is not Role.ADMIN:
        actions.append(DELETE_ACTION)
    return tuple(actions)


def ensure_account_mutable(user: UserAccount, target: Optional[AccountStatus]) -> None:
    """Admin accounts can never be blocked or deleted from this client."""
    if user.role is not Role.ADMIN:
        return
    if target is None:
        raise GuardRejection("Admin accounts cannot be deleted", action="delete", user_id=user.id)
    if target is AccountStatus.BLOCKED:
        raise GuardRejection("Admin accounts cannot be blocked", action="block", user_id=user.id)


# =============================================================================
# 简历上传守卫
# =============================================================================

RESUME_CONTENT_TYPE = "application/pdf"
MAX_RESUME_BYTES = 5 * 1024 * 1024


def ensure_valid_resume(content_type: Optional[str], size: int) -> None:
    if content_type != RESUME_CONTENT_TYPE:
        raise GuardRejection("Please upload a PDF file", action="upload_resume", content_type=content_type)
    if size > MAX_RESUME_BYTES:
        raise GuardRejection("File size should be less than 5MB", action="upload_resume", size=size)


def parse_skills(raw: str) -> List[str]:
    return [s.strip() for s in (raw or "").split(",") if s.strip()]


def split_full_name(name: str) -> Tuple[str, str]:
    """'Asha Rao Kumar' -> ('Asha', 'Rao Kumar'); single token is reused as last name."""
    parts: Sequence[str] = (name or "").strip().split()
    if not parts:
        return name, name
    first = parts[0]
    last = " ".join(parts[1:]) or first
    return first, last
