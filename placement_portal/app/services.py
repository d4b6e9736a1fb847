"""
Application Services（应用服务层）。

每个页面对应一个用例服务：
- AuthService: 登录 / 注册 / 退出
- JobBoardService: 学生浏览职位与投递
- ApplicationTrackerService: 学生查看自己的申请
- CandidateReviewService: 公司审核候选人（申请状态迁移）
- JobManagementService: 公司发布/开关/删除职位，管理员查看/删除全部职位
- ProfileService: 学生资料与简历上传
- UserAdminService: 管理员账号审核/封禁/删除
- ReportService: 平台统计与录用报告导出
- DashboardService: 学生/公司仪表盘统计

服务只做业务编排：结果通过 ServiceResult 返回，同时把成功/失败消息发布到
NotificationChannel，由界面组件统一展示。成功后的本地状态采用乐观更新，
失败时不回滚，只报告错误。
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Set, Tuple

from ..adapters.api.endpoints import PortalAPI
from ..adapters.api.gateway import ApiGateway
from ..adapters.export.csv_report import build_placement_csv, report_filename
from ..domain.models import (
    AccountStatus,
    Application,
    ApplicationStatus,
    CompanyStats,
    Identity,
    JobPosting,
    PlacementReportRow,
    PlatformStats,
    Role,
    StudentProfile,
    StudentStats,
    UserAccount,
)
from ..domain import rules
from ..infra.exceptions import GuardRejection, PortalException
from ..infra.logging import get_logger
from .notifications import NotificationChannel
from .routing import LOGIN_PATH
from .session import SessionContext

logger = get_logger(__name__)


# =============================================================================
# Service 基类
# =============================================================================


@dataclass
class ServiceResult:
    """服务执行结果"""
    success: bool = True
    message: str = ""
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


class BaseService:
    """服务基类"""

    def __init__(self, api: Optional[PortalAPI], notifier: NotificationChannel):
        self.api = api
        self.notifier = notifier

    def _success(self, message: str = "", **data) -> ServiceResult:
        if message:
            self.notifier.success(message)
        return ServiceResult(success=True, message=message, data=data)

    def _error(self, error: str, **data) -> ServiceResult:
        self.notifier.error(error)
        return ServiceResult(success=False, error=error, data=data)

    def _fail(self, exc: PortalException, action: str, prefix: str = "") -> ServiceResult:
        if isinstance(exc, GuardRejection):
            logger.info(f"[{action}] 客户端守卫拒绝: {exc.message}")
        else:
            logger.warning(f"[{action}] 失败 [{exc.error_code}]: {exc.message}")
        return self._error(f"{prefix}{exc.message}")


def _require(**fields: str) -> None:
    for name, value in fields.items():
        if not (value or "").strip():
            raise GuardRejection(f"{name} is required", action="validate", field=name)


# =============================================================================
# AuthService
# =============================================================================


@dataclass
class RegistrationOutcome:
    identity: Optional[Identity]
    next_path: str


MIN_PASSWORD_LENGTH = 6


class AuthService(BaseService):
    """Login/registration. The session is updated only after a successful response."""

    def __init__(self, api: Optional[PortalAPI], notifier: NotificationChannel, session: SessionContext):
        super().__init__(api, notifier)
        self.session = session

    async def login(self, email: str, password: str) -> ServiceResult:
        try:
            _require(Email=email, Password=password)
            data = await self.api.auth.login(email.strip(), password)
            identity = self.session.login(data["user"], str(data["token"]))
        except PortalException as e:
            return self._fail(e, "login")
        return self._success("", identity=identity, next_path=identity.role.dashboard_path)

    async def register(self, role: Role, name: str, email: str, password: str) -> ServiceResult:
        try:
            if role is Role.ADMIN:
                raise GuardRejection("Admin accounts cannot be registered here", action="register")
            _require(Name=name, Email=email, Password=password)
            if len(password) < MIN_PASSWORD_LENGTH:
                raise GuardRejection(
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters", action="register"
                )
            if role is Role.STUDENT:
                first, last = rules.split_full_name(name)
                await self.api.auth.register(email.strip(), password, role, first_name=first, last_name=last)
            else:
                await self.api.auth.register(email.strip(), password, role, company_name=name.strip())

            if role is Role.COMPANY:
                outcome = RegistrationOutcome(None, LOGIN_PATH)
                return self._success(
                    "Registration successful! Your account is pending admin approval.", outcome=outcome
                )

            data = await self.api.auth.login(email.strip(), password)
            identity = self.session.login(data["user"], str(data["token"]))
        except PortalException as e:
            return self._fail(e, "register")
        return self._success("", outcome=RegistrationOutcome(identity, identity.role.dashboard_path))

    @staticmethod
    def logout(session: SessionContext, gateway: ApiGateway) -> None:
        session.logout()
        gateway.clear_token()


# =============================================================================
# JobBoardService（学生）
# =============================================================================


@dataclass
class JobBoardState:
    jobs: List[JobPosting] = field(default_factory=list)
    applied_job_ids: Set[str] = field(default_factory=set)
    applying_job_id: Optional[str] = None
    error: str = ""

    def visible_jobs(self, search: str = "") -> List[JobPosting]:
        return rules.student_visible_jobs(self.jobs, search)

    def is_apply_disabled(self, job_id: str) -> bool:
        return self.applying_job_id == job_id or job_id in self.applied_job_ids

    def button_label(self, job_id: str) -> str:
        return rules.apply_button_label(job_id, self.applied_job_ids, self.applying_job_id)


class JobBoardService(BaseService):

    async def load(self) -> JobBoardState:
        """Fetch all jobs and the student's applications concurrently."""
        state = JobBoardState()
        try:
            jobs, applications = await asyncio.gather(
                self.api.jobs.list_all(),
                self.api.applications.list_mine(),
            )
        except PortalException as e:
            logger.warning(f"[jobs] 加载失败: {e.message}")
            state.error = e.message or "Failed to load jobs"
            return state
        state.jobs = jobs
        state.applied_job_ids = {a.job_id for a in applications}
        return state

    async def apply(self, state: JobBoardState, job_id: str) -> ServiceResult:
        job = next((j for j in state.jobs if j.id == job_id), None)
        try:
            if job is None:
                raise GuardRejection("Job not found", action="apply", job_id=job_id)
            rules.ensure_can_apply(job, state.applied_job_ids)
        except GuardRejection as e:
            return self._fail(e, "apply")

        state.applying_job_id = job_id
        try:
            await self.api.applications.apply(job_id)
        except PortalException as e:
            return self._fail(e, "apply")
        finally:
            state.applying_job_id = None
        state.applied_job_ids.add(job_id)
        return self._success("Application submitted successfully!", job_id=job_id)


# =============================================================================
# ApplicationTrackerService（学生）
# =============================================================================


@dataclass
class ApplicationListState:
    applications: List[Application] = field(default_factory=list)
    updating_id: Optional[str] = None
    error: str = ""


class ApplicationTrackerService(BaseService):

    async def load(self) -> ApplicationListState:
        state = ApplicationListState()
        try:
            state.applications = await self.api.applications.list_mine()
        except PortalException as e:
            state.error = e.message or "Failed to load applications"
        return state


# =============================================================================
# CandidateReviewService（公司）
# =============================================================================


class CandidateReviewService(BaseService):

    async def load(self, job_id: Optional[str] = None) -> ApplicationListState:
        state = ApplicationListState()
        try:
            if job_id:
                state.applications = await self.api.applications.list_for_job(job_id)
            else:
                state.applications = await self.api.applications.list_company()
        except PortalException as e:
            state.error = e.message or "Failed to load applications"
        return state

    async def update_status(
        self, state: ApplicationListState, application_id: str, status: ApplicationStatus
    ) -> ServiceResult:
        # 迁移是否合法由服务端裁决；客户端只通过渲染哪些按钮来约束
        state.updating_id = application_id
        try:
            await self.api.applications.update_status(application_id, status)
        except PortalException as e:
            return self._fail(e, "update_status")
        finally:
            state.updating_id = None
        state.applications = [
            a.with_status(status) if a.id == application_id else a for a in state.applications
        ]
        return self._success(f"Application {status.value.lower()} successfully!", application_id=application_id)


# =============================================================================
# JobManagementService（公司 / 管理员）
# =============================================================================


@dataclass
class JobListState:
    jobs: List[JobPosting] = field(default_factory=list)
    error: str = ""


class JobManagementService(BaseService):

    async def load_mine(self) -> JobListState:
        state = JobListState()
        try:
            state.jobs = await self.api.jobs.list_mine()
        except PortalException as e:
            state.error = e.message or "Failed to load jobs"
        return state

    async def load_all(self) -> JobListState:
        state = JobListState()
        try:
            state.jobs = await self.api.jobs.list_all()
        except PortalException as e:
            state.error = e.message or "Failed to fetch jobs"
        return state

    async def post(
        self,
        title: str,
        description: str,
        requirements: str,
        location: str = "",
        salary: str = "",
    ) -> ServiceResult:
        try:
            _require(Title=title, Description=description, Requirements=requirements)
            await self.api.jobs.create(
                title.strip(),
                description.strip(),
                requirements.strip(),
                location=location.strip() or None,
                salary=salary.strip() or None,
            )
        except PortalException as e:
            return self._fail(e, "post_job")
        return self._success("Job Posted Successfully!")

    async def toggle_status(self, state: JobListState, job_id: str) -> ServiceResult:
        job = next((j for j in state.jobs if j.id == job_id), None)
        if job is None:
            return self._error("Job not found")
        updated = job.with_status(job.status.toggled)
        try:
            await self.api.jobs.update(updated)
        except PortalException as e:
            return self._fail(e, "toggle_job")
        state.jobs = [updated if j.id == job_id else j for j in state.jobs]
        return self._success(f"Job status updated to {updated.status.value}")

    async def delete(self, state: JobListState, job_id: str) -> ServiceResult:
        try:
            await self.api.jobs.delete(job_id)
        except PortalException as e:
            return self._fail(e, "delete_job")
        state.jobs = [j for j in state.jobs if j.id != job_id]
        return self._success("Job deleted successfully")


# =============================================================================
# ProfileService（学生）
# =============================================================================


@dataclass
class ProfileState:
    profile: Optional[StudentProfile] = None
    error: str = ""


class ProfileService(BaseService):

    async def load(self) -> ProfileState:
        state = ProfileState()
        try:
            state.profile = await self.api.students.get_profile()
        except PortalException as e:
            state.error = e.message or "Failed to load profile"
        return state

    async def save(self, profile: StudentProfile, skills_text: Optional[str] = None) -> Tuple[ServiceResult, ProfileState]:
        if skills_text is not None:
            profile = replace(profile, skills=rules.parse_skills(skills_text))
        try:
            await self.api.students.update_profile(profile)
        except PortalException as e:
            return self._fail(e, "save_profile"), ProfileState(profile=profile, error=e.message)
        result = self._success("Profile saved successfully!")
        return result, await self.load()

    async def upload_resume(
        self, filename: str, content: bytes, content_type: Optional[str]
    ) -> Tuple[ServiceResult, Optional[ProfileState]]:
        try:
            rules.ensure_valid_resume(content_type, len(content))
            await self.api.students.upload_resume(filename, content, content_type)
        except PortalException as e:
            return self._fail(e, "upload_resume"), None
        result = self._success("Resume uploaded successfully!")
        return result, await self.load()


# =============================================================================
# UserAdminService（管理员）
# =============================================================================


@dataclass
class UserListState:
    users: List[UserAccount] = field(default_factory=list)
    error: str = ""

    def find(self, user_id: str) -> Optional[UserAccount]:
        return next((u for u in self.users if u.id == user_id), None)


class UserAdminService(BaseService):

    async def load(self) -> UserListState:
        state = UserListState()
        try:
            state.users = await self.api.admin.users()
        except PortalException as e:
            state.error = e.message or "Failed to fetch users"
        return state

    async def set_status(self, state: UserListState, user_id: str, status: AccountStatus) -> ServiceResult:
        user = state.find(user_id)
        try:
            if user is None:
                raise GuardRejection("User not found", action="set_status", user_id=user_id)
            rules.ensure_account_mutable(user, status)
            await self.api.admin.update_user_status(user_id, status)
        except PortalException as e:
            return self._fail(e, "set_status")
        # 原地更新该行，不重新拉取列表
        state.users = [u.with_status(status) if u.id == user_id else u for u in state.users]
        return self._success(f"User status updated to {status.value}")

    async def delete(self, state: UserListState, user_id: str) -> ServiceResult:
        user = state.find(user_id)
        try:
            if user is None:
                raise GuardRejection("User not found", action="delete", user_id=user_id)
            rules.ensure_account_mutable(user, None)
            await self.api.admin.delete_user(user_id)
        except PortalException as e:
            return self._fail(e, "delete_user")
        state.users = [u for u in state.users if u.id != user_id]
        return self._success("User deleted successfully")


# =============================================================================
# ReportService（管理员）
# =============================================================================


@dataclass
class ReportState:
    stats: Optional[PlatformStats] = None
    rows: List[PlacementReportRow] = field(default_factory=list)
    error: str = ""

    def placed(self) -> List[PlacementReportRow]:
        return [r for r in self.rows if r.status == ApplicationStatus.HIRED.value]


class ReportService(BaseService):

    async def load_stats(self) -> ReportState:
        state = ReportState()
        try:
            state.stats = await self.api.admin.stats()
        except PortalException as e:
            state.error = e.message or "Failed to load statistics"
        return state

    async def load_report(self) -> ReportState:
        state = ReportState()
        try:
            state.rows = await self.api.admin.placement_report()
        except PortalException as e:
            logger.warning(f"[report] 加载失败: {e.message}")
            state.error = e.message
        return state

    async def export_csv(self) -> ServiceResult:
        try:
            rows = await self.api.admin.placement_report()
        except PortalException as e:
            return self._fail(e, "export_report", prefix="Failed to generate report: ")
        return self._success(
            "Placement report generated successfully!",
            filename=report_filename(),
            content=build_placement_csv(rows),
            rows=len(rows),
        )


# =============================================================================
# DashboardService
# =============================================================================


class DashboardService(BaseService):

    async def student(self) -> StudentStats:
        try:
            return await self.api.analytics.student()
        except PortalException as e:
            logger.warning(f"[dashboard] 学生统计加载失败: {e.message}")
            return StudentStats()

    async def company(self) -> CompanyStats:
        try:
            return await self.api.analytics.company()
        except PortalException as e:
            logger.warning(f"[dashboard] 公司统计加载失败: {e.message}")
            return CompanyStats()


__all__ = [
    "ServiceResult",
    "BaseService",
    "AuthService",
    "RegistrationOutcome",
    "JobBoardService",
    "JobBoardState",
    "ApplicationTrackerService",
    "ApplicationListState",
    "CandidateReviewService",
    "JobManagementService",
    "JobListState",
    "ProfileService",
    "ProfileState",
    "UserAdminService",
    "UserListState",
    "ReportService",
    "ReportState",
    "DashboardService",
]
