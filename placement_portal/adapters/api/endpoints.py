"""
后端 REST 端点分组。每个方法只负责路径和请求体，返回解析后的领域对象。
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ...domain.models import (
    AccountStatus,
    Application,
    ApplicationStatus,
    CompanyStats,
    JobPosting,
    PlacementReportRow,
    PlatformStats,
    Role,
    StudentProfile,
    StudentStats,
    UserAccount,
)
from ...infra.exceptions import ValidationError
from .gateway import ApiGateway


def _as_list(data: Any, path: str) -> List[Mapping[str, Any]]:
    if not isinstance(data, list):
        raise ValidationError(f"Expected a list from {path}", field=path, value=type(data).__name__)
    for i, item in enumerate(data):
        if not isinstance(item, Mapping):
            raise ValidationError(
                f"Expected an object at {path}[{i}]", field=path, value=type(item).__name__
            )
    return data


def _as_object(data: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"Expected an object from {path}", field=path, value=type(data).__name__)
    return data


class AuthAPI:
    def __init__(self, gateway: ApiGateway):
        self.gateway = gateway

    async def register(
        self,
        email: str,
        password: str,
        role: Role,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        company_name: Optional[str] = None,
    ) -> Any:
        body: Dict[str, Any] = {"email": email, "password": password, "role": role.api_value}
        if first_name is not None:
            body["firstName"] = first_name
        if last_name is not None:
            body["lastName"] = last_name
        if company_name is not None:
            body["companyName"] = company_name
        return await self.gateway.request("POST", "/auth/register", body)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Returns ``{"user": {...}, "token": "..."}``."""
        data = await self.gateway.request("POST", "/auth/login", {"email": email, "password": password})
        if not isinstance(data, dict) or not isinstance(data.get("user"), dict) or not data.get("token"):
            raise ValidationError("Malformed login response", field="/auth/login")
        return data


class JobAPI:
    def __init__(self, gateway: ApiGateway):
        self.gateway = gateway

    async def create(
        self,
        title: str,
        description: str,
        requirements: str,
        location: Optional[str] = None,
        salary: Optional[str] = None,
    ) -> Any:
        body: Dict[str, Any] = {"title": title, "description": description, "requirements": requirements}
        if location:
            body["location"] = location
        if salary:
            body["salary"] = salary
        return await self.gateway.request("POST", "/jobs", body)

    async def list_all(self) -> List[JobPosting]:
        data = await self.gateway.request("GET", "/jobs")
        return [JobPosting.from_dict(d) for d in _as_list(data, "/jobs")]

    async def list_mine(self) -> List[JobPosting]:
        data = await self.gateway.request("GET", "/jobs/my-jobs")
        return [JobPosting.from_dict(d) for d in _as_list(data, "/jobs/my-jobs")]

    async def get(self, job_id: str) -> JobPosting:
        path = f"/jobs/{job_id}"
        return JobPosting.from_dict(_as_object(await self.gateway.request("GET", path), path))

    async def update(self, job: JobPosting) -> Any:
        return await self.gateway.request("PUT", f"/jobs/{job.id}", job.to_payload())

    async def delete(self, job_id: str) -> Any:
        return await self.gateway.request("DELETE", f"/jobs/{job_id}")


class ApplicationAPI:
    def __init__(self, gateway: ApiGateway):
        self.gateway = gateway

    async def apply(self, job_id: str) -> Any:
        return await self.gateway.request("POST", "/applications/apply", {"jobId": job_id})

    async def list_mine(self) -> List[Application]:
        data = await self.gateway.request("GET", "/applications/my-applications")
        return [Application.from_dict(d) for d in _as_list(data, "/applications/my-applications")]

    async def list_company(self) -> List[Application]:
        data = await self.gateway.request("GET", "/applications/company/all")
        return [Application.from_dict(d) for d in _as_list(data, "/applications/company/all")]

    async def list_for_job(self, job_id: str) -> List[Application]:
        path = f"/applications/job/{job_id}"
        return [Application.from_dict(d) for d in _as_list(await self.gateway.request("GET", path), path)]

    async def update_status(self, application_id: str, status: ApplicationStatus) -> Any:
        return await self.gateway.request(
            "PUT", f"/applications/{application_id}/status", {"status": status.value}
        )


class StudentAPI:
    def __init__(self, gateway: ApiGateway):
        self.gateway = gateway

    async def get_profile(self) -> StudentProfile:
        path = "/students/profile"
        return StudentProfile.from_dict(_as_object(await self.gateway.request("GET", path) or {}, path))

    async def update_profile(self, profile: StudentProfile) -> Any:
        return await self.gateway.request("PUT", "/students/profile", profile.to_payload())

    async def upload_resume(self, filename: str, content: bytes, content_type: str) -> Any:
        return await self.gateway.upload("/upload/resume", "resume", filename, content, content_type)


class AdminAPI:
    def __init__(self, gateway: ApiGateway):
        self.gateway = gateway

    async def stats(self) -> PlatformStats:
        path = "/admin/stats"
        return PlatformStats.from_dict(_as_object(await self.gateway.request("GET", path) or {}, path))

    async def users(self) -> List[UserAccount]:
        data = await self.gateway.request("GET", "/admin/users")
        return [UserAccount.from_dict(d) for d in _as_list(data, "/admin/users")]

    async def update_user_status(self, user_id: str, status: AccountStatus) -> Any:
        return await self.gateway.request("PUT", f"/admin/users/{user_id}/status", {"status": status.value})

    async def delete_user(self, user_id: str) -> Any:
        return await self.gateway.request("DELETE", f"/admin/users/{user_id}")

    async def placement_report(self) -> List[PlacementReportRow]:
        data = await self.gateway.request("GET", "/admin/reports/placement")
        return [PlacementReportRow.from_dict(d) for d in _as_list(data, "/admin/reports/placement")]


class AnalyticsAPI:
    def __init__(self, gateway: ApiGateway):
        self.gateway = gateway

    async def platform(self) -> PlatformStats:
        path = "/analytics/stats"
        return PlatformStats.from_dict(_as_object(await self.gateway.request("GET", path) or {}, path))

    async def student(self) -> StudentStats:
        path = "/analytics/student"
        return StudentStats.from_dict(_as_object(await self.gateway.request("GET", path) or {}, path))

    async def company(self) -> CompanyStats:
        path = "/analytics/company"
        return CompanyStats.from_dict(_as_object(await self.gateway.request("GET", path) or {}, path))


class PortalAPI:
    """All endpoint groups bound to one gateway."""

    def __init__(self, gateway: ApiGateway):
        self.gateway = gateway
        self.auth = AuthAPI(gateway)
        self.jobs = JobAPI(gateway)
        self.applications = ApplicationAPI(gateway)
        self.students = StudentAPI(gateway)
        self.admin = AdminAPI(gateway)
        self.analytics = AnalyticsAPI(gateway)
