"""
领域模型（Domain Models）：纯业务数据结构，不做 IO。

服务端拥有全部实体；客户端只持有从 JSON（camelCase）解析出的临时副本。
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from ..infra.exceptions import ValidationError


def parse_iso(value: Any) -> Optional[datetime]:
    """解析 ISO 时间字符串（支持结尾的 Z），失败返回 None"""
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _str(d: Mapping[str, Any], key: str) -> str:
    v = d.get(key)
    return "" if v is None else str(v)


def _opt_str(d: Mapping[str, Any], key: str) -> Optional[str]:
    v = d.get(key)
    return None if v in (None, "") else str(v)


def _nested(d: Mapping[str, Any], *keys: str) -> Any:
    cur: Any = d
    for k in keys:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(k)
    return cur


# =============================================================================
# Role（封闭的角色集合）
# =============================================================================


class Role(Enum):
    STUDENT = "student"
    COMPANY = "company"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        """Accept 'student' / 'STUDENT' / Role.STUDENT."""
        if isinstance(value, Role):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown role: {value!r}", field="role", value=value)

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def prefix(self) -> str:
        return f"/{self.value}"

    @property
    def dashboard_path(self) -> str:
        return f"/{self.value}/dashboard"

    @property
    def api_value(self) -> str:
        return self.value.upper()


# =============================================================================
# Identity
# =============================================================================


@dataclass(frozen=True)
class Identity:
    """已认证用户的规范化资料，仅由 SessionContext 持有"""
    id: str
    display_name: str
    email: str
    role: Role
    avatar_url: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "displayName": self.display_name,
            "email": self.email,
            "role": self.role.value,
            "avatarUrl": self.avatar_url,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Identity":
        return cls(
            id=_str(d, "id"),
            display_name=_str(d, "displayName") or _str(d, "name"),
            email=_str(d, "email"),
            role=Role.parse(d.get("role")),
            avatar_url=_str(d, "avatarUrl") or _str(d, "avatar"),
        )


def display_name_from_user(d: Mapping[str, Any]) -> str:
    """登录响应中的 user 可能只带 name、姓名或公司名"""
    for key in ("displayName", "name"):
        if d.get(key):
            return str(d[key]).strip()
    first = str(d.get("firstName") or _nested(d, "studentProfile", "firstName") or "").strip()
    last = str(d.get("lastName") or _nested(d, "studentProfile", "lastName") or "").strip()
    full = f"{first} {last}".strip()
    if full:
        return full
    company = d.get("companyName") or _nested(d, "companyProfile", "companyName")
    if company:
        return str(company).strip()
    email = str(d.get("email") or "")
    return email.split("@")[0] if email else "User"


# =============================================================================
# Job Posting
# =============================================================================


class JobStatus(Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"

    @property
    def toggled(self) -> "JobStatus":
        return JobStatus.CLOSED if self is JobStatus.OPEN else JobStatus.OPEN


@dataclass(frozen=True)
class JobPosting:
    id: str
    title: str
    description: str
    requirements: str
    status: JobStatus
    created_at: str = ""
    location: Optional[str] = None
    salary: Optional[str] = None
    owner_company_id: str = ""
    company_name: str = ""

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "JobPosting":
        raw_status = str(d.get("status") or "OPEN").upper()
        try:
            status = JobStatus(raw_status)
        except ValueError:
            raise ValidationError(f"Unknown job status: {raw_status}", field="status", value=raw_status)
        return cls(
            id=_str(d, "id"),
            title=_str(d, "title"),
            description=_str(d, "description"),
            requirements=_str(d, "requirements"),
            status=status,
            created_at=_str(d, "createdAt"),
            location=_opt_str(d, "location"),
            salary=_opt_str(d, "salary"),
            owner_company_id=str(d.get("companyId") or _nested(d, "company", "id") or ""),
            company_name=str(_nested(d, "company", "companyName") or d.get("companyName") or ""),
        )

    def to_payload(self) -> Dict[str, Any]:
        """PUT /jobs/:id 的请求体"""
        return {
            "title": self.title,
            "description": self.description,
            "requirements": self.requirements,
            "location": self.location,
            "salary": self.salary,
            "status": self.status.value,
        }

    def with_status(self, status: JobStatus) -> "JobPosting":
        return replace(self, status=status)

    @property
    def skills(self) -> List[str]:
        return [s.strip() for s in self.requirements.split(",") if s.strip()]


# =============================================================================
# Application
# =============================================================================


class ApplicationStatus(Enum):
    APPLIED = "APPLIED"
    SHORTLISTED = "SHORTLISTED"
    REJECTED = "REJECTED"
    HIRED = "HIRED"


@dataclass(frozen=True)
class Application:
    id: str
    job_id: str
    status: ApplicationStatus
    applied_at: str = ""
    student_id: str = ""
    job_title: str = ""
    company_name: str = ""
    student_first_name: str = ""
    student_last_name: str = ""
    student_email: str = ""
    resume_url: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Application":
        raw_status = str(d.get("status") or "APPLIED").upper()
        try:
            status = ApplicationStatus(raw_status)
        except ValueError:
            raise ValidationError(f"Unknown application status: {raw_status}", field="status", value=raw_status)
        return cls(
            id=_str(d, "id"),
            job_id=str(d.get("jobId") or _nested(d, "job", "id") or ""),
            status=status,
            applied_at=_str(d, "appliedAt"),
            student_id=str(d.get("studentId") or _nested(d, "student", "id") or ""),
            job_title=str(_nested(d, "job", "title") or ""),
            company_name=str(_nested(d, "job", "company", "companyName") or ""),
            student_first_name=str(_nested(d, "student", "firstName") or ""),
            student_last_name=str(_nested(d, "student", "lastName") or ""),
            student_email=str(_nested(d, "student", "user", "email") or ""),
            resume_url=_nested(d, "student", "resumeUrl") or None,
        )

    def with_status(self, status: ApplicationStatus) -> "Application":
        return replace(self, status=status)

    @property
    def student_name(self) -> str:
        return f"{self.student_first_name} {self.student_last_name}".strip()


# =============================================================================
# User Account（管理员视图）
# =============================================================================


class AccountStatus(Enum):
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class UserAccount:
    id: str
    email: str
    role: Role
    status: AccountStatus
    created_at: str = ""
    display_name: str = ""

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "UserAccount":
        role = Role.parse(d.get("role"))
        raw_status = str(d.get("status") or "ACTIVE").upper()
        try:
            status = AccountStatus(raw_status)
        except ValueError:
            raise ValidationError(f"Unknown account status: {raw_status}", field="status", value=raw_status)

        name = "Admin User"
        if role is Role.STUDENT and isinstance(d.get("studentProfile"), Mapping):
            sp = d["studentProfile"]
            name = f"{sp.get('firstName') or ''} {sp.get('lastName') or ''}".strip()
        elif role is Role.COMPANY and isinstance(d.get("companyProfile"), Mapping):
            name = str(d["companyProfile"].get("companyName") or "")
        return cls(
            id=_str(d, "id"),
            email=_str(d, "email"),
            role=role,
            status=status,
            created_at=_str(d, "createdAt"),
            display_name=name,
        )

    def with_status(self, status: AccountStatus) -> "UserAccount":
        return replace(self, status=status)


# =============================================================================
# Student Profile
# =============================================================================


@dataclass(frozen=True)
class StudentProfile:
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    location: str = ""
    about: str = ""
    university: str = ""
    graduation_year: str = ""
    skills: List[str] = field(default_factory=list)
    resume_url: Optional[str] = None
    email: str = ""

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "StudentProfile":
        skills = d.get("skills") or []
        return cls(
            first_name=_str(d, "firstName"),
            last_name=_str(d, "lastName"),
            phone=_str(d, "phone"),
            location=_str(d, "location"),
            about=_str(d, "about"),
            university=_str(d, "university"),
            graduation_year=_str(d, "graduationYear"),
            skills=[str(s) for s in skills] if isinstance(skills, list) else [],
            resume_url=_opt_str(d, "resumeUrl"),
            email=str(_nested(d, "user", "email") or ""),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phone": self.phone,
            "location": self.location,
            "about": self.about,
            "skills": list(self.skills),
            "university": self.university,
            "graduationYear": self.graduation_year,
        }

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or "Student"

    @property
    def initials(self) -> str:
        return f"{(self.first_name or 'S')[0]}{(self.last_name or 'T')[0]}".upper()


# =============================================================================
# Reports & Statistics
# =============================================================================


@dataclass(frozen=True)
class PlacementReportRow:
    student_name: str
    student_email: str
    company_name: str
    job_title: str
    status: str
    applied_at: str

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "PlacementReportRow":
        return cls(
            student_name=_str(d, "studentName"),
            student_email=_str(d, "studentEmail"),
            company_name=_str(d, "companyName"),
            job_title=_str(d, "jobTitle"),
            status=_str(d, "status"),
            applied_at=_str(d, "appliedAt"),
        )


def _int(d: Mapping[str, Any], key: str) -> int:
    try:
        return int(d.get(key) or 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class PlatformStats:
    total_students: int = 0
    total_companies: int = 0
    total_jobs: int = 0
    total_applications: int = 0
    placed_students: int = 0

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "PlatformStats":
        return cls(
            total_students=_int(d, "totalStudents"),
            total_companies=_int(d, "totalCompanies"),
            total_jobs=_int(d, "totalJobs"),
            total_applications=_int(d, "totalApplications"),
            placed_students=_int(d, "placedStudents"),
        )

    @property
    def placement_rate(self) -> int:
        if not self.total_students:
            return 0
        return round(self.placed_students / self.total_students * 100)

    @property
    def applications_per_student(self) -> float:
        if not self.total_students:
            return 0.0
        return round(self.total_applications / self.total_students, 1)

    @property
    def jobs_per_company(self) -> float:
        if not self.total_companies:
            return 0.0
        return round(self.total_jobs / self.total_companies, 1)


@dataclass(frozen=True)
class StudentStats:
    total_applied: int = 0
    hired_count: int = 0
    shortlisted_count: int = 0
    rejected_count: int = 0
    recent_applications: List[Application] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "StudentStats":
        return cls(
            total_applied=_int(d, "totalApplied"),
            hired_count=_int(d, "hiredCount"),
            shortlisted_count=_int(d, "shortlistedCount"),
            rejected_count=_int(d, "rejectedCount"),
            recent_applications=[Application.from_dict(a) for a in d.get("recentApplications") or []],
        )


@dataclass(frozen=True)
class CompanyStats:
    total_jobs: int = 0
    open_jobs: int = 0
    total_apps: int = 0
    hired_count: int = 0
    shortlisted_count: int = 0
    recent_applications: List[Application] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "CompanyStats":
        return cls(
            total_jobs=_int(d, "totalJobs"),
            open_jobs=_int(d, "openJobs"),
            total_apps=_int(d, "totalApps"),
            hired_count=_int(d, "hiredCount"),
            shortlisted_count=_int(d, "shortlistedCount"),
            recent_applications=[Application.from_dict(a) for a in d.get("recentApplications") or []],
        )
