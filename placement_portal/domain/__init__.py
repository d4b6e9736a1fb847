from .models import (
    AccountStatus,
    Application,
    ApplicationStatus,
    CompanyStats,
    Identity,
    JobPosting,
    JobStatus,
    PlacementReportRow,
    PlatformStats,
    Role,
    StudentProfile,
    StudentStats,
    UserAccount,
    display_name_from_user,
    parse_iso,
)

__all__ = [
    "AccountStatus",
    "Application",
    "ApplicationStatus",
    "CompanyStats",
    "Identity",
    "JobPosting",
    "JobStatus",
    "PlacementReportRow",
    "PlatformStats",
    "Role",
    "StudentProfile",
    "StudentStats",
    "UserAccount",
    "display_name_from_user",
    "parse_iso",
]
