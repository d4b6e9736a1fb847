"""
集成测试：应用服务（投递、候选人审核、账号管理、简历、注册、报告）
"""
import pytest

from placement_portal.adapters.api.gateway import ApiGateway
from placement_portal.app.notifications import Level
from placement_portal.app.services import (
    ApplicationListState,
    AuthService,
    CandidateReviewService,
    DashboardService,
    JobBoardService,
    JobBoardState,
    JobListState,
    JobManagementService,
    ProfileService,
    ReportService,
    UserAdminService,
    UserListState,
)
from placement_portal.app.session import SessionContext
from placement_portal.domain.models import (
    AccountStatus,
    Application,
    ApplicationStatus,
    JobPosting,
    JobStatus,
    Role,
    StudentProfile,
    UserAccount,
)
from placement_portal.infra.storage import TOKEN_KEY, LocalStorage

from conftest import application_dict, job_dict


def _messages(notifier, level):
    return [n.message for n in notifier.drain() if n.level is level]


class TestJobBoard:

    def test_apply_marks_job_applied(self, backend, notifier, run_api):
        backend.on("GET", "/jobs", [job_dict("J1"), job_dict("J2")])
        backend.on("GET", "/applications/my-applications", [application_dict("A0", "J2")])
        backend.on("POST", "/applications/apply", {"id": "A1"}, status=201)

        async def scenario(api):
            service = JobBoardService(api, notifier)
            state = await service.load()
            assert "J1" not in state.applied_job_ids
            result = await service.apply(state, "J1")
            return state, result

        state, result = run_api(scenario)

        assert result.success
        assert "J1" in state.applied_job_ids
        assert state.is_apply_disabled("J1")
        assert state.button_label("J1") == "Applied"
        assert state.applying_job_id is None
        assert _messages(notifier, Level.SUCCESS) == ["Application submitted successfully!"]

    def test_malformed_job_entry_sets_error(self, backend, notifier, run_api):
        backend.on("GET", "/jobs", ["not-an-object"])
        backend.on("GET", "/applications/my-applications", [])

        state = run_api(lambda api: JobBoardService(api, notifier).load())

        assert state.jobs == []
        assert state.error == "Expected an object at /jobs[0]"

    def test_double_apply_rejected_without_request(self, backend, notifier, run_api):
        state = JobBoardState(jobs=[JobPosting.from_dict(job_dict("J1"))], applied_job_ids={"J1"})
        result = run_api(lambda api: JobBoardService(api, notifier).apply(state, "J1"))

        assert not result.success
        assert backend.calls == []
        assert _messages(notifier, Level.ERROR) == ["You have already applied for this job"]

    def test_server_error_leaves_state(self, backend, notifier, run_api):
        backend.on("POST", "/applications/apply", {"error": "Job is closed"}, status=400)
        state = JobBoardState(jobs=[JobPosting.from_dict(job_dict("J1"))])
        result = run_api(lambda api: JobBoardService(api, notifier).apply(state, "J1"))

        assert not result.success
        assert state.applied_job_ids == set()
        assert state.applying_job_id is None
        assert _messages(notifier, Level.ERROR) == ["Job is closed"]

    def test_load_failure_sets_error(self, backend, notifier, run_api):
        backend.on("GET", "/jobs", {"error": "Unauthorized"}, status=401)
        backend.on("GET", "/applications/my-applications", [])
        state = run_api(lambda api: JobBoardService(api, notifier).load())
        assert state.error == "Unauthorized"
        assert state.jobs == []


class TestCandidateReview:

    def test_shortlist_patches_locally(self, backend, notifier, run_api):
        backend.on("PUT", "/applications/A1/status", {"id": "A1", "status": "SHORTLISTED"})
        state = ApplicationListState(applications=[Application.from_dict(application_dict("A1", "J1"))])

        result = run_api(
            lambda api: CandidateReviewService(api, notifier).update_status(state, "A1", ApplicationStatus.SHORTLISTED)
        )

        assert result.success
        assert state.applications[0].status is ApplicationStatus.SHORTLISTED
        assert backend.calls[0]["json"] == {"status": "SHORTLISTED"}
        assert _messages(notifier, Level.SUCCESS) == ["Application shortlisted successfully!"]

    def test_load_for_job(self, backend, notifier, run_api):
        backend.on("GET", "/applications/job/J1", [application_dict("A1", "J1")])
        state = run_api(lambda api: CandidateReviewService(api, notifier).load("J1"))
        assert state.applications[0].student_name == "Asha Rao"
        assert state.applications[0].student_email == "asha@x.edu"


class TestUserAdmin:

    @pytest.fixture
    def users(self):
        return UserListState(users=[
            UserAccount("c1", "hr@acme.com", Role.COMPANY, AccountStatus.PENDING, display_name="Acme"),
            UserAccount("a1", "admin@x.edu", Role.ADMIN, AccountStatus.ACTIVE, display_name="Admin User"),
        ])

    def test_activate_pending_company_in_place(self, backend, notifier, run_api, users):
        backend.on("PUT", "/admin/users/c1/status", {"id": "c1", "status": "ACTIVE"})

        result = run_api(lambda api: UserAdminService(api, notifier).set_status(users, "c1", AccountStatus.ACTIVE))

        assert result.success
        assert users.find("c1").status is AccountStatus.ACTIVE
        assert [c["method"] for c in backend.calls] == ["PUT"]
        assert _messages(notifier, Level.SUCCESS) == ["User status updated to ACTIVE"]

    @pytest.mark.parametrize("target", [AccountStatus.BLOCKED, None])
    def test_admin_cannot_be_blocked_or_deleted(self, backend, notifier, run_api, users, target):
        if target is None:
            result = run_api(lambda api: UserAdminService(api, notifier).delete(users, "a1"))
        else:
            result = run_api(lambda api: UserAdminService(api, notifier).set_status(users, "a1", target))

        assert not result.success
        assert backend.calls == []
        assert users.find("a1") is not None

    def test_delete_removes_row(self, backend, notifier, run_api, users):
        backend.on("DELETE", "/admin/users/c1", {"message": "deleted"})
        result = run_api(lambda api: UserAdminService(api, notifier).delete(users, "c1"))
        assert result.success
        assert users.find("c1") is None


class TestJobManagement:

    def test_post_requires_fields(self, backend, notifier, run_api):
        result = run_api(lambda api: JobManagementService(api, notifier).post("", "desc", "Python"))
        assert not result.success
        assert backend.calls == []
        assert _messages(notifier, Level.ERROR) == ["Title is required"]

    def test_post_omits_blank_optionals(self, backend, notifier, run_api):
        backend.on("POST", "/jobs", job_dict("J9"), status=201)
        result = run_api(lambda api: JobManagementService(api, notifier).post("SWE", "Build", "Python", location=" "))
        assert result.success
        assert backend.calls[0]["json"] == {"title": "SWE", "description": "Build", "requirements": "Python"}
        assert _messages(notifier, Level.SUCCESS) == ["Job Posted Successfully!"]

    def test_toggle_status(self, backend, notifier, run_api):
        backend.on("PUT", "/jobs/J1", job_dict("J1", status="CLOSED"))
        state = JobListState(jobs=[JobPosting.from_dict(job_dict("J1"))])

        result = run_api(lambda api: JobManagementService(api, notifier).toggle_status(state, "J1"))

        assert result.success
        assert state.jobs[0].status is JobStatus.CLOSED
        assert backend.calls[0]["json"]["status"] == "CLOSED"
        assert _messages(notifier, Level.SUCCESS) == ["Job status updated to CLOSED"]


class TestProfile:

    def test_resume_guard_rejects_non_pdf(self, backend, notifier, run_api):
        result, state = run_api(
            lambda api: ProfileService(api, notifier).upload_resume("cv.docx", b"data", "application/msword")
        )
        assert not result.success
        assert state is None
        assert backend.calls == []
        assert _messages(notifier, Level.ERROR) == ["Please upload a PDF file"]

    def test_resume_guard_rejects_large_file(self, backend, notifier, run_api):
        content = b"0" * (5 * 1024 * 1024 + 1)
        result, _ = run_api(lambda api: ProfileService(api, notifier).upload_resume("cv.pdf", content, "application/pdf"))
        assert not result.success
        assert backend.calls == []
        assert _messages(notifier, Level.ERROR) == ["File size should be less than 5MB"]

    def test_save_parses_skills_and_reloads(self, backend, notifier, run_api):
        backend.on("PUT", "/students/profile", {"ok": True})
        backend.on("GET", "/students/profile", {"firstName": "Asha", "skills": ["Python", "SQL"]})

        result, state = run_api(
            lambda api: ProfileService(api, notifier).save(StudentProfile(first_name="Asha"), "Python, , SQL ")
        )

        assert result.success
        assert backend.calls_to("PUT", "/students/profile")[0]["json"]["skills"] == ["Python", "SQL"]
        assert state.profile.skills == ["Python", "SQL"]


class TestAuth:

    def test_login_sets_session(self, backend, storage, notifier, run_api):
        backend.on("POST", "/auth/login", {
            "user": {"id": "u1", "email": "hr@acme.com", "role": "COMPANY", "companyName": "Acme"},
            "token": "tok",
        })
        session = SessionContext.create(storage)

        result = run_api(lambda api: AuthService(api, notifier, session).login("hr@acme.com", "pw"))

        assert result.success
        assert result.data["next_path"] == "/company/dashboard"
        assert session.role is Role.COMPANY
        assert storage.get_item(TOKEN_KEY) == "tok"

    def test_failed_login_keeps_anonymous(self, backend, storage, notifier, run_api):
        backend.on("POST", "/auth/login", {"error": "Invalid credentials"}, status=401)
        session = SessionContext.create(storage)
        result = run_api(lambda api: AuthService(api, notifier, session).login("a@x.com", "bad"))
        assert not result.success
        assert not session.is_authenticated
        assert _messages(notifier, Level.ERROR) == ["Invalid credentials"]

    def test_unknown_role_in_login_response_fails_inline(self, backend, storage, notifier, run_api):
        backend.on("POST", "/auth/login", {
            "user": {"id": "u9", "email": "hr@agency.com", "role": "RECRUITER"},
            "token": "tok",
        })
        session = SessionContext.create(storage)

        result = run_api(lambda api: AuthService(api, notifier, session).login("hr@agency.com", "pw"))

        assert not result.success
        assert not session.is_authenticated
        assert storage.get_item(TOKEN_KEY) is None
        assert _messages(notifier, Level.ERROR) == ["Unknown role: 'RECRUITER'"]

    def test_unknown_role_after_registration_fails_inline(self, backend, storage, notifier, run_api):
        backend.on("POST", "/auth/register", {"message": "ok"}, status=201)
        backend.on("POST", "/auth/login", {"user": {"id": "s1", "email": "asha@x.edu", "role": ""}, "token": "tok"})
        session = SessionContext.create(storage)

        result = run_api(
            lambda api: AuthService(api, notifier, session).register(Role.STUDENT, "Asha Rao", "asha@x.edu", "secret1")
        )

        assert not result.success
        assert not session.is_authenticated
        assert _messages(notifier, Level.ERROR)

    def test_storage_failure_on_login_keeps_anonymous(self, backend, tmp_path, notifier, run_api):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        backend.on("POST", "/auth/login", {
            "user": {"id": "u1", "email": "hr@acme.com", "role": "COMPANY", "companyName": "Acme"},
            "token": "tok",
        })
        session = SessionContext.create(LocalStorage(blocker / "ls.json"))

        result = run_api(lambda api: AuthService(api, notifier, session).login("hr@acme.com", "pw"))

        assert not result.success
        assert not session.is_authenticated
        assert len(_messages(notifier, Level.ERROR)) == 1

    def test_student_registration_logs_in(self, backend, storage, notifier, run_api):
        backend.on("POST", "/auth/register", {"message": "ok"}, status=201)
        backend.on("POST", "/auth/login", {
            "user": {"id": "s1", "email": "asha@x.edu", "role": "STUDENT", "firstName": "Asha", "lastName": "Rao"},
            "token": "tok",
        })
        session = SessionContext.create(storage)

        result = run_api(
            lambda api: AuthService(api, notifier, session).register(Role.STUDENT, "Asha Rao", "asha@x.edu", "secret1")
        )

        assert result.success
        assert result.data["outcome"].next_path == "/student/dashboard"
        body = backend.calls_to("POST", "/auth/register")[0]["json"]
        assert body == {
            "email": "asha@x.edu", "password": "secret1", "role": "STUDENT", "firstName": "Asha", "lastName": "Rao",
        }
        assert session.identity.display_name == "Asha Rao"

    def test_company_registration_waits_for_approval(self, backend, storage, notifier, run_api):
        backend.on("POST", "/auth/register", {"message": "ok"}, status=201)
        session = SessionContext.create(storage)

        result = run_api(
            lambda api: AuthService(api, notifier, session).register(Role.COMPANY, "Acme", "hr@acme.com", "secret1")
        )

        assert result.success
        assert result.data["outcome"].next_path == "/login"
        assert not session.is_authenticated
        assert backend.calls_to("POST", "/auth/login") == []
        assert "pending admin approval" in _messages(notifier, Level.SUCCESS)[0]

    def test_short_password_rejected_locally(self, backend, storage, notifier, run_api):
        session = SessionContext.create(storage)
        result = run_api(lambda api: AuthService(api, notifier, session).register(Role.STUDENT, "A", "a@x.edu", "123"))
        assert not result.success
        assert backend.calls == []

    def test_logout_clears_identity_and_token(self, storage):
        session = SessionContext.create(storage)
        session.login({"id": "u1", "email": "a@x.edu", "role": "student"}, "tok")
        AuthService.logout(session, ApiGateway("http://localhost:5000/api", storage))

        assert not session.is_authenticated
        assert storage.get_item(TOKEN_KEY) is None


class TestReportsAndDashboards:

    def test_export_csv(self, backend, notifier, run_api):
        backend.on("GET", "/admin/reports/placement", [{
            "studentName": "Asha Rao", "studentEmail": "asha@x.com", "companyName": "Acme",
            "jobTitle": "SWE", "status": "HIRED", "appliedAt": "2024-03-05T10:00:00Z",
        }])
        result = run_api(lambda api: ReportService(api, notifier).export_csv())

        assert result.success
        assert result.data["rows"] == 1
        assert result.data["filename"].startswith("placement_report_")
        assert result.data["content"].endswith('"HIRED","3/5/2024"')
        assert _messages(notifier, Level.SUCCESS) == ["Placement report generated successfully!"]

    def test_export_failure_message(self, backend, notifier, run_api):
        backend.on("GET", "/admin/reports/placement", {"error": "Forbidden"}, status=403)
        result = run_api(lambda api: ReportService(api, notifier).export_csv())
        assert not result.success
        assert _messages(notifier, Level.ERROR) == ["Failed to generate report: Forbidden"]

    def test_stats_derivations(self, backend, notifier, run_api):
        backend.on("GET", "/admin/stats", {
            "totalStudents": 3, "totalCompanies": 4, "totalJobs": 10, "totalApplications": 7, "placedStudents": 2,
        })
        state = run_api(lambda api: ReportService(api, notifier).load_stats())
        assert state.stats.placement_rate == 67
        assert state.stats.applications_per_student == 2.3
        assert state.stats.jobs_per_company == 2.5

    def test_dashboard_failure_returns_empty_stats(self, backend, notifier, run_api):
        backend.on("GET", "/analytics/student", {"error": "boom"}, status=500)
        stats = run_api(lambda api: DashboardService(api, notifier).student())
        assert stats.total_applied == 0
        assert stats.recent_applications == []
