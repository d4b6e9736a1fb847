"""
集成测试：API 网关（鉴权头、错误载荷、上传、媒体地址）
"""
import asyncio

import pytest

from placement_portal.adapters.api.gateway import ApiGateway
from placement_portal.infra.exceptions import RequestError, ValidationError
from placement_portal.infra.storage import TOKEN_KEY

from conftest import job_dict


class TestRequest:

    def test_bearer_token_attached(self, backend, storage, run_api):
        storage.set_item(TOKEN_KEY, "tok-123")
        backend.on("GET", "/jobs", [job_dict("J1")])

        jobs = run_api(lambda api: api.jobs.list_all())

        assert [j.id for j in jobs] == ["J1"]
        call = backend.calls_to("GET", "/jobs")[0]
        assert call["headers"]["Authorization"] == "Bearer tok-123"
        assert call["headers"]["Content-Type"] == "application/json"

    def test_no_token_no_authorization_header(self, backend, run_api):
        backend.on("GET", "/jobs", [])
        run_api(lambda api: api.jobs.list_all())
        assert "Authorization" not in backend.calls[0]["headers"]

    def test_json_body_sent(self, backend, run_api):
        backend.on("POST", "/applications/apply", {"id": "A1"}, status=201)
        run_api(lambda api: api.applications.apply("J1"))
        assert backend.calls[0]["json"] == {"jobId": "J1"}

    def test_error_payload_message(self, backend, run_api):
        backend.on("POST", "/auth/login", {"error": "Invalid credentials"}, status=401)
        with pytest.raises(RequestError) as exc:
            run_api(lambda api: api.auth.login("a@x.com", "bad"))
        assert exc.value.message == "Invalid credentials"
        assert exc.value.status_code == 401

    def test_error_without_payload_uses_fallback(self, backend, run_api):
        backend.on("GET", "/jobs", raw="<html>oops</html>", status=500)
        with pytest.raises(RequestError) as exc:
            run_api(lambda api: api.jobs.list_all())
        assert exc.value.message == "Request failed"
        assert exc.value.status_code == 500

    def test_empty_success_body(self, backend, run_api):
        backend.on("DELETE", "/jobs/J1")
        assert run_api(lambda api: api.jobs.delete("J1")) is None

    def test_non_list_response_rejected(self, backend, run_api):
        backend.on("GET", "/admin/users", {"users": []})
        with pytest.raises(ValidationError):
            run_api(lambda api: api.admin.users())

    def test_non_object_list_entry_rejected(self, backend, run_api):
        backend.on("GET", "/jobs", [job_dict("J1"), "not-an-object"])
        with pytest.raises(ValidationError) as exc:
            run_api(lambda api: api.jobs.list_all())
        assert exc.value.message == "Expected an object at /jobs[1]"

    def test_non_object_response_rejected(self, backend, run_api):
        backend.on("GET", "/admin/stats", [1])
        with pytest.raises(ValidationError):
            run_api(lambda api: api.admin.stats())

    def test_malformed_login_response(self, backend, run_api):
        backend.on("POST", "/auth/login", {"user": {"id": "u1"}})
        with pytest.raises(ValidationError):
            run_api(lambda api: api.auth.login("a@x.com", "pw"))


def test_network_error_is_request_error(storage):
    async def _main():
        # nothing listens on port 1
        async with ApiGateway("http://127.0.0.1:1/api", storage) as gateway:
            await gateway.request("GET", "/jobs")

    with pytest.raises(RequestError) as exc:
        asyncio.run(_main())
    assert exc.value.message == "Request failed"
    assert exc.value.status_code is None


class TestUpload:

    def test_multipart_without_json_content_type(self, backend, storage, run_api):
        storage.set_item(TOKEN_KEY, "tok")
        backend.on("POST", "/upload/resume", {"resumeUrl": "/uploads/r.pdf"})

        run_api(lambda api: api.students.upload_resume("cv.pdf", b"%PDF-1.4 data", "application/pdf"))

        call = backend.calls[0]
        assert call["headers"]["Content-Type"].startswith("multipart/form-data")
        assert call["headers"]["Authorization"] == "Bearer tok"
        assert call["form"]["resume"] == ("cv.pdf", "application/pdf", b"%PDF-1.4 data")

    def test_upload_fallback_message(self, backend, run_api):
        backend.on("POST", "/upload/resume", raw="", status=413)
        with pytest.raises(RequestError) as exc:
            run_api(lambda api: api.students.upload_resume("cv.pdf", b"x", "application/pdf"))
        assert exc.value.message == "Upload failed"


class TestTokenAndMedia:

    def test_media_url(self, storage):
        gateway = ApiGateway("http://localhost:5000/api/", storage, backend_url="http://localhost:5000/")
        assert gateway.base_url == "http://localhost:5000/api"
        assert gateway.media_url("/uploads/a.pdf") == "http://localhost:5000/uploads/a.pdf"
        assert gateway.media_url("uploads/a.pdf") == "http://localhost:5000/uploads/a.pdf"
        assert gateway.media_url("https://cdn.example.com/a.pdf") == "https://cdn.example.com/a.pdf"
        assert gateway.media_url(None) == ""

    def test_clear_token(self, storage):
        storage.set_item(TOKEN_KEY, "tok")
        gateway = ApiGateway("http://localhost:5000/api", storage)
        assert gateway.token == "tok"
        gateway.clear_token()
        assert gateway.token is None
        assert storage.get_item(TOKEN_KEY) is None


class TestReadEndpoints:

    def test_get_job(self, backend, run_api):
        backend.on("GET", "/jobs/J7", job_dict("J7", "Data Engineer", salary="10 LPA"))
        job = run_api(lambda api: api.jobs.get("J7"))
        assert job.title == "Data Engineer"
        assert job.salary == "10 LPA"

    def test_platform_analytics(self, backend, run_api):
        backend.on("GET", "/analytics/stats", {"totalStudents": 4, "placedStudents": 1})
        stats = run_api(lambda api: api.analytics.platform())
        assert stats.placement_rate == 25
