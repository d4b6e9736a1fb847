"""
测试公共夹具：本地存储、日志/配置复位，以及基于 aiohttp.web 的假后端。
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

# 添加项目根目录到路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from placement_portal.adapters.api.endpoints import PortalAPI
from placement_portal.adapters.api.gateway import ApiGateway
from placement_portal.app.notifications import NotificationChannel
from placement_portal.infra.config import reset_settings
from placement_portal.infra.logging import LoggerManager
from placement_portal.infra.storage import LocalStorage

API_PREFIX = "/api"


class FakeBackend:
    """Records every request and answers from a (method, path) table."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Tuple[int, Any, Optional[str]]] = {}
        self.calls: List[Dict[str, Any]] = []

    def on(self, method: str, path: str, body: Any = None, status: int = 200, raw: Optional[str] = None) -> None:
        self.routes[(method.upper(), path)] = (status, body, raw)

    def calls_to(self, method: str, path: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["method"] == method.upper() and c["path"] == path]

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self._handle)
        return app

    async def _handle(self, request: web.Request) -> web.StreamResponse:
        path = request.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        entry: Dict[str, Any] = {
            "method": request.method,
            "path": path,
            "headers": dict(request.headers),
        }
        if request.content_type.startswith("multipart/"):
            form = await request.post()
            entry["form"] = {
                k: (v.filename, v.content_type, v.file.read()) if isinstance(v, web.FileField) else v
                for k, v in form.items()
            }
        else:
            text = await request.text()
            entry["json"] = json.loads(text) if text else None
        self.calls.append(entry)

        route = self.routes.get((request.method, path))
        if route is None:
            return web.json_response({"error": "Not found"}, status=404)
        status, body, raw = route
        if raw is not None:
            return web.Response(status=status, text=raw)
        if body is None:
            return web.Response(status=status)
        return web.json_response(body, status=status)


@pytest.fixture(autouse=True)
def _reset_globals():
    reset_settings()
    yield
    reset_settings()
    LoggerManager.reset()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def notifier():
    return NotificationChannel()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def run_api(backend, storage):
    """Run ``fn(api)`` against the fake backend on a fresh event loop."""

    def _run(fn):
        async def _main():
            async with TestServer(backend.make_app()) as server:
                base = str(server.make_url(API_PREFIX))
                media = str(server.make_url("/"))
                async with ApiGateway(base, storage, backend_url=media) as gateway:
                    return await fn(PortalAPI(gateway))

        return asyncio.run(_main())

    return _run


def job_dict(job_id: str, title: str = "Backend Engineer", status: str = "OPEN", **extra) -> Dict[str, Any]:
    d = {
        "id": job_id,
        "title": title,
        "description": "Build APIs",
        "requirements": "Python, SQL, Docker, Kubernetes",
        "status": status,
        "createdAt": "2024-03-05T10:00:00Z",
        "companyId": "c1",
        "company": {"id": "c1", "companyName": "Acme"},
    }
    d.update(extra)
    return d


def application_dict(app_id: str, job_id: str, status: str = "APPLIED") -> Dict[str, Any]:
    return {
        "id": app_id,
        "jobId": job_id,
        "status": status,
        "appliedAt": "2024-03-05T10:00:00Z",
        "job": {"id": job_id, "title": "Backend Engineer", "company": {"companyName": "Acme"}},
        "student": {
            "id": "s1",
            "firstName": "Asha",
            "lastName": "Rao",
            "resumeUrl": "/uploads/asha.pdf",
            "user": {"email": "asha@x.edu"},
        },
    }
