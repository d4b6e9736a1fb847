"""
API 网关客户端

所有对后端的调用都经过这里：附加 Bearer token、序列化 JSON 请求体、
把非成功响应统一转换为 RequestError。一次调用就是一次请求-响应往返：
不重试、不退避、不设置额外超时。
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import aiohttp

from ...infra.exceptions import RequestError
from ...infra.logging import get_logger
from ...infra.storage import TOKEN_KEY, LocalStorage

logger = get_logger(__name__)

UPLOAD_FAILED = "Upload failed"


class ApiGateway:
    """aiohttp-based gateway to the placement REST backend."""

    def __init__(
        self,
        base_url: str,
        storage: LocalStorage,
        backend_url: str = "",
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.backend_url = backend_url.rstrip("/")
        self.storage = storage
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self.session

    async def close(self) -> None:
        if self.session is not None and self._owns_session and not self.session.closed:
            await self.session.close()
        if self._owns_session:
            self.session = None

    # ------------------------------------------------------------------
    # token / media
    # ------------------------------------------------------------------

    @property
    def token(self) -> Optional[str]:
        return self.storage.get_item(TOKEN_KEY) or None

    def clear_token(self) -> None:
        self.storage.remove_item(TOKEN_KEY)

    def media_url(self, path: Optional[str]) -> str:
        if not path:
            return ""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.backend_url}{path if path.startswith('/') else '/' + path}"

    def _auth_headers(self) -> Dict[str, str]:
        token = self.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    # ------------------------------------------------------------------
    # requests
    # ------------------------------------------------------------------

    async def request(self, method: str, path: str, body: Any = None) -> Any:
        """JSON request; returns the decoded response body."""
        session = await self._ensure_session()
        headers = {"Content-Type": "application/json", **self._auth_headers()}
        data = json.dumps(body) if body is not None else None
        logger.debug(f"[API] {method} {path}")
        try:
            async with session.request(method, f"{self.base_url}{path}", data=data, headers=headers) as response:
                return await self._read(response, path, RequestError.DEFAULT_MESSAGE)
        except aiohttp.ClientError as e:
            logger.warning(f"[API] {method} {path} 网络错误: {e}")
            raise RequestError(path=path) from e

    async def upload(
        self,
        path: str,
        field_name: str,
        filename: str,
        content: bytes,
        content_type: str,
    ) -> Any:
        """Multipart upload; the JSON content type is deliberately not sent."""
        session = await self._ensure_session()
        form = aiohttp.FormData()
        form.add_field(field_name, content, filename=filename, content_type=content_type)
        logger.debug(f"[API] POST {path} (multipart, {len(content)} bytes)")
        try:
            async with session.post(f"{self.base_url}{path}", data=form, headers=self._auth_headers()) as response:
                return await self._read(response, path, UPLOAD_FAILED)
        except aiohttp.ClientError as e:
            logger.warning(f"[API] POST {path} 上传失败: {e}")
            raise RequestError(UPLOAD_FAILED, path=path) from e

    async def _read(self, response: aiohttp.ClientResponse, path: str, fallback: str) -> Any:
        text = await response.text()
        if not 200 <= response.status < 300:
            message = fallback
            try:
                payload = json.loads(text)
                if isinstance(payload, dict) and payload.get("error"):
                    message = str(payload["error"])
            except ValueError:
                pass
            logger.info(f"[API] {path} -> {response.status}: {message}")
            raise RequestError(message, status_code=response.status, path=path)
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            raise RequestError(fallback, status_code=response.status, path=path) from e
