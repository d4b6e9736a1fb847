from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

from ..adapters.api.endpoints import PortalAPI
from ..adapters.api.gateway import ApiGateway
from ..infra.config import PortalSettings
from ..infra.exceptions import handle_async_errors
from ..infra.logging import LoggerManager, get_logger, set_log_level
from ..infra.storage import LocalStorage
from .notifications import NotificationChannel
from .session import SessionContext

T = TypeVar("T")

logger = get_logger(__name__)


@dataclass
class PortalContext:
    """Everything a page needs, created once per UI session and passed explicitly."""
    settings: PortalSettings
    storage: LocalStorage
    session: SessionContext
    notifier: NotificationChannel = field(default_factory=NotificationChannel)

    @classmethod
    def create(cls, settings: PortalSettings) -> "PortalContext":
        if settings.log_file:
            LoggerManager.set_log_file(settings.log_file)
        set_log_level(settings.log_level)
        storage = LocalStorage(settings.storage_file)
        return cls(settings=settings, storage=storage, session=SessionContext.create(storage))

    def gateway(self) -> ApiGateway:
        return ApiGateway(self.settings.api_base_url, self.storage, backend_url=self.settings.backend_url)

    def call(self, fn: Callable[[PortalAPI], Awaitable[T]]) -> T:
        """Run one UI action: open a gateway, await ``fn(api)``, close the gateway."""

        @handle_async_errors(logger)
        async def _main() -> T:
            async with self.gateway() as gw:
                return await fn(PortalAPI(gw))

        return asyncio.run(_main())

    def dispose(self) -> None:
        self.session.dispose()
        self.notifier.drain()
