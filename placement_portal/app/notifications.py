from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List


class Level(Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    level: Level
    message: str
    created_at: str = field(default_factory=lambda: datetime.now().isoformat(timespec="seconds"))


class NotificationChannel:
    """Success/error events published by services, drained by the UI."""

    def __init__(self) -> None:
        self._pending: List[Notification] = []

    def publish(self, level: Level, message: str) -> Notification:
        n = Notification(level, message)
        self._pending.append(n)
        return n

    def success(self, message: str) -> Notification:
        return self.publish(Level.SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.publish(Level.ERROR, message)

    def info(self, message: str) -> Notification:
        return self.publish(Level.INFO, message)

    def peek(self) -> List[Notification]:
        return list(self._pending)

    def drain(self) -> List[Notification]:
        items, self._pending = self._pending, []
        return items

    def __len__(self) -> int:
        return len(self._pending)
