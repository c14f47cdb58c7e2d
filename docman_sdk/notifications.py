# docman_sdk/notifications.py
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import List, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("docman_sdk.notifications")


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class Notification(BaseModel):
    message: str
    level: NotificationLevel = NotificationLevel.ERROR
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(frozen=True)


@runtime_checkable
class NotificationSink(Protocol):
    """Приемник пользовательских уведомлений (toast)."""

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.ERROR) -> None: ...


class LoggingNotificationSink:
    def notify(self, message: str, level: NotificationLevel = NotificationLevel.ERROR) -> None:
        log_level = logging.ERROR if level == NotificationLevel.ERROR else logging.INFO
        logger.log(log_level, f"Notification ({level.value}): {message}")


class InMemoryNotificationSink:
    """
    Копит уведомления до следующего рендера; drain() отдает и очищает очередь.
    """

    def __init__(self):
        self._pending: List[Notification] = []

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.ERROR) -> None:
        self._pending.append(Notification(message=message, level=level))
        logger.debug(f"Queued {level.value} notification: {message}")

    @property
    def pending(self) -> List[Notification]:
        return list(self._pending)

    def drain(self) -> List[Notification]:
        drained, self._pending = self._pending, []
        return drained
