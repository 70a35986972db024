"""
Fire-and-forget notification channel (toasts).

Components call ``notify(kind, message)`` and never consume a result. The
NotificationCenter logs every notification and keeps the most recent ones so
the UI can drain and display them.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Deque, List, Optional, Protocol

from techtales.logging_config import get_logger

logger = get_logger(__name__)


class NotificationKind(str, Enum):
    """Severity of a user-facing notification."""
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """One toast."""
    kind: NotificationKind
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier(Protocol):
    """Anything that accepts notify(kind, message)."""

    def notify(self, kind: NotificationKind, message: str) -> None:
        ...


class NotificationCenter:
    """
    Buffered notifier.

    Holds at most ``capacity`` notifications; older ones are dropped when the
    buffer is full.
    """

    def __init__(self, capacity: Optional[int] = None):
        if capacity is None:
            from techtales.config import get_settings
            capacity = get_settings().notification_buffer_size
        self._pending: Deque[Notification] = deque(maxlen=capacity)

    def notify(self, kind: NotificationKind, message: str) -> None:
        kind = NotificationKind(kind)
        if kind == NotificationKind.ERROR:
            logger.warning("Notification: %s", message, extra={"kind": kind.value})
        else:
            logger.info("Notification: %s", message, extra={"kind": kind.value})
        self._pending.append(Notification(kind=kind, message=message))

    def success(self, message: str) -> None:
        self.notify(NotificationKind.SUCCESS, message)

    def error(self, message: str) -> None:
        self.notify(NotificationKind.ERROR, message)

    def peek(self) -> List[Notification]:
        """Pending notifications, oldest first, without consuming them."""
        return list(self._pending)

    def drain(self) -> List[Notification]:
        """Return and clear pending notifications, oldest first."""
        items = list(self._pending)
        self._pending.clear()
        return items

    def __len__(self) -> int:
        return len(self._pending)
