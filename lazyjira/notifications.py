"""Transient toast notifications shown in the status area."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field

INFO = "info"
SUCCESS = "success"
WARNING = "warning"
ERROR = "error"

DEFAULT_DURATIONS: dict[str, float] = {
    INFO: 3.0,
    SUCCESS: 3.0,
    WARNING: 5.0,
    ERROR: 5.0,
}
NOTIFICATION_ICONS: dict[str, str] = {
    INFO: "i",
    SUCCESS: "✓",
    WARNING: "!",
    ERROR: "✗",
}
MAX_NOTIFICATIONS = 5


@dataclass(frozen=True)
class Notification:
    message: str
    kind: str
    created_at: float
    duration: float

    def is_expired(self, now: float | None = None) -> bool:
        current = time.monotonic() if now is None else now
        return current - self.created_at > self.duration

    def label(self) -> str:
        return f"{NOTIFICATION_ICONS.get(self.kind, '')} {self.message}".strip()


@dataclass
class NotificationQueue:
    """Bounded FIFO of notifications; the oldest entry is dropped when full."""

    max_items: int = MAX_NOTIFICATIONS
    duration_override: float | None = None
    items: deque[Notification] = field(default_factory=deque)

    def push(self, message: str, kind: str = INFO, now: float | None = None) -> Notification:
        if kind not in DEFAULT_DURATIONS:
            raise ValueError(f"unknown notification kind: {kind!r}")
        duration = self.duration_override if self.duration_override is not None else DEFAULT_DURATIONS[kind]
        notification = Notification(
            message=message,
            kind=kind,
            created_at=time.monotonic() if now is None else now,
            duration=duration,
        )
        self.items.append(notification)
        while len(self.items) > self.max_items:
            self.items.popleft()
        return notification

    def expire(self, now: float | None = None) -> bool:
        """Drop expired notifications and return whether anything changed."""
        current = time.monotonic() if now is None else now
        before = len(self.items)
        self.items = deque(item for item in self.items if not item.is_expired(current))
        return len(self.items) != before

    def latest(self) -> Notification | None:
        return self.items[-1] if self.items else None

    def __len__(self) -> int:
        return len(self.items)
