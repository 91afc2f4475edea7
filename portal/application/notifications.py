import time
from typing import Any, Callable

from ..domain.entities import Notification, SUCCESS, ERROR
from ..infrastructure.metrics import notifications_total


class NotificationCenter:
    """Одно место под уведомление.

    Новое уведомление вытесняет старое вместе с его сроком жизни,
    поэтому устаревший таймер не может стереть более свежее сообщение.
    """

    def __init__(self, duration: float, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self.clock = clock
        self._current: Notification | None = None
        self._expires_at: float = 0.0

    def push(self, message: str, kind: str = SUCCESS, details: dict[str, Any] | None = None,
             duration: float | None = None) -> Notification:
        note = Notification(
            message=message,
            kind=kind,
            duration=self.duration if duration is None else duration,
            details=details or {},
        )
        self._current = note
        self._expires_at = self.clock() + note.duration
        notifications_total.labels(kind=kind).inc()
        return note

    def success(self, message: str, **details: Any) -> Notification:
        return self.push(message, SUCCESS, details)

    def error(self, message: str, **details: Any) -> Notification:
        return self.push(message, ERROR, details)

    def current(self) -> Notification | None:
        if self._current is not None and self.clock() >= self._expires_at:
            self._current = None
        return self._current

    def dismiss(self) -> None:
        self._current = None
