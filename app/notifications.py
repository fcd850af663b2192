import logging
import threading
from typing import List, Protocol, Tuple

logger = logging.getLogger("localmeat")


class Notifier(Protocol):
    def notify(self, title: str, body: str) -> None:
        ...


class LoggingNotifier:
    """Default sink: writes each notification to the application log."""

    def notify(self, title: str, body: str) -> None:
        logger.info("Notification: %s - %s", title, body)


class RecordingNotifier:
    """Keeps delivered notifications in memory, oldest first."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sent: List[Tuple[str, str]] = []

    def notify(self, title: str, body: str) -> None:
        with self._lock:
            self._sent.append((title, body))

    @property
    def sent(self) -> List[Tuple[str, str]]:
        with self._lock:
            return list(self._sent)

    def titles(self) -> List[str]:
        return [title for title, _ in self.sent]

    def clear(self) -> None:
        with self._lock:
            self._sent.clear()


def deliver(notifier: Notifier, notifications) -> None:
    """Hand notifications to the sink. Delivery errors are logged, never raised."""
    for notification in notifications:
        try:
            notifier.notify(notification.title, notification.body)
        except Exception as e:
            logger.warning("Error delivering notification %r: %s", notification.title, e)
