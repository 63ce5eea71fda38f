"""Notice service for presenting recoverable errors to the user."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from restaurant_order_service.errors import OrderServiceError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


@dataclass(frozen=True)
class Notice:
    """A transient, user-visible message.

    Attributes:
        message: Text shown to the user
        level: Severity label ("error", "warning" or "info")
        created_at: When the notice was raised
        expires_at: When the notice should disappear
    """

    message: str
    level: str
    created_at: datetime
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        return now < self.expires_at


class NoticeService:
    """Service for queueing transient notices.

    Domain errors are shown with their own message. Anything unexpected is
    logged with its traceback and shown as a generic message.
    """

    def __init__(self, ttl_seconds: float = 3.0) -> None:
        """Initialize the NoticeService.

        Args:
            ttl_seconds: How long a notice stays visible
        """
        self.ttl = timedelta(seconds=ttl_seconds)
        self._notices: list[Notice] = []

    def notify(self, message: str, level: str = "info", now: datetime | None = None) -> Notice:
        """Queue a notice.

        Args:
            message: Text to show
            level: Severity label
            now: Override for the current time

        Returns:
            The queued Notice
        """
        created_at = now or datetime.now(UTC)
        self._prune(created_at)
        notice = Notice(
            message=message,
            level=level,
            created_at=created_at,
            expires_at=created_at + self.ttl,
        )
        self._notices.append(notice)
        return notice

    def handle_error(self, error: Exception, now: datetime | None = None) -> Notice:
        """Log an error and queue a notice describing it.

        Args:
            error: The error to present
            now: Override for the current time

        Returns:
            The queued Notice
        """
        if isinstance(error, OrderServiceError):
            logger.warning(f"{type(error).__name__}: {error.message}")
            return self.notify(error.message, level="error", now=now)

        logger.error(f"Unexpected error: {error}", exc_info=error)
        return self.notify(GENERIC_ERROR_MESSAGE, level="error", now=now)

    def active_notices(self, now: datetime | None = None) -> list[Notice]:
        """Drop expired notices and return the remaining ones.

        Args:
            now: Override for the current time

        Returns:
            Notices that have not expired, oldest first
        """
        self._prune(now or datetime.now(UTC))
        return list(self._notices)

    def clear(self) -> None:
        self._notices.clear()

    def _prune(self, now: datetime) -> None:
        self._notices = [n for n in self._notices if n.is_active(now)]
