"""Exceptions raised by the notification and reminder engine."""

from __future__ import annotations


class RecordFetchError(RuntimeError):
    """The record store could not return the candidate due-date records."""


class NotificationSweepError(RuntimeError):
    """A retention delete phase failed.

    ``deleted_read`` and ``deleted_unread`` hold the rows removed by the phases
    that completed before the failure; those deletions are not rolled back.
    """

    def __init__(
        self, message: str, *, deleted_read: int = 0, deleted_unread: int = 0
    ) -> None:
        super().__init__(message)
        self.deleted_read = deleted_read
        self.deleted_unread = deleted_unread


class NotificationNotFoundError(ValueError):
    """The requested notification does not exist."""


class NotificationAccessError(PermissionError):
    """The notification belongs to another user."""


__all__ = [
    "NotificationAccessError",
    "NotificationNotFoundError",
    "NotificationSweepError",
    "RecordFetchError",
]
