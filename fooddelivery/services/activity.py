"""
Activity Tracker

Remembers when each known user last logged in.
"""

import logging
from datetime import datetime
from threading import RLock
from typing import Callable

from fooddelivery.core.exceptions import NotFoundError, UserNotFoundError
from fooddelivery.models import ActivityRecord, email_key
from fooddelivery.services.profiles import ProfileDirectory

logger = logging.getLogger(__name__)


class ActivityTracker:
    """Last-login timestamps per user, upserted on every login event."""

    ACTIVE = "Active"

    def __init__(
        self,
        profiles: ProfileDirectory,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._profiles = profiles
        self._records: dict[str, ActivityRecord] = {}
        self._lock = RLock()
        self._clock = clock
        profiles.add_delete_listener(self.forget)

    def record_login(self, email: str) -> ActivityRecord:
        """
        Upsert the last-login timestamp of a user.

        Raises:
            UserNotFoundError: The user is not registered
        """
        user = self._profiles.get(email)
        record = ActivityRecord(email=user.email, last_login=self._clock())
        with self._lock:
            self._records[user.key] = record

        logger.info(f"Recorded login for {user.email}")
        return record

    def forget(self, email: str) -> None:
        """Drop the activity record of a user, if any."""
        with self._lock:
            self._records.pop(email_key(email), None)

    def get_activity(self, email: str) -> ActivityRecord:
        """
        Last recorded login of a registered user.

        Raises:
            UserNotFoundError: The user is not registered (or was deleted)
            NotFoundError: The user exists but never logged in
        """
        if email not in self._profiles:
            raise UserNotFoundError(email)
        with self._lock:
            record = self._records.get(email_key(email))
        if record is None:
            raise NotFoundError(f"No activity recorded for '{email}'")
        return record
