"""
Profile Directory

Registered users keyed by email. Email matching is case-insensitive while the
address is stored exactly as registered. Registration and login hand out
placeholder session tokens (see fooddelivery.services.tokens).
"""

import logging
from dataclasses import dataclass
from datetime import date
from threading import RLock
from typing import Callable, List, Optional

from fooddelivery.core.exceptions import DuplicateError, UnauthorizedError, UserNotFoundError
from fooddelivery.models import User, email_key
from fooddelivery.services.tokens import BaseTokenService

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


@dataclass
class ProfileSummary:
    total_users: int = 0
    oldest_user_name: str = NOT_AVAILABLE
    youngest_user_name: str = NOT_AVAILABLE
    average_age: float = 0.0


@dataclass
class ProfilePatch:
    """Fields replaced by ``ProfileDirectory.update``."""
    name: str
    address: str
    phone: str
    birth_date: date


class ProfileDirectory:
    """Thread-safe in-memory user registry."""

    def __init__(
        self,
        tokens: BaseTokenService,
        today: Callable[[], date] = date.today,
    ):
        self._tokens = tokens
        self._users: dict[str, User] = {}
        self._lock = RLock()
        self._today = today
        self._delete_listeners: list[Callable[[str], None]] = []

    def add_delete_listener(self, listener: Callable[[str], None]) -> None:
        """Call ``listener(email)`` after every successful deletion."""
        self._delete_listeners.append(listener)

    def __contains__(self, email: str) -> bool:
        with self._lock:
            return email_key(email) in self._users

    def register(self, user: User) -> str:
        """
        Store a new user and issue a session token.

        Raises:
            DuplicateError: The email is already registered
        """
        with self._lock:
            if user.key in self._users:
                logger.warning(f"Registration rejected, email taken: {user.email}")
                raise DuplicateError(f"User '{user.email}' already exists")
            self._users[user.key] = user

        logger.info(f"Registered user {user.email}")
        return self._tokens.issue(user.email)

    def authenticate(self, email: str, password: str) -> str:
        with self._lock:
            user = self._users.get(email_key(email))
        if user is None or user.password != password:
            logger.warning(f"Failed login for {email}")
            raise UnauthorizedError("Invalid email or password")
        return self._tokens.issue(user.email)

    def get(self, email: str) -> User:
        with self._lock:
            user = self._users.get(email_key(email))
        if user is None:
            raise UserNotFoundError(email)
        return user

    def list(self) -> List[User]:
        """All users in registration order."""
        with self._lock:
            return list(self._users.values())

    def update(self, email: str, patch: ProfilePatch) -> User:
        """Replace name, address, phone and birth date. Email and password stay."""
        with self._lock:
            user = self.get(email)
            user.name = patch.name
            user.address = patch.address
            user.phone = patch.phone
            user.birth_date = patch.birth_date

        logger.info(f"Updated profile of {user.email}")
        return user

    def delete(self, email: str) -> None:
        with self._lock:
            removed = self._users.pop(email_key(email), None)
        if removed is None:
            raise UserNotFoundError(email)
        logger.info(f"Deleted user {removed.email}")

        for listener in self._delete_listeners:
            listener(removed.email)

    def summary(self) -> ProfileSummary:
        """
        Aggregate statistics over all users.

        Oldest is the earliest birth date and youngest the latest; on ties the
        user registered first wins. Average age is rounded to one decimal.
        """
        users = self.list()
        if not users:
            return ProfileSummary()

        today = self._today()
        oldest: Optional[User] = None
        youngest: Optional[User] = None
        for user in users:
            if oldest is None or user.birth_date < oldest.birth_date:
                oldest = user
            if youngest is None or user.birth_date > youngest.birth_date:
                youngest = user

        ages = [user.age_on(today) for user in users]
        return ProfileSummary(
            total_users=len(users),
            oldest_user_name=oldest.name,
            youngest_user_name=youngest.name,
            average_age=round(sum(ages) / len(ages), 1),
        )
