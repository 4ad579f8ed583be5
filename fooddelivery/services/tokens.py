"""
Session Token Service

Design Pattern: Strategy Pattern
    - BaseTokenService defines what the rest of the application needs
    - PlaceholderTokenService is the only implementation shipped

WARNING: PlaceholderTokenService is NOT authentication. A token is the
base64 encoding of ``"{email}:{random id}"``: it carries no signature and no
expiry, anyone can mint one, and "valid" only means "well-formed". It exists
to demonstrate a login flow and must be replaced by a real scheme anywhere
trust matters.
"""

import base64
import binascii
import logging
import uuid
from abc import ABC, abstractmethod

from fooddelivery.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


class BaseTokenService(ABC):
    """Interface for issuing and resolving session tokens."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @abstractmethod
    def issue(self, email: str) -> str:
        """Create a token for ``email``."""
        pass

    @abstractmethod
    def resolve(self, token: str) -> str:
        """
        Return the email a token was issued for.

        Raises:
            UnauthorizedError: The token is malformed
        """
        pass

    def is_valid(self, token: str) -> bool:
        try:
            self.resolve(token)
        except UnauthorizedError:
            return False
        return True


class PlaceholderTokenService(BaseTokenService):
    """Reversible, unsigned, non-expiring tokens. Demo only."""

    SEPARATOR = ":"

    @property
    def provider_name(self) -> str:
        return "placeholder"

    def issue(self, email: str) -> str:
        raw = f"{email}{self.SEPARATOR}{uuid.uuid4()}"
        return base64.b64encode(raw.encode("utf-8")).decode("ascii")

    def resolve(self, token: str) -> str:
        try:
            decoded = base64.b64decode(token, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError, ValueError):
            logger.warning("Rejected malformed token")
            raise UnauthorizedError("Malformed token") from None

        email, separator, _random_id = decoded.rpartition(self.SEPARATOR)
        if not separator or not email:
            logger.warning("Rejected token without an email part")
            raise UnauthorizedError("Malformed token")
        return email
