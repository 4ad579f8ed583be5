"""
Support Desk

Accepts support messages and answers with a generated confirmation id.
Messages are only logged; there is no ticket storage.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from fooddelivery.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class SupportTicket:
    ticket_id: str
    email: str
    message: str


class SupportDesk:
    MAX_MESSAGE_LENGTH = 2000

    def __init__(self, ticket_prefix: str = "SUP"):
        self.ticket_prefix = ticket_prefix

    def _generate_ticket_id(self) -> str:
        return f"{self.ticket_prefix}-{uuid.uuid4().hex[:8].upper()}"

    def submit(self, email: Optional[str], message: Optional[str]) -> SupportTicket:
        """
        Accept a support request.

        Raises:
            ValidationError: Email or message is missing or blank, or the
                message is longer than MAX_MESSAGE_LENGTH
        """
        missing = [
            name for name, value in (("email", email), ("message", message))
            if value is None or not value.strip()
        ]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
        if len(message.strip()) > self.MAX_MESSAGE_LENGTH:
            raise ValidationError(f"Message must be at most {self.MAX_MESSAGE_LENGTH} characters")

        ticket = SupportTicket(
            ticket_id=self._generate_ticket_id(),
            email=email.strip(),
            message=message.strip(),
        )
        logger.info(f"Support ticket {ticket.ticket_id} opened by {ticket.email}")
        return ticket
