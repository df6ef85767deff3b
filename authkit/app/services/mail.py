"""
Outbound mail contract.

Delivery never fails a flow: Mailer.deliver bounds the wait and turns every
error or timeout into a logged False.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict

logger = logging.getLogger(__name__)

EMAIL_VERIFICATION = "email-verification"
EMAIL_VERIFICATION_RESEND = "email-verification-resend"
PASSWORD_RESET = "password-reset"
ADMIN_NOTIFICATION = "admin-notification"


class IMailSender(ABC):
    @abstractmethod
    async def send(self, to: str, template_id: str, variables: Dict[str, str]) -> bool:
        """Render template_id with variables and deliver it to `to`"""
        pass


def redact_email(email: str) -> str:
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class Mailer:
    def __init__(self, sender: IMailSender, timeout_seconds: float = 10.0):
        self.sender = sender
        self.timeout_seconds = timeout_seconds

    async def deliver(self, to: str, template_id: str, variables: Dict[str, str]) -> bool:
        try:
            sent = await asyncio.wait_for(
                self.sender.send(to, template_id, variables),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Mail '{template_id}' to {redact_email(to)} timed out")
            return False
        except Exception as exc:
            logger.warning(
                f"Mail '{template_id}' to {redact_email(to)} failed: {type(exc).__name__}"
            )
            return False

        if not sent:
            logger.warning(f"Mail '{template_id}' to {redact_email(to)} was not delivered")
        return bool(sent)
