"""
SMTP mail sender.

Renders the four transactional templates with string.Template (values
HTML-escaped in the html part) and hands
them to smtplib on a worker thread. Without SMTP_HOST it runs in dev
mode: the message is logged (recipient redacted) instead of sent.
"""

import asyncio
import html
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from string import Template
from typing import Dict, Optional

from authkit.app.services import mail
from authkit.app.services.mail import IMailSender, redact_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailTemplate:
    subject: str
    text: Template
    html: Template


_VERIFICATION_TEXT = Template(
    "Hello $first_name,\n\n"
    "Please confirm your email address by opening the link below:\n\n"
    "$verification_url\n\n"
    "The link expires in 24 hours. If you did not create an account, "
    "you can ignore this message.\n"
)
_VERIFICATION_HTML = Template(
    "<p>Hello $first_name,</p>"
    "<p>Please confirm your email address:</p>"
    '<p><a href="$verification_url">Verify my email</a></p>'
    "<p>The link expires in 24 hours.</p>"
)

TEMPLATES: Dict[str, MailTemplate] = {
    mail.EMAIL_VERIFICATION: MailTemplate(
        subject="Verify your email address - Auth Starter",
        text=_VERIFICATION_TEXT,
        html=_VERIFICATION_HTML,
    ),
    mail.EMAIL_VERIFICATION_RESEND: MailTemplate(
        subject="New verification link - Auth Starter",
        text=_VERIFICATION_TEXT,
        html=_VERIFICATION_HTML,
    ),
    mail.PASSWORD_RESET: MailTemplate(
        subject="Reset your password - Auth Starter",
        text=Template(
            "Hello $first_name,\n\n"
            "A password reset was requested for your account. "
            "Open the link below to choose a new password:\n\n"
            "$reset_url\n\n"
            "The link expires in 1 hour and can be used once. If you did "
            "not ask for this, no action is needed.\n"
        ),
        html=Template(
            "<p>Hello $first_name,</p>"
            "<p>A password reset was requested for your account.</p>"
            '<p><a href="$reset_url">Choose a new password</a></p>'
            "<p>The link expires in 1 hour and can be used once.</p>"
        ),
    ),
    mail.ADMIN_NOTIFICATION: MailTemplate(
        subject="New user registration - Auth Starter",
        text=Template(
            "A new user registered.\n\n"
            "Email: $user_email\n"
            "Name: $first_name $last_name\n"
            "Registered at: $registered_at\n"
        ),
        html=Template(
            "<p>A new user registered.</p>"
            "<ul><li>Email: $user_email</li>"
            "<li>Name: $first_name $last_name</li>"
            "<li>Registered at: $registered_at</li></ul>"
        ),
    ),
}


class SmtpMailSender(IMailSender):
    def __init__(
        self,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        smtp_use_tls: bool = True,
        from_email: Optional[str] = None,
        timeout_seconds: float = 10.0,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.from_email = from_email or smtp_user
        self.timeout_seconds = timeout_seconds

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host and self.from_email)

    def render(self, template_id: str, variables: Dict[str, str]) -> MIMEMultipart:
        template = TEMPLATES[template_id]
        msg = MIMEMultipart("alternative")
        msg["Subject"] = template.subject
        msg.attach(MIMEText(template.text.safe_substitute(variables), "plain"))
        escaped = {key: html.escape(str(value)) for key, value in variables.items()}
        msg.attach(MIMEText(template.html.safe_substitute(escaped), "html"))
        return msg

    async def send(self, to: str, template_id: str, variables: Dict[str, str]) -> bool:
        if template_id not in TEMPLATES:
            logger.error(f"Unknown mail template '{template_id}'")
            return False

        msg = self.render(template_id, variables)
        msg["To"] = to

        if not self.is_configured:
            logger.info(
                f"Mail dev mode, not sending '{msg['Subject']}' to {redact_email(to)}"
            )
            return True

        msg["From"] = self.from_email
        return await asyncio.to_thread(self._deliver, to, msg)

    def _deliver(self, to: str, msg: MIMEMultipart) -> bool:
        context = ssl.create_default_context()
        try:
            if self.smtp_use_tls:
                with smtplib.SMTP(
                    self.smtp_host, self.smtp_port, timeout=self.timeout_seconds
                ) as server:
                    server.starttls(context=context)
                    if self.smtp_user and self.smtp_password:
                        server.login(self.smtp_user, self.smtp_password)
                    server.sendmail(self.from_email, to, msg.as_string())
            else:
                with smtplib.SMTP_SSL(
                    self.smtp_host,
                    self.smtp_port,
                    context=context,
                    timeout=self.timeout_seconds,
                ) as server:
                    if self.smtp_user and self.smtp_password:
                        server.login(self.smtp_user, self.smtp_password)
                    server.sendmail(self.from_email, to, msg.as_string())
        except smtplib.SMTPAuthenticationError:
            logger.error(f"SMTP authentication failed for {self.smtp_host}")
            return False
        except (smtplib.SMTPException, ssl.SSLError, OSError) as exc:
            logger.error(
                f"SMTP delivery to {redact_email(to)} failed: {type(exc).__name__}"
            )
            return False

        logger.info(f"Mail sent to {redact_email(to)}")
        return True
