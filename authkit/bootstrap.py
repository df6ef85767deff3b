"""
Assembles the component graph once at process start.

Only this module and the FastAPI wiring read ApplicationConfig; every
component receives its values through its constructor.
"""

from datetime import timedelta
from typing import Optional

from authkit.adapter.services.sentry_monitoring import SentryMonitoringSink
from authkit.adapter.services.smtp_mail_sender import SmtpMailSender
from authkit.app.services.access_tokens import AccessTokenIssuer
from authkit.app.services.clock import Clock
from authkit.app.services.context import AuthServices
from authkit.app.services.credential_hasher import CredentialHasher
from authkit.app.services.mail import IMailSender, Mailer
from authkit.app.services.security_events import SecurityEventSink
from authkit.app.services.token_store import (
    TokenStore,
    email_verification_token_policy,
    password_reset_token_policy,
    refresh_token_policy,
)


def build_services(
    config,
    mail_sender: Optional[IMailSender] = None,
    clock: Optional[Clock] = None,
    hasher: Optional[CredentialHasher] = None,
) -> AuthServices:
    clock = clock or Clock()
    hasher = hasher or CredentialHasher(
        time_cost=config.ARGON2_TIME_COST,
        memory_cost=config.ARGON2_MEMORY_COST,
        parallelism=config.ARGON2_PARALLELISM,
    )

    monitoring = None
    if config.ENABLE_SENTRY and config.ENVIRONMENT == "production":
        monitoring = SentryMonitoringSink()

    if mail_sender is None:
        mail_sender = SmtpMailSender(
            smtp_host=config.SMTP_HOST or None,
            smtp_port=config.SMTP_PORT,
            smtp_user=config.SMTP_USER or None,
            smtp_password=config.SMTP_PASSWORD or None,
            smtp_use_tls=config.SMTP_USE_TLS,
            from_email=config.EMAIL_FROM or None,
            timeout_seconds=config.MAIL_TIMEOUT_SECONDS,
        )

    return AuthServices(
        hasher=hasher,
        clock=clock,
        events=SecurityEventSink(config.LOG_SALT, monitoring=monitoring),
        mailer=Mailer(mail_sender, timeout_seconds=config.MAIL_TIMEOUT_SECONDS),
        access_tokens=AccessTokenIssuer(
            config.JWT_SECRET,
            expires_delta=timedelta(minutes=config.ACCESS_TOKEN_EXPIRES_MINUTES),
        ),
        refresh_tokens=TokenStore(
            refresh_token_policy(timedelta(days=config.REFRESH_TOKEN_TTL_DAYS)),
            hasher,
            clock,
        ),
        reset_tokens=TokenStore(
            password_reset_token_policy(
                timedelta(minutes=config.PASSWORD_RESET_TTL_MINUTES)
            ),
            hasher,
            clock,
        ),
        verification_tokens=TokenStore(
            email_verification_token_policy(
                timedelta(hours=config.EMAIL_VERIFICATION_TTL_HOURS)
            ),
            hasher,
            clock,
        ),
        frontend_url=config.FRONTEND_URL.rstrip("/"),
        admin_email=config.ADMIN_EMAIL or None,
        expose_reset_token=(
            bool(config.EXPOSE_RESET_TOKEN) and config.ENVIRONMENT == "development"
        ),
    )
