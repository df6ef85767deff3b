"""
Explicitly constructed context objects handed to the use cases.
"""

from dataclasses import dataclass
from typing import Optional

from authkit.app.services.access_tokens import AccessTokenIssuer
from authkit.app.services.clock import Clock
from authkit.app.services.credential_hasher import CredentialHasher
from authkit.app.services.mail import Mailer
from authkit.app.services.security_events import SecurityEventSink
from authkit.app.services.token_store import TokenStore


@dataclass(frozen=True)
class RequestInfo:
    """Client facts recorded on security events"""

    ip_address: str = "unknown"
    user_agent: str = "unknown"


@dataclass
class AuthServices:
    """The component graph, assembled once at process start."""

    hasher: CredentialHasher
    clock: Clock
    events: SecurityEventSink
    mailer: Mailer
    access_tokens: AccessTokenIssuer
    refresh_tokens: TokenStore
    reset_tokens: TokenStore
    verification_tokens: TokenStore
    frontend_url: str = "http://localhost:4200"
    admin_email: Optional[str] = None
    expose_reset_token: bool = False
