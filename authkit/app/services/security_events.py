"""
Security Event Sink

Sanitizes, classifies and emits security events. record() is
fire-and-forget: nothing it does may raise into the calling flow.

Sanitization:
- email and user id become a keyed digest truncated to 12 hex chars
- IPv4 keeps the first 3 octets, IPv6 the first 4 groups
- user agent collapses to a browser family
- detail keys matching the sensitivity denylist are redacted,
  long strings are elided
"""

import hashlib
import hmac
import ipaddress
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from authkit.domain.entities import SecurityEvent, SecurityEventType

logger = logging.getLogger(__name__)

DIGEST_LENGTH = 12
MAX_DETAIL_LENGTH = 100
SENSITIVE_KEYS = ("password", "token", "secret", "key", "authorization")
REDACTED = "[REDACTED]"

E = SecurityEventType

SEVERITY: Dict[SecurityEventType, int] = {
    # error
    E.ACCOUNT_LOCKED: logging.ERROR,
    E.REGISTRATION_ERROR: logging.ERROR,
    E.LOGIN_ERROR: logging.ERROR,
    E.TOKEN_REFRESH_ERROR: logging.ERROR,
    E.LOGOUT_ERROR: logging.ERROR,
    E.PASSWORD_RESET_ERROR: logging.ERROR,
    E.EMAIL_VERIFICATION_ERROR: logging.ERROR,
    E.EMAIL_VERIFICATION_RESEND_ERROR: logging.ERROR,
    # warn
    E.AUTH_FAILURE: logging.WARNING,
    E.LOGIN_FAILURE: logging.WARNING,
    E.SUSPICIOUS_ACTIVITY: logging.WARNING,
    E.RATE_LIMIT_EXCEEDED: logging.WARNING,
    E.LOGIN_INVALID_PASSWORD: logging.WARNING,
    E.LOGIN_INVALID_EMAIL: logging.WARNING,
    E.LOGIN_ATTEMPT_INVALID_EMAIL: logging.WARNING,
    E.LOGIN_INACTIVE_USER: logging.WARNING,
    E.LOGIN_UNVERIFIED_EMAIL: logging.WARNING,
    E.PASSWORD_RESET_INVALID_EMAIL: logging.WARNING,
    E.PASSWORD_RESET_INVALID_TOKEN: logging.WARNING,
    E.EMAIL_VERIFICATION_INVALID_TOKEN: logging.WARNING,
    E.EMAIL_VERIFICATION_RESEND_INVALID_EMAIL: logging.WARNING,
    # info
    E.AUTH_SUCCESS: logging.INFO,
    E.PASSWORD_RESET_SUCCESS: logging.INFO,
    E.PASSWORD_RESET_REQUEST: logging.INFO,
    E.EMAIL_VERIFICATION: logging.INFO,
    E.EMAIL_VERIFICATION_SUCCESS: logging.INFO,
    E.EMAIL_VERIFICATION_ALREADY_VERIFIED: logging.INFO,
    E.EMAIL_VERIFICATION_RESEND_SUCCESS: logging.INFO,
    E.EMAIL_VERIFICATION_RESEND_ALREADY_VERIFIED: logging.INFO,
    E.REGISTRATION: logging.INFO,
    E.REGISTRATION_ATTEMPT: logging.INFO,
    E.REGISTRATION_SUCCESS: logging.INFO,
    E.REGISTRATION_EMAIL_EXISTS: logging.INFO,
    E.LOGIN_ATTEMPT: logging.INFO,
    E.LOGIN_SUCCESS: logging.INFO,
}


def severity_of(event_type: SecurityEventType) -> int:
    return SEVERITY.get(event_type, logging.DEBUG)


def hash_identifier(value: str, salt: str) -> str:
    digest = hmac.new(salt.encode(), value.encode(), hashlib.sha256).hexdigest()
    return digest[:DIGEST_LENGTH]


def mask_ip(ip_address: str) -> str:
    try:
        address = ipaddress.ip_address(ip_address.strip())
    except ValueError:
        return "masked-ip"

    if address.version == 6 and address.ipv4_mapped is not None:
        address = address.ipv4_mapped

    if address.version == 4:
        octets = str(address).split(".")
        return ".".join(octets[:3]) + ".***"
    groups = address.exploded.split(":")
    return ":".join(groups[:4]) + ":****"


def mask_user_agent(user_agent: str) -> str:
    # Order matters: Edge and Opera UAs also contain "Chrome", Chrome UAs contain "Safari".
    if "Edg" in user_agent:
        return "Edge"
    if "OPR" in user_agent or "Opera" in user_agent:
        return "Opera"
    if "Firefox" in user_agent:
        return "Firefox"
    if "Chrome" in user_agent:
        return "Chrome"
    if "Safari" in user_agent:
        return "Safari"
    return "Unknown-Browser"


def sanitize_details(details: Dict[str, Any]) -> Dict[str, Any]:
    sanitized = {}
    for key, value in details.items():
        lowered = str(key).lower()
        if any(sensitive in lowered for sensitive in SENSITIVE_KEYS):
            sanitized[key] = REDACTED
        elif isinstance(value, dict):
            sanitized[key] = sanitize_details(value)
        elif isinstance(value, str) and len(value) > MAX_DETAIL_LENGTH:
            sanitized[key] = value[:MAX_DETAIL_LENGTH] + "..."
        else:
            sanitized[key] = value
    return sanitized


class MonitoringSink(ABC):
    """External destination for sanitized events (production only)"""

    @abstractmethod
    def forward(self, event: Dict[str, Any], level: int) -> None:
        pass


class SecurityEventSink:
    def __init__(
        self,
        salt: str,
        monitoring: Optional[MonitoringSink] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.salt = salt
        self.monitoring = monitoring
        self.log = log or logger

    def sanitize(self, event: SecurityEvent) -> Dict[str, Any]:
        sanitized: Dict[str, Any] = {
            "type": event.type.value,
            "timestamp": event.timestamp.isoformat(),
        }
        if event.email:
            sanitized["user_hash"] = hash_identifier(event.email.lower(), self.salt)
        if event.user_id:
            sanitized["user_id_hash"] = hash_identifier(str(event.user_id), self.salt)
        if event.ip_address:
            sanitized["masked_ip"] = mask_ip(event.ip_address)
        if event.user_agent:
            sanitized["masked_user_agent"] = mask_user_agent(event.user_agent)
        if event.details:
            sanitized["details"] = sanitize_details(event.details)
        return sanitized

    def record(self, event: SecurityEvent) -> None:
        try:
            sanitized = self.sanitize(event)
            level = severity_of(event.type)
            self.log.log(
                level,
                f"[SECURITY] {event.type.value} {json.dumps(sanitized, default=str)}",
            )
        except Exception:
            logger.exception("Failed to record security event")
            return

        if self.monitoring is not None:
            try:
                self.monitoring.forward(sanitized, level)
            except Exception:
                logger.debug("Security monitoring forward failed", exc_info=True)

    def emit(
        self,
        event_type: SecurityEventType,
        request_info=None,
        user_id: Any = None,
        email: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Build and record an event in one call."""
        self.record(
            SecurityEvent(
                type=event_type,
                user_id=str(user_id) if user_id is not None else None,
                email=email,
                ip_address=getattr(request_info, "ip_address", None),
                user_agent=getattr(request_info, "user_agent", None),
                details=details,
            )
        )

    def rate_limit_exceeded(
        self, ip_address: str, endpoint: str, user_agent: Optional[str] = None
    ) -> None:
        self.record(
            SecurityEvent(
                type=SecurityEventType.RATE_LIMIT_EXCEEDED,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"endpoint": endpoint},
            )
        )

    def suspicious_activity(
        self,
        description: str,
        user_id: Any = None,
        email: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> None:
        self.record(
            SecurityEvent(
                type=SecurityEventType.SUSPICIOUS_ACTIVITY,
                user_id=str(user_id) if user_id is not None else None,
                email=email,
                ip_address=ip_address,
                details={"description": description},
            )
        )
