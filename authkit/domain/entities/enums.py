"""
Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Global user role"""

    USER = "USER"
    ADMIN = "ADMIN"


class SecurityEventType(str, Enum):
    """Closed set of security-relevant occurrences recorded by the event sink"""

    AUTH_SUCCESS = "AUTH_SUCCESS"
    AUTH_FAILURE = "AUTH_FAILURE"

    REGISTRATION = "REGISTRATION"
    REGISTRATION_ATTEMPT = "REGISTRATION_ATTEMPT"
    REGISTRATION_SUCCESS = "REGISTRATION_SUCCESS"
    REGISTRATION_EMAIL_EXISTS = "REGISTRATION_EMAIL_EXISTS"
    REGISTRATION_ERROR = "REGISTRATION_ERROR"

    LOGIN_ATTEMPT = "LOGIN_ATTEMPT"
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILURE = "LOGIN_FAILURE"
    LOGIN_ATTEMPT_INVALID_EMAIL = "LOGIN_ATTEMPT_INVALID_EMAIL"
    LOGIN_INVALID_EMAIL = "LOGIN_INVALID_EMAIL"
    LOGIN_INVALID_PASSWORD = "LOGIN_INVALID_PASSWORD"
    LOGIN_INACTIVE_USER = "LOGIN_INACTIVE_USER"
    LOGIN_UNVERIFIED_EMAIL = "LOGIN_UNVERIFIED_EMAIL"
    LOGIN_ERROR = "LOGIN_ERROR"

    TOKEN_REFRESH = "TOKEN_REFRESH"
    TOKEN_REFRESH_ERROR = "TOKEN_REFRESH_ERROR"
    LOGOUT = "LOGOUT"
    LOGOUT_ERROR = "LOGOUT_ERROR"

    PASSWORD_RESET_REQUEST = "PASSWORD_RESET_REQUEST"
    PASSWORD_RESET_SUCCESS = "PASSWORD_RESET_SUCCESS"
    PASSWORD_RESET_INVALID_EMAIL = "PASSWORD_RESET_INVALID_EMAIL"
    PASSWORD_RESET_INVALID_TOKEN = "PASSWORD_RESET_INVALID_TOKEN"
    PASSWORD_RESET_ERROR = "PASSWORD_RESET_ERROR"

    EMAIL_VERIFICATION = "EMAIL_VERIFICATION"
    EMAIL_VERIFICATION_SUCCESS = "EMAIL_VERIFICATION_SUCCESS"
    EMAIL_VERIFICATION_INVALID_TOKEN = "EMAIL_VERIFICATION_INVALID_TOKEN"
    EMAIL_VERIFICATION_ALREADY_VERIFIED = "EMAIL_VERIFICATION_ALREADY_VERIFIED"
    EMAIL_VERIFICATION_ERROR = "EMAIL_VERIFICATION_ERROR"
    EMAIL_VERIFICATION_RESEND_SUCCESS = "EMAIL_VERIFICATION_RESEND_SUCCESS"
    EMAIL_VERIFICATION_RESEND_ALREADY_VERIFIED = "EMAIL_VERIFICATION_RESEND_ALREADY_VERIFIED"
    EMAIL_VERIFICATION_RESEND_INVALID_EMAIL = "EMAIL_VERIFICATION_RESEND_INVALID_EMAIL"
    EMAIL_VERIFICATION_RESEND_ERROR = "EMAIL_VERIFICATION_RESEND_ERROR"

    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    SUSPICIOUS_ACTIVITY = "SUSPICIOUS_ACTIVITY"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
