import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()

DEFAULT_RATE_LIMITS = {
    "registration": "3/15 minutes",
    "login": "5/15 minutes",
    "password_reset_request": "3/hour",
    "password_reset_submit": "5/hour",
    "email_verification": "3/5 minutes",
    "email_verification_resend": "2/5 minutes",
}


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./authkit.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:4200"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    CREATE_TABLES = bool(data.get("CREATE_TABLES", 1))

    # Tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ACCESS_TOKEN_EXPIRES_MINUTES = data.get("ACCESS_TOKEN_EXPIRES_MINUTES", 15)
    REFRESH_TOKEN_TTL_DAYS = data.get("REFRESH_TOKEN_TTL_DAYS", 7)
    PASSWORD_RESET_TTL_MINUTES = data.get("PASSWORD_RESET_TTL_MINUTES", 60)
    EMAIL_VERIFICATION_TTL_HOURS = data.get("EMAIL_VERIFICATION_TTL_HOURS", 24)

    # argon2id
    ARGON2_TIME_COST = data.get("ARGON2_TIME_COST", 3)
    ARGON2_MEMORY_COST = data.get("ARGON2_MEMORY_COST", 65536)
    ARGON2_PARALLELISM = data.get("ARGON2_PARALLELISM", 4)

    # Security events
    LOG_SALT = data.get("LOG_SALT", "dev-log-salt-change-in-production")
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Mail
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = data.get("SMTP_PORT", 587)
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", 1))
    EMAIL_FROM = data.get("EMAIL_FROM", "noreply@localhost")
    ADMIN_EMAIL = data.get("ADMIN_EMAIL", "")
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:4200")
    # Returns the raw reset token from /auth/request-reset; honoured in development only
    EXPOSE_RESET_TOKEN = bool(data.get("EXPOSE_RESET_TOKEN", 0))
    MAIL_TIMEOUT_SECONDS = data.get("MAIL_TIMEOUT_SECONDS", 10)

    # Rate limiting
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", 1))
    RATE_LIMITS = {**DEFAULT_RATE_LIMITS, **data.get("RATE_LIMITS", {})}
