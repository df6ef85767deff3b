from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from authkit.domain.entities import User

ALGORITHM = "HS256"


class AccessTokenIssuer:
    """Short-lived, stateless, signed access tokens (HS256 JWT)."""

    def __init__(self, secret: str, expires_delta: timedelta = timedelta(minutes=15)):
        self.secret = secret
        self.expires_delta = expires_delta

    def issue(self, user: User) -> str:
        """
        Generate JWT access token

        Args:
            user: Authenticated user

        Returns:
            JWT token string with sub, email, role, iat, exp claims
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "exp": now + self.expires_delta,
            "iat": now,
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> Optional[dict]:
        """
        Verify and decode JWT token

        Returns:
            Decoded payload dict or None if invalid or expired
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except JWTError:
            return None
