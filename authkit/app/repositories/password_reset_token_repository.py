from authkit.app.repositories.token_repository import ITokenRepository
from authkit.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ITokenRepository[PasswordResetToken]):
    """PasswordResetToken repository interface - application layer"""
