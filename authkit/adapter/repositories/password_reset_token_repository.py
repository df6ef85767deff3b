from authkit.adapter.repositories.token_repository import SqlTokenRepository
from authkit.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from authkit.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(
    SqlTokenRepository[PasswordResetToken], IPasswordResetTokenRepository
):
    """PasswordResetToken repository implementation using SQLModel"""

    model = PasswordResetToken
