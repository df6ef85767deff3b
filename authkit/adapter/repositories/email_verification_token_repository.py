from authkit.adapter.repositories.token_repository import SqlTokenRepository
from authkit.app.repositories.email_verification_token_repository import (
    IEmailVerificationTokenRepository,
)
from authkit.domain.entities import EmailVerificationToken


class EmailVerificationTokenRepository(
    SqlTokenRepository[EmailVerificationToken], IEmailVerificationTokenRepository
):
    """EmailVerificationToken repository implementation using SQLModel"""

    model = EmailVerificationToken
