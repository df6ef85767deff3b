from authkit.app.repositories.token_repository import ITokenRepository
from authkit.domain.entities import EmailVerificationToken


class IEmailVerificationTokenRepository(ITokenRepository[EmailVerificationToken]):
    """
    EmailVerificationToken repository interface - application layer

    delete_by_user_id removes unused tokens only; used ones are kept as history.
    """
