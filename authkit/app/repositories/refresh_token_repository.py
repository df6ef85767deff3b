from authkit.app.repositories.token_repository import ITokenRepository
from authkit.domain.entities import RefreshToken


class IRefreshTokenRepository(ITokenRepository[RefreshToken]):
    """RefreshToken repository interface - application layer"""
