from authkit.adapter.repositories.token_repository import SqlTokenRepository
from authkit.app.repositories.refresh_token_repository import IRefreshTokenRepository
from authkit.domain.entities import RefreshToken


class RefreshTokenRepository(SqlTokenRepository[RefreshToken], IRefreshTokenRepository):
    """RefreshToken repository implementation using SQLModel"""

    model = RefreshToken
