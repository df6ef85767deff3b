from abc import ABC, abstractmethod

from authkit.app.repositories.email_verification_token_repository import (
    IEmailVerificationTokenRepository,
)
from authkit.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from authkit.app.repositories.refresh_token_repository import IRefreshTokenRepository
from authkit.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    refresh_tokens: IRefreshTokenRepository
    password_reset_tokens: IPasswordResetTokenRepository
    email_verification_tokens: IEmailVerificationTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
