"""
Register Use Case

Creates an unverified account and mails the verification link.
"""

import logging
from typing import Optional

from authkit.app.repositories.errors import DuplicateEmailError
from authkit.app.services import mail
from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.password_strength import evaluate
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.domain.entities import SecurityEventType, User, UserRole, normalize_email
from authkit.result import Error, Result, Return
from .dtos import RegisterCommand, RegisterResponse, UserInfo
from .errors import internal_error

logger = logging.getLogger(__name__)

EMAIL_EXISTS_MESSAGE = "An account with this email already exists"


class RegisterUseCase:
    """
    Use case for self-service registration.

    Business Rules:
    - Email is normalized (trimmed, lowercased) and must be unique
    - Password must satisfy every complexity rule, personal info included
    - Account starts active, unverified, role USER
    - One email verification token is issued with the account
    - Registration never logs the user in (no tokens returned)
    - Mail failures do not fail registration
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        command: RegisterCommand,
        request_info: Optional[RequestInfo] = None,
    ) -> Result[RegisterResponse]:
        email = normalize_email(command.email)
        events = self.services.events
        events.emit(SecurityEventType.REGISTRATION_ATTEMPT, request_info, email=email)

        try:
            return await self._register(command, email, request_info)
        except Exception as exc:
            return internal_error(
                events,
                SecurityEventType.REGISTRATION_ERROR,
                request_info,
                exc,
                "An error occurred during registration",
                email=email,
            )

    async def _register(
        self,
        command: RegisterCommand,
        email: str,
        request_info: Optional[RequestInfo],
    ) -> Result[RegisterResponse]:
        events = self.services.events

        async with self.uow:
            existing = await self.uow.users.get_by_email(email)
            if existing:
                events.emit(
                    SecurityEventType.REGISTRATION_EMAIL_EXISTS, request_info, email=email
                )
                return Return.err(Error("EMAIL_ALREADY_EXISTS", EMAIL_EXISTS_MESSAGE))

            evaluation = evaluate(
                command.password,
                email=email,
                first_name=command.first_name,
                last_name=command.last_name,
            )
            if not evaluation.valid:
                events.emit(
                    SecurityEventType.AUTH_FAILURE,
                    request_info,
                    email=email,
                    details={"flow": "registration", "reason": "weak_credential"},
                )
                return Return.err(
                    Error("WEAK_PASSWORD", evaluation.message, evaluation.reasons)
                )

            password_hash = await self.services.hasher.hash_async(command.password)
            now = self.services.clock.now()
            user = User(
                email=email,
                password_hash=password_hash,
                first_name=command.first_name,
                last_name=command.last_name,
                role=UserRole.USER,
                is_active=True,
                is_email_verified=False,
                created_at=now,
                updated_at=now,
            )

            try:
                user = await self.uow.users.create(user)
            except DuplicateEmailError:
                # Lost a race against a concurrent registration
                events.emit(
                    SecurityEventType.REGISTRATION_EMAIL_EXISTS, request_info, email=email
                )
                return Return.err(Error("EMAIL_ALREADY_EXISTS", EMAIL_EXISTS_MESSAGE))

            verification_token = await self.services.verification_tokens.issue(
                self.uow.email_verification_tokens, user.id
            )

            await self.uow.commit()

        frontend_url = self.services.frontend_url
        await self.services.mailer.deliver(
            user.email,
            mail.EMAIL_VERIFICATION,
            {
                "first_name": user.first_name or "",
                "verification_url": f"{frontend_url}/verify-email?token={verification_token}",
            },
        )

        if self.services.admin_email:
            await self.services.mailer.deliver(
                self.services.admin_email,
                mail.ADMIN_NOTIFICATION,
                {
                    "user_email": user.email,
                    "first_name": user.first_name or "",
                    "last_name": user.last_name or "",
                    "registered_at": user.created_at.isoformat(),
                },
            )

        events.emit(
            SecurityEventType.REGISTRATION_SUCCESS,
            request_info,
            user_id=user.id,
            email=user.email,
        )
        logger.info(f"New user registered: {user.id}")

        return Return.ok(
            RegisterResponse(
                user=UserInfo.from_user(user),
                message=(
                    "Registration successful. Please check your email "
                    "to verify your account."
                ),
                requires_email_verification=True,
            )
        )
