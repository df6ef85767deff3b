from uuid import uuid4

import pytest

from authkit.app.services import mail
from authkit.app.use_cases.auth import ResendVerificationUseCase
from authkit.domain.entities import SecurityEventType, User, UserRole
from tests.fixtures.assertions import emitted_types

GENERIC = "If an account with this email exists, a verification link has been sent"


@pytest.fixture
def user():
    return User(
        id=uuid4(),
        email="alice@example.com",
        password_hash="digest",
        first_name="Alice",
        role=UserRole.USER,
        is_email_verified=False,
    )


@pytest.mark.asyncio
async def test_resend_issues_new_link(mock_uow, services, user, request_info):
    # Arrange
    mock_uow.users.get_by_email.return_value = user
    services.verification_tokens.issue.return_value = "fresh-token"
    use_case = ResendVerificationUseCase(mock_uow, services)

    # Act
    result = await use_case.execute("ALICE@example.com", request_info)

    # Assert
    assert result.is_ok()
    assert result.value.message == GENERIC
    services.verification_tokens.issue.assert_called_once_with(
        mock_uow.email_verification_tokens, user.id
    )
    mock_uow.commit.assert_called_once()
    to, template_id, variables = services.mailer.deliver.call_args.args
    assert (to, template_id) == ("alice@example.com", mail.EMAIL_VERIFICATION_RESEND)
    assert variables["verification_url"].endswith("/verify-email?token=fresh-token")
    assert emitted_types(services) == [SecurityEventType.EMAIL_VERIFICATION_RESEND_SUCCESS]


@pytest.mark.asyncio
async def test_resend_for_unknown_email(mock_uow, services):
    use_case = ResendVerificationUseCase(mock_uow, services)

    result = await use_case.execute("ghost@example.com")

    assert result.value.message == GENERIC
    services.verification_tokens.issue.assert_not_called()
    services.mailer.deliver.assert_not_called()
    assert emitted_types(services) == [
        SecurityEventType.EMAIL_VERIFICATION_RESEND_INVALID_EMAIL
    ]


@pytest.mark.asyncio
async def test_resend_for_verified_account(mock_uow, services, user):
    # Arrange
    user.is_email_verified = True
    mock_uow.users.get_by_email.return_value = user
    use_case = ResendVerificationUseCase(mock_uow, services)

    # Act
    result = await use_case.execute("alice@example.com")

    # Assert
    assert result.error.code == "ALREADY_VERIFIED"
    services.verification_tokens.issue.assert_not_called()
    assert emitted_types(services) == [
        SecurityEventType.EMAIL_VERIFICATION_RESEND_ALREADY_VERIFIED
    ]


@pytest.mark.asyncio
async def test_resend_unexpected_failure(mock_uow, services, user):
    mock_uow.users.get_by_email.return_value = user
    services.verification_tokens.issue.side_effect = RuntimeError("db down")
    use_case = ResendVerificationUseCase(mock_uow, services)

    result = await use_case.execute("alice@example.com")

    assert result.error.code == "INTERNAL_ERROR"
    mock_uow.commit.assert_not_called()
    assert emitted_types(services) == [SecurityEventType.EMAIL_VERIFICATION_RESEND_ERROR]
