import pytest

from authkit.app.services import mail
from tests.fixtures.flows import API, register


@pytest.mark.asyncio
async def test_register_success(client, mail_sender):
    # Act
    response = await register(client, email="  Alice@Example.com ")

    # Assert
    assert response.status_code == 201
    data = response.json()
    assert data["requires_email_verification"] is True
    assert data["user"]["email"] == "alice@example.com"
    assert data["user"]["role"] == "USER"
    assert data["user"]["is_email_verified"] is False
    assert "access_token" not in data
    assert "password_hash" not in data["user"]

    message = mail_sender.last(mail.EMAIL_VERIFICATION, to="alice@example.com")
    assert message["variables"]["verification_url"].startswith(
        "http://frontend.test/verify-email?token="
    )


@pytest.mark.asyncio
async def test_register_duplicate_email_case_insensitive(client):
    await register(client, email="alice@example.com")

    response = await register(client, email="ALICE@example.com")

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_register_weak_password_lists_reasons(client):
    # Act
    response = await register(client, password="abc")

    # Assert
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "WEAK_PASSWORD"
    assert "at least 12 characters" in error["details"]
    assert "no character sequences (abc, 123, etc.)" in error["details"]


@pytest.mark.asyncio
async def test_register_invalid_email_is_validation_error(client):
    response = await client.post(
        f"{API}/auth/register",
        json={"email": "not-an-email", "password": "Str0ng!Pass1357"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_register_survives_mail_outage(client, mail_sender):
    mail_sender.fail = True

    response = await register(client)

    assert response.status_code == 201
