from uuid import uuid4

import pytest
import pytest_asyncio

from tests.fixtures.flows import API, PASSWORD, bearer, login, seed_admin, signed_in_user


@pytest_asyncio.fixture
async def admin_headers(client, db_session, services):
    await seed_admin(db_session, services)
    response = await login(client, email="root@example.com")
    assert response.status_code == 200, response.text
    return bearer(response.json())


# ============================================================================
# Profile
# ============================================================================


@pytest.mark.asyncio
async def test_get_and_update_profile(client, mail_sender):
    # Arrange
    body = await signed_in_user(client, mail_sender)

    # Act
    updated = await client.patch(
        f"{API}/users/profile", json={"first_name": "Alicia"}, headers=bearer(body)
    )
    fetched = await client.get(f"{API}/users/profile", headers=bearer(body))

    # Assert
    assert updated.status_code == 200
    assert fetched.json()["first_name"] == "Alicia"
    assert fetched.json()["last_name"] == "Martin"


@pytest.mark.asyncio
async def test_profile_cannot_change_role(client, mail_sender):
    body = await signed_in_user(client, mail_sender)

    response = await client.patch(
        f"{API}/users/profile", json={"role": "ADMIN"}, headers=bearer(body)
    )

    assert response.status_code == 200
    assert response.json()["role"] == "USER"


# ============================================================================
# Administration
# ============================================================================


@pytest.mark.asyncio
async def test_admin_routes_refuse_regular_users(client, mail_sender):
    body = await signed_in_user(client, mail_sender)

    response = await client.get(f"{API}/users", headers=bearer(body))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_admin_routes_require_authentication(client):
    response = await client.get(f"{API}/users")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_admin_creates_and_lists_users(client, admin_headers):
    # Act
    created = await client.post(
        f"{API}/users",
        json={
            "email": "Bob@Example.com",
            "password": PASSWORD,
            "first_name": "Bob",
            "is_email_verified": True,
        },
        headers=admin_headers,
    )
    listed = await client.get(f"{API}/users", headers=admin_headers)

    # Assert
    assert created.status_code == 201
    assert created.json()["email"] == "bob@example.com"
    assert created.json()["role"] == "USER"
    assert listed.json()["total"] == 2
    assert {u["email"] for u in listed.json()["users"]} == {
        "root@example.com",
        "bob@example.com",
    }

    # Created verified, so Bob can log in straight away
    assert (await login(client, email="bob@example.com")).status_code == 200


@pytest.mark.asyncio
async def test_admin_create_rejects_duplicate(client, admin_headers):
    response = await client.post(
        f"{API}/users",
        json={"email": "root@example.com", "password": PASSWORD},
        headers=admin_headers,
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_admin_promotes_user(client, mail_sender, admin_headers):
    body = await signed_in_user(client, mail_sender)
    user_id = body["user"]["id"]

    response = await client.patch(
        f"{API}/users/{user_id}", json={"role": "ADMIN"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["role"] == "ADMIN"


@pytest.mark.asyncio
async def test_deactivation_locks_user_out(client, mail_sender, admin_headers):
    # Arrange
    body = await signed_in_user(client, mail_sender)
    user_id = body["user"]["id"]

    # Act
    response = await client.patch(
        f"{API}/users/{user_id}/deactivate", headers=admin_headers
    )

    # Assert
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    denied_login = await login(client)
    assert denied_login.status_code == 401
    assert denied_login.json()["error"]["code"] == "ACCOUNT_DISABLED"

    denied_refresh = await client.post(
        f"{API}/auth/refresh",
        json={"user_id": user_id, "refresh_token": body["refresh_token"]},
    )
    assert denied_refresh.status_code == 401

    reactivated = await client.patch(
        f"{API}/users/{user_id}/activate", headers=admin_headers
    )
    assert reactivated.json()["is_active"] is True
    assert (await login(client)).status_code == 200


@pytest.mark.asyncio
async def test_admin_deletes_user(client, mail_sender, admin_headers):
    # Arrange
    body = await signed_in_user(client, mail_sender)
    user_id = body["user"]["id"]

    # Act
    deleted = await client.delete(f"{API}/users/{user_id}", headers=admin_headers)
    missing = await client.get(f"{API}/users/{user_id}", headers=admin_headers)

    # Assert
    assert deleted.status_code == 200
    assert deleted.json()["email"] == "alice@example.com"
    assert missing.status_code == 404
    assert (await client.get(f"{API}/auth/me", headers=bearer(body))).status_code == 401


@pytest.mark.asyncio
async def test_admin_get_unknown_user(client, admin_headers):
    response = await client.get(f"{API}/users/{uuid4()}", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,suffix,payload",
    [
        ("PATCH", "", {"role": "USER"}),
        ("PATCH", "/deactivate", None),
    ],
)
async def test_admin_token_stops_working_after_demotion(
    client, mail_sender, admin_headers, method, suffix, payload
):
    # Arrange - Alice is promoted and signs in with an ADMIN role claim
    body = await signed_in_user(client, mail_sender)
    user_id = body["user"]["id"]
    await client.patch(f"{API}/users/{user_id}", json={"role": "ADMIN"}, headers=admin_headers)
    promoted = (await login(client)).json()
    assert (await client.get(f"{API}/users", headers=bearer(promoted))).status_code == 200

    # Act
    changed = await client.request(
        method, f"{API}/users/{user_id}{suffix}", json=payload, headers=admin_headers
    )
    response = await client.get(f"{API}/users", headers=bearer(promoted))

    # Assert - the access token still carries role=ADMIN
    assert changed.status_code == 200
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"
