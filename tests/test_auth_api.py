"""
EarthSafe API - Users API Tests

Registration, login, token rotation, profile and password reset.
"""

import pytest

from app.models.user import User
from app.services.auth_service import AuthService
from app.utils.security import create_password_reset_token, verify_password


REGISTER_PAYLOAD = {
    "first_name": "Farai",
    "last_name": "Chikwanha",
    "email": "Farai@Example.com",
    "password": "GoldRush2026",
    "phone_number": "+263772000111",
    "role": "cooperative",
}


class TestRegistration:
    @pytest.mark.asyncio
    async def test_register_returns_user_and_tokens(self, client):
        response = await client.post("/api/users/register", json=REGISTER_PAYLOAD)

        assert response.status_code == 201
        data = response.json()
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"
        assert data["user"]["email"] == "farai@example.com"
        assert data["user"]["role"] == "cooperative"
        assert data["user"]["subscription_tier"] == "free"
        assert "hashed_password" not in data["user"]

    @pytest.mark.asyncio
    async def test_unknown_role_falls_back_to_miner(self, client):
        payload = {**REGISTER_PAYLOAD, "role": "astronaut"}
        response = await client.post("/api/users/register", json=payload)

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "miner"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, client):
        await client.post("/api/users/register", json=REGISTER_PAYLOAD)
        response = await client.post(
            "/api/users/register",
            json={**REGISTER_PAYLOAD, "email": "farai@example.com"},
        )

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"]["message"] == "User already exists"

    @pytest.mark.asyncio
    async def test_missing_fields_are_rejected(self, client):
        response = await client.post("/api/users/register", json={"email": "x@example.com"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"]["type"] == "validation_error"
        fields = {d["field"] for d in body["error"]["details"]}
        assert "body.first_name" in fields
        assert "body.password" in fields


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, client, test_user):
        response = await client.post(
            "/api/users/login",
            json={"email": "owner@example.com", "password": "TestPassword123!"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == str(test_user.id)
        assert data["user"]["last_login_at"] is not None
        assert data["expires_in"] > 0

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, test_user):
        response = await client.post(
            "/api/users/login",
            json={"email": "owner@example.com", "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, client):
        response = await client.post(
            "/api/users/login",
            json={"email": "ghost@example.com", "password": "whatever"},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_login_deactivated_account(self, client, db_session, test_user):
        test_user.is_active = False
        await db_session.commit()

        response = await client.post(
            "/api/users/login",
            json={"email": "owner@example.com", "password": "TestPassword123!"},
        )

        assert response.status_code == 403


class TestTokens:
    @pytest.mark.asyncio
    async def test_refresh_rotates_token(self, client):
        registered = (await client.post("/api/users/register", json=REGISTER_PAYLOAD)).json()
        old_refresh = registered["refresh_token"]

        response = await client.post("/api/users/refresh-token", json={"refresh_token": old_refresh})

        assert response.status_code == 200
        new_refresh = response.json()["refresh_token"]
        assert new_refresh != old_refresh

        # The previous refresh token is no longer accepted
        replay = await client.post("/api/users/refresh-token", json={"refresh_token": old_refresh})
        assert replay.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh_requires_token(self, client):
        response = await client.post("/api/users/refresh-token", json={})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_logout_invalidates_refresh_token(self, client):
        registered = (await client.post("/api/users/register", json=REGISTER_PAYLOAD)).json()
        headers = {"Authorization": f"Bearer {registered['access_token']}"}

        response = await client.post("/api/users/logout", headers=headers)
        assert response.status_code == 200

        response = await client.post(
            "/api/users/refresh-token",
            json={"refresh_token": registered["refresh_token"]},
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_protected_route_requires_token(self, client):
        response = await client.get("/api/users/profile")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Not authenticated"

    @pytest.mark.asyncio
    async def test_garbage_token_rejected(self, client):
        response = await client.get(
            "/api/users/profile",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401


class TestProfile:
    @pytest.mark.asyncio
    async def test_get_profile(self, client, auth_headers, test_user):
        response = await client.get("/api/users/profile", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["email"] == test_user.email

    @pytest.mark.asyncio
    async def test_update_profile(self, client, auth_headers):
        response = await client.put(
            "/api/users/profile",
            headers=auth_headers,
            json={"first_name": "Tatenda", "phone_number": "+263779999999"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["first_name"] == "Tatenda"
        assert data["last_name"] == "Moyo"
        assert data["phone_number"] == "+263779999999"


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_forgot_password_does_not_reveal_accounts(self, client, test_user):
        known = await client.post("/api/users/forgot-password", json={"email": "owner@example.com"})
        unknown = await client.post("/api/users/forgot-password", json={"email": "ghost@example.com"})

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json()

    @pytest.mark.asyncio
    async def test_reset_password(self, client, db_session, test_user):
        token = create_password_reset_token(data={"sub": str(test_user.id), "pwv": 0})

        response = await client.post(
            "/api/users/reset-password",
            json={"token": token, "new_password": "BrandNewPass1"},
        )

        assert response.status_code == 200
        user = await db_session.get(User, test_user.id)
        await db_session.refresh(user)
        assert verify_password("BrandNewPass1", user.hashed_password)

    @pytest.mark.asyncio
    async def test_reset_rejects_invalid_token(self, client):
        response = await client.post(
            "/api/users/reset-password",
            json={"token": "bogus", "new_password": "BrandNewPass1"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_reset_token_is_single_use(self, client, db_session, test_user):
        token = create_password_reset_token(data={"sub": str(test_user.id), "pwv": 0})

        first = await client.post(
            "/api/users/reset-password",
            json={"token": token, "new_password": "OwnerChosen1"},
        )
        replay = await client.post(
            "/api/users/reset-password",
            json={"token": token, "new_password": "SomeoneElse1"},
        )

        assert first.status_code == 200
        assert replay.status_code == 400
        user = await db_session.get(User, test_user.id)
        await db_session.refresh(user)
        assert verify_password("OwnerChosen1", user.hashed_password)
        assert user.password_version == 1

    @pytest.mark.asyncio
    async def test_reset_rejects_token_without_version(self, client, test_user):
        token = create_password_reset_token(data={"sub": str(test_user.id)})

        response = await client.post(
            "/api/users/reset-password",
            json={"token": token, "new_password": "BrandNewPass1"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_issued_token_resets_password(self, client, db_session, test_user):
        token = await AuthService(db_session).request_password_reset(test_user.email)

        response = await client.post(
            "/api/users/reset-password",
            json={"token": token, "new_password": "FromEmailLink1"},
        )

        assert response.status_code == 200
