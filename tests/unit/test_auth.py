"""End-to-end tests for the auth client and repository against the mock backend."""

from __future__ import annotations

import logging

import httpx
import pytest

from restbase.errors.api_error import ApiServerError, ApiUnauthorizedError
from restbase.mock import VALID_PASSWORD, create_mock_app
from restbase.mock.backend import USERS_UPDATED_AT
from restbase.models.auth import LoginRequest, UserDTO
from restbase.result import Failure, Success
from restbase.services.auth_client import AuthClient
from restbase.services.auth_repository import AuthRepository
from restbase.storage import InMemoryTokenStore

EMAIL = "Petra.Dare@hotmail.com"


# ---------------------------------------------------------------------------
# Mock backend
# ---------------------------------------------------------------------------


class TestMockBackend:
    @pytest.mark.asyncio
    async def test_device_id_is_required(self):
        transport = httpx.ASGITransport(app=create_mock_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/user")

        assert response.status_code == 400
        assert response.json() == {
            "message": "device_id is required",
            "result": {"code": 400, "message": "device_id is required"},
        }

    @pytest.mark.asyncio
    async def test_malformed_login_body_is_422(self):
        transport = httpx.ASGITransport(app=create_mock_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.post("/login", params={"device_id": "d"}, content=b"not json")

        assert response.status_code == 422
        assert response.json()["message"].startswith("Validation error")

    @pytest.mark.asyncio
    async def test_rejected_login_does_not_log_email(self, caplog: pytest.LogCaptureFixture):
        transport = httpx.ASGITransport(app=create_mock_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            with caplog.at_level(logging.DEBUG):
                response = await client.post(
                    "/login",
                    params={"device_id": "d"},
                    json={"email": EMAIL, "password": "wrong-password"},
                )

        assert response.status_code == 404
        assert "Rejected login attempt" in caplog.text
        assert EMAIL not in caplog.text
        assert EMAIL.lower() not in caplog.text.lower()


# ---------------------------------------------------------------------------
# AuthClient
# ---------------------------------------------------------------------------


class TestAuthClient:
    @pytest.mark.asyncio
    async def test_login_returns_token_and_user(self, auth_client: AuthClient):
        envelope = await auth_client.login(LoginRequest(email=EMAIL, password=VALID_PASSWORD))

        payload = envelope.unwrap()
        assert payload.access_token
        assert payload.user.full_name == "Cody Beahan"
        assert payload.user.point == 21730
        assert envelope.localized_message("zh_Hant") == "登入成功"
        assert envelope.localized_message("en") == "Login successful"

    @pytest.mark.asyncio
    async def test_wrong_password_is_server_error(self, auth_client: AuthClient):
        with pytest.raises(ApiServerError) as info:
            await auth_client.login(LoginRequest(email=EMAIL, password="wrong"))

        assert info.value.code == 404
        # debug builds prefix the status code
        assert info.value.message == "E404: Cannot find any user with this email & password!"

    @pytest.mark.asyncio
    async def test_login_failed_is_unauthorized(self, auth_client: AuthClient):
        with pytest.raises(ApiUnauthorizedError):
            await auth_client.login_failed()

    @pytest.mark.asyncio
    async def test_me_without_token_is_unauthorized(self, auth_client: AuthClient):
        with pytest.raises(ApiUnauthorizedError):
            await auth_client.me()

    @pytest.mark.asyncio
    async def test_users_list(self, auth_client: AuthClient):
        envelope = await auth_client.users()

        assert [user.id for user in envelope.data] == ["1", "2", "3"]
        assert envelope.ut == USERS_UPDATED_AT
        assert envelope.iso_timestamp == "2024-05-01T10:20:30"

    @pytest.mark.asyncio
    async def test_users_page(self, auth_client: AuthClient):
        first = await auth_client.users_page()
        last = await auth_client.users_page(page=1)

        assert [user.id for user in first.data] == ["1", "2"]
        assert [user.id for user in last.data] == ["3"]
        assert last.page == 1
        assert last.total == 3

    @pytest.mark.asyncio
    async def test_single_user(self, auth_client: AuthClient):
        envelope = await auth_client.user("2")

        assert envelope.unwrap().email == "mina.chan@example.com"

    @pytest.mark.asyncio
    async def test_unknown_user_is_server_error(self, auth_client: AuthClient):
        with pytest.raises(ApiServerError, match="User not found"):
            await auth_client.user("999")


# ---------------------------------------------------------------------------
# AuthRepository
# ---------------------------------------------------------------------------


class TestAuthRepository:
    @pytest.mark.asyncio
    async def test_login_stores_token_and_loads_profile(
        self, auth_repository: AuthRepository, token_store: InMemoryTokenStore
    ):
        result = await auth_repository.login(EMAIL, VALID_PASSWORD)

        assert isinstance(result, Success)
        assert result.value.email == EMAIL
        assert await token_store.get_access_token()
        assert auth_repository.current_user == result.value

    @pytest.mark.asyncio
    async def test_login_failure_returns_failure_and_keeps_no_token(
        self, auth_repository: AuthRepository, token_store: InMemoryTokenStore
    ):
        result = await auth_repository.login(EMAIL, "nope")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ApiServerError)
        assert result.error.code == 404
        assert await token_store.get_access_token() is None
        assert auth_repository.current_user is None

    @pytest.mark.asyncio
    async def test_me_without_login_is_unauthorized_failure(self, auth_repository: AuthRepository):
        result = await auth_repository.me()

        assert isinstance(result.error_or_none(), ApiUnauthorizedError)

    @pytest.mark.asyncio
    async def test_logout_clears_session(
        self, auth_repository: AuthRepository, token_store: InMemoryTokenStore
    ):
        await auth_repository.login(EMAIL, VALID_PASSWORD)

        await auth_repository.logout()

        assert await token_store.get_access_token() is None
        assert auth_repository.current_user is None
        assert isinstance((await auth_repository.me()).error_or_none(), ApiUnauthorizedError)

    @pytest.mark.asyncio
    async def test_users_and_user(self, auth_repository: AuthRepository):
        users = await auth_repository.users()
        missing = await auth_repository.user("42")

        assert [user.full_name for user in users.get_or_raise()] == ["Cody Beahan", "Mina Chan", "Ho Wong"]
        assert all(isinstance(user, UserDTO) for user in users.get_or_raise())
        assert isinstance(missing.error_or_none(), ApiServerError)

