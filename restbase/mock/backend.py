"""In-process mock of the auth backend.

Serves canned data in the backend's envelope shapes so the client layer can
be exercised end to end (tests mount it through ``httpx.ASGITransport``):

- POST /login: password ``aA12345@`` succeeds, anything else is a 404
- GET  /login_failed: always 401
- GET  /me: profile for the bearer token, 401 without a valid token
- GET  /user: list envelope with an update timestamp
- GET  /user/paged: page envelope, ``page`` query parameter
- GET  /user/{user_id}: single envelope, 404 for unknown ids

Every endpoint requires the ``device_id`` query parameter.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Header, Query

from restbase.mock.errors import (
    InvalidCredentialsError,
    MissingDeviceIdError,
    UnauthenticatedError,
    UserNotFoundError,
    register_error_handlers,
)
from restbase.models.auth import LoginRequest

logger = logging.getLogger(__name__)

VALID_PASSWORD = "aA12345@"
PAGE_SIZE = 2
USERS_UPDATED_AT = "2024-05-01 10:20:30"

_USERS: list[dict[str, Any]] = [
    {
        "id": "1",
        "first_name": "Cody",
        "last_name": "Beahan",
        "email": "Petra.Dare@hotmail.com",
        "avatar": "https://example.com/avatars/1.jpg",
        "district_id": 1,
        "gender": 0,
        "age_group": 27,
        "phone_no": "793.480.7855 x0890",
        "birthday": "2003-09-11T11:37:12.926Z",
        "created_at": "2022-01-06T20:53:21.716Z",
        "member_no": 74594,
        "membership_name": "Member Investment",
        "point": 21730,
    },
    {
        "id": "2",
        "first_name": "Mina",
        "last_name": "Chan",
        "email": "mina.chan@example.com",
        "member_no": 10231,
        "membership_name": "Member",
        "point": 120,
    },
    {
        "id": "3",
        "first_name": "Ho",
        "last_name": "Wong",
        "email": "ho.wong@example.com",
        "member_no": 20077,
        "point": 0,
    },
]


def _ok(data: Any, message: str = "OK", tc: str | None = None) -> dict:
    result: dict[str, Any] = {"code": 0, "message": message}
    if tc is not None:
        result["message_content"] = {"en": message, "tc": tc}
    return {"data": data, "result": result}


def require_device_id(device_id: str | None = Query(default=None)) -> str:
    if not device_id:
        raise MissingDeviceIdError()
    return device_id


def create_auth_router(tokens: dict[str, str]) -> APIRouter:
    """Factory that creates the auth router.

    Parameters
    ----------
    tokens:
        Shared dict mapping issued access token -> user id.
    """
    router = APIRouter(tags=["auth"], dependencies=[Depends(require_device_id)])

    def current_user_id(authorization: str | None = Header(default=None)) -> str:
        scheme, _, token = (authorization or "").partition(" ")
        if scheme.lower() != "bearer" or token not in tokens:
            raise UnauthenticatedError()
        return tokens[token]

    @router.post("/login")
    async def login(body: LoginRequest) -> dict:
        user = next((u for u in _USERS if u["email"].lower() == body.email.lower()), None)
        if user is None or body.password != VALID_PASSWORD:
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        token = secrets.token_urlsafe(24)
        tokens[token] = user["id"]
        return _ok(
            {"user": user, "access_token": token},
            message="Login successful",
            tc="登入成功",
        )

    @router.get("/login_failed")
    async def login_failed() -> dict:
        raise UnauthenticatedError("Invalid credentials")

    @router.get("/me")
    async def me(user_id: str = Depends(current_user_id)) -> dict:
        return _ok(_find_user(user_id))

    @router.get("/user")
    async def users() -> dict:
        return {"ut": USERS_UPDATED_AT, "data": _USERS}

    @router.get("/user/paged")
    async def users_page(page: int = Query(default=0, ge=0)) -> dict:
        start = page * PAGE_SIZE
        return {"data": _USERS[start:start + PAGE_SIZE], "page": page, "total": len(_USERS)}

    @router.get("/user/{user_id}")
    async def user(user_id: str) -> dict:
        return _ok(_find_user(user_id))

    return router


def _find_user(user_id: str) -> dict:
    for user in _USERS:
        if user["id"] == user_id:
            return user
    raise UserNotFoundError()


def create_mock_app() -> FastAPI:
    """Build the mock backend application."""
    app = FastAPI(title="restbase mock backend")
    register_error_handlers(app)

    tokens: dict[str, str] = {}
    app.state.tokens = tokens
    app.include_router(create_auth_router(tokens))
    return app
