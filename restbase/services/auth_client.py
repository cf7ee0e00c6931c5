"""Typed operations for the authentication endpoints.

- POST /login: exchange credentials for an access token
- GET  /login_failed: always rejected; exercises the 401 path
- GET  /me: profile of the token holder
- GET  /user: all users
- GET  /user/paged: one page of users
- GET  /user/{id}: a single user
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from restbase.cancellation import CancelToken
from restbase.http.client import ApiClient
from restbase.models.auth import LoginRequest, LoginResponse, UserDTO
from restbase.models.envelopes import (
    EnvelopeDecodeError,
    ListEnvelope,
    PageEnvelope,
    SingleEnvelope,
    decode_list,
    decode_page,
    decode_single,
)

E = TypeVar("E")


class AuthClient:
    """Decodes auth endpoint responses into envelopes.

    Every method raises ``ApiError`` on failure.
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def login(
        self, request: LoginRequest, cancel_token: CancelToken | None = None
    ) -> SingleEnvelope[LoginResponse]:
        raw = await self._client.post("/login", json=request.model_dump(), cancel_token=cancel_token)
        return self._single(raw, LoginResponse)

    async def login_failed(
        self, cancel_token: CancelToken | None = None
    ) -> SingleEnvelope[LoginResponse]:
        raw = await self._client.get("/login_failed", cancel_token=cancel_token)
        return self._single(raw, LoginResponse)

    async def me(self, cancel_token: CancelToken | None = None) -> SingleEnvelope[UserDTO]:
        raw = await self._client.get("/me", cancel_token=cancel_token)
        return self._single(raw, UserDTO)

    async def users(self, cancel_token: CancelToken | None = None) -> ListEnvelope[UserDTO]:
        raw = await self._client.get("/user", cancel_token=cancel_token)
        return self._decode(decode_list, raw, UserDTO)

    async def users_page(
        self, page: int = 0, cancel_token: CancelToken | None = None
    ) -> PageEnvelope[UserDTO]:
        raw = await self._client.get("/user/paged", params={"page": page}, cancel_token=cancel_token)
        return self._decode(decode_page, raw, UserDTO)

    async def user(
        self, user_id: str, cancel_token: CancelToken | None = None
    ) -> SingleEnvelope[UserDTO]:
        raw = await self._client.get(f"/user/{quote(user_id, safe='')}", cancel_token=cancel_token)
        return self._single(raw, UserDTO)

    def _single(self, raw: Any, model: type[BaseModel]) -> SingleEnvelope[Any]:
        return self._decode(decode_single, raw, model)

    def _decode(self, decoder: Callable[..., E], raw: Any, model: type[BaseModel]) -> E:
        try:
            return decoder(raw, model.model_validate)
        except EnvelopeDecodeError as exc:
            raise self._client.classifier.classify(exc) from exc
