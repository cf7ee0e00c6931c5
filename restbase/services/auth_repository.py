"""Authentication repository: folds auth calls into ``Result`` values.

The repository is the seam the presentation layer talks to. It never raises
for API failures; it returns ``Failure`` with the classified ``ApiError``.
"""

from __future__ import annotations

import logging

from restbase.cancellation import CancelToken
from restbase.errors.classifier import ErrorClassifier
from restbase.folding import try_get, unwrap_payload
from restbase.models.auth import LoginRequest, UserDTO
from restbase.result import Failure, Result
from restbase.services.auth_client import AuthClient
from restbase.storage import TokenStore

logger = logging.getLogger(__name__)


class AuthRepository:
    """Login/logout flow with token persistence.

    Parameters
    ----------
    client:
        Typed auth endpoints.
    token_store:
        Where the access token is kept; the auth interceptor reads it back.
    classifier:
        Classifier for failures outside the HTTP pipeline (payload decoding).
    """

    def __init__(
        self,
        client: AuthClient,
        token_store: TokenStore,
        classifier: ErrorClassifier | None = None,
    ) -> None:
        self._client = client
        self._token_store = token_store
        self._classifier = classifier
        self._current_user: UserDTO | None = None

    @property
    def current_user(self) -> UserDTO | None:
        return self._current_user

    async def login(
        self, email: str, password: str, cancel_token: CancelToken | None = None
    ) -> Result[UserDTO]:
        """Log in, store the access token, then load the profile."""
        login = unwrap_payload(
            await try_get(
                self._client.login(LoginRequest(email=email, password=password), cancel_token),
                classifier=self._classifier,
            )
        )
        if isinstance(login, Failure):
            logger.info("Login failed: %s", login.error.kind.value)
            return login

        await self._token_store.set_access_token(login.value.access_token)
        return await self.me(cancel_token)

    async def me(self, cancel_token: CancelToken | None = None) -> Result[UserDTO]:
        result = unwrap_payload(
            await try_get(self._client.me(cancel_token), classifier=self._classifier)
        )
        if result.is_success:
            self._current_user = result.get_or_none()
        return result

    async def users(self, cancel_token: CancelToken | None = None) -> Result[list[UserDTO]]:
        return unwrap_payload(
            await try_get(self._client.users(cancel_token), classifier=self._classifier)
        )

    async def user(
        self, user_id: str, cancel_token: CancelToken | None = None
    ) -> Result[UserDTO]:
        return unwrap_payload(
            await try_get(self._client.user(user_id, cancel_token), classifier=self._classifier)
        )

    async def logout(self) -> None:
        await self._token_store.set_access_token(None)
        self._current_user = None
        logger.info("Logged out")
