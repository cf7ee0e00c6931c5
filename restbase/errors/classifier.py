"""Maps raw transport failures onto the closed ``ApiError`` set.

Policy, in order:

1. cancel-token cancellation -> Cancelled
2. an ``ApiError`` -> returned unchanged
3. HTTP 401 -> Unauthorized (body ignored)
4. HTTP 4xx -> Server(status, message)
5. any other non-2xx -> Network(status, message)
6. transport failure without a response -> Network(None, default text)
7. anything else -> Internal(description)

The message is the body's ``message`` field when the body is a JSON object
carrying a non-blank string there; otherwise the localized "unexpected"
text. Debug builds prefix server messages with ``E<status>: ``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from restbase.cancellation import RequestCancelledError
from restbase.config.messages import MessageCatalog, Messages, default_messages
from restbase.errors.api_error import (
    ApiCancelledError,
    ApiError,
    ApiInternalError,
    ApiNetworkError,
    ApiServerError,
    ApiUnauthorizedError,
)
from restbase.storage import LocaleProvider

logger = logging.getLogger(__name__)


class ErrorClassifier:
    """Produces exactly one ``ApiError`` for any failed operation.

    Parameters
    ----------
    messages:
        Localized default texts; the bundled English table when omitted.
    debug:
        When True, server-supplied messages are prefixed with the status code.
    catalog, locale_provider:
        When both are given, the default texts follow the locale active at
        classification time and ``messages`` is ignored.
    """

    def __init__(
        self,
        messages: Messages | None = None,
        debug: bool = False,
        *,
        catalog: MessageCatalog | None = None,
        locale_provider: LocaleProvider | None = None,
    ) -> None:
        self._messages = messages or default_messages()
        self._debug = debug
        self._catalog = catalog
        self._locale_provider = locale_provider

    @property
    def messages(self) -> Messages:
        if self._catalog is not None and self._locale_provider is not None:
            return self._catalog.for_locale(self._locale_provider.get_locale())
        return self._messages

    def classify(self, exc: BaseException) -> ApiError:
        error = self._classify(exc)
        if error is not exc:
            logger.debug(
                "Classified %s as %s",
                type(exc).__name__,
                error.kind.value,
                extra={"error_kind": error.kind.value},
            )
        return error

    def _classify(self, exc: BaseException) -> ApiError:
        if isinstance(exc, RequestCancelledError):
            return ApiCancelledError()

        if isinstance(exc, ApiError):
            return exc

        if isinstance(exc, httpx.HTTPStatusError):
            return self._from_response(exc.response)

        if isinstance(exc, httpx.HTTPError):
            return ApiNetworkError(None, self.messages.error_unexpected)

        description = str(exc) or type(exc).__name__
        return ApiInternalError(description)

    def _from_response(self, response: httpx.Response) -> ApiError:
        status_code = response.status_code
        if status_code == 401:
            return ApiUnauthorizedError()

        message = self._server_message(response)
        if 400 <= status_code < 500:
            return ApiServerError(status_code, message)
        return ApiNetworkError(status_code, message)

    def _server_message(self, response: httpx.Response) -> str:
        body = _json_body(response)
        message = body.get("message") if isinstance(body, dict) else None
        if isinstance(message, str) and message.strip():
            if self._debug:
                return f"E{response.status_code}: {message}"
            return message
        return self.messages.error_unexpected


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError, httpx.ResponseNotRead):
        return None
