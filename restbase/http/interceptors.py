"""Request/response interceptor pipeline.

Every outgoing request passes through the interceptors in a fixed order:

1. ``LanguageInterceptor`` sets ``Accept-Language`` from the current locale.
2. ``AuthInterceptor`` sets ``Authorization`` from the stored access token.
3. ``LoggingInterceptor`` observes requests, responses and errors.
4. ``ErrorInterceptor`` converts any failure into an ``ApiError``.

Header stages run before the request is sent. Error translation must be the
last stage so every upstream failure is normalized the same way; the chain
refuses any other arrangement.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Sequence

import httpx

from restbase.errors.classifier import ErrorClassifier
from restbase.locales import to_language_tag
from restbase.logging_config import redact
from restbase.storage import LocaleProvider, TokenStore

logger = logging.getLogger(__name__)

_REDACTED_HEADERS = {"authorization", "cookie", "x-api-key"}

# Request extension holding the monotonic send time.
_STARTED_AT = "restbase.started_at"

SendFn = Callable[[httpx.Request], Awaitable[httpx.Response]]


class Interceptor:
    """Base pipeline stage. Every hook is a pass-through by default."""

    async def on_request(self, request: httpx.Request) -> httpx.Request:
        return request

    async def on_response(self, response: httpx.Response) -> httpx.Response:
        return response

    async def on_error(self, error: Exception, request: httpx.Request) -> Exception:
        return error


class LanguageInterceptor(Interceptor):
    """Sends the active locale as an ``Accept-Language`` BCP 47 tag."""

    def __init__(self, locale_provider: LocaleProvider) -> None:
        self._locale_provider = locale_provider

    async def on_request(self, request: httpx.Request) -> httpx.Request:
        request.headers["Accept-Language"] = to_language_tag(self._locale_provider.get_locale())
        return request


class AuthInterceptor(Interceptor):
    """Attaches ``Authorization: Bearer <token>`` when a token is stored."""

    def __init__(self, token_store: TokenStore) -> None:
        self._token_store = token_store

    async def on_request(self, request: httpx.Request) -> httpx.Request:
        token = await self._token_store.get_access_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        return request


class LoggingInterceptor(Interceptor):
    """Logs traffic without touching it."""

    def __init__(self, log_bodies: bool = True) -> None:
        self._log_bodies = log_bodies

    async def on_request(self, request: httpx.Request) -> httpx.Request:
        request.extensions[_STARTED_AT] = time.monotonic()
        headers = {
            name: ("[REDACTED]" if name.lower() in _REDACTED_HEADERS else value)
            for name, value in request.headers.items()
        }
        body = _body_text(request.content) if self._log_bodies else None
        logger.info(
            "--> %s %s headers=%s%s",
            request.method,
            request.url,
            headers,
            f" body={body}" if body else "",
            extra={"method": request.method, "url": str(request.url)},
        )
        return request

    async def on_response(self, response: httpx.Response) -> httpx.Response:
        request = response.request
        duration_ms = self._elapsed_ms(request)
        body = _body_text(response.content) if self._log_bodies else None
        logger.info(
            "<-- %d %s %s (%.1fms)%s",
            response.status_code,
            request.method,
            request.url,
            duration_ms,
            f" body={body}" if body else "",
            extra={
                "method": request.method,
                "url": str(request.url),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response

    async def on_error(self, error: Exception, request: httpx.Request) -> Exception:
        request.extensions.pop(_STARTED_AT, None)
        logger.warning(
            "<-- %s %s failed: %s: %s",
            request.method,
            request.url,
            type(error).__name__,
            error,
            extra={"method": request.method, "url": str(request.url)},
        )
        return error

    def _elapsed_ms(self, request: httpx.Request) -> float:
        started = request.extensions.pop(_STARTED_AT, None)
        if started is None:
            return 0.0
        return round((time.monotonic() - started) * 1000, 1)


class ErrorInterceptor(Interceptor):
    """Normalizes any failure into the closed ``ApiError`` set."""

    def __init__(self, classifier: ErrorClassifier) -> None:
        self._classifier = classifier

    async def on_error(self, error: Exception, request: httpx.Request) -> Exception:
        return self._classifier.classify(error)


class InterceptorChain:
    """Runs a request through an ordered list of interceptors.

    Raises
    ------
    ValueError
        If the chain does not end with exactly one ``ErrorInterceptor``.
    """

    def __init__(self, interceptors: Sequence[Interceptor]) -> None:
        error_stages = [i for i in interceptors if isinstance(i, ErrorInterceptor)]
        if len(error_stages) != 1 or not isinstance(interceptors[-1], ErrorInterceptor):
            raise ValueError("Interceptor chain must end with exactly one ErrorInterceptor")
        self._interceptors = list(interceptors)

    @property
    def interceptors(self) -> list[Interceptor]:
        return list(self._interceptors)

    async def execute(self, request: httpx.Request, send: SendFn) -> httpx.Response:
        """Send ``request``; return a 2xx response or raise an ``ApiError``."""
        try:
            for interceptor in self._interceptors:
                request = await interceptor.on_request(request)

            response = await send(request)

            for interceptor in self._interceptors:
                response = await interceptor.on_response(response)

            response.raise_for_status()
            return response
        except Exception as exc:
            error: Exception = exc
            for interceptor in self._interceptors:
                error = await interceptor.on_error(error, request)
            if error is exc:
                raise
            raise error from exc


def default_interceptors(
    *,
    locale_provider: LocaleProvider,
    token_store: TokenStore,
    classifier: ErrorClassifier,
    log_bodies: bool = True,
) -> list[Interceptor]:
    """The standard stage order: language, auth, logging, error translation."""
    return [
        LanguageInterceptor(locale_provider),
        AuthInterceptor(token_store),
        LoggingInterceptor(log_bodies=log_bodies),
        ErrorInterceptor(classifier),
    ]


def _body_text(content: bytes, limit: int = 2000) -> str | None:
    if not content:
        return None
    text = redact(content.decode("utf-8", errors="replace"))
    return text if len(text) <= limit else f"{text[:limit]}..."

