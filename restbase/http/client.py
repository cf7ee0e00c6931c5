"""Async REST client wrapping ``httpx.AsyncClient`` with the interceptor chain.

Every request carries ``Accept: application/json`` and the ``device_id``
query parameter. Callers only ever see decoded JSON or an ``ApiError``;
raw ``httpx`` exceptions never escape.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from restbase.cancellation import CancelToken, RequestCancelledError
from restbase.errors.classifier import ErrorClassifier
from restbase.http.interceptors import ErrorInterceptor, Interceptor, InterceptorChain

logger = logging.getLogger(__name__)


class ApiClient:
    """HTTP client for the backend API.

    Parameters
    ----------
    base_url:
        Base URL every path is resolved against (e.g. "https://api.example.com/v1").
    device_id:
        Sent as the ``device_id`` query parameter on every request.
    interceptors:
        Pipeline stages; must end with an ``ErrorInterceptor``. Defaults to
        error translation only.
    classifier:
        Used for failures after the pipeline (undecodable JSON bodies).
    timeout:
        Per-request timeout in seconds (default 30).
    transport:
        Optional ``httpx`` transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        base_url: str,
        *,
        device_id: str,
        interceptors: Sequence[Interceptor] | None = None,
        classifier: ErrorClassifier | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._classifier = classifier or ErrorClassifier()
        self._chain = InterceptorChain(interceptors or [ErrorInterceptor(self._classifier)])
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            headers={"Accept": "application/json"},
            params={"device_id": device_id},
            timeout=timeout,
            transport=transport,
        )

    @property
    def classifier(self) -> ErrorClassifier:
        return self._classifier

    @property
    def interceptors(self) -> list[Interceptor]:
        return self._chain.interceptors

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        cancel_token: CancelToken | None = None,
    ) -> Any:
        """Send a request through the pipeline and return its decoded JSON body.

        Raises
        ------
        ApiError
            For every failure: non-2xx status, transport error, cancellation
            or an undecodable body.
        """
        try:
            request = self._http.build_request(
                method,
                path.lstrip("/"),
                params=params,
                json=json,
            )
        except Exception as exc:
            raise self._classifier.classify(exc) from exc

        response = await self._chain.execute(
            request,
            lambda prepared: self._send(prepared, cancel_token),
        )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise self._classifier.classify(exc) from exc

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def _send(
        self, request: httpx.Request, cancel_token: CancelToken | None
    ) -> httpx.Response:
        if cancel_token is None:
            return await self._http.send(request)

        cancel_token.raise_if_cancelled()

        send = asyncio.ensure_future(self._http.send(request))
        cancelled = asyncio.ensure_future(cancel_token.wait())
        try:
            await asyncio.wait({send, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
            if not send.done():
                send.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await send

        if send.cancelled():
            logger.debug("Request %s %s cancelled in flight", request.method, request.url)
            raise RequestCancelledError(cancel_token.reason)
        return send.result()
