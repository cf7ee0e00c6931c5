"""Cancel tokens for in-flight requests.

A ``CancelToken`` is handed to a network call; cancelling it aborts the
pending send and surfaces as ``RequestCancelledError``, which the error
classifier turns into the Cancelled variant. Cancelling the *calling task*
is different: that ``asyncio.CancelledError`` propagates as usual.
"""

from __future__ import annotations

import asyncio


class RequestCancelledError(Exception):
    """Raised by the client when a request's cancel token fires."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(reason or "Request cancelled")


class CancelToken:
    """One-shot cancellation signal; may be shared by several requests."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Cancel every request using this token. Later calls are no-ops."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.is_cancelled:
            raise RequestCancelledError(self._reason)
