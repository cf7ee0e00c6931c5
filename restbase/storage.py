"""Storage ports consumed by the networking layer.

The client never reaches for process-wide state: the access token, the
active locale and the device id come from objects injected at wiring time.
In-memory implementations are provided for tests and simple hosts.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEVICE_ID_KEY = "device_id"


class TokenStore(Protocol):
    async def get_access_token(self) -> str | None: ...

    async def set_access_token(self, token: str | None) -> None: ...


class LocaleProvider(Protocol):
    def get_locale(self) -> str: ...


class Preferences(Protocol):
    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryTokenStore:
    """Keeps the access token in process memory."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    async def get_access_token(self) -> str | None:
        return self._token

    async def set_access_token(self, token: str | None) -> None:
        self._token = token or None


class StaticLocaleProvider:
    """Returns a locale chosen by the host application."""

    def __init__(self, locale: str = "en") -> None:
        self._locale = locale

    def get_locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> None:
        self._locale = locale


class MemoryPreferences:
    """Dict-backed key/value preferences."""

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


def device_id(preferences: Preferences) -> str:
    """Return the persisted device id, generating and storing one on first use."""
    existing = preferences.get(DEVICE_ID_KEY)
    if isinstance(existing, str) and existing:
        return existing

    generated = str(uuid.uuid4())
    preferences.set(DEVICE_ID_KEY, generated)
    logger.info("Generated new device id")
    return generated
