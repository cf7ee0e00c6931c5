"""Shared test fixtures for the restbase test suite."""

from __future__ import annotations

import os

import httpx
import pytest
import pytest_asyncio

from restbase.config.messages import default_catalog
from restbase.config.settings import ApiSettings, Flavor
from restbase.errors.classifier import ErrorClassifier
from restbase.http.client import ApiClient
from restbase.mock.backend import create_mock_app
from restbase.services.auth_client import AuthClient
from restbase.services.auth_repository import AuthRepository
from restbase.storage import InMemoryTokenStore, MemoryPreferences, StaticLocaleProvider
from restbase.wiring import build_api_client

TEST_BASE_URL = "http://testserver"
TEST_DEVICE_ID = "device-123"


# ---------------------------------------------------------------------------
# Ensure required env vars are set for ApiSettings in tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set minimal env vars so ApiSettings can be instantiated in tests."""
    if "RESTBASE_BASE_URL" not in os.environ:
        monkeypatch.setenv("RESTBASE_BASE_URL", TEST_BASE_URL)


# ---------------------------------------------------------------------------
# Settings and storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> ApiSettings:
    """Test settings for a debug build."""
    return ApiSettings(base_url=TEST_BASE_URL, flavor=Flavor.DEV, timeout_seconds=5)


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def locale_provider() -> StaticLocaleProvider:
    return StaticLocaleProvider("en")


@pytest.fixture
def preferences() -> MemoryPreferences:
    return MemoryPreferences({"device_id": TEST_DEVICE_ID})


@pytest.fixture
def classifier() -> ErrorClassifier:
    return ErrorClassifier(messages=default_catalog().for_locale("en"))


# ---------------------------------------------------------------------------
# Mock backend fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def backend_client(
    settings: ApiSettings,
    token_store: InMemoryTokenStore,
    locale_provider: StaticLocaleProvider,
    preferences: MemoryPreferences,
) -> ApiClient:
    """Fully wired client talking to the in-process mock backend."""
    client = build_api_client(
        settings,
        token_store=token_store,
        locale_provider=locale_provider,
        preferences=preferences,
        transport=httpx.ASGITransport(app=create_mock_app()),
    )
    yield client
    await client.aclose()


@pytest.fixture
def auth_client(backend_client: ApiClient) -> AuthClient:
    return AuthClient(backend_client)


@pytest.fixture
def auth_repository(auth_client: AuthClient, token_store: InMemoryTokenStore) -> AuthRepository:
    return AuthRepository(auth_client, token_store)
