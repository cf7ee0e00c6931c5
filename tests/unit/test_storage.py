"""Unit tests for storage ports, locale helpers and client wiring."""

from __future__ import annotations

import uuid

import httpx
import pytest

from restbase.config.settings import ApiSettings, Flavor
from restbase.errors.api_error import ApiNetworkError, ApiServerError
from restbase.http.interceptors import AuthInterceptor, ErrorInterceptor, LanguageInterceptor, LoggingInterceptor
from restbase.locales import full_language_code, is_alternate_script, to_language_tag
from restbase.storage import (
    DEVICE_ID_KEY,
    InMemoryTokenStore,
    MemoryPreferences,
    StaticLocaleProvider,
    device_id,
)
from restbase.wiring import build_api_client


class TestLocales:
    @pytest.mark.parametrize(
        ("locale", "expected"),
        [
            ("en", "en"),
            ("en-US", "en"),
            ("EN_gb", "en"),
            ("zh_Hant", "zh_Hant"),
            ("zh-Hant-HK", "zh_Hant"),
            ("zh_TW", "zh_Hant"),
            ("zh-HK", "zh_Hant"),
            ("zh_CN", "zh"),
            ("zh-Hans-HK", "zh_Hans"),
            (None, "en"),
            ("", "en"),
            ("-", "en"),
            ("_", "en"),
            ("-_-", "en"),
        ],
    )
    def test_full_language_code(self, locale, expected: str):
        assert full_language_code(locale) == expected

    def test_language_tag(self):
        assert to_language_tag("zh_TW") == "zh-Hant"
        assert to_language_tag("en_US") == "en"

    def test_alternate_script(self):
        assert is_alternate_script("zh-Hant")
        assert not is_alternate_script("zh")


class TestTokenStore:
    @pytest.mark.asyncio
    async def test_set_and_clear(self):
        store = InMemoryTokenStore()

        await store.set_access_token("abc")
        assert await store.get_access_token() == "abc"

        await store.set_access_token("")
        assert await store.get_access_token() is None


class TestPreferences:
    def test_set_get_remove(self):
        prefs = MemoryPreferences()

        prefs.set("k", 1)
        assert prefs.get("k") == 1

        prefs.set("k", None)
        assert prefs.get("k") is None

        prefs.set("k", 2)
        prefs.remove("k")
        prefs.remove("k")
        assert prefs.get("k") is None

    def test_device_id_is_generated_once(self):
        prefs = MemoryPreferences()

        first = device_id(prefs)
        second = device_id(prefs)

        assert first == second
        assert prefs.get(DEVICE_ID_KEY) == first
        uuid.UUID(first)

    def test_existing_device_id_is_kept(self):
        assert device_id(MemoryPreferences({DEVICE_ID_KEY: "abc"})) == "abc"


class TestWiring:
    def _build(self, settings: ApiSettings, handler, locale: str = "en"):
        return build_api_client(
            settings,
            token_store=InMemoryTokenStore("tok"),
            locale_provider=StaticLocaleProvider(locale),
            preferences=MemoryPreferences({DEVICE_ID_KEY: "dev-9"}),
            transport=httpx.MockTransport(handler),
        )

    def test_standard_interceptor_order(self, settings: ApiSettings):
        client = self._build(settings, lambda request: httpx.Response(200))

        assert [type(stage) for stage in client.interceptors] == [
            LanguageInterceptor,
            AuthInterceptor,
            LoggingInterceptor,
            ErrorInterceptor,
        ]

    @pytest.mark.asyncio
    async def test_requests_carry_all_headers(self, settings: ApiSettings):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with self._build(settings, handler, locale="zh_Hant") as client:
            await client.get("user")

        request = seen[0]
        assert request.url.params["device_id"] == "dev-9"
        assert request.headers["Accept-Language"] == "zh-Hant"
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_production_does_not_prefix_messages(self):
        settings = ApiSettings(base_url="http://testserver", flavor=Flavor.PRD)
        handler = lambda request: httpx.Response(404, json={"message": "missing"})  # noqa: E731

        async with self._build(settings, handler) as client:
            with pytest.raises(ApiServerError) as info:
                await client.get("user")

        assert info.value.message == "missing"

    @pytest.mark.asyncio
    async def test_fallback_text_follows_wiring_locale(self, settings: ApiSettings):
        handler = lambda request: httpx.Response(404, json={})  # noqa: E731

        async with self._build(settings, handler, locale="zh_Hant") as client:
            with pytest.raises(ApiServerError) as info:
                await client.get("user")

        assert info.value.message == client.classifier.messages.error_unexpected
        assert client.classifier.messages.error == "錯誤"

    @pytest.mark.asyncio
    async def test_fallback_text_follows_locale_switch(self, settings: ApiSettings):
        provider = StaticLocaleProvider("en")
        client = build_api_client(
            settings,
            token_store=InMemoryTokenStore(),
            locale_provider=provider,
            preferences=MemoryPreferences({DEVICE_ID_KEY: "dev-9"}),
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )

        async with client:
            provider.set_locale("zh_Hant")
            with pytest.raises(ApiNetworkError) as info:
                await client.get("user")

        assert info.value.message == "發生錯誤，請稍後再試。"
