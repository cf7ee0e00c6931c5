"""Builds a ready-to-use ``ApiClient`` from settings and injected storage."""

from __future__ import annotations

import logging

import httpx

from restbase.config.messages import MessageCatalog, load_message_catalog
from restbase.config.settings import ApiSettings
from restbase.errors.classifier import ErrorClassifier
from restbase.http.client import ApiClient
from restbase.http.interceptors import default_interceptors
from restbase.storage import LocaleProvider, Preferences, TokenStore, device_id

logger = logging.getLogger(__name__)


def build_api_client(
    settings: ApiSettings,
    *,
    token_store: TokenStore,
    locale_provider: LocaleProvider,
    preferences: Preferences,
    catalog: MessageCatalog | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiClient:
    """Wire the classifier, the standard interceptor chain and the client.

    Default error texts follow the locale active when each failure is
    classified. Debug builds (every flavor except production) prefix server
    messages with their status code.
    """
    catalog = catalog or load_message_catalog(settings.messages_path)
    classifier = ErrorClassifier(
        messages=catalog.for_locale(settings.default_locale),
        debug=not settings.is_production,
        catalog=catalog,
        locale_provider=locale_provider,
    )

    interceptors = default_interceptors(
        locale_provider=locale_provider,
        token_store=token_store,
        classifier=classifier,
        log_bodies=settings.log_bodies,
    )

    logger.info(
        "Building API client for %s (flavor=%s)",
        settings.base_url,
        settings.flavor.value,
    )
    return ApiClient(
        settings.base_url,
        device_id=device_id(preferences),
        interceptors=interceptors,
        classifier=classifier,
        timeout=settings.timeout_seconds,
        transport=transport,
    )
