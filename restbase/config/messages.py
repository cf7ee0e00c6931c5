"""Localized default message catalog and YAML loader.

Provides typed Pydantic models for the per-locale error texts shown when the
backend does not supply a message, and a loader that parses the YAML
catalog into those models.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from restbase.config.settings import BUNDLED_MESSAGES_PATH
from restbase.locales import full_language_code

logger = logging.getLogger(__name__)


class Messages(BaseModel):
    """Error texts for a single locale."""

    model_config = ConfigDict(frozen=True)

    error: str = Field(default="Error", min_length=1)
    error_unexpected: str = Field(
        default="Something went wrong. Please try again later.", min_length=1
    )
    error_unauthorized: str = Field(
        default="Your session has expired. Please sign in again.", min_length=1
    )
    error_bad_request: str = Field(
        default="The request could not be processed.", min_length=1
    )
    error_internal_server: str = Field(default="Internal server error", min_length=1)


_DEFAULT_MESSAGES = Messages()


class MessageCatalog(BaseModel):
    """Message tables keyed by full language code (``en``, ``zh_Hant``)."""

    model_config = ConfigDict(frozen=True)

    locales: dict[str, Messages] = Field(default_factory=lambda: {"en": _DEFAULT_MESSAGES})

    def for_locale(self, locale: str | None) -> Messages:
        """Return the table for ``locale``, falling back to its language, then English."""
        code = full_language_code(locale)
        if code in self.locales:
            return self.locales[code]
        language = code.split("_", 1)[0]
        if language in self.locales:
            return self.locales[language]
        return self.locales.get("en", _DEFAULT_MESSAGES)


def load_message_catalog(yaml_path: str) -> MessageCatalog:
    """Parse a message catalog YAML file into a MessageCatalog.

    Args:
        yaml_path: Path to the YAML catalog.

    Returns:
        The parsed catalog. If the file is missing or malformed, a catalog
        holding only the built-in English texts. English is always present.
    """
    path = Path(yaml_path)

    if not path.exists():
        logger.warning("Message catalog not found at %s, using built-in English texts", yaml_path)
        return MessageCatalog()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse message catalog YAML at %s: %s", yaml_path, exc)
        return MessageCatalog()

    if not isinstance(raw, dict) or not isinstance(raw.get("locales"), dict):
        logger.warning("Message catalog YAML missing 'locales' key, using built-in English texts")
        return MessageCatalog()

    locales: dict[str, Messages] = {}
    for locale, table in raw["locales"].items():
        try:
            locales[full_language_code(str(locale))] = Messages.model_validate(table or {})
        except Exception as exc:
            logger.error("Invalid messages for locale '%s': %s, skipping", locale, exc)

    if "en" not in locales:
        locales["en"] = _DEFAULT_MESSAGES

    return MessageCatalog(locales=locales)


@lru_cache(maxsize=1)
def default_catalog() -> MessageCatalog:
    """The bundled catalog, loaded once."""
    return load_message_catalog(BUNDLED_MESSAGES_PATH)


def default_messages() -> Messages:
    return default_catalog().for_locale("en")
