"""Configuration module: settings and localized message catalog."""

from restbase.config.messages import (
    MessageCatalog,
    Messages,
    default_catalog,
    default_messages,
    load_message_catalog,
)
from restbase.config.settings import ApiSettings, Flavor

__all__ = [
    "ApiSettings",
    "Flavor",
    "MessageCatalog",
    "Messages",
    "default_catalog",
    "default_messages",
    "load_message_catalog",
]
