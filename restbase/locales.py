"""Locale code helpers.

Locales travel in two spellings: the full language code used to pick
localized texts (``en``, ``zh_Hant``) and the BCP 47 tag sent to the
backend (``en``, ``zh-Hant``). Regions are dropped in both; scripts are
kept because they select a different message table.
"""

from __future__ import annotations

ALTERNATE_SCRIPT_LOCALE = "zh_Hant"

# Regions that imply the traditional script when no script subtag is given.
_HANT_REGIONS = {"HK", "TW", "MO"}


def full_language_code(locale: str | None) -> str:
    """Normalize ``zh-Hant-HK``, ``zh_TW`` or ``en-US`` to ``zh_Hant`` / ``en``."""
    if not locale:
        return "en"

    parts = [part for part in locale.replace("-", "_").split("_") if part]
    if not parts:
        return "en"
    language = parts[0].lower()
    script: str | None = None
    for part in parts[1:]:
        if len(part) == 4 and part.isalpha():
            script = part.title()
        elif part.upper() in _HANT_REGIONS and language == "zh" and script is None:
            script = "Hant"

    return f"{language}_{script}" if script else language


def to_language_tag(locale: str | None) -> str:
    """Return the BCP 47 tag for a locale (``zh_Hant`` -> ``zh-Hant``)."""
    return full_language_code(locale).replace("_", "-")


def is_alternate_script(locale: str | None) -> bool:
    return full_language_code(locale) == ALTERNATE_SCRIPT_LOCALE
