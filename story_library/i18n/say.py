"""Localized names for the directories the app creates.

Only the handful of fixed keys used as path segments are translated here.
The active language is looked up on every call.
"""

import os

DEFAULT_LANGUAGE = "en"

# Checked in order; the first one set wins. After the app override this is
# the gettext lookup order.
LANGUAGE_ENV_VARS = ("TWINE_LANGUAGE", "LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")

STRINGS = {
    "de": {"Twine": "Twine", "Stories": "Geschichten", "Backups": "Sicherungen"},
    "es": {"Twine": "Twine", "Stories": "Historias", "Backups": "Copias de seguridad"},
    "fr": {"Twine": "Twine", "Stories": "Histoires", "Backups": "Sauvegardes"},
    "it": {"Twine": "Twine", "Stories": "Storie", "Backups": "Backup"},
    "nl": {"Twine": "Twine", "Stories": "Verhalen", "Backups": "Back-ups"},
    "pt": {"Twine": "Twine", "Stories": "Histórias", "Backups": "Cópias de segurança"},
    "pt-br": {"Twine": "Twine", "Stories": "Histórias", "Backups": "Backups"},
}


def normalize_language(value: str) -> str:
    """Turn a locale string such as ``pt_BR.UTF-8`` into ``pt-br``."""
    value = value.split(":")[0].split(".")[0].split("@")[0]
    return value.replace("_", "-").lower()


def current_language() -> str:
    for name in LANGUAGE_ENV_VARS:
        value = os.environ.get(name)
        if value and value not in ("C", "POSIX"):
            return normalize_language(value)
    return DEFAULT_LANGUAGE


def say(key: str, language: str = None) -> str:
    """Translate ``key``; falls back to the key itself."""
    lang = normalize_language(language) if language else current_language()
    for candidate in (lang, lang.split("-")[0]):
        table = STRINGS.get(candidate)
        if table and key in table:
            return table[key]
    return key
