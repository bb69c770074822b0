"""
Supported languages and utilities.

The pipeline publishes into a fixed set of nine languages. Every
orchestration input is checked against this set.
"""

from __future__ import annotations

from enum import Enum

from articlelingo.core.errors import UnsupportedLanguageError


class Language(str, Enum):
    """Supported languages, in canonical processing order."""

    FR = "fr"      # French
    EN = "en"      # English
    DE = "de"      # German
    ES = "es"      # Spanish
    PT = "pt"      # Portuguese
    RU = "ru"      # Russian (Cyrillic)
    ZH = "zh"      # Chinese Simplified (Han)
    AR = "ar"      # Arabic - RTL
    HI = "hi"      # Hindi (Devanagari)


# Human-readable names (used in prompts)
LANGUAGE_NAMES: dict[str, str] = {
    "fr": "French",
    "en": "English",
    "de": "German",
    "es": "Spanish",
    "pt": "Portuguese",
    "ru": "Russian",
    "zh": "Simplified Chinese",
    "ar": "Arabic",
    "hi": "Hindi",
}


# Languages whose slugs need transliteration, by script
TRANSLITERATION_SCRIPTS: dict[str, str] = {
    "ru": "cyrillic",
    "zh": "chinese",
    "ar": "arabic",
    "hi": "devanagari",
}


RTL_LANGUAGES: list[Language] = [Language.AR]


# All supported, canonical order
SUPPORTED_LANGUAGES: list[Language] = list(Language)


# =============================================================================
# Utilities
# =============================================================================


def get_language_name(code: str) -> str:
    """Get human-readable language name."""
    return LANGUAGE_NAMES.get(normalize_language_code(code), code)


def normalize_language_code(code: str | Language) -> str:
    """Normalize language code to standard form."""
    if isinstance(code, Language):
        return code.value
    code = str(code).lower().strip().replace("_", "-")

    variants = {
        "english": "en",
        "french": "fr",
        "german": "de",
        "spanish": "es",
        "portuguese": "pt",
        "russian": "ru",
        "chinese": "zh",
        "zh-cn": "zh",
        "zh-hans": "zh",
        "arabic": "ar",
        "hindi": "hi",
        "pt-br": "pt",
        "pt-pt": "pt",
        "en-us": "en",
        "en-gb": "en",
    }

    return variants.get(code, code)


def get_language_by_code(code: str | Language) -> Language | None:
    """Get Language enum by code."""
    try:
        return Language(normalize_language_code(code))
    except ValueError:
        return None


def is_supported(code: str | Language) -> bool:
    return get_language_by_code(code) is not None


def require_language(code: str | Language) -> Language:
    """Resolve a language code or fail fast with UnsupportedLanguageError."""
    language = get_language_by_code(code)
    if language is None:
        raise UnsupportedLanguageError(str(code))
    return language


def is_rtl(code: str | Language) -> bool:
    """Check if language is right-to-left."""
    return get_language_by_code(code) in RTL_LANGUAGES


def transliteration_script(code: str | Language) -> str | None:
    """Script that needs transliterating for slugs, or None for Latin languages."""
    return TRANSLITERATION_SCRIPTS.get(normalize_language_code(code))
