"""
Core module - error taxonomy, data models and shared helpers.

This module contains:
- models: Data models (SourceContent, TranslatedArtifact, BatchResult)
- errors: Exception taxonomy
- utils: Shared utility functions

Models are imported from ``articlelingo.core.models`` directly; they depend
on the language set in ``articlelingo.i18n``.
"""

from articlelingo.core.errors import (
    ArticlelingoError,
    UnsupportedLanguageError,
    DuplicateTranslationError,
    EncodingError,
    TranslationError,
    RateLimitError,
)
from articlelingo.core.utils import (
    generate_id,
    utc_now,
    content_hash,
)

__all__ = [
    # Errors
    "ArticlelingoError",
    "UnsupportedLanguageError",
    "DuplicateTranslationError",
    "EncodingError",
    "TranslationError",
    "RateLimitError",
    # Utils
    "generate_id",
    "utc_now",
    "content_hash",
]
