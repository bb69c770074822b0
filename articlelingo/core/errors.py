"""
Exception taxonomy for the translation pipeline.

Every error carries a machine-readable ``code`` and a ``details`` dict so
batch callers can report failures without parsing messages.
"""

from __future__ import annotations

from typing import Any


class ArticlelingoError(Exception):
    """Base error with optional code and details."""

    default_code = "error"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}


class UnsupportedLanguageError(ArticlelingoError, ValueError):
    """Language code is not part of the supported set."""

    default_code = "unsupported_language"

    def __init__(self, language: str, message: str | None = None):
        super().__init__(
            message or f"Unsupported language: {language}",
            details={"language": language},
        )
        self.language = language


class DuplicateTranslationError(ArticlelingoError):
    """An artifact already exists for this (content, language) pair."""

    default_code = "duplicate_translation"

    def __init__(self, content_id: str, language: str):
        super().__init__(
            f"Translation already exists for content {content_id} in {language}",
            details={"content_id": content_id, "language": language},
        )
        self.content_id = content_id
        self.language = language


class EncodingError(ArticlelingoError):
    """Unrecoverable invalid byte sequence under strict validation."""

    default_code = "invalid_encoding"


class TranslationError(ArticlelingoError):
    """
    Backend call failed, returned empty, or a chunk of a long body failed.

    ``chunk_index`` is set when the failure happened inside a chunked body.
    """

    default_code = "translation_failed"
    retryable = False

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        chunk_index: int | None = None,
    ):
        super().__init__(message, code=code, details=details)
        self.chunk_index = chunk_index
        if chunk_index is not None:
            self.details.setdefault("chunk_index", chunk_index)


class RateLimitError(TranslationError):
    """Backend backpressure (HTTP 429). Retry at the batch level."""

    default_code = "rate_limited"
    retryable = True
