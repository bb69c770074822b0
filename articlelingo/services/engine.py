"""
Translation engine.

Translates single fields through a text-generation backend with result
caching, cost recording and output sanitization. Long HTML bodies are
split into structure-preserving chunks and translated sequentially.

Usage:
    engine = TranslationEngine(OpenAIBackend(), cache=storage.cache, ledger=storage.costs)

    costs = CostAccumulator()
    title = await engine.translate_field("Bonjour", "fr", "en", FieldContext.TITLE, costs)
    body = await engine.translate_long_text(html, "fr", "en", costs)
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

from articlelingo.config import Settings, get_settings
from articlelingo.core.errors import RateLimitError, TranslationError
from articlelingo.core.models import CostRecord, FaqPair
from articlelingo.core.utils import content_hash
from articlelingo.i18n.chunking import count_words, split_into_chunks
from articlelingo.i18n.encoding import EncodingValidator
from articlelingo.i18n.languages import Language, require_language
from articlelingo.i18n.prompts import FieldContext, build_system_prompt, build_user_prompt
from articlelingo.services.ai.client import BackendError, GenerationRequest, TextGenerationBackend
from articlelingo.services.cost import CostAccumulator, compute_cost
from articlelingo.storage.base import CacheStorage, CostLedger

logger = logging.getLogger(__name__)


# Expected expansion of a translation over its source, plus headroom
OUTPUT_TOKENS_PER_WORD = 1.3
OUTPUT_TOKENS_MARGIN = 1.2
MIN_OUTPUT_TOKENS = 16

CHUNK_SEPARATOR = "\n\n"


def estimate_output_tokens(text: str) -> int:
    """Output token budget for translating text."""
    words = count_words(text)
    return max(MIN_OUTPUT_TOKENS, math.ceil(words * OUTPUT_TOKENS_PER_WORD * OUTPUT_TOKENS_MARGIN))


# =============================================================================
# Translation Cache
# =============================================================================


class TranslationCache:
    """
    Content-hash keyed translation cache over a CacheStorage.

    Best effort: storage failures are logged and behave as a miss or a
    skipped write. A cache entry never changes output, only cost.
    """

    def __init__(self, storage: CacheStorage | None = None, ttl: int = 60 * 60 * 24 * 30):
        self._storage = storage
        self.ttl = ttl

    @staticmethod
    def make_key(text: str, source: str, target: str, context: FieldContext) -> str:
        return f"translation:{source}:{target}:{context.value}:{content_hash(text)}"

    async def get(self, text: str, source: str, target: str, context: FieldContext) -> str | None:
        if self._storage is None:
            return None
        key = self.make_key(text, source, target, context)
        try:
            cached = await self._storage.get(key)
        except Exception as e:
            logger.warning(f"Translation cache read failed for {key}: {e}")
            return None
        return cached if isinstance(cached, str) and cached else None

    async def set(self, text: str, source: str, target: str, context: FieldContext, translation: str) -> None:
        if self._storage is None:
            return
        key = self.make_key(text, source, target, context)
        try:
            await self._storage.set(key, translation, ttl=self.ttl)
        except Exception as e:
            logger.warning(f"Translation cache write failed for {key}: {e}")


# =============================================================================
# Engine
# =============================================================================


class TranslationEngine:
    """Field-level translation with caching and cost accounting."""

    def __init__(
        self,
        backend: TextGenerationBackend,
        cache: CacheStorage | None = None,
        ledger: CostLedger | None = None,
        settings: Settings | None = None,
        validator: EncodingValidator | None = None,
    ):
        self.backend = backend
        self.settings = settings or get_settings()
        self.cache = TranslationCache(cache, ttl=self.settings.cache_ttl_seconds)
        self.ledger = ledger
        self.validator = validator or EncodingValidator()

    async def translate_field(
        self,
        text: str,
        source_language: str | Language,
        target_language: str | Language,
        context: FieldContext,
        costs: CostAccumulator | None = None,
    ) -> str:
        """
        Translate one text field.

        Raises:
            UnsupportedLanguageError: Unknown source or target language.
            RateLimitError: The backend signalled backpressure.
            TranslationError: The backend failed or returned nothing.
        """
        source = require_language(source_language).value
        target = require_language(target_language).value

        if not text or not text.strip():
            return ""

        cached = await self.cache.get(text, source, target, context)
        if cached is not None:
            logger.debug(f"Cache hit for {context.value} {source}->{target}")
            return cached

        request = GenerationRequest(
            system_prompt=build_system_prompt(source, target, context),
            user_prompt=build_user_prompt(text, context),
            model=self.settings.translation_model,
            temperature=self.settings.translation_temperature,
            max_output_tokens=estimate_output_tokens(text),
        )

        try:
            response = await self.backend.generate(request)
        except TranslationError:
            raise
        except BackendError as e:
            if e.is_rate_limit:
                raise RateLimitError(
                    f"Rate limited translating {context.value} {source}->{target}",
                    details={"status_code": e.status_code},
                ) from e
            raise TranslationError(
                f"Backend error translating {context.value} {source}->{target}: {e}",
                details={"status_code": e.status_code},
            ) from e
        except Exception as e:
            raise TranslationError(f"Backend error translating {context.value} {source}->{target}: {e}") from e

        await self._record_cost(
            request.model,
            response.usage.prompt_tokens,
            response.usage.completion_tokens,
            {"from": source, "to": target, "context": context.value},
            costs,
        )

        translated = self.validator.sanitize_content(response.text or "")
        if not translated:
            raise TranslationError(
                f"Empty translation for {context.value} {source}->{target}",
                code="empty_translation",
            )

        await self.cache.set(text, source, target, context, translated)
        return translated

    async def translate_long_text(
        self,
        text: str,
        source_language: str | Language,
        target_language: str | Language,
        costs: CostAccumulator | None = None,
    ) -> str:
        """
        Translate an HTML body, chunking it when it is long.

        Chunks are translated in order and joined with a blank line. The
        first failing chunk aborts the whole body.
        """
        require_language(source_language)
        require_language(target_language)

        if not text or not text.strip():
            return ""

        words = count_words(text)
        if words < self.settings.long_text_threshold_words:
            return await self.translate_field(text, source_language, target_language, FieldContext.BODY, costs)

        chunks = split_into_chunks(text, self.settings.chunk_max_words)
        logger.info(f"Long text ({words} words) split into {len(chunks)} chunks")

        translated: list[str] = []
        for index, chunk in enumerate(chunks):
            if index > 0:
                await asyncio.sleep(self.settings.chunk_delay_seconds)
            try:
                part = await self.translate_field(chunk, source_language, target_language, FieldContext.BODY, costs)
            except TranslationError as e:
                error_cls = RateLimitError if isinstance(e, RateLimitError) else TranslationError
                raise error_cls(
                    f"Chunk {index + 1}/{len(chunks)} failed: {e.message}",
                    code=e.code,
                    details={**e.details, "chunk_count": len(chunks)},
                    chunk_index=index,
                ) from e
            logger.debug(f"Chunk {index + 1}/{len(chunks)} translated")
            if part:
                translated.append(part)

        return CHUNK_SEPARATOR.join(translated)

    async def translate_faqs(
        self,
        faqs: list[FaqPair] | tuple[FaqPair, ...],
        source_language: str | Language,
        target_language: str | Language,
        costs: CostAccumulator | None = None,
    ) -> list[FaqPair]:
        """Translate question/answer pairs, keeping their order."""
        result = []
        for faq in sorted(faqs, key=lambda f: f.order):
            question = await self.translate_field(
                faq.question, source_language, target_language, FieldContext.FAQ_QUESTION, costs
            )
            answer = await self.translate_field(
                faq.answer, source_language, target_language, FieldContext.FAQ_ANSWER, costs
            )
            result.append(FaqPair(question=question, answer=answer, order=faq.order))
        return result

    async def translate_meta(
        self,
        meta_title: str,
        meta_description: str,
        source_language: str | Language,
        target_language: str | Language,
        costs: CostAccumulator | None = None,
    ) -> tuple[str, str]:
        title = await self.translate_field(
            meta_title, source_language, target_language, FieldContext.META_TITLE, costs
        )
        description = await self.translate_field(
            meta_description, source_language, target_language, FieldContext.META_DESCRIPTION, costs
        )
        return title, description

    async def translate_alt_text(
        self,
        alt: str | None,
        source_language: str | Language,
        target_language: str | Language,
        costs: CostAccumulator | None = None,
    ) -> str | None:
        if alt is None:
            return None
        return await self.translate_field(alt, source_language, target_language, FieldContext.ALT_TEXT, costs)

    def estimate_output_tokens(self, text: str) -> int:
        return estimate_output_tokens(text)

    # =========================================================================
    # Internal
    # =========================================================================

    async def _record_cost(
        self,
        model: str,
        prompt_tokens: int,
        completion_tokens: int,
        metadata: dict[str, Any],
        costs: CostAccumulator | None,
    ) -> None:
        amount = compute_cost(model, prompt_tokens, completion_tokens, self.settings.model_pricing)
        metadata = {
            **metadata,
            "model": model,
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
        }

        if self.ledger is not None:
            record = await self.ledger.record("translation", amount, metadata)
        else:
            record = CostRecord(operation="translation", amount=amount, metadata=metadata)

        if costs is not None:
            costs.add(record)
