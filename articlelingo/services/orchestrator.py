"""
Translation orchestrator.

Drives the engine across target languages for a content item: skips what
already exists, isolates per-language failures, retries languages that hit
backend backpressure, persists one artifact per (content, language) and
enriches it with SEO metadata.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import Counter
from typing import Any

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from articlelingo.config import Settings, get_settings
from articlelingo.core.errors import ArticlelingoError, DuplicateTranslationError, RateLimitError
from articlelingo.core.models import (
    ArtifactStatus,
    BatchResult,
    FailedLanguage,
    MultiBatchResult,
    SourceContent,
    TranslatedArtifact,
)
from articlelingo.i18n.encoding import EncodingValidator
from articlelingo.i18n.languages import SUPPORTED_LANGUAGES, Language, normalize_language_code, require_language
from articlelingo.i18n.prompts import FieldContext
from articlelingo.i18n.slug import SlugService
from articlelingo.services.cost import CostAccumulator
from articlelingo.services.engine import TranslationEngine
from articlelingo.services.seo import SeoEnricher
from articlelingo.storage.base import ContentStore

logger = logging.getLogger(__name__)


class TranslationOrchestrator:
    """
    Translates content items into the supported languages.

    Usage:
        orchestrator = TranslationOrchestrator(engine, storage.content, seo=MetaSeoEnricher())

        result = await orchestrator.translate_to_all_languages(content)
        result.succeeded   # ["en", "de", ...]
        result.failed      # [FailedLanguage(language="zh", error="...")]
    """

    def __init__(
        self,
        engine: TranslationEngine,
        store: ContentStore,
        seo: SeoEnricher | None = None,
        slugs: SlugService | None = None,
        validator: EncodingValidator | None = None,
        settings: Settings | None = None,
    ):
        self.engine = engine
        self.store = store
        self.seo = seo
        self.validator = validator or EncodingValidator()
        self.slugs = slugs or SlugService(self.validator)
        self.settings = settings or get_settings()

    # =========================================================================
    # Translation
    # =========================================================================

    async def translate_one(
        self,
        content: SourceContent,
        target_language: str | Language,
        costs: CostAccumulator | None = None,
    ) -> TranslatedArtifact:
        """
        Translate every field of content into one language and persist it.

        Calls are added to costs when given, so retried attempts accumulate
        into one total.

        Raises:
            UnsupportedLanguageError: Unknown target language.
            DuplicateTranslationError: An artifact already exists for the pair.
            TranslationError: A field failed to translate.
            EncodingError: The translated body is not valid UTF-8.
        """
        target = require_language(target_language)
        source = content.source_language
        if target == source:
            raise ArticlelingoError(
                f"Target language {target.value} is the source language of {content.id}",
                code="same_language",
                details={"content_id": content.id, "language": target.value},
            )

        if await self.store.get_artifact(content.id, target.value) is not None:
            raise DuplicateTranslationError(content.id, target.value)

        logger.info(f"Translating {content.id} {source.value}->{target.value}")
        if costs is None:
            costs = CostAccumulator()

        title = await self.engine.translate_field(content.title, source, target, FieldContext.TITLE, costs)
        excerpt = await self.engine.translate_field(content.excerpt, source, target, FieldContext.EXCERPT, costs)
        body = await self.engine.translate_long_text(content.body_html, source, target, costs)
        image_alt = await self.engine.translate_alt_text(content.image_alt, source, target, costs)
        faqs = await self.engine.translate_faqs(content.ordered_faqs, source, target, costs)

        slug = self.slugs.generate_slug(title, target)
        self.validator.validate_utf8(body)

        artifact = TranslatedArtifact(
            content_id=content.id,
            language=target,
            title=title,
            slug=slug,
            excerpt=excerpt,
            body_html=body,
            image_alt=image_alt,
            faqs=faqs,
            status=ArtifactStatus.ACTIVE,
            cost=costs.total,
        )
        await self.store.create_artifact(artifact)

        logger.info(
            f"Translated {content.id} into {target.value} "
            f"({costs.calls} calls, ${costs.total:.6f})"
        )
        return artifact

    async def translate_to_all_languages(
        self,
        content: SourceContent,
        languages: list[str | Language] | None = None,
        skip_existing: bool = True,
    ) -> BatchResult:
        """
        Translate content into each target language in turn.

        Targets are the given languages (validated up front) or every
        supported language except the source. A failing language never
        stops the others.
        """
        targets = self._resolve_targets(content, languages)
        result = BatchResult(content_id=content.id)
        started = time.monotonic()

        logger.info(f"Starting batch for {content.id}: {[t.value for t in targets]}")

        for index, target in enumerate(targets):
            if target == content.source_language:
                result.skipped.append(target.value)
                continue

            if skip_existing and await self.translation_exists(content.id, target):
                logger.info(f"Translation {target.value} already exists for {content.id}, skipped")
                result.skipped.append(target.value)
                continue

            await self._process_language(content, target, result)

            if len(targets) > 1 and index < len(targets) - 1:
                await asyncio.sleep(self.settings.language_delay_seconds)

        result.total_cost = round(result.total_cost, 6)
        logger.info(
            f"Batch for {content.id} finished in {time.monotonic() - started:.2f}s: "
            f"{len(result.succeeded)} succeeded, {len(result.failed)} failed, "
            f"{len(result.skipped)} skipped, ${result.total_cost:.6f}"
        )
        return result

    async def retranslate(
        self,
        content: SourceContent,
        languages: list[str | Language],
    ) -> BatchResult:
        """Replace the translations of content in the given languages."""
        targets = self._resolve_targets(content, languages)
        result = BatchResult(content_id=content.id)

        logger.info(f"Retranslating {content.id}: {[t.value for t in targets]}")

        for target in targets:
            if target == content.source_language:
                result.skipped.append(target.value)
                continue
            await self.delete_translation(content.id, target)
            await self._process_language(content, target, result)

        result.total_cost = round(result.total_cost, 6)
        return result

    async def translate_many(
        self,
        contents: list[SourceContent],
        languages: list[str | Language] | None = None,
    ) -> MultiBatchResult:
        """Run translate_to_all_languages over several content items."""
        summary = MultiBatchResult(total_contents=len(contents))

        for index, content in enumerate(contents):
            try:
                result = await self.translate_to_all_languages(content, languages)
            except Exception as e:
                summary.failed += 1
                logger.error(f"Batch for content {content.id} failed: {e}")
            else:
                summary.completed += 1
                summary.total_translations += len(result.succeeded)
                summary.total_cost = round(summary.total_cost + result.total_cost, 6)
                summary.results[content.id] = result

            if len(contents) > 1 and index < len(contents) - 1:
                await asyncio.sleep(self.settings.content_delay_seconds)

        logger.info(
            f"Translated {summary.completed}/{summary.total_contents} contents, "
            f"{summary.total_translations} translations, ${summary.total_cost:.6f}"
        )
        return summary

    # =========================================================================
    # Language bookkeeping
    # =========================================================================

    def get_languages_to_translate(self, content: SourceContent) -> list[str]:
        """Every supported language except the source, in canonical order."""
        return [lang.value for lang in SUPPORTED_LANGUAGES if lang != content.source_language]

    async def get_existing_languages(self, content_id: str) -> list[str]:
        existing = {a.language for a in await self.store.list_artifacts(content_id)}
        return [lang.value for lang in SUPPORTED_LANGUAGES if lang in existing]

    async def get_missing_languages(self, content: SourceContent) -> list[str]:
        existing = set(await self.get_existing_languages(content.id))
        return [lang for lang in self.get_languages_to_translate(content) if lang not in existing]

    async def is_fully_translated(self, content: SourceContent) -> bool:
        return not await self.get_missing_languages(content)

    async def count_translations(self, content_id: str) -> int:
        return len(await self.store.list_artifacts(content_id))

    async def translation_exists(self, content_id: str, language: str | Language) -> bool:
        return await self.store.get_artifact(content_id, normalize_language_code(language)) is not None

    async def get_translation_stats(self, content: SourceContent) -> dict[str, Any]:
        artifacts = await self.store.list_artifacts(content.id)
        return {
            "content_id": content.id,
            "source_language": content.source_language.value,
            "total_translations": len(artifacts),
            "expected_translations": len(self.get_languages_to_translate(content)),
            "missing_languages": await self.get_missing_languages(content),
            "existing_languages": await self.get_existing_languages(content.id),
            "is_fully_translated": await self.is_fully_translated(content),
            "total_cost": round(sum(a.cost for a in artifacts), 6),
            "translations": [
                {
                    "id": a.id,
                    "language": a.language.value,
                    "status": a.status.value,
                    "cost": a.cost,
                    "created_at": a.created_at,
                }
                for a in artifacts
            ],
        }

    async def get_global_stats(self) -> dict[str, Any]:
        contents = await self.store.list_contents()
        artifacts = await self.store.list_all_artifacts()

        fully_translated = 0
        for content in contents:
            if await self.is_fully_translated(content):
                fully_translated += 1

        return {
            "total_contents": len(contents),
            "total_translations": len(artifacts),
            "fully_translated_contents": fully_translated,
            "total_cost": round(sum(a.cost for a in artifacts), 6),
            "by_language": dict(Counter(a.language.value for a in artifacts)),
            "by_status": dict(Counter(a.status.value for a in artifacts)),
        }

    # =========================================================================
    # Deletion
    # =========================================================================

    async def delete_translation(self, content_id: str, language: str | Language) -> bool:
        lang = normalize_language_code(language)
        deleted = await self.store.delete_artifact(content_id, lang)
        if deleted:
            logger.info(f"Deleted translation {lang} of {content_id}")
        return deleted

    async def delete_all_translations(self, content_id: str) -> int:
        count = 0
        for artifact in await self.store.list_artifacts(content_id):
            if await self.store.delete_artifact(content_id, artifact.language.value):
                count += 1
        logger.info(f"Deleted {count} translations of {content_id}")
        return count

    # =========================================================================
    # Internal
    # =========================================================================

    def _resolve_targets(
        self,
        content: SourceContent,
        languages: list[str | Language] | None,
    ) -> list[Language]:
        if languages is None:
            return [Language(code) for code in self.get_languages_to_translate(content)]
        targets: list[Language] = []
        for code in languages:
            language = require_language(code)
            if language not in targets:
                targets.append(language)
        return targets

    async def _process_language(
        self,
        content: SourceContent,
        target: Language,
        result: BatchResult,
    ) -> None:
        try:
            artifact = await self._translate_with_retry(content, target, CostAccumulator())
        except ArticlelingoError as e:
            logger.error(f"Translation {target.value} of {content.id} failed: {e.message}")
            result.failed.append(FailedLanguage(language=target.value, error=e.message, code=e.code))
            return
        except Exception as e:
            logger.exception(f"Translation {target.value} of {content.id} failed unexpectedly")
            result.failed.append(FailedLanguage(language=target.value, error=str(e)))
            return

        await self._enrich_seo(artifact, content)
        result.succeeded.append(target.value)
        result.total_cost += artifact.cost

    async def _translate_with_retry(
        self,
        content: SourceContent,
        target: Language,
        costs: CostAccumulator,
    ) -> TranslatedArtifact:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(1, self.settings.rate_limit_retries)),
            wait=wait_exponential(multiplier=self.settings.rate_limit_backoff_seconds),
            retry=retry_if_exception_type(RateLimitError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return await retrying(self.translate_one, content, target, costs)

    async def _enrich_seo(self, artifact: TranslatedArtifact, content: SourceContent) -> None:
        if self.seo is None:
            return
        try:
            seo = await self.seo.enrich(artifact, content)
            await self.store.update_artifact_seo(artifact.content_id, artifact.language.value, seo)
        except Exception as e:
            logger.warning(f"SEO enrichment of {artifact.content_id}/{artifact.language.value} failed: {e}")
            return
        artifact.seo = seo
