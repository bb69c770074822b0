"""
Services - translation engine, orchestration, SEO and cost accounting.

Usage:
    storage = create_local_storage()
    engine = TranslationEngine(OpenAIBackend(), cache=storage.cache, ledger=storage.costs)
    orchestrator = TranslationOrchestrator(engine, storage.content, seo=MetaSeoEnricher())

    result = await orchestrator.translate_to_all_languages(content)
"""

from articlelingo.services.cost import CostAccumulator, compute_cost
from articlelingo.services.engine import TranslationCache, TranslationEngine, estimate_output_tokens
from articlelingo.services.orchestrator import TranslationOrchestrator
from articlelingo.services.seo import MetaSeoEnricher, SeoEnricher

__all__ = [
    "CostAccumulator",
    "compute_cost",
    "TranslationCache",
    "TranslationEngine",
    "estimate_output_tokens",
    "TranslationOrchestrator",
    "MetaSeoEnricher",
    "SeoEnricher",
]
