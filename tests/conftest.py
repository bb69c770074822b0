"""
Shared fixtures: scripted backend, in-memory storage, services.
"""

import pytest

from articlelingo.config import Settings
from articlelingo.core.models import FaqPair, SourceContent
from articlelingo.i18n.languages import Language
from articlelingo.services.engine import TranslationEngine
from articlelingo.services.orchestrator import TranslationOrchestrator
from articlelingo.services.seo import MetaSeoEnricher
from articlelingo.storage.local import create_local_storage

from fakes import FakeBackend


@pytest.fixture
def settings():
    """Settings without pacing delays or retry backoff."""
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        chunk_delay_seconds=0,
        language_delay_seconds=0,
        content_delay_seconds=0,
        rate_limit_backoff_seconds=0,
        rate_limit_retries=3,
        site_base_url="https://news.example.org",
    )


@pytest.fixture
def storage():
    return create_local_storage()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def engine(backend, storage, settings):
    return TranslationEngine(backend, cache=storage.cache, ledger=storage.costs, settings=settings)


@pytest.fixture
def orchestrator(engine, storage, settings):
    return TranslationOrchestrator(
        engine,
        storage.content,
        seo=MetaSeoEnricher(settings),
        settings=settings,
    )


@pytest.fixture
def content():
    """A French article with an image caption and FAQs out of order."""
    return SourceContent(
        id="content_visa",
        source_language=Language.FR,
        title="Visa de travail en Allemagne",
        excerpt="Tout savoir sur le visa de travail allemand.",
        body_html="<h2>Conditions</h2><p>Il faut un contrat de travail.</p><p>Et un passeport valide.</p>",
        image_alt="Un passeport sur une table",
        faqs=(
            FaqPair(question="Combien de temps ?", answer="Environ trois mois.", order=1),
            FaqPair(question="Quel prix ?", answer="75 euros.", order=0),
        ),
    )
