"""
Pytest configuration and shared fixtures.

Provides an in-memory document store, fake external services and a Flask
test client wired to them.
"""

import pytest
from hypothesis import settings, Verbosity
from typing import Dict, List

from fib_study.errors import (
    DictionaryNotFoundError,
    ImageSearchError,
    TranslationServiceError
)
from fib_study.lookup.services import DictionaryService, ImageSearchService, TranslationService
from fib_study.models import ImageResult, Question, TranslationResult
from fib_study.store import InMemoryDocumentStore


# Configure Hypothesis for property-based testing
settings.register_profile("fib_study",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None
)
settings.load_profile("fib_study")


def pytest_configure(config):
    config.addinivalue_line("markers", "property: property-based tests using Hypothesis")


class FakeTranslationService(TranslationService):
    """Translation service returning canned translations."""

    def __init__(self, translations: Dict[str, str] = None, fail: bool = False):
        self.translations = translations or {}
        self.fail = fail
        self.calls: List[str] = []

    def translate(self, text: str) -> TranslationResult:
        self.calls.append(text)
        if self.fail:
            raise TranslationServiceError("Failed to translate text")
        return TranslationResult(source=text, text=self.translations.get(text, ""))


class FakeImageService(ImageSearchService):
    """Image service returning canned URLs."""

    def __init__(self, urls: List[str] = None, fail: bool = False):
        self.urls = urls or []
        self.fail = fail
        self.calls: List[str] = []

    def search(self, query: str) -> List[ImageResult]:
        self.calls.append(query)
        if self.fail:
            raise ImageSearchError("Failed to fetch images")
        return [ImageResult(url=url) for url in self.urls]


class FakeDictionaryService(DictionaryService):
    """Dictionary service returning canned entries or not-found."""

    def __init__(self, entries: List[dict] = None, error: Exception = None):
        self.entries = entries
        self.error = error
        self.calls: List[str] = []

    def lookup(self, word: str) -> List[dict]:
        self.calls.append(word)
        if self.error is not None:
            raise self.error
        if self.entries is None:
            raise DictionaryNotFoundError(f"No dictionary entry for '{word}'")
        return self.entries


@pytest.fixture
def store():
    """Provide an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def translation_service():
    return FakeTranslationService({"hello": "xin chào", "Hello!": "xin chào"})


@pytest.fixture
def image_service():
    return FakeImageService(["u1", "u2"])


@pytest.fixture
def dictionary_service():
    return FakeDictionaryService()


@pytest.fixture
def make_question():
    """Factory for valid questions with overridable fields."""
    def _make(**overrides) -> Question:
        fields = {
            'title': 'Passage #1',
            'type': 'RWFIB',
            'content': 'The cat (Answer: sat) on the mat.',
            'text': 'sat: past tense of sit',
        }
        fields.update(overrides)
        return Question(**fields)
    return _make


@pytest.fixture
def app(store, translation_service, image_service, dictionary_service):
    """Create Flask app for testing."""
    from fib_study.web.app import create_app

    app = create_app(
        store=store,
        translation_service=translation_service,
        image_service=image_service,
        dictionary_service=dictionary_service
    )
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    with app.test_client() as client:
        yield client
