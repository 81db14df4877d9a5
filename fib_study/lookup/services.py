"""
Base service interfaces for word lookups.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from fib_study.models import ImageResult, TranslationResult


class TranslationService(ABC):
    """Base interface for translation services."""

    @abstractmethod
    def translate(self, text: str) -> TranslationResult:
        """
        Translate English text to Vietnamese.

        Args:
            text: English word or phrase

        Returns:
            TranslationResult with the translated text (may be empty)

        Raises:
            TranslationServiceError: If the service call fails
        """
        pass


class ImageSearchService(ABC):
    """Base interface for image search services."""

    @abstractmethod
    def search(self, query: str) -> List[ImageResult]:
        """
        Search for images illustrating a word.

        Args:
            query: Search text

        Returns:
            List of images, possibly empty

        Raises:
            ImageSearchError: If the service call fails
        """
        pass


class DictionaryService(ABC):
    """Base interface for dictionary services."""

    @abstractmethod
    def lookup(self, word: str) -> List[Dict[str, Any]]:
        """
        Look up dictionary entries for a word.

        Args:
            word: Word as it appears in the passage

        Returns:
            List of entries, each with phonetic information and meanings

        Raises:
            DictionaryNotFoundError: If the dictionary has no entry
            DictionaryServiceError: If the service call fails
        """
        pass
