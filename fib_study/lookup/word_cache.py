"""
Cache-aside word lookup.

A tapped word is normalized to a cache key and read from the dictionary
collection. On a miss the translation, image and dictionary services are
called concurrently, the results are assembled into a WordDefinition and the
bundle is written back under the same key. Entries never expire.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Tuple

from fib_study.config import Config
from fib_study.errors import DictionaryServiceError, ServiceError, WordLookupError
from fib_study.lookup.services import DictionaryService, ImageSearchService, TranslationService
from fib_study.models import WordDefinition
from fib_study.store.base import DocumentStore

logger = logging.getLogger(__name__)

CACHE_KEY_STRIP_PATTERN = re.compile(r'[^a-z0-9]')


def derive_cache_key(word: str) -> str:
    """
    Normalize a word token into its cache key.

    Examples:
        >>> derive_cache_key("Hello!")
        'hello'
        >>> derive_cache_key("don't")
        'dont'
    """
    return CACHE_KEY_STRIP_PATTERN.sub('', (word or "").lower())


def extract_dictionary_details(entries: List[Dict[str, Any]]) -> Tuple[str, str]:
    """
    Pull part of speech and IPA out of dictionary entries.

    Part of speech comes from the first meaning of the first entry. IPA is the
    first entry's `phonetic`, falling back to the first phonetics item that
    carries text.

    Returns:
        (part_of_speech, ipa), each empty when absent
    """
    if not entries or not isinstance(entries[0], dict):
        return "", ""

    entry = entries[0]

    part_of_speech = ""
    meanings = entry.get('meanings') or []
    if meanings and isinstance(meanings[0], dict):
        part_of_speech = meanings[0].get('partOfSpeech') or ""

    ipa = entry.get('phonetic') or ""
    if not ipa:
        for phonetic in entry.get('phonetics') or []:
            if isinstance(phonetic, dict) and phonetic.get('text'):
                ipa = phonetic['text']
                break

    return part_of_speech, ipa


class WordLookupCache:
    """
    Resolves words to definition bundles, reading through the dictionary
    collection of the document store.
    """

    def __init__(
        self,
        store: DocumentStore,
        translation_service: TranslationService,
        image_service: ImageSearchService,
        dictionary_service: DictionaryService,
        collection: str = None
    ):
        self.store = store
        self.translation_service = translation_service
        self.image_service = image_service
        self.dictionary_service = dictionary_service
        self.collection = collection or Config.DICTIONARY_COLLECTION

    def lookup(self, word: str) -> WordDefinition:
        """
        Resolve a word to its definition bundle.

        Args:
            word: Raw token as tapped in the passage (may carry punctuation)

        Returns:
            Cached or freshly assembled WordDefinition

        Raises:
            WordLookupError: If the word has no usable key, or translation or
                image search fails. Nothing is cached in that case.
            PersistenceError: If the store read or write fails
        """
        key = derive_cache_key(word)
        if not key:
            raise WordLookupError(f"Cannot look up '{word}': no letters or digits")

        cached = self.store.get(self.collection, key)
        if cached is not None:
            logger.debug(f"Cache hit for '{key}'")
            return WordDefinition.from_document(cached)

        logger.info(f"Cache miss for '{key}', fetching from external services")
        definition = self._fetch(word)

        self.store.set(self.collection, key, definition.to_document())
        logger.debug(f"Cached definition for '{key}'")
        return definition

    def _fetch(self, word: str) -> WordDefinition:
        with ThreadPoolExecutor(max_workers=3) as executor:
            translation_future = executor.submit(self.translation_service.translate, word)
            images_future = executor.submit(self.image_service.search, word)
            dictionary_future = executor.submit(self.dictionary_service.lookup, word)

            try:
                translation = translation_future.result()
                images = images_future.result()
            except ServiceError as e:
                logger.error(f"Lookup failed for '{word}': {e}")
                raise WordLookupError(
                    f"Failed to look up '{word}'",
                    details=e.processing_error.details or str(e)
                ) from e

            try:
                part_of_speech, ipa = extract_dictionary_details(dictionary_future.result())
            except DictionaryServiceError as e:
                logger.warning(f"Dictionary details unavailable for '{word}': {e}")
                part_of_speech, ipa = "", ""

        return WordDefinition(
            vietnamese=translation.text or Config.NO_TRANSLATION_TEXT,
            images=[image.url for image in images],
            part_of_speech=part_of_speech,
            ipa=ipa,
        )
