"""
Word lookups: external services, the cache-aside lookup and session state.
"""

from fib_study.lookup.services import DictionaryService, ImageSearchService, TranslationService
from fib_study.lookup.word_cache import WordLookupCache, derive_cache_key, extract_dictionary_details
from fib_study.lookup.session import LookupSession, LookupState, LookupTicket

__all__ = [
    'DictionaryService',
    'ImageSearchService',
    'TranslationService',
    'WordLookupCache',
    'derive_cache_key',
    'extract_dictionary_details',
    'LookupSession',
    'LookupState',
    'LookupTicket'
]
