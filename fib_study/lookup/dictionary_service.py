"""
Dictionary service backed by the Free Dictionary API (dictionaryapi.dev).
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from fib_study.config import Config
from fib_study.errors import DictionaryNotFoundError, DictionaryServiceError
from fib_study.lookup.services import DictionaryService


class FreeDictionaryService(DictionaryService):
    """Looks up English dictionary entries. No key is required."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.logger = logging.getLogger(__name__)
        self.session = session or requests.Session()
        self.timeout = timeout or Config.HTTP_TIMEOUT
        self.base_url = Config.DICTIONARY_API_URL.rstrip('/')

    def lookup(self, word: str) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/{quote(word, safe='')}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise DictionaryServiceError("Dictionary lookup failed", details=str(e)) from e

        if response.status_code == 404:
            raise DictionaryNotFoundError(f"No dictionary entry for '{word}'")

        try:
            response.raise_for_status()
            entries = response.json()
        except requests.RequestException as e:
            raise DictionaryServiceError("Dictionary lookup failed", details=str(e)) from e
        except ValueError as e:
            raise DictionaryServiceError("Dictionary returned invalid JSON", details=str(e)) from e

        if not isinstance(entries, list):
            raise DictionaryServiceError(
                "Dictionary returned an unexpected payload",
                details=f"Expected a list, got {type(entries).__name__}"
            )

        self.logger.debug(f"Dictionary returned {len(entries)} entries for '{word}'")
        return entries

    def close(self) -> None:
        self.session.close()
