"""
Per-learner lookup state with a guard against stale responses.

Each selected word gets a ticket. A result is only applied when its ticket
is still the current one, so a slow lookup for an earlier word can never
replace the word now on display.
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fib_study.errors import FibStudyError
from fib_study.lookup.word_cache import WordLookupCache
from fib_study.models import WordDefinition

logger = logging.getLogger(__name__)


class LookupState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True)
class LookupTicket:
    """Identifies one in-flight lookup."""
    request_id: int
    word: str


class LookupSession:
    """Tracks the selected word and the outcome of its lookup."""

    def __init__(self, cache: WordLookupCache):
        self.cache = cache
        self.state = LookupState.IDLE
        self.word: Optional[str] = None
        self.definition: Optional[WordDefinition] = None
        self.error: Optional[str] = None
        self._current: Optional[LookupTicket] = None
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def select(self, word: str) -> LookupTicket:
        """Select a word and move to LOADING. Any earlier ticket becomes stale."""
        with self._lock:
            ticket = LookupTicket(request_id=next(self._counter), word=word)
            self._current = ticket
            self.state = LookupState.LOADING
            self.word = word
            self.definition = None
            self.error = None
            return ticket

    def is_current(self, ticket: LookupTicket) -> bool:
        return self._current == ticket

    def resolve(self, ticket: LookupTicket, definition: WordDefinition) -> bool:
        """
        Apply a resolved lookup.

        Returns:
            False if the ticket is stale and the result was discarded
        """
        with self._lock:
            if not self.is_current(ticket):
                logger.debug(f"Discarding stale result for '{ticket.word}'")
                return False
            self.state = LookupState.RESOLVED
            self.definition = definition
            return True

    def fail(self, ticket: LookupTicket, error: str) -> bool:
        """
        Apply a failed lookup.

        Returns:
            False if the ticket is stale and the failure was discarded
        """
        with self._lock:
            if not self.is_current(ticket):
                logger.debug(f"Discarding stale failure for '{ticket.word}'")
                return False
            self.state = LookupState.FAILED
            self.error = error
            return True

    def clear(self) -> None:
        """Close the popup and return to IDLE."""
        with self._lock:
            self._current = None
            self.state = LookupState.IDLE
            self.word = None
            self.definition = None
            self.error = None

    def lookup(self, word: str) -> LookupState:
        """
        Select a word and run its lookup through the cache.

        Returns:
            The session state after the result has been applied
        """
        ticket = self.select(word)
        try:
            definition = self.cache.lookup(word)
        except FibStudyError as e:
            self.fail(ticket, e.message)
        else:
            self.resolve(ticket, definition)
        return self.state
