"""
Batch submission of reviewed questions.

Questions are written in fixed-size chunks. Writes inside a chunk run
concurrently; chunks run strictly one after another, so at most one
chunk's worth of writes is outstanding at any time and progress only
moves forward.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence

from fib_study.config import Config
from fib_study.errors import BatchSubmitError, SubmissionValidationError
from fib_study.importer.validation import Wording, validate_questions
from fib_study.models import Question
from fib_study.questions.repository import QuestionRepository

logger = logging.getLogger(__name__)

FIX_ERRORS_MESSAGE = "Please fix validation errors before submitting"

ProgressCallback = Callable[[int], None]


def progress_percent(uploaded: int, total: int) -> int:
    """
    Percentage of questions uploaded, rounded half up.

    Examples:
        >>> [progress_percent(n, 12) for n in (5, 10, 12)]
        [42, 83, 100]
    """
    if total <= 0:
        return 0
    return int(math.floor(uploaded / total * 100 + 0.5))


def chunked(items: Sequence[Question], size: int) -> List[List[Question]]:
    """Split a sequence into consecutive chunks of at most `size` items."""
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class BatchSubmitter:
    """
    Persists validated questions in chunks and reports progress.
    """

    def __init__(self, repository: QuestionRepository, chunk_size: int = None):
        """
        Initialize the submitter.

        Args:
            repository: Question repository to write through
            chunk_size: Questions per chunk (defaults to Config.SUBMIT_CHUNK_SIZE)
        """
        self.repository = repository
        self.chunk_size = chunk_size or Config.SUBMIT_CHUNK_SIZE
        if self.chunk_size < 1:
            raise ValueError(f"Chunk size must be positive, got {self.chunk_size}")

    def submit(
        self,
        questions: Sequence[Question],
        on_progress: Optional[ProgressCallback] = None
    ) -> List[str]:
        """
        Validate and persist questions.

        Args:
            questions: Questions to persist
            on_progress: Called with the cumulative percentage after each chunk

        Returns:
            Store-assigned ids in input order

        Raises:
            SubmissionValidationError: If any question fails validation;
                nothing is written
            BatchSubmitError: If a write fails; remaining chunks are skipped
                and chunks already written stay persisted
        """
        validation_errors = validate_questions(questions, Wording.REVIEW)
        if validation_errors:
            logger.warning(
                f"Submission refused: {len(validation_errors)} question(s) have validation errors"
            )
            raise SubmissionValidationError(FIX_ERRORS_MESSAGE, validation_errors)

        total = len(questions)
        persisted_ids: List[str] = []
        uploaded = 0

        with ThreadPoolExecutor(max_workers=self.chunk_size) as executor:
            for chunk_index, chunk in enumerate(chunked(questions, self.chunk_size)):
                futures = [executor.submit(self.repository.create, question) for question in chunk]
                wait(futures)

                failures = [future.exception() for future in futures if future.exception()]
                persisted_ids.extend(
                    future.result() for future in futures if future.exception() is None
                )

                if failures:
                    reason = str(failures[0]) or failures[0].__class__.__name__
                    logger.error(
                        f"Chunk {chunk_index + 1} failed after {uploaded}/{total} questions "
                        f"were saved: {reason}"
                    )
                    raise BatchSubmitError(
                        f"Failed to save questions: {reason}",
                        persisted_count=len(persisted_ids),
                        persisted_ids=persisted_ids
                    ) from failures[0]

                uploaded += len(chunk)
                percent = progress_percent(uploaded, total)
                logger.info(f"Uploaded {uploaded}/{total} questions ({percent}%)")
                if on_progress:
                    on_progress(percent)

        logger.info(f"✓ Submitted {total} questions")
        return persisted_ids
