"""
Paginated review of staged questions before submission.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fib_study.config import Config
from fib_study.importer.validation import Wording, validate_questions
from fib_study.models import Question
from fib_study.review.submitter import BatchSubmitter, ProgressCallback

logger = logging.getLogger(__name__)


@dataclass
class ReviewRow:
    """One row of the review table."""
    ordinal: int  # 1-based position in the full list
    question: Question
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ordinal': self.ordinal,
            'question': self.question.to_dict(),
            'errors': list(self.errors),
            'status': 'Valid' if self.is_valid else ", ".join(self.errors),
        }


@dataclass
class ReviewPage:
    """A page of the review table."""
    page: int
    total_pages: int
    start: int  # 1-based ordinal of the first row shown
    end: int    # 1-based ordinal of the last row shown
    total: int
    rows: List[ReviewRow]

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self) -> Dict[str, Any]:
        return {
            'page': self.page,
            'total_pages': self.total_pages,
            'start': self.start,
            'end': self.end,
            'total': self.total,
            'has_previous': self.has_previous,
            'has_next': self.has_next,
            'rows': [row.to_dict() for row in self.rows],
        }


class ReviewTable:
    """
    Holds staged questions for review, validation and submission.

    Validation errors live only here; they are never written with the
    questions.
    """

    def __init__(self, questions: List[Question], page_size: int = None):
        self.questions = list(questions)
        self.page_size = page_size or Config.REVIEW_PAGE_SIZE
        self.validation_errors: Dict[int, List[str]] = {}
        self.upload_progress = 0
        self.error: Optional[str] = None

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(len(self.questions) / self.page_size))

    def validate(self) -> bool:
        """
        Re-validate every staged question.

        Returns:
            True if no question has errors
        """
        self.validation_errors = validate_questions(self.questions, Wording.REVIEW)
        return not self.validation_errors

    def page(self, number: int = 1) -> ReviewPage:
        """
        Get one page of rows. Out-of-range page numbers are clamped.
        """
        number = min(max(1, number), self.total_pages)
        start_index = (number - 1) * self.page_size
        end_index = min(start_index + self.page_size, len(self.questions))

        rows = [
            ReviewRow(
                ordinal=index + 1,
                question=self.questions[index],
                errors=self.validation_errors.get(index, [])
            )
            for index in range(start_index, end_index)
        ]

        return ReviewPage(
            page=number,
            total_pages=self.total_pages,
            start=start_index + 1 if rows else 0,
            end=end_index,
            total=len(self.questions),
            rows=rows
        )

    def submit(
        self,
        submitter: BatchSubmitter,
        on_progress: Optional[ProgressCallback] = None
    ) -> List[str]:
        """
        Validate and submit every staged question.

        On success the staged list is cleared. Progress is reset to 0 once
        the submission ends, whether it succeeded or not.

        Returns:
            Store-assigned ids in input order

        Raises:
            SubmissionValidationError: If any staged question is invalid
            BatchSubmitError: If a write fails part way through
        """
        self.error = None

        def track(percent: int) -> None:
            self.upload_progress = percent
            if on_progress:
                on_progress(percent)

        try:
            self.validate()
            ids = submitter.submit(self.questions, on_progress=track)
        except Exception as e:
            self.error = str(e)
            logger.warning(f"Submission of {len(self.questions)} questions failed: {e}")
            raise
        finally:
            self.upload_progress = 0

        self.questions = []
        self.validation_errors = {}
        return ids
