"""
Question persistence over the document store.
"""

import logging
import re
from typing import Dict, List, Optional

from fib_study.config import Config
from fib_study.errors import PersistenceError, QuestionValidationError
from fib_study.importer.validation import Wording, validate_question
from fib_study.models import Question, QuestionType
from fib_study.store.base import DocumentStore

logger = logging.getLogger(__name__)

TITLE_NUMBER_PATTERN = re.compile(r'#(\d+)')


def title_number(title: str) -> int:
    """
    Extract the question number from a title like "Passage #12".

    Returns:
        The number after the first '#', or 0 if there is none
    """
    match = TITLE_NUMBER_PATTERN.search(title or "")
    return int(match.group(1)) if match else 0


def matches_search(question: Question, search: str) -> bool:
    """Case-insensitive substring match on title, content and text."""
    if not search:
        return True
    needle = search.lower()
    return (
        needle in question.title.lower()
        or needle in question.content.lower()
        or needle in question.text.lower()
    )


class QuestionRepository:
    """
    Creates, reads and updates questions in the questions collection.
    """

    def __init__(self, store: DocumentStore, collection: str = None):
        """
        Initialize the repository.

        Args:
            store: Document store collaborator
            collection: Collection name (defaults to Config.QUESTIONS_COLLECTION)
        """
        self.store = store
        self.collection = collection or Config.QUESTIONS_COLLECTION

    def create(self, question: Question) -> str:
        """
        Persist a new question. Any placeholder id is not written.

        Returns:
            Identifier assigned by the store
        """
        question_id = self.store.create(self.collection, question.to_document())
        logger.debug(f"Created question {question_id}: {question.title}")
        return question_id

    def create_from_form(self, data: Dict[str, str]) -> Question:
        """
        Validate and persist a question entered through the form.

        Args:
            data: Form fields title, type, content and text

        Returns:
            The persisted question with its new id

        Raises:
            QuestionValidationError: If the form data is invalid
        """
        question = Question.from_dict({**data, 'id': None})
        errors = validate_question(question, Wording.REVIEW)
        if errors:
            raise QuestionValidationError("Question is invalid", errors)
        question.id = self.create(question)
        logger.info(f"Question added: {question.id}")
        return question

    def get(self, question_id: str) -> Optional[Question]:
        """Point-read a question by id."""
        data = self.store.get(self.collection, question_id)
        if data is None:
            return None
        return Question.from_dict(data, question_id=question_id)

    def update(self, question: Question) -> None:
        """
        Replace every field of a persisted question.

        Raises:
            QuestionValidationError: If the edited question is invalid
            PersistenceError: If the question has no id or does not exist
        """
        if not question.id:
            raise PersistenceError("Cannot update a question that has not been saved")
        errors = validate_question(question, Wording.REVIEW)
        if errors:
            raise QuestionValidationError("Question is invalid", errors)
        self.store.update(self.collection, question.id, question.to_document())
        logger.info(f"Question updated: {question.id}")

    def list_all(self) -> List[Question]:
        """Read every question in the collection."""
        return [
            Question.from_dict(data, question_id=doc_id)
            for doc_id, data in self.store.list(self.collection)
        ]

    def grouped(self, search: str = "") -> Dict[str, List[Question]]:
        """
        Questions grouped by type, each group ordered by title number.

        Args:
            search: Optional filter on title, content and text

        Returns:
            Dictionary with one list per question type
        """
        questions = self.list_all()
        groups: Dict[str, List[Question]] = {value: [] for value in QuestionType.values()}
        for question in questions:
            if question.type in groups and matches_search(question, search):
                groups[question.type].append(question)
        for value in groups:
            groups[value].sort(key=lambda q: title_number(q.title))
        return groups
