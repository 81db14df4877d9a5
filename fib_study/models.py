"""
Core data models for the FIB Study application.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional
import uuid


class QuestionType(Enum):
    """Supported exercise types."""
    RWFIB = "RWFIB"  # Reading-and-Writing Fill-in-Blanks
    RFIB = "RFIB"    # Reading-only Fill-in-Blanks

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


@dataclass
class Question:
    """A reading passage with its explanation lines."""
    title: str
    content: str
    text: str
    type: str = QuestionType.RWFIB.value
    id: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        """Document body as written to the store (never carries the id)."""
        return {
            'title': self.title,
            'type': self.type,
            'content': self.content,
            'text': self.text,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], question_id: Optional[str] = None) -> 'Question':
        """
        Create a question from a stored document or a JSON payload.

        Missing text fields become empty strings and a missing type falls back
        to RWFIB, matching how stored documents are read back.
        """
        return cls(
            id=question_id if question_id is not None else data.get('id'),
            title=data.get('title') or "",
            content=data.get('content') or "",
            text=data.get('text') or "",
            type=data.get('type') or QuestionType.RWFIB.value,
        )


def generate_placeholder_id() -> str:
    """
    Generate a client-side identifier for a staged, not yet persisted question.

    Returns:
        A unique identifier string
    """
    return str(uuid.uuid4())


@dataclass
class WordDefinition:
    """Translation, dictionary and image bundle for one word."""
    vietnamese: str
    images: List[str] = field(default_factory=list)
    part_of_speech: str = ""
    ipa: str = ""

    def to_document(self) -> Dict[str, Any]:
        """Serialize using the stored field names."""
        return {
            'vietnamese': self.vietnamese,
            'images': list(self.images),
            'partOfSpeech': self.part_of_speech,
            'ipa': self.ipa,
        }

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> 'WordDefinition':
        return cls(
            vietnamese=data.get('vietnamese') or "",
            images=list(data.get('images') or []),
            part_of_speech=data.get('partOfSpeech') or "",
            ipa=data.get('ipa') or "",
        )


@dataclass
class TranslationResult:
    """Result of translating a single piece of text."""
    source: str
    text: str


@dataclass
class ImageResult:
    """A single image returned by the image search service."""
    url: str
    alt: str = ""
    credit_name: str = ""
    credit_link: str = ""
    width: int = 0
    height: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url': self.url,
            'alt': self.alt,
            'credit': {'name': self.credit_name, 'link': self.credit_link},
            'width': self.width,
            'height': self.height,
        }


@dataclass
class ImportResult:
    """Outcome of importing one CSV file."""
    valid_questions: List[Question]
    errors: List[str]
    row_errors: Dict[int, List[str]]
    total_rows: int

    @property
    def rejected_count(self) -> int:
        return len(self.row_errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'questions': [q.to_dict() for q in self.valid_questions],
            'errors': list(self.errors),
            'row_errors': {str(row): errs for row, errs in self.row_errors.items()},
            'summary': {
                'total': self.total_rows,
                'valid': len(self.valid_questions),
                'rejected': self.rejected_count,
            },
        }


@dataclass
class SubmissionProgress:
    """Progress snapshot of a batch submission."""
    percent: int = 0
    uploaded: int = 0
    total: int = 0
    status: str = "in_progress"  # in_progress, complete, error
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
