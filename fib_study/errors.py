"""
Error handling system for the FIB Study application.

This module provides centralized error definitions for the four failure
families of the application: validation errors on staged questions, parse
errors on uploaded files, errors raised by external collaborators, and
persistence errors raised by the document store.
"""

import logging
from enum import Enum
from typing import List, Optional, Dict, Any
from dataclasses import dataclass


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors that can occur during processing."""
    VALIDATION = "validation"
    PARSING = "parsing"
    NETWORK = "network"
    PERSISTENCE = "persistence"


@dataclass
class ProcessingError:
    """Represents a processing error with context and guidance."""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    details: str
    suggested_actions: List[str]
    error_code: str
    context: Dict[str, Any] = None

    def __post_init__(self):
        if self.context is None:
            self.context = {}


class FibStudyError(Exception):
    """Base exception for FIB Study errors."""

    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.ERROR
    error_code = "FIB_000"
    suggested_actions: List[str] = []

    def __init__(
        self,
        message: str,
        details: str = "",
        suggested_actions: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.processing_error = ProcessingError(
            category=self.category,
            severity=self.severity,
            message=message,
            details=details,
            suggested_actions=list(suggested_actions or self.suggested_actions),
            error_code=self.error_code,
            context=context
        )
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.processing_error.message


class CsvImportError(FibStudyError):
    """Raised when an uploaded file cannot be imported."""
    category = ErrorCategory.PARSING
    error_code = "IMPORT_001"
    suggested_actions = [
        "Check that the file is a CSV with a header row",
        "Expected columns: title, content, text, type",
    ]


class QuestionValidationError(FibStudyError):
    """Raised when a single question fails validation."""
    category = ErrorCategory.VALIDATION
    error_code = "VALID_001"

    def __init__(self, message: str, errors: List[str], **kwargs):
        self.errors = list(errors)
        super().__init__(message, details="; ".join(self.errors), **kwargs)


class SubmissionValidationError(FibStudyError):
    """Raised when a batch submission is refused because of validation errors."""
    category = ErrorCategory.VALIDATION
    error_code = "VALID_002"
    suggested_actions = ["Correct the highlighted rows and submit again"]

    def __init__(self, message: str, validation_errors: Dict[int, List[str]], **kwargs):
        self.validation_errors = validation_errors
        super().__init__(message, **kwargs)


class ServiceError(FibStudyError):
    """Base exception for external collaborator failures."""
    category = ErrorCategory.NETWORK
    error_code = "NET_000"
    suggested_actions = ["Check your internet connection", "Try the lookup again"]


class TranslationServiceError(ServiceError):
    """Raised when the translation service fails."""
    error_code = "NET_001"


class ImageSearchError(ServiceError):
    """Raised when the image search service fails."""
    error_code = "NET_002"


class DictionaryServiceError(ServiceError):
    """Raised when the dictionary service fails."""
    error_code = "NET_003"


class DictionaryNotFoundError(DictionaryServiceError):
    """Raised when the dictionary has no entry for a word."""
    error_code = "NET_004"


class WordLookupError(ServiceError):
    """Raised when a word lookup cannot produce a definition bundle."""
    error_code = "LOOKUP_001"


class PersistenceError(FibStudyError):
    """Raised when the document store rejects a read or write."""
    category = ErrorCategory.PERSISTENCE
    error_code = "STORE_001"


class BatchSubmitError(PersistenceError):
    """Raised when a batch submission aborts part way through."""
    error_code = "STORE_002"
    suggested_actions = [
        "Earlier batches were saved; remove them before submitting again",
        "Check the document store connection",
    ]

    def __init__(self, message: str, persisted_count: int, persisted_ids: List[str], **kwargs):
        self.persisted_count = persisted_count
        self.persisted_ids = list(persisted_ids)
        super().__init__(message, **kwargs)


class ErrorHandler:
    """
    Collects errors reported while processing an import or submission.

    Errors are logged at a level matching their severity and kept for a
    summary at the end of the run.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.errors: List[ProcessingError] = []
        self.warnings: List[ProcessingError] = []

    def add_error(self, error: ProcessingError) -> None:
        """Add an error to the collection."""
        if error.severity in [ErrorSeverity.ERROR, ErrorSeverity.CRITICAL]:
            self.errors.append(error)
        elif error.severity == ErrorSeverity.WARNING:
            self.warnings.append(error)

        log_level = {
            ErrorSeverity.INFO: logging.INFO,
            ErrorSeverity.WARNING: logging.WARNING,
            ErrorSeverity.ERROR: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL
        }[error.severity]

        self.logger.log(log_level, f"[{error.error_code}] {error.message}")
        if error.details:
            self.logger.log(log_level, f"Details: {error.details}")

    def add_exception(self, exc: FibStudyError) -> None:
        """Record the processing error carried by an application exception."""
        self.add_error(exc.processing_error)

    def has_errors(self) -> bool:
        """Check if any errors have been recorded."""
        return len(self.errors) > 0

    def get_error_summary(self) -> Dict[str, Any]:
        """Get a summary of all errors and warnings."""
        return {
            'error_count': len(self.errors),
            'warning_count': len(self.warnings),
            'errors': [self._format_error_for_summary(e) for e in self.errors],
            'warnings': [self._format_error_for_summary(e) for e in self.warnings]
        }

    def _format_error_for_summary(self, error: ProcessingError) -> Dict[str, Any]:
        """Format error for summary display."""
        return {
            'code': error.error_code,
            'category': error.category.value,
            'severity': error.severity.value,
            'message': error.message,
            'suggested_actions': error.suggested_actions
        }
