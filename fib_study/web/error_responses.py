"""Centralized error response formatting for web API endpoints.

This module provides consistent error response formatting across all API endpoints,
including error codes, messages, and action_required fields.
"""

from typing import Dict, Any, Optional, Tuple
from flask import jsonify
import logging

from fib_study.errors import (
    BatchSubmitError,
    CsvImportError,
    DictionaryNotFoundError,
    FibStudyError,
    ImageSearchError,
    PersistenceError,
    QuestionValidationError,
    ServiceError,
    SubmissionValidationError,
    TranslationServiceError,
    WordLookupError
)

logger = logging.getLogger(__name__)


class ErrorCode:
    """Standard error codes for API responses."""

    # File and upload errors
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    MISSING_FILE = "MISSING_FILE"
    IMPORT_FAILED = "IMPORT_FAILED"

    # Question errors
    VALIDATION_FAILED = "VALIDATION_FAILED"
    QUESTION_NOT_FOUND = "QUESTION_NOT_FOUND"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    SUBMISSION_NOT_FOUND = "SUBMISSION_NOT_FOUND"
    SUBMISSION_IN_PROGRESS = "SUBMISSION_IN_PROGRESS"
    STORE_ERROR = "STORE_ERROR"

    # Lookup errors
    LOOKUP_FAILED = "LOOKUP_FAILED"
    TRANSLATION_FAILED = "TRANSLATION_FAILED"
    IMAGE_SEARCH_FAILED = "IMAGE_SEARCH_FAILED"
    WORD_NOT_FOUND = "WORD_NOT_FOUND"
    SERVICE_ERROR = "SERVICE_ERROR"

    # Data validation errors
    INVALID_JSON = "INVALID_JSON"
    MISSING_DATA = "MISSING_DATA"
    MISSING_PARAMETER = "MISSING_PARAMETER"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class ActionRequired:
    """Standard action_required values for error responses."""

    UPLOAD_FILES = "upload_files"
    FIX_VALIDATION = "fix_validation"
    RETRY = "retry"
    CONTACT_SUPPORT = "contact_support"
    CONFIGURE_CREDENTIALS = "configure_credentials"


# Most specific exception types first
_EXCEPTION_RESPONSES = [
    (CsvImportError, ErrorCode.IMPORT_FAILED, ActionRequired.UPLOAD_FILES, 400),
    (QuestionValidationError, ErrorCode.VALIDATION_FAILED, ActionRequired.FIX_VALIDATION, 400),
    (SubmissionValidationError, ErrorCode.VALIDATION_FAILED, ActionRequired.FIX_VALIDATION, 400),
    (BatchSubmitError, ErrorCode.SUBMISSION_FAILED, ActionRequired.RETRY, 500),
    (PersistenceError, ErrorCode.STORE_ERROR, ActionRequired.RETRY, 500),
    (DictionaryNotFoundError, ErrorCode.WORD_NOT_FOUND, None, 404),
    (TranslationServiceError, ErrorCode.TRANSLATION_FAILED, ActionRequired.RETRY, 502),
    (ImageSearchError, ErrorCode.IMAGE_SEARCH_FAILED, ActionRequired.RETRY, 502),
    (WordLookupError, ErrorCode.LOOKUP_FAILED, ActionRequired.RETRY, 502),
    (ServiceError, ErrorCode.SERVICE_ERROR, ActionRequired.RETRY, 502),
]


def format_error_response(
    error_message: str,
    error_code: str,
    action_required: Optional[str] = None,
    additional_data: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Format a consistent error response for API endpoints.

    Args:
        error_message: Human-readable error message
        error_code: Machine-readable error code (use ErrorCode constants)
        action_required: Specific user action needed (use ActionRequired constants)
        additional_data: Additional data to include in response

    Returns:
        Dictionary formatted for JSON response

    Example:
        >>> format_error_response(
        ...     "Please upload a CSV file",
        ...     ErrorCode.IMPORT_FAILED,
        ...     action_required=ActionRequired.UPLOAD_FILES
        ... )
        {
            'success': False,
            'error': 'Please upload a CSV file',
            'error_code': 'IMPORT_FAILED',
            'action_required': 'upload_files'
        }
    """
    response = {
        'success': False,
        'error': error_message,
        'error_code': error_code
    }

    if action_required:
        response['action_required'] = action_required

    if additional_data:
        response.update(additional_data)

    return response


def _error_data(error: FibStudyError) -> Dict[str, Any]:
    """Extra response fields carried by specific exception types."""
    data: Dict[str, Any] = {}
    if error.processing_error.details:
        data['details'] = error.processing_error.details
    if error.processing_error.suggested_actions:
        data['suggested_actions'] = error.processing_error.suggested_actions

    if isinstance(error, CsvImportError):
        row_errors = error.processing_error.context.get('row_errors')
        if row_errors:
            data['row_errors'] = {str(row): errs for row, errs in row_errors.items()}
    elif isinstance(error, QuestionValidationError):
        data['errors'] = error.errors
    elif isinstance(error, SubmissionValidationError):
        data['validation_errors'] = {
            str(index): errs for index, errs in error.validation_errors.items()
        }
    elif isinstance(error, BatchSubmitError):
        data['persisted_count'] = error.persisted_count
        data['persisted_ids'] = error.persisted_ids

    return data


def fib_error_response(error: FibStudyError) -> Tuple[Any, int]:
    """
    Create an error response for an application exception.

    Args:
        error: Exception raised by the import, review, store or lookup layers

    Returns:
        Tuple of (jsonify response, HTTP status code)
    """
    error_code, action_required, status = ErrorCode.INTERNAL_ERROR, ActionRequired.CONTACT_SUPPORT, 500
    for error_type, code, action, http_status in _EXCEPTION_RESPONSES:
        if isinstance(error, error_type):
            error_code, action_required, status = code, action, http_status
            break

    response = format_error_response(
        error_message=error.message,
        error_code=error_code,
        action_required=action_required,
        additional_data=_error_data(error)
    )

    return jsonify(response), status


def file_too_large_response(max_size_mb: int = 5) -> Tuple[Any, int]:
    """
    Create a standardized file too large error response.

    Args:
        max_size_mb: Maximum file size in MB

    Returns:
        Tuple of (jsonify response, HTTP status code)
    """
    message = (
        f"File too large. Maximum upload size is {max_size_mb}MB. "
        "Please split your question set into smaller files."
    )

    response = format_error_response(
        error_message=message,
        error_code=ErrorCode.FILE_TOO_LARGE,
        action_required=ActionRequired.UPLOAD_FILES
    )

    return jsonify(response), 413


def missing_parameter_response(name: str) -> Tuple[Any, int]:
    """
    Create a standardized missing parameter error response.

    Args:
        name: Name of the missing query or form parameter

    Returns:
        Tuple of (jsonify response, HTTP status code)
    """
    response = format_error_response(
        error_message=f"{name.capitalize()} parameter is required",
        error_code=ErrorCode.MISSING_PARAMETER,
        additional_data={'field': name}
    )

    return jsonify(response), 400


def invalid_json_response(message: Optional[str] = None) -> Tuple[Any, int]:
    """
    Create a standardized invalid request body error response.

    Returns:
        Tuple of (jsonify response, HTTP status code)
    """
    response = format_error_response(
        error_message=message or "Request body must be valid JSON",
        error_code=ErrorCode.INVALID_JSON
    )

    return jsonify(response), 400


def question_not_found_response(question_id: str) -> Tuple[Any, int]:
    """
    Create a standardized question not found error response.

    Args:
        question_id: The question ID that was not found

    Returns:
        Tuple of (jsonify response, HTTP status code)
    """
    response = format_error_response(
        error_message=f"Question not found: {question_id}",
        error_code=ErrorCode.QUESTION_NOT_FOUND
    )

    return jsonify(response), 404


def submission_in_progress_response(submission_id: str) -> Tuple[Any, int]:
    """
    Create a response for a submission id that is still being processed.

    Args:
        submission_id: The submission identifier already in use

    Returns:
        Tuple of (jsonify response, HTTP status code)
    """
    response = format_error_response(
        error_message=f"Submission already in progress: {submission_id}",
        error_code=ErrorCode.SUBMISSION_IN_PROGRESS,
        action_required=ActionRequired.RETRY,
        additional_data={'submission_id': submission_id}
    )

    return jsonify(response), 409


def unexpected_error_response(
    error_details: Optional[str] = None,
    include_details: bool = False
) -> Tuple[Any, int]:
    """
    Create a standardized unexpected error response.

    Args:
        error_details: Details about the error (for logging)
        include_details: Whether to include error details in response (dev mode)

    Returns:
        Tuple of (jsonify response, HTTP status code)
    """
    if error_details:
        logger.error(f"Unexpected error: {error_details}")

    if include_details and error_details:
        message = f"An unexpected error occurred: {error_details}"
    else:
        message = (
            "An unexpected error occurred. "
            "Please try again or contact support if the problem persists."
        )

    response = format_error_response(
        error_message=message,
        error_code=ErrorCode.UNEXPECTED_ERROR,
        action_required=ActionRequired.CONTACT_SUPPORT
    )

    return jsonify(response), 500
