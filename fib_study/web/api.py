"""API endpoints for question import, review, management and word lookups."""

import logging
import threading
import uuid
from typing import Any, List, Optional

from flask import Blueprint, jsonify, request, current_app
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from fib_study.config import Config
from fib_study.errors import FibStudyError
from fib_study.importer import import_questions
from fib_study.models import Question, SubmissionProgress
from fib_study.questions import explanation_lines, split_passage
from fib_study.review import ReviewTable
from fib_study.web.error_responses import (
    format_error_response,
    fib_error_response,
    file_too_large_response,
    invalid_json_response,
    missing_parameter_response,
    question_not_found_response,
    submission_in_progress_response,
    unexpected_error_response,
    ErrorCode,
    ActionRequired
)

# Create logger
logger = logging.getLogger(__name__)

# Create API blueprint
bp = Blueprint('api', __name__, url_prefix='/api')

# In-memory progress tracking for batch submissions
submission_progress = {}
_progress_lock = threading.Lock()


@bp.errorhandler(RequestEntityTooLarge)
def handle_file_too_large(e):
    """Handle file upload size limit exceeded."""
    logger.warning(f"File upload size limit exceeded: {e}")
    return file_too_large_response(Config.MAX_UPLOAD_BYTES // (1024 * 1024))


@bp.errorhandler(FibStudyError)
def handle_fib_error(e):
    """Map application errors to JSON responses."""
    logger.warning(f"[{e.processing_error.error_code}] {e.message}")
    return fib_error_response(e)


@bp.errorhandler(HTTPException)
def handle_http_error(e):
    """Render HTTP errors in the standard JSON shape."""
    response = format_error_response(
        error_message=e.description,
        error_code=e.name.upper().replace(' ', '_')
    )
    return jsonify(response), e.code


@bp.errorhandler(Exception)
def handle_unexpected_error(e):
    """Handle unexpected errors with proper logging."""
    logger.error(f"Unexpected error: {e}", exc_info=True)

    # In development, include more details
    include_details = current_app.debug

    return unexpected_error_response(
        error_details=str(e),
        include_details=include_details
    )


def _questions_from_body(body: Any) -> Optional[List[Question]]:
    """Read the staged question list from a JSON body, or None if malformed."""
    if not isinstance(body, dict) or not isinstance(body.get('questions'), list):
        return None
    if not all(isinstance(item, dict) for item in body['questions']):
        return None
    return [Question.from_dict(item) for item in body['questions']]


def _set_progress(submission_id: str, progress: SubmissionProgress) -> None:
    with _progress_lock:
        submission_progress[submission_id] = progress.to_dict()


def _reserve_submission(submission_id: str, total: int) -> bool:
    """Record a new submission unless one with this id is still running."""
    with _progress_lock:
        current = submission_progress.get(submission_id)
        if current is not None and current['status'] == 'in_progress':
            return False
        submission_progress[submission_id] = SubmissionProgress(total=total).to_dict()
        return True


@bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'ok',
        'message': 'FIB Study API is running'
    })


@bp.route('/questions/import', methods=['POST'])
def import_question_file():
    """
    Import questions from an uploaded CSV file.

    Expects:
        - 'file': CSV file (file upload)

    Returns:
        JSON response with the accepted questions, row errors and a summary.
        Nothing is saved; the questions are staged for review.
    """
    if 'file' not in request.files:
        logger.warning("No file provided in import request")
        response = format_error_response(
            error_message='No file provided',
            error_code=ErrorCode.MISSING_FILE,
            action_required=ActionRequired.UPLOAD_FILES,
            additional_data={'field': 'file'}
        )
        return jsonify(response), 400

    upload = request.files['file']
    result = import_questions(upload.read(), filename=upload.filename or "")

    logger.info(
        f"Imported {upload.filename}: {len(result.valid_questions)} valid, "
        f"{result.rejected_count} rejected"
    )

    return jsonify({
        'success': True,
        'message': f"{len(result.valid_questions)} question(s) ready for review",
        'data': result.to_dict()
    }), 200


@bp.route('/questions/review', methods=['POST'])
def review_questions():
    """
    Validate staged questions and return one page of the review table.

    Expects JSON body:
        {
            "questions": [{"title": ..., "type": ..., "content": ..., "text": ...}],
            "page": 1  # Optional
        }
    """
    body = request.get_json(silent=True)
    questions = _questions_from_body(body)
    if questions is None:
        return invalid_json_response("Request body must contain a 'questions' list")

    try:
        page_number = int(body.get('page', 1))
    except (TypeError, ValueError):
        return invalid_json_response("Page must be a number")

    table = ReviewTable(questions)
    valid = table.validate()
    page = table.page(page_number)

    return jsonify({
        'success': True,
        'data': {
            **page.to_dict(),
            'valid': valid,
            'validation_errors': {
                str(index): errors for index, errors in table.validation_errors.items()
            }
        }
    }), 200


@bp.route('/questions/submit', methods=['POST'])
def submit_questions():
    """
    Validate and save staged questions in chunks.

    Expects JSON body:
        {
            "questions": [...],
            "submission_id": "..."  # Optional, used to poll progress
        }

    Returns:
        JSON response with the ids assigned by the store
    """
    body = request.get_json(silent=True)
    questions = _questions_from_body(body)
    if questions is None:
        return invalid_json_response("Request body must contain a 'questions' list")

    submission_id = str(body.get('submission_id') or uuid.uuid4())
    total = len(questions)
    if not _reserve_submission(submission_id, total):
        logger.warning(f"Rejected submit for {submission_id}: already in progress")
        return submission_in_progress_response(submission_id)

    def on_progress(percent: int) -> None:
        _set_progress(submission_id, SubmissionProgress(
            percent=percent,
            uploaded=min(total, round(percent * total / 100)),
            total=total
        ))

    table = ReviewTable(questions)
    submitter = current_app.config['BATCH_SUBMITTER']

    try:
        ids = table.submit(submitter, on_progress=on_progress)
    except FibStudyError as e:
        _set_progress(submission_id, SubmissionProgress(
            percent=0,
            uploaded=getattr(e, 'persisted_count', 0),
            total=total,
            status='error',
            error=e.message
        ))
        raise

    _set_progress(submission_id, SubmissionProgress(
        percent=100, uploaded=total, total=total, status='complete'
    ))

    return jsonify({
        'success': True,
        'message': f"Saved {len(ids)} question(s)",
        'data': {
            'submission_id': submission_id,
            'ids': ids
        }
    }), 201


@bp.route('/questions/submit/<submission_id>/progress', methods=['GET'])
def get_submission_progress(submission_id: str):
    """
    Get the current progress of a batch submission.

    Args:
        submission_id: The submission identifier

    Returns:
        JSON response with current progress information
    """
    with _progress_lock:
        progress = submission_progress.get(submission_id)

    if progress is None:
        response = format_error_response(
            error_message='No submission found with this id',
            error_code=ErrorCode.SUBMISSION_NOT_FOUND
        )
        return jsonify(response), 404

    return jsonify({
        'success': True,
        'data': progress
    }), 200


@bp.route('/questions', methods=['GET'])
def list_questions():
    """
    List saved questions grouped by type and ordered by title number.

    Query parameters:
        - search: Optional case-insensitive filter on title, content and text
    """
    repository = current_app.config['QUESTION_REPOSITORY']
    search = request.args.get('search', '').strip()
    groups = repository.grouped(search)

    return jsonify({
        'success': True,
        'data': {
            question_type: [question.to_dict() for question in questions]
            for question_type, questions in groups.items()
        }
    }), 200


@bp.route('/questions', methods=['POST'])
def create_question():
    """Create a single question from form fields."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return invalid_json_response()

    repository = current_app.config['QUESTION_REPOSITORY']
    question = repository.create_from_form(body)

    return jsonify({
        'success': True,
        'message': 'Question added successfully',
        'data': question.to_dict()
    }), 201


@bp.route('/questions/<question_id>', methods=['GET'])
def get_question(question_id: str):
    """
    Retrieve one question with its passage split for the reading view.
    """
    repository = current_app.config['QUESTION_REPOSITORY']
    question = repository.get(question_id)
    if question is None:
        return question_not_found_response(question_id)

    return jsonify({
        'success': True,
        'data': {
            **question.to_dict(),
            'passage': [segment.to_dict() for segment in split_passage(question.content)],
            'explanation': explanation_lines(question.text)
        }
    }), 200


@bp.route('/questions/<question_id>', methods=['PUT'])
def update_question(question_id: str):
    """Replace every field of a saved question."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return invalid_json_response()

    repository = current_app.config['QUESTION_REPOSITORY']
    if repository.get(question_id) is None:
        return question_not_found_response(question_id)

    question = Question.from_dict(body, question_id=question_id)
    repository.update(question)

    return jsonify({
        'success': True,
        'message': 'Question updated successfully',
        'data': question.to_dict()
    }), 200


@bp.route('/words/<word>', methods=['GET'])
def lookup_word(word: str):
    """
    Look up a tapped word, reading through the dictionary cache.

    Returns:
        JSON response with the Vietnamese translation, image URLs,
        part of speech and IPA
    """
    word_cache = current_app.config['WORD_CACHE']
    definition = word_cache.lookup(word)

    return jsonify({
        'success': True,
        'data': {'word': word, **definition.to_document()}
    }), 200


@bp.route('/translate', methods=['GET'])
def translate_text():
    """Translate English text to Vietnamese."""
    text = request.args.get('text', '')
    if not text.strip():
        return missing_parameter_response('text')

    translation_service = current_app.config['TRANSLATION_SERVICE']
    result = translation_service.translate(text)

    return jsonify({
        'success': True,
        'data': {'text': result.text}
    }), 200


@bp.route('/images', methods=['GET'])
def search_images():
    """Search for images illustrating a word."""
    query = request.args.get('query', '')
    if not query.strip():
        return missing_parameter_response('query')

    image_service = current_app.config['IMAGE_SERVICE']
    images = image_service.search(query)

    return jsonify({
        'success': True,
        'data': {'images': [image.to_dict() for image in images]}
    }), 200
