"""
CSV import pipeline for question sets.

Parses an uploaded CSV file, normalizes and validates each row, and splits
the rows into accepted questions and row-level errors. Nothing is written to
the document store here; accepted questions are staged for review.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from fib_study.config import Config
from fib_study.errors import CsvImportError
from fib_study.importer.normalizer import normalize_row
from fib_study.importer.validation import Wording, validate_question
from fib_study.models import ImportResult, Question, generate_placeholder_id

logger = logging.getLogger(__name__)

PARSE_ERROR_MESSAGE = "Failed to parse CSV file. Please check the format and try again."
NOT_CSV_MESSAGE = "Please upload a CSV file"
NO_VALID_QUESTIONS_MESSAGE = "No valid questions found in the CSV file"


def is_csv_filename(filename: Optional[str]) -> bool:
    """Check whether a filename carries a supported import extension."""
    if not filename:
        return False
    return Path(filename).suffix.lower() in Config.IMPORT_FORMATS


def read_csv_rows(content: Union[str, bytes]) -> List[Dict[str, str]]:
    """
    Parse CSV content into raw rows keyed by the header row.

    Args:
        content: File content as text or UTF-8 bytes (a BOM is accepted)

    Returns:
        List of raw rows, one per data line. Blank lines are skipped.

    Raises:
        CsvImportError: If the content cannot be decoded or parsed
    """
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            logger.error(f"CSV file is not valid UTF-8: {e}")
            raise CsvImportError(PARSE_ERROR_MESSAGE, details=str(e)) from e
    elif content.startswith('\ufeff'):
        content = content[1:]

    try:
        reader = csv.DictReader(io.StringIO(content, newline=''), strict=True)
        rows = list(reader)
    except csv.Error as e:
        logger.error(f"Error parsing CSV file: {e}")
        raise CsvImportError(PARSE_ERROR_MESSAGE, details=str(e)) from e

    if not reader.fieldnames:
        logger.error("CSV file has no header row")
        raise CsvImportError(PARSE_ERROR_MESSAGE, details="Missing header row")

    logger.debug(f"CSV headers: {reader.fieldnames}")
    return rows


def row_to_question(row: Dict[str, str]) -> Question:
    """
    Map one normalized row to a staged question with a placeholder id.

    Unrecognized columns are ignored. The type defaults to RWFIB when the
    column is absent or empty.
    """
    return Question(
        id=generate_placeholder_id(),
        title=row.get('title') or "",
        content=row.get('content') or "",
        text=row.get('text') or "",
        type=row.get('type') or Config.DEFAULT_QUESTION_TYPE,
    )


def import_questions(
    content: Union[str, bytes],
    filename: Optional[str] = None
) -> ImportResult:
    """
    Import questions from CSV content.

    Args:
        content: CSV file content
        filename: Original filename; when given it must end in .csv

    Returns:
        ImportResult with the accepted questions and the row-level errors

    Raises:
        CsvImportError: If the file is not a CSV, cannot be parsed, or
            contains no valid questions
    """
    if filename is not None and not is_csv_filename(filename):
        logger.warning(f"Rejected non-CSV upload: {filename}")
        raise CsvImportError(NOT_CSV_MESSAGE, details=f"Unsupported file: {filename}")

    raw_rows = read_csv_rows(content)

    valid_questions: List[Question] = []
    errors: List[str] = []
    row_errors: Dict[int, List[str]] = {}

    for index, raw_row in enumerate(raw_rows):
        row_number = index + 1
        question = row_to_question(normalize_row(raw_row))

        question_errors = validate_question(question, Wording.IMPORT)
        if question_errors:
            row_errors[row_number] = question_errors
            errors.extend(f"Row {row_number}: {message}" for message in question_errors)
        else:
            valid_questions.append(question)

    logger.info(
        f"Parsed {len(raw_rows)} rows: {len(valid_questions)} valid, "
        f"{len(row_errors)} rejected"
    )

    if not valid_questions:
        if errors:
            message = "No valid questions found:\n" + "\n".join(errors)
        else:
            message = NO_VALID_QUESTIONS_MESSAGE
        raise CsvImportError(message, context={'row_errors': row_errors})

    return ImportResult(
        valid_questions=valid_questions,
        errors=errors,
        row_errors=row_errors,
        total_rows=len(raw_rows)
    )


def import_questions_file(path: Union[str, Path]) -> ImportResult:
    """
    Import questions from a CSV file on disk.

    Raises:
        CsvImportError: If the file is missing, not a CSV, or not importable
    """
    path = Path(path)
    if not is_csv_filename(path.name):
        raise CsvImportError(NOT_CSV_MESSAGE, details=f"Unsupported file: {path.name}")
    try:
        content = path.read_bytes()
    except OSError as e:
        raise CsvImportError(f"Could not read file: {path}", details=str(e)) from e
    return import_questions(content, filename=path.name)
