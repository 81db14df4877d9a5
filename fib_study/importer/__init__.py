"""
Question import: row normalization, validation and the CSV pipeline.
"""

from fib_study.importer.normalizer import normalize_row
from fib_study.importer.validation import (
    Wording,
    validate_question,
    validate_questions
)
from fib_study.importer.csv_importer import (
    import_questions,
    import_questions_file,
    is_csv_filename,
    read_csv_rows
)

__all__ = [
    'normalize_row',
    'Wording',
    'validate_question',
    'validate_questions',
    'import_questions',
    'import_questions_file',
    'is_csv_filename',
    'read_csv_rows'
]
