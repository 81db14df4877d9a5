"""
Review and batch submission of staged questions.
"""

from fib_study.review.submitter import (
    BatchSubmitter,
    FIX_ERRORS_MESSAGE,
    chunked,
    progress_percent
)
from fib_study.review.table import ReviewPage, ReviewRow, ReviewTable

__all__ = [
    'BatchSubmitter',
    'FIX_ERRORS_MESSAGE',
    'chunked',
    'progress_percent',
    'ReviewPage',
    'ReviewRow',
    'ReviewTable'
]
