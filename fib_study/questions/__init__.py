"""
Question persistence and passage handling.
"""

from fib_study.questions.repository import QuestionRepository, title_number, matches_search
from fib_study.questions.passage import PassageSegment, split_passage, explanation_lines

__all__ = [
    'QuestionRepository',
    'title_number',
    'matches_search',
    'PassageSegment',
    'split_passage',
    'explanation_lines'
]
