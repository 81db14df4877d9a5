"""
Passage tokenization for the reading view.

Splits a passage into word tokens a learner can tap, keeping inline
"(Answer: ...)" spans whole so they are never looked up.
"""

import re
from dataclasses import dataclass
from typing import List

ANSWER_PATTERN = re.compile(r'(\(Answer:[^)]+\))')


@dataclass
class PassageSegment:
    """One displayable piece of a passage."""
    text: str
    is_answer: bool = False

    def to_dict(self):
        return {'text': self.text, 'is_answer': self.is_answer}


def split_passage(content: str) -> List[PassageSegment]:
    """
    Split passage content into answer spans and word tokens.

    Examples:
        >>> [s.text for s in split_passage("The cat (Answer: sat) down")]
        ['The', 'cat', '(Answer: sat)', 'down']
    """
    segments: List[PassageSegment] = []
    for part in ANSWER_PATTERN.split(content or ""):
        if not part:
            continue
        if ANSWER_PATTERN.fullmatch(part):
            segments.append(PassageSegment(text=part, is_answer=True))
        else:
            segments.extend(PassageSegment(text=word) for word in part.split() if word)
    return segments


def explanation_lines(text: str) -> List[str]:
    """Split explanation text into display lines."""
    return (text or "").split('\n')
