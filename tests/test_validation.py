"""
Tests for question validation and row normalization.
"""

import string

import pytest
from hypothesis import given, strategies as st

from fib_study.importer.normalizer import normalize_row
from fib_study.importer.validation import Wording, validate_question, validate_questions
from fib_study.models import Question


non_blank = st.text(min_size=1, max_size=40).filter(lambda s: s.strip())
blank = st.sampled_from(["", " ", "\t", "  \n "])


class TestValidateQuestion:
    """Unit tests for the four validation rules."""

    def test_valid_question_has_no_errors(self, make_question):
        assert validate_question(make_question()) == []

    def test_all_rules_reported_in_order(self):
        question = Question(title="", content="", text="", type="MCQ")

        errors = validate_question(question, Wording.IMPORT)

        assert errors == [
            "Missing title",
            "Missing content",
            "Missing text",
            'Invalid type "MCQ" (must be RWFIB or RFIB)',
        ]

    def test_review_wording(self):
        question = Question(title="", content="", text="", type="MCQ")

        errors = validate_question(question, Wording.REVIEW)

        assert errors == [
            "Title is required",
            "Content is required",
            "Text is required",
            'Invalid question type "MCQ"',
        ]

    def test_whitespace_only_is_blank(self, make_question):
        errors = validate_question(make_question(title="   "), Wording.IMPORT)
        assert errors == ["Missing title"]

    def test_type_is_case_sensitive(self, make_question):
        errors = validate_question(make_question(type="rwfib"))
        assert errors == ['Invalid type "rwfib" (must be RWFIB or RFIB)']

    @pytest.mark.parametrize("question_type", ["RWFIB", "RFIB"])
    def test_both_types_accepted(self, make_question, question_type):
        assert validate_question(make_question(type=question_type)) == []


class TestValidateQuestions:
    """Tests for validating a list of staged questions."""

    def test_empty_mapping_when_all_valid(self, make_question):
        assert validate_questions([make_question(), make_question(type="RFIB")]) == {}

    def test_keys_are_zero_based_indices(self, make_question):
        questions = [make_question(), make_question(text=""), make_question(title="")]

        result = validate_questions(questions)

        assert result == {1: ["Text is required"], 2: ["Title is required"]}


class TestValidationProperties:
    """Property-based tests for validation."""

    @pytest.mark.property
    @given(
        title=non_blank,
        content=non_blank,
        text=non_blank,
        question_type=st.sampled_from(["RWFIB", "RFIB"])
    )
    def test_complete_questions_are_valid(self, title, content, text, question_type):
        """Questions with every field filled and a known type have no errors."""
        question = Question(title=title, content=content, text=text, type=question_type)
        assert validate_question(question, Wording.IMPORT) == []
        assert validate_question(question, Wording.REVIEW) == []

    @pytest.mark.property
    @given(
        blank_fields=st.sets(st.sampled_from(["title", "content", "text"])),
        bad_type=st.booleans(),
        blank_value=blank
    )
    def test_one_error_per_violated_rule(self, blank_fields, bad_type, blank_value):
        """Each violated rule contributes exactly one error."""
        fields = {'title': 'T', 'content': 'C', 'text': 'X', 'type': 'RFIB'}
        for name in blank_fields:
            fields[name] = blank_value
        if bad_type:
            fields['type'] = 'OTHER'

        errors = validate_question(Question(**fields), Wording.IMPORT)

        assert len(errors) == len(blank_fields) + (1 if bad_type else 0)


class TestNormalizeRow:
    """Tests for header normalization."""

    def test_lowercases_keys(self):
        row = {"Title": "Q1", "CONTENT": "passage", "text": "t", "Type": "RFIB"}
        assert normalize_row(row) == {
            "title": "Q1", "content": "passage", "text": "t", "type": "RFIB"
        }

    def test_values_unchanged(self):
        assert normalize_row({"Title": "  Mixed Case  "}) == {"title": "  Mixed Case  "}

    def test_drops_cells_without_header(self):
        assert normalize_row({"title": "Q1", None: ["extra"]}) == {"title": "Q1"}

    @pytest.mark.property
    @given(st.dictionaries(
        st.text(alphabet=string.ascii_letters + "_ ", max_size=10),
        st.text(max_size=10),
        max_size=8
    ))
    def test_idempotent(self, row):
        """Normalizing twice gives the same result as normalizing once."""
        once = normalize_row(row)
        assert normalize_row(once) == once
