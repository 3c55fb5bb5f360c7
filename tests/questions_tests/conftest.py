"""
Fixtures for the question bank.
"""
import pytest

from apps.questions.models import AnswerChoice, Passage, Question


@pytest.fixture
def reading_passage(db):
    return Passage.objects.create(title="Notice", content_text="図書館は月曜日に休みです。")


@pytest.fixture
def make_question(db):
    def _make(level="N4", section="grammar_reading", mondai=1, number=1, correct=1, active=True, passage=None):
        question = Question.objects.create(
            level=level,
            section_type=section,
            mondai_number=mondai,
            question_number=number,
            question_text=f"Q{mondai}-{number}",
            correct_answer=correct,
            is_active=active,
            passage=passage,
        )
        # created out of order on purpose
        for n in (3, 1, 4, 2):
            AnswerChoice.objects.create(question=question, choice_number=n, choice_text=f"choice {n}")
        return question
    return _make
