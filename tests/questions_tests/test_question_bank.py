import pytest
from django.db import IntegrityError, transaction

from apps.questions.constants import LEVELS, SECTIONS, required_question_count, section_duration_minutes
from apps.questions.models import AnswerChoice, Question
from apps.questions.services import (
    get_answer_key,
    get_question_details,
    list_active_question_ids,
    list_active_questions,
)


def test_required_counts_are_defined_for_every_level():
    for level in LEVELS:
        for section in SECTIONS:
            assert required_question_count(level, section) > 0
            assert section_duration_minutes(level, section) > 0
    assert required_question_count("N5", "vocabulary") == 35
    assert required_question_count("N1", "listening") == 37


@pytest.mark.django_db
def test_active_ids_follow_mondai_order(make_question):
    late = make_question(mondai=2, number=1)
    early = make_question(mondai=1, number=2)
    first = make_question(mondai=1, number=1)
    make_question(mondai=1, number=3, active=False)
    make_question(level="N3", mondai=1, number=1)
    make_question(section="listening", mondai=1, number=1)

    ids = list_active_question_ids("N4", "grammar_reading")

    assert ids == [str(first.id), str(early.id), str(late.id)]


@pytest.mark.django_db
def test_active_questions_carry_mondai_numbers(make_question):
    second = make_question(mondai=2, number=1)
    first = make_question(mondai=1, number=1)

    rows = list_active_questions("N4", "grammar_reading")

    assert rows == [(str(first.id), 1), (str(second.id), 2)]


@pytest.mark.django_db
def test_answer_key_skips_unknown_ids(make_question):
    question = make_question(correct=3)

    key = get_answer_key([str(question.id), "7c9e6679-7425-40de-944b-e07fc1f90ae7"])

    assert key == {str(question.id): 3}


@pytest.mark.django_db
def test_question_details_load_passage_and_ordered_choices(make_question, reading_passage, django_assert_max_num_queries):
    question = make_question(passage=reading_passage)

    with django_assert_max_num_queries(2):
        details = get_question_details([str(question.id)])
        loaded = details[str(question.id)]
        numbers = [c.choice_number for c in loaded.choices.all()]
        title = loaded.passage.title

    assert numbers == [1, 2, 3, 4]
    assert title == "Notice"


@pytest.mark.django_db
def test_choice_numbers_are_unique_per_question(make_question):
    question = make_question()

    with pytest.raises(IntegrityError):
        with transaction.atomic():
            AnswerChoice.objects.create(question=question, choice_number=1, choice_text="dup")


@pytest.mark.django_db
def test_correct_answer_must_be_a_choice_number():
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Question.objects.create(level="N4", section_type="vocabulary", correct_answer=5)
