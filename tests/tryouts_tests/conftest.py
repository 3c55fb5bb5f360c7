"""
Fixtures for Tryouts app QA automation.
"""
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.questions.constants import SECTIONS, required_question_count
from apps.questions.models import AnswerChoice, Question
from apps.tryouts.models import UserAnswer

User = get_user_model()


def _get_error_code(response):
    """error_code from the project error envelope."""
    data = response.data
    if isinstance(data, dict):
        return data.get("error_code")
    return None


def _get_error_detail(response, key):
    """Return error detail for a field, supporting wrapped error responses."""
    data = response.data
    if isinstance(data, dict) and "errors" in data and isinstance(data["errors"], dict):
        data = data["errors"]
    if isinstance(data, dict):
        return data.get(key)
    return None


def build_question_bank(level="N5", extra=0, sections=SECTIONS, per_mondai=None):
    """
    Active questions for every section of ``level``: the required count plus
    ``extra``. Question i of a section has correct answer ((i - 1) % 4) + 1.
    All questions sit in mondai 1 unless ``per_mondai`` splits them into
    consecutive mondai of that size.
    """
    bank = {}
    for section in sections:
        count = required_question_count(level, section) + extra
        questions = Question.objects.bulk_create([
            Question(
                level=level,
                section_type=section,
                mondai_number=1 if per_mondai is None else (i - 1) // per_mondai + 1,
                question_number=i,
                question_text=f"{level} {section} Q{i}",
                correct_answer=((i - 1) % 4) + 1,
            )
            for i in range(1, count + 1)
        ])
        AnswerChoice.objects.bulk_create([
            AnswerChoice(question=q, choice_number=n, choice_text=f"choice {n}")
            for q in questions
            for n in (1, 2, 3, 4)
        ])
        bank[section] = questions
    return bank


def answer_key_for(attempt):
    return {
        str(pk): correct
        for pk, correct in Question.objects.filter(
            id__in=attempt.snapshot.all_question_ids()
        ).values_list("id", "correct_answer")
    }


def wrong_choice(correct):
    return correct % 4 + 1


def save_answers(attempt, section, correct, wrong=0):
    """Store ``correct`` right and ``wrong`` wrong answers for the first questions of a section."""
    key = answer_key_for(attempt)
    ids = attempt.snapshot.question_ids(section)
    assert correct + wrong <= len(ids)
    rows = []
    for index, qid in enumerate(ids[:correct + wrong]):
        choice = key[qid] if index < correct else wrong_choice(key[qid])
        rows.append(UserAnswer(attempt=attempt, question_id=qid, section_type=section, selected_choice=choice))
    UserAnswer.objects.bulk_create(rows)


@pytest.fixture
def api_client():
    client = APIClient()
    client.raise_request_exception = True
    return client


@pytest.fixture
def candidate(db):
    return User.objects.create_user(
        username="candidate",
        email="candidate@tryout.test",
        password="Pass12345!",
    )


@pytest.fixture
def other_candidate(db):
    return User.objects.create_user(
        username="other",
        email="other@tryout.test",
        password="Pass12345!",
    )


@pytest.fixture
def api_client_candidate(api_client, candidate):
    api_client.force_authenticate(user=candidate)
    return api_client


@pytest.fixture
def api_client_other(other_candidate):
    client = APIClient()
    client.raise_request_exception = True
    client.force_authenticate(user=other_candidate)
    return client


@pytest.fixture
def n5_bank(db):
    return build_question_bank("N5")


@pytest.fixture
def started_attempt(candidate, n5_bank):
    from apps.tryouts.services import TryoutService

    attempt, _ = TryoutService.start(candidate, "N5")
    return attempt
