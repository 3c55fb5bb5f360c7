# apps/questions/services.py
"""
Read side of the question bank. The tryout engine only talks to the bank
through these functions.
"""
from typing import Dict, Iterable, List, Tuple

from django.db.models import Prefetch

from .constants import required_question_count  # noqa: F401
from .models import AnswerChoice, Question


def list_active_questions(level: str, section: str) -> List[Tuple[str, int]]:
    """(question id, mondai number) of active questions for (level, section) in mondai / question-number order."""
    rows = Question.objects.filter(
        level=level,
        section_type=section,
        is_active=True,
    ).order_by(
        'mondai_number', 'question_number', 'created_at'
    ).values_list('id', 'mondai_number')
    return [(str(pk), mondai) for pk, mondai in rows]


def list_active_question_ids(level: str, section: str) -> List[str]:
    return [qid for qid, _mondai in list_active_questions(level, section)]


def get_answer_key(question_ids: Iterable[str]) -> Dict[str, int]:
    """
    Map question id -> correct choice number.
    Ids that no longer exist are simply absent from the result.
    """
    rows = Question.objects.filter(id__in=list(question_ids)).values_list('id', 'correct_answer')
    return {str(pk): correct for pk, correct in rows}


def get_question_details(question_ids: Iterable[str]) -> Dict[str, Question]:
    """Questions with passage and choices loaded, keyed by id (no ordering implied)."""
    questions = Question.objects.filter(
        id__in=list(question_ids)
    ).select_related(
        'passage'
    ).prefetch_related(
        Prefetch('choices', queryset=AnswerChoice.objects.order_by('choice_number'))
    )
    return {str(q.id): q for q in questions}
