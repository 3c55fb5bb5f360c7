# apps/tryouts/services.py
"""
Tryout lifecycle: start -> record answers -> submit sections -> complete -> results.

Every mutation runs in one transaction and locks the attempt row first, so
answer writes, section submissions and completion of one attempt never
interleave. Uniqueness races (double start, double submit) are settled by the
database constraints on the models and translated into the same outcome the
sequential path would have produced.
"""
import functools
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, OperationalError, transaction
from django.utils import timezone

from apps.questions.constants import LEVELS, SECTIONS, section_duration_minutes
from apps.questions.services import (
    get_answer_key,
    get_question_details,
    list_active_questions,
    required_question_count,
)

from .conf import tryout_setting
from .exceptions import (
    AlreadyCompleted,
    AlreadySubmitted,
    AttemptNotCompleted,
    AttemptNotFound,
    InsufficientContentPool,
    InvalidLevel,
    InvalidSection,
    MissingSection,
    NotOwner,
    QuestionNotInAttempt,
    SectionLocked,
    StorageUnavailable,
)
from .models import SectionScore, SectionSubmission, TestAttempt, UserAnswer
from .randomizer import build_snapshot, generate_seed, shuffle_choices
from .scoring import (
    PassFailResult,
    evaluate_pass_fail,
    get_pass_thresholds,
    mondai_breakdown,
    score_section,
    score_total,
)

logger = logging.getLogger(__name__)


def storage_guarded(func):
    """Turn database connectivity failures into a retryable StorageUnavailable."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OperationalError as exc:
            logger.exception("Tryout storage failure in %s", func.__name__)
            raise StorageUnavailable() from exc
    return wrapper


@dataclass
class CompletionResult:
    attempt: TestAttempt
    section_scores: List[SectionScore]
    pass_fail: PassFailResult


class TryoutService:
    """
    Service for the JLPT tryout engine.

    All methods take the authenticated user; attempts of other users are
    reported as not found (or NotOwner when JLPT_TRYOUT["HIDE_FOREIGN_ATTEMPTS"]
    is False).
    """

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @staticmethod
    def get_attempt(user, attempt_id, lock: bool = False) -> TestAttempt:
        queryset = TestAttempt.objects.all()
        if lock:
            queryset = queryset.select_for_update()
        try:
            attempt = queryset.get(id=attempt_id)
        except (TestAttempt.DoesNotExist, DjangoValidationError, ValueError):
            raise AttemptNotFound()

        if attempt.user_id != user.id:
            logger.warning(
                "User %s tried to access tryout %s owned by %s",
                user.id, attempt.id, attempt.user_id,
                extra={"attempt_id": attempt.id},
            )
            if tryout_setting("HIDE_FOREIGN_ATTEMPTS"):
                raise AttemptNotFound()
            raise NotOwner()
        return attempt

    @staticmethod
    def _validate_level(level):
        if level not in LEVELS:
            raise InvalidLevel(level)

    @staticmethod
    def _validate_section(section):
        if section not in SECTIONS:
            raise InvalidSection(section)

    @staticmethod
    def _ensure_in_progress(attempt: TestAttempt):
        if attempt.is_completed:
            logger.warning(
                "Rejected mutation on completed tryout %s", attempt.id,
                extra={"attempt_id": attempt.id},
            )
            raise AlreadyCompleted()

    @staticmethod
    def _submitted_sections(attempt: TestAttempt) -> set:
        return set(
            SectionSubmission.objects.filter(attempt=attempt).values_list('section_type', flat=True)
        )

    # ------------------------------------------------------------------
    # Start
    # ------------------------------------------------------------------

    @staticmethod
    @storage_guarded
    def start(user, level) -> Tuple[TestAttempt, bool]:
        """
        Start a tryout, or resume the user's in-progress one for this level.

        Returns:
            tuple: (attempt, resumed)

        Raises:
            InvalidLevel, InsufficientContentPool
        """
        TryoutService._validate_level(level)

        existing = TestAttempt.objects.filter(
            user=user, level=level, status=TestAttempt.Status.IN_PROGRESS
        ).first()
        if existing:
            logger.info(
                "Resumed tryout %s (%s) for user %s", existing.id, level, user.id,
                extra={"attempt_id": existing.id},
            )
            return existing, True

        pools = {}
        mondai_of = {}
        for section in SECTIONS:
            required = required_question_count(level, section)
            available = list_active_questions(level, section)
            if len(available) < required:
                logger.warning(
                    "Cannot start %s tryout: section %s has %s of %s questions",
                    level, section, len(available), required,
                )
                raise InsufficientContentPool(section, required=required, available=len(available))
            chosen = available[:required]
            pools[section] = [qid for qid, _mondai in chosen]
            mondai_of.update(chosen)

        seed = generate_seed()
        snapshot = build_snapshot(level, seed, pools, mondai_of=mondai_of)

        try:
            with transaction.atomic():
                attempt = TestAttempt.objects.create(
                    user=user,
                    level=level,
                    status=TestAttempt.Status.IN_PROGRESS,
                    questions_snapshot=snapshot.to_dict(),
                    shuffle_seed=seed,
                )
        except IntegrityError:
            # A concurrent start for the same (user, level) won the race
            attempt = TestAttempt.objects.filter(
                user=user, level=level, status=TestAttempt.Status.IN_PROGRESS
            ).first()
            if attempt is None:
                raise
            logger.info(
                "Concurrent start for %s resolved to tryout %s", level, attempt.id,
                extra={"attempt_id": attempt.id},
            )
            return attempt, True

        logger.info(
            "Started tryout %s (%s) for user %s", attempt.id, level, user.id,
            extra={"attempt_id": attempt.id},
        )
        return attempt, False

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    @staticmethod
    def _upsert_answer(attempt, snapshot, locked_sections, question_id, selected_choice, is_flagged):
        section = snapshot.section_of(question_id)
        if section is None:
            raise QuestionNotInAttempt()
        if section in locked_sections:
            logger.warning(
                "Rejected answer for locked section %s of tryout %s", section, attempt.id,
                extra={"attempt_id": attempt.id},
            )
            raise SectionLocked(section)

        defaults = {
            'section_type': section,
            'selected_choice': selected_choice,
        }
        # None leaves an existing flag as it is
        if is_flagged is not None:
            defaults['is_flagged'] = is_flagged
        answer, _created = UserAnswer.objects.update_or_create(
            attempt=attempt,
            question_id=question_id,
            defaults=defaults,
        )
        return answer

    @staticmethod
    @storage_guarded
    def record_answer(user, attempt_id, question_id, selected_choice, is_flagged=None) -> UserAnswer:
        """
        Save (or overwrite) the answer to one question.
        selected_choice None clears a previous answer; is_flagged None keeps
        the current flag.

        Raises:
            AttemptNotFound, AlreadyCompleted, QuestionNotInAttempt, SectionLocked
        """
        with transaction.atomic():
            attempt = TryoutService.get_attempt(user, attempt_id, lock=True)
            TryoutService._ensure_in_progress(attempt)
            return TryoutService._upsert_answer(
                attempt,
                attempt.snapshot,
                TryoutService._submitted_sections(attempt),
                str(question_id),
                selected_choice,
                is_flagged,
            )

    # ------------------------------------------------------------------
    # Section submission
    # ------------------------------------------------------------------

    @staticmethod
    @storage_guarded
    def submit_section(user, attempt_id, section, elapsed_seconds, answers: Optional[Iterable[dict]] = None) -> SectionSubmission:
        """
        Lock a section. Answers sent along are saved first, in the same transaction.

        Args:
            answers: optional [{"question_id", "selected_choice", "is_flagged"}]

        Raises:
            AttemptNotFound, InvalidSection, AlreadyCompleted, AlreadySubmitted,
            QuestionNotInAttempt, SectionLocked
        """
        TryoutService._validate_section(section)

        with transaction.atomic():
            attempt = TryoutService.get_attempt(user, attempt_id, lock=True)
            TryoutService._ensure_in_progress(attempt)

            submitted = TryoutService._submitted_sections(attempt)
            if section in submitted:
                logger.warning(
                    "Section %s of tryout %s already submitted", section, attempt.id,
                    extra={"attempt_id": attempt.id},
                )
                raise AlreadySubmitted(section)

            snapshot = attempt.snapshot
            for item in answers or []:
                question_id = str(item['question_id'])
                if snapshot.section_of(question_id) != section:
                    # Only the section being submitted may be edited here
                    raise QuestionNotInAttempt(
                        f"Question {question_id} does not belong to section {section} of this attempt."
                    )
                TryoutService._upsert_answer(
                    attempt,
                    snapshot,
                    submitted,
                    question_id,
                    item.get('selected_choice'),
                    item.get('is_flagged'),
                )

            try:
                with transaction.atomic():
                    submission = SectionSubmission.objects.create(
                        attempt=attempt,
                        section_type=section,
                        elapsed_seconds=elapsed_seconds or 0,
                    )
            except IntegrityError:
                # Lost a race against a concurrent submission of the same section
                logger.warning(
                    "Duplicate submission of %s for tryout %s", section, attempt.id,
                    extra={"attempt_id": attempt.id},
                )
                raise AlreadySubmitted(section)

        logger.info(
            "Submitted section %s of tryout %s (%ss)", section, attempt.id, submission.elapsed_seconds,
            extra={"attempt_id": attempt.id},
        )
        return submission

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    @staticmethod
    @storage_guarded
    def complete(user, attempt_id) -> CompletionResult:
        """
        Score every section and close the attempt, all or nothing.

        Raises:
            AttemptNotFound, AlreadyCompleted, MissingSection
        """
        with transaction.atomic():
            attempt = TryoutService.get_attempt(user, attempt_id, lock=True)
            TryoutService._ensure_in_progress(attempt)

            submitted = TryoutService._submitted_sections(attempt)
            missing = [section for section in SECTIONS if section not in submitted]
            if missing:
                logger.warning(
                    "Cannot complete tryout %s, missing sections: %s", attempt.id, ", ".join(missing),
                    extra={"attempt_id": attempt.id},
                )
                raise MissingSection(missing)

            snapshot = attempt.snapshot
            answer_key = get_answer_key(snapshot.all_question_ids())
            thresholds = get_pass_thresholds(attempt.level)

            answers = list(UserAnswer.objects.filter(attempt=attempt))
            answers_by_section: Dict[str, Dict[str, Optional[int]]] = {section: {} for section in SECTIONS}
            for answer in answers:
                answers_by_section[answer.section_type][str(answer.question_id)] = answer.selected_choice

            results = [
                score_section(attempt.level, section, answers_by_section[section], answer_key, thresholds)
                for section in SECTIONS
            ]
            section_scores = SectionScore.objects.bulk_create([
                SectionScore(
                    attempt=attempt,
                    section_type=result.section_type,
                    raw_score=result.raw_score,
                    raw_max_score=result.raw_max_score,
                    normalized_score=result.normalized_score,
                    accuracy=result.accuracy,
                    reference_grade=result.reference_grade,
                    is_passed=result.is_passed,
                    pass_threshold=result.pass_threshold,
                )
                for result in results
            ])

            for answer in answers:
                if answer.selected_choice is None:
                    answer.is_correct = None
                else:
                    answer.is_correct = answer_key.get(str(answer.question_id)) == answer.selected_choice
            UserAnswer.objects.bulk_update(answers, ['is_correct'])

            total = score_total(results)
            pass_fail = evaluate_pass_fail(attempt.level, results, total, thresholds)

            attempt.status = TestAttempt.Status.COMPLETED
            attempt.completed_at = timezone.now()
            attempt.total_score = total
            attempt.is_passed = pass_fail.is_passed
            attempt.pass_threshold = pass_fail.total_threshold
            attempt.failure_reasons = pass_fail.failure_reasons
            attempt.save(update_fields=[
                'status', 'completed_at', 'total_score', 'is_passed',
                'pass_threshold', 'failure_reasons', 'updated_at',
            ])

        logger.info(
            "Completed tryout %s: %s/180, passed=%s", attempt.id, total, pass_fail.is_passed,
            extra={"attempt_id": attempt.id},
        )
        return CompletionResult(attempt=attempt, section_scores=section_scores, pass_fail=pass_fail)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @staticmethod
    @storage_guarded
    def get_results(user, attempt_id) -> dict:
        """
        Full result sheet of a completed attempt: scores, timing and a
        per-question review (selected vs correct) grouped by section.

        Everything graded comes from what completion stored: the pass mark,
        the failure reasons and each answer's is_correct. Later edits to the
        thresholds or to the bank's answer key do not change a finished sheet.
        correct_answer is the bank's current key, shown for reference.

        Raises:
            AttemptNotFound / NotOwner, AttemptNotCompleted
        """
        attempt = TryoutService.get_attempt(user, attempt_id)
        if not attempt.is_completed:
            raise AttemptNotCompleted()

        snapshot = attempt.snapshot
        scores = {s.section_type: s for s in attempt.section_scores.all()}
        submissions = {s.section_type: s for s in attempt.submissions.all()}
        answers = {str(a.question_id): a for a in attempt.answers.all()}
        details = get_question_details(snapshot.all_question_ids())

        question_review = []
        for section in SECTIONS:
            items = []
            for qid in snapshot.question_ids(section):
                question = details.get(qid)
                answer = answers.get(qid)
                items.append({
                    "question_id": qid,
                    "mondai_number": question.mondai_number if question else None,
                    "question_number": question.question_number if question else None,
                    "question_text": question.question_text if question else None,
                    "media_url": question.media_url if question else "",
                    "selected_choice": answer.selected_choice if answer else None,
                    "correct_answer": question.correct_answer if question else None,
                    "is_correct": bool(answer and answer.is_correct),
                    "is_flagged": answer.is_flagged if answer else False,
                    "passage": _passage_data(question.passage) if question and question.passage else None,
                    "choices": [
                        {
                            "choice_number": c.choice_number,
                            "choice_type": c.choice_type,
                            "choice_text": c.choice_text,
                            "choice_media_url": c.choice_media_url,
                        }
                        for c in question.choices.all()
                    ] if question else [],
                })
            question_review.append({
                "section_type": section,
                "mondai_breakdown": mondai_breakdown(
                    (item["mondai_number"], item["is_correct"]) for item in items
                ),
                "answers": items,
            })

        by_section = [
            {
                "section_type": section,
                "elapsed_seconds": submissions[section].elapsed_seconds,
                "submitted_at": submissions[section].submitted_at,
            }
            for section in SECTIONS if section in submissions
        ]

        return {
            "attempt": {
                "id": str(attempt.id),
                "level": attempt.level,
                "status": attempt.status,
                "started_at": attempt.started_at,
                "completed_at": attempt.completed_at,
                "total_score": attempt.total_score,
                "passed": attempt.is_passed,
                "total_passed": attempt.total_passed,
                "pass_threshold": attempt.pass_threshold,
                "sections_passed": {
                    section: scores[section].is_passed for section in SECTIONS if section in scores
                },
                "failure_reasons": list(attempt.failure_reasons or []),
            },
            "section_scores": [scores[section] for section in SECTIONS if section in scores],
            "time_tracking": {
                "total_seconds": sum(item["elapsed_seconds"] for item in by_section),
                "by_section": by_section,
            },
            "question_review": question_review,
        }

    @staticmethod
    @storage_guarded
    def get_section_paper(user, attempt_id, section) -> dict:
        """
        Questions of one section in snapshot order, without correct answers.
        Choices come in the attempt's seeded display order; saved answers are
        included so a resumed client can restore its state.
        """
        TryoutService._validate_section(section)
        attempt = TryoutService.get_attempt(user, attempt_id)
        snapshot = attempt.snapshot

        question_ids = snapshot.question_ids(section)
        details = get_question_details(question_ids)
        answers = {
            str(a.question_id): a
            for a in UserAnswer.objects.filter(attempt=attempt, section_type=section)
        }

        questions = []
        for qid in question_ids:
            question = details.get(qid)
            if question is None:
                # Deleted from the bank after the attempt started
                continue
            choices = {c.choice_number: c for c in question.choices.all()}
            order = shuffle_choices(qid, attempt.shuffle_seed)
            answer = answers.get(qid)
            questions.append({
                "id": qid,
                "mondai_number": question.mondai_number,
                "question_number": question.question_number,
                "question_text": question.question_text,
                "question_type": question.question_type,
                "media_url": question.media_url,
                "media_type": question.media_type,
                "passage": _passage_data(question.passage) if question.passage else None,
                "choices": [
                    {
                        "choice_number": number,
                        "choice_type": choices[number].choice_type,
                        "choice_text": choices[number].choice_text,
                        "choice_media_url": choices[number].choice_media_url,
                    }
                    for number in order if number in choices
                ],
                "selected_choice": answer.selected_choice if answer else None,
                "is_flagged": answer.is_flagged if answer else False,
            })

        return {
            "attempt_id": str(attempt.id),
            "level": attempt.level,
            "section": section,
            "duration_minutes": section_duration_minutes(attempt.level, section),
            "is_locked": section in TryoutService._submitted_sections(attempt),
            "questions": questions,
        }


def _passage_data(passage):
    return {
        "id": str(passage.id),
        "content_type": passage.content_type,
        "title": passage.title,
        "content_text": passage.content_text,
        "media_url": passage.media_url,
    }
