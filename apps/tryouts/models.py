"""
Tryouts Models - JLPT full mock exam attempts
Structure: TestAttempt -> UserAnswer / SectionSubmission / SectionScore
"""
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from apps.core.models import BaseModel
from apps.questions.models import Level, SectionType

from .randomizer import QuestionSnapshot


class TestAttempt(BaseModel):
    """
    One user's sitting of a full tryout at one level.
    The question paper is frozen in questions_snapshot when the attempt starts.
    """
    class Status(models.TextChoices):
        IN_PROGRESS = 'in_progress', _('In Progress')
        COMPLETED = 'completed', _('Completed')

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tryout_attempts'
    )
    level = models.CharField(max_length=2, choices=Level.choices)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.IN_PROGRESS,
        db_index=True
    )

    # {"level": "N4", "shuffle_seed": "...", "sections": {"vocabulary": [ids], ...}}
    questions_snapshot = models.JSONField(default=dict)
    shuffle_seed = models.CharField(max_length=64)

    started_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    total_score = models.PositiveSmallIntegerField(null=True, blank=True)  # 0-180
    is_passed = models.BooleanField(null=True, blank=True)
    # Pass mark and failure reasons in force when the attempt was scored
    pass_threshold = models.PositiveSmallIntegerField(null=True, blank=True)
    failure_reasons = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'tryout_attempts'
        ordering = ['-started_at']
        indexes = [
            models.Index(fields=['user', 'level', 'status'], name='tryout_attempt_lookup_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'level'],
                condition=Q(status='in_progress'),
                name='unique_in_progress_attempt_per_level',
            ),
        ]

    def __str__(self):
        return f"Tryout {self.level} - {self.user_id} ({self.status})"

    @property
    def is_completed(self):
        return self.status == self.Status.COMPLETED

    @property
    def total_passed(self):
        if self.total_score is None or self.pass_threshold is None:
            return None
        return self.total_score >= self.pass_threshold

    @property
    def snapshot(self) -> QuestionSnapshot:
        return QuestionSnapshot.from_dict(self.questions_snapshot)


class UserAnswer(BaseModel):
    """
    Latest answer to one snapshot question. selected_choice None means cleared.
    is_correct is filled in when the attempt is completed.
    """
    attempt = models.ForeignKey(TestAttempt, on_delete=models.CASCADE, related_name='answers')
    question_id = models.UUIDField(db_index=True)
    section_type = models.CharField(max_length=20, choices=SectionType.choices)

    selected_choice = models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(4)]
    )
    is_flagged = models.BooleanField(default=False)
    answered_at = models.DateTimeField(auto_now=True)

    is_correct = models.BooleanField(null=True, blank=True)

    class Meta:
        db_table = 'tryout_user_answers'
        ordering = ['answered_at']
        constraints = [
            models.UniqueConstraint(
                fields=['attempt', 'question_id'],
                name='unique_answer_per_attempt_question',
            ),
        ]

    def __str__(self):
        return f"Ans: {self.question_id} -> {self.selected_choice}"


class SectionSubmission(BaseModel):
    """
    Section lock. The row's existence means the section can no longer be edited.
    """
    attempt = models.ForeignKey(TestAttempt, on_delete=models.CASCADE, related_name='submissions')
    section_type = models.CharField(max_length=20, choices=SectionType.choices)
    submitted_at = models.DateTimeField(auto_now_add=True)
    elapsed_seconds = models.PositiveIntegerField(default=0)  # reported by the client

    class Meta:
        db_table = 'tryout_section_submissions'
        ordering = ['submitted_at']
        constraints = [
            models.UniqueConstraint(
                fields=['attempt', 'section_type'],
                name='unique_submission_per_section',
            ),
        ]

    def __str__(self):
        return f"{self.attempt_id} {self.section_type} submitted"


class SectionScore(BaseModel):
    """
    Scored section, written once when the attempt is completed.
    """
    class Grade(models.TextChoices):
        A = 'A', 'A'
        B = 'B', 'B'
        C = 'C', 'C'

    attempt = models.ForeignKey(TestAttempt, on_delete=models.CASCADE, related_name='section_scores')
    section_type = models.CharField(max_length=20, choices=SectionType.choices)

    raw_score = models.PositiveIntegerField(default=0)
    raw_max_score = models.PositiveIntegerField(default=0)
    normalized_score = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(60)]
    )
    accuracy = models.DecimalField(max_digits=5, decimal_places=4, default=0)
    reference_grade = models.CharField(max_length=1, choices=Grade.choices)
    is_passed = models.BooleanField(default=False)
    pass_threshold = models.PositiveSmallIntegerField(default=19)

    class Meta:
        db_table = 'tryout_section_scores'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['attempt', 'section_type'],
                name='unique_score_per_section',
            ),
        ]

    def __str__(self):
        return f"{self.section_type}: {self.normalized_score}/60"
