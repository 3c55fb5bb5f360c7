"""
Questions Models - JLPT question bank used to assemble tryouts
Structure: Passage (optional shared text/audio) -> Question -> AnswerChoice (1-4)
"""
from django.db import models
from django.utils.translation import gettext_lazy as _
from django.core.validators import MinValueValidator, MaxValueValidator
from apps.core.models import BaseModel


class Level(models.TextChoices):
    N5 = 'N5', 'N5 - Beginner'
    N4 = 'N4', 'N4 - Elementary'
    N3 = 'N3', 'N3 - Intermediate'
    N2 = 'N2', 'N2 - Upper Intermediate'
    N1 = 'N1', 'N1 - Advanced'


class SectionType(models.TextChoices):
    VOCABULARY = 'vocabulary', _('Vocabulary (Moji-Goi)')
    GRAMMAR_READING = 'grammar_reading', _('Grammar & Reading')
    LISTENING = 'listening', _('Listening (Choukai)')


class MediaType(models.TextChoices):
    TEXT = 'text', _('Text')
    AUDIO = 'audio', _('Audio')
    IMAGE = 'image', _('Image')


class Passage(BaseModel):
    """
    Shared stimulus (reading text, audio script, info graphic).
    Several questions of one mondai may point at the same passage.
    """
    content_type = models.CharField(max_length=10, choices=MediaType.choices, default=MediaType.TEXT)
    title = models.CharField(max_length=255, blank=True)
    content_text = models.TextField(blank=True)
    media_url = models.URLField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'jlpt_passages'
        ordering = ['-created_at']

    def __str__(self):
        return self.title or f"Passage {self.id}"


class Question(BaseModel):
    """
    Single multiple-choice question. correct_answer is the choice_number (1-4).
    """
    class QuestionType(models.TextChoices):
        STANDARD = 'standard', _('Standard')
        AUDIO = 'audio', _('Audio')
        IMAGE = 'image', _('Image')

    class Difficulty(models.TextChoices):
        EASY = 'easy', _('Easy')
        MEDIUM = 'medium', _('Medium')
        HARD = 'hard', _('Hard')

    level = models.CharField(max_length=2, choices=Level.choices, db_index=True)
    section_type = models.CharField(max_length=20, choices=SectionType.choices, db_index=True)

    # Mondai raqami (問題1, 問題2...) and position inside it
    mondai_number = models.PositiveIntegerField(default=1)
    question_number = models.PositiveIntegerField(default=1)

    question_text = models.TextField(blank=True)
    question_type = models.CharField(max_length=20, choices=QuestionType.choices, default=QuestionType.STANDARD)
    media_url = models.URLField(max_length=500, blank=True)
    media_type = models.CharField(max_length=10, choices=MediaType.choices, blank=True)

    correct_answer = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(4)]
    )
    difficulty = models.CharField(max_length=10, choices=Difficulty.choices, default=Difficulty.MEDIUM)

    passage = models.ForeignKey(
        Passage,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='questions'
    )
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = 'jlpt_questions'
        ordering = ['level', 'section_type', 'mondai_number', 'question_number']
        indexes = [
            models.Index(fields=['level', 'section_type', 'is_active'], name='jlpt_question_pool_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(correct_answer__gte=1, correct_answer__lte=4),
                name='jlpt_question_correct_answer_1_4',
            ),
        ]

    def __str__(self):
        return f"{self.level} {self.section_type} M{self.mondai_number}-Q{self.question_number}"


class AnswerChoice(BaseModel):
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name='choices')
    choice_number = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(4)]
    )
    choice_type = models.CharField(max_length=10, choices=MediaType.choices, default=MediaType.TEXT)
    choice_text = models.CharField(max_length=500, blank=True)
    choice_media_url = models.URLField(max_length=500, blank=True)

    class Meta:
        db_table = 'jlpt_answer_choices'
        ordering = ['choice_number']
        constraints = [
            models.UniqueConstraint(
                fields=['question', 'choice_number'],
                name='unique_choice_number_per_question',
            ),
        ]

    def __str__(self):
        return f"{self.choice_number}. {self.choice_text[:30]}"
