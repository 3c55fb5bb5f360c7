# apps/tryouts/serializers.py
"""
Tryout serializers. Request serializers validate the payloads of the
lifecycle actions; response serializers never expose Question.correct_answer
before the attempt is completed. Documented in apps/tryouts/swagger.py.
"""
from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field

from apps.questions.models import Level, SectionType
from .models import TestAttempt, UserAnswer, SectionSubmission, SectionScore


# ============================================================================
# REQUEST SERIALIZERS
# ============================================================================

class StartTryoutSerializer(serializers.Serializer):
    # Free-form here; the service raises InvalidLevel with its own error code
    level = serializers.CharField(max_length=10)


class AnswerInputSerializer(serializers.Serializer):
    question_id = serializers.UUIDField()
    selected_choice = serializers.IntegerField(min_value=1, max_value=4, allow_null=True)
    # Omitted: keep the flag already stored for this question
    is_flagged = serializers.BooleanField(required=False)


class SubmitSectionSerializer(serializers.Serializer):
    section = serializers.CharField(max_length=20)
    elapsed_seconds = serializers.IntegerField(min_value=0, required=False, default=0)
    answers = AnswerInputSerializer(many=True, required=False)


# ============================================================================
# RESPONSE SERIALIZERS
# ============================================================================

class TryoutStartResponseSerializer(serializers.ModelSerializer):
    attempt_id = serializers.UUIDField(source="id", read_only=True)
    resumed = serializers.SerializerMethodField()

    class Meta:
        model = TestAttempt
        fields = [
            "attempt_id", "level", "status", "shuffle_seed", "questions_snapshot",
            "started_at", "resumed",
        ]
        read_only_fields = fields

    @extend_schema_field(serializers.BooleanField())
    def get_resumed(self, obj):
        return bool(self.context.get("resumed", False))


class UserAnswerSerializer(serializers.ModelSerializer):
    """Answer as the candidate sees it during the exam (no correctness)."""
    class Meta:
        model = UserAnswer
        fields = ["question_id", "section_type", "selected_choice", "is_flagged", "answered_at"]
        read_only_fields = fields


class SectionSubmissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = SectionSubmission
        fields = ["section_type", "elapsed_seconds", "submitted_at"]
        read_only_fields = fields


class SectionScoreSerializer(serializers.ModelSerializer):
    accuracy = serializers.FloatField(read_only=True)

    class Meta:
        model = SectionScore
        fields = [
            "section_type", "raw_score", "raw_max_score", "normalized_score",
            "accuracy", "reference_grade", "is_passed", "pass_threshold",
        ]
        read_only_fields = fields


class TryoutAttemptSerializer(serializers.ModelSerializer):
    """
    Attempt summary for history and detail views.
    Scores appear only once the attempt is completed.
    """
    submitted_sections = serializers.SerializerMethodField()
    section_scores = SectionScoreSerializer(many=True, read_only=True)

    class Meta:
        model = TestAttempt
        fields = [
            "id", "level", "status", "shuffle_seed", "started_at", "completed_at",
            "total_score", "is_passed", "submitted_sections", "section_scores",
        ]
        read_only_fields = fields

    @extend_schema_field(serializers.ListField(child=serializers.ChoiceField(choices=SectionType.choices)))
    def get_submitted_sections(self, obj):
        return [submission.section_type for submission in obj.submissions.all()]


class CompletionResultSerializer(serializers.Serializer):
    """Serializes services.CompletionResult."""
    attempt_id = serializers.SerializerMethodField()
    level = serializers.SerializerMethodField()
    total_score = serializers.SerializerMethodField()
    passed = serializers.SerializerMethodField()
    total_passed = serializers.SerializerMethodField()
    sections_passed = serializers.SerializerMethodField()
    failure_reasons = serializers.SerializerMethodField()
    section_scores = SectionScoreSerializer(many=True, read_only=True)

    @extend_schema_field(serializers.UUIDField())
    def get_attempt_id(self, obj):
        return str(obj.attempt.id)

    @extend_schema_field(serializers.ChoiceField(choices=Level.choices))
    def get_level(self, obj):
        return obj.attempt.level

    @extend_schema_field(serializers.IntegerField(min_value=0, max_value=180))
    def get_total_score(self, obj):
        return obj.pass_fail.total_score

    @extend_schema_field(serializers.BooleanField())
    def get_passed(self, obj):
        return obj.pass_fail.is_passed

    @extend_schema_field(serializers.BooleanField())
    def get_total_passed(self, obj):
        return obj.pass_fail.total_passed

    @extend_schema_field(serializers.DictField(child=serializers.BooleanField()))
    def get_sections_passed(self, obj):
        return obj.pass_fail.sections_passed

    @extend_schema_field(serializers.ListField(child=serializers.CharField()))
    def get_failure_reasons(self, obj):
        return obj.pass_fail.failure_reasons


class ResultsSerializer(serializers.Serializer):
    """Serializes the dict built by TryoutService.get_results."""
    attempt = serializers.DictField()
    section_scores = SectionScoreSerializer(many=True, read_only=True)
    time_tracking = serializers.DictField()
    question_review = serializers.ListField(child=serializers.DictField())


class PaperChoiceSerializer(serializers.Serializer):
    choice_number = serializers.IntegerField()
    choice_type = serializers.CharField()
    choice_text = serializers.CharField(allow_blank=True)
    choice_media_url = serializers.CharField(allow_blank=True)


class PaperQuestionSerializer(serializers.Serializer):
    """
    Question as shown during the exam (SECURITY: no correct_answer).
    """
    id = serializers.UUIDField()
    mondai_number = serializers.IntegerField()
    question_number = serializers.IntegerField()
    question_text = serializers.CharField(allow_blank=True)
    question_type = serializers.CharField()
    media_url = serializers.CharField(allow_blank=True)
    media_type = serializers.CharField(allow_blank=True)
    passage = serializers.DictField(allow_null=True)
    choices = PaperChoiceSerializer(many=True)
    selected_choice = serializers.IntegerField(allow_null=True)
    is_flagged = serializers.BooleanField()


class SectionPaperSerializer(serializers.Serializer):
    attempt_id = serializers.UUIDField()
    level = serializers.CharField()
    section = serializers.CharField()
    duration_minutes = serializers.IntegerField()
    is_locked = serializers.BooleanField()
    questions = PaperQuestionSerializer(many=True)
