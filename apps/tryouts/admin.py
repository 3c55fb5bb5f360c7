from django.contrib import admin
from .models import TestAttempt, UserAnswer, SectionSubmission, SectionScore


class SectionSubmissionInline(admin.TabularInline):
    model = SectionSubmission
    extra = 0
    can_delete = False
    readonly_fields = ('section_type', 'elapsed_seconds', 'submitted_at')


class SectionScoreInline(admin.TabularInline):
    model = SectionScore
    extra = 0
    can_delete = False
    readonly_fields = (
        'section_type', 'raw_score', 'raw_max_score', 'normalized_score',
        'accuracy', 'reference_grade', 'is_passed', 'pass_threshold',
    )


@admin.register(TestAttempt)
class TestAttemptAdmin(admin.ModelAdmin):
    """Attempts are written by the tryout service only; admin is for inspection."""
    list_display = ('id', 'user', 'level', 'status', 'total_score', 'is_passed', 'started_at', 'completed_at')
    list_filter = ('level', 'status', 'is_passed')
    search_fields = ('id', 'user__username', 'user__email')
    raw_id_fields = ('user',)
    readonly_fields = (
        'id', 'user', 'level', 'status', 'questions_snapshot', 'shuffle_seed',
        'started_at', 'completed_at', 'total_score', 'is_passed', 'pass_threshold', 'failure_reasons',
        'created_at', 'updated_at',
    )
    inlines = [SectionSubmissionInline, SectionScoreInline]

    def has_add_permission(self, request):
        return False


@admin.register(UserAnswer)
class UserAnswerAdmin(admin.ModelAdmin):
    list_display = ('attempt', 'question_id', 'section_type', 'selected_choice', 'is_flagged', 'is_correct')
    list_filter = ('section_type', 'is_flagged', 'is_correct')
    search_fields = ('attempt__id', 'question_id')
    raw_id_fields = ('attempt',)
    readonly_fields = ('answered_at',)
