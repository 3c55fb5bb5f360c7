from django.contrib import admin
from .models import Passage, Question, AnswerChoice


class AnswerChoiceInline(admin.TabularInline):
    model = AnswerChoice
    extra = 4
    max_num = 4
    fields = ('choice_number', 'choice_type', 'choice_text', 'choice_media_url')


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    """Manual entry of tryout questions (bulk import is not supported)."""
    list_display = ('level', 'section_type', 'mondai_number', 'question_number', 'correct_answer', 'is_active')
    list_filter = ('level', 'section_type', 'is_active', 'difficulty')
    search_fields = ('question_text',)
    readonly_fields = ('id', 'created_at', 'updated_at')
    raw_id_fields = ('passage',)

    fieldsets = (
        ('Placement', {
            'fields': ('id', 'level', 'section_type', 'mondai_number', 'question_number')
        }),
        ('Content', {
            'fields': ('question_text', 'question_type', 'media_url', 'media_type', 'passage')
        }),
        ('Answer', {
            'fields': ('correct_answer', 'difficulty', 'is_active')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    inlines = [AnswerChoiceInline]


@admin.register(Passage)
class PassageAdmin(admin.ModelAdmin):
    list_display = ('title', 'content_type', 'is_active', 'created_at')
    list_filter = ('content_type', 'is_active')
    search_fields = ('title', 'content_text')
