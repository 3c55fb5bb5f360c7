# apps/tryouts/views.py

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.questions.constants import SECTIONS

from .filters import TestAttemptFilter
from .models import TestAttempt
from .serializers import (
    AnswerInputSerializer,
    CompletionResultSerializer,
    ResultsSerializer,
    SectionPaperSerializer,
    SectionSubmissionSerializer,
    StartTryoutSerializer,
    SubmitSectionSerializer,
    TryoutAttemptSerializer,
    TryoutStartResponseSerializer,
    UserAnswerSerializer,
)
from .services import TryoutService
from .swagger import tryout_viewset_schema


@tryout_viewset_schema
class TryoutViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    JLPT tryout lifecycle for the authenticated user.

    Custom Actions:
    - start: Start or resume a tryout (POST)
    - answers: Save one answer (POST)
    - submit-section: Lock a section (POST)
    - complete: Score and close the tryout (POST)
    - results: Result sheet of a completed tryout (GET)
    - questions: Question paper of one section (GET)
    """
    serializer_class = TryoutAttemptSerializer
    permission_classes = [IsAuthenticated]
    queryset = TestAttempt.objects.none()
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = TestAttemptFilter
    ordering_fields = ["started_at", "completed_at", "total_score"]
    ordering = ["-started_at"]

    def get_queryset(self):
        """Own attempts only."""
        if getattr(self, 'swagger_fake_view', False):
            return TestAttempt.objects.none()
        return TestAttempt.objects.filter(
            user=self.request.user
        ).prefetch_related('submissions', 'section_scores')

    def retrieve(self, request, pk=None):
        attempt = TryoutService.get_attempt(request.user, pk)
        return Response(TryoutAttemptSerializer(attempt).data)

    @action(detail=False, methods=['post'], url_path='start')
    def start(self, request):
        """
        POST /tryouts/start/
        Body: {"level": "N5"}

        201 for a new attempt, 200 when an in-progress attempt is resumed.
        """
        serializer = StartTryoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        attempt, resumed = TryoutService.start(request.user, serializer.validated_data['level'])

        data = TryoutStartResponseSerializer(attempt, context={'resumed': resumed}).data
        return Response(data, status=status.HTTP_200_OK if resumed else status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='answers')
    def answers(self, request, pk=None):
        """
        POST /tryouts/{id}/answers/
        Body: {"question_id": "uuid", "selected_choice": 1-4 | null, "is_flagged"?: bool}
        """
        serializer = AnswerInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        answer = TryoutService.record_answer(
            request.user,
            pk,
            data['question_id'],
            data['selected_choice'],
            is_flagged=data.get('is_flagged'),
        )
        return Response({
            "ok": True,
            "answer": UserAnswerSerializer(answer).data,
        }, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='submit-section')
    def submit_section(self, request, pk=None):
        """
        POST /tryouts/{id}/submit-section/
        Body: {"section": "vocabulary", "elapsed_seconds": 1500, "answers": [...]}
        """
        serializer = SubmitSectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        submission = TryoutService.submit_section(
            request.user,
            pk,
            data['section'],
            data.get('elapsed_seconds', 0),
            answers=data.get('answers'),
        )
        submitted_count = submission.attempt.submissions.count()
        return Response({
            "ok": True,
            "submission": SectionSubmissionSerializer(submission).data,
            "all_sections_submitted": submitted_count == len(SECTIONS),
        }, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='complete')
    def complete(self, request, pk=None):
        """POST /tryouts/{id}/complete/"""
        result = TryoutService.complete(request.user, pk)
        return Response(CompletionResultSerializer(result).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['get'], url_path='results')
    def results(self, request, pk=None):
        """GET /tryouts/{id}/results/"""
        results = TryoutService.get_results(request.user, pk)
        return Response(ResultsSerializer(results).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['get'], url_path='questions')
    def questions(self, request, pk=None):
        """
        GET /tryouts/{id}/questions/?section=vocabulary

        Section paper without correct answers.
        """
        section = request.query_params.get('section')
        if not section:
            raise ValidationError({"section": "This query parameter is required."})

        paper = TryoutService.get_section_paper(request.user, pk, section)
        return Response(SectionPaperSerializer(paper).data, status=status.HTTP_200_OK)
