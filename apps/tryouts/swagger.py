"""
OpenAPI / Swagger documentation for the tryouts app (drf-spectacular).

A tryout is one full JLPT mock exam (N5..N1) taken by one user: three sections
(vocabulary, grammar_reading, listening), each scaled to 0-60, total 0-180.

================================================================================
ATTEMPT LIFECYCLE
================================================================================

**Status values:** in_progress → completed

- `start` freezes a question snapshot and a shuffle seed. Starting again at the
  same level while an attempt is in progress **resumes** it (200 instead of 201).
- `answers` saves or overwrites one answer. `selected_choice: null` clears it.
- `submit-section` locks a section. Locked sections reject further answers (409).
- `complete` needs all three sections submitted, scores them and closes the attempt.
- `results` is only available once the attempt is completed.

================================================================================
ANSWER PROTECTION
================================================================================

`questions` returns the paper of one section **without** correct answers. Choices
are returned in a per-attempt seeded order; `choice_number` is the stable
identifier to send back in `answers`.

================================================================================
SCORING
================================================================================

- normalized = round_half_up(raw / raw_max × 60), clamped to 0..60
- reference grade: A ≥ 80% accuracy, B ≥ 60%, otherwise C
- PASS requires total ≥ level threshold **and** every section ≥ section minimum
- Default totals: N1 100, N2 90, N3 95, N4 90, N5 80. Section minimum 19.
  Overridable with `JLPT_TRYOUT["PASS_THRESHOLDS"]`.

================================================================================
ERROR BODY
================================================================================

All errors share one envelope: `{"status": "error", "code", "error_code", "message", "errors"}`.
`storage_unavailable` (503) also carries `"retryable": true`.
"""
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import (
    OpenApiExample,
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)

from .serializers import (
    AnswerInputSerializer,
    CompletionResultSerializer,
    ResultsSerializer,
    SectionPaperSerializer,
    StartTryoutSerializer,
    SubmitSectionSerializer,
    TryoutAttemptSerializer,
    TryoutStartResponseSerializer,
)

TAGS = ["Tryouts"]

RESP_400 = OpenApiResponse(
    description="Validation error: unknown level or section, or a question outside this attempt.",
    examples=[
        OpenApiExample(
            "Invalid level",
            value={
                "status": "error", "code": 400, "error_code": "invalid_level",
                "message": "Validation Error",
                "errors": {"detail": "Unsupported JLPT level: 'N6'. Expected one of N5, N4, N3, N2, N1.", "level": "N6"},
            },
            response_only=True,
        ),
        OpenApiExample(
            "Question not in attempt",
            value={
                "status": "error", "code": 400, "error_code": "question_not_in_attempt",
                "message": "Validation Error",
                "errors": {"detail": "This question is not part of the attempt."},
            },
            response_only=True,
        ),
        OpenApiExample(
            "Missing section",
            value={
                "status": "error", "code": 400, "error_code": "missing_section",
                "message": "Validation Error",
                "errors": {
                    "detail": "All sections must be submitted before completing the tryout. Missing: listening.",
                    "missing_sections": ["listening"],
                },
            },
            response_only=True,
        ),
    ],
)
RESP_401 = OpenApiResponse(description="Authentication required.")
RESP_403 = OpenApiResponse(
    description="Attempt belongs to another user (only when HIDE_FOREIGN_ATTEMPTS is off).",
)
RESP_404 = OpenApiResponse(description="Attempt not found (or owned by another user).")
RESP_409 = OpenApiResponse(
    description="State conflict: section locked, section already submitted, attempt already completed or not completed yet.",
    examples=[
        OpenApiExample(
            "Section locked",
            value={
                "status": "error", "code": 409, "error_code": "section_locked",
                "message": "Error",
                "errors": {"detail": "Section vocabulary has already been submitted and is locked."},
            },
            response_only=True,
        ),
        OpenApiExample(
            "Already completed",
            value={
                "status": "error", "code": 409, "error_code": "already_completed",
                "message": "Error",
                "errors": {"detail": "This tryout has already been completed."},
            },
            response_only=True,
        ),
    ],
)
RESP_409_POOL = OpenApiResponse(
    description="Question bank does not hold enough active questions for this level.",
    examples=[
        OpenApiExample(
            "Insufficient pool",
            value={
                "status": "error", "code": 409, "error_code": "insufficient_content_pool",
                "message": "Error",
                "errors": {
                    "detail": "Not enough questions for section listening: need 24, have 10.",
                    "section": "listening", "required": 24, "available": 10, "shortfall": 14,
                },
            },
            response_only=True,
        ),
    ],
)
RESP_503 = OpenApiResponse(
    description="Storage temporarily unavailable. Safe to retry.",
    examples=[
        OpenApiExample(
            "Storage unavailable",
            value={
                "status": "error", "code": 503, "error_code": "storage_unavailable",
                "message": "Error", "retryable": True,
                "errors": {"detail": "Storage is temporarily unavailable. Please retry."},
            },
            response_only=True,
        ),
    ],
)

ANSWER_RESPONSE_EXAMPLE = {
    "ok": True,
    "answer": {
        "question_id": "550e8400-e29b-41d4-a716-446655440000",
        "section_type": "vocabulary",
        "selected_choice": 3,
        "is_flagged": False,
        "answered_at": "2026-01-10T09:12:44Z",
    },
}

COMPLETE_RESPONSE_EXAMPLE = {
    "attempt_id": "9a7c1f0e-3c55-4f5e-8c1a-2b1f1f0d9e11",
    "level": "N4",
    "total_score": 135,
    "passed": True,
    "total_passed": True,
    "sections_passed": {"vocabulary": True, "grammar_reading": True, "listening": True},
    "failure_reasons": [],
    "section_scores": [
        {
            "section_type": "vocabulary", "raw_score": 26, "raw_max_score": 35,
            "normalized_score": 45, "accuracy": 0.7429, "reference_grade": "B",
            "is_passed": True, "pass_threshold": 19,
        },
    ],
}

tryout_viewset_schema = extend_schema_view(
    list=extend_schema(
        tags=TAGS,
        summary="Tryout history",
        description="Own attempts only, newest first. Filter by level, status, is_passed or start date.",
        parameters=[
            OpenApiParameter(name="level", type=str, enum=["N5", "N4", "N3", "N2", "N1"]),
            OpenApiParameter(name="status", type=str, enum=["in_progress", "completed"]),
            OpenApiParameter(name="is_passed", type=bool),
            OpenApiParameter(name="started_after", type=OpenApiTypes.DATETIME),
            OpenApiParameter(name="started_before", type=OpenApiTypes.DATETIME),
            OpenApiParameter(name="ordering", type=str),
        ],
        responses={200: TryoutAttemptSerializer(many=True), 401: RESP_401},
    ),
    retrieve=extend_schema(
        tags=TAGS,
        summary="Get tryout",
        responses={200: TryoutAttemptSerializer, 401: RESP_401, 403: RESP_403, 404: RESP_404},
    ),
    start=extend_schema(
        tags=TAGS,
        summary="Start or resume a tryout",
        description=(
            "Builds a frozen question snapshot for the level. If an in-progress attempt exists "
            "for this level it is returned unchanged with `resumed: true` and status 200."
        ),
        request=StartTryoutSerializer,
        responses={
            201: TryoutStartResponseSerializer,
            200: OpenApiResponse(response=TryoutStartResponseSerializer, description="Resumed existing attempt."),
            400: RESP_400, 401: RESP_401, 409: RESP_409_POOL, 503: RESP_503,
        },
        examples=[OpenApiExample("Request", value={"level": "N4"}, request_only=True)],
    ),
    answers=extend_schema(
        tags=TAGS,
        summary="Save an answer",
        description=(
            "Upsert. `selected_choice: null` clears the answer. Omitting `is_flagged` keeps the stored flag. "
            "Rejected once the section is locked."
        ),
        request=AnswerInputSerializer,
        responses={
            200: OpenApiResponse(
                description="Saved.",
                examples=[OpenApiExample("Saved", value=ANSWER_RESPONSE_EXAMPLE, response_only=True)],
            ),
            400: RESP_400, 401: RESP_401, 403: RESP_403, 404: RESP_404, 409: RESP_409, 503: RESP_503,
        },
        examples=[
            OpenApiExample(
                "Request",
                value={"question_id": "550e8400-e29b-41d4-a716-446655440000", "selected_choice": 3, "is_flagged": False},
                request_only=True,
            ),
        ],
    ),
    submit_section=extend_schema(
        tags=TAGS,
        summary="Submit (lock) a section",
        description=(
            "Optionally saves a final batch of answers for this section, then locks it. "
            "A section can be submitted exactly once."
        ),
        request=SubmitSectionSerializer,
        responses={
            200: OpenApiResponse(
                description="Section locked.",
                examples=[
                    OpenApiExample(
                        "Locked",
                        value={
                            "ok": True,
                            "submission": {
                                "section_type": "vocabulary",
                                "elapsed_seconds": 1500,
                                "submitted_at": "2026-01-10T09:35:02Z",
                            },
                            "all_sections_submitted": False,
                        },
                        response_only=True,
                    ),
                ],
            ),
            400: RESP_400, 401: RESP_401, 403: RESP_403, 404: RESP_404, 409: RESP_409, 503: RESP_503,
        },
        examples=[
            OpenApiExample(
                "Request",
                value={
                    "section": "vocabulary",
                    "elapsed_seconds": 1500,
                    "answers": [{"question_id": "550e8400-e29b-41d4-a716-446655440000", "selected_choice": 2}],
                },
                request_only=True,
            ),
        ],
    ),
    complete=extend_schema(
        tags=TAGS,
        summary="Complete and score the tryout",
        description="All three sections must be submitted. Scoring is all-or-nothing.",
        request=None,
        responses={
            200: OpenApiResponse(
                response=CompletionResultSerializer,
                description="Scored.",
                examples=[OpenApiExample("Passed", value=COMPLETE_RESPONSE_EXAMPLE, response_only=True)],
            ),
            400: RESP_400, 401: RESP_401, 403: RESP_403, 404: RESP_404, 409: RESP_409, 503: RESP_503,
        },
    ),
    results=extend_schema(
        tags=TAGS,
        summary="Tryout results",
        description=(
            "Scores, pass/fail with reasons, time per section and a per-question review "
            "(selected vs correct, unanswered questions included) with correct/total per mondai. "
            "Grading reflects the thresholds and answer key in force at completion."
        ),
        responses={200: ResultsSerializer, 401: RESP_401, 403: RESP_403, 404: RESP_404, 409: RESP_409},
    ),
    questions=extend_schema(
        tags=TAGS,
        summary="Section question paper",
        description="Questions of one section in snapshot order. Never includes correct answers.",
        parameters=[
            OpenApiParameter(
                name="section", type=str, required=True,
                enum=["vocabulary", "grammar_reading", "listening"],
            ),
        ],
        responses={200: SectionPaperSerializer, 400: RESP_400, 401: RESP_401, 403: RESP_403, 404: RESP_404},
    ),
)
