# apps/tryouts/exceptions.py
"""
Tryout business errors. Each carries a stable `default_code` the client can
switch on; the project exception handler puts it in `error_code` and copies
`extra` (structured context such as the missing sections) into the body.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class TryoutError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Tryout request could not be processed."
    default_code = "tryout_error"
    retryable = False

    def __init__(self, detail=None, extra=None):
        super().__init__(detail)
        self.extra = extra or {}


class InvalidLevel(TryoutError):
    default_code = "invalid_level"

    def __init__(self, level):
        super().__init__(
            f"Unsupported JLPT level: {level!r}. Expected one of N5, N4, N3, N2, N1.",
            extra={"level": level},
        )


class InvalidSection(TryoutError):
    default_code = "invalid_section"

    def __init__(self, section):
        super().__init__(
            f"Unknown section: {section!r}. Expected vocabulary, grammar_reading or listening.",
            extra={"section": section},
        )


class InsufficientContentPool(TryoutError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "insufficient_content_pool"

    def __init__(self, section, required=None, available=0):
        self.section = section
        if required is None:
            message = f"No questions available for section {section}."
            extra = {"section": section, "available": available}
        else:
            message = (
                f"Not enough questions for section {section}: "
                f"need {required}, have {available}."
            )
            extra = {
                "section": section,
                "required": required,
                "available": available,
                "shortfall": required - available,
            }
        super().__init__(message, extra=extra)


class QuestionNotInAttempt(TryoutError):
    default_code = "question_not_in_attempt"
    default_detail = "This question is not part of the attempt."


class SectionLocked(TryoutError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "section_locked"

    def __init__(self, section):
        super().__init__(
            f"Section {section} has already been submitted and is locked.",
            extra={"section": section},
        )


class AlreadySubmitted(TryoutError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "already_submitted"

    def __init__(self, section):
        super().__init__(
            f"Section {section} has already been submitted.",
            extra={"section": section},
        )


class MissingSection(TryoutError):
    default_code = "missing_section"

    def __init__(self, sections):
        self.sections = list(sections)
        super().__init__(
            "All sections must be submitted before completing the tryout. "
            f"Missing: {', '.join(self.sections)}.",
            extra={"missing_sections": self.sections},
        )


class AlreadyCompleted(TryoutError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "already_completed"
    default_detail = "This tryout has already been completed."


class AttemptNotCompleted(TryoutError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "attempt_not_completed"
    default_detail = "Results are available only after the tryout is completed."


class NotOwner(TryoutError):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "not_owner"
    default_detail = "You can only access your own tryout attempts."


class AttemptNotFound(TryoutError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"
    default_detail = "Tryout attempt not found."


class StorageUnavailable(TryoutError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_code = "storage_unavailable"
    default_detail = "Storage is temporarily unavailable. Please retry."
    retryable = True
