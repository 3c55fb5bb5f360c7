from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import ValidationError as DRFValidationError
from django.conf import settings


def _error_code(exc):
    """Stable machine-readable code for the client (e.g. 'section_locked')."""
    code = getattr(exc, "default_code", None)
    try:
        codes = exc.get_codes()
    except AttributeError:
        return code
    if isinstance(codes, str):
        return codes
    return code


def custom_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        exc = DRFValidationError(detail=exc.message_dict if hasattr(exc, 'message_dict') else exc.messages)

    response = exception_handler(exc, context)

    if response is not None:
        errors = response.data
        extra = getattr(exc, "extra", None)
        if extra and isinstance(errors, dict):
            errors = {**errors, **extra}
        body = {
            "status": "error",
            "code": response.status_code,
            "error_code": _error_code(exc),
            "message": "Validation Error" if response.status_code == 400 else "Error",
            "errors": errors,
        }
        if getattr(exc, "retryable", False):
            body["retryable"] = True
        headers = {
            name: value for name, value in response.headers.items()
            if name in ("WWW-Authenticate", "Retry-After")
        }
        return Response(body, status=response.status_code, headers=headers)

    error_message = "Internal server error"
    if settings.DEBUG:
        error_message = str(exc)

    return Response({
        "status": "error",
        "code": 500,
        "error_code": "server_error",
        "message": error_message,
    }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
