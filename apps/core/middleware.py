import logging
import time
import uuid
from contextvars import ContextVar

logger = logging.getLogger(__name__)

_current_request = ContextVar("current_request", default=None)


def get_current_request():
    """Request being served by this thread/task, or None outside a request."""
    return _current_request.get()


class RequestLogMiddleware:
    """
    Assigns a request id, exposes the request to logging filters and logs one
    line per request.
    The id is taken from X-Request-ID when the proxy supplies one.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = _current_request.set(request)
        started = time.monotonic()
        try:
            response = self.get_response(request)
        finally:
            _current_request.reset(token)

        duration_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            "%s %s -> %s (%sms)",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
            extra={"status_code": response.status_code, "request_id": request.id},
        )
        response["X-Request-ID"] = request.id
        return response
