# config/logging_config.py
"""
Logging helpers for Django with JSON formatting for Loki/Promtail.
RequestIDFilter: sets request_id, path, method, user_id from the current request.
"""

import json
import logging
from datetime import datetime, timezone

from apps.core.middleware import get_current_request


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        for attr in ('user_id', 'request_id', 'path', 'method', 'status_code', 'attempt_id'):
            if hasattr(record, attr):
                log_data[attr] = str(getattr(record, attr))

        return json.dumps(log_data, ensure_ascii=False)


class RequestIDFilter(logging.Filter):
    def filter(self, record):
        request = get_current_request()
        if request is None:
            return True

        if not hasattr(record, 'request_id'):
            record.request_id = getattr(request, 'id', None)
        record.path = getattr(request, 'path', None)
        record.method = getattr(request, 'method', None)

        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated and not hasattr(record, 'user_id'):
            record.user_id = user.pk

        return True
