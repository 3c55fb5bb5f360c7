# config/spectacular.py
"""
drf-spectacular OpenAPI schema configuration.

- custom_preprocessing_hook: Excludes admin, health and the schema views themselves.
"""

EXCLUDED_PREFIXES = ('/admin/', '/api/schema/', '/api/docs/')


def custom_preprocessing_hook(endpoints):
    filtered = []

    for path, path_regex, method, callback in endpoints:

        if path.startswith(EXCLUDED_PREFIXES):
            continue

        if path == '/health/':
            continue

        filtered.append((path, path_regex, method, callback))

    return filtered
