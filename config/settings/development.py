#config/settings/development.py
from .base import *  # noqa

DEBUG = True

# In development we typically allow all origins (see CORS_ALLOW_ALL_ORIGINS in base.py).
# If you want to restrict, set CORS_ALLOWED_ORIGINS as a list in .env.

# Browsable API is handy when poking at the tryout endpoints by hand
REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = [  # noqa: F405
    "rest_framework.renderers.JSONRenderer",
    "rest_framework.renderers.BrowsableAPIRenderer",
]

LOGGING["loggers"]["apps"]["level"] = "DEBUG"  # noqa: F405
LOGGING["handlers"]["json_console"]["level"] = "DEBUG"  # noqa: F405
