# apps/tryouts/conf.py
"""
Tryout engine settings, read from the JLPT_TRYOUT dict in Django settings.

    JLPT_TRYOUT = {
        "PASS_THRESHOLDS": {"N3": {"total": 95, "sections": {"listening": 19, ...}}},
        "HIDE_FOREIGN_ATTEMPTS": True,
    }
"""
from django.conf import settings

DEFAULTS = {
    # Per-level overrides merged over scoring.DEFAULT_PASS_THRESHOLDS
    "PASS_THRESHOLDS": {},
    # Answer 404 instead of 403 when a user touches someone else's attempt
    "HIDE_FOREIGN_ATTEMPTS": True,
}


def tryout_setting(name):
    if name not in DEFAULTS:
        raise KeyError(f"Unknown JLPT_TRYOUT setting: {name}")
    return getattr(settings, "JLPT_TRYOUT", {}).get(name, DEFAULTS[name])
