# apps/tryouts/apps.py
from django.apps import AppConfig


class TryoutsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.tryouts"
    verbose_name = "JLPT Tryouts"
