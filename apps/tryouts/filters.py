# apps/tryouts/filters.py
import django_filters

from apps.questions.models import Level
from .models import TestAttempt


class TestAttemptFilter(django_filters.FilterSet):
    level = django_filters.ChoiceFilter(choices=Level.choices)
    status = django_filters.ChoiceFilter(choices=TestAttempt.Status.choices)
    is_passed = django_filters.BooleanFilter()
    started_after = django_filters.IsoDateTimeFilter(field_name="started_at", lookup_expr="gte")
    started_before = django_filters.IsoDateTimeFilter(field_name="started_at", lookup_expr="lte")

    class Meta:
        model = TestAttempt
        fields = ["level", "status", "is_passed"]
