#api/v1/routers.py
from rest_framework.routers import DefaultRouter

from apps.tryouts.views import TryoutViewSet


api_router = DefaultRouter()

# Tryouts (JLPT mock exams)
api_router.register(
    r"tryouts",
    TryoutViewSet,
    basename="tryouts",
)
