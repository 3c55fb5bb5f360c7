#api/v1/urls.py
from django.urls import path, include
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .routers import api_router


token_obtain_view = extend_schema_view(
    post=extend_schema(tags=["Authentication"], summary="Obtain JWT pair"),
)(TokenObtainPairView)
token_refresh_view = extend_schema_view(
    post=extend_schema(tags=["Authentication"], summary="Refresh access token"),
)(TokenRefreshView)


urlpatterns = [
    # Router-registered viewsets (tryouts)
    path("", include(api_router.urls)),

    # Authentication endpoints
    path("auth/token/", token_obtain_view.as_view(), name="auth-token"),
    path("auth/token/refresh/", token_refresh_view.as_view(), name="auth-token-refresh"),
]
