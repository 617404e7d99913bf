"""API routes: versioned REST endpoints plus the OpenAPI schema and docs."""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerSplitView,
    SpectacularRedocView,
)

from .views import AssignmentViewSet, CourseViewSet, chart_view, dashboard_stats_view

router = DefaultRouter()
router.register(r"api/v1/courses", CourseViewSet, basename="courses")
router.register(r"api/v1/assignments", AssignmentViewSet, basename="assignments")

urlpatterns = [
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    # Split view serves the Swagger initialiser as a separate script to satisfy CSP
    path("docs/", SpectacularSwaggerSplitView.as_view(url_name="schema"), name="swagger-ui"),
    path("redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("api/v1/dashboard/", dashboard_stats_view, name="api-dashboard"),
    path("api/v1/dashboard/chart/", chart_view, name="api-dashboard-chart"),
    path("", include(router.urls)),
]
