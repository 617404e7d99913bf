"""REST API v1 viewsets and endpoints."""
from __future__ import annotations

import logging

from django.db.models import Prefetch
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action, api_view
from rest_framework.response import Response

from assignments.models import Assignment
from courses.models import Course
from dashboard.stats import chart_data, dashboard_stats
from .permissions import IsOwner
from .serializers import (
    AssignmentProgressSerializer,
    AssignmentSerializer,
    ChartDataSerializer,
    CourseSerializer,
    DashboardStatsSerializer,
)

logger = logging.getLogger(__name__)


class CourseViewSet(viewsets.ModelViewSet):
    serializer_class = CourseSerializer
    permission_classes = [IsOwner]
    search_fields = ["name", "code", "professor"]
    ordering_fields = ["name", "code", "created_at"]
    ordering = ["name", "id"]

    def get_queryset(self):
        return Course.objects.filter(owner=self.request.user).prefetch_related(
            Prefetch("assignments", queryset=Assignment.objects.order_by("due_date", "id"))
        )

    def perform_create(self, serializer):
        course = serializer.save(owner=self.request.user)
        logger.info("Course %s created via API by user %s", course.pk, self.request.user.pk)

    def perform_destroy(self, instance):
        logger.info("Course %s deleted via API by user %s", instance.pk, self.request.user.pk)
        instance.delete()


class AssignmentViewSet(viewsets.ModelViewSet):
    serializer_class = AssignmentSerializer
    permission_classes = [IsOwner]
    filterset_fields = ["status", "priority", "course"]
    search_fields = ["title", "description", "course__name", "course__code"]
    ordering_fields = ["due_date", "priority", "status", "created_at", "completion_percentage"]
    ordering = ["due_date", "id"]

    def get_queryset(self):
        return Assignment.objects.filter(owner=self.request.user).select_related("course")

    def get_serializer_context(self):
        ctx = super().get_serializer_context()
        ctx["now"] = timezone.now()
        return ctx

    def perform_create(self, serializer):
        assignment = serializer.save(owner=self.request.user)
        logger.info("Assignment %s created via API by user %s", assignment.pk, self.request.user.pk)

    def perform_destroy(self, instance):
        logger.info("Assignment %s deleted via API by user %s", instance.pk, self.request.user.pk)
        instance.delete()

    @extend_schema(request=AssignmentProgressSerializer, responses=AssignmentSerializer)
    @action(detail=True, methods=["post"])
    def status(self, request, pk=None):
        """Change status and/or completion percentage in one call."""
        assignment = self.get_object()
        payload = AssignmentProgressSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        previous = assignment.status
        assignment.update_progress(**payload.validated_data)
        assignment.save()
        if previous != assignment.status:
            logger.info("Assignment %s moved from %s to %s", assignment.pk, previous, assignment.status)
        return Response(self.get_serializer(assignment).data)


@extend_schema(responses=DashboardStatsSerializer)
@api_view(["GET"])
def dashboard_stats_view(request):
    """Dashboard snapshot for the requesting user."""
    stats = dashboard_stats(request.user, now=timezone.now())
    return Response(DashboardStatsSerializer(stats).data)


@extend_schema(responses=ChartDataSerializer)
@api_view(["GET"])
def chart_view(request):
    """Per-course assignment counts, index-aligned for a chart."""
    return Response(ChartDataSerializer(chart_data(request.user)).data)
