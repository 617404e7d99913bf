"""Per-user dashboard statistics.

Each query below is independent and scoped to one user; `dashboard_stats`
composes them into a single snapshot for the dashboard page and the API.
Cancelled assignments count as closed: they are never upcoming and never
overdue, but they do appear in the status buckets and the total.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from django.conf import settings
from django.db.models import Count, F, Q, QuerySet
from django.utils import timezone

from assignments.models import Assignment, AssignmentStatus
from courses.models import Course

CLOSED_STATUSES = (AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED)


def _open_assignments(user) -> QuerySet[Assignment]:
    return Assignment.objects.filter(owner=user).exclude(status__in=CLOSED_STATUSES)


def count_by_status(user) -> dict[str, int]:
    rows = Assignment.objects.filter(owner=user).values("status").annotate(count=Count("id"))
    return {row["status"]: row["count"] for row in rows}


def count_by_course(user) -> list[dict[str, Any]]:
    """Assignment counts per course, ordered by course name.

    Courses without assignments are left out.
    """
    rows = (
        Course.objects.filter(owner=user)
        .annotate(count=Count("assignments", filter=Q(assignments__owner=user)))
        .filter(count__gt=0)
        .order_by("name", "id")
        .values("id", "name", "code", "color", "count")
    )
    return [
        {"course_id": r["id"], "course_name": r["name"], "course_code": r["code"], "color": r["color"], "count": r["count"]}
        for r in rows
    ]


def upcoming_for_user(user, now: datetime, limit: int | None = None) -> list[Assignment]:
    if limit is None:
        limit = settings.DASHBOARD_UPCOMING_LIMIT
    qs = _open_assignments(user).filter(due_date__gte=now).select_related("course").order_by("due_date", "id")
    return list(qs[:limit])


def recent_activity(user, limit: int | None = None) -> list[Assignment]:
    if limit is None:
        limit = settings.DASHBOARD_RECENT_LIMIT
    qs = (
        Assignment.objects.filter(owner=user)
        .select_related("course")
        .order_by(F("updated_at").desc(nulls_last=True), "-created_at", "-id")
    )
    return list(qs[:limit])


def count_overdue(user, now: datetime) -> int:
    return _open_assignments(user).filter(due_date__lt=now).count()


def count_courses(user) -> int:
    return Course.objects.filter(owner=user).count()


def progress_percentage(completed: int, total: int) -> float:
    if not total:
        return 0.0
    return round(completed / total * 100, 2)


def dashboard_stats(user, now: datetime | None = None) -> dict[str, Any]:
    """Build the dashboard snapshot for `user` as of `now`."""
    now = now or timezone.now()
    status_counts = count_by_status(user)
    total = sum(status_counts.values())
    completed = status_counts.get(AssignmentStatus.COMPLETED.value, 0)
    return {
        "todo": status_counts.get(AssignmentStatus.TODO.value, 0),
        "in_progress": status_counts.get(AssignmentStatus.IN_PROGRESS.value, 0),
        "completed": completed,
        "cancelled": status_counts.get(AssignmentStatus.CANCELLED.value, 0),
        "total": total,
        "progress_percentage": progress_percentage(completed, total),
        "upcoming_assignments": upcoming_for_user(user, now),
        "recent_activities": recent_activity(user),
        "assignments_by_course": count_by_course(user),
        "overdue_count": count_overdue(user, now),
        "total_courses": count_courses(user),
    }


def chart_data(user) -> dict[str, list]:
    """Course labels and assignment counts, index-aligned for a chart."""
    rows = count_by_course(user)
    return {
        "labels": [r["course_name"] for r in rows],
        "data": [r["count"] for r in rows],
        "colors": [r["color"] for r in rows],
    }
