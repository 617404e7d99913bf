"""Course list/detail/create/edit/delete for the signed-in owner."""
from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import transaction
from django.db.models import Prefetch
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from assignments.models import Assignment, AssignmentStatus
from .forms import CourseForm
from .models import Course

logger = logging.getLogger(__name__)


def _owned_courses(user):
    return Course.objects.filter(owner=user).prefetch_related(
        Prefetch("assignments", queryset=Assignment.objects.order_by("due_date", "id"))
    )


@login_required
def course_list(request: HttpRequest) -> HttpResponse:
    courses = _owned_courses(request.user).order_by("name", "id")
    return render(request, "courses/list.html", {"courses": courses, "now": timezone.now()})


@login_required
def course_create(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = CourseForm(request.POST, owner=request.user)
        if form.is_valid():
            course = form.save()
            logger.info("Course %s (%s) created by user %s", course.pk, course.code, request.user.pk)
            messages.success(request, f'Course "{course.name}" created.')
            return redirect("courses:detail", pk=course.pk)
    else:
        form = CourseForm(owner=request.user)
    return render(request, "courses/form.html", {"form": form, "course": None})


@login_required
def course_detail(request: HttpRequest, pk: int) -> HttpResponse:
    course = get_object_or_404(_owned_courses(request.user), pk=pk)
    ctx = {
        "course": course,
        "assignments": course.assignments.all(),
        "status_counts": course.status_counts(),
        "overdue_count": course.overdue_assignments_count(),
        "statuses": AssignmentStatus.choices,
        "now": timezone.now(),
    }
    return render(request, "courses/detail.html", ctx)


@login_required
def course_edit(request: HttpRequest, pk: int) -> HttpResponse:
    course = get_object_or_404(Course, pk=pk, owner=request.user)
    if request.method == "POST":
        form = CourseForm(request.POST, instance=course, owner=request.user)
        if form.is_valid():
            form.save()
            logger.info("Course %s updated by user %s", course.pk, request.user.pk)
            messages.success(request, f'Course "{course.name}" updated.')
            return redirect("courses:detail", pk=course.pk)
    else:
        form = CourseForm(instance=course, owner=request.user)
    return render(request, "courses/form.html", {"form": form, "course": course})


@login_required
@require_POST
def course_delete(request: HttpRequest, pk: int) -> HttpResponse:
    """Delete a course together with all of its assignments."""
    course = get_object_or_404(Course, pk=pk, owner=request.user)
    name = course.name
    with transaction.atomic():
        removed = course.assignments.count()
        course.delete()
    logger.info("Course %s deleted by user %s with %d assignments", pk, request.user.pk, removed)
    messages.success(request, f'Course "{name}" and its {removed} assignments were deleted.')
    return redirect("courses:list")
