from __future__ import annotations

import json
import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from courses.models import Course
from .forms import AssignmentForm
from .models import Assignment, AssignmentStatus

logger = logging.getLogger(__name__)


def _owned(user):
    return Assignment.objects.filter(owner=user).select_related("course")


@login_required
def assignment_list(request: HttpRequest) -> HttpResponse:
    """All of the user's assignments, optionally filtered by status or course."""
    assignments = _owned(request.user)
    status = (request.GET.get("status") or "").strip()
    if status in AssignmentStatus.values:
        assignments = assignments.filter(status=status)
    course_id = (request.GET.get("course") or "").strip()
    if course_id.isdigit():
        assignments = assignments.filter(course_id=int(course_id))
    ctx = {
        "assignments": assignments.order_by("due_date", "id"),
        "courses": Course.objects.filter(owner=request.user).order_by("name"),
        "statuses": AssignmentStatus.choices,
        "selected_status": status,
        "selected_course": course_id,
        "now": timezone.now(),
    }
    return render(request, "assignments/list.html", ctx)


@login_required
def assignment_create(request: HttpRequest) -> HttpResponse:
    if not Course.objects.filter(owner=request.user).exists():
        messages.info(request, "Create a course before adding assignments.")
        return redirect("courses:create")
    if request.method == "POST":
        form = AssignmentForm(request.POST, owner=request.user)
        if form.is_valid():
            a = form.save()
            logger.info("Assignment %s created in course %s by user %s", a.pk, a.course_id, request.user.pk)
            messages.success(request, "Assignment created.")
            return redirect("assignments:list")
    else:
        initial = {}
        course_id = request.GET.get("course")
        if course_id and course_id.isdigit():
            initial["course"] = int(course_id)
        form = AssignmentForm(owner=request.user, initial=initial)
    return render(request, "assignments/form.html", {"form": form, "assignment": None})


@login_required
def assignment_detail(request: HttpRequest, pk: int) -> HttpResponse:
    a = get_object_or_404(_owned(request.user), pk=pk)
    return render(request, "assignments/detail.html", {"assignment": a, "now": timezone.now(), "statuses": AssignmentStatus.choices})


@login_required
def assignment_edit(request: HttpRequest, pk: int) -> HttpResponse:
    a = get_object_or_404(_owned(request.user), pk=pk)
    if request.method == "POST":
        form = AssignmentForm(request.POST, instance=a, owner=request.user)
        if form.is_valid():
            form.save()
            logger.info("Assignment %s updated by user %s", a.pk, request.user.pk)
            messages.success(request, "Assignment updated.")
            return redirect("assignments:detail", pk=a.pk)
    else:
        form = AssignmentForm(instance=a, owner=request.user)
    return render(request, "assignments/form.html", {"form": form, "assignment": a})


@login_required
@require_POST
def assignment_delete(request: HttpRequest, pk: int) -> HttpResponse:
    a = get_object_or_404(Assignment, pk=pk, owner=request.user)
    a.delete()
    logger.info("Assignment %s deleted by user %s", pk, request.user.pk)
    messages.success(request, "Assignment deleted.")
    return redirect("assignments:list")


@login_required
@require_POST
def assignment_status(request: HttpRequest, pk: int) -> JsonResponse:
    """Quick status/progress change from the dashboard or list (JSON in, JSON out).

    Body: ``{"status": "..."}`` and/or ``{"completion_percentage": N}``.
    Form-encoded bodies are accepted as well.
    """
    a = Assignment.objects.filter(pk=pk, owner=request.user).first()
    if a is None:
        return JsonResponse({"error": "Assignment not found."}, status=404)
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except ValueError:
            return JsonResponse({"error": "Invalid JSON body."}, status=400)
        if not isinstance(data, dict):
            return JsonResponse({"error": "Invalid JSON body."}, status=400)
    else:
        data = request.POST
    status = data.get("status") or None
    percentage = data.get("completion_percentage")
    if percentage in ("", None):
        percentage = None
    if status is None and percentage is None:
        return JsonResponse({"error": "Provide a status or a completion percentage."}, status=400)

    previous = a.status
    try:
        a.update_progress(status=status, completion_percentage=percentage)
    except ValidationError as exc:
        return JsonResponse({"error": "Invalid value.", "details": exc.message_dict}, status=400)
    a.save()
    if previous != a.status:
        logger.info("Assignment %s moved from %s to %s", a.pk, previous, a.status)
    current = a.status_enum
    return JsonResponse(
        {
            "success": True,
            "message": "Status updated.",
            "status": current.value,
            "label": current.label,
            "badge_class": current.badge_class,
            "completion_percentage": a.completion_percentage,
            "completed_at": a.completed_at.isoformat() if a.completed_at else None,
        }
    )
