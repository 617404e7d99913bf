"""ICS export of a course's assignment deadlines.

Generates a basic iCalendar file with one event per assignment, placed at
its due date. Cancelled assignments are left out.
"""
from __future__ import annotations

from datetime import datetime, timezone
from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404

from assignments.models import AssignmentStatus
from .models import Course


def _ical_escape(s: str) -> str:
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    return s.replace("\\", "\\\\").replace(",", "\\,").replace(";", "\\;").replace("\n", "\\n")


def _ical_fold(line: str, limit: int = 75) -> str:
    """Fold a content line at `limit` octets; continuation lines start with a space."""
    parts: list[str] = []
    current, size = "", 0
    for ch in line:
        width = len(ch.encode("utf-8"))
        # Continuation lines lose one octet to the leading space
        budget = limit if not parts else limit - 1
        if size + width > budget:
            parts.append(current)
            current, size = "", 0
        current += ch
        size += width
    parts.append(current)
    return "\r\n ".join(parts)


def _ical_time(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


@login_required
def course_calendar(request: HttpRequest, pk: int) -> HttpResponse:
    course = get_object_or_404(Course, pk=pk, owner=request.user)
    dtstamp = _ical_time(datetime.now(timezone.utc))
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Studyboard//Course Deadlines//EN",
        f"X-WR-CALNAME:{_ical_escape(f'{course.name} ({course.code})')}",
    ]
    for a in course.assignments.exclude(status=AssignmentStatus.CANCELLED).order_by("due_date", "id"):
        lines += [
            "BEGIN:VEVENT",
            f"UID:assignment-{a.pk}@studyboard",
            f"DTSTAMP:{dtstamp}",
            f"DTSTART:{_ical_time(a.due_date)}",
            f"SUMMARY:{_ical_escape(f'{course.code}: {a.title}')}",
            "END:VEVENT",
        ]
    lines.append("END:VCALENDAR")
    body = "\r\n".join(_ical_fold(line) for line in lines) + "\r\n"
    resp = HttpResponse(body, content_type="text/calendar")
    resp["Content-Disposition"] = f"attachment; filename=course-{course.code.lower()}.ics"
    return resp
