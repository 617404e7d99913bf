from __future__ import annotations

from datetime import timedelta

import pytest
from django.contrib.auth.models import User
from django.test import Client
from django.utils import timezone

from assignments.models import Assignment, AssignmentStatus
from courses.models import Course


@pytest.mark.django_db
def test_course_calendar_lists_open_deadlines():
    u = User.objects.create_user(username="ics", password="Strong#Passw0rd")
    c = Course.objects.create(owner=u, name="History", code="hist2")
    due = timezone.now() + timedelta(days=4)
    a = Assignment.objects.create(course=c, title="Essay; draft", due_date=due)
    Assignment.objects.create(course=c, title="Dropped", due_date=due, status=AssignmentStatus.CANCELLED)

    client = Client()
    client.force_login(u)
    r = client.get(f"/courses/{c.pk}/calendar.ics")
    assert r.status_code == 200
    assert r["Content-Type"].startswith("text/calendar")
    assert "course-hist2.ics" in r["Content-Disposition"]
    body = r.content.decode("utf-8")
    assert body.startswith("BEGIN:VCALENDAR")
    assert "END:VCALENDAR" in body
    assert "PRODID:-//Studyboard//Course Deadlines//EN" in body
    assert f"UID:assignment-{a.pk}@studyboard" in body
    assert r"SUMMARY:HIST2: Essay\; draft" in body
    assert "Dropped" not in body
    assert body.count("BEGIN:VEVENT") == 1


@pytest.mark.django_db
def test_course_calendar_is_private():
    owner = User.objects.create_user(username="own", password="Strong#Passw0rd")
    other = User.objects.create_user(username="oth", password="Strong#Passw0rd")
    c = Course.objects.create(owner=owner, name="History", code="HIST2")
    client = Client()
    assert client.get(f"/courses/{c.pk}/calendar.ics").status_code == 302
    client.force_login(other)
    assert client.get(f"/courses/{c.pk}/calendar.ics").status_code == 404


@pytest.mark.django_db
def test_course_calendar_escapes_carriage_returns_and_folds_long_lines():
    u = User.objects.create_user(username="fold", password="Strong#Passw0rd")
    c = Course.objects.create(owner=u, name="History", code="HIST3")
    Assignment.objects.create(course=c, title="Part one\rpart two", due_date=timezone.now() + timedelta(days=2))
    Assignment.objects.create(course=c, title="Essay " + "é" * 80, due_date=timezone.now() + timedelta(days=3))

    client = Client()
    client.force_login(u)
    body = client.get(f"/courses/{c.pk}/calendar.ics").content
    lines = body.split(b"\r\n")
    assert b"\r" not in body.replace(b"\r\n", b"")
    assert all(len(line) <= 75 for line in lines)
    assert r"SUMMARY:HIST3: Part one\npart two".encode() in body
    unfolded = body.replace(b"\r\n ", b"").decode("utf-8")
    assert "SUMMARY:HIST3: Essay " + "é" * 80 in unfolded
