from __future__ import annotations

import json
from datetime import timedelta

import pytest
from django.contrib.auth.models import User
from django.urls import reverse
from django.utils import timezone

from assignments.models import Assignment, AssignmentStatus
from courses.models import Course


def make_user(username="alice"):
    return User.objects.create_user(username=username, password="Strong#Passw0rd", email=f"{username}@ex.com")


def make_assignment(owner, title="Essay", code="HIST1", **kwargs):
    course, _ = Course.objects.get_or_create(owner=owner, code=code, defaults={"name": f"Course {code}"})
    kwargs.setdefault("due_date", timezone.now() + timedelta(days=3))
    return Assignment.objects.create(course=course, title=title, **kwargs)


def future_local(days=3):
    return timezone.localtime(timezone.now() + timedelta(days=days)).strftime("%Y-%m-%dT%H:%M")


@pytest.mark.django_db
def test_list_requires_login(client):
    r = client.get(reverse("assignments:list"))
    assert r.status_code == 302
    assert "/accounts/login/" in r["Location"]


@pytest.mark.django_db
def test_list_shows_only_own_assignments(client):
    me = make_user()
    other = make_user("bob")
    make_assignment(me, title="Mine")
    make_assignment(other, title="Theirs")
    client.force_login(me)
    r = client.get(reverse("assignments:list"))
    assert r.status_code == 200
    assert [a.title for a in r.context["assignments"]] == ["Mine"]


@pytest.mark.django_db
def test_list_filters_by_status_and_course(client):
    me = make_user()
    make_assignment(me, title="A", code="C1")
    make_assignment(me, title="B", code="C1", status=AssignmentStatus.IN_PROGRESS)
    c = make_assignment(me, title="C", code="C2").course
    client.force_login(me)
    r = client.get(reverse("assignments:list"), {"status": "in_progress"})
    assert [a.title for a in r.context["assignments"]] == ["B"]
    r = client.get(reverse("assignments:list"), {"course": c.pk})
    assert [a.title for a in r.context["assignments"]] == ["C"]


@pytest.mark.django_db
def test_create_assignment_via_form(client):
    me = make_user()
    course = Course.objects.create(owner=me, name="Physics", code="PHY1")
    client.force_login(me)
    r = client.post(
        reverse("assignments:create"),
        {
            "title": "  Problem set  ",
            "course": course.pk,
            "due_date": future_local(),
            "priority": "high",
            "completion_percentage": 100,
        },
    )
    assert r.status_code == 302
    a = Assignment.objects.get()
    assert a.title == "Problem set"
    assert a.owner_id == me.id
    assert a.status == AssignmentStatus.COMPLETED
    assert a.completed_at is not None


@pytest.mark.django_db
def test_create_rejects_past_due_date(client):
    me = make_user()
    course = Course.objects.create(owner=me, name="Physics", code="PHY1")
    client.force_login(me)
    past = timezone.localtime(timezone.now() - timedelta(days=2)).strftime("%Y-%m-%dT%H:%M")
    r = client.post(reverse("assignments:create"), {"title": "Late", "course": course.pk, "due_date": past, "priority": "low"})
    assert r.status_code == 200
    assert "due_date" in r.context["form"].errors
    assert not Assignment.objects.exists()


@pytest.mark.django_db
def test_create_rejects_foreign_course(client):
    me = make_user()
    other = make_user("bob")
    Course.objects.create(owner=me, name="Mine", code="MINE")
    theirs = Course.objects.create(owner=other, name="Theirs", code="THEIRS")
    client.force_login(me)
    r = client.post(reverse("assignments:create"), {"title": "Sneaky", "course": theirs.pk, "due_date": future_local(), "priority": "low"})
    assert r.status_code == 200
    assert "course" in r.context["form"].errors


@pytest.mark.django_db
def test_create_without_courses_redirects_to_course_form(client):
    me = make_user()
    client.force_login(me)
    r = client.get(reverse("assignments:create"))
    assert r.status_code == 302
    assert r["Location"] == reverse("courses:create")


@pytest.mark.django_db
def test_edit_lowering_status_clears_completion(client):
    me = make_user()
    a = make_assignment(me)
    a.set_status("completed")
    a.save()
    client.force_login(me)
    r = client.post(
        reverse("assignments:edit", args=[a.pk]),
        {
            "title": a.title,
            "course": a.course_id,
            "due_date": timezone.localtime(a.due_date).strftime("%Y-%m-%dT%H:%M"),
            "priority": a.priority,
            "status": "in_progress",
            "completion_percentage": 100,
        },
    )
    assert r.status_code == 302
    a.refresh_from_db()
    assert a.status == AssignmentStatus.IN_PROGRESS
    assert a.completed_at is None


@pytest.mark.django_db
def test_other_users_assignment_is_404(client):
    me = make_user()
    other = make_user("bob")
    theirs = make_assignment(other)
    client.force_login(me)
    assert client.get(reverse("assignments:detail", args=[theirs.pk])).status_code == 404
    assert client.post(reverse("assignments:delete", args=[theirs.pk])).status_code == 404
    assert Assignment.objects.filter(pk=theirs.pk).exists()


@pytest.mark.django_db
def test_delete_requires_post(client):
    me = make_user()
    a = make_assignment(me)
    client.force_login(me)
    assert client.get(reverse("assignments:delete", args=[a.pk])).status_code == 405
    r = client.post(reverse("assignments:delete", args=[a.pk]))
    assert r.status_code == 302
    assert not Assignment.objects.filter(pk=a.pk).exists()


@pytest.mark.django_db
def test_status_endpoint_completes_assignment(client):
    me = make_user()
    a = make_assignment(me, completion_percentage=40)
    client.force_login(me)
    r = client.post(reverse("assignments:status", args=[a.pk]), json.dumps({"status": "completed"}), content_type="application/json")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "completed"
    assert body["label"] == "Completed"
    assert body["badge_class"] == "bg-success"
    assert body["completion_percentage"] == 100
    a.refresh_from_db()
    assert a.completed_at is not None
    assert a.updated_at is not None


@pytest.mark.django_db
def test_status_endpoint_rejects_unknown_status(client):
    me = make_user()
    a = make_assignment(me)
    client.force_login(me)
    r = client.post(reverse("assignments:status", args=[a.pk]), json.dumps({"status": "archived"}), content_type="application/json")
    assert r.status_code == 400
    a.refresh_from_db()
    assert a.status == AssignmentStatus.TODO


@pytest.mark.django_db
def test_status_endpoint_requires_a_value(client):
    me = make_user()
    a = make_assignment(me)
    client.force_login(me)
    r = client.post(reverse("assignments:status", args=[a.pk]), json.dumps({}), content_type="application/json")
    assert r.status_code == 400


@pytest.mark.django_db
def test_status_endpoint_hides_foreign_assignments(client):
    me = make_user()
    theirs = make_assignment(make_user("bob"))
    client.force_login(me)
    r = client.post(reverse("assignments:status", args=[theirs.pk]), json.dumps({"status": "completed"}), content_type="application/json")
    assert r.status_code == 404


@pytest.mark.django_db
@pytest.mark.parametrize("raw", ['{"completion_percentage": 1e400}', '{"completion_percentage": Infinity}'])
def test_status_endpoint_rejects_infinite_percentage(client, raw):
    me = make_user()
    a = make_assignment(me, completion_percentage=20)
    client.force_login(me)
    r = client.post(reverse("assignments:status", args=[a.pk]), raw, content_type="application/json")
    assert r.status_code == 400
    a.refresh_from_db()
    assert a.completion_percentage == 20


@pytest.mark.django_db
@pytest.mark.parametrize("value", [True, 50.9])
def test_status_endpoint_rejects_non_integer_percentage(client, value):
    me = make_user()
    a = make_assignment(me, completion_percentage=20)
    client.force_login(me)
    body = json.dumps({"completion_percentage": value})
    r = client.post(reverse("assignments:status", args=[a.pk]), body, content_type="application/json")
    assert r.status_code == 400
    a.refresh_from_db()
    assert a.completion_percentage == 20


@pytest.mark.django_db
def test_status_endpoint_accepts_whole_float_percentage(client):
    me = make_user()
    a = make_assignment(me)
    client.force_login(me)
    r = client.post(reverse("assignments:status", args=[a.pk]), json.dumps({"completion_percentage": 50.0}), content_type="application/json")
    assert r.status_code == 200
    assert r.json()["completion_percentage"] == 50
