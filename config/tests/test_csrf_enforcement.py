from __future__ import annotations

from datetime import timedelta

import pytest
from django.contrib.auth.models import User
from django.test import Client
from django.utils import timezone

from assignments.models import Assignment
from courses.models import Course


@pytest.mark.django_db
@pytest.mark.security
def test_post_without_csrf_is_rejected_on_html_views():
    u = User.objects.create_user(username="csrfu", password="Strong#Passw0rd")
    course = Course.objects.create(owner=u, name="Secure", code="SEC")
    a = Assignment.objects.create(course=course, title="Guarded", due_date=timezone.now() + timedelta(days=1))
    c = Client(enforce_csrf_checks=True)
    c.force_login(u)
    assert c.post(f"/courses/{course.pk}/delete/").status_code == 403
    r = c.post(f"/assignments/{a.pk}/status/", '{"status": "completed"}', content_type="application/json")
    assert r.status_code == 403
    assert Course.objects.filter(pk=course.pk).exists()
