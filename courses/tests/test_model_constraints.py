from __future__ import annotations

import pytest
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from courses.models import Course


def make_user(username="alice"):
    return User.objects.create_user(username=username, password="Strong#Passw0rd", email=f"{username}@ex.com")


@pytest.mark.django_db
def test_code_unique_per_owner():
    u = make_user()
    Course.objects.create(owner=u, name="Algebra", code="MATH101")
    with pytest.raises(IntegrityError):
        Course.objects.create(owner=u, name="Algebra again", code="math101 ")


@pytest.mark.django_db
def test_same_code_allowed_for_different_owners():
    Course.objects.create(owner=make_user(), name="Algebra", code="MATH101")
    Course.objects.create(owner=make_user("bob"), name="Algebra", code="MATH101")
    assert Course.objects.filter(code="MATH101").count() == 2


@pytest.mark.django_db
def test_save_normalises_fields():
    c = Course.objects.create(owner=make_user(), name="  Biology ", code=" bio-2 ", professor=" Dr. Who ")
    assert c.code == "BIO-2"
    assert c.name == "Biology"
    assert c.professor == "Dr. Who"
    assert c.color == "#007bff"


@pytest.mark.django_db
def test_full_clean_rejects_bad_values():
    c = Course(owner=make_user(), name="X", code="bad code!", color="blue", credits=31)
    with pytest.raises(ValidationError) as exc:
        c.full_clean()
    errors = exc.value.message_dict
    assert {"name", "code", "color", "credits"} <= set(errors)


@pytest.mark.django_db
def test_deleting_user_removes_courses():
    u = make_user()
    Course.objects.create(owner=u, name="Chemistry", code="CHEM1")
    u.delete()
    assert not Course.objects.exists()
