from __future__ import annotations

import json

import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_schema_available():
    r = APIClient().get("/api/schema/", {"format": "json"})
    assert r.status_code == 200
    paths = json.loads(r.content)["paths"]
    for p in ("/api/v1/courses/", "/api/v1/assignments/", "/api/v1/assignments/{id}/status/", "/api/v1/dashboard/"):
        assert p in paths


@pytest.mark.django_db
@pytest.mark.security
@pytest.mark.parametrize("url", ["/api/v1/courses/", "/api/v1/assignments/", "/api/v1/dashboard/", "/api/v1/dashboard/chart/"])
def test_endpoints_require_authentication(url):
    r = APIClient().get(url)
    assert r.status_code in (401, 403)


@pytest.mark.django_db
def test_docs_pages_render():
    c = APIClient()
    assert c.get("/docs/").status_code == 200
    assert c.get("/redoc/").status_code == 200


@pytest.mark.django_db
def test_course_create_and_list():
    u = User.objects.create_user(username="api", password="Strong#Passw0rd")
    c = APIClient()
    c.force_authenticate(u)
    r = c.post("/api/v1/courses/", {"name": "Economics", "code": "eco-1", "color": "#abcdef"}, format="json")
    assert r.status_code == 201
    assert r.json()["code"] == "ECO-1"
    assert r.json()["completion_percentage"] == 0
    r = c.get("/api/v1/courses/")
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 1
    assert data["results"][0]["status_counts"] == {"todo": 0, "in_progress": 0, "completed": 0, "cancelled": 0}


@pytest.mark.django_db
def test_course_duplicate_code_is_400():
    u = User.objects.create_user(username="dup", password="Strong#Passw0rd")
    c = APIClient()
    c.force_authenticate(u)
    assert c.post("/api/v1/courses/", {"name": "Economics", "code": "ECO"}, format="json").status_code == 201
    r = c.post("/api/v1/courses/", {"name": "Economics 2", "code": "eco"}, format="json")
    assert r.status_code == 400
    assert "code" in r.json()
