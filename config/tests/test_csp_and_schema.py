from __future__ import annotations

import pytest
from django.test import Client


@pytest.mark.django_db
def test_csp_has_expected_directives():
    r = Client().get("/")
    assert r.status_code == 200
    csp = r.headers.get("Content-Security-Policy", "")
    assert "'unsafe-inline'" not in csp
    assert "script-src 'self' https://cdn.jsdelivr.net" in csp
    assert "img-src 'self' data:" in csp
    assert "frame-ancestors 'none'" in csp


@pytest.mark.django_db
def test_docs_relax_styles_only():
    r = Client().get("/docs/")
    assert r.status_code == 200
    assert "style-src 'self' 'unsafe-inline'" in r.headers["Content-Security-Policy"]


@pytest.mark.django_db
def test_openapi_schema_available():
    r = Client().get("/api/schema/")
    assert r.status_code == 200
    assert "openapi" in r.content.decode("utf-8", errors="ignore").lower()


@pytest.mark.django_db
def test_favicon_redirects_to_static_svg():
    r = Client().get("/favicon.ico")
    assert r.status_code == 301
    assert r["Location"] == "/static/favicon.svg"
