"""URL routing for Studyboard.

HTML pages live under their app prefixes; the dashboard and the public
landing page share the root. API and documentation routes come from
`api.urls`.
"""
from django.contrib import admin
from django.urls import include, path
from django.http import HttpResponsePermanentRedirect


def _favicon(request):  # redirect to static SVG favicon to avoid 404s
    return HttpResponsePermanentRedirect("/static/favicon.svg")


urlpatterns = [
    path("favicon.ico", _favicon),
    path("admin/", admin.site.urls),
    path("accounts/", include("accounts.urls")),
    path("courses/", include("courses.urls")),
    path("assignments/", include("assignments.urls")),
    path("dashboard/", include("dashboard.urls")),
    path("", include("ui.urls")),
    # API schema and docs
    path("", include("api.urls")),
]
