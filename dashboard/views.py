"""Dashboard page: statistics snapshot and per-course chart."""
from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse
from django.shortcuts import render
from django.utils import timezone

from .stats import chart_data, dashboard_stats


@login_required
def dashboard(request: HttpRequest) -> HttpResponse:
    now = timezone.now()
    ctx = {
        "stats": dashboard_stats(request.user, now=now),
        "chart_data": chart_data(request.user),
        "now": now,
    }
    return render(request, "dashboard/index.html", ctx)
