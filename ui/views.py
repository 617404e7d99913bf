from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render


def index(request: HttpRequest) -> HttpResponse:
    """Send signed-in users to their dashboard; show the landing page otherwise."""
    if request.user.is_authenticated:
        return redirect("dashboard:index")
    ctx = {
        "app_name": "Studyboard",
        "tagline": "Track courses, assignments and deadlines in one place.",
    }
    return render(request, "index.html", ctx)


@login_required
def pomodoro(request: HttpRequest) -> HttpResponse:
    """Pomodoro timer page; the timer itself runs client-side."""
    return render(request, "pomodoro/index.html", {"work_minutes": 25, "break_minutes": 5})
