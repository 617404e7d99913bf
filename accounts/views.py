"""Sign-in, sign-out and registration."""
from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.views import LoginView, LogoutView
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render

from .forms import EmailOrUsernameAuthenticationForm, RegistrationForm

logger = logging.getLogger(__name__)


class StudyboardLoginView(LoginView):
    template_name = "registration/login.html"
    form_class = EmailOrUsernameAuthenticationForm
    redirect_authenticated_user = True

    def form_valid(self, form):
        logger.info("User %s signed in", form.get_user().pk)
        return super().form_valid(form)


class StudyboardLogoutView(LogoutView):
    next_page = "/"


def register(request: HttpRequest) -> HttpResponse:
    """Create an account, sign the user in and send them to the dashboard."""
    if request.user.is_authenticated:
        return redirect("dashboard:index")
    if request.method == "POST":
        form = RegistrationForm(request.POST)
        if form.is_valid():
            user = form.save()
            login(request, user, backend="django.contrib.auth.backends.ModelBackend")
            logger.info("User %s registered", user.pk)
            messages.success(request, "Welcome to Studyboard!")
            return redirect("dashboard:index")
    else:
        form = RegistrationForm()
    return render(request, "accounts/register.html", {"form": form})
