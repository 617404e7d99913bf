"""Public UI routes for Studyboard."""
from django.urls import path
from .views import index, pomodoro

app_name = "ui"

urlpatterns = [
    path("", index, name="index"),
    path("pomodoro/", pomodoro, name="pomodoro"),
]
