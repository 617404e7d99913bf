from django.apps import AppConfig


class UiConfig(AppConfig):
    """App configuration for the landing page and the Pomodoro timer."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "ui"
