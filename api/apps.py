from django.apps import AppConfig


class ApiConfig(AppConfig):
    """App configuration for the REST API over courses, assignments and the dashboard."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "api"
