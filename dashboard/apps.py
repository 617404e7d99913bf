from django.apps import AppConfig


class DashboardConfig(AppConfig):
    """App configuration for the per-user statistics dashboard."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "dashboard"
