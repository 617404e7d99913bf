from django.apps import AppConfig


class AssignmentsConfig(AppConfig):
    """App configuration for assignments and their progress tracking."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "assignments"
