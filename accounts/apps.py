from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """App configuration for sign-up and sign-in."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
