"""Application configuration for the language lines app."""
from django.apps import AppConfig


class LanguageLinesConfig(AppConfig):
    """Configuration for the language lines application."""
    default_auto_field = "django.db.models.BigAutoField"
    name = "language_lines"
    verbose_name = "Language panel"
