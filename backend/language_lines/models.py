"""
Models for database-backed translation strings ("language lines").

Each line is addressed by a (group, key) pair and carries a JSON mapping of
locale code to translated text. Lines with an empty group are "single" lines
loaded from flat per-locale files.
"""
import logging
from typing import Dict, List

from django.db import models

logger = logging.getLogger("language_lines.models")


class LanguageLine(models.Model):
    """A translatable string and its translations, keyed by locale."""
    group = models.CharField(max_length=255, blank=True, default="", db_index=True)
    key = models.TextField()
    text = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "language_lines"
        ordering = ["id"]
        verbose_name = "language line"
        verbose_name_plural = "language lines"
        constraints = [
            models.UniqueConstraint(fields=["group", "key"], name="language_lines_group_key_unique"),
        ]

    def __str__(self) -> str:
        return f"{self.group}.{self.key}" if self.group else self.key

    @property
    def locales(self) -> List[str]:
        """Locale codes present in the text mapping, sorted."""
        return sorted((self.text or {}).keys())

    def get_translation(self, locale: str) -> str:
        """Return the text for ``locale`` or an empty string when untranslated."""
        value = (self.text or {}).get(locale)
        return "" if value is None else str(value)

    def has_translation(self, locale: str) -> bool:
        return bool(self.get_translation(locale))

    def set_translation(self, locale: str, value: str) -> "LanguageLine":
        """Set one locale's text without saving."""
        text = dict(self.text or {})
        text[locale] = value
        self.text = text
        return self

    @classmethod
    def get_translations_for_group(cls, locale: str, group: str) -> Dict[str, str]:
        """Return ``{key: text}`` for every line in ``group`` translated into ``locale``."""
        translations = {}
        for line in cls.objects.filter(group=group):
            value = line.get_translation(locale)
            if value:
                translations[line.key] = value
        logger.debug(f"Loaded {len(translations)} '{locale}' translations for group '{group}'.")
        return translations
