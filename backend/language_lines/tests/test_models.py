"""Unit tests for the LanguageLine model."""
from django.db import IntegrityError, transaction
from django.test import TestCase

from language_lines.models import LanguageLine


class LanguageLineModelTests(TestCase):
    """Test suite for the language line record."""

    def setUp(self) -> None:
        """Create a grouped line and a single line."""
        self.required = LanguageLine.objects.create(
            group="validation", key="required", text={"en": "This field is required", "fr": ""}
        )
        LanguageLine.objects.create(group="validation", key="email", text={"fr": "Adresse invalide"})
        self.single = LanguageLine.objects.create(group="", key="Welcome", text={"en": "Welcome"})

    def test_group_and_key_are_unique(self) -> None:
        """Test that a second line with the same (group, key) is rejected."""
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                LanguageLine.objects.create(group="validation", key="required", text={})

    def test_same_key_in_other_group_is_allowed(self) -> None:
        """Test that keys only need to be unique within their group."""
        LanguageLine.objects.create(group="auth", key="required", text={})
        self.assertEqual(LanguageLine.objects.filter(key="required").count(), 2)

    def test_translation_helpers(self) -> None:
        """Test locale lookups and presence on a single line."""
        self.assertEqual(self.required.get_translation("en"), "This field is required")
        self.assertEqual(self.required.get_translation("de"), "")
        self.assertTrue(self.required.has_translation("en"))
        self.assertFalse(self.required.has_translation("fr"))
        self.assertEqual(self.required.locales, ["en", "fr"])

    def test_set_translation_keeps_other_locales(self) -> None:
        """Test that setting one locale leaves the others in place."""
        self.required.set_translation("de", "Pflichtfeld").save()
        self.required.refresh_from_db()
        self.assertEqual(
            self.required.text,
            {"en": "This field is required", "fr": "", "de": "Pflichtfeld"},
        )

    def test_updated_at_changes_on_save(self) -> None:
        """Test that every save refreshes updated_at."""
        before = self.required.updated_at
        self.required.set_translation("fr", "Ce champ est requis").save()
        self.required.refresh_from_db()
        self.assertGreaterEqual(self.required.updated_at, before)

    def test_get_translations_for_group(self) -> None:
        """Test that untranslated keys are left out of the group mapping."""
        self.assertEqual(
            LanguageLine.get_translations_for_group("en", "validation"),
            {"required": "This field is required"},
        )
        self.assertEqual(
            LanguageLine.get_translations_for_group("fr", "validation"),
            {"email": "Adresse invalide"},
        )
        self.assertEqual(LanguageLine.get_translations_for_group("en", ""), {"Welcome": "Welcome"})

    def test_str(self) -> None:
        self.assertEqual(str(self.required), "validation.required")
        self.assertEqual(str(self.single), "Welcome")
