"""Tests for the language line API endpoints."""
import tempfile
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings

from language_lines.exceptions import StoreUnavailableError
from language_lines.models import LanguageLine
from language_lines.spreadsheets import XLSX_CONTENT_TYPE
from language_lines.tests.helpers import (
    PANEL_ALL_DISABLED,
    PANEL_ALL_ENABLED,
    make_workbook,
    panel_settings,
    read_workbook,
    write_lang_file,
)


class ApiTestCase(TestCase):
    """Logs in a staff user and creates two lines."""

    def setUp(self) -> None:
        self.user = get_user_model().objects.create_user("staff", "staff@example.com", "password", is_staff=True)
        self.client.force_login(self.user)
        LanguageLine.objects.create(group="validation", key="required", text={"en": "Required"})
        LanguageLine.objects.create(group="", key="Welcome", text={"en": "Welcome"})


class LanguageLineListTests(ApiTestCase):

    def test_list(self) -> None:
        response = self.client.get("/api/language-lines/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([line["key"] for line in response.json()], ["required", "Welcome"])

    def test_filter_by_group(self) -> None:
        response = self.client.get("/api/language-lines/", {"group": ""})
        self.assertEqual([line["key"] for line in response.json()], ["Welcome"])

    def test_requires_staff(self) -> None:
        """Test that non-staff users are refused."""
        self.client.logout()
        user = get_user_model().objects.create_user("visitor", "visitor@example.com", "password")
        self.client.force_login(user)
        self.assertEqual(self.client.get("/api/language-lines/").status_code, 403)


class ImportLangFilesApiTests(ApiTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.tmp = tempfile.TemporaryDirectory()
        write_lang_file(self.tmp.name, "en/validation.json", {"required": "This field is required"})
        write_lang_file(self.tmp.name, "fr/validation.json", {"required": "Ce champ est requis"})

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_import_with_truncate_and_overwrite(self) -> None:
        """Test that the counts are returned and the store replaced."""
        with self.settings(LANGUAGE_PANEL=panel_settings(LANG_PATH=self.tmp.name)):
            response = self.client.post(
                "/api/language-lines/import-lang-files/",
                {"truncate": True, "overwrite": True},
                content_type="application/json",
            )
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "success")
        self.assertEqual((data["created"], data["deleted"]), (1, 2))
        self.assertEqual(
            list(LanguageLine.objects.values_list("text", flat=True)),
            [{"en": "This field is required", "fr": "Ce champ est requis"}],
        )

    def test_store_failure_answers_503(self) -> None:
        with self.settings(LANGUAGE_PANEL=panel_settings(LANG_PATH=self.tmp.name)), \
                patch("language_lines.actions.ImportFromLangFiles.dispatch_sync",
                      side_effect=StoreUnavailableError("database is locked")):
            response = self.client.post("/api/language-lines/import-lang-files/", {}, content_type="application/json")
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "error")

    def test_missing_directory_answers_400(self) -> None:
        with self.settings(LANGUAGE_PANEL=panel_settings(LANG_PATH="/nonexistent/lang")):
            response = self.client.post("/api/language-lines/import-lang-files/", {}, content_type="application/json")
        self.assertEqual(response.status_code, 400)


class SpreadsheetApiTests(ApiTestCase):

    def upload(self, header, rows):
        return SimpleUploadedFile("lines.xlsx", make_workbook(header, rows).read(), XLSX_CONTENT_TYPE)

    @override_settings(LANGUAGE_PANEL=PANEL_ALL_ENABLED)
    def test_import(self) -> None:
        response = self.client.post(
            "/api/language-lines/import-spreadsheet/",
            {"importfile": self.upload(["group", "key", "fr"], [["validation", "required", "Requis"]])},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["updated"], 1)
        self.assertEqual(LanguageLine.objects.get(key="required").text, {"fr": "Requis"})

    @override_settings(LANGUAGE_PANEL=PANEL_ALL_ENABLED)
    def test_import_bad_header_answers_400(self) -> None:
        response = self.client.post(
            "/api/language-lines/import-spreadsheet/",
            {"importfile": self.upload(["name"], [["x"]])},
        )
        self.assertEqual(response.status_code, 400)

    @override_settings(LANGUAGE_PANEL=PANEL_ALL_DISABLED)
    def test_disabled_actions_answer_403(self) -> None:
        response = self.client.post(
            "/api/language-lines/import-spreadsheet/",
            {"importfile": self.upload(["group", "key", "en"], [["auth", "x", "y"]])},
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.client.get("/api/language-lines/export/").status_code, 403)
        response = self.client.post("/api/language-lines/bulk-delete/", {"ids": [1]}, content_type="application/json")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(LanguageLine.objects.count(), 2)

    @override_settings(LANGUAGE_PANEL=PANEL_ALL_ENABLED)
    def test_export(self) -> None:
        response = self.client.get("/api/language-lines/export/")
        self.assertEqual(response.status_code, 200)
        rows = read_workbook(response.content)
        self.assertEqual(rows[1], ["validation", "required", "Required", None])

    @override_settings(LANGUAGE_PANEL=PANEL_ALL_ENABLED)
    def test_unexportable_line_answers_400(self) -> None:
        LanguageLine.objects.create(group="auth", key="bell", text={"en": "a\x07b"})
        response = self.client.get("/api/language-lines/export/")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["status"], "error")
        self.assertIn("auth.bell", response.json()["message"])

    @override_settings(LANGUAGE_PANEL=PANEL_ALL_ENABLED)
    def test_bulk_delete(self) -> None:
        ids = list(LanguageLine.objects.filter(group="").values_list("id", flat=True))
        response = self.client.post("/api/language-lines/bulk-delete/", {"ids": ids}, content_type="application/json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["deleted"], 1)
        self.assertFalse(LanguageLine.objects.filter(group="").exists())
