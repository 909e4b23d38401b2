"""Forms for the language line admin screen."""
import os

from django import forms

from language_lines.conf import PanelCapabilities
from language_lines.models import LanguageLine
from language_lines.spreadsheets import ACCEPTED_CONTENT_TYPES

SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm")


class LanguageLineForm(forms.ModelForm):
    """Edit form; which locale changes are allowed depends on the capability flags."""

    capabilities: PanelCapabilities = PanelCapabilities()

    class Meta:
        model = LanguageLine
        fields = ["group", "key", "text"]
        labels = {"text": "Translations"}
        help_texts = {"text": 'Locale to translation, e.g. {"en": "Hello", "fr": "Bonjour"}.'}

    def clean_key(self):
        key = (self.cleaned_data.get("key") or "").strip()
        if not key:
            raise forms.ValidationError("Key cannot be empty.")
        return key

    def clean_text(self):
        text = self.cleaned_data.get("text")
        if text in (None, ""):
            text = {}
        if not isinstance(text, dict):
            raise forms.ValidationError("Translations must be a mapping of locale to text.")
        for locale, value in text.items():
            if not str(locale).strip():
                raise forms.ValidationError("Locale codes cannot be empty.")
            if value is not None and not isinstance(value, str):
                raise forms.ValidationError(f"Translation for '{locale}' must be text.")
        text = {str(locale).strip(): value or "" for locale, value in text.items()}

        if self.instance.pk is None:
            return text

        caps = self.capabilities
        before = set((self.instance.text or {}).keys())
        after = set(text.keys())
        added = after - before
        removed = before - after
        # Renaming a locale swaps one key for another without changing the count
        renamed = bool(added) and len(added) == len(removed)
        if renamed and caps.edit_form_keyvalue:
            return text
        if added and not caps.add_form_keyvalue:
            raise forms.ValidationError(f"Adding locales is disabled: {', '.join(sorted(added))}.")
        if removed and not caps.delete_form_keyvalue:
            raise forms.ValidationError(f"Removing locales is disabled: {', '.join(sorted(removed))}.")
        return text


class ImportLangFilesForm(forms.Form):
    truncate = forms.BooleanField(
        required=False,
        label="Truncate",
        help_text="Delete every language line before importing.",
    )
    overwrite = forms.BooleanField(
        required=False,
        label="Overwrite",
        help_text="Replace existing translations with the values from the lang files.",
    )

    def __init__(self, *args, capabilities: PanelCapabilities, **kwargs):
        super().__init__(*args, **kwargs)
        if not capabilities.allow_truncate:
            del self.fields["truncate"]
        if not capabilities.allow_overwrite:
            del self.fields["overwrite"]

    def flags(self):
        return {
            "truncate": self.cleaned_data.get("truncate", False),
            "overwrite": self.cleaned_data.get("overwrite", False),
        }


class SpreadsheetUploadForm(forms.Form):
    importfile = forms.FileField(label="Spreadsheet")
    truncate = forms.BooleanField(
        required=False,
        label="Truncate",
        help_text="Delete every language line before importing.",
    )

    def __init__(self, *args, capabilities: PanelCapabilities, **kwargs):
        super().__init__(*args, **kwargs)
        if not capabilities.allow_truncate:
            del self.fields["truncate"]

    def clean_importfile(self):
        upload = self.cleaned_data["importfile"]
        extension = os.path.splitext(upload.name or "")[1].lower()
        content_type = getattr(upload, "content_type", None)
        if extension not in SPREADSHEET_EXTENSIONS and content_type not in ACCEPTED_CONTENT_TYPES:
            raise forms.ValidationError("Upload an .xlsx spreadsheet.")
        return upload
