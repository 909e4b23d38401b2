"""Admin screen for browsing, editing, importing and exporting language lines."""
import logging

from django.contrib import admin, messages
from django.core.exceptions import PermissionDenied
from django.http import HttpResponse, HttpResponseRedirect
from django.template.response import TemplateResponse
from django.urls import path, reverse
from django.utils.html import format_html
from django.utils.text import Truncator

from language_lines import actions
from language_lines.conf import get_capabilities
from language_lines.exceptions import ActionDisabledError
from language_lines.forms import ImportLangFilesForm, LanguageLineForm, SpreadsheetUploadForm
from language_lines.models import LanguageLine
from language_lines.spreadsheets import EXPORT_FILENAME, XLSX_CONTENT_TYPE

logger = logging.getLogger("language_lines.admin")

MESSAGE_LEVELS = {
    actions.INFO: messages.INFO,
    actions.SUCCESS: messages.SUCCESS,
    "warning": messages.WARNING,
    actions.ERROR: messages.ERROR,
}


def preview_text(text, words: int = 3) -> str:
    """Comma-joined start of every non-empty translation."""
    parts = [Truncator(value).words(words, truncate="...") for value in (text or {}).values() if value]
    return ", ".join(parts)


def full_text(text) -> str:
    return ", ".join(str(value) for value in (text or {}).values() if value)


def make_presence_column(locale: str):
    """List column showing whether a line is translated into ``locale``."""
    @admin.display(boolean=True, description=locale)
    def column(obj):
        return obj.has_translation(locale)
    column.__name__ = f"has_{locale}"
    return column


class LocaleTranslationFilter(admin.SimpleListFilter):
    """Filter lines by whether ``locale`` has a non-empty translation."""
    locale = ""

    def lookups(self, request, model_admin):
        return (("translated", "Translated"), ("missing", "Missing"))

    def queryset(self, request, queryset):
        if self.value() not in ("translated", "missing"):
            return queryset
        translated = (
            queryset.filter(text__has_key=self.locale)
            .exclude(**{f"text__{self.locale}": ""})
            .exclude(**{f"text__{self.locale}": None})
        )
        if self.value() == "translated":
            return translated
        return queryset.exclude(pk__in=translated.values("pk"))


def make_locale_filter(locale: str):
    return type(
        f"LocaleTranslationFilter_{locale}",
        (LocaleTranslationFilter,),
        {"locale": locale, "title": f"{locale} translation", "parameter_name": f"translated_{locale}"},
    )


@admin.register(LanguageLine)
class LanguageLineAdmin(admin.ModelAdmin):
    """Language line list, edit form and import/export header actions."""
    form = LanguageLineForm
    change_list_template = "admin/language_lines/languageline/change_list.html"
    search_fields = ("group", "key", "text")
    list_display_links = ("key",)
    ordering = ("id",)
    fieldsets = (
        (None, {"fields": (("group", "key"),)}),
        (None, {"fields": ("text",)}),
    )

    def get_list_display(self, request):
        caps = get_capabilities()
        return (
            "id",
            "group",
            "key",
            *[make_presence_column(locale) for locale in caps.locales],
            "text_preview",
            "updated_at",
        )

    def get_list_filter(self, request):
        caps = get_capabilities()
        return ("group", *[make_locale_filter(locale) for locale in caps.locales])

    @admin.display(description="Text")
    def text_preview(self, obj):
        return format_html('<span title="{}">{}</span>', full_text(obj.text), preview_text(obj.text))

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return ()
        caps = get_capabilities()
        readonly = []
        if not caps.edit_form_group:
            readonly.append("group")
        if not caps.edit_form_key:
            readonly.append("key")
        return tuple(readonly)

    def get_form(self, request, obj=None, **kwargs):
        form = super().get_form(request, obj, **kwargs)
        form.capabilities = get_capabilities()
        return form

    def has_delete_permission(self, request, obj=None):
        if not get_capabilities().allow_delete:
            return False
        return super().has_delete_permission(request, obj)

    # Header actions

    def get_urls(self):
        opts = self.model._meta
        info = opts.app_label, opts.model_name
        custom = [
            path("import-lang-files/", self.admin_site.admin_view(self.import_lang_files_view),
                 name="%s_%s_import_lang_files" % info),
            path("export/", self.admin_site.admin_view(self.export_view),
                 name="%s_%s_export" % info),
            path("import-spreadsheet/", self.admin_site.admin_view(self.import_spreadsheet_view),
                 name="%s_%s_import_spreadsheet" % info),
        ]
        return custom + super().get_urls()

    def changelist_view(self, request, extra_context=None):
        caps = get_capabilities()
        extra_context = {
            **(extra_context or {}),
            "can_export": caps.can_export,
            "can_import_spreadsheet": caps.can_import_spreadsheet,
        }
        return super().changelist_view(request, extra_context=extra_context)

    def _changelist_url(self):
        opts = self.model._meta
        return reverse(f"admin:{opts.app_label}_{opts.model_name}_changelist")

    def _notify(self, request, result):
        logger.info(f"{request.user} ran '{result.action}': {result.message}")
        for note in result.notifications:
            self.message_user(request, note["message"], level=MESSAGE_LEVELS.get(note["level"], messages.INFO))

    def _render_action_form(self, request, form, title, multipart=False):
        context = {
            **self.admin_site.each_context(request),
            "opts": self.model._meta,
            "title": title,
            "form": form,
            "multipart": multipart,
            "changelist_url": self._changelist_url(),
        }
        return TemplateResponse(request, "admin/language_lines/languageline/action_form.html", context)

    def import_lang_files_view(self, request):
        if not self.has_change_permission(request):
            raise PermissionDenied
        caps = get_capabilities()
        if request.method == "POST":
            form = ImportLangFilesForm(request.POST, capabilities=caps)
            if form.is_valid():
                result = actions.import_from_lang_files(caps, **form.flags())
                self._notify(request, result)
                return HttpResponseRedirect(self._changelist_url())
        else:
            form = ImportLangFilesForm(capabilities=caps)
        return self._render_action_form(request, form, "Import from lang files")

    def export_view(self, request):
        if not self.has_view_permission(request):
            raise PermissionDenied
        caps = get_capabilities()
        try:
            result = actions.export_spreadsheet(caps)
        except ActionDisabledError:
            raise PermissionDenied
        if not result.ok:
            self._notify(request, result)
            return HttpResponseRedirect(self._changelist_url())
        response = HttpResponse(result.content, content_type=XLSX_CONTENT_TYPE)
        response["Content-Disposition"] = f'attachment; filename="{EXPORT_FILENAME}"'
        return response

    def import_spreadsheet_view(self, request):
        if not self.has_change_permission(request):
            raise PermissionDenied
        caps = get_capabilities()
        if not caps.can_import_spreadsheet:
            raise PermissionDenied
        if request.method == "POST":
            form = SpreadsheetUploadForm(request.POST, request.FILES, capabilities=caps)
            if form.is_valid():
                result = actions.import_spreadsheet(
                    caps,
                    form.cleaned_data["importfile"],
                    truncate=form.cleaned_data.get("truncate", False),
                )
                self._notify(request, result)
                return HttpResponseRedirect(self._changelist_url())
        else:
            form = SpreadsheetUploadForm(capabilities=caps)
        return self._render_action_form(request, form, "Upload spreadsheet", multipart=True)
