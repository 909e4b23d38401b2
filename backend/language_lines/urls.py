"""URL configuration for the language lines API."""
from django.urls import path
from .views import (
    BulkDeleteView,
    ImportLangFilesView,
    LanguageLineListView,
    SpreadsheetExportView,
    SpreadsheetImportView,
)

urlpatterns = [
    path('language-lines/', LanguageLineListView.as_view(), name='language-lines'),
    path('language-lines/import-lang-files/', ImportLangFilesView.as_view(), name='language-lines-import-lang-files'),
    path('language-lines/import-spreadsheet/', SpreadsheetImportView.as_view(), name='language-lines-import-spreadsheet'),
    path('language-lines/export/', SpreadsheetExportView.as_view(), name='language-lines-export'),
    path('language-lines/bulk-delete/', BulkDeleteView.as_view(), name='language-lines-bulk-delete'),
]
