# backend/language_lines/views.py
"""
API views exposing the language line screen's actions.

Each view checks the capability flags through the action layer; a disabled
action answers 403 and never runs.
"""
from django.http import HttpResponse
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from language_lines import actions
from language_lines.conf import get_capabilities
from language_lines.exceptions import ActionDisabledError, StoreUnavailableError
from language_lines.models import LanguageLine
from language_lines.serializers import (
    BulkDeleteSerializer,
    ImportLangFilesSerializer,
    LanguageLineSerializer,
    SpreadsheetImportSerializer,
)
from language_lines.spreadsheets import EXPORT_FILENAME, XLSX_CONTENT_TYPE


def disabled_response(error: ActionDisabledError) -> Response:
    return Response({"status": "error", "message": str(error)}, status=status.HTTP_403_FORBIDDEN)


def result_response(result: actions.ActionResult) -> Response:
    """Map an action result to a response; store failures are 503, bad input 400."""
    if result.ok:
        return Response(result.as_dict())
    if isinstance(result.error, StoreUnavailableError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response(result.as_dict(), status=code)


class LanguageLineListView(ListAPIView):
    """List language lines, optionally narrowed to one group."""
    serializer_class = LanguageLineSerializer

    def get_queryset(self):
        queryset = LanguageLine.objects.order_by("id")
        group = self.request.query_params.get("group")
        if group is not None:
            queryset = queryset.filter(group=group)
        return queryset


class ImportLangFilesView(APIView):
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def post(self, request):
        """Run the lang-file import synchronously and report the counts."""
        serializer = ImportLangFilesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = actions.import_from_lang_files(get_capabilities(), **serializer.validated_data)
        return result_response(result)


class SpreadsheetImportView(APIView):
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        """Import an uploaded .xlsx file."""
        caps = get_capabilities()
        if not caps.can_import_spreadsheet:
            return disabled_response(ActionDisabledError(actions.IMPORT_SPREADSHEET))
        serializer = SpreadsheetImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = actions.import_spreadsheet(
            caps,
            serializer.validated_data["importfile"],
            truncate=serializer.validated_data["truncate"],
        )
        return result_response(result)


class SpreadsheetExportView(APIView):
    def get(self, request):
        """Download every language line as an .xlsx file."""
        try:
            result = actions.export_spreadsheet(get_capabilities())
        except ActionDisabledError as e:
            return disabled_response(e)
        if not result.ok:
            return result_response(result)
        response = HttpResponse(result.content, content_type=XLSX_CONTENT_TYPE)
        response["Content-Disposition"] = f'attachment; filename="{EXPORT_FILENAME}"'
        return response


class BulkDeleteView(APIView):
    def post(self, request):
        """Delete the language lines whose ids are given."""
        serializer = BulkDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        queryset = LanguageLine.objects.filter(pk__in=serializer.validated_data["ids"])
        try:
            result = actions.delete_lines(get_capabilities(), queryset)
        except ActionDisabledError as e:
            return disabled_response(e)
        return result_response(result)
