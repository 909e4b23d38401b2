# backend/language_lines/serializers.py
from rest_framework import serializers

from language_lines.models import LanguageLine


class LanguageLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = LanguageLine
        fields = ["id", "group", "key", "text", "updated_at"]
        read_only_fields = fields


class ImportLangFilesSerializer(serializers.Serializer):
    truncate = serializers.BooleanField(required=False, default=False)
    overwrite = serializers.BooleanField(required=False, default=False)


class SpreadsheetImportSerializer(serializers.Serializer):
    importfile = serializers.FileField()
    truncate = serializers.BooleanField(required=False, default=False)


class BulkDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
