"""Errors raised by the language line import/export operations."""


class LanguagePanelError(Exception):
    """Base class for every failure surfaced to the operator."""


class SourceFileError(LanguagePanelError):
    """A source translation file is missing, unreadable or not a JSON object."""


class SpreadsheetFormatError(LanguagePanelError):
    """The uploaded workbook cannot be read or its header row is invalid."""


class StoreUnavailableError(LanguagePanelError):
    """The database rejected a write; the whole batch has been rolled back."""


class ActionDisabledError(LanguagePanelError):
    """An action was invoked while its configuration flag is off."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"The '{action}' action is disabled.")


class SpreadsheetExportError(LanguagePanelError):
    """A language line cannot be written to the export workbook."""
