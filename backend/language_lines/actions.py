"""
Operator actions on the language line screen.

Every action checks its capability flag before doing anything and returns an
``ActionResult`` describing what the operator should be told; the admin turns
it into a message and the API into a response body.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from language_lines.conf import PanelCapabilities
from language_lines.exceptions import (
    ActionDisabledError,
    LanguagePanelError,
    SourceFileError,
    SpreadsheetExportError,
    SpreadsheetFormatError,
    StoreUnavailableError,
)
from language_lines.jobs import ImportFromLangFiles
from language_lines.spreadsheets import export_language_lines, import_language_lines
from language_lines.sync import SyncReport

logger = logging.getLogger("language_lines.actions")

INFO = "info"
SUCCESS = "success"
ERROR = "error"

IMPORT_LANG_FILES = "import_lang_files"
IMPORT_SPREADSHEET = "import_spreadsheet"
EXPORT_SPREADSHEET = "export_spreadsheet"
DELETE_LINES = "delete_lines"


@dataclass
class ActionResult:
    """Outcome of one action, including the notifications to show."""
    action: str
    ok: bool
    level: str
    message: str
    report: Optional[SyncReport] = None
    error: Optional[LanguagePanelError] = None
    content: Optional[bytes] = None
    notifications: List[Dict[str, str]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "status": SUCCESS if self.ok else ERROR,
            "action": self.action,
            "message": self.message,
        }
        if self.report is not None:
            data.update(self.report.as_dict())
        return data


def _notify(level: str, message: str) -> Dict[str, str]:
    return {"level": level, "message": message}


def _failed(action: str, processing: str, error: LanguagePanelError) -> ActionResult:
    logger.error(f"Action '{action}' failed: {error}")
    message = str(error)
    return ActionResult(
        action=action,
        ok=False,
        level=ERROR,
        message=message,
        error=error,
        notifications=[_notify(INFO, processing), _notify(ERROR, message)],
    )


def _require(enabled: bool, action: str) -> None:
    if not enabled:
        logger.warning(f"Refused disabled action '{action}'.")
        raise ActionDisabledError(action)


def import_from_lang_files(capabilities: PanelCapabilities, truncate: bool = False,
                           overwrite: bool = False) -> ActionResult:
    """Run the lang-file import job; toggles the operator cannot see are ignored."""
    truncate = bool(truncate) and capabilities.allow_truncate
    overwrite = bool(overwrite) and capabilities.allow_overwrite
    processing = "Processing lang files..."
    try:
        report = ImportFromLangFiles.dispatch_sync(
            overwrite=overwrite,
            truncate=truncate,
            lang_path=capabilities.lang_path,
        )
    except (SourceFileError, StoreUnavailableError) as e:
        return _failed(IMPORT_LANG_FILES, processing, e)
    message = f"Done processing lang files: {report}."
    return ActionResult(
        action=IMPORT_LANG_FILES,
        ok=True,
        level=SUCCESS,
        message=message,
        report=report,
        notifications=[_notify(INFO, processing), _notify(SUCCESS, message)],
    )


def import_spreadsheet(capabilities: PanelCapabilities, upload: Any, truncate: bool = False) -> ActionResult:
    """Import an uploaded workbook, updating existing lines with its values."""
    _require(capabilities.can_import_spreadsheet, IMPORT_SPREADSHEET)
    truncate = bool(truncate) and capabilities.allow_truncate
    processing = "Processing import file..."
    try:
        report = import_language_lines(upload, truncate=truncate, overwrite=True)
    except (SpreadsheetFormatError, StoreUnavailableError) as e:
        return _failed(IMPORT_SPREADSHEET, processing, e)
    message = f"Done processing import file: {report}."
    level = SUCCESS if not report.failed else "warning"
    return ActionResult(
        action=IMPORT_SPREADSHEET,
        ok=True,
        level=level,
        message=message,
        report=report,
        notifications=[_notify(INFO, processing), _notify(level, message)],
    )


def export_spreadsheet(capabilities: PanelCapabilities) -> ActionResult:
    """Build the xlsx export; the bytes are returned in ``content``."""
    _require(capabilities.can_export, EXPORT_SPREADSHEET)
    try:
        content = export_language_lines(configured_locales=capabilities.locales)
    except SpreadsheetExportError as e:
        return _failed(EXPORT_SPREADSHEET, "Preparing export...", e)
    return ActionResult(
        action=EXPORT_SPREADSHEET,
        ok=True,
        level=SUCCESS,
        message="Export ready.",
        content=content,
    )


def delete_lines(capabilities: PanelCapabilities, queryset) -> ActionResult:
    """Bulk-delete the selected lines."""
    _require(capabilities.allow_delete, DELETE_LINES)
    deleted, _ = queryset.delete()
    logger.info(f"Deleted {deleted} language lines.")
    message = f"Deleted {deleted} language lines."
    return ActionResult(
        action=DELETE_LINES,
        ok=True,
        level=SUCCESS,
        message=message,
        report=SyncReport(deleted=deleted),
        notifications=[_notify(SUCCESS, message)],
    )
