"""
Spreadsheet (.xlsx) export and import of language lines.

Sheet layout: a header row ``group | key | <locale> | <locale> ...`` followed
by one row per line. Empty cells stand for "no translation for that locale".
"""
import io
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import IllegalCharacterError, InvalidFileException

from language_lines.exceptions import SpreadsheetExportError, SpreadsheetFormatError
from language_lines.models import LanguageLine
from language_lines.sync import SyncReport, apply_lines

logger = logging.getLogger("language_lines.spreadsheets")

GROUP_COLUMN = "group"
KEY_COLUMN = "key"
SHEET_TITLE = "Language lines"
EXPORT_FILENAME = "export.xlsx"
XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
ACCEPTED_CONTENT_TYPES = (
    XLSX_CONTENT_TYPE,
    "application/vnd.ms-excel",
)


def known_locales(configured: Sequence[str] = (), lines: Iterable[LanguageLine] = ()) -> List[str]:
    """Configured locales first, then any other locale used by ``lines``, sorted."""
    locales = [code for code in dict.fromkeys(configured) if code]
    extra = set()
    for line in lines:
        extra.update(code for code in (line.text or {}) if code not in locales)
    return locales + sorted(extra)


def _append_literal(ws, values: Sequence[Any]) -> None:
    """Append a row whose strings are stored as text, never as formulas."""
    ws.append(values)
    for cell in ws[ws.max_row]:
        if isinstance(cell.value, str):
            cell.data_type = "s"


def build_workbook(configured_locales: Sequence[str] = ()) -> Workbook:
    """Build a workbook holding every language line in insertion order.

    Raises ``SpreadsheetExportError`` when a line holds characters that
    cannot be stored in a worksheet (XML control characters).
    """
    lines = list(LanguageLine.objects.order_by("id"))
    locales = known_locales(configured_locales, lines)

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    _append_literal(ws, [GROUP_COLUMN, KEY_COLUMN, *locales])
    for line in lines:
        text = line.text or {}
        try:
            _append_literal(ws, [line.group, line.key, *[text.get(locale) for locale in locales]])
        except IllegalCharacterError as e:
            logger.error(f"Cannot export language line {line.pk} ({line}): {e}")
            raise SpreadsheetExportError(
                f"Language line '{line}' (id {line.pk}) contains characters that cannot be written to a spreadsheet."
            ) from e
    logger.info(f"Exported {len(lines)} language lines with locales {locales}")
    return wb


def export_language_lines(destination: Union[str, io.IOBase, None] = None,
                          configured_locales: Sequence[str] = ()) -> Optional[bytes]:
    """Write the export to ``destination`` (path or binary file) or return it as bytes."""
    wb = build_workbook(configured_locales)
    if destination is not None:
        wb.save(destination)
        return None
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _cell_text(value: Any) -> Optional[str]:
    """Text of a group/key cell, kept verbatim; None when the cell is blank, ValueError when unusable."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"unexpected boolean cell {value!r}")
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"unexpected cell {value!r}")


def _parse_header(header: Optional[Tuple[Any, ...]]) -> Tuple[int, int, List[Tuple[int, str]]]:
    """Return (group_index, key_index, [(index, locale), ...])."""
    if not header:
        raise SpreadsheetFormatError("Spreadsheet has no header row.")
    names = [str(cell).strip() if cell is not None else "" for cell in header]
    lowered = [name.lower() for name in names]
    try:
        group_idx = lowered.index(GROUP_COLUMN)
        key_idx = lowered.index(KEY_COLUMN)
    except ValueError:
        raise SpreadsheetFormatError(
            f"Spreadsheet header must contain '{GROUP_COLUMN}' and '{KEY_COLUMN}' columns, got {names}."
        )
    locale_columns = [
        (idx, name) for idx, name in enumerate(names)
        if name and idx not in (group_idx, key_idx)
    ]
    return group_idx, key_idx, locale_columns


def read_spreadsheet(source: Any) -> Tuple[List[Tuple[str, str, Dict[str, str]]], int]:
    """Parse a workbook into (group, key, values) tuples.

    Returns the parsed lines and the number of malformed rows that were
    dropped. Rows with an empty key are kept so the caller counts them as
    skipped.
    """
    if hasattr(source, "seek"):
        source.seek(0)
    try:
        wb = load_workbook(source, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError, ValueError) as e:
        raise SpreadsheetFormatError(f"Cannot read spreadsheet: {e}") from e

    try:
        ws = wb.active
        rows: Iterator[Tuple[Any, ...]] = ws.iter_rows(values_only=True)
        group_idx, key_idx, locale_columns = _parse_header(next(rows, None))
        required = max(group_idx, key_idx)

        lines = []
        failed = 0
        for row_number, row in enumerate(rows, start=2):
            if row is None or all(cell is None or cell == "" for cell in row):
                continue
            if len(row) <= required:
                logger.warning(f"Row {row_number} is missing the group/key columns; skipping.")
                failed += 1
                continue
            try:
                group = _cell_text(row[group_idx]) or ""
                key = _cell_text(row[key_idx]) or ""
            except ValueError as e:
                logger.warning(f"Row {row_number} has an invalid group/key: {e}; skipping.")
                failed += 1
                continue
            values = {}
            for idx, locale in locale_columns:
                value = row[idx] if idx < len(row) else None
                if value is None:
                    continue
                values[locale] = value if isinstance(value, str) else str(value)
            lines.append((group, key, values))
    finally:
        wb.close()
    return lines, failed


def import_language_lines(source: Any, truncate: bool = False, overwrite: bool = True) -> SyncReport:
    """Import a workbook into the store.

    The workbook is parsed completely before anything is written, so a
    malformed file never truncates the table.
    """
    lines, failed = read_spreadsheet(source)
    report = SyncReport(failed=failed)
    logger.info(f"Importing {len(lines)} spreadsheet rows (truncate={truncate}, overwrite={overwrite})")
    return apply_lines(lines, overwrite=overwrite, truncate=truncate, report=report,
                       description="Importing spreadsheet")
