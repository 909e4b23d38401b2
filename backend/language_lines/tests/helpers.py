"""Shared helpers for the language line tests."""
import io
import json
import os
from typing import Any, Dict, Iterable, Sequence

from openpyxl import Workbook, load_workbook

PANEL_ALL_ENABLED = {
    "LOCALES": ["en", "fr"],
    "LANG_PATH": "",
    "resource": {
        "form": {
            "edit_form_group": True,
            "edit_form_key": True,
            "edit_form_keyvalue": True,
            "add_form_keyvalue": True,
            "delete_form_keyvalue": True,
        },
        "allow_delete": True,
    },
    "lang-import": {"allow_overwrite": True, "allow_truncate": True},
    "excel": {"allow_export": True, "allow_import": True, "allow_all": True},
}

PANEL_ALL_DISABLED = {
    "LOCALES": ["en", "fr"],
    "LANG_PATH": "",
}


def panel_settings(base: Dict[str, Any] = None, **overrides) -> Dict[str, Any]:
    """Copy of a LANGUAGE_PANEL dict with top-level keys replaced."""
    options = json.loads(json.dumps(base if base is not None else PANEL_ALL_ENABLED))
    options.update(overrides)
    return options


def write_lang_file(root: str, relative: str, data: Any) -> str:
    """Write ``data`` as JSON to ``root/relative`` and return the path."""
    path = os.path.join(root, relative)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return path


def make_workbook(header: Sequence[Any], rows: Iterable[Sequence[Any]] = ()) -> io.BytesIO:
    """Build an in-memory .xlsx file."""
    wb = Workbook()
    ws = wb.active
    ws.append(list(header))
    for row in rows:
        ws.append(list(row))
    buffer = io.BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    return buffer


def read_workbook(content: bytes):
    """Return all rows of the first sheet as lists of values."""
    wb = load_workbook(io.BytesIO(content))
    return [list(row) for row in wb.active.iter_rows(values_only=True)]


def store_state():
    """Store contents as {(group, key): text}."""
    from language_lines.models import LanguageLine
    return {(line.group, line.key): line.text for line in LanguageLine.objects.all()}
