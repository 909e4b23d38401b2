"""
Capability flags for the language line screen.

``settings.LANGUAGE_PANEL`` is read once into an immutable ``PanelCapabilities``
value which is then passed to the admin, the API views and the action layer.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from django.conf import settings


def _lookup(options: Dict[str, Any], dotted: str, default: Any = False) -> Any:
    """Resolve a dotted name such as ``resource.form.edit_form_key``."""
    node: Any = options
    for part in dotted.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


@dataclass(frozen=True)
class PanelCapabilities:
    """Which affordances of the language line screen are enabled."""
    edit_form_group: bool = False
    edit_form_key: bool = False
    edit_form_keyvalue: bool = False
    add_form_keyvalue: bool = False
    delete_form_keyvalue: bool = False
    allow_delete: bool = False
    allow_overwrite: bool = False
    allow_truncate: bool = False
    allow_export: bool = False
    allow_import: bool = False
    allow_excel: bool = False
    locales: Tuple[str, ...] = field(default_factory=lambda: ("en",))
    lang_path: str = ""

    @classmethod
    def from_settings(cls, options: Optional[Dict[str, Any]] = None) -> "PanelCapabilities":
        """Build capabilities from ``settings.LANGUAGE_PANEL`` (or an explicit dict)."""
        if options is None:
            options = getattr(settings, "LANGUAGE_PANEL", {})
        locales = tuple(
            code.strip() for code in options.get("LOCALES", ("en",)) if code and code.strip()
        )
        return cls(
            edit_form_group=bool(_lookup(options, "resource.form.edit_form_group")),
            edit_form_key=bool(_lookup(options, "resource.form.edit_form_key")),
            edit_form_keyvalue=bool(_lookup(options, "resource.form.edit_form_keyvalue")),
            add_form_keyvalue=bool(_lookup(options, "resource.form.add_form_keyvalue")),
            delete_form_keyvalue=bool(_lookup(options, "resource.form.delete_form_keyvalue")),
            allow_delete=bool(_lookup(options, "resource.allow_delete")),
            allow_overwrite=bool(_lookup(options, "lang-import.allow_overwrite")),
            allow_truncate=bool(_lookup(options, "lang-import.allow_truncate")),
            allow_export=bool(_lookup(options, "excel.allow_export")),
            allow_import=bool(_lookup(options, "excel.allow_import")),
            allow_excel=bool(_lookup(options, "excel.allow_all")),
            locales=locales,
            lang_path=str(options.get("LANG_PATH", "")),
        )

    @property
    def can_export(self) -> bool:
        # The spreadsheet actions sit in a group that is hidden unless allow_all is on
        return self.allow_excel and self.allow_export

    @property
    def can_import_spreadsheet(self) -> bool:
        return self.allow_excel and self.allow_import


def get_capabilities() -> PanelCapabilities:
    return PanelCapabilities.from_settings()
