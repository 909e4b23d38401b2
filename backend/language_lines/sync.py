"""
Upsert logic shared by the spreadsheet import and the lang-file import.

Merge policy, per (group, key):

* no existing line: create it with the incoming mapping;
* ``overwrite=True``: replace the whole mapping, locales missing from the
  incoming values are cleared;
* ``overwrite=False``: fill gaps only. A non-empty incoming value is written
  when the locale is absent or empty on the existing line; existing
  translations are never changed.

Lines are applied in the order given, so the last value for a
(group, key, locale) wins.
"""
import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Optional, Tuple

from django.db import DatabaseError, transaction
from tqdm import tqdm

from language_lines.exceptions import StoreUnavailableError
from language_lines.models import LanguageLine

logger = logging.getLogger("language_lines.sync")

CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"
SKIPPED = "skipped"


@dataclass
class SyncReport:
    """Counters collected while applying a batch of lines."""
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: int = 0
    failed: int = 0
    deleted: int = 0

    def record(self, outcome: str) -> None:
        setattr(self, outcome, getattr(self, outcome) + 1)

    @property
    def changed(self) -> int:
        return self.created + self.updated + self.deleted

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"{self.created} created, {self.updated} updated, {self.unchanged} unchanged, "
            f"{self.skipped} skipped, {self.failed} failed, {self.deleted} deleted"
        )


def merge_text(existing: Dict[str, str], incoming: Dict[str, str], overwrite: bool) -> Dict[str, str]:
    """Return the mapping a line should hold after applying ``incoming``."""
    if overwrite:
        return dict(incoming)
    merged = dict(existing)
    for locale, value in incoming.items():
        if value and not merged.get(locale):
            merged[locale] = value
    return merged


def upsert_line(group: Optional[str], key: Optional[str], values: Dict[str, str], overwrite: bool) -> str:
    """Create or update one line; returns the outcome name."""
    group = group or ""
    key = key or ""
    if not key.strip():
        return SKIPPED

    line = LanguageLine.objects.filter(group=group, key=key).first()
    if line is None:
        LanguageLine.objects.create(group=group, key=key, text=dict(values))
        return CREATED

    current = dict(line.text or {})
    merged = merge_text(current, values, overwrite)
    if merged == current:
        return UNCHANGED
    line.text = merged
    line.save(update_fields=["text", "updated_at"])
    return UPDATED


def truncate_lines() -> int:
    """Delete every language line and return how many were removed."""
    deleted, _ = LanguageLine.objects.all().delete()
    logger.warning(f"Truncated language lines table ({deleted} rows deleted).")
    return deleted


def apply_lines(
    lines: Iterable[Tuple[str, str, Dict[str, str]]],
    overwrite: bool,
    truncate: bool = False,
    report: Optional[SyncReport] = None,
    progress: bool = False,
    description: str = "Importing language lines",
) -> SyncReport:
    """Apply (group, key, values) tuples in one transaction.

    A database failure rolls back the whole batch, truncation included, and
    is raised as ``StoreUnavailableError``.
    """
    report = report or SyncReport()
    try:
        with transaction.atomic():
            if truncate:
                report.deleted += truncate_lines()
            for group, key, values in tqdm(lines, desc=description, unit="line", disable=not progress):
                report.record(upsert_line(group, key, values, overwrite))
    except DatabaseError as e:
        logger.error(f"Language line store rejected the batch: {e}")
        raise StoreUnavailableError(f"Could not write language lines: {e}") from e
    logger.info(f"{description} finished: {report}")
    return report
