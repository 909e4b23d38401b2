"""Job that imports language lines from the source translation files."""
import logging
from typing import Optional

from language_lines.conf import get_capabilities
from language_lines.lang_files import collect_lang_lines
from language_lines.sync import SyncReport, apply_lines

logger = logging.getLogger("language_lines.jobs")


class ImportFromLangFiles:
    """Scan the lang directory and upsert every (group, key) it defines.

    The job holds only its arguments, so it can be handed to a worker as is;
    ``dispatch_sync`` runs it in the current process.
    """

    def __init__(self, overwrite: bool = False, truncate: bool = False, lang_path: Optional[str] = None,
                 progress: bool = False):
        self.overwrite = bool(overwrite)
        self.truncate = bool(truncate)
        self.lang_path = lang_path or get_capabilities().lang_path
        self.progress = progress

    def __repr__(self) -> str:
        return (
            f"ImportFromLangFiles(overwrite={self.overwrite}, truncate={self.truncate}, "
            f"lang_path={self.lang_path!r})"
        )

    def handle(self) -> SyncReport:
        logger.info(f"Running {self!r}")
        # Parse everything first so a broken file aborts before the store is touched
        collected = collect_lang_lines(self.lang_path)
        lines = [(group, key, collected[(group, key)]) for group, key in sorted(collected)]
        return apply_lines(
            lines,
            overwrite=self.overwrite,
            truncate=self.truncate,
            progress=self.progress,
            description="Importing lang files",
        )

    @classmethod
    def dispatch_sync(cls, overwrite: bool = False, truncate: bool = False, **kwargs) -> SyncReport:
        return cls(overwrite=overwrite, truncate=truncate, **kwargs).handle()
