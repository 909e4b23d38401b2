"""
Read source translation files from disk.

Layout under the lang directory::

    lang/en.json                  -> "single" lines (group "")
    lang/en/validation.json       -> group "validation"
    lang/en/admin/users.json      -> group "admin/users"

Nested objects inside a file are flattened to dot-separated keys.
"""
import json
import logging
import os
from typing import Any, Dict, Iterator, List, Tuple

from language_lines.exceptions import SourceFileError

logger = logging.getLogger("language_lines.lang_files")

LANG_FILE_EXTENSION = ".json"

LineKey = Tuple[str, str]


def flatten(data: Any, prefix: str = "") -> Iterator[Tuple[str, str]]:
    """Yield (dotted_key, text) pairs from a nested mapping."""
    if isinstance(data, dict):
        items = data.items()
    elif isinstance(data, list):
        items = enumerate(data)
    else:
        yield prefix, "" if data is None else str(data)
        return
    for key, value in items:
        dotted = f"{prefix}.{key}" if prefix else str(key)
        yield from flatten(value, dotted)


def load_lang_file(path: str) -> Dict[str, Any]:
    """Load one JSON translation file, which must contain an object."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceFileError(f"Cannot read translation file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SourceFileError(f"Translation file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SourceFileError(f"Translation file {path} must contain a JSON object.")
    return data


def discover_lang_files(lang_path: str) -> List[Tuple[str, str, str]]:
    """Return (locale, group, path) for every source file, sorted by locale then group."""
    if not lang_path or not os.path.isdir(lang_path):
        raise SourceFileError(f"Lang directory not found: {lang_path!r}")

    # locale -> [(group, path)]; the flat file sorts first because its group is ""
    by_locale: Dict[str, List[Tuple[str, str]]] = {}
    for entry in os.listdir(lang_path):
        full = os.path.join(lang_path, entry)
        if os.path.isfile(full) and entry.endswith(LANG_FILE_EXTENSION):
            by_locale.setdefault(entry[: -len(LANG_FILE_EXTENSION)], []).append(("", full))
        elif os.path.isdir(full):
            group_files = by_locale.setdefault(entry, [])
            for root, _dirs, files in os.walk(full):
                for name in files:
                    if not name.endswith(LANG_FILE_EXTENSION):
                        continue
                    rel = os.path.relpath(os.path.join(root, name), full)
                    group = rel[: -len(LANG_FILE_EXTENSION)].replace(os.sep, "/")
                    group_files.append((group, os.path.join(root, name)))

    return [
        (locale, group, path)
        for locale in sorted(by_locale)
        for group, path in sorted(by_locale[locale])
    ]


def collect_lang_lines(lang_path: str) -> Dict[LineKey, Dict[str, str]]:
    """Union of per-locale values for every (group, key) found under ``lang_path``.

    Files are read locale by locale, each locale's flat file first and then its
    group files by name; a later value for the same
    (group, key, locale) replaces an earlier one.
    """
    lines: Dict[LineKey, Dict[str, str]] = {}
    files = discover_lang_files(lang_path)
    for locale, group, path in files:
        data = load_lang_file(path)
        count = 0
        for key, value in flatten(data):
            if not key:
                continue
            lines.setdefault((group, key), {})[locale] = value
            count += 1
        logger.debug(f"Read {count} keys for locale '{locale}' group '{group or '*'}' from {path}")
    logger.info(f"Collected {len(lines)} language lines from {len(files)} files in {lang_path}")
    return lines
