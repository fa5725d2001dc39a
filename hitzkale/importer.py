# hitzkale/importer.py
"""
Offline importer: append rows from a spreadsheet export (CSV) to one of the
static JSON word lists.

 - columns default to `basque` (word) and `spanish` (translation)
 - values are trimmed; rows missing either value are skipped
 - words already in the data file are skipped (exact, after trimming),
   duplicates inside the CSV too
 - new ids continue from the highest integer id in the file

Not used at search time.
"""

from __future__ import annotations

import csv
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from hitzkale.core.errors import DatasetImportError
from hitzkale.core.models import RawEntry

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _load_data_file(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            rows = json.load(f)
    except (OSError, ValueError) as e:
        raise DatasetImportError(f"cannot read {path}: {e}") from e
    if not isinstance(rows, list):
        raise DatasetImportError(f"{path} must hold a JSON list of entries")
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            raise DatasetImportError(f"{path}[{i}]: expected an object, got {type(row).__name__}")
    return rows


def _read_csv(path: Path, word_column: str, translation_column: str) -> List[Dict[str, str]]:
    try:
        with open(path, "r", newline="", encoding="utf-8-sig") as fh:
            reader = csv.DictReader(fh)
            columns = reader.fieldnames or []
            missing = [c for c in (word_column, translation_column) if c not in columns]
            if missing:
                raise DatasetImportError(f"{path}: missing column(s) {', '.join(missing)}")
            return list(reader)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise DatasetImportError(f"cannot read {path}: {e}") from e


def plan_import(
    existing: List[Dict[str, Any]],
    rows: List[Dict[str, str]],
    word_column: str = "basque",
    translation_column: str = "spanish",
) -> Tuple[List[RawEntry], int]:
    """Return (new entries, skipped row count) without touching disk."""
    seen = {str(e.get("word", "")).strip() for e in existing}
    int_ids = [e["id"] for e in existing if isinstance(e.get("id"), int) and not isinstance(e.get("id"), bool)]
    next_id = max(int_ids, default=0) + 1

    new_entries: List[RawEntry] = []
    skipped = 0
    for row in rows:
        word = (row.get(word_column) or "").strip()
        translation = (row.get(translation_column) or "").strip()
        if not word or not translation or word in seen:
            skipped += 1
            continue
        new_entries.append({"id": next_id, "word": word, "translation": translation})
        seen.add(word)
        next_id += 1
    return new_entries, skipped


def import_csv(
    csv_path: PathLike,
    data_path: PathLike,
    word_column: str = "basque",
    translation_column: str = "spanish",
    dry_run: bool = False,
) -> List[RawEntry]:
    """Append new CSV rows to `data_path`; return what was (or would be) added."""
    csv_path, data_path = Path(csv_path), Path(data_path)
    if not csv_path.exists():
        raise DatasetImportError(f"CSV file not found: {csv_path}")

    existing = _load_data_file(data_path)
    rows = _read_csv(csv_path, word_column, translation_column)
    new_entries, skipped = plan_import(existing, rows, word_column, translation_column)
    logger.info("import %s -> %s: %d new, %d skipped", csv_path, data_path, len(new_entries), skipped)

    if not new_entries or dry_run:
        return new_entries

    tmp_path = data_path.with_suffix(data_path.suffix + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(existing + new_entries, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_path, data_path)
    except OSError as e:
        raise DatasetImportError(f"cannot write {data_path}: {e}") from e
    return new_entries
