# legacy_claims/services/legacy_import.py
"""
Bulk import of the old system's client export into legacy_clients.

Lines are processed in file order, one at a time: a box id seen earlier in
the same file (or in an earlier import) wins, later copies count as
duplicates. A bad line is counted and skipped, never fatal for the batch.
"""

import os
import re
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

from flask import current_app
from werkzeug.utils import secure_filename

from legacy_claims.extensions import db
from legacy_claims import repository
from legacy_claims.utils.delimited import parse_line
from legacy_claims.utils.sniffer import FileSchema, sniff

DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})")

# what the old MySQL dump writes for NULL
NULL_BOX_IDS = {"\\N", "N", ""}
NULL_TEXT = {"\\N", ""}

SAMPLE_SNIPPET_CHARS = 100


@dataclass
class ImportResult:
    imported: int = 0
    duplicates: int = 0
    errors: int = 0
    total: int = 0
    sample_errors: list = field(default_factory=list)

    def as_stats(self) -> dict:
        return {
            "importados": self.imported,
            "duplicados": self.duplicates,
            "errores": self.errors,
            "total": self.total,
        }


def split_lines(text: str) -> list[str]:
    lines = (line.rstrip("\r") for line in text.split("\n"))
    return [line for line in lines if line.strip()]


def _cell(fields, idx) -> str:
    if idx is None or idx < 0 or idx >= len(fields):
        return ""
    return fields[idx] or ""


def _date_from_cell(value: str) -> Optional[date]:
    """'2021-05-03 00:00:00' -> date(2021, 5, 3); anything else -> None"""
    if not value:
        return None
    m = DATE_PREFIX.match(value)
    if not m:
        return None
    return date.fromisoformat(m.group(1))


def extract_registration_date(fields, date_index: int) -> Optional[date]:
    if date_index >= 0:
        found = _date_from_cell(_cell(fields, date_index))
        if found:
            return found

    # legacy layout, or the date column was empty: last date-looking cell wins
    for value in reversed(fields):
        found = _date_from_cell(value)
        if found:
            return found
    return None


def _clean_text(value: str) -> Optional[str]:
    if value is None or value in NULL_TEXT:
        return None
    return value.strip() or None


def _import_line(fields, schema: FileSchema) -> str:
    box_id = _cell(fields, schema.box_id_index)
    full_name = _cell(fields, schema.full_name_index)
    email = _cell(fields, schema.email_index)
    registration_date = extract_registration_date(fields, schema.date_index)

    if box_id.strip() in NULL_BOX_IDS:
        return "invalid"

    clean_email = _clean_text(email)
    if clean_email:
        clean_email = clean_email.lower()

    inserted, _ = repository.insert_if_absent(
        box_id=box_id.strip().upper(),
        full_name=_clean_text(full_name),
        email=clean_email,
        registration_date=registration_date,
    )
    return "imported" if inserted else "duplicate"


def import_legacy_text(text: str, settings, source_name: str = "") -> ImportResult:
    lines = split_lines(text)
    result = ImportResult(total=len(lines))
    if not lines:
        return result

    schema = sniff(lines[0], settings.layout)
    current_app.logger.info(
        "[LEGACY IMPORT] %s: delimiter=%r header=%s box=%s name=%s email=%s date=%s",
        source_name or "<text>", schema.delimiter, schema.has_header,
        schema.box_id_index, schema.full_name_index, schema.email_index, schema.date_index,
    )

    for line in lines[schema.start_index:]:
        fields = parse_line(line, schema.delimiter)
        try:
            outcome = _import_line(fields, schema)
        except Exception as e:
            db.session.rollback()
            result.errors += 1
            if len(result.sample_errors) < settings.max_sample_errors:
                result.sample_errors.append(f"Línea con error: {line[:SAMPLE_SNIPPET_CHARS]}...")
            current_app.logger.warning("[LEGACY IMPORT] line skipped: %s", e)
            continue

        if outcome == "imported":
            result.imported += 1
        elif outcome == "duplicate":
            result.duplicates += 1
        else:
            result.errors += 1

    current_app.logger.info(
        "[LEGACY IMPORT] %s done: imported=%s duplicates=%s errors=%s total=%s",
        source_name or "<text>", result.imported, result.duplicates, result.errors, result.total,
    )
    return result


def read_export(path) -> str:
    # utf-8-sig drops the BOM Excel likes to add
    with open(path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
        return f.read()


def import_legacy_file(path, settings, source_name: str = "") -> ImportResult:
    return import_legacy_text(read_export(path), settings, source_name or os.path.basename(str(path)))


@contextmanager
def saved_upload(file_storage, folder):
    """Save an uploaded file under a private name; it is deleted on every exit path."""
    folder = Path(folder)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"{uuid.uuid4().hex}_{secure_filename(file_storage.filename or 'upload')}"
    try:
        file_storage.save(str(path))
        yield path
    finally:
        if path.exists():
            path.unlink()
