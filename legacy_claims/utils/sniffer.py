# legacy_claims/utils/sniffer.py

from dataclasses import dataclass
from typing import Optional

from legacy_claims.config import LegacyLayout
from .delimited import parse_line

# any of these in the first line means it is a header row
HEADER_KEYWORDS = ("casillero", "box_id", "nombre", "email", "e-mail", "correo")

BOX_ID_SYNONYMS = ("casillero", "box_id", "box")
FULL_NAME_SYNONYMS = ("nombre", "name")
EMAIL_SYNONYMS = ("correo", "email", "mail")
DATE_SYNONYMS = ("fecha", "date", "alta")

# more columns than this and no header: the wide export of the old system
LEGACY_MIN_COLUMNS = 10


@dataclass(frozen=True)
class FileSchema:
    delimiter: str
    has_header: bool
    box_id_index: int
    full_name_index: int
    email_index: int
    date_index: int  # -1: look for a date anywhere in the row

    @property
    def start_index(self) -> int:
        return 1 if self.has_header else 0


def _find_column(headers, synonyms) -> Optional[int]:
    for idx, cell in enumerate(headers):
        if any(word in cell for word in synonyms):
            return idx
    return None


def detect_delimiter(first_line: str) -> str:
    return "\t" if "\t" in first_line else ","


def sniff(first_line: str, layout: Optional[LegacyLayout] = None) -> FileSchema:
    """Guess delimiter, header and column roles from the first line of a file."""
    layout = layout or LegacyLayout()
    first_line = first_line or ""

    delimiter = detect_delimiter(first_line)
    cells = parse_line(first_line, delimiter)
    lowered = first_line.lower()
    has_header = any(word in lowered for word in HEADER_KEYWORDS)

    box_idx, name_idx, email_idx, date_idx = 0, 1, 2, 3

    if has_header:
        headers = [c.lower().strip() for c in cells]
        found = _find_column(headers, BOX_ID_SYNONYMS)
        if found is not None:
            box_idx = found
        found = _find_column(headers, FULL_NAME_SYNONYMS)
        if found is not None:
            name_idx = found
        found = _find_column(headers, EMAIL_SYNONYMS)
        if found is not None:
            email_idx = found
        found = _find_column(headers, DATE_SYNONYMS)
        if found is not None:
            date_idx = found
    elif len(cells) > LEGACY_MIN_COLUMNS:
        box_idx = layout.box_id_index
        name_idx = layout.full_name_index
        email_idx = layout.email_index
        date_idx = layout.date_index

    return FileSchema(
        delimiter=delimiter,
        has_header=has_header,
        box_id_index=box_idx,
        full_name_index=name_idx,
        email_index=email_idx,
        date_index=date_idx,
    )
