# legacy_claims/utils/__init__.py
# Pure helpers + small DB helpers shared by services and scripts

from .delimited import parse_line, serialize_line
from .sniffer import FileSchema, sniff
from .names import names_match, normalize_text

# what the old system's export tool can produce
ALLOWED_EXTENSIONS = {'csv', 'tsv', 'txt'}
