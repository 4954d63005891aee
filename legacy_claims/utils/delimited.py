# legacy_claims/utils/delimited.py
"""
Line tokenizer for the tab/comma separated exports of the old system.

The exports are not valid RFC 4180 CSV (quotes appear mid-field, rows are
ragged, a few lines have unbalanced quotes), so the csv module rejects or
mangles too many of them. This scanner never raises.
"""

QUOTE = '"'


def _finish_field(raw: str) -> str:
    val = raw.strip()
    if len(val) >= 2 and val.startswith(QUOTE) and val.endswith(QUOTE):
        val = val[1:-1]
    return val


def parse_line(line: str, delimiter: str = "\t") -> list[str]:
    """
    Split one line into fields.

    - '"' toggles quoting; '""' inside quotes is one literal quote
    - the delimiter only splits outside quotes
    - each field is trimmed and loses one outer pair of quotes
    - unbalanced quotes just run to the end of the line
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            fields.append(_finish_field("".join(current)))
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append(_finish_field("".join(current)))
    return fields


def serialize_line(fields, delimiter: str = "\t") -> str:
    """
    Inverse of parse_line for trimmed fields that are not themselves wrapped
    in quotes (parse_line always strips one outer pair).
    """
    out = []
    for value in fields:
        value = "" if value is None else str(value)
        if delimiter in value or QUOTE in value:
            value = QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
        out.append(value)
    return delimiter.join(out)
