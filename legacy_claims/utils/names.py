# legacy_claims/utils/names.py
"""
Loose name comparison used to let a customer prove they own a legacy box.

This is a usability check, not identity proof: owning the box number and the
one-time claim are what actually protect the record.
"""

import re
import unicodedata
from dataclasses import dataclass

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WS = re.compile(r"\s+")


@dataclass(frozen=True)
class NameMatchPolicy:
    # tuned by hand on real claims; keep as-is unless support asks otherwise
    min_token_matches: int = 2
    min_matches_with_first_name: int = 1


DEFAULT_POLICY = NameMatchPolicy()


def normalize_text(text: str) -> str:
    """'  José-Luis PÉREZ ' -> 'joseluis perez'"""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM.sub("", stripped).strip()


def name_tokens(text: str) -> list[str]:
    return [w for w in _WS.split(normalize_text(text)) if len(w) > 1]


def _related(a: str, b: str) -> bool:
    return a == b or a in b or b in a


def count_matching_tokens(candidate_tokens, stored_tokens) -> int:
    matches = 0
    for word in candidate_tokens:
        if any(_related(word, stored) for stored in stored_tokens):
            matches += 1
    return matches


def names_match(candidate: str, stored: str, policy: NameMatchPolicy = DEFAULT_POLICY) -> bool:
    candidate_tokens = name_tokens(candidate)
    stored_tokens = name_tokens(stored)
    if not candidate_tokens or not stored_tokens:
        return False

    matches = count_matching_tokens(candidate_tokens, stored_tokens)
    if matches >= policy.min_token_matches:
        return True

    first_name_ok = _related(candidate_tokens[0], stored_tokens[0])
    return matches >= policy.min_matches_with_first_name and first_name_ok
