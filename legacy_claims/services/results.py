# legacy_claims/services/results.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


HTTP_STATUS = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 400,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INTERNAL: 500,
}

# machine codes the apps branch on
BOX_NOT_FOUND = "BOX_NOT_FOUND"
ALREADY_CLAIMED = "ALREADY_CLAIMED"
DATA_MISMATCH = "DATA_MISMATCH"
NAME_MISMATCH = "NAME_MISMATCH"
EMAIL_EXISTS = "EMAIL_EXISTS"


@dataclass(frozen=True)
class LegacyErr:
    kind: ErrorKind
    message: str
    code: Optional[str] = None
    detail: Optional[str] = None  # operator-only diagnostics
    extra: dict = field(default_factory=dict)

    ok = False

    @property
    def status(self) -> int:
        return HTTP_STATUS[self.kind]


@dataclass(frozen=True)
class ClaimOk:
    user: dict
    token: str

    ok = True


@dataclass(frozen=True)
class BoxHint:
    exists: bool
    is_claimed: Optional[bool] = None
    name_hint: Optional[str] = None
    email_hint: Optional[str] = None

    ok = True

    def as_dict(self) -> dict:
        if not self.exists:
            return {"exists": False}
        return {
            "exists": True,
            "isClaimed": self.is_claimed,
            "nameHint": self.name_hint,
            "emailHint": self.email_hint,
        }


@dataclass(frozen=True)
class VerifyNameOk:
    client_data: dict

    ok = True
