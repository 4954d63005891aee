# legacy_claims/utils/referrals.py
import random
import string
import time

from legacy_claims.extensions import db
from legacy_claims.models import User

REFERRAL_PREFIX = "EX"
_BASE36 = string.digits + string.ascii_uppercase


def _base36(n: int) -> str:
    out = ""
    while n:
        n, r = divmod(n, 36)
        out = _BASE36[r] + out
    return out or "0"


def generate_unique_referral_code(suffix_length: int = 3) -> str:
    """
    Referral code for a claimed account, e.g. 'EXM3K9ZQ1A7F'.
    Millisecond timestamp plus a random suffix; re-drawn if already taken.
    """
    chars = string.ascii_uppercase + string.digits

    while True:
        stamp = _base36(int(time.time() * 1000))
        code = REFERRAL_PREFIX + stamp + ''.join(random.choices(chars, k=suffix_length))
        existing = db.session.query(User.id).filter_by(referral_code=code).first()
        if not existing:
            return code
