import bcrypt


def hash_password(plain: str, rounds: int = 10) -> bytes:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=rounds))


def verify_password(stored_pw, provided_plain: str) -> bool:
    """bcrypt hash stored as bytes, memoryview (Postgres) or text."""
    if stored_pw is None:
        return False

    if isinstance(stored_pw, memoryview):
        stored_pw = stored_pw.tobytes()
    if isinstance(stored_pw, str):
        stored_pw = stored_pw.encode("utf-8")

    try:
        return bcrypt.checkpw(provided_plain.encode("utf-8"), stored_pw)
    except ValueError:
        # not a bcrypt hash
        return False
