from datetime import datetime, timedelta, timezone
import jwt

ALGORITHM = "HS256"


def make_token(user, secret: str, ttl_days: int = 7):
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "userId": user.id,
        "email": user.email,
        "role": user.role,
        "boxId": user.box_id,
        "iat": now,
        "exp": now + timedelta(days=ttl_days),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> dict:
    return jwt.decode(token, secret, algorithms=[ALGORITHM])
