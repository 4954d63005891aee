# legacy_claims/services/legacy_admin.py
import math

from legacy_claims import repository

MAX_PAGE_SIZE = 500


def _iso(value):
    return value.isoformat() if value else None


def legacy_client_to_dict(client, claimed_by_name=None) -> dict:
    return {
        "id": client.id,
        "box_id": client.box_id,
        "full_name": client.full_name,
        "email": client.email,
        "registration_date": _iso(client.registration_date),
        "is_claimed": bool(client.is_claimed),
        "claimed_by_user_id": client.claimed_by_user_id,
        "claimed_at": _iso(client.claimed_at),
        "created_at": _iso(client.created_at),
        "claimed_by_name": claimed_by_name,
    }


def _as_int(value, default, minimum=1):
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return max(n, minimum)


def parse_claimed_filter(raw):
    """'true'/'false' from the query string -> bool; anything else -> no filter"""
    if raw is None:
        return None
    raw = str(raw).strip().lower()
    if raw in ("true", "1", "yes"):
        return True
    if raw in ("false", "0", "no"):
        return False
    return None


def list_legacy_clients(page=1, limit=50, search=None, claimed=None) -> dict:
    page = _as_int(page, 1)
    limit = min(_as_int(limit, 50), MAX_PAGE_SIZE)
    search = (search or "").strip() or None

    rows, total = repository.search_legacy_clients(search=search, claimed=claimed, page=page, limit=limit)

    return {
        "clients": [legacy_client_to_dict(client, name) for client, name in rows],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": math.ceil(total / limit) if limit else 0,
        },
    }


def legacy_stats() -> dict:
    return repository.legacy_counts()


def delete_legacy_client(client_id) -> bool:
    """Only unclaimed rows can go; a claimed one backs a live account."""
    return repository.delete_unclaimed(client_id)
