# legacy_claims/repository.py
"""
Store access for legacy clients and the accounts created from them.

Everything here runs on db.session; callers own commit/rollback except where
a function says otherwise (insert_if_absent and delete_unclaimed commit).
"""

import sqlalchemy as sa
from sqlalchemy import func, case, or_, and_
from sqlalchemy.exc import IntegrityError

from legacy_claims.extensions import db
from legacy_claims.models import LegacyClient, User


# -------------------------
# Legacy clients
# -------------------------
def find_by_box_id(box_id: str, for_update: bool = False):
    q = db.session.query(LegacyClient).filter(LegacyClient.box_id == box_id)
    if for_update:
        # row lock on Postgres; SQLite serializes writers anyway
        q = q.with_for_update()
    return q.first()


def insert_if_absent(box_id, full_name=None, email=None, registration_date=None):
    """
    Insert a legacy client unless the box id is already there.
    Returns (inserted, id). Existing rows are never touched.
    """
    existing = db.session.query(LegacyClient.id).filter(LegacyClient.box_id == box_id).first()
    if existing:
        return False, existing.id

    record = LegacyClient(
        box_id=box_id,
        full_name=full_name,
        email=email,
        registration_date=registration_date,
    )
    db.session.add(record)
    try:
        db.session.flush()
        new_id = record.id
        db.session.commit()
    except IntegrityError:
        # another batch inserted the same box id in between
        db.session.rollback()
        return False, None
    return True, new_id


def mark_claimed(record_id: int, user_id: int, now) -> bool:
    """
    Flip is_claimed false -> true. Returns False when the row was already
    claimed (or vanished), i.e. a concurrent claim won.
    """
    result = db.session.execute(
        sa.update(LegacyClient)
        .where(LegacyClient.id == record_id, LegacyClient.is_claimed == False)  # noqa: E712
        .values(is_claimed=True, claimed_by_user_id=user_id, claimed_at=now)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def delete_unclaimed(record_id: int) -> bool:
    result = db.session.execute(
        sa.delete(LegacyClient)
        .where(LegacyClient.id == record_id, LegacyClient.is_claimed == False)  # noqa: E712
        .execution_options(synchronize_session=False)
    )
    db.session.commit()
    return result.rowcount > 0


def _search_filters(search, claimed):
    filters = []
    words = (search or "").split()

    if len(words) == 1:
        pattern = f"%{words[0]}%"
        filters.append(or_(
            LegacyClient.box_id.ilike(pattern),
            LegacyClient.full_name.ilike(pattern),
            LegacyClient.email.ilike(pattern),
        ))
    elif len(words) > 1:
        # every word has to be somewhere in the name
        filters.append(and_(*[LegacyClient.full_name.ilike(f"%{w}%") for w in words]))

    if claimed is not None:
        filters.append(LegacyClient.is_claimed == claimed)

    return words, filters


def search_legacy_clients(search=None, claimed=None, page: int = 1, limit: int = 50):
    """
    Returns (rows, total); rows are (LegacyClient, claimed_by_name) tuples.

    One word: box/name/email match, exact box id first, then shorter box ids.
    Several words: all must be in the name, newest first.
    """
    words, filters = _search_filters(search, claimed)

    total = db.session.query(func.count(LegacyClient.id)).filter(*filters).scalar() or 0

    q = (
        db.session.query(LegacyClient, User.full_name.label("claimed_by_name"))
        .outerjoin(User, User.id == LegacyClient.claimed_by_user_id)
        .filter(*filters)
    )

    if len(words) == 1:
        q = q.order_by(
            case((LegacyClient.box_id.ilike(words[0]), 0), else_=1),
            func.length(LegacyClient.box_id),
            LegacyClient.box_id,
        )
    else:
        q = q.order_by(LegacyClient.created_at.desc(), LegacyClient.id.desc())

    rows = q.limit(limit).offset((page - 1) * limit).all()
    return rows, total


def legacy_counts() -> dict:
    total, claimed = db.session.query(
        func.count(LegacyClient.id),
        func.count(case((LegacyClient.is_claimed == True, 1))),  # noqa: E712
    ).one()
    total = int(total or 0)
    claimed = int(claimed or 0)
    return {"total": total, "claimed": claimed, "pending": total - claimed}


# -------------------------
# Accounts
# -------------------------
def find_user_by_email(email: str):
    return db.session.query(User).filter(User.email == email).first()


def create_user(**fields) -> User:
    """Adds and flushes so the id is known; raises IntegrityError on a taken email."""
    user = User(**fields)
    db.session.add(user)
    db.session.flush()
    return user
