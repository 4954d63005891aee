# legacy_claims/services/legacy_claim.py
"""
Claiming a legacy box: a customer of the old system proves they own a box id
and gets a real account bound to it.

The whole claim is one unit of work on db.session. Nothing is committed until
the account exists AND the legacy row has been flipped; any failure rolls both
back. Two claims racing for the same box cannot both win: the row is locked
where the database supports it and the flip itself is conditional on
is_claimed still being false.
"""

from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError

from legacy_claims.extensions import db
from legacy_claims import repository
from legacy_claims.utils.names import names_match
from legacy_claims.utils.passwords import hash_password
from legacy_claims.utils.referrals import generate_unique_referral_code
from legacy_claims.utils.tokens import make_token
from .results import (
    ErrorKind, LegacyErr, ClaimOk, BoxHint, VerifyNameOk,
    BOX_NOT_FOUND, ALREADY_CLAIMED, DATA_MISMATCH, NAME_MISMATCH, EMAIL_EXISTS,
)

CLIENT_ROLE = "client"

MSG_MISSING_FIELDS = "Se requiere número de casillero, correo y contraseña"
MSG_BOX_NOT_FOUND = "Número de casillero no encontrado. Verifica que sea correcto o contacta a soporte."
MSG_ALREADY_CLAIMED = "Este casillero ya fue registrado. Si eres el dueño legítimo, contacta a soporte."
MSG_DATA_MISMATCH = "Los datos proporcionados no coinciden con el casillero. Verifica tu información."
MSG_EMAIL_EXISTS = "Este correo ya está registrado en el sistema."
MSG_BAD_FIELDS = "Nombre y teléfono deben ser texto"
MSG_INTERNAL = "Error interno del servidor"
MSG_WELCOME = "¡Bienvenido de vuelta! Tu casillero ha sido vinculado exitosamente."


def normalize_box_id(box_id) -> str:
    return (box_id or "").strip().upper()


def _is_text(value, required=True) -> bool:
    """JSON bodies can carry numbers or lists where we expect a string."""
    if value is None:
        return not required
    return isinstance(value, str) and (bool(value.strip()) or not required)


def identity_matches(record, email: str, full_name=None) -> bool:
    """Stored email equals the submitted one, or the first name checks out."""
    if record.email and email and record.email.lower() == email.lower():
        return True

    if record.full_name and full_name and full_name.strip():
        first_name = full_name.strip().split(" ")[0]
        return names_match(first_name, record.full_name)

    return False


def _user_payload(user) -> dict:
    return {
        "id": user.id,
        "fullName": user.full_name,
        "email": user.email,
        "role": user.role,
        "boxId": user.box_id,
    }


def _rollback_with(kind, message, code=None, **extra):
    db.session.rollback()
    return LegacyErr(kind=kind, message=message, code=code, extra=extra)


def claim_legacy_account(settings, box_id, email, new_password, phone=None, full_name=None):
    """
    Returns ClaimOk(user, token) or LegacyErr. Never leaves a half-made claim.
    """
    if not (_is_text(box_id) and _is_text(email) and isinstance(new_password, str) and new_password):
        return LegacyErr(ErrorKind.INVALID_INPUT, MSG_MISSING_FIELDS)
    if not (_is_text(phone, required=False) and _is_text(full_name, required=False)):
        return LegacyErr(ErrorKind.INVALID_INPUT, MSG_BAD_FIELDS)

    box_id = normalize_box_id(box_id)
    email = email.strip().lower()
    full_name = (full_name or "").strip() or None

    try:
        record = repository.find_by_box_id(box_id, for_update=True)
        if record is None:
            return _rollback_with(ErrorKind.NOT_FOUND, MSG_BOX_NOT_FOUND, BOX_NOT_FOUND)

        if record.is_claimed:
            return _rollback_with(ErrorKind.CONFLICT, MSG_ALREADY_CLAIMED, ALREADY_CLAIMED)

        if not identity_matches(record, email, full_name):
            return _rollback_with(ErrorKind.FORBIDDEN, MSG_DATA_MISMATCH, DATA_MISMATCH)

        if repository.find_user_by_email(email):
            return _rollback_with(ErrorKind.CONFLICT, MSG_EMAIL_EXISTS, EMAIL_EXISTS)

        user = repository.create_user(
            full_name=full_name or record.full_name,
            email=email,
            password=hash_password(new_password, settings.bcrypt_rounds),
            role=CLIENT_ROLE,
            box_id=box_id,
            phone=(phone or "").strip() or None,
            referral_code=generate_unique_referral_code(),
            verification_status="verified",
            created_at=datetime.utcnow(),
        )

        if not repository.mark_claimed(record.id, user.id, datetime.utcnow()):
            # someone else flipped it after we read it
            current_app.logger.warning("[LEGACY CLAIM] lost race for box %s", box_id)
            return _rollback_with(ErrorKind.CONFLICT, MSG_ALREADY_CLAIMED, ALREADY_CLAIMED)

        db.session.commit()

    except IntegrityError as e:
        db.session.rollback()
        if repository.find_user_by_email(email):
            return LegacyErr(ErrorKind.CONFLICT, MSG_EMAIL_EXISTS, EMAIL_EXISTS)
        current_app.logger.exception("[LEGACY CLAIM] integrity error for box %s", box_id)
        return LegacyErr(ErrorKind.INTERNAL, MSG_INTERNAL, detail=str(e))

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("[LEGACY CLAIM] failed for box %s", box_id)
        return LegacyErr(ErrorKind.INTERNAL, MSG_INTERNAL, detail=str(e))

    current_app.logger.info("[LEGACY CLAIM] box %s claimed by user %s", box_id, user.id)
    token = make_token(user, settings.jwt_secret, settings.token_ttl_days)
    return ClaimOk(user=_user_payload(user), token=token)


# -------------------------
# Read-only checks used by the app before claiming
# -------------------------
def _visible_prefix(word, limit=2):
    # never the whole word
    return word[:min(limit, len(word) - 1)]


def mask_email(email):
    """'juan.perez@mail.com' -> 'ju***@mail.com'; 'a@x.com' -> '***@x.com'"""
    if not email:
        return None
    local, _, domain = email.partition("@")
    return f"{_visible_prefix(local)}***@{domain}"


def mask_name(full_name):
    """'Juan Perez Lopez' -> 'Juan ***'; a one-word name shows at most two letters."""
    if not full_name or not full_name.strip():
        return None
    parts = full_name.strip().split(" ")
    if len(parts) == 1:
        return f"{_visible_prefix(parts[0])} ***"
    return f"{parts[0]} ***"


def verify_box_exists(box_id):
    box_id = normalize_box_id(box_id)
    if not box_id:
        return LegacyErr(ErrorKind.INVALID_INPUT, "Box ID requerido")

    record = repository.find_by_box_id(box_id)
    if record is None:
        return BoxHint(exists=False)

    return BoxHint(
        exists=True,
        is_claimed=bool(record.is_claimed),
        name_hint=mask_name(record.full_name),
        email_hint=mask_email(record.email),
    )


def verify_name(box_id, full_name):
    """
    Full-name check (all tokens, not just the first) before the claim form.
    On success hands back the stored contact data so the customer can fix it.
    """
    if not (_is_text(box_id) and _is_text(full_name)):
        return LegacyErr(ErrorKind.INVALID_INPUT, "Número de cliente y nombre son requeridos")
    box_id = normalize_box_id(box_id)

    record = repository.find_by_box_id(box_id)
    if record is None:
        return LegacyErr(
            ErrorKind.NOT_FOUND, "No encontramos este número de cliente", BOX_NOT_FOUND,
            extra={"exists": False},
        )

    if record.is_claimed:
        return LegacyErr(
            ErrorKind.CONFLICT,
            "Este número de cliente ya fue registrado. Si eres el dueño, contacta soporte.",
            ALREADY_CLAIMED,
            extra={"exists": True, "isClaimed": True},
        )

    if not names_match(full_name, record.full_name or ""):
        return LegacyErr(
            ErrorKind.FORBIDDEN, "El nombre no coincide con nuestros registros", NAME_MISMATCH,
            extra={"exists": True, "nameMatch": False},
        )

    return VerifyNameOk(client_data={
        "boxId": record.box_id,
        "fullName": record.full_name,
        "email": record.email or "",
        "registrationDate": record.registration_date.isoformat() if record.registration_date else None,
    })
