from flask import request, jsonify, current_app
from datetime import datetime

from legacy_claims.models import User
from legacy_claims.extensions import db
from legacy_claims.utils.passwords import verify_password
from legacy_claims.utils.tokens import make_token
from . import api_bp
from .utils import legacy_settings


@api_bp.post("/auth/login")
def api_login():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password_plain = data.get("password") or ""

    if not email or not password_plain:
        return jsonify({"ok": False, "error": "Email and password are required."}), 400

    user = User.query.filter_by(email=email).first()
    if not user or not user.password:
        return jsonify({"ok": False, "error": "Invalid email or password."}), 401

    if not verify_password(user.password, password_plain):
        return jsonify({"ok": False, "error": "Invalid email or password."}), 401

    try:
        user.last_login = datetime.utcnow()
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.warning("[LOGIN] could not update last_login for %s: %s", email, e)

    settings = legacy_settings()
    token = make_token(user, settings.jwt_secret, settings.token_ttl_days)

    return jsonify({
        "ok": True,
        "token": token,
        "user": {
            "id": user.id,
            "email": user.email,
            "full_name": user.full_name,
            "role": user.role,
            "box_id": user.box_id,
        }
    })
