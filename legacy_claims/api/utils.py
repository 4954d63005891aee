from functools import wraps

import jwt
from flask import current_app, request, jsonify

from legacy_claims.extensions import db
from legacy_claims.models import User
from legacy_claims.utils.tokens import decode_token

SUPER_ADMIN = "super_admin"
ADMIN = "admin"
BRANCH_MANAGER = "branch_manager"
DIRECTOR = "director"
WAREHOUSE_OPS = "warehouse_ops"


def legacy_settings():
    return current_app.config["LEGACY"]


def jwt_required(view_func=None, roles=None):
    """
    Usage:
      @jwt_required
      def view(): ...

      @jwt_required(roles=[SUPER_ADMIN])
      def admin_view(): ...
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            auth = request.headers.get("Authorization", "")
            if not auth.startswith("Bearer "):
                return jsonify({"ok": False, "error": "Missing token"}), 401
            token = auth.replace("Bearer ", "").strip()
            try:
                payload = decode_token(token, legacy_settings().jwt_secret)
            except jwt.ExpiredSignatureError:
                return jsonify({"ok": False, "error": "Token expired"}), 401
            except jwt.InvalidTokenError:
                return jsonify({"ok": False, "error": "Invalid token"}), 401

            try:
                user = db.session.get(User, int(payload["sub"]))
            except (KeyError, TypeError, ValueError):
                return jsonify({"ok": False, "error": "Invalid token"}), 401
            if not user:
                return jsonify({"ok": False, "error": "User not found"}), 401

            if roles and (user.role or "").lower() not in [r.lower() for r in roles]:
                return jsonify({"ok": False, "error": "No tienes permiso para esta sección."}), 403

            request.current_user = user
            return fn(*args, **kwargs)

        return wrapper

    # @jwt_required without parentheses
    if callable(view_func):
        return decorator(view_func)
    return decorator


def error_response(err):
    """LegacyErr -> (json, status). Internal details only leak in debug mode."""
    body = {"success": False, "error": err.message}
    if err.code:
        body["code"] = err.code
    body.update(err.extra)
    if err.detail and current_app.debug:
        body["details"] = err.detail
    return jsonify(body), err.status
