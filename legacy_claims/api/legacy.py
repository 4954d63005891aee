# legacy_claims/api/legacy.py
"""
/api/legacy/* - migration of clients from the old system.

Public: claim, verify/<box_id>, verify-name (used by the mobile app sign-up).
Staff:  import, clients, stats, delete.
"""

from flask import request, jsonify, current_app

from legacy_claims.forms import LegacyImportForm
from legacy_claims.services import (
    claim_legacy_account, verify_box_exists, verify_name,
    import_legacy_file, saved_upload,
    list_legacy_clients, legacy_stats, delete_legacy_client,
)
from legacy_claims.services.legacy_admin import parse_claimed_filter
from legacy_claims.services.legacy_claim import MSG_WELCOME
from . import api_bp
from .utils import (
    jwt_required, error_response, legacy_settings,
    SUPER_ADMIN, ADMIN, BRANCH_MANAGER, DIRECTOR, WAREHOUSE_OPS,
)


def _internal_error(message, e):
    body = {"success": False, "error": message}
    if current_app.debug:
        body["details"] = str(e)
    return jsonify(body), 500


# ------------------------
# Claim flow (public)
# ------------------------
@api_bp.post("/legacy/claim")
def legacy_claim():
    data = request.get_json(silent=True) or {}

    result = claim_legacy_account(
        legacy_settings(),
        box_id=data.get("boxId"),
        email=data.get("email"),
        new_password=data.get("newPassword"),
        phone=data.get("phone"),
        full_name=data.get("fullName"),
    )
    if not result.ok:
        return error_response(result)

    return jsonify({
        "success": True,
        "message": MSG_WELCOME,
        "token": result.token,
        "user": result.user,
    })


@api_bp.get("/legacy/verify/<box_id>")
def legacy_verify_box(box_id):
    try:
        result = verify_box_exists(box_id)
    except Exception as e:
        current_app.logger.exception("[LEGACY VERIFY] box %s", box_id)
        return _internal_error("Error al verificar", e)

    if not result.ok:
        return error_response(result)
    return jsonify(result.as_dict())


@api_bp.post("/legacy/verify-name")
def legacy_verify_name():
    data = request.get_json(silent=True) or {}
    try:
        result = verify_name(data.get("boxId"), data.get("fullName"))
    except Exception as e:
        current_app.logger.exception("[LEGACY VERIFY] name check for box %s", data.get("boxId"))
        return _internal_error("Error al verificar", e)

    if not result.ok:
        return error_response(result)

    return jsonify({
        "exists": True,
        "nameMatch": True,
        "isClaimed": False,
        "clientData": result.client_data,
    })


# ------------------------
# Admin
# ------------------------
@api_bp.post("/legacy/import")
@jwt_required(roles=[SUPER_ADMIN])
def legacy_import():
    form = LegacyImportForm()
    if not form.validate_on_submit():
        errors = form.file.errors or ["No se proporcionó archivo"]
        return jsonify({"success": False, "error": errors[0]}), 400

    upload = form.file.data
    settings = legacy_settings()
    current_app.logger.info(
        "[LEGACY IMPORT] %s uploaded by %s", upload.filename, request.current_user.email,
    )
    try:
        with saved_upload(upload, settings.upload_folder) as path:
            result = import_legacy_file(path, settings, source_name=upload.filename)
    except Exception as e:
        current_app.logger.exception("[LEGACY IMPORT] %s failed", upload.filename)
        return _internal_error("Error al importar archivo", e)

    return jsonify({
        "success": True,
        "message": "Importación completada",
        "stats": result.as_stats(),
        "erroresEjemplo": result.sample_errors,
    })


@api_bp.get("/legacy/clients")
@jwt_required(roles=[SUPER_ADMIN, BRANCH_MANAGER, ADMIN, DIRECTOR, WAREHOUSE_OPS])
def legacy_clients():
    try:
        payload = list_legacy_clients(
            page=request.args.get("page", 1),
            limit=request.args.get("limit", 50),
            search=request.args.get("search"),
            claimed=parse_claimed_filter(request.args.get("claimed")),
        )
    except Exception as e:
        current_app.logger.exception("[LEGACY CLIENTS] listing failed")
        return _internal_error("Error al obtener clientes", e)
    return jsonify(payload)


@api_bp.get("/legacy/stats")
@jwt_required(roles=[SUPER_ADMIN, BRANCH_MANAGER])
def legacy_stats_view():
    try:
        return jsonify(legacy_stats())
    except Exception as e:
        current_app.logger.exception("[LEGACY STATS] failed")
        return _internal_error("Error al obtener estadísticas", e)


@api_bp.delete("/legacy/clients/<int:client_id>")
@jwt_required(roles=[SUPER_ADMIN])
def legacy_client_delete(client_id):
    try:
        deleted = delete_legacy_client(client_id)
    except Exception as e:
        current_app.logger.exception("[LEGACY DELETE] client %s", client_id)
        return _internal_error("Error al eliminar", e)

    if not deleted:
        return jsonify({"success": False, "error": "Cliente no encontrado o ya fue reclamado"}), 404
    return jsonify({"success": True, "message": "Cliente eliminado"})
