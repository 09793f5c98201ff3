from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from qr_library.services.presence_service import PresenceService
from qr_library.utils.auth import current_student_id

presence_bp = Blueprint("presence", __name__, url_prefix="/library")


@presence_bp.post("/check-in")
@jwt_required()
def check_in():
    entry = PresenceService.check_in(current_student_id())
    return jsonify({
        "success": True,
        "message": "Checked in",
        "log": {"id": entry.id, "check_in": entry.check_in.isoformat()},
    }), 201


@presence_bp.post("/check-out")
@jwt_required()
def check_out():
    entry = PresenceService.check_out(current_student_id())
    return jsonify({
        "success": True,
        "message": "Checked out",
        "log": {
            "id": entry.id,
            "check_in": entry.check_in.isoformat(),
            "check_out": entry.check_out.isoformat(),
        },
    })
