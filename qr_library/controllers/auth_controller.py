from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from qr_library.errors import NotFoundError
from qr_library.services.auth_service import AuthService
from qr_library.repositories.student_repo import StudentRepo
from qr_library.utils.auth import current_role, current_student_id
from qr_library.utils.validators import json_body

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _student_to_dict(s, role=None):
    return {"id": s.id, "name": s.name, "email": s.email, "role": role or s.role}


@auth_bp.post("/register")
def register():
    # any "role" in the body is ignored
    student = AuthService.register(json_body())
    return jsonify({"success": True, "student": _student_to_dict(student)}), 201


@auth_bp.post("/login")
def login():
    token, student = AuthService.login(json_body())
    return jsonify({
        "success": True,
        "access_token": token,
        "student": _student_to_dict(student),
    })


@auth_bp.get("/me")
@jwt_required()
def me():
    student = StudentRepo.get_by_id(current_student_id())
    if not student:
        raise NotFoundError("Student not found")
    return jsonify({"success": True, "student": _student_to_dict(student, current_role())})
