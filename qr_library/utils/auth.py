from flask_jwt_extended import get_jwt, get_jwt_identity


def current_student_id() -> int:
    """Acting student, taken from the verified JWT. Call inside a @jwt_required view."""
    return int(get_jwt_identity())


def current_role():
    return (get_jwt() or {}).get("role")
