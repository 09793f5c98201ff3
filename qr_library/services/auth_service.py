from flask import current_app
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash, check_password_hash

from qr_library.errors import AuthError, ConflictError, ValidationError
from qr_library.models.student import Student
from qr_library.repositories.student_repo import StudentRepo
from qr_library.utils.validators import EMAIL_RE, optional_str


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _validate_registration(data: dict) -> dict:
    name = optional_str(data, "name")
    email = _normalize_email(optional_str(data, "email"))
    password = data.get("password")

    if not name or not email or not password:
        raise ValidationError("name/email/password are required")
    if len(name) > 200:
        raise ValidationError("name must be at most 200 characters")
    if len(email) > 255 or not EMAIL_RE.match(email):
        raise ValidationError("email is not a valid address")
    if not isinstance(password, str):
        raise ValidationError("password must be a string")
    if len(password) < current_app.config["PASSWORD_MIN_LENGTH"]:
        raise ValidationError(
            f"password must be at least {current_app.config['PASSWORD_MIN_LENGTH']} characters"
        )
    return {"name": name, "email": email, "password": password}


class AuthService:
    """
    Student accounts and token issuing.

    Self-registration always yields the ``student`` role; admins are created
    out of band. Emails are stored lower-cased so login is case-insensitive.
    """

    @staticmethod
    def register(data: dict):
        fields = _validate_registration(data)
        if StudentRepo.get_by_email(fields["email"]):
            current_app.logger.info(f"[auth] Duplicate registration email={fields['email']!r}")
            raise ConflictError("Email is already registered")

        student = StudentRepo.create(Student(
            name=fields["name"],
            email=fields["email"],
            password_hash=generate_password_hash(fields["password"]),
            role="student",
        ))
        current_app.logger.info(f"[auth] Registered student_id={student.id}")
        return student

    @staticmethod
    def login(data: dict):
        email = _normalize_email(optional_str(data, "email"))
        password = data.get("password")
        if not email or not isinstance(password, str) or not password:
            raise ValidationError("email/password are required")

        student = StudentRepo.get_by_email(email)
        if not student or not check_password_hash(student.password_hash, password):
            current_app.logger.warning(f"[auth] Failed login email={email!r}")
            raise AuthError("Invalid email or password")

        token = create_access_token(
            identity=str(student.id),
            additional_claims={"role": student.role, "name": student.name},
        )
        return token, student
