from qr_library.models.student import Student
from qr_library.extensions import db


class StudentRepo:
    @staticmethod
    def get_by_email(email: str):
        return Student.query.filter_by(email=email).first()

    @staticmethod
    def get_by_id(student_id: int):
        return db.session.get(Student, student_id)

    @staticmethod
    def create(student: Student):
        db.session.add(student)
        db.session.commit()
        return student
