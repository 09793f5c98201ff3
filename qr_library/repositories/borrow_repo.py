from qr_library.models.borrow import Borrow
from qr_library.extensions import db


class BorrowRepo:
    @staticmethod
    def find_active(book_id: int, student_id: int):
        return Borrow.query.filter(
            Borrow.book_id == book_id,
            Borrow.student_id == student_id,
            Borrow.return_date.is_(None),
        ).first()

    @staticmethod
    def count_active_for_book(book_id: int) -> int:
        return Borrow.query.filter(
            Borrow.book_id == book_id,
            Borrow.return_date.is_(None),
        ).count()

    @staticmethod
    def list_by_student(student_id: int):
        return (
            Borrow.query.filter_by(student_id=student_id)
            .order_by(Borrow.borrow_date.desc(), Borrow.id.desc())
            .all()
        )

    @staticmethod
    def add(borrow: Borrow):
        db.session.add(borrow)
        return borrow

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()
