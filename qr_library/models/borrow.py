from datetime import datetime
from qr_library.extensions import db

STATUS_BORROWED = "borrowed"
STATUS_RETURNED = "returned"


class Borrow(db.Model):
    __tablename__ = "borrows"
    __table_args__ = (
        db.Index("ix_borrows_book_student", "book_id", "student_id"),
    )

    id = db.Column(db.Integer, primary_key=True)

    # nulled when the book is removed from the catalog; the ledger row stays
    book_id = db.Column(db.Integer, db.ForeignKey("books.id", ondelete="SET NULL"), nullable=True, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id"), nullable=False, index=True)

    borrow_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    return_date = db.Column(db.DateTime, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=STATUS_BORROWED)  # borrowed/returned

    created_at = db.Column(db.DateTime, nullable=True, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=True, default=datetime.utcnow, onupdate=datetime.utcnow)

    book = db.relationship("Book", backref="borrows")
    student = db.relationship("Student", backref="borrows")
