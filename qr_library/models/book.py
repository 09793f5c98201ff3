from datetime import datetime
from qr_library.extensions import db
from qr_library.models.author import author_book


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("quantity >= 0", name="ck_books_quantity_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False, index=True)

    # available copies; only borrow (-1) and return (+1) touch it after creation
    quantity = db.Column(db.Integer, nullable=False, default=0)
    publish_year = db.Column(db.Integer, nullable=True)

    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=False, index=True)
    file = db.Column(db.String(500), nullable=True)

    # set right after the first flush, once the id is known
    qr_code = db.Column(db.String(100), unique=True, nullable=True, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    category = db.relationship("Category", backref="books")
    authors = db.relationship("Author", secondary=author_book, backref="books")
