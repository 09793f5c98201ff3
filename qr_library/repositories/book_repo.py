from __future__ import annotations

from sqlalchemy.orm import joinedload, selectinload

from qr_library.models.book import Book
from qr_library.models.category import Category
from qr_library.extensions import db
from qr_library.utils.validators import in_int_range


def _with_associations(query):
    return query.options(joinedload(Book.category), selectinload(Book.authors))


class BookRepo:
    @staticmethod
    def list_query(category_name: str | None = None, search: str | None = None):
        query = _with_associations(Book.query)
        if category_name:
            query = query.join(Category, Book.category_id == Category.id).filter(
                Category.name.contains(category_name, autoescape=True)
            )
        if search:
            query = query.filter(Book.title.contains(search, autoescape=True))
        return query.order_by(Book.id)

    @staticmethod
    def list_all():
        return _with_associations(Book.query).order_by(Book.id).all()

    @staticmethod
    def list_by_category_name(name: str):
        return (
            _with_associations(Book.query)
            .join(Category, Book.category_id == Category.id)
            .filter(Category.name == name)
            .order_by(Book.id)
            .all()
        )

    @staticmethod
    def get(book_id: int):
        if not in_int_range(book_id):
            return None
        return db.session.get(Book, book_id)

    @staticmethod
    def get_with_associations(book_id: int):
        if not in_int_range(book_id):
            return None
        return _with_associations(Book.query).filter(Book.id == book_id).first()

    @staticmethod
    def get_for_update(book_id: int):
        # ids past the column range cannot exist
        if not in_int_range(book_id):
            return None
        # row lock where the dialect has one (ignored by SQLite)
        return Book.query.filter(Book.id == book_id).with_for_update().first()

    @staticmethod
    def find_by_qr_code(qr_code: str):
        return Book.query.filter(Book.qr_code == qr_code).first()

    @staticmethod
    def find_containing_qr_code(fragment: str):
        return (
            Book.query.filter(Book.qr_code.contains(fragment, autoescape=True))
            .order_by(Book.id)
            .all()
        )

    @staticmethod
    def decrement_quantity(book_id: int) -> bool:
        """Take one copy off the shelf; False when none was left."""
        updated = (
            Book.query.filter(Book.id == book_id, Book.quantity > 0)
            .update({Book.quantity: Book.quantity - 1}, synchronize_session=False)
        )
        return updated == 1

    @staticmethod
    def increment_quantity(book_id: int):
        Book.query.filter(Book.id == book_id).update(
            {Book.quantity: Book.quantity + 1}, synchronize_session=False
        )

    @staticmethod
    def add(book: Book):
        db.session.add(book)
        db.session.flush()
        return book

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)
        db.session.commit()
