from __future__ import annotations

import math

from flask import current_app

from qr_library.errors import ConflictError, NotFoundError, ValidationError
from qr_library.extensions import db
from qr_library.models.book import Book
from qr_library.models.search_history import SearchHistory
from qr_library.repositories.book_repo import BookRepo
from qr_library.repositories.borrow_repo import BorrowRepo
from qr_library.repositories.category_repo import AuthorRepo, CategoryRepo
from qr_library.repositories.search_history_repo import SearchHistoryRepo
from qr_library.utils.qr import generate_token
from qr_library.utils.validators import INT_MAX, as_int, is_int


def _validate_payload(data: dict) -> dict:
    """
    Checks the fields shared by create and update.
    Returns the cleaned values; raises ValidationError on the first bad field.
    """
    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("title is required")

    quantity = as_int(data.get("quantity"))
    if quantity is None:
        raise ValidationError("quantity must be an integer")
    if quantity < 0:
        raise ValidationError("quantity cannot be negative")

    publish_year = data.get("publish_year")
    if publish_year is not None:
        publish_year = as_int(publish_year)
        if publish_year is None:
            raise ValidationError("publish_year must be an integer")

    file_ref = data.get("file")
    if file_ref is not None and not isinstance(file_ref, str):
        raise ValidationError("file must be a string")

    category_id = as_int(data.get("category_id"))
    if category_id is None:
        raise ValidationError("category_id is required")
    # explicit existence check instead of relying on the FK
    if not CategoryRepo.exists(category_id):
        raise ValidationError("category_id does not reference an existing category")

    cleaned = {
        "title": title.strip(),
        "quantity": quantity,
        "publish_year": publish_year,
        "category_id": category_id,
        "file": file_ref,
    }

    if "author_ids" in data:
        author_ids = data.get("author_ids") or []
        if not isinstance(author_ids, list) or not all(is_int(x) and as_int(x) is not None for x in author_ids):
            raise ValidationError("author_ids must be a list of integers")
        authors = AuthorRepo.get_many(set(author_ids))
        if len(authors) != len(set(author_ids)):
            raise ValidationError("author_ids contains unknown authors")
        cleaned["authors"] = authors

    return cleaned


class BookService:
    @staticmethod
    def list_books(category: str | None = None, search: str | None = None,
                   page: int = 1, per_page: int | None = None, student_id: int | None = None):
        max_per_page = current_app.config["MAX_BOOKS_PER_PAGE"]
        per_page = per_page or current_app.config["BOOKS_PER_PAGE"]
        per_page = max(1, min(per_page, max_per_page))
        # keeps OFFSET inside the column integer range
        page = max(1, min(page, INT_MAX // per_page))

        if search and student_id is not None:
            SearchHistoryService.record(student_id, search)

        query = BookRepo.list_query(category_name=category, search=search)
        total = query.count()
        items = query.offset((page - 1) * per_page).limit(per_page).all()

        return {
            "items": items,
            "current_page": page,
            "per_page": per_page,
            "total": total,
            "last_page": max(1, math.ceil(total / per_page)),
        }

    @staticmethod
    def list_all_books():
        books = BookRepo.list_all()
        if not books:
            raise NotFoundError("No books available")
        return books

    @staticmethod
    def get_book(book_id: int):
        book = BookRepo.get_with_associations(book_id)
        if not book:
            raise NotFoundError("Book not found")
        return book

    @staticmethod
    def create_book(data: dict):
        cleaned = _validate_payload(data)
        authors = cleaned.pop("authors", [])

        book = Book(**cleaned)
        book.authors = authors
        try:
            BookRepo.add(book)
            book.qr_code = generate_token(book.id, current_app.config["QR_TOKEN_PREFIX"])
            BookRepo.update()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"[catalog] Book created id={book.id} qr={book.qr_code}")
        return book

    @staticmethod
    def update_book(book_id: int, data: dict):
        book = BookRepo.get(book_id)
        if not book:
            raise NotFoundError("Book not found")

        cleaned = _validate_payload(data)
        authors = cleaned.pop("authors", None)

        # qr_code is never taken from the payload
        for k, v in cleaned.items():
            setattr(book, k, v)
        if authors is not None:
            book.authors = authors

        BookRepo.update()
        current_app.logger.info(f"[catalog] Book updated id={book.id}")
        return book

    @staticmethod
    def delete_book(book_id: int):
        book = BookRepo.get(book_id)
        if not book:
            raise NotFoundError("Book not found")

        if BorrowRepo.count_active_for_book(book_id) > 0:
            raise ConflictError("Cannot delete: copies on loan")

        BookRepo.delete(book)
        current_app.logger.info(f"[catalog] Book deleted id={book_id}")


class CategoryService:
    @staticmethod
    def list_categories():
        return CategoryRepo.list_all()

    @staticmethod
    def books_by_category(name: str):
        return BookRepo.list_by_category_name(name)


class SearchHistoryService:
    @staticmethod
    def record(student_id: int, term: str):
        term = term.strip()
        if not term:
            return None
        return SearchHistoryRepo.log(SearchHistory(student_id=student_id, search_term=term[:255]))

    @staticmethod
    def recent_terms(student_id: int):
        limit = current_app.config["SEARCH_HISTORY_LIMIT"]
        terms = []
        # over-fetch so that repeated searches still fill the list
        for row in SearchHistoryRepo.recent_for_student(student_id, limit * 5):
            if row.search_term not in terms:
                terms.append(row.search_term)
            if len(terms) >= limit:
                break
        return terms
