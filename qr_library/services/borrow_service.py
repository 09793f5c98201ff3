from datetime import datetime

from flask import current_app

from qr_library.errors import ConflictError, NotFoundError
from qr_library.models.borrow import Borrow, STATUS_BORROWED, STATUS_RETURNED
from qr_library.repositories.book_repo import BookRepo
from qr_library.repositories.borrow_repo import BorrowRepo
from qr_library.services.presence_service import PresenceService
from qr_library.utils.qr import parse_book_token, strip_token


class BorrowService:
    """
    Borrow / return by QR scan.

    The acting student id is always passed in by the caller; nothing here
    reads the request or the JWT. Every call re-reads the store.
    """

    @staticmethod
    def _resolve_scanned_book(qr_token: str):
        """
        Return-side lookup: exact qr_code first, then substring containment.
        Containment tolerates scans that carry only part of the token, but two
        tokens where one contains the other can collide; the lowest id wins.
        """
        name = strip_token(qr_token)
        if not name:
            return None

        book = BookRepo.find_by_qr_code(name)
        if book:
            return book

        candidates = BookRepo.find_containing_qr_code(name)
        if len(candidates) > 1:
            current_app.logger.warning(
                f"[borrow] Ambiguous QR fragment {name!r} matches book ids "
                f"{[b.id for b in candidates]}; using {candidates[0].id}"
            )
        return candidates[0] if candidates else None

    @staticmethod
    def borrow_book(qr_token: str, student_id: int):
        current_app.logger.info(f"[borrow] Borrow request qr_code={qr_token!r} student_id={student_id}")

        PresenceService.require_present(student_id)

        try:
            book_id = parse_book_token(qr_token, current_app.config["QR_TOKEN_PREFIX"])
        except ValueError:
            current_app.logger.warning(f"[borrow] Invalid QR code format: {qr_token!r}")
            raise

        try:
            book = BookRepo.get_for_update(book_id)
            if not book:
                current_app.logger.warning(f"[borrow] Book not found book_id={book_id} qr_code={qr_token!r}")
                raise NotFoundError("Book not found")

            if BorrowRepo.find_active(book.id, student_id):
                raise ConflictError("Book already borrowed by this student")

            if book.quantity is None or book.quantity <= 0:
                raise ConflictError("Book is not available")

            borrow = BorrowRepo.add(Borrow(
                book_id=book.id,
                student_id=student_id,
                borrow_date=datetime.utcnow(),
                status=STATUS_BORROWED,
            ))

            # guarded decrement: re-checks quantity > 0 inside the same transaction
            if not BookRepo.decrement_quantity(book.id):
                raise ConflictError("Book is not available")

            BorrowRepo.commit()
        except Exception:
            BorrowRepo.rollback()
            raise

        current_app.logger.info(f"[borrow] Borrowed book_id={book.id} student_id={student_id} borrow_id={borrow.id}")
        return borrow, book

    @staticmethod
    def return_book(qr_token: str, student_id: int):
        PresenceService.require_present(student_id)

        try:
            book = BorrowService._resolve_scanned_book(qr_token)
            if not book:
                raise NotFoundError("Book not found")

            borrow = BorrowRepo.find_active(book.id, student_id)
            if not borrow:
                raise NotFoundError("No active borrow found for this book")

            borrow.return_date = datetime.utcnow()
            borrow.status = STATUS_RETURNED
            BookRepo.increment_quantity(book.id)

            BorrowRepo.commit()
        except Exception:
            BorrowRepo.rollback()
            raise

        current_app.logger.info(f"[borrow] Returned book_id={book.id} student_id={student_id} borrow_id={borrow.id}")
        return borrow, book

    @staticmethod
    def history(student_id: int):
        borrows = BorrowRepo.list_by_student(student_id)
        return borrows, len(borrows)
