from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import jwt_required

from qr_library.errors import ValidationError
from qr_library.services.book_service import SearchHistoryService
from qr_library.services.borrow_service import BorrowService
from qr_library.utils.auth import current_student_id
from qr_library.utils.serializers import history_entry_to_dict
from qr_library.utils.validators import json_body

# shares the /books prefix with the catalog blueprint
borrow_bp = Blueprint("borrow", __name__, url_prefix="/books")


def _qr_code_from_body() -> str:
    data = json_body()
    qr_code = data.get("qr_code")
    if not isinstance(qr_code, str) or not qr_code.strip():
        raise ValidationError("qr_code is required")
    return qr_code.strip()


@borrow_bp.post("/borrow")
@jwt_required()
def borrow_book():
    qr_code = _qr_code_from_body()
    borrow, book = BorrowService.borrow_book(qr_code, current_student_id())
    return jsonify({
        "success": True,
        "message": "Book borrowed successfully",
        "borrow": {
            "book_title": book.title,
            "borrow_date": borrow.borrow_date.isoformat(),
        },
    })


@borrow_bp.post("/return")
@jwt_required()
def return_book():
    qr_code = _qr_code_from_body()
    _borrow, book = BorrowService.return_book(qr_code, current_student_id())
    return jsonify({
        "success": True,
        "message": "Book returned successfully",
        "book_title": book.title,
    })


@borrow_bp.get("/history")
@jwt_required()
def borrowing_history():
    student_id = current_student_id()
    try:
        borrows, total = BorrowService.history(student_id)
        return jsonify({
            "success": True,
            "total_borrowed": total,
            "history": [history_entry_to_dict(x) for x in borrows],
            "message": "Borrowing history found" if total > 0 else "No borrowing history",
        })
    except Exception as e:
        current_app.logger.exception(f"[borrow] History lookup failed for student_id={student_id}")
        return jsonify({
            "success": False,
            "message": "An error occurred while fetching borrowing history",
            "error": str(e),
        }), 500


@borrow_bp.get("/search-history")
@jwt_required()
def search_history():
    terms = SearchHistoryService.recent_terms(current_student_id())
    return jsonify({"success": True, "data": terms})
