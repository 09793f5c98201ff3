from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from qr_library.services.book_service import BookService
from qr_library.utils.auth import current_student_id
from qr_library.utils.decorators import role_required
from qr_library.utils.serializers import book_to_dict
from qr_library.utils.validators import json_body

book_bp = Blueprint("books", __name__, url_prefix="/books")


@book_bp.get("")
@jwt_required()
def list_books():
    page = request.args.get("page", 1, type=int)
    per_page = request.args.get("per_page", None, type=int)

    result = BookService.list_books(
        category=request.args.get("category") or None,
        search=request.args.get("search") or None,
        page=page,
        per_page=per_page,
        student_id=current_student_id(),
    )
    return jsonify({
        "success": True,
        "data": [book_to_dict(b) for b in result["items"]],
        "current_page": result["current_page"],
        "per_page": result["per_page"],
        "total": result["total"],
        "last_page": result["last_page"],
    })


@book_bp.get("/all")
@jwt_required()
def list_all_books():
    books = BookService.list_all_books()
    return jsonify({"success": True, "books": [book_to_dict(b) for b in books]})


@book_bp.get("/<int:book_id>")
@jwt_required()
def get_book(book_id: int):
    b = BookService.get_book(book_id)
    return jsonify({"success": True, "data": book_to_dict(b)})


@book_bp.post("")
@role_required("admin")
def create_book():
    b = BookService.create_book(json_body())
    return jsonify({
        "success": True,
        "message": "Book added successfully",
        "book": book_to_dict(b, with_associations=False),
    }), 201


@book_bp.put("/<int:book_id>")
@role_required("admin")
def update_book(book_id: int):
    b = BookService.update_book(book_id, json_body())
    return jsonify({
        "success": True,
        "message": "Book updated successfully",
        "book": book_to_dict(b, with_associations=False),
    })


@book_bp.delete("/<int:book_id>")
@role_required("admin")
def delete_book(book_id: int):
    BookService.delete_book(book_id)
    return jsonify({"success": True, "message": "Book deleted successfully"})
