from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from qr_library.services.book_service import CategoryService
from qr_library.utils.serializers import book_to_dict, category_to_dict

category_bp = Blueprint("categories", __name__, url_prefix="/categories")


@category_bp.get("")
@jwt_required()
def list_categories():
    categories = CategoryService.list_categories()
    return jsonify({"status": "success", "data": [category_to_dict(c) for c in categories]})


@category_bp.get("/<path:name>/books")
@jwt_required()
def books_by_category(name: str):
    books = CategoryService.books_by_category(name)
    return jsonify({"status": "success", "data": [book_to_dict(b) for b in books]})
