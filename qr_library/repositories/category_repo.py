from qr_library.models.category import Category
from qr_library.models.author import Author
from qr_library.extensions import db


class CategoryRepo:
    @staticmethod
    def list_all():
        return Category.query.order_by(Category.id).all()

    @staticmethod
    def exists(category_id: int) -> bool:
        return db.session.get(Category, category_id) is not None


class AuthorRepo:
    @staticmethod
    def get_many(author_ids):
        if not author_ids:
            return []
        return Author.query.filter(Author.id.in_(author_ids)).order_by(Author.id).all()
