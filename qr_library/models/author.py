from qr_library.extensions import db

author_book = db.Table(
    "author_book",
    db.Column("author_id", db.Integer, db.ForeignKey("authors.id"), primary_key=True),
    db.Column("book_id", db.Integer, db.ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
)


class Author(db.Model):
    __tablename__ = "authors"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
