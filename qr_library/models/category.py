from qr_library.extensions import db


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    # not unique: several categories may share a name
    name = db.Column(db.String(200), nullable=False, index=True)
