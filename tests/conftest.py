import pytest
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash

from qr_library import create_app
from qr_library.extensions import db
from qr_library.models import Author, Book, Category, PresenceLogEntry, Student


@pytest.fixture
def app(tmp_path, request):
    # unique SQLite file per test
    db_file = tmp_path / f"test_{request.node.name}.db"
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "JWT_SECRET_KEY": "test-jwt-secret-key-with-enough-length",
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_student(app):
    counter = {"n": 0}

    def _make(role="student", name=None):
        counter["n"] += 1
        student = Student(
            name=name or f"Student {counter['n']}",
            email=f"student{counter['n']}@example.com",
            password_hash=generate_password_hash("secret"),
            role=role,
        )
        db.session.add(student)
        db.session.commit()
        return student

    return _make


@pytest.fixture
def student(make_student):
    return make_student()


@pytest.fixture
def admin(make_student):
    return make_student(role="admin", name="Admin")


def auth_headers(user):
    token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(student):
    return auth_headers(student)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def category(app):
    c = Category(name="Science")
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def make_book(app, category):
    def _make(title="Book", quantity=1, qr_code=None, book_id=None, category_id=None, authors=()):
        book = Book(
            id=book_id,
            title=title,
            quantity=quantity,
            category_id=category_id or category.id,
            qr_code=qr_code,
        )
        book.authors = list(authors)
        db.session.add(book)
        db.session.commit()
        return book

    return _make


@pytest.fixture
def author(app):
    a = Author(name="Ada Lovelace")
    db.session.add(a)
    db.session.commit()
    return a


def check_in(student_id):
    entry = PresenceLogEntry(student_id=student_id)
    db.session.add(entry)
    db.session.commit()
    return entry


@pytest.fixture
def present_student(student):
    check_in(student.id)
    return student


def fresh(model, pk):
    """Re-read a row from the database, bypassing the identity map."""
    db.session.expire_all()
    return db.session.get(model, pk)
