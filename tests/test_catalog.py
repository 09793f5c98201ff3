from datetime import datetime

from qr_library.extensions import db
from qr_library.models import Book, Borrow, Category, SearchHistory

from conftest import fresh


def _payload(category_id, **overrides):
    data = {"title": "Dune", "quantity": 3, "category_id": category_id, "publish_year": 1965}
    data.update(overrides)
    return data


def test_create_book_assigns_qr_code(client, admin_headers, category, author):
    res = client.post("/books", headers=admin_headers,
                      json=_payload(category.id, author_ids=[author.id], file="dune.pdf"))
    assert res.status_code == 201

    book = res.get_json()["book"]
    assert book["title"] == "Dune"
    assert book["quantity"] == 3
    assert book["file"] == "dune.pdf"
    assert book["qr_code"].startswith(f"book_{book['id']}_")

    stored = fresh(Book, book["id"])
    assert [a.name for a in stored.authors] == ["Ada Lovelace"]


def test_create_book_validation(client, admin_headers, category):
    cases = [
        {"quantity": 1, "category_id": category.id},
        _payload(category.id, title="   "),
        _payload(category.id, quantity=-1),
        _payload(category.id, quantity="many"),
        _payload(category.id, publish_year="last year"),
        _payload(9999),
        _payload(category.id, author_ids=[12345]),
        _payload(category.id, quantity=10 ** 20),
        _payload(10 ** 20),
        _payload(category.id, author_ids=[10 ** 20]),
    ]
    for payload in cases:
        res = client.post("/books", headers=admin_headers, json=payload)
        assert res.status_code == 422, payload
        assert res.get_json()["success"] is False

    assert Book.query.count() == 0


def test_create_book_rejects_non_object_body(client, admin_headers, category):
    for body in ([1, 2], "Dune", 3):
        res = client.post("/books", headers=admin_headers, json=body)
        assert res.status_code == 422, body
        assert res.get_json()["message"] == "Request body must be a JSON object"

    assert Book.query.count() == 0


def test_create_book_requires_admin(client, student_headers, category):
    res = client.post("/books", headers=student_headers, json=_payload(category.id))
    assert res.status_code == 403


def test_books_require_token(client):
    assert client.get("/books").status_code == 401


def test_get_book_includes_associations(client, student_headers, make_book, author):
    book = make_book(title="Cosmos", authors=[author])

    res = client.get(f"/books/{book.id}", headers=student_headers)
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["category"]["name"] == "Science"
    assert data["authors"] == [{"id": author.id, "name": "Ada Lovelace"}]


def test_get_missing_book_is_404(client, student_headers):
    res = client.get("/books/404", headers=student_headers)
    assert res.status_code == 404
    assert res.get_json()["message"] == "Book not found"


def test_out_of_range_book_id_is_404(client, student_headers, admin_headers):
    huge = 10 ** 20
    assert client.get(f"/books/{huge}", headers=student_headers).status_code == 404
    assert client.delete(f"/books/{huge}", headers=admin_headers).status_code == 404


def test_update_book_keeps_qr_code(client, admin_headers, make_book, category):
    book = make_book(title="Old", quantity=1, qr_code="book_1_keepme")

    res = client.put(f"/books/{book.id}", headers=admin_headers,
                     json=_payload(category.id, title="New", quantity=5, qr_code="book_1_hijack"))
    assert res.status_code == 200

    stored = fresh(Book, book.id)
    assert stored.title == "New"
    assert stored.quantity == 5
    assert stored.qr_code == "book_1_keepme"


def test_update_missing_book_is_404(client, admin_headers, category):
    res = client.put("/books/77", headers=admin_headers, json=_payload(category.id))
    assert res.status_code == 404


def test_delete_book_with_active_borrow_conflicts(client, admin_headers, make_book, student):
    book = make_book(quantity=0)
    db.session.add(Borrow(book_id=book.id, student_id=student.id, status="borrowed"))
    db.session.commit()

    res = client.delete(f"/books/{book.id}", headers=admin_headers)
    assert res.status_code == 400
    assert "copies on loan" in res.get_json()["message"]
    assert fresh(Book, book.id) is not None


def test_delete_book_without_active_borrow(client, admin_headers, make_book, student):
    book = make_book(quantity=1)
    returned = Borrow(book_id=book.id, student_id=student.id, status="returned", return_date=datetime.utcnow())
    db.session.add(returned)
    db.session.commit()
    borrow_id = returned.id

    res = client.delete(f"/books/{book.id}", headers=admin_headers)
    assert res.status_code == 200
    assert fresh(Book, book.id) is None
    # the ledger row survives, detached from the catalog
    assert fresh(Borrow, borrow_id).book_id is None


def test_list_filters_by_category_substring(client, student_headers, make_book):
    administration = Category(name="Administration")
    admin_cat = Category(name="Admin")
    other = Category(name="Physics")
    db.session.add_all([administration, admin_cat, other])
    db.session.commit()

    make_book(title="Managing People", category_id=administration.id)
    make_book(title="Sysadmin Handbook", category_id=admin_cat.id)
    make_book(title="Quantum", category_id=other.id)

    res = client.get("/books?category=Admin", headers=student_headers)
    assert res.status_code == 200
    titles = sorted(b["title"] for b in res.get_json()["data"])
    assert titles == ["Managing People", "Sysadmin Handbook"]


def test_list_search_and_pagination(client, student_headers, student, make_book):
    for i in range(12):
        make_book(title=f"Python vol {i}")
    make_book(title="Rust")

    res = client.get("/books?search=Python&per_page=5&page=3", headers=student_headers)
    body = res.get_json()
    assert body["total"] == 12
    assert body["last_page"] == 3
    assert body["current_page"] == 3
    assert len(body["data"]) == 2

    terms = [row.search_term for row in SearchHistory.query.filter_by(student_id=student.id)]
    assert terms == ["Python"]


def test_search_history_endpoint(client, student_headers):
    for term in ["dune", "cosmos", "dune"]:
        client.get(f"/books?search={term}", headers=student_headers)

    res = client.get("/books/search-history", headers=student_headers)
    assert res.status_code == 200
    assert res.get_json()["data"] == ["dune", "cosmos"]


def test_list_all_books(client, student_headers, make_book):
    res = client.get("/books/all", headers=student_headers)
    assert res.status_code == 404

    make_book(title="A")
    make_book(title="B")
    res = client.get("/books/all", headers=student_headers)
    assert res.status_code == 200
    books = res.get_json()["books"]
    assert [b["title"] for b in books] == ["A", "B"]
    assert all("category" in b and "authors" in b for b in books)


def test_categories(client, student_headers, category, make_book):
    other = Category(name="Science Fiction")
    db.session.add(other)
    db.session.commit()
    make_book(title="Cosmos")
    make_book(title="Dune", category_id=other.id)

    res = client.get("/categories", headers=student_headers)
    assert res.get_json() == {
        "status": "success",
        "data": [{"id": category.id, "name": "Science"}, {"id": other.id, "name": "Science Fiction"}],
    }

    # exact match on the category name
    res = client.get("/categories/Science/books", headers=student_headers)
    assert [b["title"] for b in res.get_json()["data"]] == ["Cosmos"]

    res = client.get("/categories/Nothing/books", headers=student_headers)
    assert res.get_json()["data"] == []
