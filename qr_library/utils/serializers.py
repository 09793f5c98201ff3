def _iso(value):
    return value.isoformat() if value else None


def category_to_dict(c):
    if c is None:
        return None
    return {"id": c.id, "name": c.name}


def author_to_dict(a):
    return {"id": a.id, "name": a.name}


def book_to_dict(b, with_associations: bool = True):
    data = {
        "id": b.id,
        "title": b.title,
        "quantity": b.quantity,
        "publish_year": b.publish_year,
        "category_id": b.category_id,
        "file": b.file,
        "qr_code": b.qr_code,
        "created_at": _iso(b.created_at),
        "updated_at": _iso(b.updated_at),
    }
    if with_associations:
        data["category"] = category_to_dict(b.category)
        data["authors"] = [author_to_dict(a) for a in b.authors]
    return data


def history_entry_to_dict(x):
    return {
        "book_title": x.book.title if x.book else None,
        "borrow_date": _iso(x.borrow_date),
        "return_date": _iso(x.return_date),
        "status": x.status,
    }
