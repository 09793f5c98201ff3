from qr_library.models.search_history import SearchHistory
from qr_library.extensions import db


class SearchHistoryRepo:
    @staticmethod
    def log(entry: SearchHistory):
        db.session.add(entry)
        db.session.commit()
        return entry

    @staticmethod
    def recent_for_student(student_id: int, limit: int):
        return (
            SearchHistory.query.filter_by(student_id=student_id)
            .order_by(SearchHistory.created_at.desc(), SearchHistory.id.desc())
            .limit(limit)
            .all()
        )
