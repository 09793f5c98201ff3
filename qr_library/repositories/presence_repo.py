from qr_library.models.presence_log import PresenceLogEntry
from qr_library.extensions import db


class PresenceRepo:
    @staticmethod
    def latest_open(student_id: int):
        return (
            PresenceLogEntry.query.filter(
                PresenceLogEntry.student_id == student_id,
                PresenceLogEntry.check_out.is_(None),
            )
            .order_by(PresenceLogEntry.check_in.desc(), PresenceLogEntry.id.desc())
            .first()
        )

    @staticmethod
    def create(entry: PresenceLogEntry):
        db.session.add(entry)
        db.session.commit()
        return entry

    @staticmethod
    def commit():
        db.session.commit()
