from datetime import datetime

from flask import current_app

from qr_library.errors import ConflictError, NotFoundError, PreconditionFailedError
from qr_library.models.presence_log import PresenceLogEntry
from qr_library.repositories.presence_repo import PresenceRepo


class PresenceService:
    @staticmethod
    def require_present(student_id: int) -> PresenceLogEntry:
        entry = PresenceRepo.latest_open(student_id)
        if not entry:
            current_app.logger.warning(f"[presence] Student not in library: student_id={student_id}")
            raise PreconditionFailedError("Student must check in first")
        return entry

    @staticmethod
    def check_in(student_id: int) -> PresenceLogEntry:
        if PresenceRepo.latest_open(student_id):
            raise ConflictError("Student is already checked in")

        entry = PresenceRepo.create(PresenceLogEntry(student_id=student_id, check_in=datetime.utcnow()))
        current_app.logger.info(f"[presence] Check-in student_id={student_id} log_id={entry.id}")
        return entry

    @staticmethod
    def check_out(student_id: int) -> PresenceLogEntry:
        entry = PresenceRepo.latest_open(student_id)
        if not entry:
            raise NotFoundError("No open check-in found")

        entry.check_out = datetime.utcnow()
        PresenceRepo.commit()
        current_app.logger.info(f"[presence] Check-out student_id={student_id} log_id={entry.id}")
        return entry
