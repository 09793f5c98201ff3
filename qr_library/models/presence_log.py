from datetime import datetime
from qr_library.extensions import db


class PresenceLogEntry(db.Model):
    """One visit to the library: opened at the entrance scan, closed at the exit scan."""

    __tablename__ = "qr_logs"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id"), nullable=False, index=True)

    check_in = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    check_out = db.Column(db.DateTime, nullable=True)

    student = db.relationship("Student", backref="presence_logs")
