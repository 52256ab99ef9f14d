from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class DocumentSequence(db.Model):
    """
    Atomic per-store document sequences.

    sequence_key scopes the counter, e.g. "INVOICE:20231026" gives each
    store a fresh invoice run every day.
    """
    __tablename__ = "document_sequences"
    __table_args__ = (
        db.UniqueConstraint("store_code", "sequence_key", name="uq_doc_sequences_store_key"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    store_code = db.Column(db.String(32), nullable=False, index=True)
    sequence_key = db.Column(db.String(64), nullable=False, index=True)
    next_number = db.Column(db.Integer, nullable=False, default=1)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "store_code": self.store_code,
            "sequence_key": self.sequence_key,
            "next_number": self.next_number,
            "updated_at": to_utc_z(self.updated_at),
        }
