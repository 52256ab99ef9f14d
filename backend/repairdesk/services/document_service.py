# Overview: Service-layer invoice numbering; store/date-scoped sequences.

from __future__ import annotations

from datetime import date

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import DocumentSequence
from .concurrency import run_with_retry


class DocumentSequenceError(Exception):
    """Raised when document sequence operations fail."""
    pass


def _current_number(store_code: str, sequence_key: str) -> int:
    return (
        db.session.query(DocumentSequence.next_number)
        .filter_by(store_code=store_code, sequence_key=sequence_key)
        .scalar()
    )


def next_sequence_number(*, store_code: str, sequence_key: str) -> int:
    """
    Atomically allocate the next number for a store/key, starting at 1.

    Increments in a single UPDATE; the first allocation inserts the row and
    falls back to the UPDATE if another writer inserted it first.
    """
    def _op() -> int:
        if not store_code:
            raise DocumentSequenceError("store_code is required")
        if not sequence_key:
            raise DocumentSequenceError("sequence_key is required")

        stmt = (
            update(DocumentSequence)
            .where(
                DocumentSequence.store_code == store_code,
                DocumentSequence.sequence_key == sequence_key,
            )
            .values(next_number=DocumentSequence.next_number + 1)
        )

        result = db.session.execute(stmt)
        if result.rowcount:
            db.session.flush()
            return _current_number(store_code, sequence_key) - 1

        seq = DocumentSequence(store_code=store_code, sequence_key=sequence_key, next_number=2)
        db.session.add(seq)
        try:
            db.session.flush()
            return 1
        except IntegrityError:
            db.session.rollback()
            result = db.session.execute(stmt)
            if not result.rowcount:
                raise
            db.session.flush()
            return _current_number(store_code, sequence_key) - 1

    return run_with_retry(_op)


def next_invoice_number(*, store_code: str, transaction_date: date, pad: int = 3) -> str:
    """
    Invoice numbers run per store per day: 20231026-001, 20231026-002, ...
    """
    day = f"{transaction_date:%Y%m%d}"
    num = next_sequence_number(store_code=store_code, sequence_key=f"INVOICE:{day}")
    return f"{day}-{num:0{pad}d}"
