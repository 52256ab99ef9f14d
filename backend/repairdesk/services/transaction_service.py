# Overview: Service-layer operations for transactions; create, update, trash, restore, purge.

"""
Transaction lifecycle.

Records are append-only on creation (an invoice number is allocated then),
move to the trash by setting deleted_at, come back by clearing it, and are
only removed from the table by purge_transaction().
"""
from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..models import Transaction
from ..records import devices_from, repair_lines_from, TransactionRecord
from ..time_utils import utcnow
from .document_service import next_invoice_number
from .invoice_service import compute_totals, money

TRANSACTION_MUTABLE_FIELDS = {
    "store_code",
    "customer_name",
    "phone_number",
    "phone_model",
    "phone_imei",
    "phone_storage",
    "phone_price",
    "repair_items",
    "devices",
    "repair_line_items",
    "warranty_period",
    "notes",
    "policy_type",
    "custom_policy_text",
    "transaction_date",
}


class TransactionNotFound(LookupError):
    """Raised when a transaction id does not exist (or is in the wrong state)."""


def apply_transaction_patch(t: Transaction, patch: dict) -> None:
    for k, v in patch.items():
        if k not in TRANSACTION_MUTABLE_FIELDS:
            continue
        setattr(t, k, v)


def _itemized_price(patch: dict) -> str:
    record = TransactionRecord(
        id=None,
        customer_name="",
        phone_model="",
        transaction_date=patch["transaction_date"],
        devices=devices_from(patch.get("devices")),
        repair_line_items=repair_lines_from(patch.get("repair_line_items")),
    )
    return money(compute_totals(record).total)


def get_transaction(transaction_id: int, *, include_deleted: bool = True) -> Transaction:
    t = db.session.get(Transaction, transaction_id)
    if t is None or (not include_deleted and t.deleted_at is not None):
        raise TransactionNotFound(f"Transaction {transaction_id} not found")
    return t


def create_transaction(*, patch: dict, default_store: str = "EASTWOOD") -> Transaction:
    """
    Create a transaction from a validated patch and assign its invoice number.

    Itemized sales (devices or repair lines) with no flat price get the
    itemized total copied into phone_price so the record still reads sensibly
    in list views and price search.
    """
    patch = dict(patch)
    patch.setdefault("store_code", default_store)
    patch.setdefault("repair_items", [])
    patch.setdefault("devices", [])
    patch.setdefault("repair_line_items", [])
    patch.setdefault("warranty_period", 0)
    if "phone_price" not in patch:
        patch["phone_price"] = _itemized_price(patch)

    t = Transaction()
    apply_transaction_patch(t, patch)
    t.invoice_number = next_invoice_number(
        store_code=t.store_code,
        transaction_date=t.transaction_date,
    )
    db.session.add(t)
    db.session.commit()
    current_app.logger.info("Created transaction %s (invoice %s)", t.id, t.invoice_number)
    return t


def update_transaction(*, transaction_id: int, patch: dict) -> Transaction:
    """
    Edit an active or trashed record. The invoice number never changes.

    Replacing devices or repair lines without a new flat price refreshes
    phone_price to the new itemized total.
    """
    t = get_transaction(transaction_id)
    apply_transaction_patch(t, patch)
    itemized_changed = "devices" in patch or "repair_line_items" in patch
    if itemized_changed and "phone_price" not in patch and (t.devices or t.repair_line_items):
        t.phone_price = _itemized_price({
            "transaction_date": t.transaction_date,
            "devices": t.devices,
            "repair_line_items": t.repair_line_items,
        })
    db.session.commit()
    return t


def trash_transaction(transaction_id: int) -> Transaction:
    t = get_transaction(transaction_id, include_deleted=False)
    t.deleted_at = utcnow()
    db.session.commit()
    current_app.logger.info("Moved transaction %s to trash", t.id)
    return t


def restore_transaction(transaction_id: int) -> Transaction:
    t = get_transaction(transaction_id)
    if t.deleted_at is None:
        raise TransactionNotFound(f"Transaction {transaction_id} is not in the trash")
    t.deleted_at = None
    db.session.commit()
    current_app.logger.info("Restored transaction %s from trash", t.id)
    return t


def purge_transaction(transaction_id: int) -> None:
    """Permanently delete a record. There is no undo."""
    t = get_transaction(transaction_id)
    db.session.delete(t)
    db.session.commit()
    current_app.logger.info("Permanently deleted transaction %s", transaction_id)


def list_trashed(store_code: str | None = None) -> list[Transaction]:
    """Trashed records, most recently deleted first."""
    q = db.session.query(Transaction).filter(Transaction.deleted_at.isnot(None))
    if store_code:
        q = q.filter(Transaction.store_code == store_code)
    return q.order_by(Transaction.deleted_at.desc(), Transaction.id.desc()).all()
