from __future__ import annotations

from ..extensions import db
from ..records import TransactionRecord, devices_from, repair_lines_from
from ..time_utils import to_utc_z


def _warranty_months(value) -> int:
    # Legacy rows may carry junk here; treat it as no warranty.
    try:
        months = int(value)
    except (TypeError, ValueError):
        return 0
    return months if months > 0 else 0


class Transaction(db.Model):
    """
    One repair job or device sale, shown as a "customer" card on the dashboard.

    PRICING: exactly one representation is authoritative. If devices or
    positive-price repair_line_items are present their sum is the total,
    otherwise phone_price is. See services/invoice_service.py.

    LIFECYCLE: deleted_at NULL = active, set = in the trash. Restore clears it,
    purge removes the row.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        db.Index("ix_transactions_deleted_date", "deleted_at", "transaction_date"),
        db.Index("ix_transactions_store_invoice", "store_code", "invoice_number"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    store_code = db.Column(db.String(32), nullable=False, default="EASTWOOD", index=True)
    invoice_number = db.Column(db.String(32), nullable=True)

    customer_name = db.Column(db.String(128), nullable=False)
    phone_number = db.Column(db.String(32), nullable=True)

    # Legacy single-device shape
    phone_model = db.Column(db.String(128), nullable=False)
    phone_imei = db.Column(db.String(15), nullable=True)
    phone_storage = db.Column(db.String(16), nullable=True)
    phone_price = db.Column(db.String(32), nullable=False, default="0")
    repair_items = db.Column(db.JSON, nullable=False, default=list)

    # Multi-item shapes
    devices = db.Column(db.JSON, nullable=False, default=list)
    repair_line_items = db.Column(db.JSON, nullable=False, default=list)

    warranty_period = db.Column(db.Integer, nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)
    policy_type = db.Column(db.String(16), nullable=True)
    custom_policy_text = db.Column(db.Text, nullable=True)

    transaction_date = db.Column(db.Date, nullable=False, index=True)
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def to_record(self) -> TransactionRecord:
        return TransactionRecord(
            id=self.id,
            customer_name=self.customer_name or "",
            phone_model=self.phone_model or "",
            transaction_date=self.transaction_date,
            phone_price=self.phone_price or "",
            phone_number=self.phone_number,
            phone_imei=self.phone_imei,
            phone_storage=self.phone_storage,
            repair_items=tuple(self.repair_items or ()),
            devices=devices_from(self.devices),
            repair_line_items=repair_lines_from(self.repair_line_items),
            warranty_period=_warranty_months(self.warranty_period),
            notes=self.notes or "",
            policy_type=self.policy_type,
            custom_policy_text=self.custom_policy_text,
            invoice_number=self.invoice_number,
            store_code=self.store_code,
            deleted_at=self.deleted_at,
        )

    def to_dict(self) -> dict:
        data = self.to_record().to_dict()
        data["deleted_at"] = to_utc_z(self.deleted_at)
        data["created_at"] = to_utc_z(self.created_at)
        data["updated_at"] = to_utc_z(self.updated_at)
        return data
