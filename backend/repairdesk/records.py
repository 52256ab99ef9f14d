# Overview: In-memory transaction records consumed by search ranking and invoice totals.

"""
Plain value types for a repair/sale transaction.

The ORM model (models/transactions.py) converts itself into these via
Transaction.to_record() so the ranking and invoice code never touch the
database session.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable


@dataclass(frozen=True)
class DeviceItem:
    model: str
    price: str = ""
    imei: str | None = None
    storage: str | None = None
    policy_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "DeviceItem":
        return cls(
            model=str(data.get("model") or ""),
            price=str(data.get("price") if data.get("price") is not None else ""),
            imei=data.get("imei") or None,
            storage=data.get("storage") or None,
            policy_type=data.get("policy_type") or None,
        )

    def to_dict(self) -> dict:
        return {
            "model": self.model,
            "price": self.price,
            "imei": self.imei,
            "storage": self.storage,
            "policy_type": self.policy_type,
        }


@dataclass(frozen=True)
class RepairLineItem:
    name: str
    price: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "RepairLineItem":
        return cls(
            name=str(data.get("name") or ""),
            price=str(data.get("price") if data.get("price") is not None else ""),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "price": self.price}


@dataclass(frozen=True)
class TransactionRecord:
    """
    One repair or sale transaction ("customer" on the dashboard).

    Pricing is carried in one of three shapes: devices, repair_line_items,
    or the legacy repair_items + phone_price pair.
    """
    id: Any
    customer_name: str
    phone_model: str
    transaction_date: date | datetime
    phone_price: str = ""
    phone_number: str | None = None
    phone_imei: str | None = None
    phone_storage: str | None = None
    repair_items: tuple[str, ...] = ()
    devices: tuple[DeviceItem, ...] = ()
    repair_line_items: tuple[RepairLineItem, ...] = ()
    warranty_period: int = 0
    notes: str = ""
    policy_type: str | None = None
    custom_policy_text: str | None = None
    invoice_number: str | None = None
    store_code: str | None = None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def to_dict(self) -> dict:
        tx_date = self.transaction_date
        if isinstance(tx_date, datetime):
            tx_date = tx_date.date()
        return {
            "id": self.id,
            "store_code": self.store_code,
            "invoice_number": self.invoice_number,
            "customer_name": self.customer_name,
            "phone_number": self.phone_number,
            "phone_model": self.phone_model,
            "phone_imei": self.phone_imei,
            "phone_storage": self.phone_storage,
            "phone_price": self.phone_price,
            "transaction_date": tx_date.isoformat() if tx_date else None,
            "repair_items": list(self.repair_items),
            "devices": [d.to_dict() for d in self.devices],
            "repair_line_items": [li.to_dict() for li in self.repair_line_items],
            "warranty_period": self.warranty_period,
            "notes": self.notes,
            "policy_type": self.policy_type,
            "custom_policy_text": self.custom_policy_text,
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
        }


def devices_from(items: Iterable[dict] | None) -> tuple[DeviceItem, ...]:
    return tuple(DeviceItem.from_dict(d) for d in (items or []) if isinstance(d, dict))


def repair_lines_from(items: Iterable[dict] | None) -> tuple[RepairLineItem, ...]:
    return tuple(RepairLineItem.from_dict(d) for d in (items or []) if isinstance(d, dict))
