# Overview: Service-layer invoice/receipt figures; line items, GST-inclusive totals, invoice document.

"""
Invoice and receipt totals.

Prices are GST-inclusive: the total is what the customer pays and GST
(10%) is extracted from it, never added on top:

    subtotal = total / 1.1
    gst      = total - subtotal

Line items come from exactly one source, in priority order:

1. devices            - one line per sold device
2. repair_line_items  - one line per repair job priced above zero
3. legacy fallback    - one line for the selected repair items (or
                        "Phone Sale") priced at phone_price

Unparsable or missing prices count as zero. Figures stay unrounded until
to_dict(), which rounds each one to cents.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any

from ..records import TransactionRecord
from ..time_utils import as_date
from .policies import PolicyType, get_policy_text
from .repair_catalog import describe_repair_items

GST_DIVISOR = Decimal("1.1")
CENTS = Decimal("0.01")
ZERO = Decimal("0")

SOURCE_DEVICES = "devices"
SOURCE_REPAIR_LINES = "repair_line_items"
SOURCE_LEGACY = "legacy"

FALLBACK_LABEL = "Phone Sale"
DEFAULT_NOTES = "Thank you for your business. Please retain this invoice for warranty purposes."

# Leading number, the way a lenient float parse reads "550", "550.5", ".5" or "550abc"
_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_price(value: Any) -> Decimal:
    """
    Lenient price parse: "$1,200.50" -> 1200.50, "abc" / None / "" -> 0.

    Never raises.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, (int, float)):
        try:
            parsed = Decimal(str(value))
        except InvalidOperation:
            return ZERO
        return parsed if parsed.is_finite() else ZERO
    text = str(value).strip().replace("$", "").replace(",", "")
    match = _LEADING_NUMBER.match(text)
    if not match:
        return ZERO
    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return ZERO


def money(value: Decimal) -> str:
    """Render a Decimal as a 2dp string."""
    with localcontext() as ctx:
        # quantize needs every integer digit plus the two cents digits
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class LineItem:
    label: str
    amount: Decimal

    def to_dict(self) -> dict:
        return {"label": self.label, "amount": money(self.amount)}


@dataclass(frozen=True)
class InvoiceTotals:
    line_items: tuple[LineItem, ...]
    total: Decimal
    subtotal: Decimal
    gst: Decimal
    source: str
    repair_total: Decimal | None = None

    def to_dict(self) -> dict:
        return {
            "line_items": [li.to_dict() for li in self.line_items],
            "subtotal": money(self.subtotal),
            "gst": money(self.gst),
            "total": money(self.total),
            "source": self.source,
            "repair_total": money(self.repair_total) if self.repair_total is not None else None,
        }


def device_label(index: int, model: str, storage: str | None, imei: str | None) -> str:
    label = f"Device {index}: {model}"
    if storage:
        label += f" {storage}"
    if imei:
        label += f" (IMEI: {imei})"
    return label


def legacy_label(record: TransactionRecord) -> str:
    descriptions = describe_repair_items(record.repair_items)
    return "; ".join(descriptions) if descriptions else FALLBACK_LABEL


def select_line_items(record: TransactionRecord) -> tuple[str, list[LineItem]]:
    if record.devices:
        return SOURCE_DEVICES, [
            LineItem(device_label(i, d.model, d.storage, d.imei), parse_price(d.price))
            for i, d in enumerate(record.devices, start=1)
        ]

    repair_lines = []
    for li in record.repair_line_items:
        amount = parse_price(li.price)
        if amount > 0:
            repair_lines.append(LineItem(li.name, amount))
    if repair_lines:
        return SOURCE_REPAIR_LINES, repair_lines

    return SOURCE_LEGACY, [LineItem(legacy_label(record), parse_price(record.phone_price))]


def compute_totals(record: TransactionRecord) -> InvoiceTotals:
    source, line_items = select_line_items(record)
    total = sum((li.amount for li in line_items), ZERO)
    subtotal = total / GST_DIVISOR
    gst = total - subtotal
    return InvoiceTotals(
        line_items=tuple(line_items),
        total=total,
        subtotal=subtotal,
        gst=gst,
        source=source,
        repair_total=total if source == SOURCE_REPAIR_LINES else None,
    )


def policy_types_for(record: TransactionRecord) -> list[str]:
    """Distinct policy types of the record and its devices, first seen first."""
    seen: list[str] = []
    candidates = [record.policy_type, *(d.policy_type for d in record.devices)]
    for policy_type in candidates:
        if policy_type and policy_type not in seen:
            seen.append(policy_type)
    return seen


def policy_texts_for(record: TransactionRecord) -> list[dict]:
    texts = []
    for policy_type in policy_types_for(record):
        text = get_policy_text(policy_type, record.custom_policy_text)
        if text is None:
            continue
        if policy_type == PolicyType.CUSTOM.value and not text:
            continue
        texts.append({"policy_type": policy_type, "text": text})
    return texts


def display_invoice_number(record: TransactionRecord) -> str:
    """Assigned invoice number, or YYYYMMDD-000 for records created before numbering."""
    if record.invoice_number:
        return record.invoice_number
    tx_date = as_date(record.transaction_date)
    return f"{tx_date:%Y%m%d}-000"


def build_invoice(record: TransactionRecord, store: dict | None = None) -> dict:
    """
    Everything a tax invoice or 80mm receipt shows for one transaction.
    """
    totals = compute_totals(record)
    return {
        "invoice_number": display_invoice_number(record),
        "invoice_date": as_date(record.transaction_date).isoformat(),
        "store": store or {},
        "bill_to": {
            "customer_name": record.customer_name,
            "phone_number": record.phone_number,
            "device": " ".join(p for p in (record.phone_model, record.phone_storage) if p),
            "imei": record.phone_imei,
        },
        "warranty_months": record.warranty_period,
        **totals.to_dict(),
        "notes": record.notes or DEFAULT_NOTES,
        "policies": policy_texts_for(record),
    }
