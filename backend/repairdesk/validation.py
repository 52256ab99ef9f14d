from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeMeta

from .services.policies import POLICY_TYPES
from .services.repair_catalog import is_custom, known_ids
from .time_utils import parse_iso_date

MAX_IMEI_LENGTH = 15
MIN_NAME_LENGTH = 2

# Up to 999,999,999.99
_PLAIN_NUMBER = re.compile(r"^\d{1,9}(\.\d{1,2})?$")


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., duplicate phone model)."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set
    - required_on_create: fields required for POST
    """
    writable_fields: set[str]
    required_on_create: set[str] = None  # type: ignore


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _coerce_value(col, value: Any):
    coltype = col.type

    if value is None:
        return None

    # Integers - strict validation to reject floats and scientific notation
    if isinstance(coltype, Integer):
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped or not stripped.lstrip("-").isdigit():
                raise ValidationError(f"{col.key} must be an integer")
            return int(stripped)
        raise ValidationError(f"{col.key} must be an integer")

    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        return bool(value)

    # Check DateTime before Date: calendar dates arrive as 'YYYY-MM-DD'
    if isinstance(coltype, DateTime):
        if isinstance(value, datetime):
            return value
        raise ValidationError(f"{col.key} must be a datetime")

    if isinstance(coltype, Date):
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                parsed = parse_iso_date(value)
            except ValueError:
                raise ValidationError(f"{col.key} must be a YYYY-MM-DD date")
            if parsed is None:
                raise ValidationError(f"{col.key} must be a YYYY-MM-DD date")
            return parsed
        raise ValidationError(f"{col.key} must be a YYYY-MM-DD date")

    if isinstance(coltype, JSON):
        if not isinstance(value, list):
            raise ValidationError(f"{col.key} must be a list")
        return value

    # Strings / Text (prices arrive as numbers from some clients)
    if isinstance(coltype, (String, Text)):
        if isinstance(value, (dict, list)):
            raise ValidationError(f"{col.key} must be a string")
        return str(value).strip()

    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - a policy allowlist (writable_fields)
    - required_on_create (if partial=False)
    Returns a cleaned patch dict with only writable fields.

    partial=False: create semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    required = policy.required_on_create or set()
    if not partial:
        missing = sorted(f for f in required if f not in payload)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cols = _columns_by_key(model)

    for k in payload.keys():
        if k not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {k}")
        if k not in cols:
            raise ValidationError(f"Unknown field: {k}")

    patch: dict = {}

    for k, raw in payload.items():
        col = cols[k]

        if raw is None:
            if not col.nullable:
                raise ValidationError(f"{k} cannot be null")
            patch[k] = None
            continue

        val = _coerce_value(col, raw)

        if isinstance(col.type, (String, Text)) and not col.nullable:
            if isinstance(val, str) and val == "":
                raise ValidationError(f"{k} cannot be blank")

        # Optional text fields: blank means "not set"
        if isinstance(col.type, (String, Text)) and col.nullable and val == "":
            val = None

        if isinstance(col.type, String) and col.type.length and isinstance(val, str):
            if len(val) > col.type.length:
                raise ValidationError(f"{k} exceeds max length {col.type.length}")

        patch[k] = val

    return patch


def _is_positive_price(value: Any) -> bool:
    text = str(value).strip().replace("$", "").replace(",", "")
    return bool(_PLAIN_NUMBER.match(text)) and float(text) > 0


def _is_price(value: Any) -> bool:
    text = str(value).strip().replace("$", "").replace(",", "")
    return text == "" or bool(_PLAIN_NUMBER.match(text))


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _validate_policy_type(value: Any, field: str) -> str | None:
    if value in (None, ""):
        return None
    if value not in POLICY_TYPES:
        raise ValidationError(f"{field} must be one of: {', '.join(sorted(POLICY_TYPES))}")
    return value


def _validate_devices(items: list) -> list[dict]:
    cleaned = []
    for i, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ValidationError(f"devices[{i}] must be an object")
        model = _clean_text(item.get("model"))
        if not model:
            raise ValidationError(f"devices[{i}].model is required")
        price = item.get("price")
        if price is None or not _is_price(price):
            raise ValidationError(f"devices[{i}].price must be a number")
        imei = _clean_text(item.get("imei"))
        if imei and len(imei) > MAX_IMEI_LENGTH:
            raise ValidationError(f"devices[{i}].imei cannot be more than {MAX_IMEI_LENGTH} digits")
        cleaned.append({
            "model": model,
            "price": str(price).strip(),
            "imei": imei,
            "storage": _clean_text(item.get("storage")),
            "policy_type": _validate_policy_type(item.get("policy_type"), f"devices[{i}].policy_type"),
        })
    return cleaned


def _validate_repair_lines(items: list) -> list[dict]:
    cleaned = []
    for i, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ValidationError(f"repair_line_items[{i}] must be an object")
        name = _clean_text(item.get("name"))
        if not name:
            raise ValidationError(f"repair_line_items[{i}].name is required")
        price = item.get("price")
        if price is None:
            price = ""
        if not _is_price(price):
            raise ValidationError(f"repair_line_items[{i}].price must be a number")
        cleaned.append({"name": name, "price": str(price).strip()})
    return cleaned


def _validate_repair_items(items: list) -> list[str]:
    ids = known_ids()
    cleaned = []
    for tag in items:
        if not isinstance(tag, str) or not tag.strip():
            raise ValidationError("repair_items must be a list of category ids")
        tag = tag.strip()
        if is_custom(tag):
            if not tag.split(":", 1)[1].strip():
                raise ValidationError("custom repair items need a description")
        elif tag not in ids:
            raise ValidationError(f"Unknown repair item: {tag}")
        if tag not in cleaned:
            cleaned.append(tag)
    return cleaned


def enforce_rules_transaction(patch: dict, *, partial: bool, stores: Iterable[str]) -> None:
    """
    Business rules that are not captured by SQLAlchemy metadata alone.
    Normalizes the nested list fields in place.
    """
    for field in ("customer_name", "phone_model"):
        if field in patch and len(patch[field] or "") < MIN_NAME_LENGTH:
            raise ValidationError(f"{field} must be at least {MIN_NAME_LENGTH} characters")

    if "store_code" in patch:
        patch["store_code"] = (patch["store_code"] or "").upper()
        if patch["store_code"] not in set(stores):
            raise ValidationError(f"Unknown store: {patch['store_code']}")

    if "warranty_period" in patch and patch["warranty_period"] is not None:
        if patch["warranty_period"] < 0:
            raise ValidationError("warranty_period cannot be negative")

    if "policy_type" in patch:
        patch["policy_type"] = _validate_policy_type(patch["policy_type"], "policy_type")

    if "devices" in patch:
        patch["devices"] = _validate_devices(patch["devices"])
    if "repair_line_items" in patch:
        patch["repair_line_items"] = _validate_repair_lines(patch["repair_line_items"])
    if "repair_items" in patch:
        patch["repair_items"] = _validate_repair_items(patch["repair_items"])

    itemized = bool(patch.get("devices")) or bool(patch.get("repair_line_items"))
    if "phone_price" in patch and not itemized:
        if not _is_positive_price(patch["phone_price"]):
            raise ValidationError("phone_price must be a valid positive number")
    if not partial and not itemized and "phone_price" not in patch:
        raise ValidationError("phone_price is required when no devices or repair line items are given")
