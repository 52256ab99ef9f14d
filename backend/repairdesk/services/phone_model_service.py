# Overview: Service-layer operations for the phone model catalog.

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import PhoneModel
from ..validation import ConflictError

PHONE_MODEL_MUTABLE_FIELDS = {"brand", "model_name", "is_active", "sort_order"}

# Brands whose marketing names carry the brand as a prefix ("Samsung Galaxy S23")
_PREFIXED_BRANDS = ("Samsung", "OPPO", "Motorola", "Google", "Xiaomi", "Redmi", "POCO")

DEFAULT_PHONE_MODELS = [
    "iPhone 11", "iPhone 11 Pro", "iPhone 11 Pro Max",
    "iPhone 12 mini", "iPhone 12", "iPhone 12 Pro", "iPhone 12 Pro Max",
    "iPhone 13 mini", "iPhone 13", "iPhone 13 Pro", "iPhone 13 Pro Max",
    "iPhone 14", "iPhone 14 Plus", "iPhone 14 Pro", "iPhone 14 Pro Max",
    "iPhone 15", "iPhone 15 Plus", "iPhone 15 Pro", "iPhone 15 Pro Max",
    "iPhone SE (2nd generation)", "iPhone SE (3rd generation)",
    "Samsung Galaxy S21", "Samsung Galaxy S22", "Samsung Galaxy S23", "Samsung Galaxy S23 Ultra",
    "Samsung Galaxy A54", "Samsung Galaxy A34",
    "OPPO Find X5", "OPPO A77",
    "Motorola Moto G84",
    "Google Pixel 7", "Google Pixel 7 Pro", "Google Pixel 8", "Google Pixel 8 Pro",
    "Xiaomi 13T",
    "Redmi Note 12",
    "POCO X5 Pro",
]


def split_brand(name: str) -> tuple[str, str]:
    """
    "Samsung Galaxy S23" -> ("Samsung", "Galaxy S23"); "iPhone 13" -> ("Apple", "iPhone 13").

    Names with no known brand prefix are filed under Apple.
    """
    name = name.strip()
    if name.startswith("iPhone"):
        return "Apple", name
    for brand in _PREFIXED_BRANDS:
        if name.startswith(f"{brand} "):
            return brand, name[len(brand):].strip()
    return "Apple", name


def list_phone_models(
    *,
    brand: str | None = None,
    search: str | None = None,
    active_only: bool = False,
) -> list[PhoneModel]:
    q = db.session.query(PhoneModel)
    if brand:
        q = q.filter(PhoneModel.brand == brand)
    if active_only:
        q = q.filter(PhoneModel.is_active.is_(True))
    models = q.order_by(PhoneModel.brand.asc(), PhoneModel.sort_order.asc(), PhoneModel.model_name.asc()).all()
    if search:
        needle = search.lower()
        models = [m for m in models if needle in m.model_name.lower()]
    return models


def _commit_or_conflict(brand: str, model_name: str) -> None:
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(f"Phone model already exists: {brand} {model_name}")


def create_phone_model(*, patch: dict) -> PhoneModel:
    m = PhoneModel()
    for k, v in patch.items():
        if k in PHONE_MODEL_MUTABLE_FIELDS:
            setattr(m, k, v)
    db.session.add(m)
    _commit_or_conflict(m.brand, m.model_name)
    return m


def update_phone_model(*, phone_model_id: int, patch: dict) -> PhoneModel | None:
    m = db.session.get(PhoneModel, phone_model_id)
    if m is None:
        return None
    for k, v in patch.items():
        if k in PHONE_MODEL_MUTABLE_FIELDS:
            setattr(m, k, v)
    _commit_or_conflict(m.brand, m.model_name)
    return m


def delete_phone_model(*, phone_model_id: int) -> bool:
    m = db.session.get(PhoneModel, phone_model_id)
    if m is None:
        return False
    db.session.delete(m)
    db.session.commit()
    return True


def seed_phone_models(names: list[str] | None = None) -> int:
    """Insert missing catalog entries; existing (brand, model) pairs are left alone. Returns rows added."""
    existing = {(m.brand, m.model_name) for m in db.session.query(PhoneModel).all()}
    added = 0
    for name in names if names is not None else DEFAULT_PHONE_MODELS:
        brand, model_name = split_brand(name)
        if (brand, model_name) in existing:
            continue
        db.session.add(PhoneModel(brand=brand, model_name=model_name, is_active=True, sort_order=0))
        existing.add((brand, model_name))
        added += 1
    db.session.commit()
    return added
