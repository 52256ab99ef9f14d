from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class PhoneModel(db.Model):
    """
    Catalog of phone model names offered when entering a transaction.

    Free text is still accepted on the transaction itself; this list only
    drives suggestions.
    """
    __tablename__ = "phone_models"
    __table_args__ = (
        db.UniqueConstraint("brand", "model_name", name="uq_phone_models_brand_name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    brand = db.Column(db.String(64), nullable=False, index=True)
    model_name = db.Column(db.String(128), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "brand": self.brand,
            "model_name": self.model_name,
            "is_active": self.is_active,
            "sort_order": self.sort_order,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
