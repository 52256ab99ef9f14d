# Overview: Flask API routes for the phone model catalog and repair item taxonomy.

from flask import Blueprint, request, jsonify

from ..models import PhoneModel
from ..services import phone_model_service
from ..services.repair_catalog import catalog_as_dict
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    ValidationError,
    ConflictError,
)

PHONE_MODEL_POLICY = ModelValidationPolicy(
    writable_fields={"brand", "model_name", "is_active", "sort_order"},
    required_on_create={"brand", "model_name"},
)

catalog_bp = Blueprint("catalog", __name__, url_prefix="/api")


@catalog_bp.get("/repair-items")
def repair_items():
    """Repair category tree for the item selector."""
    return jsonify({"items": catalog_as_dict()})


@catalog_bp.get("/phone-models")
def list_phone_models():
    """
    Query params:
    - brand: str (optional)
    - search: str (optional) - case-insensitive substring of the model name
    - active: "1"/"true" (optional) - only active entries
    """
    active = (request.args.get("active") or "").lower() in {"1", "true", "yes"}
    models = phone_model_service.list_phone_models(
        brand=request.args.get("brand"),
        search=request.args.get("search"),
        active_only=active,
    )
    return jsonify({"items": [m.to_dict() for m in models], "count": len(models)})


@catalog_bp.post("/phone-models")
def create_phone_model_route():
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=PhoneModel, payload=payload, policy=PHONE_MODEL_POLICY, partial=False)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        created = phone_model_service.create_phone_model(patch=patch)
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409

    return jsonify(created.to_dict()), 201


@catalog_bp.put("/phone-models/<int:phone_model_id>")
def update_phone_model_route(phone_model_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=PhoneModel, payload=payload, policy=PHONE_MODEL_POLICY, partial=True)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        updated = phone_model_service.update_phone_model(phone_model_id=phone_model_id, patch=patch)
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409

    if not updated:
        return jsonify({"error": "Phone model not found"}), 404
    return jsonify(updated.to_dict()), 200


@catalog_bp.delete("/phone-models/<int:phone_model_id>")
def delete_phone_model_route(phone_model_id: int):
    if not phone_model_service.delete_phone_model(phone_model_id=phone_model_id):
        return jsonify({"error": "Phone model not found"}), 404
    return jsonify({"ok": True}), 200
