# Overview: Flask API routes for transactions; parses input and returns JSON responses.

# backend/repairdesk/routes/transactions.py
"""
Transaction routes: dashboard search, suggestions, CRUD, trash and invoices.

Deleting moves a record to the trash; /restore brings it back and /purge
removes it for good.
"""
from flask import Blueprint, request, jsonify, current_app

from ..models import Transaction
from ..services import transaction_service
from ..services.invoice_service import build_invoice
from ..services.search_service import search_transactions, transaction_suggestions
from ..services.transaction_service import TransactionNotFound
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_transaction,
    ValidationError,
)

TRANSACTION_POLICY = ModelValidationPolicy(
    writable_fields=set(transaction_service.TRANSACTION_MUTABLE_FIELDS),
    required_on_create={"customer_name", "phone_model", "transaction_date"},
)

transactions_bp = Blueprint("transactions", __name__, url_prefix="/api/transactions")


def _store_arg() -> str | None:
    store = request.args.get("store")
    return store.upper() if store else None


def _validated_patch(partial: bool) -> dict:
    payload = request.get_json(silent=True) or {}
    patch = validate_payload(model=Transaction, payload=payload, policy=TRANSACTION_POLICY, partial=partial)
    enforce_rules_transaction(patch, partial=partial, stores=current_app.config["STORES"].keys())
    return patch


@transactions_bp.get("")
def list_transactions():
    """
    Dashboard listing.

    Query params:
    - query: str (optional) - free-text search; empty lists everything newest first
    - limit: int (optional) - maximum number of records
    - store: str (optional) - restrict to one store code
    """
    query = request.args.get("query", "")
    limit = request.args.get("limit", type=int)
    if limit is not None and limit < 1:
        return jsonify({"error": "limit must be >= 1"}), 400

    records = search_transactions(query, limit, _store_arg())
    return jsonify({
        "items": [r.to_dict() for r in records],
        "count": len(records),
    })


@transactions_bp.get("/suggestions")
def suggestions():
    """Search box dropdown; empty until the query has a couple of characters."""
    items = transaction_suggestions(
        request.args.get("query", ""),
        limit=current_app.config["SEARCH_SUGGESTION_LIMIT"],
        min_length=current_app.config["SEARCH_SUGGESTION_MIN_LENGTH"],
        store_code=_store_arg(),
    )
    return jsonify({"items": items})


@transactions_bp.get("/trash")
def list_trash():
    items = transaction_service.list_trashed(_store_arg())
    return jsonify({"items": [t.to_dict() for t in items], "count": len(items)})


@transactions_bp.post("")
def create_transaction_route():
    try:
        patch = _validated_patch(partial=False)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        created = transaction_service.create_transaction(
            patch=patch,
            default_store=current_app.config["DEFAULT_STORE"],
        )
    except Exception:
        current_app.logger.exception("Failed to create transaction")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify(created.to_dict()), 201


@transactions_bp.get("/<int:transaction_id>")
def get_transaction_route(transaction_id: int):
    try:
        t = transaction_service.get_transaction(transaction_id)
    except TransactionNotFound:
        return jsonify({"error": "Transaction not found"}), 404
    return jsonify(t.to_dict())


@transactions_bp.put("/<int:transaction_id>")
def update_transaction_route(transaction_id: int):
    try:
        patch = _validated_patch(partial=True)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        updated = transaction_service.update_transaction(transaction_id=transaction_id, patch=patch)
    except TransactionNotFound:
        return jsonify({"error": "Transaction not found"}), 404

    return jsonify(updated.to_dict()), 200


@transactions_bp.delete("/<int:transaction_id>")
def trash_transaction_route(transaction_id: int):
    try:
        transaction_service.trash_transaction(transaction_id)
    except TransactionNotFound:
        return jsonify({"error": "Transaction not found"}), 404
    return jsonify({"ok": True, "message": "Deleted Customer."}), 200


@transactions_bp.post("/<int:transaction_id>/restore")
def restore_transaction_route(transaction_id: int):
    try:
        restored = transaction_service.restore_transaction(transaction_id)
    except TransactionNotFound:
        return jsonify({"error": "Transaction not found in trash"}), 404
    return jsonify(restored.to_dict()), 200


@transactions_bp.delete("/<int:transaction_id>/purge")
def purge_transaction_route(transaction_id: int):
    try:
        transaction_service.purge_transaction(transaction_id)
    except TransactionNotFound:
        return jsonify({"error": "Transaction not found"}), 404
    return jsonify({"ok": True, "message": "Permanently Deleted Customer."}), 200


@transactions_bp.get("/<int:transaction_id>/invoice")
def invoice_route(transaction_id: int):
    """Tax invoice / receipt figures for one transaction."""
    try:
        t = transaction_service.get_transaction(transaction_id)
    except TransactionNotFound:
        return jsonify({"error": "Transaction not found"}), 404

    store = current_app.config["STORES"].get(t.store_code, {})
    return jsonify(build_invoice(t.to_record(), store))
