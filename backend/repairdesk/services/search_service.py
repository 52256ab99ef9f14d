# Overview: Service-layer operations for dashboard search; scores and orders transaction records.

"""
Dashboard search.

Every active record is scored against the free-text query with independent,
additive field bands (phone digits, IMEI, name, model, repair description,
notes, price, date). Records scoring zero are dropped; the rest are ordered
by score, newest transaction first on ties.

The scoring functions are pure and work on TransactionRecord values;
search_transactions() and transaction_suggestions() load the active rows
from the database first.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Iterable, Sequence

from dateutil import parser as date_parser

from ..extensions import db
from ..models import Transaction
from ..records import TransactionRecord
from ..time_utils import as_date
from .repair_catalog import describe_repair_items

# Field bands
PHONE_EXACT = 110
PHONE_SUFFIX = 90
PHONE_PARTIAL = 35
PHONE_SUFFIX_MIN_DIGITS = 3
IMEI_EXACT = 120
IMEI_PARTIAL = 40
NAME_EXACT = 80
NAME_PARTIAL = 25
MODEL_EXACT = 40
MODEL_PARTIAL = 15
REPAIR_PARTIAL = 20
NOTES_PARTIAL = 10
PRICE_EXACT = 50
PRICE_PARTIAL = 5
DATE_PARSED = 50
DATE_ISO_PARTIAL = 10
DATE_DDMMYYYY = 70

_NON_DIGITS = re.compile(r"\D+")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Two unrelated defaults: a parse that only fills in from the default
# (e.g. "march" or "2023") comes out different under each.
_PARSE_DEFAULT_A = datetime(2000, 1, 1)
_PARSE_DEFAULT_B = datetime(2001, 2, 2)


def digits_only(value: str | None) -> str:
    if not value:
        return ""
    return _NON_DIGITS.sub("", value)


def _equals(value: str, needle: str) -> bool:
    return bool(value) and bool(needle) and value == needle


def _contains(value: str, needle: str) -> bool:
    # "" in "" is True in Python; an empty field or needle never matches.
    return bool(value) and bool(needle) and needle in value


def parse_query_date(text: str) -> date | None:
    """
    Interpret the query as a full calendar date, or return None.

    ISO dates are read as year-month-day; anything else goes through
    dateutil with day-first ordering (26/10/2023, 26 Oct 2023). Partial
    dates such as "Oct 2023" are not a match.
    """
    text = text.strip()
    if not text or not any(ch.isdigit() for ch in text):
        return None
    if _ISO_DATE.match(text):
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    try:
        first = date_parser.parse(text, dayfirst=True, default=_PARSE_DEFAULT_A)
        second = date_parser.parse(text, dayfirst=True, default=_PARSE_DEFAULT_B)
    except (ValueError, OverflowError, TypeError):
        return None
    if first.date() != second.date():
        return None
    return first.date()


def parse_ddmmyyyy(numeric: str) -> date | None:
    if len(numeric) != 8:
        return None
    try:
        return date(int(numeric[4:8]), int(numeric[2:4]), int(numeric[0:2]))
    except ValueError:
        return None


def repair_description(record: TransactionRecord) -> str:
    return " | ".join(describe_repair_items(record.repair_items))


def score_record(record: TransactionRecord, query: str) -> int:
    """
    Additive match score of one record against a query.

    Bands are independent: an exact match also earns the containment band
    for the same field.
    """
    q = (query or "").strip().lower()
    if not q:
        return 0
    numeric_query = digits_only(q)
    score = 0

    if numeric_query:
        phone = digits_only(record.phone_number)
        if _equals(phone, numeric_query):
            score += PHONE_EXACT
        if (
            phone
            and len(numeric_query) >= PHONE_SUFFIX_MIN_DIGITS
            and phone.endswith(numeric_query)
        ):
            score += PHONE_SUFFIX
        if _contains(phone, numeric_query):
            score += PHONE_PARTIAL

    imei = (record.phone_imei or "").lower()
    if _equals(imei, q):
        score += IMEI_EXACT
    if _contains(imei, q):
        score += IMEI_PARTIAL

    name = (record.customer_name or "").lower()
    if _equals(name, q):
        score += NAME_EXACT
    if _contains(name, q):
        score += NAME_PARTIAL

    model = (record.phone_model or "").lower()
    if _equals(model, q):
        score += MODEL_EXACT
    if _contains(model, q):
        score += MODEL_PARTIAL

    if _contains(repair_description(record).lower(), q):
        score += REPAIR_PARTIAL

    if _contains((record.notes or "").lower(), q):
        score += NOTES_PARTIAL

    price = (record.phone_price or "").lower()
    if _equals(price, q):
        score += PRICE_EXACT
    if _contains(price, q):
        score += PRICE_PARTIAL

    tx_date = as_date(record.transaction_date)
    if tx_date is not None:
        if parse_query_date(q) == tx_date:
            score += DATE_PARSED
        if _contains(tx_date.isoformat(), q):
            score += DATE_ISO_PARTIAL
        if parse_ddmmyyyy(numeric_query) == tx_date:
            score += DATE_DDMMYYYY

    return score


def _date_key(record: TransactionRecord) -> int:
    tx_date = as_date(record.transaction_date)
    return tx_date.toordinal() if tx_date else 0


def rank_records(
    records: Iterable[TransactionRecord],
    query: str | None,
    limit: int | None = None,
) -> list[TransactionRecord]:
    """
    Order records for a dashboard query.

    Empty query: every record, newest first. Otherwise only records with a
    positive score, best score first, newest first on ties.
    """
    records = list(records)
    if not query or not query.strip():
        ordered = sorted(records, key=_date_key, reverse=True)
    else:
        scored = [(score_record(r, query), r) for r in records]
        scored = [(s, r) for s, r in scored if s > 0]
        scored.sort(key=lambda item: (item[0], _date_key(item[1])), reverse=True)
        ordered = [r for _, r in scored]

    if limit is not None:
        ordered = ordered[:limit]
    return ordered


def load_active_records(store_code: str | None = None) -> list[TransactionRecord]:
    """All non-deleted transactions, optionally for one store."""
    q = db.session.query(Transaction).filter(Transaction.deleted_at.is_(None))
    if store_code:
        q = q.filter(Transaction.store_code == store_code)
    return [t.to_record() for t in q.all()]


def search_transactions(
    query: str | None = "",
    limit: int | None = None,
    store_code: str | None = None,
) -> list[TransactionRecord]:
    return rank_records(load_active_records(store_code), query or "", limit)


def transaction_suggestions(
    query: str | None,
    *,
    limit: int = 5,
    min_length: int = 2,
    store_code: str | None = None,
) -> list[dict]:
    """
    Compact hits for the search box dropdown.

    Queries shorter than min_length return nothing without touching the
    database.
    """
    if not query or len(query) < min_length:
        return []
    records: Sequence[TransactionRecord] = search_transactions(query, limit, store_code)
    return [
        {
            "id": r.id,
            "customer_name": r.customer_name,
            "phone_model": r.phone_model,
            "transaction_date": as_date(r.transaction_date).isoformat(),
            "repair_description": "; ".join(describe_repair_items(r.repair_items)),
        }
        for r in records
    ]
