"""
Pytest fixtures for repairdesk backend tests.

Provides an in-memory database, a test client, and a factory for plain
TransactionRecord values used by the ranking and invoice tests.
"""

from datetime import date

import pytest
from repairdesk import create_app
from repairdesk.extensions import db
from repairdesk.models import Transaction
from repairdesk.records import TransactionRecord, devices_from, repair_lines_from


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture
def make_record():
    """Build a TransactionRecord with sensible defaults; devices/lines may be given as dicts."""
    counter = {"id": 0}

    def _make(**overrides) -> TransactionRecord:
        counter["id"] += 1
        fields = {
            "id": counter["id"],
            "customer_name": "Jane Citizen",
            "phone_model": "iPhone 13",
            "transaction_date": date(2023, 10, 26),
            "phone_price": "220",
        }
        fields.update(overrides)
        if "devices" in fields:
            fields["devices"] = devices_from(fields["devices"])
        if "repair_line_items" in fields:
            fields["repair_line_items"] = repair_lines_from(fields["repair_line_items"])
        if "repair_items" in fields:
            fields["repair_items"] = tuple(fields["repair_items"])
        return TransactionRecord(**fields)

    return _make


@pytest.fixture
def add_transaction(db_session):
    """Insert a Transaction row directly, bypassing validation and numbering."""
    def _add(**overrides) -> Transaction:
        fields = {
            "store_code": "EASTWOOD",
            "customer_name": "Jane Citizen",
            "phone_model": "iPhone 13",
            "phone_price": "220",
            "transaction_date": date(2023, 10, 26),
            "repair_items": [],
            "devices": [],
            "repair_line_items": [],
            "warranty_period": 3,
        }
        fields.update(overrides)
        t = Transaction(**fields)
        db_session.add(t)
        db_session.commit()
        return t

    return _add


@pytest.fixture
def transaction_payload():
    """Valid create payload for the transactions API."""
    def _payload(**overrides) -> dict:
        payload = {
            "customer_name": "Jane Citizen",
            "phone_number": "0412345678",
            "phone_model": "iPhone 13",
            "phone_imei": "356938035643809",
            "phone_price": "220",
            "transaction_date": "2023-10-26",
            "repair_items": ["screen_repair"],
            "warranty_period": 3,
            "policy_type": "standard",
        }
        payload.update(overrides)
        return payload

    return _payload
