# Overview: Pytest coverage for the flask CLI command groups.

from repairdesk.models import PhoneModel


def test_phone_models_seed_and_list(app, db_session):
    runner = app.test_cli_runner()

    seeded = runner.invoke(args=["phone-models", "seed"])
    listed = runner.invoke(args=["phone-models", "list", "--brand", "Google"])

    assert seeded.exit_code == 0
    assert "Seeded" in seeded.output
    assert "Pixel 8" in listed.output
    assert "iPhone" not in listed.output
    assert db_session.query(PhoneModel).count() > 0


def test_transactions_search(app, db_session, add_transaction):
    add_transaction(customer_name="Jane Citizen", phone_number="0412345678")
    runner = app.test_cli_runner()

    hit = runner.invoke(args=["transactions", "search", "5678"])
    miss = runner.invoke(args=["transactions", "search", "zzzz"])

    assert "Jane Citizen" in hit.output
    assert "125" in hit.output
    assert "No customers found." in miss.output


def test_transactions_invoice(app, db_session, add_transaction):
    t = add_transaction(phone_price="220", invoice_number="20231026-001")
    runner = app.test_cli_runner()

    result = runner.invoke(args=["transactions", "invoice", str(t.id)])
    missing = runner.invoke(args=["transactions", "invoice", "99999"])

    assert result.exit_code == 0
    assert "Invoice #: 20231026-001" in result.output
    assert "$200.00" in result.output
    assert "$20.00" in result.output
    assert missing.exit_code != 0
