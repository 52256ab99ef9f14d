# Overview: Pytest coverage for invoice line items, GST-inclusive totals, and invoice documents.

from datetime import date
from decimal import Decimal

import pytest

from repairdesk.services.invoice_service import (
    SOURCE_DEVICES,
    SOURCE_LEGACY,
    SOURCE_REPAIR_LINES,
    build_invoice,
    compute_totals,
    parse_price,
)

EPSILON = Decimal("1e-9")


class TestParsePrice:
    @pytest.mark.parametrize("raw, expected", [
        ("550", Decimal("550")),
        ("550.50", Decimal("550.50")),
        ("550abc", Decimal("550")),
        (".5", Decimal("0.5")),
        ("$1,200.50", Decimal("1200.50")),
        (12.5, Decimal("12.5")),
        (3, Decimal("3")),
    ])
    def test_lenient_numbers(self, raw, expected):
        assert parse_price(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "nan", "NaN", "-", float("nan"), float("inf")])
    def test_garbage_is_zero(self, raw):
        assert parse_price(raw) == Decimal("0")


class TestLineItemSource:
    def test_devices_scenario(self, make_record):
        record = make_record(devices=[
            {"model": "iPhone 13", "price": "550"},
            {"model": "iPhone 14", "price": "750"},
        ])

        totals = compute_totals(record)
        rendered = totals.to_dict()

        assert totals.source == SOURCE_DEVICES
        assert [li.label for li in totals.line_items] == ["Device 1: iPhone 13", "Device 2: iPhone 14"]
        assert rendered["total"] == "1300.00"
        assert rendered["subtotal"] == "1181.82"
        assert rendered["gst"] == "118.18"
        assert rendered["repair_total"] is None

    def test_device_label_includes_storage_and_imei(self, make_record):
        record = make_record(devices=[
            {"model": "iPhone 14 Pro", "price": "900", "storage": "256GB", "imei": "356938035643809"},
        ])

        [line] = compute_totals(record).line_items

        assert line.label == "Device 1: iPhone 14 Pro 256GB (IMEI: 356938035643809)"

    def test_unparsable_device_price_counts_as_zero(self, make_record):
        record = make_record(devices=[
            {"model": "iPhone 13", "price": "tbc"},
            {"model": "iPhone 14", "price": "750"},
        ])

        totals = compute_totals(record)

        assert [li.amount for li in totals.line_items] == [Decimal("0"), Decimal("750")]
        assert totals.total == Decimal("750")

    def test_devices_win_over_everything_else(self, make_record):
        record = make_record(
            devices=[{"model": "Pixel 8", "price": "400"}],
            repair_line_items=[{"name": "Screen", "price": "150"}],
            repair_items=["screen_repair"],
            phone_price="999",
        )

        totals = compute_totals(record)

        assert totals.source == SOURCE_DEVICES
        assert totals.total == Decimal("400")
        assert len(totals.line_items) == 1

    def test_repair_lines_drop_zero_and_unparsable_prices(self, make_record):
        record = make_record(repair_line_items=[
            {"name": "Screen replacement", "price": "150"},
            {"name": "Free check", "price": "0"},
            {"name": "Quote pending", "price": "ask"},
            {"name": "Rear camera", "price": "80"},
        ])

        totals = compute_totals(record)

        assert totals.source == SOURCE_REPAIR_LINES
        assert [li.label for li in totals.line_items] == ["Screen replacement", "Rear camera"]
        assert totals.total == Decimal("230")
        assert totals.repair_total == Decimal("230")
        assert totals.to_dict()["repair_total"] == "230.00"

    def test_all_zero_repair_lines_fall_through_to_legacy(self, make_record):
        record = make_record(
            repair_line_items=[{"name": "Free check", "price": "0"}],
            repair_items=["screen_repair"],
            phone_price="220",
        )

        totals = compute_totals(record)
        rendered = totals.to_dict()

        assert totals.source == SOURCE_LEGACY
        assert [li.label for li in totals.line_items] == ["Screen Repair"]
        assert rendered["total"] == "220.00"
        assert rendered["subtotal"] == "200.00"
        assert rendered["gst"] == "20.00"
        assert totals.repair_total is None

    def test_legacy_label_joins_paths_and_custom_text(self, make_record):
        record = make_record(repair_items=["custom:Back glass swap", "incell_120hz"])

        [line] = compute_totals(record).line_items

        assert line.label == "Back glass swap; Screen Repair > aftermaket incell > 120hz"

    def test_legacy_without_items_is_a_phone_sale(self, make_record):
        record = make_record(repair_items=[], phone_price="650")

        [line] = compute_totals(record).line_items

        assert line.label == "Phone Sale"
        assert line.amount == Decimal("650")

    def test_unparsable_flat_price_is_zero(self, make_record):
        record = make_record(phone_price="n/a")

        rendered = compute_totals(record).to_dict()

        assert rendered["total"] == "0.00"
        assert rendered["subtotal"] == "0.00"
        assert rendered["gst"] == "0.00"


class TestGst:
    @pytest.mark.parametrize("price", ["0.01", "1", "19.99", "220", "1299.95", "100000"])
    def test_gst_identity(self, make_record, price):
        totals = compute_totals(make_record(phone_price=price))

        assert abs(totals.subtotal + totals.gst - totals.total) < EPSILON
        assert abs(totals.total / Decimal("1.1") - totals.subtotal) < EPSILON

    def test_rounding_happens_once_at_render(self, make_record):
        record = make_record(repair_line_items=[
            {"name": "Part A", "price": "0.05"},
            {"name": "Part B", "price": "0.05"},
            {"name": "Part C", "price": "0.05"},
        ])

        totals = compute_totals(record)

        # Unrounded internally
        assert totals.subtotal != totals.subtotal.quantize(Decimal("0.01"))
        rendered = totals.to_dict()
        assert rendered["total"] == "0.15"
        assert rendered["subtotal"] == "0.14"
        assert rendered["gst"] == "0.01"


class TestBuildInvoice:
    def test_fallback_invoice_number_and_default_notes(self, make_record):
        record = make_record(invoice_number=None, notes="", transaction_date=date(2023, 10, 26))

        invoice = build_invoice(record)

        assert invoice["invoice_number"] == "20231026-000"
        assert invoice["invoice_date"] == "2023-10-26"
        assert invoice["notes"].startswith("Thank you for your business.")

    def test_assigned_invoice_number_is_used(self, make_record):
        record = make_record(invoice_number="20231026-004")

        assert build_invoice(record)["invoice_number"] == "20231026-004"

    def test_bill_to_block(self, make_record):
        record = make_record(
            customer_name="Jane Citizen",
            phone_number="0412345678",
            phone_model="iPhone 13",
            phone_storage="128GB",
            phone_imei="356938035643809",
            warranty_period=3,
        )

        invoice = build_invoice(record, {"name": "PHONE MECHANIC"})

        assert invoice["store"] == {"name": "PHONE MECHANIC"}
        assert invoice["bill_to"] == {
            "customer_name": "Jane Citizen",
            "phone_number": "0412345678",
            "device": "iPhone 13 128GB",
            "imei": "356938035643809",
        }
        assert invoice["warranty_months"] == 3

    def test_policies_are_distinct_in_first_seen_order(self, make_record):
        record = make_record(
            policy_type="standard",
            devices=[
                {"model": "iPhone 12", "price": "300", "policy_type": "sale"},
                {"model": "iPhone 11", "price": "200", "policy_type": "standard"},
                {"model": "iPhone X", "price": "100", "policy_type": "bogus"},
            ],
        )

        policies = build_invoice(record)["policies"]

        assert [p["policy_type"] for p in policies] == ["standard", "sale"]
        assert policies[0]["text"].startswith("Standard Repair Warranty")

    def test_custom_policy_text(self, make_record):
        record = make_record(policy_type="custom", custom_policy_text="30 day warranty on labour only.")

        policies = build_invoice(record)["policies"]

        assert policies == [{"policy_type": "custom", "text": "30 day warranty on labour only."}]

    def test_empty_custom_policy_is_left_off(self, make_record):
        record = make_record(policy_type="custom", custom_policy_text=None)

        assert build_invoice(record)["policies"] == []


class TestWidePrices:
    def test_money_renders_beyond_default_precision(self):
        from repairdesk.services.invoice_service import money

        assert money(Decimal("1" + "0" * 30)) == "1" + "0" * 30 + ".00"

    def test_oversized_stored_price_still_renders(self, make_record):
        record = make_record(phone_price="1" + "0" * 30)

        rendered = build_invoice(record)

        assert rendered["total"] == "1" + "0" * 30 + ".00"
        assert Decimal(rendered["subtotal"]) + Decimal(rendered["gst"]) == Decimal(rendered["total"])
