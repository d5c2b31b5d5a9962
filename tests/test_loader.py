"""Tests for invoice definition loading and validation."""

import json
from datetime import datetime
from decimal import Decimal

import pytest
import yaml

from gst_invoice.io.loader import load_invoice
from gst_invoice.io.validators import InvoiceValidator
from gst_invoice.models.invoice import PaymentMethod
from gst_invoice.utils.exceptions import InvoiceLoadError


def definition(**overrides):
    data = {
        "invoice_no": "VMP-19102026-0417",
        "invoice_date": "2026-10-19",
        "check_in_time": "17/10/2026 2:00 PM",
        "check_out_time": "19/10/2026 11:00 AM",
        "customer": {
            "name": "Anita Sharma",
            "address": "12 MG Road",
            "city": "Pune",
            "state": "Maharashtra",
            "pincode": "411001",
            "contact_no": "9800000000",
        },
        "items": [
            {"name": "Deluxe Room", "hsn_code": "996311", "quantity": 1, "unit_price": 1000, "gst_rate": 18},
        ],
        "amount_received": 500,
        "payment_method": "Online",
    }
    data.update(overrides)
    return data


class TestLoadInvoice:

    def test_yaml(self, tmp_path):
        path = tmp_path / "invoice.yaml"
        path.write_text(yaml.safe_dump(definition()), encoding="utf-8")

        record = load_invoice(path).record
        assert record.invoice_no == "VMP-19102026-0417"
        assert record.check_in_time == datetime(2026, 10, 17, 14, 0)
        assert record.igst == Decimal("180.00")
        assert record.total == Decimal("1180.00")
        assert record.balance == Decimal("680.00")
        assert record.payment_method is PaymentMethod.ONLINE

    def test_json(self, tmp_path):
        path = tmp_path / "invoice.json"
        path.write_text(json.dumps(definition()), encoding="utf-8")
        assert load_invoice(path).record.total == Decimal("1180.00")

    def test_derived_fields_are_recomputed(self, tmp_path):
        path = tmp_path / "invoice.json"
        path.write_text(json.dumps(definition(total="1.00", igst="0")), encoding="utf-8")
        assert load_invoice(path).record.total == Decimal("1180.00")

    def test_number_generated_when_absent(self, tmp_path):
        data = definition()
        del data["invoice_no"]
        path = tmp_path / "invoice.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        assert load_invoice(path).record.invoice_no.startswith("VMP-")

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvoiceLoadError):
            load_invoice(tmp_path / "absent.yaml")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "invoice.txt"
        path.write_text("x", encoding="utf-8")
        with pytest.raises(InvoiceLoadError):
            load_invoice(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "invoice.yaml"
        path.write_text("customer: [unclosed", encoding="utf-8")
        with pytest.raises(InvoiceLoadError):
            load_invoice(path)

    def test_top_level_list(self, tmp_path):
        path = tmp_path / "invoice.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(InvoiceLoadError):
            load_invoice(path)

    def test_validation_issues_are_reported(self, tmp_path):
        path = tmp_path / "invoice.json"
        path.write_text(json.dumps(definition(payment_method="Cheque")), encoding="utf-8")
        with pytest.raises(InvoiceLoadError) as excinfo:
            load_invoice(path)
        assert "payment_method" in str(excinfo.value)

    def test_bad_timestamp(self, tmp_path):
        path = tmp_path / "invoice.json"
        path.write_text(json.dumps(definition(check_in_time="soon")), encoding="utf-8")
        with pytest.raises(InvoiceLoadError):
            load_invoice(path)

    def test_sample_definition_loads(self):
        from pathlib import Path

        sample = Path(__file__).parent.parent / "samples" / "invoice.yaml"
        record = load_invoice(sample).record
        assert len(record.items) == 2
        assert record.igst is not None


class TestInvoiceValidator:

    def test_valid(self):
        ok, issues = InvoiceValidator().validate(definition())
        assert ok
        assert issues == []

    def test_collects_every_issue(self):
        data = definition(
            customer={"name": "", "address": "", "state": "Atlantis"},
            items=[{"name": "", "quantity": 0, "unit_price": -5, "gst_rate": "abc"}],
            amount_received=-1,
        )
        ok, issues = InvoiceValidator().validate(data)
        assert not ok
        joined = " ".join(issues)
        for fragment in ("customer.name", "customer.address", "customer.state",
                         "items[0]: name", "quantity", "unit_price", "gst_rate",
                         "amount_received"):
            assert fragment in joined

    def test_fractional_quantity(self):
        data = definition(items=[{"name": "Room", "quantity": 1.5, "unit_price": 10, "gst_rate": 5}])
        ok, issues = InvoiceValidator().validate(data)
        assert not ok
        assert "quantity" in issues[0]

    def test_blank_state_is_allowed(self):
        data = definition()
        data["customer"] = dict(data["customer"], state="")
        ok, _ = InvoiceValidator().validate(data)
        assert ok

    @pytest.mark.parametrize("customer", ["Anita Sharma", ["Anita"], 42])
    def test_customer_must_be_a_mapping(self, customer):
        ok, issues = InvoiceValidator().validate(definition(customer=customer))
        assert not ok
        assert any("customer must be a mapping" in issue for issue in issues)

    def test_item_must_be_a_mapping(self):
        items = [
            {"name": "Room", "quantity": 1, "unit_price": 10, "gst_rate": 5},
            "Deluxe Room",
            None,
        ]
        ok, issues = InvoiceValidator().validate(definition(items=items))
        assert not ok
        assert issues == [
            "items[1] must be a mapping, got str",
            "items[2] must be a mapping, got NoneType",
        ]

    def test_scalar_item_is_a_load_error(self, tmp_path):
        path = tmp_path / "invoice.yaml"
        path.write_text(yaml.safe_dump(definition(items=["Deluxe Room"])), encoding="utf-8")
        with pytest.raises(InvoiceLoadError):
            load_invoice(path)

    @pytest.mark.parametrize("rate", [0, 5, 12, 18, "12.0"])
    def test_standard_rate_slabs(self, rate):
        data = definition(items=[{"name": "Room", "quantity": 1, "unit_price": 10, "gst_rate": rate}])
        validator = InvoiceValidator()
        ok, _ = validator.validate(data)
        assert ok
        assert validator.warnings == []

    @pytest.mark.parametrize("rate", [2.5, 7, 28])
    def test_rate_outside_slabs_is_a_warning(self, rate):
        data = definition(items=[{"name": "Room", "quantity": 1, "unit_price": 10, "gst_rate": rate}])
        validator = InvoiceValidator()
        ok, issues = validator.validate(data)
        assert ok
        assert issues == []
        assert validator.warnings == [f"items[0]: gst_rate {rate} is not a standard slab (0, 5, 12, 18)"]

        validator.validate(definition())
        assert validator.warnings == []
