"""Tests for data classes, localities and configuration."""

from decimal import Decimal

import pytest

from config import ConfigurationManager, get_config
from gst_invoice.models.company import load_company_profile
from gst_invoice.models.invoice import CustomerProfile, InvoiceRecord, LineItem, PaymentMethod
from gst_invoice.models.localities import STATE_CODES, is_cross_locality, state_code


class TestLineItem:

    def test_amount_is_tax_inclusive(self):
        assert LineItem("Room", "996311", 2, 5000, 12).amount == Decimal("11200.00")

    def test_from_dict_converts_types(self):
        item = LineItem.from_dict({"name": "Tea", "hsn_code": 996331, "quantity": "3",
                                   "unit_price": "20.5", "gst_rate": 5})
        assert item.quantity == 3
        assert item.unit_price == Decimal("20.5")
        assert item.hsn_code == "996331"


class TestCustomerProfile:

    def test_bill_to_prefers_company(self):
        customer = CustomerProfile(name="A. Sharma", company_name="Sharma Traders")
        assert customer.bill_to == "Sharma Traders"
        assert CustomerProfile(name="A. Sharma").bill_to == "A. Sharma"

    def test_state_code(self):
        assert CustomerProfile(state="Maharashtra").state_code == "27"
        assert CustomerProfile(state="").state_code is None

    def test_full_address_skips_blanks(self):
        customer = CustomerProfile(address="12 MG Road", city="Pune", state="", pincode="411001")
        assert customer.full_address == "12 MG Road, Pune, 411001"


class TestInvoiceRecord:

    def test_round_trip_keeps_user_fields(self, make_session):
        session = make_session(state="Goa", items=[("Room", "996311", 1, 1000, 18)], amount_received=100)
        data = session.record.to_dict()
        assert data['igst'] == "180.00"

        restored = InvoiceRecord.from_dict(data)
        assert restored.invoice_no == session.record.invoice_no
        assert restored.items[0].id == session.record.items[0].id
        assert restored.amount_received == Decimal("100.00")
        assert restored.total == 0

    def test_pdf_filename(self):
        assert InvoiceRecord(invoice_no="VMP-1").pdf_filename == "Invoice-VMP-1.pdf"


class TestLocalities:

    def test_thirty_one_states(self):
        assert len(STATE_CODES) == 31
        assert state_code("Uttar Pradesh") == "09"

    def test_cross_locality(self):
        assert is_cross_locality("Maharashtra", "Uttar Pradesh")
        assert not is_cross_locality("Uttar Pradesh", "Uttar Pradesh")
        assert not is_cross_locality("", "Uttar Pradesh")
        assert not is_cross_locality(None, "Uttar Pradesh")


class TestConfiguration:

    def test_dot_notation(self):
        assert get_config("invoice.number_prefix") == "VMP"
        assert get_config("missing.key", "fallback") == "fallback"

    def test_company_profile_from_config(self):
        company = load_company_profile()
        assert company.state == "Uttar Pradesh"
        assert company.state_code == "09"

    def test_paths_are_absolute(self):
        from pathlib import Path
        assert Path(get_config("paths.output_dir")).is_absolute()

    def test_custom_config_file(self, tmp_path, monkeypatch):
        custom = tmp_path / "settings.yaml"
        custom.write_text("invoice:\n  number_prefix: ABC\n", encoding="utf-8")
        monkeypatch.setenv("GST_INVOICE_CONFIG", str(custom))
        ConfigurationManager.reset()
        assert get_config("invoice.number_prefix") == "ABC"
        assert load_company_profile().state == "Uttar Pradesh"

    def test_partial_config_gets_section_defaults(self, tmp_path):
        custom = tmp_path / "settings.yaml"
        custom.write_text("rendering:\n  mode: visual\n", encoding="utf-8")
        ConfigurationManager.reset()
        config = ConfigurationManager(str(custom))
        assert config.get("rendering.mode") == "visual"
        assert config.get("rendering.margin_mm") == 10
        assert config.get("storage.backend") == "memory"
        assert config.get("invoice.default_hsn_code") == "996311"
        assert config.get("company.state") == "Uttar Pradesh"

    @pytest.mark.parametrize("body", [
        "storage:\n  backend: ftp\n",
        "rendering:\n  mode: screenshot\n",
        "invoice:\n  default_payment_method: Cheque\n",
        "invoice:\n  number_prefix: ''\n",
        "storage: memory\n",
        "- just\n- a list\n",
    ])
    def test_invalid_config_is_rejected(self, tmp_path, body):
        custom = tmp_path / "settings.yaml"
        custom.write_text(body, encoding="utf-8")
        ConfigurationManager.reset()
        with pytest.raises(ValueError):
            ConfigurationManager(str(custom))
        ConfigurationManager.reset()

    def test_missing_config_file(self, tmp_path):
        ConfigurationManager.reset()
        with pytest.raises(FileNotFoundError):
            ConfigurationManager(str(tmp_path / "absent.yaml"))
        ConfigurationManager.reset()


def test_payment_method_parse():
    assert PaymentMethod.parse(" cash ") is PaymentMethod.CASH
    with pytest.raises(ValueError):
        PaymentMethod.parse("Cheque")
