"""
Invoice Definition Loader.

Reads an invoice definition (YAML or JSON) and builds an InvoiceSession
from it. Only user-entered fields are read; every derived total is
recomputed by the session.

Example definition (YAML):

    invoice_no: VMP-19102026-0417        # optional, generated when absent
    invoice_date: 2026-10-19
    check_in_time: 17/10/2026 2:00 PM
    check_out_time: 19/10/2026 11:00 AM
    customer:
      name: Anita Sharma
      address: 12 MG Road
      city: Pune
      state: Maharashtra
      pincode: "411001"
      contact_no: "9800000000"
    items:
      - {name: Deluxe Room, hsn_code: "996311", quantity: 2, unit_price: 5000, gst_rate: 12}
    amount_received: 5000
    payment_method: Online
    terms: Check-out by 11 AM.

Author: ML Engineering Team
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from gst_invoice.billing.identifier import generate_invoice_number
from gst_invoice.billing.session import InvoiceSession
from gst_invoice.io.validators import InvoiceValidator
from gst_invoice.models.company import CompanyProfile
from gst_invoice.models.invoice import InvoiceRecord
from gst_invoice.utils.exceptions import InvoiceLoadError
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = {'.yaml', '.yml', '.json'}


def read_definition(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Parse a definition file into a dictionary.

    Raises:
        InvoiceLoadError: If the file is missing, has an unsupported
                          extension or cannot be parsed.
    """
    path = Path(filepath)

    if not path.exists():
        raise InvoiceLoadError(str(path), "File not found")
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise InvoiceLoadError(
            str(path), f"Unsupported file type '{path.suffix}', expected one of {sorted(SUPPORTED_EXTENSIONS)}"
        )

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError, OSError) as e:
        raise InvoiceLoadError(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise InvoiceLoadError(str(path), "Top level must be a mapping")

    return data


def build_session(
    data: Dict[str, Any],
    company: Optional[CompanyProfile] = None,
    source: str = "<definition>"
) -> InvoiceSession:
    """
    Validate a parsed definition and build a recomputed session.

    Raises:
        InvoiceLoadError: If validation fails or a field cannot be parsed.
    """
    is_valid, issues = InvoiceValidator().validate(data)
    if not is_valid:
        raise InvoiceLoadError(source, "; ".join(issues))

    data = dict(data)
    if not data.get('invoice_no'):
        data['invoice_no'] = generate_invoice_number()

    try:
        record = InvoiceRecord.from_dict(data)
    except (ValueError, TypeError, KeyError) as e:
        raise InvoiceLoadError(source, str(e)) from e

    session = InvoiceSession(record=record, company=company)
    logger.info(
        f"Loaded {record.invoice_no}: {len(record.items)} item(s), total {record.total}"
    )
    return session


def load_invoice(
    filepath: Union[str, Path],
    company: Optional[CompanyProfile] = None
) -> InvoiceSession:
    """
    Load an invoice definition file into a session.

    Args:
        filepath: YAML or JSON definition.
        company: Issuer profile override.

    Returns:
        InvoiceSession with derived totals computed.
    """
    return build_session(read_definition(filepath), company=company, source=str(filepath))
