"""
Issuer Profile.

The business issuing the invoice. Its state is the home state that
decides between the same-state and cross-state tax split.

Author: ML Engineering Team
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any

from config import SECTION_DEFAULTS, get_config


@dataclass(frozen=True)
class CompanyProfile:
    """
    Issuer identity printed in the invoice header.

    Attributes:
        name: Trading name
        address: Single-line postal address
        phone: Contact number
        email: Contact email
        gstin: GST registration number
        state: Home state name
        state_code: Two-digit GST state code
    """
    name: str
    address: str
    phone: str
    email: str
    gstin: str
    state: str
    state_code: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_COMPANY = CompanyProfile(**SECTION_DEFAULTS['company'])


def load_company_profile() -> CompanyProfile:
    """
    Build the issuer profile from the ``company.*`` configuration section,
    falling back field by field to the built-in homestay details.
    """
    defaults = DEFAULT_COMPANY.to_dict()
    values = {
        key: str(get_config(f"company.{key}", default))
        for key, default in defaults.items()
    }
    return CompanyProfile(**values)
