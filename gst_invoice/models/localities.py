"""
Locality and Classification Reference Data.

GST state codes (the first two digits of every GSTIN), SAC/HSN codes for
homestay services and the standard rate slabs. State codes are used for
display only; tax math depends solely on whether the customer's state
matches the issuer's home state.
"""

from typing import Optional

STATE_CODES = {
    'Andhra Pradesh': '37',
    'Arunachal Pradesh': '12',
    'Assam': '18',
    'Bihar': '10',
    'Chhattisgarh': '22',
    'Goa': '30',
    'Gujarat': '24',
    'Haryana': '06',
    'Himachal Pradesh': '02',
    'Jharkhand': '20',
    'Karnataka': '29',
    'Kerala': '32',
    'Madhya Pradesh': '23',
    'Maharashtra': '27',
    'Manipur': '14',
    'Meghalaya': '17',
    'Mizoram': '15',
    'Nagaland': '13',
    'Odisha': '21',
    'Punjab': '03',
    'Rajasthan': '08',
    'Sikkim': '11',
    'Tamil Nadu': '33',
    'Telangana': '36',
    'Tripura': '16',
    'Uttar Pradesh': '09',
    'Uttarakhand': '05',
    'West Bengal': '19',
    'Delhi': '07',
    'Jammu and Kashmir': '01',
    'Ladakh': '38',
}

# Classification codes for homestay services
HSN_CODES = {
    'ROOM_ACCOMMODATION': '996311',
    'FOOD_SERVICES': '996331',
    'RESTAURANT_SERVICES': '996331',
}

# GST slabs (percent)
GST_RATES = {
    'ROOM_UNDER_7500': 0,
    'ROOM_7500_TO_10000': 12,
    'ROOM_ABOVE_10000': 18,
    'FOOD_SERVICES': 5,
}

STANDARD_GST_RATES = sorted(set(GST_RATES.values()))


def state_code(state: Optional[str]) -> Optional[str]:
    """Two-digit code for a state name, or None when blank or unknown."""
    if not state:
        return None
    return STATE_CODES.get(state.strip())


def is_known_state(state: Optional[str]) -> bool:
    return state_code(state) is not None


def is_cross_locality(customer_state: Optional[str], home_state: str) -> bool:
    """
    Whether a sale crosses state lines (IGST) rather than staying in the
    issuer's home state (CGST + SGST).

    A blank customer state counts as the home state until one is chosen.
    """
    if not customer_state or not customer_state.strip():
        return False
    return customer_state.strip() != home_state.strip()


__all__ = [
    'STATE_CODES',
    'HSN_CODES',
    'GST_RATES',
    'STANDARD_GST_RATES',
    'state_code',
    'is_known_state',
    'is_cross_locality',
]
