# utils.py
"""
Utility functions for the guest list application.

Phone numbers are stored in E.164 form. Imports and manual entry
both pass raw numbers through process_phone_number() before saving.
"""

import logging
import re
from typing import Optional

import phonenumbers

logger = logging.getLogger(__name__)


def normalize_phone_number(phone: Optional[str]) -> Optional[str]:
    """
    Strip formatting from a phone number.

    Keeps a leading + and removes every other non-digit character.

    Args:
        phone: Raw phone number string

    Returns:
        Digits (with optional leading +), or None if nothing is left
    """
    if not phone:
        return None

    trimmed = phone.strip()
    if trimmed == '':
        return None

    if trimmed.startswith('+'):
        digits = re.sub(r'\D', '', trimmed[1:])
        return f"+{digits}" if digits else None

    digits = re.sub(r'\D', '', trimmed)
    return digits or None


def process_phone_number(phone: Optional[str], country_code: Optional[str]) -> Optional[str]:
    """
    Normalize a phone number to E.164, reading national numbers in country_code.
    This is the function to use when saving phone numbers.

    National trunk prefixes are handled per country (the leading 0 is dropped
    in France but kept in Italy, a leading 1 is dropped in the US).

    Args:
        phone: The phone number to process
        country_code: ISO country code (e.g. 'ES', 'US'), may be None

    Returns:
        The E.164 number, the cleaned digits if the number cannot be read
        for that country, or None if phone has no digits
    """
    cleaned = normalize_phone_number(phone)
    if cleaned is None:
        return None

    region = country_code.strip().upper() if country_code else None

    try:
        parsed = phonenumbers.parse(cleaned, region)
    except phonenumbers.NumberParseException as e:
        logger.debug(f"Could not parse phone number '{cleaned}' for region {region}: {e}")
        return cleaned

    if not phonenumbers.is_possible_number(parsed):
        logger.debug(f"Phone number '{cleaned}' is not possible for region {region}")
        return cleaned

    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
