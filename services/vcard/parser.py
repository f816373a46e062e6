"""
VCF (vCard) Parser

Parses VCF files and extracts contact information for importing guests.
Supports vCard 2.1, 3.0 and 4.0 exports.

Usage:
    from services.vcard import parse_vcf, validate_vcf

    error = validate_vcf(text)
    if error is None:
        outcome = parse_vcf(text)
        for contact in outcome.contacts:
            ...
"""

import logging
import re
from typing import Optional, Tuple

from .decoding import clean_phone_number, decode_value, unfold_lines
from .exceptions import MalformedCardError, VCardError
from .types import Contact, ContactBuilder, ParseOutcome, PropertyKind

logger = logging.getLogger(__name__)

_BEGIN_MARKER = re.compile(r'BEGIN:VCARD', re.IGNORECASE)
_END_MARKER = re.compile(r'END:VCARD', re.IGNORECASE)
_MOBILE_MARKERS = ('CELL', 'MOBILE')


def parse_vcf(vcf_content: str) -> ParseOutcome:
    """
    Parse the content of a VCF file.

    One malformed card never stops the rest of the file from being read:
    it is reported in errors and skipped. Cards without any usable name
    are dropped without an error.

    Args:
        vcf_content: The raw text content of the VCF file

    Returns:
        ParseOutcome with the parsed contacts and any errors encountered

    Raises:
        TypeError: If vcf_content is not text
    """
    if not isinstance(vcf_content, str):
        raise TypeError(f"VCF content must be str, not {type(vcf_content).__name__}")

    blocks = [block for block in _BEGIN_MARKER.split(vcf_content) if block.strip()]
    if not blocks:
        return ParseOutcome(errors=('No valid vCard entries found in the file',))

    contacts = []
    errors = []

    for index, block in enumerate(blocks):
        try:
            contact = parse_card(block)
        except (VCardError, ValueError) as e:
            errors.append(f"Error parsing contact {index + 1}: {e}")
            continue
        if contact is not None:
            contacts.append(contact)

    logger.debug(f"Parsed {len(blocks)} vCard blocks: {len(contacts)} contacts, {len(errors)} errors")
    return ParseOutcome(contacts=tuple(contacts), errors=tuple(errors))


def parse_card(card_text: str) -> Optional[Contact]:
    """
    Parse a single vCard (the text after its BEGIN:VCARD marker).

    Returns:
        The Contact, or None if the card has no usable name

    Raises:
        MalformedCardError: If a property value cannot be decoded
    """
    builder = ContactBuilder()

    for line in unfold_lines(card_text):
        trimmed = line.strip()
        if not trimmed or _END_MARKER.match(trimmed):
            continue

        parsed = _split_property_line(trimmed)
        if parsed is None:
            continue
        property_part, value = parsed

        kind = PropertyKind.from_name(_property_name(property_part))
        if kind is PropertyKind.UNKNOWN:
            continue

        _apply_property(builder, kind, property_part, value)

    return builder.build()


def _split_property_line(line: str) -> Optional[Tuple[str, str]]:
    """Split PROPERTY;PARAMS:VALUE into (property part, trimmed value)."""
    colon_index = line.find(':')
    if colon_index == -1:
        return None

    value = line[colon_index + 1:].strip()
    if not value:
        return None

    return line[:colon_index], value


def _property_name(property_part: str) -> str:
    """Property name without parameters or an exporter group prefix (item1.TEL -> TEL)."""
    name = property_part.split(';', 1)[0]
    return name.rsplit('.', 1)[-1].strip().upper()


def _apply_property(builder: ContactBuilder, kind: PropertyKind, property_part: str, value: str) -> None:
    if kind is PropertyKind.FN:
        if builder.formatted_name is None:
            builder.set_formatted_name(decode_value(value, property_part))

    elif kind is PropertyKind.N:
        if builder.name is None:
            builder.set_structured_name(_format_structured_name(decode_value(value, property_part)))

    elif kind is PropertyKind.EMAIL:
        builder.set_email(decode_value(value, property_part))

    elif kind is PropertyKind.TEL:
        is_mobile = any(marker in property_part.upper() for marker in _MOBILE_MARKERS)
        builder.set_phone(clean_phone_number(decode_value(value, property_part)), is_mobile=is_mobile)

    elif kind is PropertyKind.ORG:
        builder.set_organization(_format_organization(decode_value(value, property_part)))


def _format_structured_name(value: str) -> str:
    """
    Turn N (Family;Given;Middle;Prefix;Suffix) into a display name.

    Components are joined as prefix, given, middle, family, suffix.
    """
    if value.count('"') % 2:
        raise MalformedCardError("Unterminated quoted component in N field", property_name='N')

    parts = [part.strip() for part in value.split(';')]
    parts += [''] * (5 - len(parts))
    family, given, middle, prefix, suffix = parts[:5]

    return ' '.join(part for part in (prefix, given, middle, family, suffix) if part)


def _format_organization(value: str) -> str:
    """ORG is Company;Department;... - keep the non-empty units."""
    return ', '.join(unit.strip() for unit in value.split(';') if unit.strip())


def validate_vcf(vcf_content: str) -> Optional[str]:
    """
    Quick structural check before a full parse.

    Returns:
        Error message if invalid, None if valid
    """
    if not vcf_content or vcf_content.strip() == '':
        return 'VCF file is empty'

    if not _BEGIN_MARKER.search(vcf_content):
        return 'Invalid VCF file format: missing BEGIN:VCARD'

    if not _END_MARKER.search(vcf_content):
        return 'Invalid VCF file format: missing END:VCARD'

    return None
