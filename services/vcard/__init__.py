"""
vCard Guest Import

Reads contact-export files (vCard 2.1, 3.0 and 4.0) and turns each card
into a group with one member on an organization's guest list.

Usage:
    from services.vcard import ImportContext, import_vcf, validate_vcf

    error = validate_vcf(text)
    if error is None:
        result = import_vcf(text, ImportContext(
            organization_id=org.id,
            operator_id=user.id,
            operator_name=user.full_name,
            default_language=org.default_language,
        ))

The database-backed store is in services.vcard.store and is only imported
when import_vcf() is called without a store, so parsing needs no database.
"""

from .types import (
    PropertyKind,
    Contact,
    ContactBuilder,
    ParseOutcome,
    ImportContext,
    TenantDefaults,
    ValidationError,
    ImportResult
)

from .exceptions import (
    VCardError,
    MalformedCardError
)

from .parser import parse_vcf, parse_card, validate_vcf
from .importer import import_vcf

__all__ = [
    # Types
    'PropertyKind',
    'Contact',
    'ContactBuilder',
    'ParseOutcome',
    'ImportContext',
    'TenantDefaults',
    'ValidationError',
    'ImportResult',

    # Exceptions
    'VCardError',
    'MalformedCardError',

    # Parsing
    'parse_vcf',
    'parse_card',
    'validate_vcf',

    # Importing
    'import_vcf',
]
