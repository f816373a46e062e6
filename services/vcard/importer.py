"""
VCF Import Service

Imports guest list data from VCF (vCard) files.
Each contact becomes a new group with one member (the contact person).

Contacts are processed one at a time in file order, so a group created
for an earlier card is visible to the duplicate check of later cards.
"""

import logging
from typing import Callable, List, Optional

from services.translations import localized_import_note
from utils import process_phone_number
from .parser import parse_vcf
from .types import (
    CHANNEL_EMAIL,
    CHANNEL_WHATSAPP,
    MEMBER_TYPE_ADULT,
    Contact,
    ImportContext,
    ImportResult,
    ValidationError,
)

logger = logging.getLogger(__name__)


def import_vcf(
    vcf_content: str,
    context: ImportContext,
    store=None,
    normalize_phone: Optional[Callable[[str, Optional[str]], Optional[str]]] = None,
    translate_note: Optional[Callable[[str, str], str]] = None,
) -> ImportResult:
    """
    Import contacts from VCF file content.

    Problems with individual contacts (duplicates, storage failures) are
    reported in the result and never stop the rest of the batch.

    Args:
        vcf_content: Raw text of the VCF file
        context: Organization and operator performing the import
        store: Persistence collaborator, defaults to SqlAlchemyGroupStore
        normalize_phone: (phone, country) -> phone, defaults to process_phone_number
        translate_note: (language, operator_name) -> note, defaults to localized_import_note

    Returns:
        ImportResult describing what was created and what was rejected
    """
    if store is None:
        from .store import SqlAlchemyGroupStore
        store = SqlAlchemyGroupStore()
    normalize_phone = normalize_phone or process_phone_number
    translate_note = translate_note or localized_import_note

    errors: List[ValidationError] = []

    parse_result = parse_vcf(vcf_content)
    for error in parse_result.errors:
        errors.append(ValidationError(contact='File', field='parse', message=error))

    if not parse_result.contacts:
        return ImportResult(
            success=False,
            errors=errors,
            message='No valid contacts found in VCF file',
        )

    tenant = store.get_tenant_defaults(context.organization_id)
    if tenant is None:
        logger.warning(f"VCF import aborted: organization {context.organization_id} not found")
        return ImportResult(
            success=False,
            errors=[ValidationError(contact='System', field='organization', message='Organization not found')],
            message='Organization not found',
        )

    country = context.country or tenant.default_country
    private_notes = translate_note(tenant.default_language, context.operator_name)

    groups_created = 0
    members_created = 0

    for contact in parse_result.contacts:
        try:
            rejection = _import_contact(contact, context, store, normalize_phone, country, private_notes)
        except Exception as e:
            logger.exception(f"Failed to import contact '{contact.name}' into organization {context.organization_id}")
            errors.append(ValidationError(
                contact=contact.name,
                field='import',
                message=str(e) or 'Failed to import contact',
            ))
            continue

        if rejection is not None:
            logger.warning(f"Skipped contact '{contact.name}': {rejection.message}")
            errors.append(rejection)
            continue

        groups_created += 1
        members_created += 1

    success = groups_created > 0
    if success:
        noun = 'group' if groups_created == 1 else 'groups'
        message = f"Successfully imported {groups_created} {noun}"
    else:
        message = 'Failed to import any contacts'

    logger.info(
        f"VCF import for organization {context.organization_id}: "
        f"{groups_created} created, {len(errors)} errors"
    )

    return ImportResult(
        success=success,
        groups_created=groups_created,
        members_created=members_created,
        errors=errors,
        message=message,
    )


def _import_contact(
    contact: Contact,
    context: ImportContext,
    store,
    normalize_phone,
    country: Optional[str],
    private_notes: str,
) -> Optional[ValidationError]:
    """
    Create the group and member for one contact.

    Returns:
        A ValidationError if the contact was rejected, None once created
    """
    if contact.email and store.find_group_by_email(context.organization_id, contact.email):
        return ValidationError(
            contact=contact.name,
            field='email',
            message=f"Email {contact.email} already exists - skipped",
        )

    phone = normalize_phone(contact.phone, country) if contact.phone else None

    if phone:
        channel_preference = CHANNEL_WHATSAPP
    elif contact.email:
        channel_preference = CHANNEL_EMAIL
    else:
        channel_preference = None

    group_fields = {
        'name': contact.name,
        'email': contact.email,
        'phone': phone,
        'whatsapp_number': phone,
        'channel_preference': channel_preference,
        'preferred_language': context.default_language,
        'invited_by_user_id': context.operator_id,
        'private_notes': private_notes,
    }
    member_fields = {
        'name': contact.name,
        'member_type': MEMBER_TYPE_ADULT,
        'added_by_guest': False,
    }

    store.create_group_with_member(context.organization_id, group_fields, member_fields)
    return None
