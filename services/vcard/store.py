"""
Database access for the vCard importer.

The importer only talks to the three methods on SqlAlchemyGroupStore, so
any object with the same methods can stand in for it.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import func

from models import db, Organization, Group, GroupMember
from services.tenant_service import org_query_for_id
from .types import TenantDefaults

logger = logging.getLogger(__name__)


class SqlAlchemyGroupStore:
    """Group/member persistence backed by the Flask-SQLAlchemy session."""

    def __init__(self, session=None):
        self.session = session or db.session

    def get_tenant_defaults(self, org_id: int) -> Optional[TenantDefaults]:
        """Language and country settings for an organization, or None if it does not exist."""
        org = self.session.get(Organization, org_id)
        if org is None:
            return None
        return TenantDefaults(
            default_language=org.default_language or 'EN',
            default_country=org.default_country,
        )

    def find_group_by_email(self, org_id: int, email: str) -> Optional[Group]:
        """Find a group in this organization with the same email (case-insensitive)."""
        try:
            return org_query_for_id(Group, org_id).filter(
                func.lower(Group.email) == email.strip().lower()
            ).first()
        except Exception:
            self.session.rollback()
            logger.warning(f"Rolled back failed duplicate lookup for organization {org_id}")
            raise

    def create_group_with_member(self, org_id: int, group_fields: dict, member_fields: dict) -> Tuple[int, int]:
        """
        Create a group and its contact person in one transaction.

        Either both rows are committed or neither is; groups committed by
        earlier calls are never touched.

        Returns:
            Tuple of (group_id, member_id)
        """
        try:
            group = Group(organization_id=org_id, **group_fields)
            self.session.add(group)
            self.session.flush()

            member = GroupMember(group_id=group.id, **member_fields)
            self.session.add(member)
            self.session.flush()

            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.warning(f"Rolled back group creation for organization {org_id}")
            raise

        return group.id, member.id
