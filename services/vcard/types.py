"""
vCard Import Type Definitions

Value objects passed between the parser, the importer and its callers.
Everything returned to callers is immutable.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import List, Optional, Tuple, Dict, Any

# Values written to Group.channel_preference and GroupMember.member_type
CHANNEL_WHATSAPP = 'WHATSAPP'
CHANNEL_EMAIL = 'EMAIL'
MEMBER_TYPE_ADULT = 'ADULT'


class PropertyKind(Enum):
    """vCard properties the parser understands. Anything else is UNKNOWN."""
    FN = "FN"
    N = "N"
    EMAIL = "EMAIL"
    TEL = "TEL"
    ORG = "ORG"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_name(cls, name: str) -> 'PropertyKind':
        """Map an uppercased property name onto a kind."""
        try:
            kind = cls(name)
        except ValueError:
            return cls.UNKNOWN
        return kind


@dataclass(frozen=True)
class Contact:
    """
    One contact extracted from a vCard.

    Attributes:
        name: Display name, never blank
        email: First EMAIL on the card
        phone: Mobile number if the card has one, else the first TEL.
               Formatting punctuation removed, no country prefix added.
        organization: First ORG on the card
    """
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    organization: Optional[str] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Contact name is required")


@dataclass(frozen=True)
class ParseOutcome:
    """Result of parsing a whole file. errors never blocks contacts."""
    contacts: Tuple[Contact, ...] = ()
    errors: Tuple[str, ...] = ()


class ContactBuilder:
    """
    Accumulates fields while scanning the lines of one card.

    First value seen wins, except that a mobile phone number replaces a
    non-mobile one captured earlier. The structured name (N) is only used
    when the card has no formatted name (FN), wherever the FN line appears.
    """

    def __init__(self):
        self.formatted_name: Optional[str] = None
        self.structured_name: Optional[str] = None
        self.email: Optional[str] = None
        self.phone: Optional[str] = None
        self.organization: Optional[str] = None
        self._phone_is_mobile = False

    @property
    def name(self) -> Optional[str]:
        return self.formatted_name or self.structured_name

    def set_formatted_name(self, value: str) -> None:
        if self.formatted_name is None and value.strip():
            self.formatted_name = value

    def set_structured_name(self, value: str) -> None:
        if self.structured_name is None and value.strip():
            self.structured_name = value

    def set_email(self, value: str) -> None:
        if self.email is None and value.strip():
            self.email = value

    def set_phone(self, value: str, is_mobile: bool = False) -> None:
        if not value:
            return
        if self.phone is None or (is_mobile and not self._phone_is_mobile):
            self.phone = value
            self._phone_is_mobile = is_mobile

    def set_organization(self, value: str) -> None:
        if self.organization is None and value.strip():
            self.organization = value

    def build(self) -> Optional[Contact]:
        """Finalize into a Contact, or None when no name was found."""
        if self.name is None:
            return None
        return Contact(
            name=self.name.strip(),
            email=_strip_or_none(self.email),
            phone=_strip_or_none(self.phone),
            organization=_strip_or_none(self.organization),
        )


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


@dataclass(frozen=True)
class ImportContext:
    """
    Who is importing into which organization.

    Attributes:
        organization_id: Tenant that will own the created groups
        operator_id: User performing the import (stored as the inviter)
        operator_name: Display name used in the import note
        default_language: Preferred language set on each created group
        country: ISO country hint for phone prefixes; falls back to the
                 organization's default country when None
    """
    organization_id: int
    operator_id: Optional[int]
    operator_name: str
    default_language: str = 'EN'
    country: Optional[str] = None


@dataclass(frozen=True)
class TenantDefaults:
    """Organization-level settings the importer needs."""
    default_language: str = 'EN'
    default_country: Optional[str] = None


@dataclass(frozen=True)
class ValidationError:
    """One rejected contact (or file-level problem) in an import."""
    contact: str
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class ImportResult:
    """Summary of an import run, suitable for rendering to the operator."""
    success: bool
    groups_created: int = 0
    members_created: int = 0
    errors: List[ValidationError] = field(default_factory=list)
    message: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'groups_created': self.groups_created,
            'members_created': self.members_created,
            'errors': [e.to_dict() for e in self.errors],
            'message': self.message,
        }
