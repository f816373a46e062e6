# models.py
from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
from datetime import datetime

db = SQLAlchemy()


class Organization(db.Model):
    """A tenant. Every group, member and audit event belongs to exactly one."""
    __tablename__ = 'organizations'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(100), unique=True, nullable=False)
    default_language = db.Column(db.String(2), nullable=False, default='EN')
    default_country = db.Column(db.String(2))  # ISO code, drives phone prefixes
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    users = db.relationship('User', back_populates='organization', lazy='dynamic')
    groups = db.relationship('Group', back_populates='organization', lazy='dynamic')

    def __repr__(self):
        return f'<Organization {self.slug}>'


class User(UserMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    organization_id = db.Column(db.Integer, db.ForeignKey('organizations.id'), nullable=False)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    first_name = db.Column(db.String(80), nullable=False)
    last_name = db.Column(db.String(80), nullable=False)
    org_role = db.Column(db.String(20), nullable=False, default='agent')  # owner, admin, agent
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    organization = db.relationship('Organization', back_populates='users')

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self):
        return f'<User {self.username}>'


class Group(db.Model):
    """
    A named party on an organization's guest list.

    Imports create one Group per contact card with a single GroupMember;
    other flows may add more members later.
    """
    __tablename__ = 'groups'

    CHANNEL_WHATSAPP = 'WHATSAPP'
    CHANNEL_EMAIL = 'EMAIL'

    id = db.Column(db.Integer, primary_key=True)
    organization_id = db.Column(db.Integer, db.ForeignKey('organizations.id'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), index=True)
    phone = db.Column(db.String(32))
    whatsapp_number = db.Column(db.String(32))
    channel_preference = db.Column(db.String(20))  # WHATSAPP, EMAIL or NULL
    preferred_language = db.Column(db.String(2), nullable=False, default='EN')
    invited_by_user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'))
    private_notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    organization = db.relationship('Organization', back_populates='groups')
    invited_by = db.relationship('User')
    members = db.relationship('GroupMember', back_populates='group',
                              cascade='all, delete-orphan', lazy=True)

    def __repr__(self):
        return f'<Group {self.name}>'


class GroupMember(db.Model):
    __tablename__ = 'group_members'

    TYPE_ADULT = 'ADULT'
    TYPE_CHILD = 'CHILD'
    TYPE_INFANT = 'INFANT'

    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.Integer, db.ForeignKey('groups.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    member_type = db.Column(db.String(10), nullable=False, default=TYPE_ADULT)
    added_by_guest = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    group = db.relationship('Group', back_populates='members')

    def __repr__(self):
        return f'<GroupMember {self.name}>'


class AuditEvent(db.Model):
    """Append-only audit trail of significant actions within an organization."""
    __tablename__ = 'audit_events'

    # Event types
    GROUPS_IMPORTED = 'groups_imported'

    id = db.Column(db.Integer, primary_key=True)
    organization_id = db.Column(db.Integer, db.ForeignKey('organizations.id', ondelete='CASCADE'), index=True)
    actor_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'), index=True)
    event_type = db.Column(db.String(50), nullable=False, index=True)
    description = db.Column(db.String(500))
    event_data = db.Column(db.JSON)
    source = db.Column(db.String(50), default='app')
    ip_address = db.Column(db.String(45))
    user_agent = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    actor = db.relationship('User')

    @classmethod
    def log(cls, event_type, organization_id=None, actor_id=None, description=None,
            event_data=None, source='app', ip_address=None, user_agent=None):
        """Create and commit an audit event."""
        event = cls(
            event_type=event_type,
            organization_id=organization_id,
            actor_id=actor_id,
            description=description[:500] if description else None,
            event_data=event_data or {},
            source=source,
            ip_address=ip_address,
            user_agent=user_agent
        )
        db.session.add(event)
        db.session.commit()
        return event

    def __repr__(self):
        return f'<AuditEvent {self.event_type}>'
