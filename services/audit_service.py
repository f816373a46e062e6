"""
Audit Service - Centralized audit trail logging for guest list changes.

Provides helper functions to log audit events consistently throughout the application.
Bulk operations such as file imports are recorded as a single event per run.
"""

from flask import request
from flask_login import current_user
from models import AuditEvent


def get_request_context():
    """
    Extract IP address and user agent from the current request.
    Returns (ip_address, user_agent) tuple.
    """
    ip_address = None
    user_agent = None

    try:
        if request:
            # Get IP, handling proxies
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()

            user_agent = request.headers.get('User-Agent', '')[:500]  # Truncate if too long
    except RuntimeError:
        # Outside of request context
        pass

    return ip_address, user_agent


def get_current_actor_id():
    """Get the current user's ID if authenticated."""
    try:
        if current_user and current_user.is_authenticated:
            return current_user.id
    except (RuntimeError, AttributeError):
        # Outside of request context or login manager not set up
        pass
    return None


def log_event(event_type, organization_id=None, description=None, event_data=None,
              source='app', actor_id=None):
    """
    Log an audit event with automatic context extraction.

    Args:
        event_type: One of the AuditEvent type constants
        organization_id: Organization the event belongs to
        description: Human-readable description of the event
        event_data: Dict of additional context data
        source: Source of the event ('app', 'system', 'api')
        actor_id: Override for the actor (defaults to current user)

    Returns:
        The created AuditEvent instance
    """
    ip_address, user_agent = get_request_context()

    if actor_id is None:
        actor_id = get_current_actor_id()

    return AuditEvent.log(
        event_type=event_type,
        organization_id=organization_id,
        actor_id=actor_id,
        description=description,
        event_data=event_data or {},
        source=source,
        ip_address=ip_address,
        user_agent=user_agent
    )


# =============================================================================
# IMPORT EVENTS
# =============================================================================

def log_groups_imported(organization_id, result, file_format='vcf', actor_id=None):
    """Log when groups are created from an uploaded contact file."""
    return log_event(
        event_type=AuditEvent.GROUPS_IMPORTED,
        organization_id=organization_id,
        description=f"Imported {result.groups_created} groups from {file_format.upper()} file",
        event_data={
            'format': file_format,
            'groups_created': result.groups_created,
            'members_created': result.members_created,
            'error_count': len(result.errors)
        },
        actor_id=actor_id
    )
