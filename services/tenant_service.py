# services/tenant_service.py
"""
Tenant isolation helpers for the multi-tenant guest list.
ALWAYS scope tenant models (Group, AuditEvent) by organization_id.
"""

from flask_login import current_user
from functools import wraps
from flask import abort


# =============================================================================
# QUERY HELPERS
# =============================================================================

def org_query_for_id(model, org_id: int):
    """
    Return query filtered to a specific organization.
    Use in services that receive the org explicitly instead of reading current_user.

    Example:
        group = org_query_for_id(Group, org_id).filter_by(email=email).first()

    Args:
        model: SQLAlchemy model class with organization_id column
        org_id: Organization ID to filter by

    Returns:
        Query object filtered to the specified organization
    """
    return model.query.filter_by(organization_id=org_id)


# =============================================================================
# PERMISSION CHECKS
# =============================================================================

ROLE_HIERARCHY = {'owner': 3, 'admin': 2, 'agent': 1}


def is_org_admin():
    """Check if user is admin or owner of their organization."""
    if not current_user.is_authenticated:
        return False
    return ROLE_HIERARCHY.get(current_user.org_role, 0) >= ROLE_HIERARCHY['admin']


# =============================================================================
# DECORATORS
# =============================================================================

def org_admin_required(f):
    """Decorator to require org admin or owner role. Use after @login_required."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_org_admin():
            abort(403)
        return f(*args, **kwargs)
    return decorated_function
