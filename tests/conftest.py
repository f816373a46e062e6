"""
Shared fixtures: an application bound to an in-memory SQLite database,
an organization and its users.

Run with: python -m pytest tests/ -v
"""

import sys
from pathlib import Path

import pytest
from flask_login import FlaskLoginClient

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from app import create_app
from config import TestConfig
from models import db, Organization, User


@pytest.fixture
def app():
    """Application with a fresh schema for every test."""
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture
def organization(app):
    org = Organization(
        name='Garcia & Lee Wedding',
        slug='garcia-lee',
        default_language='EN',
        default_country='US'
    )
    db.session.add(org)
    db.session.commit()
    return org


@pytest.fixture
def operator(organization):
    """Organization admin who runs imports."""
    user = User(
        organization_id=organization.id,
        username='ana',
        email='ana@example.com',
        first_name='Ana',
        last_name='Admin',
        org_role='admin'
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def agent(organization):
    """Regular member without import rights."""
    user = User(
        organization_id=organization.id,
        username='sam',
        email='sam@example.com',
        first_name='Sam',
        last_name='Agent',
        org_role='agent'
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def login_client(app):
    """Build a test client logged in as the given user."""
    app.test_client_class = FlaskLoginClient

    def make_client(user):
        return app.test_client(user=user)

    return make_client
