"""
Shared pytest fixtures.

Each test gets a fresh app on an in-memory SQLite database. Fixture objects
are refreshed before their session closes so their column attributes stay
readable (sample_customer.id, sample_staff.email) outside an app context.
"""
import pytest
from unittest.mock import MagicMock

from punchcard import create_app
from punchcard.extensions import db
from punchcard.models import Staff, StaffRole
from punchcard.middleware.staff_auth import create_access_token
from punchcard.services.customer_service import CustomerService


STAFF_PASSWORD = 'staff-pass-123'
MANAGER_PASSWORD = 'manager-pass-123'


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Test client."""
    return app.test_client()


def _create_staff(app, email, password, name, role):
    with app.app_context():
        staff = Staff(email=email, name=name, role=role)
        staff.set_password(password)
        db.session.add(staff)
        db.session.commit()
        db.session.refresh(staff)
        return staff


@pytest.fixture
def sample_staff(app):
    """A staff-role account."""
    return _create_staff(app, 'barista@example.com', STAFF_PASSWORD, 'Barista Bob', StaffRole.STAFF.value)


@pytest.fixture
def sample_manager(app):
    """A manager-role account."""
    return _create_staff(app, 'manager@example.com', MANAGER_PASSWORD, 'Manager Mia', StaffRole.MANAGER.value)


def _bearer_headers(app, staff_id):
    with app.app_context():
        token = create_access_token(db.session.get(Staff, staff_id))
    return {
        'Authorization': f'Bearer {token}',
        'Content-Type': 'application/json'
    }


@pytest.fixture
def auth_headers(app, sample_staff):
    """Bearer headers for the staff-role account."""
    return _bearer_headers(app, sample_staff.id)


@pytest.fixture
def manager_headers(app, sample_manager):
    """Bearer headers for the manager account."""
    return _bearer_headers(app, sample_manager.id)


@pytest.fixture
def sample_customer(app):
    """A customer with their first (empty) punchcard."""
    with app.app_context():
        customer = CustomerService().create_customer(
            name='Jane Doe',
            email='jane@example.com',
            phone='555-0100'
        )
        db.session.refresh(customer)
        return customer


@pytest.fixture
def mock_email_service(app):
    """Replace the app's SendGrid transport with a mock that succeeds."""
    service = MagicMock()
    service.send_html_email.return_value = {'success': True, 'status_code': 202}
    app.extensions['email_service'] = service
    return service
