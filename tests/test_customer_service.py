"""
Tests for the Customer Service.
"""
import pytest

from punchcard.extensions import db
from punchcard.models import Customer, Punchcard, Staff
from punchcard.services.customer_service import CustomerService, normalize_email
from punchcard.services.punchcard_service import PunchcardService
from punchcard.utils.exceptions import (
    ValidationError,
    DuplicateError,
    CustomerNotFoundError,
    StateConflictError,
)


class TestCreateCustomer:

    def test_create_issues_first_card(self, app):
        with app.app_context():
            customer = CustomerService().create_customer('  Ann Lee ', 'ANN@Example.com ', '555-0101')

            assert customer.name == 'Ann Lee'
            assert customer.email == 'ann@example.com'
            cards = Punchcard.query.filter_by(customer_id=customer.id).all()
            assert len(cards) == 1
            assert cards[0].punches == 0
            assert customer.active_punchcard_id == cards[0].id

    def test_create_requires_name(self, app):
        with app.app_context():
            with pytest.raises(ValidationError) as exc_info:
                CustomerService().create_customer('   ')
            assert exc_info.value.field == 'name'
            assert Customer.query.count() == 0

    def test_create_duplicate_email(self, app, sample_customer):
        with app.app_context():
            with pytest.raises(DuplicateError):
                CustomerService().create_customer('Other Jane', 'Jane@Example.com')
            assert Customer.query.count() == 1

    def test_create_without_email(self, app):
        """Customers without email do not collide with each other."""
        with app.app_context():
            service = CustomerService()
            service.create_customer('Walk In One')
            service.create_customer('Walk In Two', email='')
            assert Customer.query.filter(Customer.email.is_(None)).count() == 2


class TestUpdateCustomer:

    def test_partial_update(self, app, sample_customer):
        with app.app_context():
            customer = CustomerService().update_customer(sample_customer.id, {'phone': '555-9999'})
            assert customer.phone == '555-9999'
            assert customer.name == 'Jane Doe'
            assert customer.email == 'jane@example.com'

    def test_update_to_taken_email(self, app, sample_customer):
        with app.app_context():
            other = CustomerService().create_customer('John', 'john@example.com')
            with pytest.raises(DuplicateError):
                CustomerService().update_customer(other.id, {'email': 'jane@example.com'})

    def test_update_unknown_customer(self, app):
        with app.app_context():
            with pytest.raises(CustomerNotFoundError):
                CustomerService().update_customer(99999, {'name': 'Nobody'})


class TestDeleteCustomer:

    def test_delete_removes_punchcards(self, app, sample_customer):
        with app.app_context():
            CustomerService().delete_customer(sample_customer.id)

            assert db.session.get(Customer, sample_customer.id) is None
            assert Punchcard.query.filter_by(customer_id=sample_customer.id).count() == 0

    def test_delete_with_redemptions_rejected(self, app, sample_customer, sample_staff):
        with app.app_context():
            customer = db.session.get(Customer, sample_customer.id)
            customer.active_punchcard.punches = 10
            db.session.commit()
            PunchcardService().redeem(customer.active_punchcard_id, db.session.get(Staff, sample_staff.id))

            with pytest.raises(StateConflictError) as exc_info:
                CustomerService().delete_customer(sample_customer.id)

            assert exc_info.value.code == 'CUSTOMER_HAS_REDEMPTIONS'
            assert db.session.get(Customer, sample_customer.id) is not None


class TestSearchCustomers:

    @pytest.mark.parametrize('query', ['jane', 'EXAMPLE.COM', '0100'])
    def test_search_matches_name_email_phone(self, app, sample_customer, query):
        with app.app_context():
            results = CustomerService().search_customers(query)
            assert [c.id for c in results] == [sample_customer.id]

    def test_search_no_match(self, app, sample_customer):
        with app.app_context():
            assert CustomerService().search_customers('zzz') == []

    def test_search_blank_query(self, app):
        with app.app_context():
            with pytest.raises(ValidationError):
                CustomerService().search_customers('  ')


def test_normalize_email():
    assert normalize_email('  A@B.COM ') == 'a@b.com'
    assert normalize_email('') is None
    assert normalize_email(None) is None
