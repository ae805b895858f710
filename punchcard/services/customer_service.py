"""
Customer Service.

Staff-facing customer registry: create, read, update, delete and search.
Every new customer is issued an empty active punchcard.
"""
import logging
from typing import Optional, Dict, Any, List
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Customer
from ..utils.exceptions import (
    ValidationError,
    DuplicateError,
    CustomerNotFoundError,
    StateConflictError,
)
from .punchcard_service import PunchcardService

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Lowercase and strip an email; blank becomes None."""
    if email is None:
        return None
    email = str(email).strip().lower()
    return email or None


def normalize_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class CustomerService:
    """Customer registry operations."""

    def __init__(self, punchcard_service: Optional[PunchcardService] = None):
        self.punchcard_service = punchcard_service or PunchcardService()

    def get_customer(self, customer_id: int) -> Customer:
        customer = db.session.get(Customer, customer_id)
        if not customer:
            raise CustomerNotFoundError(customer_id)
        return customer

    def find_by_email(self, email: Optional[str]) -> Optional[Customer]:
        email = normalize_email(email)
        if not email:
            return None
        return Customer.query.filter_by(email=email).first()

    def _ensure_email_available(self, email: Optional[str], customer_id: Optional[int] = None) -> None:
        if not email:
            return
        query = Customer.query.filter(Customer.email == email)
        if customer_id:
            query = query.filter(Customer.id != customer_id)
        if query.first():
            raise DuplicateError('Customer', 'email')

    def create_customer(self, name: str, email: Optional[str] = None, phone: Optional[str] = None) -> Customer:
        """
        Register a customer and issue their first punchcard.

        Raises:
            ValidationError: Name missing
            DuplicateError: Email already registered
        """
        name = normalize_text(name)
        if not name:
            raise ValidationError('Name is required', 'name')

        email = normalize_email(email)
        self._ensure_email_available(email)

        try:
            customer = Customer(name=name, email=email, phone=normalize_text(phone))
            db.session.add(customer)
            db.session.flush()

            self.punchcard_service.issue_card(customer)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise DuplicateError('Customer', 'email')
        except Exception:
            db.session.rollback()
            raise

        logger.info('Created customer %s with punchcard %s', customer.id, customer.active_punchcard_id)
        return customer

    def update_customer(self, customer_id: int, data: Dict[str, Any]) -> Customer:
        """
        Update a customer's contact details.

        Only keys present in data are changed (name, email, phone).
        """
        customer = self.get_customer(customer_id)

        if 'name' in data:
            name = normalize_text(data.get('name'))
            if not name:
                raise ValidationError('Name is required', 'name')
            customer.name = name

        if 'email' in data:
            email = normalize_email(data.get('email'))
            self._ensure_email_available(email, customer.id)
            customer.email = email

        if 'phone' in data:
            customer.phone = normalize_text(data.get('phone'))

        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise DuplicateError('Customer', 'email')

        return customer

    def delete_customer(self, customer_id: int) -> None:
        """
        Delete a customer and their punchcards.

        Raises:
            StateConflictError: Customer has redemption history, which is never deleted
        """
        customer = self.get_customer(customer_id)

        if customer.redemptions.count():
            raise StateConflictError(
                'Customer has redemption history and cannot be deleted',
                'CUSTOMER_HAS_REDEMPTIONS'
            )

        try:
            customer.active_punchcard_id = None
            db.session.flush()
            db.session.delete(customer)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info('Deleted customer %s', customer_id)

    def list_customers(self) -> List[Customer]:
        """All customers, newest first."""
        return Customer.query.order_by(Customer.created_at.desc(), Customer.id.desc()).all()

    def search_customers(self, query: str) -> List[Customer]:
        """Case-insensitive substring search over name, email and phone."""
        query = normalize_text(query)
        if not query:
            raise ValidationError('Search query is required', 'query')

        search_term = f'%{query}%'
        return (
            Customer.query
            .filter(
                db.or_(
                    Customer.name.ilike(search_term),
                    Customer.email.ilike(search_term),
                    Customer.phone.ilike(search_term),
                )
            )
            .order_by(Customer.name)
            .all()
        )
