"""
Staff Service.

Staff accounts: login, password changes and manager-only account management.
"""
import logging
from typing import Optional, List
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Staff, StaffRole
from ..utils.exceptions import (
    ValidationError,
    DuplicateError,
    StaffNotFoundError,
    SelfDeletionError,
    AuthenticationError,
)
from .customer_service import normalize_email, normalize_text

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def validate_password(password: Optional[str], field: str = 'password') -> str:
    if not password:
        raise ValidationError('Password is required', field)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters', field)
    return password


def validate_role(role: Optional[str]) -> str:
    if role not in StaffRole.values():
        raise ValidationError('Invalid role. Must be "staff" or "manager"', 'role')
    return role


class StaffService:
    """Staff account operations."""

    def get_staff(self, staff_id: int) -> Staff:
        staff = db.session.get(Staff, staff_id)
        if not staff:
            raise StaffNotFoundError(staff_id)
        return staff

    def authenticate(self, email: Optional[str], password: Optional[str]) -> Staff:
        """
        Verify staff credentials.

        Raises:
            ValidationError: Email or password missing
            AuthenticationError: Unknown email or wrong password
        """
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError('Email and password are required')

        staff = Staff.query.filter_by(email=email).first()
        if not staff or not staff.check_password(password):
            raise AuthenticationError('Invalid email or password')

        return staff

    def list_staff(self) -> List[Staff]:
        return Staff.query.order_by(Staff.created_at.desc(), Staff.id.desc()).all()

    def create_staff(self, email: str, password: str, name: str, role: str) -> Staff:
        email = normalize_email(email)
        name = normalize_text(name)
        if not email or not password or not name or not role:
            raise ValidationError('All fields are required')
        validate_role(role)
        validate_password(password)

        if Staff.query.filter_by(email=email).first():
            raise DuplicateError('Staff', 'email')

        staff = Staff(email=email, name=name, role=role)
        staff.set_password(password)

        try:
            db.session.add(staff)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise DuplicateError('Staff', 'email')

        logger.info('Created %s account %s', role, email)
        return staff

    def ensure_manager(self, email: str, password: str, name: str = 'Administrator') -> tuple:
        """
        Create the bootstrap manager unless an account with this email exists.

        Returns:
            (staff, created)
        """
        existing = Staff.query.filter_by(email=normalize_email(email)).first()
        if existing:
            return existing, False
        return self.create_staff(email, password, name, StaffRole.MANAGER.value), True

    def update_staff(self, staff_id: int, name: Optional[str] = None, role: Optional[str] = None) -> Staff:
        staff = self.get_staff(staff_id)

        if name is not None:
            name = normalize_text(name)
            if not name:
                raise ValidationError('Name is required', 'name')
            staff.name = name

        if role is not None:
            staff.role = validate_role(role)

        db.session.commit()
        return staff

    def delete_staff(self, staff_id: int, acting_staff: Staff) -> None:
        """
        Delete a staff account.

        Raises:
            SelfDeletionError: Staff member tried to delete their own account
        """
        if staff_id == acting_staff.id:
            raise SelfDeletionError()

        staff = self.get_staff(staff_id)
        try:
            db.session.delete(staff)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info('Staff %s deleted by %s', staff_id, acting_staff.id)

    def reset_password(self, staff_id: int, new_password: Optional[str]) -> Staff:
        validate_password(new_password, 'new_password')
        staff = self.get_staff(staff_id)
        staff.set_password(new_password)
        db.session.commit()
        return staff

    def change_password(self, staff: Staff, current_password: Optional[str], new_password: Optional[str]) -> None:
        if not current_password or not new_password:
            raise ValidationError('Current and new passwords are required')
        if not staff.check_password(current_password):
            raise AuthenticationError('Current password is incorrect')
        validate_password(new_password, 'new_password')

        staff.set_password(new_password)
        db.session.commit()
