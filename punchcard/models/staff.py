"""
Staff model and roles.
"""
from datetime import datetime
from enum import Enum
from werkzeug.security import generate_password_hash, check_password_hash
from ..extensions import db


class StaffRole(str, Enum):
    """Staff roles. Manager can do everything staff can, plus staff management."""
    STAFF = 'staff'
    MANAGER = 'manager'

    @classmethod
    def values(cls) -> list:
        return [role.value for role in cls]


class Staff(db.Model):
    """
    Back-office staff account.

    Authenticates with email + password and acts on customers and punchcards.
    """
    __tablename__ = 'staff'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=StaffRole.STAFF.value)  # 'staff', 'manager'

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint("role IN ('staff', 'manager')", name='ck_staff_role'),
    )

    def __repr__(self):
        return f'<Staff {self.email}>'

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def staff_role(self) -> StaffRole:
        return StaffRole(self.role)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
