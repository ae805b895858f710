"""
Punchcard and Redemption models.

A punchcard moves through three states:

    active    punches < max_punches
    full      punches == max_punches, not redeemed
    redeemed  terminal; a replacement card is issued at redemption time

Redemptions are an append-only log: one row per redeemed card.
"""
from datetime import datetime
from enum import Enum
from ..extensions import db


DEFAULT_MAX_PUNCHES = 10


class PunchcardState(str, Enum):
    ACTIVE = 'active'
    FULL = 'full'
    REDEEMED = 'redeemed'


class Punchcard(db.Model):
    """A bounded punch counter owned by one customer."""
    __tablename__ = 'punchcards'

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(
        db.Integer,
        db.ForeignKey('customers.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )

    punches = db.Column(db.Integer, default=0, nullable=False)
    max_punches = db.Column(db.Integer, default=DEFAULT_MAX_PUNCHES, nullable=False)

    # Redemption state
    is_redeemed = db.Column(db.Boolean, default=False, nullable=False)
    redeemed_at = db.Column(db.DateTime)
    redeemed_by = db.Column(db.Integer, db.ForeignKey('staff.id', ondelete='SET NULL'))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    redeemed_by_staff = db.relationship('Staff', foreign_keys=[redeemed_by], backref='redeemed_punchcards')

    __table_args__ = (
        db.CheckConstraint('punches >= 0 AND punches <= max_punches', name='ck_punchcards_punch_range'),
    )

    def __repr__(self):
        return f'<Punchcard {self.id} {self.punches}/{self.max_punches}>'

    @property
    def state(self) -> PunchcardState:
        if self.is_redeemed:
            return PunchcardState.REDEEMED
        if self.punches >= self.max_punches:
            return PunchcardState.FULL
        return PunchcardState.ACTIVE

    @property
    def remaining(self) -> int:
        return max(self.max_punches - self.punches, 0)

    def to_dict(self, include_customer=False):
        data = {
            'id': self.id,
            'customer_id': self.customer_id,
            'punches': self.punches,
            'max_punches': self.max_punches,
            'remaining': self.remaining,
            'state': self.state.value,
            'is_redeemed': self.is_redeemed,
            'redeemed_at': self.redeemed_at.isoformat() if self.redeemed_at else None,
            'redeemed_by': self.redeemed_by,
            'redeemed_by_name': self.redeemed_by_staff.name if self.redeemed_by_staff else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

        if include_customer:
            data['customer_name'] = self.customer.name if self.customer else None
            data['customer_email'] = self.customer.email if self.customer else None

        return data


class Redemption(db.Model):
    """
    Immutable record of a redeemed punchcard.

    The acting staff member's name and email are copied onto the row so the
    history stays readable after the staff account is removed.
    """
    __tablename__ = 'redemptions'

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id'), nullable=False, index=True)
    punchcard_id = db.Column(db.Integer, db.ForeignKey('punchcards.id'), nullable=False, unique=True)
    staff_id = db.Column(db.Integer, db.ForeignKey('staff.id', ondelete='SET NULL'), nullable=True)

    staff_name = db.Column(db.String(255))
    staff_email = db.Column(db.String(255))
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    punchcard = db.relationship('Punchcard', backref=db.backref('redemption', uselist=False))
    staff = db.relationship('Staff', backref='redemptions')

    def __repr__(self):
        return f'<Redemption {self.id} card={self.punchcard_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'customer_id': self.customer_id,
            'customer_name': self.customer.name if self.customer else None,
            'customer_email': self.customer.email if self.customer else None,
            'punchcard_id': self.punchcard_id,
            'staff_id': self.staff_id,
            'redeemed_by_name': self.staff_name,
            'redeemed_by_email': self.staff_email,
            'notes': self.notes,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
