"""
Customer model.
"""
from datetime import datetime
from decimal import Decimal
from ..extensions import db


class Customer(db.Model):
    """
    Loyalty customer.

    Created by staff or by Shopify sync. When linked to Shopify,
    shopify_customer_id is stamped and the sync overwrites contact
    info and purchase totals.
    """
    __tablename__ = 'customers'

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True)  # NULL allowed, unique when set
    phone = db.Column(db.String(50))

    # Shopify link (numeric customer ID as string)
    shopify_customer_id = db.Column(db.String(50), unique=True)

    # Running totals (synced from Shopify)
    total_purchases = db.Column(db.Integer, default=0, nullable=False)
    total_spent = db.Column(db.Numeric(12, 2), default=Decimal('0'), nullable=False)

    # Card that receives the next punch; always the newest non-redeemed card
    active_punchcard_id = db.Column(
        db.Integer,
        db.ForeignKey('punchcards.id', use_alter=True, name='fk_customers_active_punchcard', ondelete='SET NULL'),
        nullable=True
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    punchcards = db.relationship(
        'Punchcard',
        foreign_keys='Punchcard.customer_id',
        backref='customer',
        lazy='dynamic',
        cascade='all, delete-orphan'
    )
    active_punchcard = db.relationship(
        'Punchcard',
        foreign_keys=[active_punchcard_id],
        post_update=True
    )
    redemptions = db.relationship('Redemption', backref='customer', lazy='dynamic')

    def __repr__(self):
        return f'<Customer {self.id} {self.name}>'

    def to_dict(self, include_stats=False, include_punchcards=False):
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'shopify_customer_id': self.shopify_customer_id,
            'total_purchases': self.total_purchases or 0,
            'total_spent': float(self.total_spent or 0),
            'active_punchcard_id': self.active_punchcard_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

        if include_stats:
            total = self.punchcards.count()
            redeemed = self.punchcards.filter_by(is_redeemed=True).count()
            data['stats'] = {
                'total_punchcards': total,
                'redeemed_punchcards': redeemed,
                'active_punchcards': total - redeemed,
            }

        if include_punchcards:
            from .punchcard import Punchcard
            cards = self.punchcards.order_by(Punchcard.created_at.desc(), Punchcard.id.desc()).all()
            data['punchcards'] = [card.to_dict() for card in cards]

        return data
