"""
Social engagement events received by webhook.
"""
from datetime import datetime
from ..extensions import db


ENGAGEMENT_TYPES = ('like', 'comment', 'share')


class SocialEngagement(db.Model):
    """
    A like, comment or share on a social platform.

    Linked to a customer when the email matches. email_sent records whether
    the thank-you email went out.
    """
    __tablename__ = 'social_engagement'

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id', ondelete='SET NULL'), index=True)
    customer_email = db.Column(db.String(255))

    platform = db.Column(db.String(50), nullable=False)  # 'instagram', 'facebook', ...
    engagement_type = db.Column(db.String(20), nullable=False)  # 'like', 'comment', 'share'
    content = db.Column(db.Text)

    email_sent = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    customer = db.relationship(
        'Customer',
        backref=db.backref('engagements', lazy='dynamic')
    )

    __table_args__ = (
        db.CheckConstraint(
            "engagement_type IN ('like', 'comment', 'share')",
            name='ck_social_engagement_type'
        ),
    )

    def __repr__(self):
        return f'<SocialEngagement {self.id} {self.platform}/{self.engagement_type}>'

    def to_dict(self):
        return {
            'id': self.id,
            'customer_id': self.customer_id,
            'customer_email': self.customer_email,
            'platform': self.platform,
            'engagement_type': self.engagement_type,
            'content': self.content,
            'email_sent': self.email_sent,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
