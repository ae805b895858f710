"""
Database models for the punchcard back office.
Staff, customers, punchcards, redemptions and social engagement.
"""
from .staff import Staff, StaffRole
from .customer import Customer
from .punchcard import Punchcard, PunchcardState, Redemption, DEFAULT_MAX_PUNCHES
from .engagement import SocialEngagement, ENGAGEMENT_TYPES

__all__ = [
    'Staff',
    'StaffRole',
    'Customer',
    'Punchcard',
    'PunchcardState',
    'Redemption',
    'DEFAULT_MAX_PUNCHES',
    'SocialEngagement',
    'ENGAGEMENT_TYPES',
]
