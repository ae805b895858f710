"""
Business logic services for the punchcard back office.
"""
from .punchcard_service import PunchcardService
from .customer_service import CustomerService
from .customer_sync_service import CustomerSyncService
from .shopify_client import ShopifyClient
from .email_service import EmailService, get_email_service
from .engagement_service import EngagementService
from .staff_service import StaffService
