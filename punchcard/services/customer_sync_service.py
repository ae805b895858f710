"""
Customer Sync Service.

ARCHITECTURE: Shopify is the source of truth for customer profile and
purchase totals (name, email, phone, orders_count, total_spent).

Reconciliation is create-or-update keyed by shopify_customer_id:
- Linked customer found: overwrite profile and totals, punchcards untouched
- Unlinked customer with the same email: link it, then update
- Otherwise: create the customer and issue its first punchcard

Bulk sync isolates records: each record commits or rolls back on its own,
and failures are logged and reported rather than aborting the batch.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Dict, Any, List
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import Customer
from ..utils.exceptions import PunchcardError, ValidationError, DuplicateError, ShopifyError
from .customer_service import normalize_email, normalize_text
from .punchcard_service import PunchcardService
from .shopify_client import ShopifyClient

logger = logging.getLogger(__name__)

SYNC_CREATED = 'created'
SYNC_UPDATED = 'updated'
SYNC_LINKED = 'linked'


def customer_fields_from_shopify(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a Shopify customer record onto local customer fields.

    Raises:
        ValidationError: Record is not an object or has no id
    """
    if not isinstance(record, dict):
        raise ValidationError('Shopify customer record is not an object')

    shopify_id = record.get('id')
    if shopify_id in (None, ''):
        raise ValidationError('Shopify customer record has no id', 'id')

    shopify_id = str(shopify_id).split('/')[-1]
    email = normalize_email(record.get('email'))

    name = ' '.join(
        part for part in (normalize_text(record.get('first_name')), normalize_text(record.get('last_name')))
        if part
    )
    if not name:
        name = email or f'Shopify customer {shopify_id}'

    try:
        total_spent = Decimal(str(record.get('total_spent') or 0))
    except InvalidOperation:
        total_spent = Decimal('0')

    try:
        total_purchases = int(record.get('orders_count') or 0)
    except (TypeError, ValueError):
        total_purchases = 0

    return {
        'shopify_customer_id': shopify_id,
        'name': name,
        'email': email,
        'phone': normalize_text(record.get('phone')),
        'total_purchases': total_purchases,
        'total_spent': total_spent,
    }


def _record_id(record: Any) -> Optional[str]:
    if not isinstance(record, dict) or record.get('id') is None:
        return None
    return str(record['id'])


class CustomerSyncService:
    """Reconcile local customers against Shopify."""

    def __init__(self, shopify_client: ShopifyClient, punchcard_service: Optional[PunchcardService] = None):
        self.shopify_client = shopify_client
        self.punchcard_service = punchcard_service or PunchcardService()

    def _upsert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply one Shopify record. Does not commit.

        Returns:
            Dict with action (created | updated | linked) and customer_id
        """
        fields = customer_fields_from_shopify(record)
        shopify_id = fields['shopify_customer_id']

        customer = Customer.query.filter_by(shopify_customer_id=shopify_id).first()
        action = SYNC_UPDATED

        if not customer and fields['email']:
            customer = Customer.query.filter(
                Customer.email == fields['email'],
                Customer.shopify_customer_id.is_(None)
            ).first()
            if customer:
                action = SYNC_LINKED

        if fields['email']:
            conflict = Customer.query.filter(Customer.email == fields['email'])
            if customer:
                conflict = conflict.filter(Customer.id != customer.id)
            if conflict.first():
                raise DuplicateError('Customer', 'email')

        if customer:
            for key, value in fields.items():
                setattr(customer, key, value)
            db.session.flush()
        else:
            customer = Customer(**fields)
            db.session.add(customer)
            db.session.flush()
            self.punchcard_service.issue_card(customer)
            action = SYNC_CREATED

        return {
            'action': action,
            'customer_id': customer.id,
            'shopify_customer_id': shopify_id,
        }

    def sync_one(self, shopify_customer_id: str) -> Dict[str, Any]:
        """
        Sync a single customer from Shopify.

        Raises:
            ShopifyError: Shopify fetch failed (upstream status preserved)
            DuplicateError: Shopify email belongs to another local customer
        """
        record = self.shopify_client.get_customer(shopify_customer_id)
        if not record:
            raise ShopifyError('Shopify customer not found', upstream_status=404)

        try:
            result = self._upsert(record)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(
            'Shopify customer %s %s as customer %s',
            result['shopify_customer_id'], result['action'], result['customer_id']
        )
        return result

    @staticmethod
    def _record_failure(summary: Dict[str, Any], record_id: Optional[str], message: str):
        summary['failed'] += 1
        summary['errors'].append({
            'shopify_customer_id': record_id,
            'error': message,
        })

    def sync_all(self, limit: int = 250) -> Dict[str, Any]:
        """
        Sync the first page of Shopify customers.

        Returns:
            Dict with total (synced), created, updated, linked, failed, errors
        """
        records = self.shopify_client.list_customers(limit=limit)

        summary = {
            'fetched': len(records),
            'total': 0,
            'created': 0,
            'updated': 0,
            'linked': 0,
            'failed': 0,
            'errors': [],
        }

        for record in records:
            record_id = _record_id(record)
            try:
                result = self._upsert(record)
                db.session.commit()
            except (PunchcardError, SQLAlchemyError) as e:
                db.session.rollback()
                message = e.message if isinstance(e, PunchcardError) else str(e)
                logger.warning(f'Shopify sync failed for customer {record_id}: {message}')
                self._record_failure(summary, record_id, message)
                continue
            except Exception as e:
                db.session.rollback()
                logger.exception(f'Unexpected error syncing Shopify customer {record_id}')
                self._record_failure(summary, record_id, str(e))
                continue

            summary['total'] += 1
            if result['action'] == SYNC_CREATED:
                summary['created'] += 1
            else:
                summary['updated'] += 1
                if result['action'] == SYNC_LINKED:
                    summary['linked'] += 1

        logger.info(
            'Shopify bulk sync: %s synced (%s created, %s updated), %s failed',
            summary['total'], summary['created'], summary['updated'], summary['failed']
        )
        return summary

    def search(self, query: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Pass-through Shopify customer search."""
        query = normalize_text(query)
        if not query:
            raise ValidationError('Search query is required', 'query')
        return self.shopify_client.search_customers(query, limit=limit)
