"""
Shopify API endpoints.
Pulls customer profiles and purchase totals from Shopify into the local registry.
"""
from flask import Blueprint, request, jsonify, current_app

from ..middleware.staff_auth import Capability, require_capability
from ..services.customer_sync_service import CustomerSyncService
from ..services.shopify_client import ShopifyClient

shopify_bp = Blueprint('shopify', __name__)


def get_sync_service() -> CustomerSyncService:
    """Build a sync service from the current app config."""
    return CustomerSyncService(ShopifyClient.from_config(current_app.config))


@shopify_bp.route('/sync-customer/<shopify_customer_id>', methods=['POST'])
@require_capability(Capability.STAFF)
def sync_customer(shopify_customer_id: str):
    """
    Sync a single customer from Shopify.

    Creates the local customer (with a first punchcard) or updates the
    linked one. Shopify failures come back with Shopify's status code.
    """
    result = get_sync_service().sync_one(shopify_customer_id)

    return jsonify({
        'message': 'Customer synced successfully',
        **result
    })


@shopify_bp.route('/sync-all-customers', methods=['POST'])
@require_capability(Capability.STAFF)
def sync_all_customers():
    """
    Sync one page of Shopify customers.

    Query params:
    - limit: Page size (default SHOPIFY_SYNC_PAGE_SIZE, max 250)
    """
    limit = request.args.get('limit', current_app.config['SHOPIFY_SYNC_PAGE_SIZE'], type=int)
    limit = max(1, min(limit, 250))

    summary = get_sync_service().sync_all(limit=limit)

    return jsonify({
        'message': f"Synced {summary['total']} customers",
        **summary
    })


@shopify_bp.route('/search/<path:query>', methods=['GET'])
@require_capability(Capability.STAFF)
def search_shopify(query: str):
    """
    Search Shopify customers without importing them.

    Query params:
    - limit: Max results
    """
    limit = request.args.get('limit', type=int)
    customers = get_sync_service().search(query, limit=limit)
    return jsonify(customers)
