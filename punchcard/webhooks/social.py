"""
Social engagement webhook.
Records likes, comments and shares and thanks the customer by email.
"""
from datetime import datetime
from flask import Blueprint, request, jsonify, current_app

from . import require_webhook_secret
from ..services.email_service import get_email_service
from ..services.engagement_service import EngagementService
from ..utils.request_data import get_json_object

social_bp = Blueprint('social_webhooks', __name__)


def _field(data, name, camel_name):
    """Automation tools post either snake_case or camelCase keys."""
    value = data.get(name)
    return value if value is not None else data.get(camel_name)


@social_bp.route('/social-engagement', methods=['POST'])
@require_webhook_secret
def social_engagement():
    """
    Record a social engagement event.

    Request body:
        platform: string (required)
        engagement_type: "like" | "comment" | "share" (required)
        customer_email: string (optional)
        customer_name: string (optional)
        content: string (optional)
        webhook_secret: string (unless sent as X-Webhook-Secret)

    camelCase spellings (engagementType, customerEmail, customerName,
    webhookSecret) are accepted too.

    The event is stored even if the thank-you email fails; the response
    reports whether the email went out.
    """
    data = get_json_object()

    service = EngagementService(get_email_service())
    result = service.record_engagement(
        platform=data.get('platform'),
        engagement_type=_field(data, 'engagement_type', 'engagementType'),
        customer_email=_field(data, 'customer_email', 'customerEmail'),
        customer_name=_field(data, 'customer_name', 'customerName'),
        content=data.get('content')
    )

    if result.get('email_error'):
        current_app.logger.warning(
            f"Thank-you email failed for engagement {result['engagement']['id']}: {result['email_error']}"
        )

    return jsonify({
        'success': True,
        'message': 'Engagement processed',
        **result
    })


@social_bp.route('/test', methods=['POST'])
def test_webhook():
    """Echo endpoint for checking webhook connectivity."""
    return jsonify({
        'success': True,
        'message': 'Webhook received',
        'received': request.get_json(silent=True),
        'timestamp': datetime.utcnow().isoformat()
    })
