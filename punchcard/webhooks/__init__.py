"""
Webhook handlers for the punchcard back office.
Inbound calls from automation tools are authenticated with a shared secret.
"""
import hmac
from functools import wraps
from typing import Optional
from flask import request, current_app

from ..utils.errors import unauthorized, ErrorCode

WEBHOOK_SECRET_HEADER = 'X-Webhook-Secret'


def verify_webhook_secret(provided: Optional[str], secret: Optional[str]) -> bool:
    """
    Compare a caller-supplied secret with the configured one.

    An unset WEBHOOK_SECRET rejects every call.
    """
    if not secret:
        current_app.logger.warning('No webhook secret configured for verification')
        return False

    if not provided:
        return False

    return hmac.compare_digest(str(provided).encode('utf-8'), secret.encode('utf-8'))


def get_provided_secret() -> Optional[str]:
    """Secret from the X-Webhook-Secret header, falling back to the JSON body."""
    header_secret = request.headers.get(WEBHOOK_SECRET_HEADER)
    if header_secret:
        return header_secret
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data.get('webhook_secret') or data.get('webhookSecret')


def require_webhook_secret(f):
    """
    Decorator to require the shared webhook secret.

    Usage:
        @social_bp.route('/social-engagement', methods=['POST'])
        @require_webhook_secret
        def social_engagement():
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not verify_webhook_secret(get_provided_secret(), current_app.config.get('WEBHOOK_SECRET')):
            current_app.logger.warning(f'Invalid webhook secret from {request.remote_addr}')
            return unauthorized('Invalid webhook secret', ErrorCode.INVALID_SECRET)
        return f(*args, **kwargs)

    return decorated_function
