"""
Staff Authentication Middleware.

Issues and verifies staff JWTs and gates endpoints by capability.

Roles are mapped to a closed set of capabilities in one place
(ROLE_CAPABILITIES); endpoints declare the capability they need:

    @require_capability(Capability.STAFF)
    def add_punch(customer_id):
        staff = g.staff
        ...

Missing, invalid or expired credentials fail with 401. A valid credential
without the required capability fails with 403.
"""
from datetime import datetime, timedelta
from enum import Enum
from functools import wraps
from typing import Optional
from flask import request, g, current_app
import jwt

from ..extensions import db
from ..models import Staff, StaffRole
from ..utils.errors import exception_response
from ..utils.exceptions import AuthenticationError, AuthorizationError

JWT_ALGORITHM = 'HS256'


class Capability(str, Enum):
    """What an authenticated principal may do."""
    STAFF = 'staff'      # customers, punchcards, redemptions, Shopify sync
    MANAGER = 'manager'  # staff account management


ROLE_CAPABILITIES = {
    StaffRole.STAFF: frozenset({Capability.STAFF}),
    StaffRole.MANAGER: frozenset({Capability.STAFF, Capability.MANAGER}),
}


def role_has_capability(role: StaffRole, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def create_access_token(staff: Staff) -> str:
    """Create a signed access token for a staff member."""
    now = datetime.utcnow()
    payload = {
        'sub': str(staff.id),
        'email': staff.email,
        'role': staff.role,
        'iat': now,
        'exp': now + timedelta(hours=current_app.config['JWT_EXPIRY_HOURS'])
    }
    return jwt.encode(payload, current_app.config['JWT_SECRET_KEY'], algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token."""
    try:
        return jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError('Token has expired')
    except jwt.InvalidTokenError:
        raise AuthenticationError('Invalid token')


def get_token_from_request() -> Optional[str]:
    """
    Get the staff token from the request.

    Priority:
    1. token cookie (set by /api/auth/login)
    2. Authorization: Bearer header
    """
    token = request.cookies.get(current_app.config['AUTH_COOKIE_NAME'])
    if token:
        return token

    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header.split(' ', 1)[1].strip() or None

    return None


def authenticate_request() -> Staff:
    """
    Resolve the staff member behind the current request.

    Raises:
        AuthenticationError: No token, bad token, or the staff account no longer exists
    """
    token = get_token_from_request()
    if not token:
        raise AuthenticationError('Access denied. No token provided.')

    payload = decode_token(token)
    try:
        staff_id = int(payload.get('sub'))
    except (TypeError, ValueError):
        raise AuthenticationError('Invalid token')

    staff = db.session.get(Staff, staff_id)
    if not staff:
        raise AuthenticationError('Staff account no longer exists')

    return staff


def authorize(staff: Staff, capability: Capability) -> None:
    """Raise AuthorizationError unless the staff member's role grants capability."""
    if not role_has_capability(staff.staff_role, capability):
        raise AuthorizationError(f'Access denied. {capability.value.title()} role required.')


def require_capability(capability: Capability):
    """
    Decorator to require an authenticated staff member with a capability.

    Sets g.staff when the request is allowed.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                staff = authenticate_request()
                authorize(staff, capability)
            except (AuthenticationError, AuthorizationError) as e:
                return exception_response(e)

            g.staff = staff
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def require_auth(f):
    """Decorator to require any authenticated staff member."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            g.staff = authenticate_request()
        except AuthenticationError as e:
            return exception_response(e)
        return f(*args, **kwargs)
    return decorated_function
