"""
Authentication API endpoints.
Handles staff login, logout, current user and password change.
"""
from flask import Blueprint, jsonify, g, current_app

from ..middleware.staff_auth import create_access_token, require_auth
from ..services.staff_service import StaffService
from ..utils.request_data import get_json_object

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Login with email and password.

    Request body:
        email: string (required)
        password: string (required)

    Returns:
        Staff data and access token (also set as an httpOnly cookie)
    """
    data = get_json_object()

    staff = StaffService().authenticate(data.get('email'), data.get('password'))
    token = create_access_token(staff)

    response = jsonify({
        'message': 'Login successful',
        'user': staff.to_dict(),
        'token': token
    })
    response.set_cookie(
        current_app.config['AUTH_COOKIE_NAME'],
        token,
        max_age=current_app.config['JWT_EXPIRY_HOURS'] * 60 * 60,
        httponly=True,
        samesite='Strict',
        secure=not (current_app.debug or current_app.testing)
    )
    current_app.logger.info(f'Staff {staff.id} logged in')
    return response


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Clear the auth cookie."""
    response = jsonify({'message': 'Logout successful'})
    response.delete_cookie(current_app.config['AUTH_COOKIE_NAME'])
    return response


@auth_bp.route('/me', methods=['GET'])
@require_auth
def get_me():
    """Get current authenticated staff member."""
    return jsonify(g.staff.to_dict())


@auth_bp.route('/change-password', methods=['POST'])
@require_auth
def change_password():
    """
    Change password for authenticated staff member.

    Request body:
        current_password: string (required)
        new_password: string (required)
    """
    data = get_json_object()

    StaffService().change_password(
        g.staff,
        data.get('current_password'),
        data.get('new_password')
    )

    return jsonify({'message': 'Password changed successfully'})
