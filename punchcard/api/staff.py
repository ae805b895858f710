"""
Staff management API endpoints.
Manager-only account administration.
"""
from flask import Blueprint, jsonify, g

from ..middleware.staff_auth import Capability, require_capability
from ..services.staff_service import StaffService
from ..utils.request_data import get_json_object

staff_bp = Blueprint('staff', __name__)


@staff_bp.route('', methods=['GET'])
@require_capability(Capability.MANAGER)
def list_staff():
    """List all staff accounts."""
    return jsonify([staff.to_dict() for staff in StaffService().list_staff()])


@staff_bp.route('', methods=['POST'])
@require_capability(Capability.MANAGER)
def create_staff():
    """
    Create a staff account.

    Request body:
        email: string (required)
        password: string (required, min 8 characters)
        name: string (required)
        role: "staff" | "manager" (required)
    """
    data = get_json_object()

    staff = StaffService().create_staff(
        email=data.get('email'),
        password=data.get('password'),
        name=data.get('name'),
        role=data.get('role')
    )

    return jsonify({
        'message': 'Staff member created successfully',
        'staff': staff.to_dict()
    }), 201


@staff_bp.route('/<int:staff_id>', methods=['PUT'])
@require_capability(Capability.MANAGER)
def update_staff(staff_id: int):
    """
    Update a staff account.

    Request body (all optional):
        name: string
        role: "staff" | "manager"
    """
    data = get_json_object()

    staff = StaffService().update_staff(
        staff_id,
        name=data.get('name'),
        role=data.get('role')
    )

    return jsonify({
        'message': 'Staff member updated successfully',
        'staff': staff.to_dict()
    })


@staff_bp.route('/<int:staff_id>', methods=['DELETE'])
@require_capability(Capability.MANAGER)
def delete_staff(staff_id: int):
    StaffService().delete_staff(staff_id, g.staff)
    return jsonify({'message': 'Staff member deleted successfully'})


@staff_bp.route('/<int:staff_id>/reset-password', methods=['POST'])
@require_capability(Capability.MANAGER)
def reset_password(staff_id: int):
    """
    Set a new password for a staff account.

    Request body:
        new_password: string (required, min 8 characters)
    """
    data = get_json_object()

    StaffService().reset_password(staff_id, data.get('new_password'))

    return jsonify({'message': 'Password reset successfully'})
