"""
Customers API endpoints.
Staff-facing customer registry.
"""
from flask import Blueprint, jsonify

from ..middleware.staff_auth import Capability, require_capability
from ..services.customer_service import CustomerService
from ..utils.request_data import get_json_object

customers_bp = Blueprint('customers', __name__)


@customers_bp.route('', methods=['GET'])
@require_capability(Capability.STAFF)
def list_customers():
    """List all customers with punchcard counts, newest first."""
    customers = CustomerService().list_customers()
    return jsonify([customer.to_dict(include_stats=True) for customer in customers])


@customers_bp.route('/search/<path:query>', methods=['GET'])
@require_capability(Capability.STAFF)
def search_customers(query):
    """Search customers by name, email or phone."""
    customers = CustomerService().search_customers(query)
    return jsonify([customer.to_dict() for customer in customers])


@customers_bp.route('/<int:customer_id>', methods=['GET'])
@require_capability(Capability.STAFF)
def get_customer(customer_id: int):
    """Get a customer with stats and punchcards."""
    customer = CustomerService().get_customer(customer_id)
    return jsonify(customer.to_dict(include_stats=True, include_punchcards=True))


@customers_bp.route('', methods=['POST'])
@require_capability(Capability.STAFF)
def create_customer():
    """
    Create a customer and their first punchcard.

    Request body:
        name: string (required)
        email: string (optional, unique)
        phone: string (optional)
    """
    data = get_json_object()

    customer = CustomerService().create_customer(
        name=data.get('name'),
        email=data.get('email'),
        phone=data.get('phone')
    )

    return jsonify({
        'message': 'Customer created successfully',
        'customer_id': customer.id,
        'customer': customer.to_dict(include_punchcards=True)
    }), 201


@customers_bp.route('/<int:customer_id>', methods=['PUT'])
@require_capability(Capability.STAFF)
def update_customer(customer_id: int):
    """
    Update customer contact details.

    Request body (all optional):
        name, email, phone
    """
    data = get_json_object()
    customer = CustomerService().update_customer(customer_id, data)

    return jsonify({
        'message': 'Customer updated successfully',
        'customer': customer.to_dict()
    })


@customers_bp.route('/<int:customer_id>', methods=['DELETE'])
@require_capability(Capability.STAFF)
def delete_customer(customer_id: int):
    """Delete a customer and their punchcards."""
    CustomerService().delete_customer(customer_id)
    return jsonify({'message': 'Customer deleted successfully'})
