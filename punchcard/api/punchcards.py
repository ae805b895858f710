"""
Punchcards API endpoints.
Punching, redemption and redemption history.
"""
from flask import Blueprint, request, jsonify, g

from ..middleware.staff_auth import Capability, require_capability
from ..services.punchcard_service import PunchcardService
from ..utils.request_data import get_json_object

punchcards_bp = Blueprint('punchcards', __name__)


@punchcards_bp.route('', methods=['GET'])
@require_capability(Capability.STAFF)
def list_punchcards():
    """List all punchcards with customer name, newest first."""
    cards = PunchcardService().list_punchcards()
    return jsonify([card.to_dict(include_customer=True) for card in cards])


@punchcards_bp.route('/customer/<int:customer_id>', methods=['GET'])
@require_capability(Capability.STAFF)
def customer_punchcards(customer_id: int):
    """List one customer's punchcards, newest first."""
    cards = PunchcardService().customer_punchcards(customer_id)
    return jsonify([card.to_dict() for card in cards])


@punchcards_bp.route('/punch/<int:customer_id>', methods=['POST'])
@require_capability(Capability.STAFF)
def add_punch(customer_id: int):
    """
    Add a punch to the customer's active punchcard.

    Returns:
        punches, remaining, is_full (409 when the card is already full)
    """
    result = PunchcardService().add_punch(customer_id)

    if result['new_card']:
        message = 'New punchcard created with 1 punch'
    elif result['is_full']:
        message = 'Punch added. Punchcard is now full and ready to redeem.'
    else:
        message = 'Punch added successfully'

    return jsonify({'message': message, **result})


@punchcards_bp.route('/redeem/<int:punchcard_id>', methods=['POST'])
@require_capability(Capability.STAFF)
def redeem_punchcard(punchcard_id: int):
    """
    Redeem a full punchcard.

    Request body:
        notes: string (optional)
    """
    data = get_json_object()

    result = PunchcardService().redeem(punchcard_id, g.staff, notes=data.get('notes'))

    return jsonify({
        'message': 'Punchcard redeemed successfully. New punchcard created.',
        **result
    })


@punchcards_bp.route('/redemptions', methods=['GET'])
@require_capability(Capability.STAFF)
def list_redemptions():
    """
    Redemption history, newest first.

    Query params:
    - customer_id: Filter by customer
    """
    customer_id = request.args.get('customer_id', type=int)
    redemptions = PunchcardService().list_redemptions(customer_id=customer_id)
    return jsonify([redemption.to_dict() for redemption in redemptions])
