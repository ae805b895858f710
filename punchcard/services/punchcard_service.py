"""
Punchcard Service.

Owns the punchcard lifecycle:

    add punch   active -> active | full      (full cards reject punches)
    redeem      full -> redeemed             (issues the next active card)

Every customer has at most one active card, referenced by
Customer.active_punchcard_id. The reference is only changed here, in the
same transaction that creates the card it points to.

Concurrency: punch and redeem lock the customer row first, then change the
card with a guarded UPDATE (compare-and-swap on the state predicate), so
concurrent requests can neither push a card past capacity nor redeem it twice.
"""
import logging
from datetime import datetime
from typing import Optional, Dict, Any, List
from flask import current_app

from ..extensions import db
from ..models import Customer, Punchcard, Redemption, Staff, DEFAULT_MAX_PUNCHES
from ..utils.exceptions import (
    CustomerNotFoundError,
    PunchcardNotFoundError,
    PunchcardFullError,
    PunchcardNotFullError,
    AlreadyRedeemedError,
)

logger = logging.getLogger(__name__)


class PunchcardService:
    """Punch accumulation, redemption and card issuance."""

    def __init__(self, capacity: Optional[int] = None):
        if capacity is None:
            capacity = current_app.config.get('PUNCHCARD_CAPACITY', DEFAULT_MAX_PUNCHES)
        self.capacity = capacity

    def _lock_customer(self, customer_id: int) -> Optional[Customer]:
        """Load a customer with a row lock held until commit/rollback."""
        return db.session.execute(
            db.select(Customer)
            .where(Customer.id == customer_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def issue_card(self, customer: Customer, punches: int = 0, max_punches: Optional[int] = None) -> Punchcard:
        """
        Create a card for a customer and make it the active card.

        Does not commit; the caller owns the transaction.
        """
        card = Punchcard(
            customer_id=customer.id,
            punches=punches,
            max_punches=max_punches or self.capacity,
            is_redeemed=False
        )
        db.session.add(card)
        db.session.flush()

        customer.active_punchcard_id = card.id
        return card

    def get_active_card(self, customer: Customer) -> Optional[Punchcard]:
        """
        Return the card that receives the next punch.

        Falls back to the newest non-redeemed card when the reference is
        unset (rows written before the reference existed) and repairs it.
        """
        card = customer.active_punchcard
        if card is not None and not card.is_redeemed:
            return card

        card = (
            customer.punchcards
            .filter_by(is_redeemed=False)
            .order_by(Punchcard.created_at.desc(), Punchcard.id.desc())
            .first()
        )
        customer.active_punchcard_id = card.id if card else None
        return card

    def add_punch(self, customer_id: int) -> Dict[str, Any]:
        """
        Add one punch to the customer's active card.

        Creates a card with one punch when the customer has none.

        Returns:
            Dict with punchcard_id, punches, max_punches, remaining, is_full
            and new_card

        Raises:
            CustomerNotFoundError: Unknown customer
            PunchcardFullError: Active card is full and must be redeemed first
        """
        try:
            customer = self._lock_customer(customer_id)
            if not customer:
                raise CustomerNotFoundError(customer_id)

            card = self.get_active_card(customer)
            new_card = card is None

            if new_card:
                card = self.issue_card(customer, punches=1)
            else:
                result = db.session.execute(
                    db.update(Punchcard)
                    .where(
                        Punchcard.id == card.id,
                        Punchcard.is_redeemed.is_(False),
                        Punchcard.punches < Punchcard.max_punches
                    )
                    .values(punches=Punchcard.punches + 1, updated_at=datetime.utcnow())
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    raise PunchcardFullError(card.id, card.max_punches)

            card_id = card.id
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        card = db.session.get(Punchcard, card_id)
        logger.info(
            'Punch added to card %s for customer %s (%s/%s)',
            card.id, customer_id, card.punches, card.max_punches
        )

        return {
            'punchcard_id': card.id,
            'customer_id': customer_id,
            'punches': card.punches,
            'max_punches': card.max_punches,
            'remaining': card.remaining,
            'is_full': card.punches >= card.max_punches,
            'new_card': new_card,
        }

    def redeem(self, punchcard_id: int, staff: Staff, notes: Optional[str] = None) -> Dict[str, Any]:
        """
        Redeem a full punchcard.

        In one transaction: marks the card redeemed by staff, appends a
        Redemption and issues a fresh active card with the same capacity.

        Raises:
            PunchcardNotFoundError: Unknown card
            AlreadyRedeemedError: Card was redeemed before
            PunchcardNotFullError: Card has not reached capacity
        """
        try:
            card = db.session.get(Punchcard, punchcard_id)
            if not card:
                raise PunchcardNotFoundError(punchcard_id)

            customer = self._lock_customer(card.customer_id)
            db.session.refresh(card, with_for_update=True)

            if card.is_redeemed:
                raise AlreadyRedeemedError(card.id)
            if card.punches < card.max_punches:
                raise PunchcardNotFullError(card.punches, card.max_punches)

            now = datetime.utcnow()
            result = db.session.execute(
                db.update(Punchcard)
                .where(
                    Punchcard.id == card.id,
                    Punchcard.is_redeemed.is_(False),
                    Punchcard.punches >= Punchcard.max_punches
                )
                .values(is_redeemed=True, redeemed_at=now, redeemed_by=staff.id, updated_at=now)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise AlreadyRedeemedError(card.id)

            redemption = Redemption(
                customer_id=customer.id,
                punchcard_id=card.id,
                staff_id=staff.id,
                staff_name=staff.name,
                staff_email=staff.email,
                notes=(notes or '').strip() or None,
                created_at=now
            )
            db.session.add(redemption)

            next_card = self.issue_card(customer, punches=0, max_punches=card.max_punches)

            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(
            'Punchcard %s redeemed by staff %s; issued card %s to customer %s',
            punchcard_id, staff.id, next_card.id, customer.id
        )

        return {
            'punchcard_id': punchcard_id,
            'customer_id': customer.id,
            'redemption': redemption.to_dict(),
            'new_punchcard': next_card.to_dict(),
            'redeemed_by': staff.email,
        }

    def list_punchcards(self) -> List[Punchcard]:
        """All punchcards, newest first."""
        return (
            Punchcard.query
            .order_by(Punchcard.created_at.desc(), Punchcard.id.desc())
            .all()
        )

    def customer_punchcards(self, customer_id: int) -> List[Punchcard]:
        """A customer's punchcards, newest first."""
        if not db.session.get(Customer, customer_id):
            raise CustomerNotFoundError(customer_id)

        return (
            Punchcard.query
            .filter_by(customer_id=customer_id)
            .order_by(Punchcard.created_at.desc(), Punchcard.id.desc())
            .all()
        )

    def list_redemptions(self, customer_id: Optional[int] = None) -> List[Redemption]:
        """Redemption history, newest first."""
        query = Redemption.query
        if customer_id:
            query = query.filter_by(customer_id=customer_id)
        return query.order_by(Redemption.created_at.desc(), Redemption.id.desc()).all()
