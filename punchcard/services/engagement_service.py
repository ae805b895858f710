"""
Social Engagement Service.

Records likes, comments and shares reported by webhook and thanks the
customer by email.

Recording and emailing are independent: the event is committed before the
email is attempted, so a failed send never loses the event. email_sent is
only set after the transport reports success.
"""
import logging
from typing import Optional, Dict, Any
from flask import render_template_string

from ..extensions import db
from ..models import SocialEngagement, ENGAGEMENT_TYPES
from ..utils.exceptions import ValidationError
from .customer_service import CustomerService, normalize_email, normalize_text
from .email_service import EmailService

logger = logging.getLogger(__name__)


THANK_YOU_MESSAGES = {
    'like': 'We noticed you liked our content on {platform}! Thank you for your support.',
    'comment': 'Thank you for commenting on our {platform} post! We appreciate your engagement.',
    'share': 'Wow! Thank you for sharing our content on {platform}! Your support means the world to us.',
}

THANK_YOU_TEMPLATE = '''
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #333;">Hi {{ customer_name }},</h2>
  <p style="font-size: 16px; color: #555;">{{ message }}</p>
  <p style="font-size: 16px; color: #555;">
    As a token of our appreciation, don't forget to ask about our loyalty punchcard
    program on your next visit!
  </p>
  <p style="font-size: 16px; color: #555;">We look forward to seeing you soon!</p>
  <hr style="border: 1px solid #eee; margin: 20px 0;">
  <p style="font-size: 14px; color: #999; text-align: center;">
    This is an automated message. Please do not reply to this email.
  </p>
</div>
'''


def render_thank_you_email(customer_name: str, engagement_type: str, platform: str) -> Dict[str, str]:
    """Build the subject and HTML body of a thank-you email."""
    message = THANK_YOU_MESSAGES.get(
        engagement_type,
        'Thank you for engaging with us on social media!'
    ).format(platform=platform)

    return {
        'subject': f'Thank you for your {engagement_type} on {platform}!',
        'html': render_template_string(
            THANK_YOU_TEMPLATE,
            customer_name=customer_name,
            message=message
        ),
    }


class EngagementService:
    """Engagement recording plus thank-you notification."""

    def __init__(self, email_service: EmailService, customer_service: Optional[CustomerService] = None):
        self.email_service = email_service
        self.customer_service = customer_service or CustomerService()

    def record_engagement(
        self,
        platform: str,
        engagement_type: str,
        customer_email: Optional[str] = None,
        customer_name: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Record an engagement event and send the thank-you email.

        Returns:
            Dict with engagement (event dict), email_sent and, on a failed
            send, email_error

        Raises:
            ValidationError: Platform/type missing or type not like/comment/share
        """
        platform = normalize_text(platform)
        engagement_type = normalize_text(engagement_type)
        if not platform or not engagement_type:
            raise ValidationError('Platform and engagement type are required')
        engagement_type = engagement_type.lower()
        if engagement_type not in ENGAGEMENT_TYPES:
            raise ValidationError(
                f"Invalid engagement type. Must be one of: {', '.join(ENGAGEMENT_TYPES)}",
                'engagement_type'
            )

        customer_email = normalize_email(customer_email)
        customer = self.customer_service.find_by_email(customer_email)

        event = SocialEngagement(
            customer_id=customer.id if customer else None,
            customer_email=customer_email,
            platform=platform,
            engagement_type=engagement_type,
            content=normalize_text(content),
            email_sent=False
        )
        try:
            db.session.add(event)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        result = {'engagement': None, 'email_sent': False}

        if customer_email:
            name = normalize_text(customer_name) or (customer.name if customer else None) or 'Valued Customer'
            email = render_thank_you_email(name, engagement_type, platform)
            try:
                send_result = self.email_service.send_html_email(
                    to_email=customer_email,
                    to_name=name,
                    subject=email['subject'],
                    html_body=email['html']
                )
            except Exception as e:
                logger.exception(f'Email transport raised for engagement {event.id}')
                send_result = {'success': False, 'error': str(e)}

            if send_result.get('success'):
                event.email_sent = True
                try:
                    db.session.commit()
                except Exception:
                    db.session.rollback()
                    raise
                result['email_sent'] = True
            else:
                logger.warning(
                    f"Thank-you email for engagement {event.id} failed: {send_result.get('error')}"
                )
                result['email_error'] = send_result.get('error')

        result['engagement'] = event.to_dict()
        return result
