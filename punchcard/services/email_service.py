"""
Email transport (SendGrid).

Constructed once by the application factory and stored on
app.extensions['email_service']; use get_email_service() to reach it.
"""
import logging
from typing import Dict, Any, Optional
from flask import current_app
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, Email, To

logger = logging.getLogger(__name__)


class EmailService:
    """Sends pre-rendered HTML emails through SendGrid. One attempt per call."""

    def __init__(self, api_key: Optional[str], from_email: str, from_name: Optional[str] = None):
        self.from_email = from_email
        self.from_name = from_name
        self.client = SendGridAPIClient(api_key) if api_key else None

    @classmethod
    def from_config(cls, config) -> 'EmailService':
        return cls(
            config.get('SENDGRID_API_KEY'),
            config.get('EMAIL_FROM', 'noreply@example.com'),
            config.get('EMAIL_FROM_NAME')
        )

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def send_html_email(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
    ) -> Dict[str, Any]:
        """
        Send an email with pre-rendered HTML content.

        Returns:
            {'success': True, 'status_code': ...} or {'success': False, 'error': ...}
        """
        if not self.is_configured:
            logger.warning('SendGrid API key not configured, email not sent')
            return {'success': False, 'error': 'Email not configured'}

        try:
            message = Mail(
                from_email=Email(email=self.from_email, name=self.from_name),
                to_emails=To(email=to_email, name=to_name),
                subject=subject,
                html_content=html_body
            )

            response = self.client.send(message)

            logger.info(f'Email sent to {to_email} (status {response.status_code})')
            return {
                'success': True,
                'status_code': response.status_code,
            }

        except Exception as e:
            logger.error(f'Failed to send email to {to_email}: {str(e)}')
            return {'success': False, 'error': str(e)}


def get_email_service() -> EmailService:
    """The EmailService owned by the current app."""
    return current_app.extensions['email_service']
