"""
Tests for the Engagement Service and the SendGrid email transport.
"""
import pytest
from unittest.mock import patch, MagicMock

from punchcard.models import SocialEngagement
from punchcard.services.email_service import EmailService
from punchcard.services.engagement_service import EngagementService, render_thank_you_email
from punchcard.utils.exceptions import ValidationError


class TestRenderThankYou:

    def test_share_email(self, app):
        with app.app_context():
            email = render_thank_you_email('Jane', 'share', 'facebook')

        assert email['subject'] == 'Thank you for your share on facebook!'
        assert 'Hi Jane,' in email['html']
        assert 'sharing our content on facebook' in email['html']

    def test_name_is_escaped(self, app):
        with app.app_context():
            email = render_thank_you_email('<b>Jane</b>', 'like', 'tiktok')

        assert '<b>Jane</b>' not in email['html']
        assert '&lt;b&gt;Jane&lt;/b&gt;' in email['html']


class TestRecordEngagement:

    def test_matches_customer_and_uses_their_name(self, app, sample_customer):
        transport = MagicMock()
        transport.send_html_email.return_value = {'success': True}

        with app.app_context():
            result = EngagementService(transport).record_engagement(
                platform='instagram',
                engagement_type='LIKE',
                customer_email='Jane@Example.com'
            )

            assert result['email_sent'] is True
            assert result['engagement']['engagement_type'] == 'like'
            assert result['engagement']['customer_id'] == sample_customer.id
            assert transport.send_html_email.call_args.kwargs['to_name'] == 'Jane Doe'

    def test_transport_exception_is_recorded(self, app):
        transport = MagicMock()
        transport.send_html_email.side_effect = RuntimeError('connection reset')

        with app.app_context():
            result = EngagementService(transport).record_engagement(
                platform='instagram',
                engagement_type='comment',
                customer_email='someone@example.com'
            )

            assert result['email_sent'] is False
            assert result['email_error'] == 'connection reset'
            assert SocialEngagement.query.one().email_sent is False

    def test_invalid_type(self, app):
        with app.app_context():
            with pytest.raises(ValidationError) as exc_info:
                EngagementService(MagicMock()).record_engagement('instagram', 'follow')
            assert exc_info.value.field == 'engagement_type'


class TestEmailService:

    def test_unconfigured_returns_failure(self):
        service = EmailService(api_key='', from_email='noreply@example.com')

        result = service.send_html_email('a@example.com', 'A', 'Hi', '<p>Hi</p>')

        assert service.is_configured is False
        assert result == {'success': False, 'error': 'Email not configured'}

    def test_send_through_sendgrid(self):
        with patch('punchcard.services.email_service.SendGridAPIClient') as mock_client_cls:
            mock_client_cls.return_value.send.return_value = MagicMock(status_code=202)
            service = EmailService(api_key='SG.test', from_email='noreply@example.com', from_name='Shop')

            result = service.send_html_email('a@example.com', 'A', 'Hi', '<p>Hi</p>')

        assert result == {'success': True, 'status_code': 202}
        mock_client_cls.assert_called_once_with('SG.test')

    def test_sendgrid_error_returns_failure(self):
        with patch('punchcard.services.email_service.SendGridAPIClient') as mock_client_cls:
            mock_client_cls.return_value.send.side_effect = Exception('403 Forbidden')
            service = EmailService(api_key='SG.test', from_email='noreply@example.com')

            result = service.send_html_email('a@example.com', None, 'Hi', '<p>Hi</p>')

        assert result['success'] is False
        assert '403' in result['error']

    def test_app_owns_one_instance(self, app):
        assert isinstance(app.extensions['email_service'], EmailService)
        assert app.extensions['email_service'].is_configured is False
