"""
Tests for the Punchcards API endpoints.

- POST /api/punchcards/punch/{customer_id}
- POST /api/punchcards/redeem/{punchcard_id}
- GET /api/punchcards, /api/punchcards/customer/{id}, /api/punchcards/redemptions
"""
import pytest


def punch(client, headers, customer_id, times=1):
    response = None
    for _ in range(times):
        response = client.post(f'/api/punchcards/punch/{customer_id}', headers=headers)
    return response


class TestPunchAuth:

    def test_punch_requires_token(self, client, sample_customer):
        response = client.post(f'/api/punchcards/punch/{sample_customer.id}')
        assert response.status_code == 401

    def test_redeem_requires_token(self, client, sample_customer):
        response = client.post(f'/api/punchcards/redeem/{sample_customer.active_punchcard_id}')
        assert response.status_code == 401


class TestPunch:

    def test_punch(self, client, auth_headers, sample_customer):
        response = punch(client, auth_headers, sample_customer.id)

        assert response.status_code == 200
        data = response.get_json()
        assert data['punches'] == 1
        assert data['remaining'] == 9
        assert data['is_full'] is False

    def test_tenth_punch_fills_card(self, client, auth_headers, sample_customer):
        response = punch(client, auth_headers, sample_customer.id, times=10)

        data = response.get_json()
        assert data['punches'] == 10
        assert data['is_full'] is True

    def test_punch_full_card_conflict(self, client, auth_headers, sample_customer):
        punch(client, auth_headers, sample_customer.id, times=10)

        response = punch(client, auth_headers, sample_customer.id)

        assert response.status_code == 409
        assert response.get_json()['error']['code'] == 'PUNCHCARD_FULL'

    def test_punch_unknown_customer(self, client, auth_headers):
        response = punch(client, auth_headers, 99999)
        assert response.status_code == 404


class TestRedeem:

    def test_punch_and_redeem_flow(self, client, auth_headers, sample_customer):
        card_id = sample_customer.active_punchcard_id
        punch(client, auth_headers, sample_customer.id, times=10)

        response = client.post(
            f'/api/punchcards/redeem/{card_id}',
            headers=auth_headers,
            json={'notes': 'free coffee'}
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data['punchcard_id'] == card_id
        assert data['redemption']['notes'] == 'free coffee'
        assert data['redemption']['redeemed_by_name'] == 'Barista Bob'
        assert data['new_punchcard']['punches'] == 0
        assert data['new_punchcard']['id'] != card_id

        cards = client.get(f'/api/punchcards/customer/{sample_customer.id}', headers=auth_headers).get_json()
        assert len(cards) == 2
        assert cards[0]['id'] == data['new_punchcard']['id']
        assert cards[1]['state'] == 'redeemed'

    def test_redeem_again_conflict(self, client, auth_headers, sample_customer):
        card_id = sample_customer.active_punchcard_id
        punch(client, auth_headers, sample_customer.id, times=10)
        client.post(f'/api/punchcards/redeem/{card_id}', headers=auth_headers)

        response = client.post(f'/api/punchcards/redeem/{card_id}', headers=auth_headers)

        assert response.status_code == 409
        assert response.get_json()['error']['code'] == 'ALREADY_REDEEMED'
        redemptions = client.get('/api/punchcards/redemptions', headers=auth_headers).get_json()
        assert len(redemptions) == 1

    @pytest.mark.parametrize('punches', [0, 5, 9])
    def test_redeem_not_full(self, client, auth_headers, sample_customer, punches):
        punch(client, auth_headers, sample_customer.id, times=punches)

        response = client.post(
            f'/api/punchcards/redeem/{sample_customer.active_punchcard_id}',
            headers=auth_headers
        )

        assert response.status_code == 409
        assert response.get_json()['error']['code'] == 'PUNCHCARD_NOT_FULL'

    def test_redeem_unknown_card(self, client, auth_headers):
        response = client.post('/api/punchcards/redeem/99999', headers=auth_headers)
        assert response.status_code == 404


class TestListings:

    def test_list_punchcards_has_customer_name(self, client, auth_headers, sample_customer):
        response = client.get('/api/punchcards', headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()
        assert data[0]['customer_name'] == 'Jane Doe'

    def test_customer_punchcards_unknown_customer(self, client, auth_headers):
        response = client.get('/api/punchcards/customer/99999', headers=auth_headers)
        assert response.status_code == 404

    def test_redemptions_filter(self, client, auth_headers, sample_customer):
        punch(client, auth_headers, sample_customer.id, times=10)
        client.post(f'/api/punchcards/redeem/{sample_customer.active_punchcard_id}', headers=auth_headers)

        response = client.get(
            f'/api/punchcards/redemptions?customer_id={sample_customer.id}',
            headers=auth_headers
        )

        data = response.get_json()
        assert len(data) == 1
        assert data[0]['customer_name'] == 'Jane Doe'
        assert data[0]['redeemed_by_email'] == 'barista@example.com'
