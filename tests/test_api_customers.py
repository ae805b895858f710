"""
Tests for the Customers API endpoints.

- GET/POST /api/customers
- GET/PUT/DELETE /api/customers/{id}
- GET /api/customers/search/{query}
"""


class TestCustomersAuth:

    def test_list_requires_token(self, client):
        response = client.get('/api/customers')
        assert response.status_code == 401
        assert response.get_json()['error']['code'] == 'AUTH_REQUIRED'

    def test_manager_can_use_staff_endpoints(self, client, manager_headers):
        response = client.get('/api/customers', headers=manager_headers)
        assert response.status_code == 200


class TestCreateCustomer:

    def test_create_customer(self, client, auth_headers):
        response = client.post('/api/customers', headers=auth_headers, json={
            'name': 'Ann Lee',
            'email': 'ann@example.com',
            'phone': '555-0101'
        })

        assert response.status_code == 201
        data = response.get_json()
        assert data['customer_id'] == data['customer']['id']
        assert len(data['customer']['punchcards']) == 1
        assert data['customer']['punchcards'][0]['punches'] == 0

    def test_create_customer_missing_name(self, client, auth_headers):
        response = client.post('/api/customers', headers=auth_headers, json={'email': 'x@example.com'})

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'INVALID_NAME'

    def test_create_customer_duplicate_email(self, client, auth_headers, sample_customer):
        response = client.post('/api/customers', headers=auth_headers, json={
            'name': 'Jane Again',
            'email': 'jane@example.com'
        })

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'DUPLICATE_ENTRY'

    def test_create_customer_body_must_be_object(self, client, auth_headers):
        response = client.post('/api/customers', headers=auth_headers, json=['Ann Lee'])

        assert response.status_code == 400
        error = response.get_json()['error']
        assert error['code'] == 'VALIDATION_ERROR'
        assert error['message'] == 'Request body must be a JSON object'


class TestReadCustomers:

    def test_list_includes_stats(self, client, auth_headers, sample_customer):
        response = client.get('/api/customers', headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()
        assert len(data) == 1
        assert data[0]['stats'] == {
            'total_punchcards': 1,
            'redeemed_punchcards': 0,
            'active_punchcards': 1,
        }

    def test_get_customer(self, client, auth_headers, sample_customer):
        response = client.get(f'/api/customers/{sample_customer.id}', headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()
        assert data['name'] == 'Jane Doe'
        assert len(data['punchcards']) == 1

    def test_get_customer_not_found(self, client, auth_headers):
        response = client.get('/api/customers/99999', headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json()['error']['code'] == 'CUSTOMER_NOT_FOUND'

    def test_search(self, client, auth_headers, sample_customer):
        response = client.get('/api/customers/search/jane', headers=auth_headers)

        assert response.status_code == 200
        assert [c['id'] for c in response.get_json()] == [sample_customer.id]

    def test_search_no_results(self, client, auth_headers, sample_customer):
        response = client.get('/api/customers/search/nobody', headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json() == []


class TestUpdateDeleteCustomer:

    def test_update_customer(self, client, auth_headers, sample_customer):
        response = client.put(
            f'/api/customers/{sample_customer.id}',
            headers=auth_headers,
            json={'name': 'Jane Smith'}
        )

        assert response.status_code == 200
        assert response.get_json()['customer']['name'] == 'Jane Smith'
        assert response.get_json()['customer']['email'] == 'jane@example.com'

    def test_delete_customer(self, client, auth_headers, sample_customer):
        response = client.delete(f'/api/customers/{sample_customer.id}', headers=auth_headers)
        assert response.status_code == 200

        response = client.get(f'/api/customers/{sample_customer.id}', headers=auth_headers)
        assert response.status_code == 404

    def test_delete_customer_with_redemptions(self, client, auth_headers, sample_customer):
        for _ in range(10):
            client.post(f'/api/punchcards/punch/{sample_customer.id}', headers=auth_headers)
        client.post(f'/api/punchcards/redeem/{sample_customer.active_punchcard_id}', headers=auth_headers)

        response = client.delete(f'/api/customers/{sample_customer.id}', headers=auth_headers)

        assert response.status_code == 409
        assert response.get_json()['error']['code'] == 'CUSTOMER_HAS_REDEMPTIONS'
