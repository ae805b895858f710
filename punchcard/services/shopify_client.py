"""
Shopify Admin API client.
Read-only access to Shopify customers for loyalty sync.
"""
import logging
import httpx
from typing import Optional, Dict, Any, List

from ..utils.exceptions import ShopifyError, ConfigurationError

logger = logging.getLogger(__name__)


class ShopifyClient:
    """
    Client for the Shopify Admin REST API.

    Supports:
    - Fetch a customer by ID
    - Fetch one page of customers
    - Customer search

    Customer records are returned as Shopify sends them (id, first_name,
    last_name, email, phone, orders_count, total_spent, ...).
    """

    def __init__(self, shop_domain: str, access_token: str, api_version: str = '2024-01', timeout: float = 30.0):
        self.shop_domain = shop_domain.replace('https://', '').replace('http://', '').rstrip('/')
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self.base_url = f'https://{self.shop_domain}/admin/api/{api_version}'

    @classmethod
    def from_config(cls, config) -> 'ShopifyClient':
        """
        Build a client from Flask config.

        Raises:
            ConfigurationError: Store URL or access token not set
        """
        if not config.get('SHOPIFY_STORE_URL') or not config.get('SHOPIFY_ACCESS_TOKEN'):
            raise ConfigurationError('Shopify API not configured')

        return cls(
            config['SHOPIFY_STORE_URL'],
            config['SHOPIFY_ACCESS_TOKEN'],
            api_version=config.get('SHOPIFY_API_VERSION', '2024-01'),
            timeout=config.get('SHOPIFY_TIMEOUT', 30.0)
        )

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GET request against the Admin API.

        Raises:
            ShopifyError: Shopify unreachable or returned an error status.
                upstream_status carries Shopify's HTTP status when there is one.
        """
        headers = {
            'X-Shopify-Access-Token': self.access_token,
            'Content-Type': 'application/json'
        }

        try:
            with httpx.Client() as client:
                response = client.get(
                    f'{self.base_url}/{path}',
                    headers=headers,
                    params=params,
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response.json()
        except ValueError as e:
            logger.error(f'Shopify API returned a non-JSON response on {path}')
            raise ShopifyError(
                'Invalid response from Shopify',
                upstream_status=502,
                original_error=e
            )
        except httpx.HTTPStatusError as e:
            try:
                details = e.response.json()
            except ValueError:
                details = e.response.text
            logger.warning(f'Shopify API error {e.response.status_code} on {path}: {details}')
            raise ShopifyError(
                'Shopify API error',
                upstream_status=e.response.status_code,
                details=details,
                original_error=e
            )
        except httpx.RequestError as e:
            logger.error(f'Shopify API unreachable ({path}): {e}')
            raise ShopifyError('Shopify API unreachable', details=str(e), original_error=e)

    def get_customer(self, customer_id: str) -> Dict[str, Any]:
        """
        Get a customer by their Shopify ID.

        Args:
            customer_id: Shopify customer ID (numeric or GID)
        """
        customer_id = str(customer_id).split('/')[-1]
        result = self._get(f'customers/{customer_id}.json')
        return result.get('customer') or {}

    def list_customers(self, limit: int = 250) -> List[Dict[str, Any]]:
        """
        Get the first page of customers.

        Args:
            limit: Page size (Shopify caps this at 250)
        """
        result = self._get('customers.json', {'limit': min(limit, 250)})
        return result.get('customers', [])

    def search_customers(self, query: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Search for customers by name, email, or phone.

        Args:
            query: Shopify customer search query
            limit: Maximum results to return
        """
        params = {'query': query.strip()}
        if limit:
            params['limit'] = min(limit, 250)
        result = self._get('customers/search.json', params)
        return result.get('customers', [])
