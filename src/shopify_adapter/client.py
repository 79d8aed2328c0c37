"""
ShopifyClient module wiring the shared request, transport and decoding components into resources
"""

from pathlib import Path
from typing import Optional

import requests

from shopify_adapter.config_loader import ShopifyConfig
from shopify_adapter.http_client import RequestBuilder, HTTPClient
from shopify_adapter.rate_limiter import RateLimiter
from shopify_adapter.response_decoder import ResponseDecoder
from shopify_adapter.fetch_policy import EntityStore, FileEntityStore
from shopify_adapter.resource import ShopifyResource
from shopify_adapter.customers import CUSTOMER_SCHEMA
from shopify_adapter.orders import ORDER_SCHEMA
from shopify_adapter.products import PRODUCT_SCHEMA


class ShopifyClient:
    """Customers, orders and products resources sharing one set of collaborators"""

    def __init__(self, config: ShopifyConfig,
                 session: Optional[requests.Session] = None,
                 store: Optional[EntityStore] = None,
                 rate_limiter: Optional[RateLimiter] = None):
        self.config = config
        self.request_builder = RequestBuilder(config.store_domain, config.access_token, config.api_version)
        self.http_client = HTTPClient(timeout=config.timeout, session=session)
        self.rate_limiter = rate_limiter or RateLimiter(config.rate_limit_delay)
        self.decoder = ResponseDecoder()
        self.store = store or FileEntityStore(Path(config.storage_directory))

        self.customers = self._resource(CUSTOMER_SCHEMA)
        self.orders = self._resource(ORDER_SCHEMA)
        self.products = self._resource(PRODUCT_SCHEMA)

    def _resource(self, schema) -> ShopifyResource:
        return ShopifyResource(
            schema=schema,
            request_builder=self.request_builder,
            http_client=self.http_client,
            rate_limiter=self.rate_limiter,
            decoder=self.decoder,
            store=self.store
        )

    def resource(self, name: str) -> ShopifyResource:
        """
        Look up a resource by its plural name ('customers', 'orders', 'products')

        Raises:
            ValueError: If the name is not a known resource
        """
        resources = {
            'customers': self.customers,
            'orders': self.orders,
            'products': self.products,
        }
        if name not in resources:
            raise ValueError(f"Unsupported resource: {name}")
        return resources[name]

    def close(self) -> None:
        self.http_client.close_connection()

    def __enter__(self) -> 'ShopifyClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
