"""
Shopify Admin REST adapter package
Provides customer, order and product operations plus change-detection polling for Prefect workflows
"""

from .config_loader import ConfigLoader, ConfigurationError, ShopifyConfig, resolve
from .http_client import RequestBuilder, HTTPClient, APIRequest, APIResponse, UnsupportedMethodError, TransportError
from .rate_limiter import RateLimiter
from .response_decoder import ResponseDecoder, ApiError, DecodeError, NotFoundError
from .entity_mapper import from_mapping, from_mappings, to_mapping
from .query_filters import QueryFilterSet
from .fetch_policy import FetchType, ListResult, FileEntityStore, apply_fetch_policy
from .resource import ShopifyResource, EntitySchema, DeleteResult
from .customers import CUSTOMER_SCHEMA, build_customer_payload
from .orders import ORDER_SCHEMA, LineItemInput, AddressInput, build_order_payload
from .products import PRODUCT_SCHEMA, build_product_payload
from .client import ShopifyClient
from .database_manager import DatabaseManager, DatabaseConnectionError
from .state_manager import StateManager
from .poller import (
    ChangeDetectionPoller,
    PollerState,
    TriggerEvent,
    compute_next_watermark,
    order_created_poller,
    customer_created_poller,
    product_created_poller,
)

__all__ = [
    'ConfigLoader',
    'ConfigurationError',
    'ShopifyConfig',
    'resolve',
    'RequestBuilder',
    'HTTPClient',
    'APIRequest',
    'APIResponse',
    'UnsupportedMethodError',
    'TransportError',
    'RateLimiter',
    'ResponseDecoder',
    'ApiError',
    'DecodeError',
    'NotFoundError',
    'from_mapping',
    'from_mappings',
    'to_mapping',
    'QueryFilterSet',
    'FetchType',
    'ListResult',
    'FileEntityStore',
    'apply_fetch_policy',
    'ShopifyResource',
    'EntitySchema',
    'DeleteResult',
    'CUSTOMER_SCHEMA',
    'build_customer_payload',
    'ORDER_SCHEMA',
    'LineItemInput',
    'AddressInput',
    'build_order_payload',
    'PRODUCT_SCHEMA',
    'build_product_payload',
    'ShopifyClient',
    'DatabaseManager',
    'DatabaseConnectionError',
    'StateManager',
    'ChangeDetectionPoller',
    'PollerState',
    'TriggerEvent',
    'compute_next_watermark',
    'order_created_poller',
    'customer_created_poller',
    'product_created_poller'
]
