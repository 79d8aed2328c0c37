"""
QueryFilterSet module for building list endpoint query strings
"""

from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Dict, Optional, Union
from urllib.parse import urlencode

from shopify_adapter.config_loader import ConfigurationError

MIN_LIMIT = 1
MAX_LIMIT = 250


def clamp_limit(limit: Union[int, str]) -> int:
    """
    Clamp a page size into the range the Admin API accepts

    Raises:
        ConfigurationError: If the limit is not a whole number
    """
    try:
        value = int(limit)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid limit: {limit!r}")
    return max(MIN_LIMIT, min(MAX_LIMIT, value))


@dataclass(frozen=True)
class QueryFilterSet:
    """Optional filters accepted by the customers, orders and products list endpoints"""
    limit: Optional[int] = None
    since_id: Optional[int] = None
    status: Optional[str] = None
    financial_status: Optional[str] = None
    fulfillment_status: Optional[str] = None
    created_at_min: Optional[Union[str, datetime]] = None
    created_at_max: Optional[Union[str, datetime]] = None
    updated_at_min: Optional[Union[str, datetime]] = None
    updated_at_max: Optional[Union[str, datetime]] = None
    page_info: Optional[str] = None
    fields: Optional[str] = None
    product_type: Optional[str] = None
    vendor: Optional[str] = None
    handle: Optional[str] = None
    published_status: Optional[str] = None
    collection_id: Optional[int] = None

    @classmethod
    def from_mapping(cls, values: Optional[Dict[str, Any]]) -> 'QueryFilterSet':
        """Build a filter set from a mapping, ignoring keys that are not filters"""
        if not values:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known})

    def with_overrides(self, **overrides: Any) -> 'QueryFilterSet':
        return replace(self, **overrides)

    def to_params(self) -> Dict[str, str]:
        """
        Serialise the filters that are set

        None and blank values are omitted, limit is clamped to 1-250 and
        datetimes are rendered as ISO 8601.

        Returns:
            Mapping of query parameter name to string value
        """
        params = {}
        for filter_field in fields(self):
            value = getattr(self, filter_field.name)
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue

            if filter_field.name == 'limit':
                value = clamp_limit(value)

            if isinstance(value, datetime):
                params[filter_field.name] = value.isoformat()
            elif isinstance(value, str):
                params[filter_field.name] = value.strip()
            else:
                params[filter_field.name] = str(value)
        return params

    def to_query_string(self) -> str:
        """Encoded query string without the leading '?', empty when no filter is set"""
        return urlencode(self.to_params())

    def apply_to_path(self, path: str) -> str:
        query = self.to_query_string()
        return f"{path}?{query}" if query else path
