"""
Order resource schema and request payloads
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Union

from shopify_adapter.config_loader import ConfigurationError, resolve
from shopify_adapter.models import Order
from shopify_adapter.resource import EntitySchema

ORDER_SCHEMA = EntitySchema(entity_cls=Order, singular="order", plural="orders")


@dataclass
class LineItemInput:
    variant_id: Optional[int] = None
    product_id: Optional[int] = None
    quantity: Optional[int] = None
    price: Optional[str] = None
    title: Optional[str] = None
    sku: Optional[str] = None
    gift_card: Optional[bool] = None
    requires_shipping: Optional[bool] = None
    taxable: Optional[bool] = None
    fulfillment_service: Optional[str] = None
    properties: Optional[Any] = None


@dataclass
class AddressInput:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    province_code: Optional[str] = None
    country_code: Optional[str] = None


def _compact(value: Union[Dict[str, Any], LineItemInput, AddressInput]) -> Dict[str, Any]:
    if not isinstance(value, dict):
        value = asdict(value)
    return {key: item for key, item in value.items() if item is not None}


def build_order_payload(line_items: List[Union[LineItemInput, Dict[str, Any]]],
                        customer_email: Optional[str] = None,
                        customer_id: Optional[int] = None,
                        financial_status: str = "pending",
                        send_receipt: bool = False,
                        send_fulfillment_receipt: bool = False,
                        note: Optional[str] = None,
                        tags: Optional[str] = None,
                        billing_address: Optional[Union[AddressInput, Dict[str, Any]]] = None,
                        shipping_address: Optional[Union[AddressInput, Dict[str, Any]]] = None,
                        currency: Optional[str] = None,
                        inventory_behaviour: str = "bypass") -> Dict[str, Any]:
    """
    Build the body for creating an order

    When both customer_id and customer_email are given the customer is
    referenced by id and the email is still sent on the order.

    Raises:
        ConfigurationError: If no line item is given
    """
    if not line_items:
        raise ConfigurationError("At least one line item is required")

    payload: Dict[str, Any] = {}

    customer_email = resolve(customer_email, 'customer_email', required=False)
    if customer_email is not None:
        payload['email'] = customer_email
        payload['customer'] = {'email': customer_email}
    if customer_id is not None:
        payload['customer'] = {'id': customer_id}

    payload['line_items'] = [_compact(item) for item in line_items]
    payload['financial_status'] = resolve(financial_status, 'financial_status',
                                          required=False, default="pending")

    for key, value in (('note', note), ('tags', tags), ('currency', currency)):
        value = resolve(value, key, required=False)
        if value is not None:
            payload[key] = value

    if billing_address is not None:
        payload['billing_address'] = _compact(billing_address)
    if shipping_address is not None:
        payload['shipping_address'] = _compact(shipping_address)

    payload['inventory_behaviour'] = resolve(inventory_behaviour, 'inventory_behaviour',
                                             required=False, default="bypass")
    payload['send_receipt'] = send_receipt
    payload['send_fulfillment_receipt'] = send_fulfillment_receipt

    return payload
