"""
Customer resource schema and request payloads
"""

from typing import Any, Dict, List, Optional

from shopify_adapter.config_loader import resolve
from shopify_adapter.models import Customer
from shopify_adapter.resource import EntitySchema

CUSTOMER_SCHEMA = EntitySchema(entity_cls=Customer, singular="customer", plural="customers")


def _address_payload(address: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in address.items() if value is not None}


def build_customer_payload(email: str,
                           first_name: Optional[str] = None,
                           last_name: Optional[str] = None,
                           phone: Optional[str] = None,
                           accepts_marketing: bool = False,
                           verified_email: bool = False,
                           tax_exempt: bool = False,
                           tags: Optional[str] = None,
                           note: Optional[str] = None,
                           password: Optional[str] = None,
                           password_confirmation: Optional[str] = None,
                           send_email_invite: bool = False,
                           addresses: Optional[List[Dict[str, Any]]] = None,
                           metafields: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """
    Build the body for creating a customer

    Args:
        email: Customer email address, required
        addresses: Address mappings using wire names (address1, city, country_code, ...)
        metafields: Metafield mappings (namespace, key, value, type)

    Returns:
        Customer payload without the 'customer' envelope

    Raises:
        ConfigurationError: If email is missing
    """
    payload = {
        'email': resolve(email, 'email'),
        'accepts_marketing': accepts_marketing,
        'verified_email': verified_email,
        'tax_exempt': tax_exempt,
        'send_email_invite': send_email_invite,
    }

    optional = {
        'first_name': first_name,
        'last_name': last_name,
        'phone': phone,
        'tags': tags,
        'note': note,
        'password': password,
        'password_confirmation': password_confirmation,
    }
    for key, value in optional.items():
        value = resolve(value, key, required=False)
        if value is not None:
            payload[key] = value

    if addresses:
        payload['addresses'] = [_address_payload(address) for address in addresses]
    if metafields:
        payload['metafields'] = metafields

    return payload
