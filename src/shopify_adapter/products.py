"""
Product resource schema and request payloads
"""

from typing import Any, Dict, Optional

from shopify_adapter.config_loader import resolve
from shopify_adapter.models import Product
from shopify_adapter.resource import EntitySchema

PRODUCT_SCHEMA = EntitySchema(entity_cls=Product, singular="product", plural="products")


def build_product_payload(title: Optional[str] = None,
                          body_html: Optional[str] = None,
                          vendor: Optional[str] = None,
                          product_type: Optional[str] = None,
                          tags: Optional[str] = None,
                          status: Optional[str] = None,
                          handle: Optional[str] = None,
                          template_suffix: Optional[str] = None,
                          published_scope: Optional[str] = None,
                          seo_title: Optional[str] = None,
                          seo_description: Optional[str] = None,
                          creating: bool = True) -> Dict[str, Any]:
    """
    Build the body for creating or updating a product

    Only supplied fields are included. On create the title is required and
    the status defaults to 'draft'; on update every field is optional.
    SEO title and description are nested under 'seo'.

    Raises:
        ConfigurationError: If creating without a title
    """
    payload: Dict[str, Any] = {}

    if creating:
        payload['title'] = resolve(title, 'title')
        status = resolve(status, 'status', required=False, default="draft")

    fields = {
        'title': title,
        'body_html': body_html,
        'vendor': vendor,
        'product_type': product_type,
        'tags': tags,
        'status': status,
        'handle': handle,
        'template_suffix': template_suffix,
        'published_scope': published_scope,
    }
    for key, value in fields.items():
        value = resolve(value, key, required=False)
        if value is not None:
            payload[key] = value

    seo = {}
    seo_title = resolve(seo_title, 'seo_title', required=False)
    seo_description = resolve(seo_description, 'seo_description', required=False)
    if seo_title is not None:
        seo['title'] = seo_title
    if seo_description is not None:
        seo['description'] = seo_description
    if seo:
        payload['seo'] = seo

    return payload
