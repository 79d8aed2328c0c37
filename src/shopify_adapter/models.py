"""
Entity models mirroring the Shopify Admin REST API resources

Field names follow the API's snake_case wire names. Every field is optional
because the API omits fields depending on scopes, resource state and the
`fields` projection.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any


# ---------------------------------------------------------------------------
# Shared money types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Money:
    amount: Optional[str] = None
    currency_code: Optional[str] = None


@dataclass(frozen=True)
class PriceSet:
    shop_money: Optional[Money] = None
    presentment_money: Optional[Money] = None


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CustomerAddress:
    id: Optional[int] = None
    customer_id: Optional[int] = None
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
    name: Optional[str] = None
    province_code: Optional[str] = None
    country_code: Optional[str] = None
    country_name: Optional[str] = None
    is_default: Optional[bool] = field(default=None, metadata={'wire': 'default'})


@dataclass(frozen=True)
class Customer:
    id: Optional[int] = None
    email: Optional[str] = None
    accepts_marketing: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    orders_count: Optional[int] = None
    state: Optional[str] = None
    total_spent: Optional[str] = None
    last_order_id: Optional[int] = None
    note: Optional[str] = None
    verified_email: Optional[bool] = None
    multipass_identifier: Optional[str] = None
    tax_exempt: Optional[bool] = None
    phone: Optional[str] = None
    tags: Optional[str] = None
    last_order_name: Optional[str] = None
    currency: Optional[str] = None
    accepts_marketing_updated_at: Optional[datetime] = None
    marketing_opt_in_level: Optional[str] = None
    tax_exemptions: Optional[List[str]] = None
    admin_graphql_api_id: Optional[str] = None
    default_address: Optional[CustomerAddress] = None
    addresses: Optional[List[CustomerAddress]] = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Address:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    company: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    name: Optional[str] = None
    country_code: Optional[str] = None
    province_code: Optional[str] = None


@dataclass(frozen=True)
class DiscountCode:
    code: Optional[str] = None
    amount: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class NoteAttribute:
    name: Optional[str] = None
    value: Optional[str] = None


@dataclass(frozen=True)
class TaxLine:
    price: Optional[str] = None
    rate: Optional[float] = None
    title: Optional[str] = None
    price_set: Optional[PriceSet] = None
    channel_liable: Optional[bool] = None


@dataclass(frozen=True)
class DiscountApplication:
    target_type: Optional[str] = None
    type: Optional[str] = None
    value: Optional[str] = None
    value_type: Optional[str] = None
    allocation_method: Optional[str] = None
    target_selection: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class DiscountAllocation:
    amount: Optional[str] = None
    amount_set: Optional[PriceSet] = None
    discount_application_index: Optional[int] = None


@dataclass(frozen=True)
class LineItem:
    id: Optional[int] = None
    admin_graphql_api_id: Optional[str] = None
    fulfillable_quantity: Optional[int] = None
    fulfillment_service: Optional[str] = None
    fulfillment_status: Optional[str] = None
    gift_card: Optional[bool] = None
    grams: Optional[int] = None
    name: Optional[str] = None
    price: Optional[str] = None
    price_set: Optional[PriceSet] = None
    product_exists: Optional[bool] = None
    product_id: Optional[int] = None
    properties: Optional[Any] = None
    quantity: Optional[int] = None
    requires_shipping: Optional[bool] = None
    sku: Optional[str] = None
    taxable: Optional[bool] = None
    title: Optional[str] = None
    total_discount: Optional[str] = None
    total_discount_set: Optional[PriceSet] = None
    variant_id: Optional[int] = None
    variant_inventory_management: Optional[str] = None
    variant_title: Optional[str] = None
    vendor: Optional[str] = None
    tax_lines: Optional[List[TaxLine]] = None
    duties: Optional[List[Dict[str, Any]]] = None
    discount_allocations: Optional[List[DiscountAllocation]] = None


@dataclass(frozen=True)
class Receipt:
    testcase: Optional[bool] = None
    authorization: Optional[str] = None


@dataclass(frozen=True)
class Fulfillment:
    id: Optional[int] = None
    order_id: Optional[int] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    service: Optional[str] = None
    updated_at: Optional[datetime] = None
    tracking_company: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_numbers: Optional[List[str]] = None
    tracking_url: Optional[str] = None
    tracking_urls: Optional[List[str]] = None
    receipt: Optional[Receipt] = None
    line_items: Optional[List[LineItem]] = None


@dataclass(frozen=True)
class PaymentSchedule:
    amount: Optional[str] = None
    currency: Optional[str] = None
    issued_at: Optional[datetime] = None
    due_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    expected_payment_method: Optional[str] = None


@dataclass(frozen=True)
class PaymentTerms:
    amount: Optional[str] = None
    currency: Optional[str] = None
    payment_terms_name: Optional[str] = None
    payment_terms_type: Optional[str] = None
    due_in_days: Optional[int] = None
    payment_schedules: Optional[List[PaymentSchedule]] = None


@dataclass(frozen=True)
class OrderAdjustment:
    id: Optional[int] = None
    order_id: Optional[int] = None
    refund_id: Optional[int] = None
    amount: Optional[str] = None
    tax_amount: Optional[str] = None
    kind: Optional[str] = None
    reason: Optional[str] = None
    amount_set: Optional[PriceSet] = None
    tax_amount_set: Optional[PriceSet] = None


@dataclass(frozen=True)
class CurrencyExchangeAdjustment:
    adjustment: Optional[str] = None
    original_amount: Optional[str] = None
    final_amount: Optional[str] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    id: Optional[int] = None
    admin_graphql_api_id: Optional[str] = None
    amount: Optional[str] = None
    authorization: Optional[str] = None
    created_at: Optional[datetime] = None
    currency: Optional[str] = None
    device_id: Optional[int] = None
    error_code: Optional[str] = None
    gateway: Optional[str] = None
    kind: Optional[str] = None
    location_id: Optional[int] = None
    message: Optional[str] = None
    order_id: Optional[int] = None
    parent_id: Optional[int] = None
    processed_at: Optional[datetime] = None
    receipt: Optional[Receipt] = None
    source_name: Optional[str] = None
    status: Optional[str] = None
    test: Optional[bool] = None
    user_id: Optional[int] = None
    currency_exchange_adjustment: Optional[CurrencyExchangeAdjustment] = None


@dataclass(frozen=True)
class RefundLineItem:
    id: Optional[int] = None
    line_item_id: Optional[int] = None
    location_id: Optional[int] = None
    quantity: Optional[int] = None
    restock_type: Optional[str] = None
    subtotal: Optional[str] = None
    subtotal_set: Optional[PriceSet] = None
    total_tax: Optional[str] = None
    total_tax_set: Optional[PriceSet] = None
    line_item: Optional[LineItem] = None


@dataclass(frozen=True)
class Refund:
    id: Optional[int] = None
    admin_graphql_api_id: Optional[str] = None
    created_at: Optional[datetime] = None
    note: Optional[str] = None
    order_id: Optional[int] = None
    processed_at: Optional[datetime] = None
    restock: Optional[bool] = None
    total_duties_set: Optional[PriceSet] = None
    user_id: Optional[int] = None
    order_adjustments: Optional[List[OrderAdjustment]] = None
    transactions: Optional[List[Transaction]] = None
    refund_line_items: Optional[List[RefundLineItem]] = None
    duties: Optional[List[Dict[str, Any]]] = None


@dataclass(frozen=True)
class ShippingLine:
    id: Optional[int] = None
    carrier_identifier: Optional[str] = None
    code: Optional[str] = None
    delivery_category: Optional[str] = None
    discounted_price: Optional[str] = None
    discounted_price_set: Optional[PriceSet] = None
    phone: Optional[str] = None
    price: Optional[str] = None
    price_set: Optional[PriceSet] = None
    requested_fulfillment_service_id: Optional[str] = None
    source: Optional[str] = None
    title: Optional[str] = None
    tax_lines: Optional[List[TaxLine]] = None
    discount_allocations: Optional[List[DiscountAllocation]] = None


@dataclass(frozen=True)
class Order:
    id: Optional[int] = None
    admin_graphql_api_id: Optional[str] = None
    app_id: Optional[int] = None
    browser_ip: Optional[str] = None
    buyer_accepts_marketing: Optional[bool] = None
    cancel_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cart_token: Optional[str] = None
    checkout_id: Optional[int] = None
    checkout_token: Optional[str] = None
    closed_at: Optional[datetime] = None
    confirmed: Optional[bool] = None
    contact_email: Optional[str] = None
    created_at: Optional[datetime] = None
    currency: Optional[str] = None
    current_subtotal_price: Optional[str] = None
    current_subtotal_price_set: Optional[PriceSet] = None
    current_total_discounts: Optional[str] = None
    current_total_discounts_set: Optional[PriceSet] = None
    current_total_duties_set: Optional[PriceSet] = None
    current_total_price: Optional[str] = None
    current_total_price_set: Optional[PriceSet] = None
    current_total_tax: Optional[str] = None
    current_total_tax_set: Optional[PriceSet] = None
    customer_locale: Optional[str] = None
    device_id: Optional[int] = None
    discount_codes: Optional[List[DiscountCode]] = None
    email: Optional[str] = None
    estimated_taxes: Optional[bool] = None
    financial_status: Optional[str] = None
    fulfillment_status: Optional[str] = None
    gateway: Optional[str] = None
    landing_site: Optional[str] = None
    landing_site_ref: Optional[str] = None
    location_id: Optional[int] = None
    name: Optional[str] = None
    note: Optional[str] = None
    note_attributes: Optional[List[NoteAttribute]] = None
    number: Optional[int] = None
    order_number: Optional[int] = None
    order_status_url: Optional[str] = None
    original_total_duties_set: Optional[PriceSet] = None
    payment_gateway_names: Optional[List[str]] = None
    phone: Optional[str] = None
    presentment_currency: Optional[str] = None
    processed_at: Optional[datetime] = None
    processing_method: Optional[str] = None
    reference: Optional[str] = None
    referring_site: Optional[str] = None
    source_identifier: Optional[str] = None
    source_name: Optional[str] = None
    source_url: Optional[str] = None
    subtotal_price: Optional[str] = None
    subtotal_price_set: Optional[PriceSet] = None
    tags: Optional[str] = None
    tax_lines: Optional[List[TaxLine]] = None
    taxes_included: Optional[bool] = None
    test: Optional[bool] = None
    token: Optional[str] = None
    total_discounts: Optional[str] = None
    total_discounts_set: Optional[PriceSet] = None
    total_line_items_price: Optional[str] = None
    total_line_items_price_set: Optional[PriceSet] = None
    total_outstanding: Optional[str] = None
    total_price: Optional[str] = None
    total_price_set: Optional[PriceSet] = None
    total_price_usd: Optional[str] = None
    total_shipping_price_set: Optional[PriceSet] = None
    total_tax: Optional[str] = None
    total_tax_set: Optional[PriceSet] = None
    total_tip_received: Optional[str] = None
    total_weight: Optional[int] = None
    updated_at: Optional[datetime] = None
    user_id: Optional[int] = None
    billing_address: Optional[Address] = None
    customer: Optional[Customer] = None
    discount_applications: Optional[List[DiscountApplication]] = None
    fulfillments: Optional[List[Fulfillment]] = None
    line_items: Optional[List[LineItem]] = None
    payment_terms: Optional[PaymentTerms] = None
    refunds: Optional[List[Refund]] = None
    shipping_address: Optional[Address] = None
    shipping_lines: Optional[List[ShippingLine]] = None


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProductVariant:
    id: Optional[int] = None
    product_id: Optional[int] = None
    title: Optional[str] = None
    price: Optional[str] = None
    sku: Optional[str] = None
    position: Optional[int] = None
    inventory_policy: Optional[str] = None
    compare_at_price: Optional[str] = None
    fulfillment_service: Optional[str] = None
    inventory_management: Optional[str] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    taxable: Optional[bool] = None
    barcode: Optional[str] = None
    grams: Optional[float] = None
    image_id: Optional[int] = None
    weight: Optional[float] = None
    weight_unit: Optional[str] = None
    inventory_item_id: Optional[int] = None
    inventory_quantity: Optional[int] = None
    old_inventory_quantity: Optional[int] = None
    requires_shipping: Optional[bool] = None
    admin_graphql_api_id: Optional[str] = None


@dataclass(frozen=True)
class ProductOption:
    id: Optional[int] = None
    product_id: Optional[int] = None
    name: Optional[str] = None
    position: Optional[int] = None
    values: Optional[List[str]] = None


@dataclass(frozen=True)
class ProductImage:
    id: Optional[int] = None
    product_id: Optional[int] = None
    position: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    alt: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    src: Optional[str] = None
    variant_ids: Optional[List[int]] = None
    admin_graphql_api_id: Optional[str] = None


@dataclass(frozen=True)
class Product:
    id: Optional[int] = None
    title: Optional[str] = None
    body_html: Optional[str] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    published_scope: Optional[str] = None
    tags: Optional[str] = None
    status: Optional[str] = None
    admin_graphql_api_id: Optional[str] = None
    variants: Optional[List[ProductVariant]] = None
    options: Optional[List[ProductOption]] = None
    images: Optional[List[ProductImage]] = None
    image: Optional[ProductImage] = None
    handle: Optional[str] = None
    template_suffix: Optional[str] = None
    metafields: Optional[Dict[str, Any]] = None
