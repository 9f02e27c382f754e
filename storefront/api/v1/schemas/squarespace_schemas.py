"""
Pydantic models for the Squarespace Commerce API.

Field names follow the wire format (camelCase). Every model is a frozen
snapshot of remote state and keeps unknown vendor fields, so new attributes
published by Squarespace survive a round trip through the client.
"""

from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SquarespaceModel(BaseModel):
    """Base for vendor records: immutable, open to extra fields."""

    model_config = ConfigDict(frozen=True, extra="allow")


class ProductVisibility(str, Enum):
    """Visibility of a product variant in the storefront."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    HIDDEN = "HIDDEN"


class OrderStatus(str, Enum):
    """Order states reported by Squarespace."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    PARTIALLY_FULFILLED = "PARTIALLY_FULFILLED"
    FULFILLED = "FULFILLED"
    CANCELED = "CANCELED"
    REFUNDED = "REFUNDED"


class FulfillmentType(str, Enum):
    SHIPPING = "SHIPPING"
    PICKUP = "PICKUP"
    DIGITAL = "DIGITAL"


class FulfillmentStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


# Shared Models


class Money(SquarespaceModel):
    """Monetary amount as sent by Squarespace. No arithmetic is done locally."""

    value: str
    currency: str


class SystemData(SquarespaceModel):
    """Vendor timestamps, in epoch milliseconds."""

    createdOn: int
    modifiedOn: int
    publishedOn: Optional[int] = None


class Address(SquarespaceModel):
    firstName: str
    lastName: str
    company: Optional[str] = None
    addressLine1: str
    addressLine2: Optional[str] = None
    city: str
    state: Optional[str] = None
    postalCode: str
    country: str
    phone: Optional[str] = None


# Product Models


class ProductImage(SquarespaceModel):
    assetId: str
    url: str
    description: Optional[str] = None
    mimeType: str
    width: int
    height: int


class ProductPricing(SquarespaceModel):
    basePrice: Optional[Money] = None
    compareAtPrice: Optional[Money] = None
    salePrice: Optional[Money] = None
    onSale: bool = False


class ProductStock(SquarespaceModel):
    trackInventory: bool = False
    quantity: Optional[int] = None
    allowBackorder: bool = False
    unlimited: bool = False


class ProductAttribute(SquarespaceModel):
    name: str
    value: str


class VariantOption(SquarespaceModel):
    name: str
    option: str


class ProductVariant(SquarespaceModel):
    """A purchasable variant of a product (size, color...)."""

    id: str
    sku: str
    name: str
    description: Optional[str] = None
    images: List[ProductImage] = Field(default_factory=list)
    pricing: ProductPricing
    stock: ProductStock
    visibility: ProductVisibility = ProductVisibility.PUBLIC
    attributes: Optional[List[ProductAttribute]] = None
    variants: Optional[List[VariantOption]] = None


class FieldValidation(SquarespaceModel):
    minLength: Optional[int] = None
    maxLength: Optional[int] = None
    pattern: Optional[str] = None


class CustomFormField(SquarespaceModel):
    fieldId: str
    type: str
    label: str
    required: bool = False
    choices: Optional[List[str]] = None
    validation: Optional[FieldValidation] = None


class CustomForm(SquarespaceModel):
    formId: str
    fields: List[CustomFormField] = Field(default_factory=list)


class RelatedProduct(SquarespaceModel):
    productId: str
    variantId: str


class SeoData(SquarespaceModel):
    title: Optional[str] = None
    description: Optional[str] = None
    slug: Optional[str] = None
    image: Optional[str] = None


class Product(SquarespaceModel):
    """
    A product and its variants.

    The variant list is called ``products`` on the wire.
    """

    id: str
    type: str = "PRODUCT"
    variantId: Optional[str] = None
    customForm: Optional[CustomForm] = None
    categories: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    products: List[ProductVariant] = Field(default_factory=list)
    relatedProducts: Optional[List[RelatedProduct]] = None
    seoData: Optional[SeoData] = None
    systemData: SystemData


# Order Models


class OrderCustomization(SquarespaceModel):
    fieldName: str
    value: str


class OrderLineItem(SquarespaceModel):
    productId: str
    variantId: str
    sku: str
    productName: str
    variantName: Optional[str] = None
    quantity: int
    unitPrice: Money
    totalPrice: Money
    customizations: Optional[List[OrderCustomization]] = None


class OrderTotals(SquarespaceModel):
    subtotal: Money
    tax: Money
    shipping: Money
    discount: Money
    total: Money


class TrackingInfo(SquarespaceModel):
    carrier: str
    trackingNumber: str
    trackingUrl: Optional[str] = None


class OrderFulfillment(SquarespaceModel):
    id: str
    type: FulfillmentType
    status: FulfillmentStatus
    trackingInfo: Optional[TrackingInfo] = None
    lineItems: List[str] = Field(default_factory=list)


class Order(SquarespaceModel):
    id: str
    orderNumber: str
    customerId: Optional[str] = None
    email: str
    billingAddress: Address
    shippingAddress: Optional[Address] = None
    lineItems: List[OrderLineItem] = Field(default_factory=list)
    totals: OrderTotals
    status: OrderStatus
    fulfillments: List[OrderFulfillment] = Field(default_factory=list)
    systemData: SystemData


class OrderDraft(BaseModel):
    """
    Partial order sent on creation.

    Only the fields that were set are serialized, so Squarespace fills in
    the rest (id, totals, status, system data).
    """

    model_config = ConfigDict(extra="allow")

    orderNumber: Optional[str] = None
    customerId: Optional[str] = None
    email: Optional[str] = None
    billingAddress: Optional[Address] = None
    shippingAddress: Optional[Address] = None
    lineItems: List[OrderLineItem] = Field(default_factory=list)
    totals: Optional[OrderTotals] = None
    status: Optional[OrderStatus] = None


# Inventory & Profile Models


class InventoryItem(SquarespaceModel):
    """Stock record of a single variant."""

    variantId: str
    sku: Optional[str] = None
    descriptor: Optional[str] = None
    isUnlimited: bool = False
    quantity: int = 0


class CustomerProfile(SquarespaceModel):
    id: str
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None
    hasAccount: Optional[bool] = None
    isCustomer: Optional[bool] = None
    acceptsMarketing: Optional[bool] = None
    createdOn: Optional[str] = None
    address: Optional[Address] = None


# Envelopes


class Pagination(SquarespaceModel):
    nextPage: Optional[str] = None
    prevPage: Optional[str] = None
    totalResults: Optional[int] = None


class ApiResponse(SquarespaceModel, Generic[T]):
    """List envelope: ``{"result": [...], "pagination": {...}}``."""

    result: List[T] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


class SquarespaceErrorBody(SquarespaceModel):
    """Error body returned by Squarespace on non-2xx responses."""

    type: str = "UnknownError"
    message: str = "Unknown error"
    details: Optional[Any] = None
