"""
Order endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from storefront.api.v1.dependencies import get_squarespace_client
from storefront.api.v1.schemas.api_schemas import APIResponse
from storefront.api.v1.schemas.squarespace_schemas import Order, OrderDraft
from storefront.db.squarespace_client import SquarespaceClient
from storefront.utils.error_handler import ValidationException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get(
    "",
    response_model=APIResponse[List[Order]],
    response_model_exclude_none=True,
    summary="List orders",
)
async def list_orders(
    limit: int = Query(20, ge=0, description="Maximum number of orders"),
    offset: int = Query(0, ge=0, description="Number of orders to skip"),
    order_status: Optional[str] = Query(None, alias="status", description="Order status filter"),
    customer_id: Optional[str] = Query(None, alias="customerId", description="Customer filter"),
    client: SquarespaceClient = Depends(get_squarespace_client),
) -> APIResponse[List[Order]]:
    response = await client.get_orders(limit=limit, offset=offset, status=order_status, customer_id=customer_id)
    return APIResponse[List[Order]](data=response.result, pagination=response.pagination)


@router.get(
    "/{order_id}",
    response_model=APIResponse[Order],
    response_model_exclude_none=True,
    summary="Get an order",
)
async def get_order(
    order_id: str,
    client: SquarespaceClient = Depends(get_squarespace_client),
) -> APIResponse[Order]:
    order = await client.get_order(order_id)
    return APIResponse[Order](data=order)


@router.post(
    "",
    response_model=APIResponse[Order],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create an order",
)
async def create_order(
    draft: OrderDraft,
    client: SquarespaceClient = Depends(get_squarespace_client),
) -> APIResponse[Order]:
    """
    Create an order in Squarespace.

    The draft must carry the customer email and at least one line item;
    everything else is left for Squarespace to fill in.

    Raises:
        ValidationException: If the email or the line items are missing
    """
    if not draft.email:
        raise ValidationException("Email is required", field="email")

    if not draft.lineItems:
        raise ValidationException("At least one line item is required", field="lineItems")

    created = await client.create_order(draft)
    logger.info(f"Created order {created.orderNumber} ({created.id}) for {created.email}")
    return APIResponse[Order](data=created)
