"""
Inventory and customer profile endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from storefront.api.v1.dependencies import get_squarespace_client
from storefront.api.v1.schemas.api_schemas import APIResponse, InventoryUpdateRequest
from storefront.api.v1.schemas.squarespace_schemas import CustomerProfile, InventoryItem
from storefront.db.squarespace_client import SquarespaceClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Inventory"])


@router.get(
    "/inventory/{product_id}",
    response_model=APIResponse[InventoryItem],
    response_model_exclude_none=True,
    summary="Get stock of a product",
)
async def get_inventory(
    product_id: str,
    client: SquarespaceClient = Depends(get_squarespace_client),
) -> APIResponse[InventoryItem]:
    item = await client.get_inventory(product_id)
    return APIResponse[InventoryItem](data=item)


@router.patch(
    "/inventory/{product_id}",
    response_model=APIResponse[Optional[InventoryItem]],
    response_model_exclude_none=True,
    summary="Set stock of a product",
)
async def update_inventory(
    product_id: str,
    update: InventoryUpdateRequest,
    client: SquarespaceClient = Depends(get_squarespace_client),
) -> APIResponse[Optional[InventoryItem]]:
    item = await client.update_inventory(product_id, update.quantity)
    logger.info(f"Inventory of {product_id} set to {update.quantity}")
    return APIResponse[Optional[InventoryItem]](data=item)


@router.get(
    "/profiles/{customer_id}",
    response_model=APIResponse[CustomerProfile],
    response_model_exclude_none=True,
    tags=["Profiles"],
    summary="Get a customer profile",
)
async def get_customer_profile(
    customer_id: str,
    client: SquarespaceClient = Depends(get_squarespace_client),
) -> APIResponse[CustomerProfile]:
    profile = await client.get_customer_profile(customer_id)
    return APIResponse[CustomerProfile](data=profile)
