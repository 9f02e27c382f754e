"""
Product endpoints.

Read-only proxy over the Squarespace products API.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from storefront.api.v1.dependencies import get_squarespace_client
from storefront.api.v1.schemas.api_schemas import APIResponse
from storefront.api.v1.schemas.squarespace_schemas import Product, ProductVariant
from storefront.db.squarespace_client import SquarespaceClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=APIResponse[List[Product]],
    response_model_exclude_none=True,
    summary="List products",
)
async def list_products(
    limit: int = Query(20, ge=0, description="Maximum number of products"),
    offset: int = Query(0, ge=0, description="Number of products to skip"),
    category: Optional[str] = Query(None, description="Category filter"),
    tag: Optional[str] = Query(None, description="Tag filter"),
    client: SquarespaceClient = Depends(get_squarespace_client),
) -> APIResponse[List[Product]]:
    """
    List products from Squarespace.

    Args:
        limit: Page size
        offset: Products to skip
        category: Optional category
        tag: Optional tag

    Returns:
        Products and the vendor pagination cursors
    """
    response = await client.get_products(limit=limit, offset=offset, category=category, tag=tag)
    logger.debug(f"Fetched {len(response.result)} products (category={category}, tag={tag})")
    return APIResponse[List[Product]](data=response.result, pagination=response.pagination)


@router.get(
    "/{product_id}",
    response_model=APIResponse[Product],
    response_model_exclude_none=True,
    summary="Get a product",
)
async def get_product(
    product_id: str,
    client: SquarespaceClient = Depends(get_squarespace_client),
) -> APIResponse[Product]:
    product = await client.get_product(product_id)
    return APIResponse[Product](data=product)


@router.get(
    "/{product_id}/variants",
    response_model=APIResponse[List[ProductVariant]],
    response_model_exclude_none=True,
    summary="Get the variants of a product",
)
async def get_product_variants(
    product_id: str,
    client: SquarespaceClient = Depends(get_squarespace_client),
) -> APIResponse[List[ProductVariant]]:
    variants = await client.get_product_variants(product_id)
    return APIResponse[List[ProductVariant]](data=variants)
