"""
Product grid component.

Loads one page of products from Squarespace and renders it as a grid of
cards. Loading is kept apart from rendering so the states can be exercised
without a Streamlit runtime.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import streamlit as st

from dashboard.utils.constants import GRID_MESSAGES, PRODUCT_GRID_COLUMNS, STOCK_LABELS
from dashboard.utils.formatters import format_price, truncate_text
from storefront.api.v1.schemas.squarespace_schemas import Product, ProductStock
from storefront.core.config import SquarespaceConfig
from storefront.db.squarespace_client import SquarespaceClient
from storefront.utils.error_handler import SquarespaceAPIException

logger = logging.getLogger(__name__)

STATE_ERROR = "error"
STATE_EMPTY = "empty"
STATE_POPULATED = "populated"


@dataclass(frozen=True)
class ProductGridState:
    """Outcome of one product load."""

    status: str
    products: List[Product] = field(default_factory=list)
    error: Optional[str] = None


@dataclass(frozen=True)
class ProductCardView:
    """Display values of a single product card."""

    product_id: str
    name: str
    description: str
    image_url: Optional[str]
    image_alt: str
    price: str
    original_price: Optional[str]
    on_sale: bool
    stock_label: str
    in_stock: bool

    @property
    def button_label(self) -> str:
        return "Add to Cart" if self.in_stock else STOCK_LABELS["out_of_stock"]


async def load_products(
    client: SquarespaceClient,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    limit: Optional[int] = None,
) -> ProductGridState:
    """
    Fetch one page of products and classify the result.

    Args:
        client: Squarespace client
        category: Category filter
        tag: Tag filter
        limit: Page size

    Returns:
        ProductGridState: error, empty or populated
    """
    try:
        response = await client.get_products(limit=limit, category=category, tag=tag)
    except SquarespaceAPIException as e:
        logger.warning(f"Product grid load failed: {e.message}")
        return ProductGridState(status=STATE_ERROR, error=GRID_MESSAGES["api_error"].format(message=e.message))
    except Exception as e:
        logger.error(f"Unexpected error loading product grid: {e}", exc_info=True)
        return ProductGridState(status=STATE_ERROR, error=GRID_MESSAGES["unexpected_error"])

    if not response.result:
        return ProductGridState(status=STATE_EMPTY)

    return ProductGridState(status=STATE_POPULATED, products=list(response.result))


def stock_label(stock: ProductStock) -> Tuple[str, bool]:
    """
    Stock label of a variant and whether it can be added to the cart.

    Args:
        stock: Variant stock

    Returns:
        (label, in_stock)
    """
    if stock.unlimited:
        return STOCK_LABELS["unlimited"], True
    if stock.quantity and stock.quantity > 0:
        return STOCK_LABELS["quantity"].format(quantity=stock.quantity), True
    return STOCK_LABELS["out_of_stock"], False


def build_product_card(product: Product) -> Optional[ProductCardView]:
    """
    Build the card of a product from its first variant.

    Products without variants have nothing to show and yield None.
    """
    if not product.products:
        return None

    variant = product.products[0]
    pricing = variant.pricing
    image = variant.images[0] if variant.images else None

    on_sale = bool(pricing.onSale and pricing.salePrice)
    current = pricing.salePrice if on_sale else pricing.basePrice

    price = format_price(current.value, current.currency) if current else "N/A"
    original_price = None
    if on_sale and pricing.basePrice:
        original_price = format_price(pricing.basePrice.value, pricing.basePrice.currency)

    label, in_stock = stock_label(variant.stock)

    return ProductCardView(
        product_id=product.id,
        name=variant.name,
        description=truncate_text(variant.description),
        image_url=image.url if image else None,
        image_alt=(image.description or variant.name) if image else variant.name,
        price=price,
        original_price=original_price,
        on_sale=on_sale,
        stock_label=label,
        in_stock=in_stock,
    )


def grid_state_key(category: Optional[str], tag: Optional[str], limit: Optional[int]) -> Tuple:
    """Key identifying one set of grid inputs."""
    return (category or None, tag or None, limit)


async def _fetch(config: SquarespaceConfig, category, tag, limit) -> ProductGridState:
    async with SquarespaceClient(config) as client:
        return await load_products(client, category=category, tag=tag, limit=limit)


def fetch_product_grid(
    config: SquarespaceConfig,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    limit: Optional[int] = None,
) -> ProductGridState:
    """
    Synchronous wrapper for Streamlit.

    Each call owns its client so the HTTP session never outlives its event loop.
    """
    return asyncio.run(_fetch(config, category, tag, limit))


def render_product_card(card: ProductCardView) -> None:
    """Render a single product card."""
    with st.container(border=True):
        if card.image_url:
            st.image(card.image_url, caption=card.image_alt, use_container_width=True)
        else:
            st.markdown(f"*{GRID_MESSAGES['no_image']}*")

        if card.on_sale:
            st.markdown(f":red-background[{GRID_MESSAGES['sale']}]")

        st.markdown(f"#### {card.name}")
        if card.description:
            st.caption(card.description)

        if card.original_price:
            st.markdown(f"**{card.price}** ~~{card.original_price}~~")
        else:
            st.markdown(f"**{card.price}**")

        st.markdown(card.stock_label if card.in_stock else f":red[{card.stock_label}]")

        st.button(
            card.button_label,
            key=f"add_to_cart_{card.product_id}",
            disabled=not card.in_stock,
            use_container_width=True,
        )


def render_product_grid(
    config: SquarespaceConfig,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    limit: Optional[int] = None,
    columns: int = PRODUCT_GRID_COLUMNS,
) -> ProductGridState:
    """
    Render the product grid for the given filters.

    Products are fetched once per change of inputs; reruns with the same
    inputs reuse the last state. "Try Again" forces a new fetch.

    Args:
        config: Squarespace configuration
        category: Category filter
        tag: Tag filter
        limit: Page size
        columns: Cards per row

    Returns:
        ProductGridState: The state that was rendered
    """
    key = grid_state_key(category, tag, limit)
    state = st.session_state.get("product_grid_state")

    if state is None or st.session_state.get("product_grid_key") != key:
        with st.spinner(GRID_MESSAGES["loading"]):
            state = fetch_product_grid(config, category=category, tag=tag, limit=limit)
        st.session_state["product_grid_state"] = state
        st.session_state["product_grid_key"] = key

    if state.status == STATE_ERROR:
        st.error(state.error)
        if st.button(GRID_MESSAGES["retry"], key="product_grid_retry"):
            st.session_state.pop("product_grid_state", None)
            st.session_state.pop("product_grid_key", None)
            st.rerun()
        return state

    if state.status == STATE_EMPTY:
        st.info(GRID_MESSAGES["empty"])
        return state

    cards = [card for card in (build_product_card(p) for p in state.products) if card is not None]
    for start in range(0, len(cards), columns):
        row = st.columns(columns)
        for column, card in zip(row, cards[start : start + columns]):
            with column:
                render_product_card(card)

    return state
