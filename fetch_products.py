#!/usr/bin/env python3
"""
Squarespace Products Fetcher Script

Fetches products from the Squarespace Commerce API with the storefront
client and prints them.

Usage:
    python fetch_products.py [options]

Options:
    --format {table,json}    Output format (default: table)
    --limit N                Number of products to fetch
    --offset N               Number of products to skip
    --category CATEGORY      Filter by category
    --tag TAG                Filter by tag
    --id ID                  Fetch a single product by ID
    --health                 Only check that the API is reachable
    --verbose                Enable verbose logging

Examples:
    python fetch_products.py --limit 10
    python fetch_products.py --category shirts --format json
    python fetch_products.py --health
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List

# Add the project root to Python path
sys.path.append(str(Path(__file__).parent))

from storefront.api.v1.schemas.squarespace_schemas import Product
from storefront.core.config import resolve_squarespace_config
from storefront.db.squarespace_client import SquarespaceClient
from storefront.utils.error_handler import AppException, SquarespaceAPIException


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    return logging.getLogger(__name__)


def format_product_table(products: List[Product]) -> str:
    """Format products as a simple table."""
    if not products:
        return "No products found."

    rows = []
    for product in products:
        variant = product.products[0] if product.products else None
        name = variant.name if variant else "-"
        price = "-"
        if variant and variant.pricing.basePrice:
            price = f"{variant.pricing.basePrice.value} {variant.pricing.basePrice.currency}"
        stock = "-"
        if variant:
            stock = "unlimited" if variant.stock.unlimited else str(variant.stock.quantity or 0)
        rows.append((product.id, name[:40], price, stock))

    id_width = max(len("ID"), *(len(r[0]) for r in rows))
    name_width = max(len("Name"), *(len(r[1]) for r in rows))

    lines = [f"{'ID':<{id_width}}  {'Name':<{name_width}}  {'Price':<14}  Stock"]
    lines.append("-" * len(lines[0]))
    for product_id, name, price, stock in rows:
        lines.append(f"{product_id:<{id_width}}  {name:<{name_width}}  {price:<14}  {stock}")
    return "\n".join(lines)


def format_product_json(products: List[Product]) -> str:
    """Format products as JSON."""
    return json.dumps([p.model_dump(mode="json", exclude_none=True) for p in products], indent=2, ensure_ascii=False)


async def main():
    """Main function to handle CLI arguments and execute the script."""
    parser = argparse.ArgumentParser(
        description="Fetch and display Squarespace products",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format (default: table)")
    parser.add_argument("--limit", type=int, help="Number of products to fetch")
    parser.add_argument("--offset", type=int, help="Number of products to skip")
    parser.add_argument("--category", help="Filter by category")
    parser.add_argument("--tag", help="Filter by tag")
    parser.add_argument("--id", help="Fetch a single product by ID")
    parser.add_argument("--health", action="store_true", help="Only check that the API is reachable")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()
    logger = setup_logging(args.verbose)

    try:
        async with SquarespaceClient(resolve_squarespace_config()) as client:
            if args.health:
                healthy = await client.health_check()
                print("Squarespace API reachable" if healthy else "Squarespace API unreachable")
                return 0 if healthy else 1

            if args.id:
                products = [await client.get_product(args.id)]
            else:
                response = await client.get_products(
                    limit=args.limit, offset=args.offset, category=args.category, tag=args.tag
                )
                products = response.result

        if args.format == "json":
            print(format_product_json(products))
        else:
            print(format_product_table(products))
            print(f"\nSummary: {len(products)} product(s)")

        return 0

    except SquarespaceAPIException as e:
        logger.error(f"Squarespace request failed ({e.status_code}): {e.message}")
        return 1
    except AppException as e:
        logger.error(e.message)
        return 1
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
