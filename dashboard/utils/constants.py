"""
Constants and configuration for the storefront pages.
"""

# ==================== CURRENCIES ====================

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}

ZERO_DECIMAL_CURRENCIES = {"JPY", "KRW", "CLP", "CRC"}

# ==================== PRODUCT GRID ====================

PRODUCT_GRID_COLUMNS = 3
PRODUCT_GRID_LIMITS = [6, 12, 24, 48]

GRID_MESSAGES = {
    "loading": "Loading products...",
    "empty": "No products found",
    "api_error": "Failed to load products: {message}",
    "unexpected_error": "An unexpected error occurred while loading products",
    "retry": "Try Again",
    "no_image": "No Image",
    "sale": "Sale",
}

STOCK_LABELS = {
    "unlimited": "In Stock",
    "quantity": "{quantity} in stock",
    "out_of_stock": "Out of Stock",
}

# ==================== DEFAULT CONFIGURATION ====================

DEFAULT_CONFIG = {
    "page_title": "Store.AdrienBird.net",
    "page_icon": "🛍️",
}
