"""
Store.AdrienBird.net storefront integration with the Squarespace Commerce API.
"""
