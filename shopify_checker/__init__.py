"""
Storefront availability checker package.

This package contains modules for fetching the public products JSON of
Shopify-style storefronts, extracting product/variant availability,
persisting the tracked sites and coordinating the monitoring loop.
See README.md for details.
"""

__all__ = [
    "config",
    "db",
    "store",
    "scraper",
    "monitor",
    "cli",
    "main",
    "utils",
]
