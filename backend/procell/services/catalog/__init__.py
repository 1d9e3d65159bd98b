"""
Catalog Services

Upstream client for the storefront catalog tables.
"""

from .client import CATALOG_RESOURCES, CatalogClient
from .exceptions import CatalogException

__all__ = ["CATALOG_RESOURCES", "CatalogClient", "CatalogException"]
