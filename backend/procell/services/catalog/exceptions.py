"""
Catalog Service Exceptions
"""

from typing import Any, Dict, Optional


class CatalogException(Exception):
    """Raised when the catalog upstream cannot serve a resource."""

    def __init__(self, resource: str, original_error: Optional[Exception] = None):
        self.resource = resource
        self.error_code = "CATALOG_UPSTREAM_ERROR"
        self.details: Dict[str, Any] = {"resource": resource}
        if original_error:
            self.details["original_error"] = str(original_error)
            self.details["original_error_type"] = type(original_error).__name__

        self.message = f"Failed to fetch catalog resource: {resource}"
        super().__init__(self.message)
        if original_error:
            self.__cause__ = original_error
