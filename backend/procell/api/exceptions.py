"""
HTTP exception wrappers for the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException


class CacheHTTPException(HTTPException):
    """HTTP exception carrying a machine-readable error code."""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        super().__init__(
            status_code=status_code,
            detail={
                "error": error_code,
                "message": message,
                "details": details or {},
            },
        )
