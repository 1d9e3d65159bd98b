"""
Cache Service Exceptions
"""

from typing import Any, Dict, Optional


class ImageLoadException(Exception):
    """Raised when an image source cannot be loaded."""

    def __init__(self, src: str, original_error: Optional[Exception] = None):
        self.src = src
        self.error_code = "IMAGE_LOAD_ERROR"
        self.details: Dict[str, Any] = {"src": src}
        if original_error:
            self.details["original_error"] = str(original_error)
            self.details["original_error_type"] = type(original_error).__name__

        self.message = f"Failed to load image: {src}"
        super().__init__(self.message)
        if original_error:
            self.__cause__ = original_error
