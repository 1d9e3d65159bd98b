"""
Image preload endpoints.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...services.cache import ImageCache, ImageLoadException, optimized_image_url
from ..dependencies import get_image_cache
from ..exceptions import CacheHTTPException

router = APIRouter(prefix="/api/v1/images", tags=["images"])


class PreloadRequest(BaseModel):
    sources: List[str] = Field(..., min_length=1)
    width: int = Field(400, ge=1, le=4000)
    height: int = Field(400, ge=1, le=4000)


@router.post("/preload")
async def preload_images(
    payload: PreloadRequest,
    image_cache: ImageCache = Depends(get_image_cache),
) -> Dict[str, Any]:
    """Preload all sources; any failure fails the whole request."""
    sources = [
        optimized_image_url(src, payload.width, payload.height)
        for src in payload.sources
    ]
    try:
        await image_cache.preload_multiple(sources)
    except ImageLoadException as e:
        raise CacheHTTPException(
            status_code=502,
            error_code=e.error_code,
            message=e.message,
            details=e.details,
        )

    return {"preloaded": sources, "cached": len(image_cache)}
