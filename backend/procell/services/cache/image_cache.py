"""
Image Preload Cache

Presence cache from image source to loaded image. Entries never expire;
they live until ``clear()`` or the owning process ends.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from .exceptions import ImageLoadException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedImage:
    """Image fully loaded into memory."""

    src: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)


ImageLoader = Callable[[str], Awaitable[LoadedImage]]


class HttpImageLoader:
    """Loads images over HTTP(S) with a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 10.0,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout_seconds, follow_redirects=True
        )

    async def __call__(self, src: str) -> LoadedImage:
        try:
            response = await self._client.get(src)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ImageLoadException(src, original_error=e)

        content_type = response.headers.get("content-type")
        if content_type and not content_type.startswith("image/"):
            raise ImageLoadException(
                src, original_error=ValueError(f"Unexpected content type {content_type}")
            )

        return LoadedImage(src=src, content=response.content, content_type=content_type)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class ImageCache:
    """Preloads images once and serves them from memory afterwards."""

    def __init__(self, loader: ImageLoader):
        self._loader = loader
        self._images: Dict[str, LoadedImage] = {}

    async def preload(self, src: str) -> None:
        """
        Load ``src`` into the cache.

        Returns immediately when already cached.

        Raises:
            ImageLoadException: If the image cannot be loaded
        """
        if src in self._images:
            return

        try:
            image = await self._loader(src)
        except ImageLoadException:
            raise
        except Exception as e:
            raise ImageLoadException(src, original_error=e)

        self._images[src] = image
        logger.debug(f"Preloaded image {src}", extra={"bytes": image.size_bytes})

    async def preload_multiple(self, sources: List[str]) -> List[None]:
        """Preload all sources concurrently; fails as a whole if any load fails."""
        return await asyncio.gather(*(self.preload(src) for src in sources))

    def has(self, src: str) -> bool:
        return src in self._images

    def get(self, src: str) -> Optional[LoadedImage]:
        return self._images.get(src)

    def clear(self) -> None:
        self._images.clear()

    def __len__(self) -> int:
        return len(self._images)


def optimized_image_url(original_url: str, width: int = 400, height: int = 400) -> str:
    """Add sizing and quality parameters to Unsplash URLs; others pass through."""
    if not original_url:
        return ""

    if "unsplash.com" not in original_url:
        return original_url

    parts = urlsplit(original_url)
    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    params.update(
        {
            "w": str(width),
            "h": str(height),
            "fit": "crop",
            "crop": "center",
            "auto": "format",
            "q": "80",
        }
    )
    return urlunsplit(parts._replace(query=urlencode(params)))
