"""
In-Memory Durable Store

Dict-backed implementation of the durable store interface with an
optional byte quota, mirroring browser storage limits. Contents are lost
with the process, so it serves as the test double and single-process
fallback rather than the production durable tier.
"""

import logging
from typing import Dict, List, Optional

from ...domain.cache.repository_interfaces import DurableStore
from .exceptions import StorageQuotaExceededException

logger = logging.getLogger(__name__)


def _item_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class InMemoryStore(DurableStore):
    """Process-local store; contents live as long as the instance."""

    def __init__(self, max_bytes: Optional[int] = None):
        if max_bytes is not None and max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        self.max_bytes = max_bytes
        self._items: Dict[str, str] = {}
        self._used_bytes = 0

    @property
    def used_bytes(self) -> int:
        return self._used_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        previous = self._items.get(key)
        previous_size = _item_size(key, previous) if previous is not None else 0
        new_size = _item_size(key, value)
        required = self._used_bytes - previous_size + new_size

        if self.max_bytes is not None and required > self.max_bytes:
            raise StorageQuotaExceededException(
                key=key, required_bytes=required, quota_bytes=self.max_bytes
            )

        self._items[key] = value
        self._used_bytes = required

    def remove_item(self, key: str) -> bool:
        previous = self._items.pop(key, None)
        if previous is None:
            return False
        self._used_bytes -= _item_size(key, previous)
        return True

    def keys(self, prefix: str = "") -> List[str]:
        return [key for key in self._items if key.startswith(prefix)]

    def close(self) -> None:
        logger.debug("In-memory store closed", extra={"items": len(self._items)})
