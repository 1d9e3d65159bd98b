"""
Cache Repository Interfaces

Abstract storage interfaces following the Repository pattern.
Defines the contract durable cache backends must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class DurableStore(ABC):
    """
    Abstract synchronous string-keyed store that outlives the process.

    Implementations may be shared with unrelated data: callers own only
    the keys they write and must never assume exclusive ownership.
    Failures are reported as ``StorageException`` subclasses.
    """

    # True when operations wait on network or disk I/O; async callers
    # then run them in a worker thread instead of on the event loop.
    blocking: bool = False

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for ``key`` or None."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> bool:
        """Remove ``key``; True if it was present."""
        pass

    @abstractmethod
    def keys(self, prefix: str = "") -> List[str]:
        """Enumerate keys currently in the store that start with ``prefix``."""
        pass

    def close(self) -> None:
        """Release underlying resources."""
        return None
