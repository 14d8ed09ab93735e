"""Key-value store interface the leaderboard is persisted through."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Whole-value ``get``/``put`` by key.

    Implementations raise ``StorageUnavailable`` when the backend cannot be
    reached; an absent key is ``None``, never an error.
    """

    name = "abstract"

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text for ``key`` or ``None`` when absent."""

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""

    def setup(self) -> None:
        """Prepare the backend (schema, directories). No-op by default."""

    def close(self) -> None:
        """Release clients and connections. No-op by default."""


__all__ = ["KeyValueStore"]
