"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List

from .models import URLMapping


class URLShortenerDBBase(ABC):
    """Abstract base class for URL mapping storage.

    Implementations must reject an insert whose ``short_url`` or
    ``original_url`` already exists by raising ``UniqueConstraintViolation``,
    and report any other failure as ``StoreUnavailableError``.
    """

    name = "base"

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def find_by_url(self, original_url: str) -> Optional[URLMapping]:
        """Find the mapping for an exact original URL.

        Args:
            original_url: Canonical URL to look up

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id(self, short_url: int) -> Optional[URLMapping]:
        """Find the mapping for a short id.

        Args:
            short_url: Numeric id to look up

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_max_id(self) -> Optional[int]:
        """Return the largest assigned short id, or None when empty."""
        pass

    @abstractmethod
    async def insert(self, original_url: str, short_url: int) -> URLMapping:
        """Persist a new mapping.

        Args:
            original_url: Canonical URL
            short_url: Id to assign

        Returns:
            The stored mapping

        Raises:
            UniqueConstraintViolation: If the id or URL is already stored
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored mappings."""
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 100) -> List[URLMapping]:
        """List mappings, newest (highest id) first.

        Args:
            limit: Maximum number of mappings to return
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store connections."""
        pass
