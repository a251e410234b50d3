"""In-memory store for local runs and tests."""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict

from .base import URLShortenerDBBase
from .models import URLMapping
from ..errors import UniqueConstraintViolation


class InMemoryURLStore(URLShortenerDBBase):
    """Dict-backed store with the same uniqueness rules as the SQL table.

    State lives in the process, so it is lost on restart and not shared
    between uvicorn workers.
    """

    name = "memory"

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._by_id: Dict[int, URLMapping] = {}
        self._by_url: Dict[str, URLMapping] = {}

    async def find_by_url(self, original_url: str) -> Optional[URLMapping]:
        return self._by_url.get(original_url)

    async def find_by_id(self, short_url: int) -> Optional[URLMapping]:
        return self._by_id.get(short_url)

    async def find_max_id(self) -> Optional[int]:
        return max(self._by_id) if self._by_id else None

    async def insert(self, original_url: str, short_url: int) -> URLMapping:
        if short_url in self._by_id:
            raise UniqueConstraintViolation(detail=f"short_url {short_url} already exists")
        if original_url in self._by_url:
            raise UniqueConstraintViolation(detail=f"original_url {original_url} already exists")

        mapping = URLMapping(
            original_url=original_url,
            short_url=short_url,
            created_at=datetime.now(timezone.utc),
        )
        self._by_id[short_url] = mapping
        self._by_url[original_url] = mapping
        self.logger.debug(f"Inserted mapping: {short_url} -> {original_url}")
        return mapping

    async def count(self) -> int:
        return len(self._by_id)

    async def list_recent(self, limit: int = 100) -> List[URLMapping]:
        ids = sorted(self._by_id, reverse=True)[:limit]
        return [self._by_id[i] for i in ids]

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass
