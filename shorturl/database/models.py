"""Data models for the URL shortener."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class URLMapping:
    """A canonical URL and the numeric id assigned to it.

    ``created_at`` is informational only and is None when the mapping was
    rebuilt from the cache.
    """

    original_url: str
    short_url: int
    created_at: Optional[datetime] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation (the two contract fields only)."""
        return {
            "original_url": self.original_url,
            "short_url": self.short_url,
        }

    def to_record(self) -> Dict[str, Any]:
        """Full representation including the creation timestamp."""
        return {
            **self.to_dict(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "URLMapping":
        """Create from a dictionary or database row."""
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            original_url=data["original_url"],
            short_url=int(data["short_url"]),
            created_at=created_at,
        )
