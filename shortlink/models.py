"""Data models for shortlink."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone


def format_timestamp(value: datetime) -> str:
    """Render a datetime as an RFC3339 UTC string ending in 'Z'."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class Link:
    """Represents one shortened link held by the registry."""
    
    long_url: str
    short_code: str
    created_at: datetime
    expires_at: datetime
    clicks: int = 0
    
    def is_expired(self, now: datetime) -> bool:
        """Return True once ``now`` has reached the expiry time."""
        return now >= self.expires_at
    
    def copy(self) -> "Link":
        """Return a detached copy safe to hand out of the registry."""
        return replace(self)
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "long_url": self.long_url,
            "short_code": self.short_code,
            "created_at": format_timestamp(self.created_at),
            "expires_at": format_timestamp(self.expires_at),
            "clicks": self.clicks,
        }
