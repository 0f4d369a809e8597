"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

# Ten years; keeps created_at + validity well inside datetime's range
MAX_VALIDITY_MINUTES = 10 * 365 * 24 * 60


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""
    
    url: Optional[str] = Field(None, description="The URL to shorten")
    custom_code: Optional[str] = Field(None, description="Optional custom short code")
    validity_minutes: Optional[int] = Field(
        None,
        le=MAX_VALIDITY_MINUTES,
        description="Minutes until the link expires; absent or non-positive uses the default",
    )
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                },
                {
                    "url": "https://github.com/user/repo",
                    "custom_code": "myrepo",
                    "validity_minutes": 120,
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""
    
    short_url: str = Field(..., description="The complete short URL")
    short_code: str = Field(..., description="The short code")
    expires_at: datetime = Field(..., description="Expiry timestamp (UTC)")
    long_url: str = Field(..., description="The original long URL")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_url": "http://localhost:8080/aZ3k9Q",
                    "short_code": "aZ3k9Q",
                    "expires_at": "2024-01-01T12:30:00Z",
                    "long_url": "https://example.com/very/long/path",
                }
            ]
        }
    }


class LinkResponse(BaseModel):
    """Full link record."""
    
    long_url: str
    short_code: str
    created_at: datetime
    expires_at: datetime
    clicks: int


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Always 'ok' while the process serves requests")


class ErrorResponse(BaseModel):
    """Error response."""
    
    error: str = Field(..., description="Error message")
