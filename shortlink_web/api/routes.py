"""API routes implementation."""

from datetime import timedelta

from fastapi import APIRouter, Request, HTTPException, status

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    LinkResponse,
    ErrorResponse,
)
from shortlink.errors import InvalidURLError, InvalidShortCodeError, CodeConflictError
from shortlink.common.headers import build_base_url

router = APIRouter()


def _short_url_for(request: Request, config, short_code: str) -> str:
    """Public URL for a code: proxy-facing or configured base, then the optional path prefix."""
    segments = [build_base_url(request.headers, fallback_base_url=config.base_url)]
    prefix = config.path_prefix.strip("/")
    if prefix:
        segments.append(prefix)
    segments.append(short_code)
    return "/".join(segments)


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or code already taken"},
        503: {"model": ErrorResponse, "description": "No free short code available"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a custom short code and validity.",
)
def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    registry = request.app.state.registry
    config = request.app.state.config
    
    if not body.url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="url is required",
        )
    
    validity = config.default_validity
    if body.validity_minutes is not None and body.validity_minutes > 0:
        validity = timedelta(minutes=body.validity_minutes)
    
    try:
        link = registry.create(
            body.url,
            custom_code=body.custom_code or None,
            validity=validity,
        )
    except (InvalidURLError, InvalidShortCodeError, CodeConflictError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    
    return ShortenResponse(
        short_url=_short_url_for(request, config, link.short_code),
        short_code=link.short_code,
        expires_at=link.expires_at,
        long_url=link.long_url,
    )


@router.get(
    "/stats/{code}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get link statistics",
    description="Get the full link record including its click count.",
)
def get_link_stats(request: Request, code: str):
    """Get the record for a short code."""
    registry = request.app.state.registry
    
    link = registry.get(code)
    
    if link is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="short link not found",
        )
    
    return LinkResponse(**link.to_dict())
