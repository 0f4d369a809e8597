"""Redirect and health routes."""

import logging

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from ..api.schemas import HealthResponse, ErrorResponse

router = APIRouter()

logger = logging.getLogger("shortlink.web")


@router.get("/health", response_model=HealthResponse, summary="Health check")
def health_check():
    """Liveness check for load balancers."""
    return HealthResponse(status="ok")


@router.get(
    "/{code}",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        410: {"model": ErrorResponse, "description": "Short link expired"},
    },
    summary="Follow a short link",
)
def redirect_to_url(request: Request, code: str):
    """Redirect to the long URL and count the click."""
    registry = request.app.state.registry
    
    link = registry.get(code)
    
    if link is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="short link not found",
        )
    
    if link.is_expired(registry.now()):
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="short link expired",
        )
    
    registry.increment(code)
    logger.info(f"redirecting: {code} -> {link.long_url}")
    
    # Temporary redirect for tracking
    return RedirectResponse(url=link.long_url, status_code=status.HTTP_302_FOUND)
