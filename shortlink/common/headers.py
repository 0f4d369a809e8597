"""Header parsing utilities for shortlink."""

from typing import Dict, Mapping, Optional


def extract_forwarded_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.
    
    Args:
        headers: Request headers mapping
        
    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for
    """
    headers_lower = {k.lower(): v for k, v in headers.items()}
    
    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
    }


def build_base_url(headers: Mapping[str, str], fallback_base_url: str) -> str:
    """Build the public base URL for short links.
    
    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host (set by a reverse proxy)
    2. Configured base URL
    
    Args:
        headers: Request headers
        fallback_base_url: Base URL from configuration
        
    Returns:
        Base URL without trailing slash (e.g., https://sho.rt)
    """
    forwarded = extract_forwarded_headers(headers)
    
    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        proto = forwarded["forwarded_proto"].split(",")[0].strip()
        host = forwarded["forwarded_host"].split(",")[0].strip()
        return f"{proto}://{host}"
    
    return fallback_base_url.rstrip("/")


def client_address(headers: Mapping[str, str], peer: Optional[str]) -> str:
    """Best-effort client address: first X-Forwarded-For hop, else the socket peer."""
    forwarded_for = extract_forwarded_headers(headers)["forwarded_for"]
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return peer or "unknown"
