"""Validation utilities for shortlink."""

from urllib.parse import urlparse
from typing import Optional, Tuple

# Single-segment routes that a custom code would shadow
RESERVED_CODES = {"health"}

# Characters that end or escape a path segment
_PATH_BREAKING_CHARS = set("/?#%\\")


def is_valid_url(url: str, max_length: Optional[int] = None) -> Tuple[bool, str]:
    """Validate a long URL as an absolute URI.
    
    Any scheme is accepted. URIs with an authority part (``scheme://...``)
    must name a host and, if given, a numeric port in range; opaque URIs
    such as ``mailto:user@example.com`` need a non-empty body.
    
    Args:
        url: The URL to validate
        max_length: Optional length cap; None means unlimited
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"
    
    if max_length is not None and len(url) > max_length:
        return False, f"URL is too long (max {max_length} characters)"
    
    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"
    
    try:
        result = urlparse(url)
        
        if not result.scheme:
            return False, "URL must be absolute (missing scheme)"
        
        rest = url[len(result.scheme) + 1:]
        if rest.startswith("//"):
            if not result.hostname:
                return False, "URL must have a valid host"
            # Accessing the port raises for out-of-range or non-numeric values
            result.port
        elif not rest:
            return False, "URL has nothing after the scheme"
        
        return True, ""
        
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a caller-supplied short code.
    
    A code must fit in one path segment of the short URL and must not
    shadow one of the service's own top-level routes.
    
    Args:
        short_code: The short code to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"
    
    if short_code in (".", ".."):
        return False, "Short code cannot be a relative path segment"
    
    if any(c.isspace() or not c.isprintable() for c in short_code):
        return False, "Short code must not contain whitespace or control characters"
    
    bad = sorted(_PATH_BREAKING_CHARS.intersection(short_code))
    if bad:
        return False, f"Short code must not contain {' '.join(bad)}"
    
    if short_code.lower() in RESERVED_CODES:
        return False, f"'{short_code}' is a reserved word and cannot be used"
    
    return True, ""
