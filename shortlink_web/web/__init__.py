"""Top-level routes: redirects and health."""

from .routes import router as web_router

__all__ = ["web_router"]
