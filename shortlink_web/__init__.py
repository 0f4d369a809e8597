"""HTTP surface for shortlink."""

from .app_factory import create_app, build_registry

__all__ = ["create_app", "build_registry"]
