"""Core business logic for the shortlink service."""

from .shortcode import ShortCodeGenerator
from .models import Link
from .registry import LinkRegistry
from .sweeper import ExpirySweeper

__all__ = ["ShortCodeGenerator", "Link", "LinkRegistry", "ExpirySweeper"]
