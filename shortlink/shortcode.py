"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random short codes for links.

    Codes are drawn uniformly from a 62-symbol alphabet. This is not a
    cryptographically secure source; uniqueness is enforced by the registry.
    """
    
    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9
    
    def __init__(self, default_length: int = 6):
        """Initialize short code generator.
        
        Args:
            default_length: Default length for generated codes
        """
        if default_length < 1:
            raise ValueError("default_length must be at least 1")
        self.default_length = default_length
    
    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.
        
        Args:
            length: Length of the code (uses default if not specified)
            
        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(random.choices(self.BASE62_CHARS, k=length))
    
    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code consists only of base62 characters.
        
        Args:
            code: Code to validate
            
        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
