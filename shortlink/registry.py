"""In-memory link registry for shortlink."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from .shortcode import ShortCodeGenerator
from .models import Link
from .errors import (
    InvalidURLError,
    InvalidShortCodeError,
    CodeConflictError,
    ExhaustedKeyspaceError,
)
from .common.rwlock import ReadWriteLock
from .common.validators import is_valid_url, is_valid_short_code

DEFAULT_VALIDITY = timedelta(minutes=30)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class LinkRegistry:
    """Owns every link record and all mutation and expiry logic.

    All access goes through one reader/writer lock: lookups share it, while
    create, increment and sweep hold it exclusively. Records never leave the
    registry; callers get copies.
    """

    def __init__(
        self,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        enable_custom_codes: bool = True,
        max_collision_retries: Optional[int] = None,
        max_url_length: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the registry.

        Args:
            short_code_generator: Generator for random codes
            logger: Optional logger
            enable_custom_codes: Whether to accept caller-supplied codes
            max_collision_retries: Cap on random draws per create; None loops
                until an unused code is found
            max_url_length: Optional cap on long URL length; None is unlimited
            clock: Returns the current UTC time
        """
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger("shortlink.registry")
        self.enable_custom_codes = enable_custom_codes
        self.max_collision_retries = max_collision_retries
        self.max_url_length = max_url_length
        self._clock = clock
        self._links: Dict[str, Link] = {}
        self._lock = ReadWriteLock()

    def now(self) -> datetime:
        """Current time according to the registry clock."""
        return self._clock()

    def create(
        self,
        long_url: str,
        custom_code: Optional[str] = None,
        validity: timedelta = DEFAULT_VALIDITY,
    ) -> Link:
        """Create a new link.

        Args:
            long_url: Destination URL
            custom_code: Optional caller-chosen short code
            validity: Time from creation until the link expires

        Returns:
            Copy of the stored link

        Raises:
            InvalidURLError: If long_url is not a valid absolute URI
            InvalidShortCodeError: If custom_code is malformed or not allowed
            CodeConflictError: If custom_code is already taken
            ExhaustedKeyspaceError: If no free code was found within the retry cap
            ValueError: If validity is not positive
        """
        is_valid, error = is_valid_url(long_url, max_length=self.max_url_length)
        if not is_valid:
            raise InvalidURLError(f"invalid url: {error}")

        if validity <= timedelta(0):
            raise ValueError("validity must be positive")

        if custom_code:
            if not self.enable_custom_codes:
                raise InvalidShortCodeError("custom short codes are not enabled")
            is_valid, error = is_valid_short_code(custom_code)
            if not is_valid:
                raise InvalidShortCodeError(f"invalid short code: {error}")

        with self._lock.write_locked():
            if custom_code:
                if custom_code in self._links:
                    raise CodeConflictError("custom code already exists")
                code = custom_code
            else:
                code = self._generate_unique_code()

            created_at = self.now()
            link = Link(
                long_url=long_url,
                short_code=code,
                created_at=created_at,
                expires_at=created_at + validity,
            )
            self._links[code] = link
            result = link.copy()

        self.logger.info(
            f"link created: {code} -> {long_url} (expires_at={result.expires_at.isoformat()})"
        )
        return result

    def get(self, code: str) -> Optional[Link]:
        """Look up a link by code.

        Returns:
            Copy of the link, or None if the code is unknown
        """
        with self._lock.read_locked():
            link = self._links.get(code)
            return link.copy() if link else None

    def increment(self, code: str) -> None:
        """Add one click to the link; unknown codes are ignored."""
        with self._lock.write_locked():
            link = self._links.get(code)
            if link is not None:
                link.clicks += 1

    def sweep_expired(self) -> int:
        """Remove every link whose expiry time is at or before now.

        Returns:
            Number of links removed
        """
        with self._lock.write_locked():
            now = self.now()
            expired = [code for code, link in self._links.items() if link.is_expired(now)]
            for code in expired:
                del self._links[code]

        for code in expired:
            self.logger.info(f"expired and removed: {code}")
        return len(expired)

    def total_clicks(self) -> int:
        with self._lock.read_locked():
            return sum(link.clicks for link in self._links.values())

    def clear(self) -> None:
        """Drop every link."""
        with self._lock.write_locked():
            self._links.clear()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._links)

    def __contains__(self, code: str) -> bool:
        with self._lock.read_locked():
            return code in self._links

    def _generate_unique_code(self) -> str:
        """Draw random codes until an unused one turns up.

        Must be called with the write lock held.
        """
        attempts = 0
        while True:
            code = self.generator.generate_random()
            attempts += 1
            if code not in self._links:
                if attempts > 1:
                    self.logger.debug(f"Generated code after {attempts} attempts: {code}")
                return code
            if self.max_collision_retries is not None and attempts >= self.max_collision_retries:
                raise ExhaustedKeyspaceError(
                    f"unable to generate a unique short code after {attempts} attempts"
                )
