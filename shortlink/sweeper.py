"""Background expiry sweeper for the link registry."""

import logging
import threading
from typing import Optional

from .registry import LinkRegistry


class ExpirySweeper:
    """Periodically evicts expired links from a registry on a daemon thread."""

    def __init__(
        self,
        registry: LinkRegistry,
        interval_seconds: float = 60.0,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.registry = registry
        self.interval_seconds = interval_seconds
        self.logger = logger or logging.getLogger("shortlink.sweeper")
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the sweep loop. Calling start on a running sweeper is a no-op."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="shortlink-expiry-sweeper",
            daemon=True,
        )
        self._thread.start()
        self.logger.info(f"Expiry sweeper started (interval={self.interval_seconds}s)")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Signal the loop to exit and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
            self.logger.info("Expiry sweeper stopped")

    def run_once(self) -> int:
        """Run a single sweep and return the number of links removed."""
        removed = self.registry.sweep_expired()
        if removed:
            self.logger.debug(f"Sweep removed {removed} expired link(s)")
        return removed

    def _run(self) -> None:
        # Event.wait returns True only when stop() was called
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.run_once()
            except Exception:
                self.logger.exception("Expiry sweep failed")
