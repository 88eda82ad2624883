"""Optional background sweep of expired cache entries."""

import threading
from typing import Optional

from kv_cache.base import BaseCache
from kv_cache.logging_config import get_logger

logger = get_logger(__name__)


class ExpiryReaper:
    """
    Daemon thread that periodically calls ``purge_expired`` on a cache.

    Without a reaper, expired keys that are never read again stay in
    memory until the next ``size()`` call. Usage::

        with ExpiryReaper(cache, interval_seconds=30):
            ...
    """

    def __init__(self, cache: BaseCache, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self._cache = cache
        self._interval = interval_seconds
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the sweep thread. Calling it on a running reaper does nothing."""
        with self._lock:
            if self.running:
                return
            # Each thread gets its own event; a thread left over from a
            # timed-out stop() keeps its set event and exits after its sweep
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._loop,
                args=(self._stop_event,),
                name="kv-cache-reaper",
                daemon=True
            )
            self._thread.start()

        logger.info("Started expiry reaper", interval_seconds=self._interval)

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        """
        Signal the sweep thread to exit and wait for it.

        If the wait times out, the thread still exits once its current
        sweep returns.

        Args:
            timeout: Seconds to wait for the thread to finish
        """
        with self._lock:
            thread = self._thread
            self._thread = None
            if self._stop_event is not None:
                self._stop_event.set()
                self._stop_event = None

        if thread is not None:
            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning("Expiry reaper still finishing a sweep", timeout=timeout)
            else:
                logger.info("Stopped expiry reaper")

    def sweep(self) -> int:
        """
        Run one sweep now.

        Returns:
            How many expired entries were removed
        """
        purged = self._cache.purge_expired()
        if purged:
            logger.debug("Reaper purged expired keys", count=purged)
        return purged

    def _loop(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            try:
                self.sweep()
            except Exception:
                # Log and keep sweeping
                logger.exception("Expiry sweep failed")

    def __enter__(self) -> "ExpiryReaper":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
