"""In-memory sliding-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: one lock serializes the read-filter-write sequence of ``admit``
  so parallel requests for the same identifier cannot both take the last slot.
- Expired timestamps are pruned lazily when an identifier is admitted again;
  identifiers whose whole log expired are dropped by ``sweep``.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from salon_api.adapters.rate_limit.base import AbstractRateLimiter

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MS = 60_000
DEFAULT_MAX_REQUESTS = 3


def _epoch_ms() -> int:
    """Current UNIX time in whole milliseconds."""
    return int(time.time() * 1000)


def _require_non_negative(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must be >= 0")
    return value


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter using a sliding window of admitted timestamps per identifier.

    The window is evaluated relative to "now" on every call, never aligned to
    wall-clock boundaries. A timestamp is live while ``now - ts < window_ms``,
    so an entry exactly ``window_ms`` old no longer counts.

    Rejected requests are not recorded, so a caller hammering the endpoint
    does not push its own recovery further into the future.

    Degenerate limits are accepted: ``max_requests=0`` rejects everything and
    ``window_ms=0`` admits everything. Negative values raise ``ValueError``.
    """

    def __init__(
        self,
        *,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_ms: int = DEFAULT_WINDOW_MS,
        sweep_every: int = 0,
        clock: Callable[[], int] = _epoch_ms,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            max_requests: Default number of admitted requests per window.
            window_ms: Default window length in milliseconds.
            sweep_every: Run ``sweep`` after every N ``admit`` calls (0 disables).
            clock: Time source returning UNIX time in milliseconds.

        Raises:
            ValueError: If any argument is negative.
        """
        self._max_requests = _require_non_negative("max_requests", max_requests)
        self._window_ms = _require_non_negative("window_ms", window_ms)
        self._sweep_every = _require_non_negative("sweep_every", sweep_every)
        self._clock = clock
        self._lock = threading.RLock()
        self._logs: dict[str, list[int]] = {}
        self._admit_calls = 0
        self._longest_window_ms = self._window_ms

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_ms(self) -> int:
        return self._window_ms

    @property
    def tracked_identifiers(self) -> int:
        """Number of identifiers currently holding a request log."""
        with self._lock:
            return len(self._logs)

    def _resolve_window(self, window_ms: int | None) -> int:
        if window_ms is None:
            return self._window_ms
        return _require_non_negative("window_ms", window_ms)

    def _resolve_limit(self, max_requests: int | None) -> int:
        if max_requests is None:
            return self._max_requests
        return _require_non_negative("max_requests", max_requests)

    @staticmethod
    def _live(timestamps: list[int], now: int, window_ms: int) -> list[int]:
        return [ts for ts in timestamps if now - ts < window_ms]

    def admit(
        self,
        identifier: str,
        max_requests: int | None = None,
        window_ms: int | None = None,
    ) -> bool:
        """Admit or reject one request for ``identifier``.

        On admission the pruned live window plus the current timestamp becomes
        the identifier's stored log. On rejection nothing is mutated.

        Args:
            identifier: Opaque caller key.
            max_requests: Per-call override of the default limit.
            window_ms: Per-call override of the default window.

        Returns:
            True if admitted, False if the identifier is over its limit.

        Raises:
            ValueError: If an override is negative.
        """
        limit = self._resolve_limit(max_requests)
        window = self._resolve_window(window_ms)

        with self._lock:
            now = self._clock()
            live = self._live(self._logs.get(identifier, []), now, window)

            if len(live) >= limit:
                admitted = False
            else:
                live.append(now)
                self._logs[identifier] = live
                admitted = True

            # Amortized sweeps use the longest window seen so far so that an
            # identifier still live for another call site is never dropped.
            self._longest_window_ms = max(self._longest_window_ms, window)
            self._admit_calls += 1
            if self._sweep_every and self._admit_calls % self._sweep_every == 0:
                self._sweep_locked(now, self._longest_window_ms)

            return admitted

    def count(self, identifier: str, window_ms: int | None = None) -> int:
        """Return the number of live entries without pruning stored state."""
        window = self._resolve_window(window_ms)

        with self._lock:
            now = self._clock()
            return len(self._live(self._logs.get(identifier, []), now, window))

    def retry_after_ms(self, identifier: str, window_ms: int | None = None) -> int:
        """Return milliseconds until the oldest live entry leaves the window.

        Returns 0 when the identifier has no live entries.
        """
        window = self._resolve_window(window_ms)

        with self._lock:
            now = self._clock()
            live = self._live(self._logs.get(identifier, []), now, window)
            if not live:
                return 0
            return max(0, window - (now - min(live)))

    def sweep(self, window_ms: int | None = None) -> int:
        """Remove identifiers whose whole log has expired.

        Args:
            window_ms: Window used to decide liveness. Defaults to the longest
                window any ``admit`` call has used, so identifiers still live
                for a longer-window call site are kept.

        Returns:
            Number of identifiers removed.
        """
        with self._lock:
            if window_ms is None:
                window = self._longest_window_ms
            else:
                window = _require_non_negative("window_ms", window_ms)
            return self._sweep_locked(self._clock(), window)

    def _sweep_locked(self, now: int, window_ms: int) -> int:
        stale = [
            identifier
            for identifier, timestamps in self._logs.items()
            if not any(now - ts < window_ms for ts in timestamps)
        ]
        for identifier in stale:
            del self._logs[identifier]

        if stale:
            logger.debug(
                "rate_limit.swept",
                extra={"removed": len(stale), "tracked": len(self._logs)},
            )
        return len(stale)

    def reset(self) -> None:
        """Clear all tracked identifiers.

        Only tests should call this: it forgives every identifier at once.
        """
        with self._lock:
            self._logs.clear()
            self._admit_calls = 0
            self._longest_window_ms = self._window_ms
