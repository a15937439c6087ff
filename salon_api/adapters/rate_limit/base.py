"""Rate limiter interfaces.

The HTTP layer depends on this abstraction (not the concrete implementation)
so the storage backend can be swapped with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractRateLimiter(ABC):
    """Interface for sliding-window rate limiters keyed by an opaque identifier."""

    @property
    @abstractmethod
    def max_requests(self) -> int:
        """Default number of admitted requests per window."""
        raise NotImplementedError

    @property
    @abstractmethod
    def window_ms(self) -> int:
        """Default window length in milliseconds."""
        raise NotImplementedError

    @abstractmethod
    def admit(
        self,
        identifier: str,
        max_requests: int | None = None,
        window_ms: int | None = None,
    ) -> bool:
        """Decide whether a single request from ``identifier`` may proceed.

        Args:
            identifier: Opaque caller key (e.g., client address).
            max_requests: Per-call override of the requests allowed per window.
            window_ms: Per-call override of the window length in milliseconds.

        Returns:
            True when the request is admitted and recorded, False otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    def count(self, identifier: str, window_ms: int | None = None) -> int:
        """Return the number of live admitted requests for ``identifier``."""
        raise NotImplementedError

    @abstractmethod
    def retry_after_ms(self, identifier: str, window_ms: int | None = None) -> int:
        """Return milliseconds until the oldest live request expires."""
        raise NotImplementedError

    @abstractmethod
    def sweep(self, window_ms: int | None = None) -> int:
        """Drop identifiers without live requests and return how many were removed."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Forget every tracked identifier. Intended for tests only."""
        raise NotImplementedError
