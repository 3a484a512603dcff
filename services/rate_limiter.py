import logging
import threading
import time

logger = logging.getLogger(__name__)


class TokenBucket:
    """
    Token-bucket limiter for outbound calls.

    ``rate_per_second`` tokens are added continuously up to ``capacity``.
    The bucket starts full, so the first ``capacity`` calls go through at
    once and later ones are spaced ``1 / rate_per_second`` seconds apart.
    ``clock`` and ``sleep`` are injectable so pacing can be tested without
    waiting.
    """

    def __init__(self, rate_per_second: float, capacity: int = 1, clock=time.monotonic, sleep=time.sleep):
        if rate_per_second <= 0:
            raise ValueError("rate_per_second must be positive")
        if capacity < 1:
            raise ValueError("capacity must be at least 1")

        self.rate = float(rate_per_second)
        self.capacity = float(capacity)
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity)
        self._updated_at = clock()
        self._lock = threading.Lock()

    def _refill(self):
        now = self._clock()
        elapsed = max(0.0, now - self._updated_at)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._updated_at = now

    def try_acquire(self, tokens: int = 1) -> bool:
        self._check(tokens)
        with self._lock:
            self._refill()
            if self._tokens >= tokens:
                self._tokens -= tokens
                return True
            return False

    def acquire(self, tokens: int = 1) -> float:
        """Block until ``tokens`` are available. Returns the seconds waited."""
        self._check(tokens)
        waited = 0.0
        # Holding the lock while sleeping keeps waiters in arrival order
        with self._lock:
            while True:
                self._refill()
                if self._tokens >= tokens:
                    self._tokens -= tokens
                    if waited:
                        logger.debug(f"Rate limiter waited {waited:.2f}s")
                    return waited
                delay = (tokens - self._tokens) / self.rate
                self._sleep(delay)
                waited += delay

    def _check(self, tokens):
        if tokens < 1 or tokens > self.capacity:
            raise ValueError(f"tokens must be between 1 and {int(self.capacity)}")
