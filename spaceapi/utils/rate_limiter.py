"""Failed-authentication tracking with escalation to a temporary block.

A client identifier that fails authentication five times within fifteen
minutes of its *first* failure is blocked for one hour. The window origin is
fixed: later failures never move ``first_attempt_at`` forward, so a slow
attacker keeps accumulating ``count`` without ever re-arming the window.
Records live until the eviction sweep drops them two hours after the first
failure, whatever their block state.
"""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional

from ..logging_config import logger, security_logger
from .locks import ReadWriteLock

MAX_ATTEMPTS = 5
ATTEMPT_WINDOW_SECONDS = 15 * 60
BLOCK_SECONDS = 60 * 60
RETENTION_SECONDS = 2 * 60 * 60
CLEANUP_INTERVAL_SECONDS = 30 * 60


@dataclass
class AttemptTracker:
    count: int
    first_attempt_at: float
    blocked_until: Optional[float] = None


class RateLimiter:
    def __init__(
        self,
        max_attempts: int = MAX_ATTEMPTS,
        window_seconds: float = ATTEMPT_WINDOW_SECONDS,
        block_seconds: float = BLOCK_SECONDS,
        retention_seconds: float = RETENTION_SECONDS,
        cleanup_interval: float = CLEANUP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.block_seconds = block_seconds
        self.retention_seconds = retention_seconds
        self.cleanup_interval = cleanup_interval
        self._clock = clock
        self._attempts: Dict[str, AttemptTracker] = {}
        self._lock = ReadWriteLock()
        self._stop = threading.Event()
        self._worker: Optional[threading.Thread] = None
        self._lifecycle = threading.Lock()

    def is_blocked(self, client_id: str) -> bool:
        now = self._clock()
        with self._lock.read():
            attempt = self._attempts.get(client_id)
            if attempt is None or attempt.blocked_until is None:
                return False
            return now < attempt.blocked_until

    def record_failed_attempt(self, client_id: str) -> None:
        now = self._clock()
        with self._lock.write():
            attempt = self._attempts.get(client_id)
            if attempt is None:
                attempt = AttemptTracker(count=1, first_attempt_at=now)
                self._attempts[client_id] = attempt
            else:
                attempt.count += 1
            blocked = attempt.count >= self.max_attempts and now - attempt.first_attempt_at <= self.window_seconds
            if blocked:
                attempt.blocked_until = now + self.block_seconds
            count = attempt.count

        if blocked:
            security_logger.warning(
                "auth.client_blocked",
                client_id=client_id,
                attempts=count,
                block_seconds=int(self.block_seconds),
            )

    def get_retry_after_seconds(self, client_id: str) -> int:
        now = self._clock()
        with self._lock.read():
            attempt = self._attempts.get(client_id)
            if attempt is None or attempt.blocked_until is None:
                return 0
            remaining = int(attempt.blocked_until - now)
        return max(0, remaining)

    def attempts(self, client_id: str) -> Optional[AttemptTracker]:
        with self._lock.read():
            attempt = self._attempts.get(client_id)
            return replace(attempt) if attempt is not None else None

    def evict_stale(self) -> int:
        cutoff = self._clock() - self.retention_seconds
        with self._lock.write():
            stale = [key for key, attempt in self._attempts.items() if attempt.first_attempt_at < cutoff]
            for key in stale:
                del self._attempts[key]
        if stale:
            logger.debug("rate_limiter.evicted", count=len(stale))
        return len(stale)

    # ------------------------------------------------------------------
    # Background sweep lifecycle
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def start(self) -> None:
        with self._lifecycle:
            if self._worker is not None or self._stop.is_set():
                return
            self._worker = threading.Thread(target=self._run, name="rate-limiter-cleanup", daemon=True)
            self._worker.start()
        logger.info("rate_limiter.cleanup_started", interval_seconds=self.cleanup_interval)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop.set()
        with self._lifecycle:
            worker = self._worker
        if worker is not None and worker is not threading.current_thread():
            worker.join(timeout)

    def _run(self) -> None:
        while not self._stop.wait(self.cleanup_interval):
            self.evict_stale()
