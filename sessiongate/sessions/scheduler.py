"""
GC Scheduler

Recurring background task that asks a provider to sweep expired sessions.

States:
- IDLE: no sweep is scheduled
- ARMED: a sweep is pending; after it fires the scheduler re-arms with the
  same delay

Sweep failures are logged and counted; the next period runs regardless.
Once stop() returns no further sweep fires.
"""

import asyncio
import contextlib
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sessiongate.observability.logging import get_logger
from sessiongate.sessions.base import SessionProvider

logger = get_logger(__name__)


class SchedulerState(str, Enum):
    """GC scheduler states."""

    IDLE = "idle"
    ARMED = "armed"


class GCScheduler:
    """
    Cancellable periodic sweep loop.

    Args:
        provider: Provider whose sweep() is invoked.
        max_lifetime: Threshold passed to sweep(), in seconds.
        interval: Delay between sweeps in seconds. Defaults to max_lifetime.

    Example:
        >>> scheduler = GCScheduler(provider, max_lifetime=3600)
        >>> scheduler.start()
        >>> ...
        >>> await scheduler.stop()
    """

    def __init__(
        self,
        provider: SessionProvider,
        max_lifetime: int,
        interval: Optional[float] = None,
    ) -> None:
        if max_lifetime <= 0:
            raise ValueError("max_lifetime must be positive")
        if interval is not None and interval <= 0:
            raise ValueError("interval must be positive")

        self._provider = provider
        self._max_lifetime = max_lifetime
        self._interval = float(interval if interval is not None else max_lifetime)
        self._task: Optional[asyncio.Task[None]] = None
        self._stop_event: Optional[asyncio.Event] = None

        self.sweep_count: int = 0
        self.failure_count: int = 0
        self.last_sweep_at: Optional[datetime] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def state(self) -> SchedulerState:
        if self._task is not None and not self._task.done():
            return SchedulerState.ARMED
        return SchedulerState.IDLE

    def start(self) -> None:
        """
        Arm the scheduler. No-op if already armed.

        Must be called from within a running event loop.
        """
        if self.state is SchedulerState.ARMED:
            return

        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(self._stop_event))
        logger.info(
            "gc_scheduler_armed",
            interval_seconds=self._interval,
            max_lifetime=self._max_lifetime,
            provider=self._provider.name,
        )

    async def stop(self) -> None:
        """Cancel the scheduler and wait for the loop to exit. Idempotent."""
        task, self._task = self._task, None
        if task is None:
            return

        if self._stop_event is not None:
            self._stop_event.set()

        if not task.done():
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

        logger.info("gc_scheduler_stopped", sweeps=self.sweep_count)

    async def run_once(self) -> int:
        """
        Run a single sweep now, absorbing failures.

        Returns:
            Number of sessions evicted, or 0 if the sweep failed.
        """
        try:
            evicted = await self._provider.sweep(self._max_lifetime)
        except Exception:
            self.failure_count += 1
            logger.exception(
                "gc_sweep_failed",
                provider=self._provider.name,
                failures=self.failure_count,
            )
            return 0
        finally:
            self.sweep_count += 1
            self.last_sweep_at = datetime.now(timezone.utc)

        logger.info(
            "gc_sweep_completed",
            provider=self._provider.name,
            evicted=evicted,
        )
        return evicted

    async def _run(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                await self.run_once()
