"""
Stock Panel - Token Expiry Sweeper

Runs a single interval job that purges expired bearer and reset tokens.
Owned by the application lifespan: started once at startup and shut down
on exit.
"""
from typing import Iterable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.executors.asyncio import AsyncIOExecutor
from loguru import logger

from stock_panel.core.sessions import TokenStore


SWEEP_JOB_ID = "token_expiry_sweep"


class TokenSweepScheduler:
    """Periodic purge of expired tokens from one or more stores."""

    def __init__(self, stores: Iterable[TokenStore], interval_minutes: int = 60):
        self.stores = list(stores)
        self.interval_minutes = interval_minutes
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._is_running = False

    def initialize(self) -> None:
        """Initialize the scheduler with job stores and executors."""
        self.scheduler = AsyncIOScheduler(
            jobstores={'default': MemoryJobStore()},
            executors={'default': AsyncIOExecutor()},
            job_defaults={
                'coalesce': True,  # Combine multiple missed runs into one
                'max_instances': 1,
            },
        )
        self.scheduler.add_job(
            self.run_sweep,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id=SWEEP_JOB_ID,
            name=f"Interval: {SWEEP_JOB_ID}",
            replace_existing=True,
        )
        logger.info(f"Registered interval job: {SWEEP_JOB_ID} every {self.interval_minutes}m")

    def start(self) -> None:
        """Start the scheduler. Must be called from a running event loop."""
        if not self.scheduler:
            self.initialize()

        if not self._is_running:
            self.scheduler.start()
            self._is_running = True
            logger.info("Token sweeper started")

    def stop(self) -> None:
        """Stop the scheduler."""
        if self.scheduler and self._is_running:
            self.scheduler.shutdown(wait=False)
            self._is_running = False
            logger.info("Token sweeper stopped")

    @property
    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self._is_running

    async def run_sweep(self) -> int:
        """Purge every store once and return the total removed."""
        removed = sum(store.sweep() for store in self.stores)
        if removed:
            logger.info(f"Token sweep removed {removed} expired token(s)")
        return removed
