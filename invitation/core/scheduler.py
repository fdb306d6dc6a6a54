"""Background reconnect supervisor for the Google Sheets store."""
import logging
from datetime import UTC, datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from invitation.sheets.persistence import RSVPPersistence

logger = logging.getLogger(__name__)

RECONNECT_JOB_ID = "sheets_reconnect"


class ReconnectSupervisor:
    """Keep trying to reach Google Sheets while it is unreachable.

    The job runs once immediately on start, which doubles as the startup
    handshake. After that it fires every ``interval`` seconds. Each failed
    attempt doubles the interval up to ``max_interval``; a success resets
    it. While the sheet is reachable the job does nothing.
    """

    def __init__(
        self,
        persistence: RSVPPersistence,
        base_interval: int,
        max_interval: int,
        scheduler: BaseScheduler | None = None,
    ) -> None:
        self.persistence = persistence
        self.base_interval = base_interval
        self.max_interval = max(base_interval, max_interval)
        self.scheduler = scheduler or AsyncIOScheduler()
        self.interval = base_interval
        self.failures = 0

    def reconnect_job(self) -> None:
        """Single reconnect attempt, skipped while the sheet is reachable."""
        if self.persistence.state.reachable:
            return

        logger.info("Attempting to connect to Google Sheets")
        if self.persistence.connect():
            self.failures = 0
        else:
            self.failures += 1

        self._set_interval(self._next_interval())

    def _next_interval(self) -> int:
        if self.failures == 0:
            return self.base_interval
        return min(self.base_interval * 2 ** (self.failures - 1), self.max_interval)

    def _set_interval(self, interval: int) -> None:
        if interval == self.interval:
            return
        self.interval = interval
        self.scheduler.reschedule_job(
            RECONNECT_JOB_ID, trigger=IntervalTrigger(seconds=interval)
        )
        logger.info(f"Next Google Sheets reconnect check in {interval} seconds")

    def start(self) -> None:
        """Start the background scheduler."""
        self.scheduler.add_job(
            self.reconnect_job,
            trigger=IntervalTrigger(seconds=self.interval),
            id=RECONNECT_JOB_ID,
            replace_existing=True,
            next_run_time=datetime.now(UTC),
        )
        self.scheduler.start()
        logger.info(
            f"Reconnect supervisor started, checking every {self.interval} seconds"
        )

    def shutdown(self) -> None:
        """Graceful shutdown."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logger.info("Reconnect supervisor shut down")
