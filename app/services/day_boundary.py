"""
Mitternachts-Timer: feuert einmalig zur nächsten lokalen Mitternacht,
ruft den Callback auf (AppState.on_day_rollover) und plant sich neu ein.
Läuft auf dem Event-Loop der App, beendet wird er nur über shutdown().
"""
import logging
from datetime import datetime, time, timedelta
from typing import Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = logging.getLogger("app.services.day_boundary")

DAY_ROLLOVER_JOB_ID = "day_rollover"


def next_midnight(now: datetime) -> datetime:
    return datetime.combine(now.date() + timedelta(days=1), time.min)


def seconds_until_midnight(now: datetime) -> float:
    return (next_midnight(now) - now).total_seconds()


class DayBoundaryScheduler:

    def __init__(self, callback: Callable[[], None], scheduler: AsyncIOScheduler | None = None):
        self._callback = callback
        self._scheduler = scheduler or AsyncIOScheduler()
        self.next_run: datetime | None = None

    def start(self) -> None:
        self._scheduler.start()
        self._arm()

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Mitternachts-Timer beendet")

    def _arm(self, run_date: datetime | None = None) -> datetime:
        now = datetime.now()
        self.next_run = run_date or next_midnight(now)
        # ohne Kulanzzeit würde ein verspäteter Lauf verworfen und nie neu eingeplant
        self._scheduler.add_job(
            self._fire,
            "date",
            run_date=self.next_run,
            id=DAY_ROLLOVER_JOB_ID,
            replace_existing=True,
            misfire_grace_time=None,
            coalesce=True,
        )
        logger.info(f"Nächster Lauf {self.next_run:%Y-%m-%d %H:%M}, Mitternacht in {int(seconds_until_midnight(now) // 60)} Minuten")
        return self.next_run

    async def _fire(self) -> None:
        logger.info("Mitternacht erreicht, Buchungen werden neu eingeteilt")
        try:
            self._callback()
        finally:
            # auch nach Fehler im Callback neu einplanen
            self._arm()
