"""
Injectable clock.

Metrics and report submissions never call ``date.today()`` directly; they ask
a clock, so "today" follows one configured farm timezone and tests can pin it.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


class Clock(ABC):
    """Abstract clock interface."""

    @property
    @abstractmethod
    def tz(self) -> tzinfo:
        ...

    @abstractmethod
    def now(self) -> datetime:
        """Current timezone-aware time in the farm timezone."""
        ...

    def today(self) -> date:
        """Current calendar date in the farm timezone."""
        return self.now().date()

    def local_date(self, moment: datetime) -> date:
        """
        Calendar date of a timestamp in the farm timezone.

        Naive timestamps are taken as already being farm-local.
        """
        if moment.tzinfo is None:
            return moment.date()
        return moment.astimezone(self.tz).date()


class SystemClock(Clock):
    """Wall clock pinned to a named timezone."""

    def __init__(self, timezone_name: str = "UTC"):
        self._tz = ZoneInfo(timezone_name)

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


class FixedClock(Clock):
    """Clock frozen at a given moment. Used by tests and replays."""

    def __init__(self, moment: datetime, tz: Optional[tzinfo] = None):
        self._tz = tz or moment.tzinfo or timezone.utc
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=self._tz)
        self._moment = moment

    @classmethod
    def on(cls, day: date, tz: Optional[tzinfo] = None) -> "FixedClock":
        """Clock frozen at noon of ``day``."""
        return cls(datetime(day.year, day.month, day.day, 12, 0), tz=tz)

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return self._moment.astimezone(self._tz)

    def advance_to(self, moment: datetime) -> None:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=self._tz)
        self._moment = moment
