"""
Store-hours gate.

Times are "HH:MM" strings compared lexically. A closing time earlier than the
opening time means the store runs past midnight (e.g. 18:00-02:00). Without
settings the store is treated as open.
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo
import enum

DEFAULT_OPENING_TIME = "00:00"
DEFAULT_CLOSING_TIME = "23:59"


class StoreState(str, enum.Enum):
    """Why ordering is (not) allowed"""
    OPEN = "open"
    CLOSED = "closed"
    MAINTENANCE = "maintenance"
    OUTSIDE_HOURS = "outside_hours"


def local_now(timezone: str) -> datetime:
    return datetime.now(ZoneInfo(timezone))


def time_of_day(now: datetime) -> str:
    return f"{now.hour:02d}:{now.minute:02d}"


def _normalize(value: Optional[str], default: str) -> str:
    if not value:
        return default
    hours, minutes = value.split(":")[:2]
    return f"{int(hours):02d}:{int(minutes):02d}"


def within_hours(current: str, opening_time: str, closing_time: str) -> bool:
    if closing_time < opening_time:
        return current >= opening_time or current < closing_time
    return opening_time <= current < closing_time


def store_state(settings, now: datetime) -> StoreState:
    if settings is None:
        return StoreState.OPEN
    if settings.maintenance_mode:
        return StoreState.MAINTENANCE
    if not settings.is_open:
        return StoreState.CLOSED
    
    opening_time = _normalize(settings.opening_time, DEFAULT_OPENING_TIME)
    closing_time = _normalize(settings.closing_time, DEFAULT_CLOSING_TIME)
    
    if within_hours(time_of_day(now), opening_time, closing_time):
        return StoreState.OPEN
    return StoreState.OUTSIDE_HOURS


def is_open(settings, now: datetime) -> bool:
    """Whether ordering is allowed at `now` (store-local time)"""
    return store_state(settings, now) == StoreState.OPEN
