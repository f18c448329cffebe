from datetime import datetime, timedelta

from app.config import settings


def generate_default_time_slots(
    start: str | None = None,
    end: str | None = None,
    interval_minutes: int | None = None,
) -> list[str]:
    """Alle buchbaren Uhrzeiten (HH:MM) von start bis einschließlich end."""
    start = start or settings.slot_start
    end = end or settings.slot_end
    interval = timedelta(minutes=interval_minutes or settings.slot_interval_minutes)

    current = datetime.strptime(start, "%H:%M")
    last = datetime.strptime(end, "%H:%M")
    slots = []
    while current <= last:
        slots.append(current.strftime("%H:%M"))
        current += interval
    return slots


def get_current_time(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime("%H:%M")


def find_next_available_time(current_time: str, slots: list[str]) -> str | None:
    """Erster Slot ab der aktuellen Uhrzeit, None wenn der Tag vorbei ist."""
    for slot in slots:
        if slot >= current_time:
            return slot
    return None
