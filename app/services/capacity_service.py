"""
Kapazitätsberechnung pro Restaurant und Datum.

Dashboard (Betreiber) zählt pending + confirmed, Discovery (Gast) nur
confirmed. Die Werte werden bei jeder Anfrage neu berechnet.
"""
import math
from typing import Iterable

from app.config import settings
from app.models.booking import BookingStatus
from app.schemas.booking import BookingRead

# alles was nicht storniert/abgelehnt ist
ACTIVE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})
# nur fest zugesagte Plätze
FIRM_STATUSES = frozenset({BookingStatus.CONFIRMED})


def booked_capacity(
    bookings: Iterable[BookingRead],
    restaurant_id: int,
    date: str,
    statuses: frozenset = ACTIVE_STATUSES,
) -> int:
    return sum(
        b.party_size
        for b in bookings
        if b.restaurant_id == restaurant_id and b.date == date and b.status in statuses
    )


def available_capacity(
    bookings: Iterable[BookingRead],
    restaurant_id: int,
    date: str,
    max_capacity: int | None,
    statuses: frozenset = ACTIVE_STATUSES,
) -> int:
    """max(0, Kapazität - Summe der Personen). Ohne Kapazität gilt der Standardwert."""
    if not max_capacity:
        max_capacity = settings.default_capacity
    booked = booked_capacity(bookings, restaurant_id, date, statuses)
    return max(0, max_capacity - booked)


def has_availability(
    bookings: Iterable[BookingRead],
    restaurant_id: int,
    date: str,
    max_capacity: int | None,
    statuses: frozenset = FIRM_STATUSES,
) -> bool:
    return available_capacity(bookings, restaurant_id, date, max_capacity, statuses) > 0


def capacity_options(max_capacity: int, step: int | None = None) -> list[int]:
    # 5er-Schritte bis zur Kapazität (aufgerundet)
    step = step or settings.capacity_step
    return [(i + 1) * step for i in range(math.ceil(max_capacity / step))]
