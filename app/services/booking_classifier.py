import logging
from dataclasses import dataclass, field
from datetime import datetime, date

from app.models.booking import BookingStatus
from app.schemas.booking import BookingRead

logger = logging.getLogger("app.services.booking_classifier")


@dataclass
class BookingPartition:
    upcoming: list[BookingRead] = field(default_factory=list)
    past: list[BookingRead] = field(default_factory=list)


def is_upcoming(booking: BookingRead, now: datetime) -> bool:
    """
    Ordnet eine Buchung relativ zu `now` ein:
    - storniert -> immer vergangen (abgelehnte werden normal nach Datum sortiert)
    - Datum in der Zukunft -> kommend
    - heute -> kommend solange Uhrzeit >= aktuelle Uhrzeit (HH:MM Stringvergleich)
    - Datum in der Vergangenheit -> vergangen
    """
    if booking.status == BookingStatus.CANCELLED:
        return False

    booking_date = date.fromisoformat(booking.date)
    today = now.date()

    if booking_date == today:
        return booking.time >= now.strftime("%H:%M")

    return booking_date > today


def classify(bookings: list[BookingRead], now: datetime | None = None) -> BookingPartition:
    """Teilt Buchungen in kommend/vergangen. Reihenfolge bleibt erhalten."""
    now = now or datetime.now()
    partition = BookingPartition()

    for booking in bookings:
        if is_upcoming(booking, now):
            partition.upcoming.append(booking)
        else:
            partition.past.append(booking)

    logger.debug(
        f"Buchungen klassifiziert ({now:%Y-%m-%d %H:%M}): "
        f"{len(partition.upcoming)} kommend, {len(partition.past)} vergangen"
    )
    return partition
