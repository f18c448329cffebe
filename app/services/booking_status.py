import logging

from app.models.booking import BookingStatus, BookingMode
from app.utils.errors import InvalidStatusTransition

logger = logging.getLogger("app.services.booking_status")

TERMINAL_STATUSES = {BookingStatus.REJECTED, BookingStatus.CANCELLED}

CONFIRM = "confirm"
REJECT = "reject"
CANCEL = "cancel"

# Aktion -> Zielstatus, erlaubt nur aus nicht-terminalen Status
TRANSITIONS = {
    REJECT: BookingStatus.REJECTED,
    CANCEL: BookingStatus.CANCELLED,
}


def initial_status(mode: BookingMode) -> BookingStatus:
    """Sofort-Buchungen sind direkt bestätigt, Buchungen nach Datum warten auf den Betreiber."""
    if mode == BookingMode.INSTANT:
        return BookingStatus.CONFIRMED
    return BookingStatus.PENDING


def is_terminal(status: BookingStatus) -> bool:
    return status in TERMINAL_STATUSES


def next_status(booking_id: str, current: BookingStatus, action: str) -> BookingStatus:
    """
    Gibt den Zielstatus für eine Aktion zurück.

    - confirm: wird immer ausgeführt, auch aus rejected/cancelled heraus
      (bekannte Lücke, nur Warnung im Log)
    - reject / cancel: nur aus pending oder confirmed; Wiederholung im
      Zielstatus ist ein No-Op, sonst InvalidStatusTransition
    """
    if action == CONFIRM:
        if current != BookingStatus.PENDING:
            logger.warning(f"Buchung {booking_id} wird aus Status '{current.value}' bestätigt")
        return BookingStatus.CONFIRMED

    if action not in TRANSITIONS:
        raise ValueError(f"Unbekannte Aktion: {action}")

    target = TRANSITIONS[action]
    if current == target:
        return target
    if is_terminal(current):
        raise InvalidStatusTransition(booking_id, current.value, action)
    return target
