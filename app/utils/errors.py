"""
Fehlertypen der Buchungsdatenhaltung und Mapping auf HTTP-Fehler.
Routen bleiben schlank: sie rufen nur store_error_to_http auf.
"""
from fastapi import HTTPException


class StoreError(Exception):
    """Schreib-/Lesefehler der Datenhaltung (DB, Netzwerk)."""


class RecordNotFound(StoreError):
    def __init__(self, entity: str, record_id):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} nicht gefunden")


class InvalidStatusTransition(StoreError):
    def __init__(self, booking_id: str, current: str, action: str):
        self.booking_id = booking_id
        self.current = current
        self.action = action
        super().__init__(f"Buchung {booking_id}: '{action}' nicht erlaubt im Status '{current}'")


class AuthenticationFailed(StoreError):
    pass


# (Fehlertyp, Statuscode). Erster Treffer gewinnt, daher spezielle Typen zuerst.
STORE_ERROR_RULES: list[tuple[type[StoreError], int]] = [
    (RecordNotFound, 404),
    (InvalidStatusTransition, 409),
    (AuthenticationFailed, 401),
]

STATUS_SERVICE_UNAVAILABLE = 503


def store_error_to_http(exc: StoreError) -> HTTPException:
    for error_type, status_code in STORE_ERROR_RULES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=STATUS_SERVICE_UNAVAILABLE, detail=f"Datenhaltung nicht erreichbar: {exc}")
