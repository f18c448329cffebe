import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.booking import BookingStatus, BookingMode

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _validate_date(value: str) -> str:
    # nur YYYY-MM-DD, sonst klappt der Stringvergleich nicht
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValueError("Datum muss im Format YYYY-MM-DD sein")
    if parsed.strftime("%Y-%m-%d") != value:
        raise ValueError("Datum muss im Format YYYY-MM-DD sein")
    return value


class BookingCreate(BaseModel):
    """Neue Buchung ohne id, created_at und confirmation_number."""
    restaurant_id: int
    user_id: Optional[str] = None
    guest_name: str = Field(min_length=1, max_length=100)
    guest_phone: str = Field(min_length=1, max_length=30)
    date: str
    time: str
    party_size: int = Field(ge=1)
    status: BookingStatus = BookingStatus.PENDING
    special_requests: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v: str) -> str:
        return _validate_date(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v: str) -> str:
        if not TIME_PATTERN.match(v):
            raise ValueError("Uhrzeit muss im Format HH:MM sein")
        return v


class BookingRequest(BaseModel):
    """Buchungsanfrage vom Gast. Der Modus bestimmt den Startstatus."""
    restaurant_id: int
    mode: BookingMode = BookingMode.SCHEDULED
    guest_name: str = Field(min_length=1, max_length=100)
    guest_phone: str = Field(min_length=1, max_length=30)
    user_id: Optional[str] = None
    date: Optional[str] = None      # bei INSTANT: heute
    time: Optional[str] = None      # bei INSTANT: nächster freier Slot
    party_size: int = Field(ge=1)
    special_requests: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v: Optional[str]) -> Optional[str]:
        return _validate_date(v) if v is not None else v

    @field_validator("time")
    @classmethod
    def check_time(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not TIME_PATTERN.match(v):
            raise ValueError("Uhrzeit muss im Format HH:MM sein")
        return v


class BookingRead(BaseModel):
    id: str
    restaurant_id: int
    user_id: Optional[str] = None
    guest_name: str
    guest_phone: str
    date: str
    time: str
    party_size: int
    status: BookingStatus
    special_requests: Optional[str] = None
    confirmation_number: str
    created_at: datetime

    model_config = {"from_attributes": True}


class BookingPartitionResponse(BaseModel):
    upcoming: list[BookingRead]
    past: list[BookingRead]
