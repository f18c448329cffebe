import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Text, DateTime, Enum, ForeignKey

from app.database import Base


class BookingStatus(enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class BookingMode(enum.Enum):
    INSTANT = "instant"         # sofort bestätigt
    SCHEDULED = "scheduled"     # wartet auf Bestätigung durch den Betreiber


class Booking(Base):
    """
    Eine Tischreservierung. Datum und Uhrzeit werden als Strings
    gespeichert (YYYY-MM-DD bzw. HH:MM), damit der Zeitvergleich
    per Stringvergleich funktioniert.
    """
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    guest_name = Column(String(100), nullable=False)
    guest_phone = Column(String(30), nullable=False)
    date = Column(String(10), nullable=False, index=True)
    time = Column(String(5), nullable=False)
    party_size = Column(Integer, nullable=False)
    status = Column(Enum(BookingStatus, values_callable=lambda e: [m.value for m in e]), nullable=False, default=BookingStatus.PENDING)
    special_requests = Column(Text, nullable=True)
    confirmation_number = Column(String(12), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
