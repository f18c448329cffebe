from pydantic import BaseModel
from typing import Optional

from app.schemas.booking import BookingRead
from app.schemas.restaurant import RestaurantRead


class DashboardResponse(BaseModel):
    """Betreiber-Ansicht: eigene Buchungen + Auslastung für ein Datum"""
    restaurant: Optional[RestaurantRead] = None
    selected_date: str
    upcoming: list[BookingRead]
    past: list[BookingRead]
    max_capacity: int
    booked_capacity: int
    available_capacity: int
    capacity_options: list[int]


class RestaurantAvailability(BaseModel):
    restaurant: RestaurantRead
    available_capacity: int
    next_slot: Optional[str] = None
    slots: list[str] = []


class DiscoveryResponse(BaseModel):
    """Gast-Ansicht: Sofort-Buchung (heute) und Buchung nach Datum"""
    today: str
    selected_date: Optional[str] = None
    instant: list[RestaurantAvailability]
    scheduled: list[RestaurantAvailability]
