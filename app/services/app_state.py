"""
Zentraler Zustand der Anwendung: Restaurants, alle Buchungen, angemeldeter User.

Wird einmal beim Start gebaut (siehe main.lifespan) und per Dependency an die
Router gereicht. Schreibende Operationen rufen zuerst die Datenhaltung auf und
übernehmen das Ergebnis erst danach in den lokalen Zustand. Schlägt der
Aufruf fehl, bleibt der Zustand unverändert und der Fehler geht an den Aufrufer.
"""
import asyncio
import logging
from datetime import datetime
from typing import Callable

from fastapi import Request

from app.config import settings
from app.models.booking import BookingMode
from app.schemas.booking import BookingCreate, BookingRead, BookingRequest
from app.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate
from app.schemas.user import UserRead
from app.schemas.views import DashboardResponse, DiscoveryResponse, RestaurantAvailability
from app.services import capacity_service, time_slots
from app.services.booking_classifier import BookingPartition, classify
from app.services.booking_status import initial_status
from app.services.store import RestaurantService, BookingService, AuthService
from app.utils.errors import StoreError

logger = logging.getLogger("app.services.app_state")


class NoSlotAvailable(Exception):
    pass


class AppState:

    def __init__(
        self,
        restaurant_service: RestaurantService,
        booking_service: BookingService,
        auth_service: AuthService,
    ):
        self._restaurant_service = restaurant_service
        self._booking_service = booking_service
        self._auth_service = auth_service

        self.restaurants: list[RestaurantRead] = []
        self._all_bookings: list[BookingRead] = []
        self.current_user: UserRead | None = None
        self.is_loading = True
        self.last_rollover: datetime | None = None
        self._rollover_listeners: list[Callable[[BookingPartition], None]] = []

    @property
    def all_bookings(self) -> list[BookingRead]:
        return list(self._all_bookings)

    # ============ LADEN ============

    async def load(self) -> None:
        """
        Lädt Restaurants, Buchungen und User parallel.
        Fehler werden nur geloggt, der Zustand bleibt dann leer.
        """
        self.is_loading = True
        logger.info("Initiale Daten werden geladen...")
        try:
            restaurants, bookings, user = await asyncio.gather(
                self._restaurant_service.get_all(),
                self._booking_service.get_all(),
                self._auth_service.get_current_user(),
            )
            self.restaurants = restaurants
            self._all_bookings = bookings
            self.current_user = user
            logger.info(
                f"Daten geladen: {len(restaurants)} Restaurants, {len(bookings)} Buchungen, "
                f"User: {user.email if user else '-'}"
            )
        except Exception as e:
            logger.error(f"Fehler beim Laden der Daten: {e}", exc_info=True)
        finally:
            self.is_loading = False

    # ============ RESTAURANTS ============

    async def add_restaurant(self, data: RestaurantCreate) -> RestaurantRead:
        try:
            restaurant = await self._restaurant_service.create(data)
        except StoreError as e:
            logger.error(f"Restaurant anlegen fehlgeschlagen: {e}")
            raise
        self.restaurants = [*self.restaurants, restaurant]
        return restaurant

    async def update_restaurant(self, restaurant_id: int, changes: RestaurantUpdate) -> RestaurantRead:
        try:
            updated = await self._restaurant_service.update(restaurant_id, changes)
        except StoreError as e:
            logger.error(f"Restaurant {restaurant_id} ändern fehlgeschlagen: {e}")
            raise
        self.restaurants = [updated if r.id == restaurant_id else r for r in self.restaurants]
        return updated

    async def refresh_restaurants(self) -> list[RestaurantRead]:
        try:
            restaurants = await self._restaurant_service.get_all()
        except StoreError as e:
            logger.error(f"Restaurants neu laden fehlgeschlagen: {e}")
            raise
        self.restaurants = restaurants
        logger.info(f"Restaurantliste neu geladen: {len(restaurants)} Restaurants")
        return restaurants

    def get_restaurant(self, restaurant_id: int) -> RestaurantRead | None:
        return next((r for r in self.restaurants if r.id == restaurant_id), None)

    # ============ BUCHUNGEN ============

    def bookings(self, now: datetime | None = None) -> BookingPartition:
        # bei jedem Aufruf neu berechnen, nie über Mitternacht cachen
        return classify(self._all_bookings, now)

    async def add_booking(self, data: BookingCreate) -> BookingRead:
        logger.debug(f"Neue Buchung: {data.model_dump()}")
        try:
            booking = await self._booking_service.create(data)
        except StoreError as e:
            logger.error(f"Buchung anlegen fehlgeschlagen: {e}")
            raise
        self._all_bookings = [*self._all_bookings, booking]
        logger.debug(f"Buchungen gesamt: {len(self._all_bookings)}")
        return booking

    async def book(self, request: BookingRequest, now: datetime | None = None) -> BookingRead:
        """
        Buchung aus einer Gast-Anfrage. INSTANT bucht für heute (ohne Uhrzeit
        den nächsten freien Slot) und ist sofort bestätigt, SCHEDULED braucht
        ein Datum und wartet auf den Betreiber.
        """
        now = now or datetime.now()
        booking_date = request.date
        booking_time = request.time

        if request.mode == BookingMode.INSTANT:
            # Sofort-Buchung gilt nur für heute, sonst bräuchte sie die Freigabe des Betreibers
            today = now.strftime("%Y-%m-%d")
            if booking_date and booking_date != today:
                raise ValueError("Sofort-Buchungen sind nur für heute möglich")
            booking_date = today
            current_time = time_slots.get_current_time(now)
            if not booking_time:
                booking_time = time_slots.find_next_available_time(
                    current_time,
                    time_slots.generate_default_time_slots(),
                )
                if not booking_time:
                    raise NoSlotAvailable("Heute ist kein Zeitslot mehr frei")
            elif booking_time < current_time:
                raise ValueError(f"Uhrzeit {booking_time} liegt bereits in der Vergangenheit")
        elif not booking_date or not booking_time:
            raise ValueError("Datum und Uhrzeit sind für Buchungen nach Datum Pflicht")

        data = BookingCreate(
            restaurant_id=request.restaurant_id,
            user_id=request.user_id or (self.current_user.id if self.current_user else None),
            guest_name=request.guest_name,
            guest_phone=request.guest_phone,
            date=booking_date,
            time=booking_time,
            party_size=request.party_size,
            status=initial_status(request.mode),
            special_requests=request.special_requests,
        )
        return await self.add_booking(data)

    async def delete_booking(self, booking_id: str) -> None:
        try:
            await self._booking_service.delete(booking_id)
        except StoreError as e:
            logger.error(f"Buchung {booking_id} löschen fehlgeschlagen: {e}")
            raise
        self._all_bookings = [b for b in self._all_bookings if b.id != booking_id]

    async def reject_booking(self, booking_id: str) -> BookingRead:
        try:
            updated = await self._booking_service.reject(booking_id)
        except StoreError as e:
            logger.error(f"Buchung {booking_id} ablehnen fehlgeschlagen: {e}")
            raise
        self._replace_booking(updated)
        return updated

    async def confirm_booking(self, booking_id: str) -> BookingRead:
        try:
            updated = await self._booking_service.confirm(booking_id)
        except StoreError as e:
            logger.error(f"Buchung {booking_id} bestätigen fehlgeschlagen: {e}")
            raise
        self._replace_booking(updated)
        return updated

    async def cancel_booking(self, booking_id: str) -> BookingRead:
        try:
            updated = await self._booking_service.cancel(booking_id)
        except StoreError as e:
            logger.error(f"Buchung {booking_id} stornieren fehlgeschlagen: {e}")
            raise
        self._replace_booking(updated)
        return updated

    def _replace_booking(self, updated: BookingRead) -> None:
        self._all_bookings = [updated if b.id == updated.id else b for b in self._all_bookings]

    def get_bookings_by_restaurant(self, restaurant_id: int) -> list[BookingRead]:
        return [b for b in self._all_bookings if b.restaurant_id == restaurant_id]

    def get_bookings_by_user(self, user_id: str) -> list[BookingRead]:
        return [b for b in self._all_bookings if b.user_id == user_id]

    # ============ USER ============

    def set_current_user(self, user: UserRead | None) -> None:
        self.current_user = user

    async def login(self, email: str, password: str) -> UserRead:
        user = await self._auth_service.login(email, password)
        self.set_current_user(user)
        return user

    async def logout(self) -> None:
        await self._auth_service.logout()
        self.set_current_user(None)

    # ============ ANSICHTEN ============

    def dashboard(self, selected_date: str, now: datetime | None = None) -> DashboardResponse:
        """
        Betreiber-Ansicht für das Restaurant des angemeldeten Users.
        Ohne User oder Restaurant: leere Listen und Standardkapazität.
        """
        restaurant_id = self.current_user.restaurant_id if self.current_user else None
        restaurant = self.get_restaurant(restaurant_id) if restaurant_id else None
        max_capacity = restaurant.capacity if restaurant else settings.default_capacity

        partition = self.bookings(now)
        if restaurant_id:
            upcoming = [b for b in partition.upcoming if b.restaurant_id == restaurant_id]
            past = [b for b in partition.past if b.restaurant_id == restaurant_id]
        else:
            upcoming, past = [], []

        # Betreiber sieht die volle vorläufige Auslastung (pending + confirmed)
        booked = capacity_service.booked_capacity(
            upcoming, restaurant_id, selected_date, capacity_service.ACTIVE_STATUSES
        )

        return DashboardResponse(
            restaurant=restaurant,
            selected_date=selected_date,
            upcoming=upcoming,
            past=past,
            max_capacity=max_capacity,
            booked_capacity=booked,
            available_capacity=max(0, max_capacity - booked),
            capacity_options=capacity_service.capacity_options(max_capacity),
        )

    def discovery(self, selected_date: str | None = None, now: datetime | None = None) -> DiscoveryResponse:
        """
        Gast-Ansicht. Zählt nur bestätigte Buchungen. Sofort-Buchung gilt
        für heute, Buchung nach Datum nur wenn ein Datum gewählt ist.
        """
        now = now or datetime.now()
        today = now.strftime("%Y-%m-%d")
        upcoming = self.bookings(now).upcoming
        slots = time_slots.generate_default_time_slots()
        next_slot = time_slots.find_next_available_time(time_slots.get_current_time(now), slots) or slots[0]

        instant = [
            RestaurantAvailability(
                restaurant=restaurant,
                available_capacity=self._guest_capacity(upcoming, restaurant, today),
                next_slot=next_slot,
            )
            for restaurant in self._restaurants_with_room(upcoming, today)
        ]

        scheduled = []
        if selected_date:
            scheduled = [
                RestaurantAvailability(
                    restaurant=restaurant,
                    available_capacity=self._guest_capacity(upcoming, restaurant, selected_date),
                    next_slot=slots[0],
                    slots=slots,
                )
                for restaurant in self._restaurants_with_room(upcoming, selected_date)
            ]

        return DiscoveryResponse(
            today=today,
            selected_date=selected_date,
            instant=instant,
            scheduled=scheduled,
        )

    def _restaurants_with_room(self, bookings: list[BookingRead], date: str) -> list[RestaurantRead]:
        # Gäste sehen nur fest zugesagte Plätze als belegt
        return [
            r for r in self.restaurants
            if capacity_service.has_availability(bookings, r.id, date, r.capacity)
        ]

    @staticmethod
    def _guest_capacity(bookings: list[BookingRead], restaurant: RestaurantRead, date: str) -> int:
        return capacity_service.available_capacity(
            bookings, restaurant.id, date, restaurant.capacity, capacity_service.FIRM_STATUSES
        )

    # ============ MITTERNACHT ============

    def subscribe_rollover(self, listener: Callable[[BookingPartition], None]) -> None:
        self._rollover_listeners.append(listener)

    def on_day_rollover(self, now: datetime | None = None) -> None:
        """Vom Mitternachts-Timer aufgerufen: neu klassifizieren und Listener benachrichtigen."""
        now = now or datetime.now()
        self.last_rollover = now
        partition = self.bookings(now)
        logger.info(
            f"Mitternacht: Buchungen neu eingeteilt ({len(partition.upcoming)} kommend, "
            f"{len(partition.past)} vergangen)"
        )
        for listener in self._rollover_listeners:
            listener(partition)


def get_app_state(request: Request) -> AppState:
    return request.app.state.app_state
