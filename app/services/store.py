"""
Datenhaltung für Restaurants, Buchungen und den angemeldeten User.

Der AppState kennt nur die Protokolle unten. Die SQLAlchemy-Implementierung
führt die blockierenden Session-Aufrufe in einem Worker-Thread aus, damit
der Event-Loop frei bleibt.
"""
import asyncio
import logging
import secrets
import string
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.database import SessionLocal
from app.models import Booking, Restaurant, User
from app.schemas.booking import BookingCreate, BookingRead
from app.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate
from app.schemas.user import UserRead
from app.services import booking_status
from app.utils.errors import StoreError, RecordNotFound, AuthenticationFailed
from app.utils.security import verify_password

logger = logging.getLogger("app.services.store")

CONFIRMATION_PREFIX = "BK"
CONFIRMATION_ALPHABET = string.ascii_uppercase + string.digits


class RestaurantService(Protocol):
    async def get_all(self) -> list[RestaurantRead]: ...
    async def create(self, data: RestaurantCreate) -> RestaurantRead: ...
    async def update(self, restaurant_id: int, changes: RestaurantUpdate) -> RestaurantRead: ...


class BookingService(Protocol):
    async def get_all(self) -> list[BookingRead]: ...
    async def create(self, data: BookingCreate) -> BookingRead: ...
    async def delete(self, booking_id: str) -> None: ...
    async def reject(self, booking_id: str) -> BookingRead: ...
    async def confirm(self, booking_id: str) -> BookingRead: ...
    async def cancel(self, booking_id: str) -> BookingRead: ...


class AuthService(Protocol):
    async def get_current_user(self) -> UserRead | None: ...
    async def login(self, email: str, password: str) -> UserRead: ...
    async def logout(self) -> None: ...


def generate_confirmation_number() -> str:
    return CONFIRMATION_PREFIX + "".join(secrets.choice(CONFIRMATION_ALPHABET) for _ in range(8))


@contextmanager
def _session_scope(session_factory: sessionmaker):
    """Session mit Rollback bei DB-Fehlern. SQLAlchemy-Fehler werden zu StoreError."""
    db: Session = session_factory()
    try:
        yield db
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"DB-Fehler: {e}")
        raise StoreError(str(e)) from e
    finally:
        db.close()


class SqlRestaurantService:

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    async def get_all(self) -> list[RestaurantRead]:
        return await asyncio.to_thread(self._get_all)

    async def create(self, data: RestaurantCreate) -> RestaurantRead:
        return await asyncio.to_thread(self._create, data)

    async def update(self, restaurant_id: int, changes: RestaurantUpdate) -> RestaurantRead:
        return await asyncio.to_thread(self._update, restaurant_id, changes)

    def _get_all(self) -> list[RestaurantRead]:
        with _session_scope(self._session_factory) as db:
            restaurants = db.query(Restaurant).order_by(Restaurant.id).all()
            return [RestaurantRead.model_validate(r) for r in restaurants]

    def _create(self, data: RestaurantCreate) -> RestaurantRead:
        with _session_scope(self._session_factory) as db:
            # id nur übernehmen wenn mitgeschickt, sonst vergibt die DB
            restaurant = Restaurant(**data.model_dump(exclude_none=True))
            db.add(restaurant)
            db.commit()
            db.refresh(restaurant)
            logger.info(f"Restaurant {restaurant.id} '{restaurant.name}' angelegt")
            return RestaurantRead.model_validate(restaurant)

    def _update(self, restaurant_id: int, changes: RestaurantUpdate) -> RestaurantRead:
        with _session_scope(self._session_factory) as db:
            restaurant = db.query(Restaurant).filter(Restaurant.id == restaurant_id).first()
            if not restaurant:
                raise RecordNotFound("Restaurant", restaurant_id)
            for field, value in changes.model_dump(exclude_unset=True).items():
                setattr(restaurant, field, value)
            db.commit()
            db.refresh(restaurant)
            logger.info(f"Restaurant {restaurant_id} aktualisiert")
            return RestaurantRead.model_validate(restaurant)


class SqlBookingService:

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    async def get_all(self) -> list[BookingRead]:
        return await asyncio.to_thread(self._get_all)

    async def create(self, data: BookingCreate) -> BookingRead:
        return await asyncio.to_thread(self._create, data)

    async def delete(self, booking_id: str) -> None:
        await asyncio.to_thread(self._delete, booking_id)

    async def reject(self, booking_id: str) -> BookingRead:
        return await asyncio.to_thread(self._transition, booking_id, booking_status.REJECT)

    async def confirm(self, booking_id: str) -> BookingRead:
        return await asyncio.to_thread(self._transition, booking_id, booking_status.CONFIRM)

    async def cancel(self, booking_id: str) -> BookingRead:
        return await asyncio.to_thread(self._transition, booking_id, booking_status.CANCEL)

    def _get_all(self) -> list[BookingRead]:
        with _session_scope(self._session_factory) as db:
            bookings = db.query(Booking).order_by(Booking.date, Booking.time).all()
            return [BookingRead.model_validate(b) for b in bookings]

    def _create(self, data: BookingCreate) -> BookingRead:
        with _session_scope(self._session_factory) as db:
            restaurant = db.query(Restaurant).filter(Restaurant.id == data.restaurant_id).first()
            if not restaurant:
                raise RecordNotFound("Restaurant", data.restaurant_id)

            booking = Booking(
                **data.model_dump(),
                confirmation_number=generate_confirmation_number(),
            )
            db.add(booking)
            db.commit()
            db.refresh(booking)
            logger.info(
                f"Buchung {booking.confirmation_number} angelegt: Restaurant {booking.restaurant_id}, "
                f"{booking.date} {booking.time}, {booking.party_size} Personen ({booking.status.value})"
            )
            return BookingRead.model_validate(booking)

    def _delete(self, booking_id: str) -> None:
        with _session_scope(self._session_factory) as db:
            booking = db.query(Booking).filter(Booking.id == booking_id).first()
            if not booking:
                raise RecordNotFound("Buchung", booking_id)
            db.delete(booking)
            db.commit()
            logger.info(f"Buchung {booking_id} gelöscht")

    def _transition(self, booking_id: str, action: str) -> BookingRead:
        with _session_scope(self._session_factory) as db:
            booking = db.query(Booking).filter(Booking.id == booking_id).first()
            if not booking:
                raise RecordNotFound("Buchung", booking_id)
            old_status = booking.status
            booking.status = booking_status.next_status(booking_id, old_status, action)
            db.commit()
            db.refresh(booking)
            logger.info(f"Buchung {booking_id}: {old_status.value} -> {booking.status.value}")
            return BookingRead.model_validate(booking)


class SqlAuthService:
    """
    Merkt sich den angemeldeten User im Prozess. Mit seed_email ist
    dieser User beim Start bereits angemeldet.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal, seed_email: str = ""):
        self._session_factory = session_factory
        self._seed_email = seed_email
        self._current_user_id: str | None = None

    async def get_current_user(self) -> UserRead | None:
        return await asyncio.to_thread(self._get_current_user)

    async def login(self, email: str, password: str) -> UserRead:
        user = await asyncio.to_thread(self._authenticate, email, password)
        self._current_user_id = user.id
        logger.info(f"User {user.email} angemeldet")
        return user

    async def logout(self) -> None:
        self._current_user_id = None
        self._seed_email = ""

    def _get_current_user(self) -> UserRead | None:
        with _session_scope(self._session_factory) as db:
            if self._current_user_id:
                user = db.query(User).filter(User.id == self._current_user_id).first()
            elif self._seed_email:
                user = db.query(User).filter(User.email == self._seed_email).first()
            else:
                return None
            return UserRead.model_validate(user) if user else None

    def _authenticate(self, email: str, password: str) -> UserRead:
        with _session_scope(self._session_factory) as db:
            user = db.query(User).filter(User.email == email).first()
            if not user or not verify_password(password, user.password_hash):
                raise AuthenticationFailed("Email oder Passwort falsch")
            return UserRead.model_validate(user)
