import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker

from app.routers import auth, restaurants, bookings, views
from app.config import settings
from app.database import Base, SessionLocal
from app.services.app_state import AppState
from app.services.day_boundary import DayBoundaryScheduler
from app.services.store import SqlRestaurantService, SqlBookingService, SqlAuthService
from app.utils.logging_config import setup_logging
from app.middleware.logging_middleware import log_requests


logger = setup_logging()


def build_app_state(session_factory: sessionmaker) -> AppState:
    return AppState(
        restaurant_service=SqlRestaurantService(session_factory),
        booking_service=SqlBookingService(session_factory),
        auth_service=SqlAuthService(session_factory, seed_email=settings.seed_user_email),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting...")
    # Tests können eine eigene Session-Factory setzen
    session_factory = getattr(app.state, "session_factory", SessionLocal)
    Base.metadata.create_all(bind=session_factory.kw["bind"])

    state = build_app_state(session_factory)
    app.state.app_state = state
    await state.load()

    day_scheduler = None
    if settings.enable_day_scheduler:
        day_scheduler = DayBoundaryScheduler(state.on_day_rollover)
        day_scheduler.start()
    yield
    if day_scheduler:
        day_scheduler.shutdown()
    logger.info("Application stopped")


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.middleware("http")(log_requests)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(restaurants.router)
app.include_router(bookings.router)
app.include_router(views.router)

@app.get("/")
def root() -> dict:
        return {"message": "Tischreservierung läuft!", "app": settings.app_name}

@app.get("/health")
def health() -> dict:
        return {"status": "ok", "loading": app.state.app_state.is_loading}
