import sys
import traceback

from app.database import Base, SessionLocal, engine
from app.models import Restaurant, User, UserRole
from app.utils.logging_config import setup_logging
from app.utils.security import hash_password

logger = setup_logging()

DEMO_RESTAURANTS = [
    {"name": "Zur Linde", "address": "Hauptstraße 1", "capacity": 50, "cuisine": "Deutsch"},
    {"name": "Trattoria Sole", "address": "Marktplatz 4", "capacity": 35, "cuisine": "Italienisch"},
    {"name": "Kleines Bistro", "address": "Hafenweg 3", "capacity": 12, "cuisine": "Französisch"},
]


def main() -> int:
    """
    Legt Demo-Restaurants, einen Betreiber und einen Gast an.
    Gibt Exit-Code zurück: 0 = Erfolg, 1 = Fehler
    """
    logger.info("Demo-Daten werden angelegt")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if db.query(Restaurant).count() > 0:
            logger.info("Datenbank enthält bereits Restaurants, nichts zu tun")
            return 0

        restaurants = [Restaurant(**data) for data in DEMO_RESTAURANTS]
        db.add_all(restaurants)
        db.flush()

        owner = User(
            name="Demo Betreiber",
            email="owner@example.com",
            password_hash=hash_password("owner123"),
            role=UserRole.OWNER,
            restaurant_id=restaurants[0].id,
        )
        guest = User(
            name="Demo Gast",
            email="guest@example.com",
            password_hash=hash_password("guest123"),
            role=UserRole.GUEST,
        )
        db.add_all([owner, guest])
        db.flush()
        restaurants[0].owner_id = owner.id
        db.commit()

        logger.info(f"{len(restaurants)} Restaurants und 2 User angelegt")
        return 0

    except Exception as e:
        db.rollback()
        logger.error(f"Anlegen fehlgeschlagen: {e}")
        logger.error(traceback.format_exc())
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
