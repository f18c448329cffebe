import enum
import uuid

from sqlalchemy import Column, String, Integer, Enum

from app.database import Base


class UserRole(enum.Enum):
    GUEST = "guest"
    OWNER = "owner"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, values_callable=lambda e: [m.value for m in e]), nullable=False, default=UserRole.GUEST)
    # nur bei Betreibern gesetzt; kein FK, sonst zirkulär mit restaurants.owner_id
    restaurant_id = Column(Integer, nullable=True)
