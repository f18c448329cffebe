from sqlalchemy import Column, Integer, String, Text, ForeignKey

from app.database import Base

class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    address = Column(String(255), nullable=False, default="")
    capacity = Column(Integer, nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    cuisine = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
