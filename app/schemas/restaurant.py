from pydantic import BaseModel, Field, field_validator
from typing import Optional


class RestaurantCreate(BaseModel):
    id: Optional[int] = None    # wird vom Server vergeben wenn leer
    name: str = Field(min_length=1, max_length=100)
    address: str = ""
    capacity: int = Field(ge=1)
    owner_id: Optional[str] = None
    cuisine: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class RestaurantUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    address: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    owner_id: Optional[str] = None
    cuisine: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator("name", "address", "capacity")
    @classmethod
    def not_null(cls, v):
        # weglassen ist ok, explizit null nicht (Pflichtspalten)
        if v is None:
            raise ValueError("Feld darf nicht null sein")
        return v


class RestaurantRead(BaseModel):
    id: int
    name: str
    address: str
    capacity: int
    owner_id: Optional[str] = None
    cuisine: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    model_config = {"from_attributes": True}
