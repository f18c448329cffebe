from pydantic import BaseModel
from typing import Optional

from app.models.user import UserRole


class UserRead(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    restaurant_id: Optional[int] = None

    model_config = {"from_attributes": True}
