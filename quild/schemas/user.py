from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class UserBase(BaseModel):
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo: Optional[str] = None

class UserCreate(UserBase):
    external_id: str

class UserUpdate(BaseModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo: Optional[str] = None

class User(UserBase):
    id: int
    external_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class IdentityProfile(BaseModel):
    """Profile attributes mirrored from the identity provider."""
    external_id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo: Optional[str] = None

    def to_user_fields(self) -> dict:
        return {
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "photo": self.photo,
        }
