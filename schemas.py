"""
Database Schemas

Taxi booking app schemas using Pydantic models.
Each class name maps to a MongoDB collection with its lowercase name.
- User -> user
- Booking -> booking
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Login email, unique")
    password: str = Field(..., description="Plaintext on input, bcrypt hash once stored")
    role: Literal["rider", "driver"] = Field("rider", description="Role in the app")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class Booking(BaseModel):
    rider: str = Field(..., description="Rider user id")
    driver: str = Field(..., description="Driver user id")
    pickup_location: str = Field(..., description="Pickup address")
    dropoff_location: str = Field(..., description="Dropoff address")
    date: datetime = Field(default_factory=_now, description="Requested pickup time")
    status: str = Field("pending", description="Booking status")
