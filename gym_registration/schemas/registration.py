from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from gym_registration.models.registration import DEFAULT_STATUS


class RegistrationCreate(BaseModel):
    event_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    invitee_email: str = Field(min_length=1)
    start_time: datetime
    end_time: Optional[datetime] = None
    status: str = DEFAULT_STATUS

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return value or DEFAULT_STATUS


class RegistrationUpdate(BaseModel):
    event_id: Optional[str] = None
    user_id: Optional[str] = None
    invitee_email: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[str] = None
