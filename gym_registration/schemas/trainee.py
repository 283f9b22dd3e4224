from typing import Optional
from pydantic import BaseModel, Field


class TraineeCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    timezone: Optional[str] = None


class TraineeUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    timezone: Optional[str] = None
