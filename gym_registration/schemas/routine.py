from typing import List
from pydantic import BaseModel, Field


class TimeSlot(BaseModel):
    day: str
    start_time: str
    end_time: str


class RoutineCreate(BaseModel):
    user_id: str = Field(min_length=1)
    availability: List[TimeSlot] = Field(min_length=1)


class RoutineUpdate(BaseModel):
    availability: List[TimeSlot] = Field(min_length=1)
