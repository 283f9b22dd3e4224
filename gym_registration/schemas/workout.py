from typing import Optional
from pydantic import BaseModel, Field


class WorkoutCreate(BaseModel):
    name: str = Field(min_length=1)
    duration: int = Field(gt=0)
    description: Optional[str] = None
    color: Optional[str] = None


class WorkoutUpdate(BaseModel):
    name: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = None
    color: Optional[str] = None
