from datetime import datetime
from pydantic import BaseModel, Field


class SessionCreate(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SessionClaims(BaseModel):
    """Раскодированное содержимое токена сессии."""
    trainee_id: int
    email: str
    expires_at: datetime
