from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from gym_registration.core.base import Base

DEFAULT_STATUS = "scheduled"


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    # Внешний id события, не проверяется
    event_id = Column(String, nullable=False)
    user_id = Column(Integer, ForeignKey("trainees.id"), nullable=False, index=True)
    invitee_email = Column(String, nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    status = Column(String, nullable=False, default=DEFAULT_STATUS)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    trainee = relationship("Trainee", lazy="selectin")
