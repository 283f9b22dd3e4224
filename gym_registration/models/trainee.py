from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from gym_registration.core.base import Base


class Trainee(Base):
    __tablename__ = "trainees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    # bcrypt-хэш, наружу никогда не отдаётся
    password = Column(String, nullable=False)
    timezone = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
