from gym_registration.core.config import Settings, settings
from gym_registration.core.base import Base

__all__ = ["Settings", "settings", "Base"]
